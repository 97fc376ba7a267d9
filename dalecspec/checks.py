"""Output and file checks run against a container with a package installed."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "CheckOutputError",
    "CheckOutput",
    "FileCheckOutput",
    "TestStep",
    "TestSpec",
    "format_permissions",
    "MODE_DIR",
    "MODE_SYMLINK",
    "MODE_PERM",
]

MODE_PERM = 0o777
MODE_DIR = 1 << 31
MODE_SYMLINK = 1 << 27

# Type characters for the high mode bits, from bit 31 downwards.
_TYPE_CHARS = "dalTLDpSugct?"
_PERM_CHARS = "rwxrwxrwx"

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


def _quote(text: str) -> str:
    """Quote a string as a double-quoted literal with escapes."""
    parts = ['"']
    for ch in text:
        if ch in _ESCAPES:
            parts.append(_ESCAPES[ch])
        elif ch.isprintable():
            parts.append(ch)
        else:
            code = ord(ch)
            if code < 0x80:
                parts.append(f"\\x{code:02x}")
            elif code < 0x10000:
                parts.append(f"\\u{code:04x}")
            else:
                parts.append(f"\\U{code:08x}")
    parts.append('"')
    return "".join(parts)


def format_permissions(mode: int) -> str:
    """Render a file mode as a string such as ``-rw-r--r--`` or ``drwxr-xr-x``."""
    type_part = "".join(
        ch for offset, ch in enumerate(_TYPE_CHARS) if mode & (1 << (31 - offset))
    )
    perm_part = "".join(
        ch if mode & (1 << (8 - offset)) else "-"
        for offset, ch in enumerate(_PERM_CHARS)
    )
    return (type_part or "-") + perm_part


class CheckOutputError(Exception):
    """Raised when an output or file check does not hold."""

    def __init__(self, kind: str = "", expected: str = "", actual: str = "", path: str = ""):
        self.kind = kind
        self.expected = expected
        self.actual = actual
        self.path = path
        super().__init__(str(self))

    def __str__(self) -> str:
        return (
            f"expected {_quote(self.path)} {self.kind} {_quote(self.expected)}, "
            f"got {_quote(self.actual)}"
        )


@dataclass
class CheckOutput:
    """Expected output of a stream or file; every non-empty field is checked."""

    equals: str = ""
    contains: list[str] = field(default_factory=list)
    matches: list[str] = field(default_factory=list)
    starts_with: str = ""
    ends_with: str = ""
    empty: bool = False

    def is_empty(self) -> bool:
        """Return True when there is nothing to check."""
        return not (
            self.equals
            or self.contains
            or self.matches
            or self.starts_with
            or self.ends_with
            or self.empty
        )

    def check(self, dt: str, path: str) -> None:
        """Check ``dt`` against the expectations, raising CheckOutputError on mismatch.

        An invalid regular expression in ``matches`` raises ``re.error``.
        """
        if self.empty and dt != "":
            raise CheckOutputError(kind="empty", expected="", actual=dt, path=path)

        if self.equals and self.equals != dt:
            raise CheckOutputError(expected=self.equals, actual=dt, path=path)

        for needle in self.contains:
            if needle and needle not in dt:
                raise CheckOutputError(kind="contains", expected=needle, actual=dt, path=path)

        for pattern in self.matches:
            if re.search(pattern, dt) is None:
                raise CheckOutputError(kind="matches", expected=pattern, actual=dt, path=path)

        if self.starts_with and not dt.startswith(self.starts_with):
            raise CheckOutputError(
                kind="starts_with", expected=self.starts_with, actual=dt, path=path
            )

        if self.ends_with and not dt.endswith(self.ends_with):
            raise CheckOutputError(
                kind="ends_with", expected=self.ends_with, actual=dt, path=path
            )


@dataclass
class FileCheckOutput(CheckOutput):
    """Expected state and contents of a file."""

    permissions: int = 0
    is_dir: bool = False
    not_exist: bool = False

    def check(self, dt: str, mode: int, is_dir: bool, path: str) -> None:  # type: ignore[override]
        """Check file type, permissions and contents, raising CheckOutputError on mismatch."""
        if self.is_dir and not is_dir:
            raise CheckOutputError(
                kind="mode", expected="ModeDir", actual="ModeFile", path=path
            )
        if not self.is_dir and is_dir:
            raise CheckOutputError(
                kind="mode", expected="ModeFile", actual="ModeDir", path=path
            )

        perm = mode & MODE_PERM
        if self.permissions and self.permissions != perm:
            raise CheckOutputError(
                kind="permissions",
                expected=format_permissions(self.permissions),
                actual=format_permissions(perm),
                path=path,
            )

        super().check(dt, path)


@dataclass
class TestStep:
    """A command to run with checks on its standard streams."""

    __test__ = False

    command: str
    env: dict[str, str] = field(default_factory=dict)
    stdout: CheckOutput = field(default_factory=CheckOutput)
    stderr: CheckOutput = field(default_factory=CheckOutput)
    stdin: str = ""


@dataclass
class TestSpec:
    """A named test run against a container with the package installed."""

    __test__ = False

    name: str
    dir: str = ""
    mounts: list[Any] = field(default_factory=list)
    cache_dirs: dict[str, Any] = field(default_factory=dict)
    env: dict[str, str] = field(default_factory=dict)
    steps: list[TestStep] = field(default_factory=list)
    files: dict[str, FileCheckOutput] = field(default_factory=dict)