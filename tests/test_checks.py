import re

import pytest

from dalecspec import checks
from dalecspec.checks import (
    MODE_DIR,
    CheckOutput,
    CheckOutputError,
    FileCheckOutput,
    format_permissions,
)


def test_format_permissions_file():
    assert format_permissions(0o644) == "-rw-r--r--"
    assert format_permissions(0o755) == "-rwxr-xr-x"


def test_format_permissions_dir():
    assert format_permissions(MODE_DIR | 0o644) == "drw-r--r--"


def test_permissions_mismatch_message():
    check = FileCheckOutput(permissions=0o644, is_dir=True)
    with pytest.raises(CheckOutputError) as info:
        check.check("", MODE_DIR | 0o755, True, "/")
    assert 'expected "/" permissions "-rw-r--r--", got "-rwxr-xr-x"' in str(info.value)


def test_dir_mode_mismatch_message():
    check = FileCheckOutput(is_dir=False)
    with pytest.raises(CheckOutputError) as info:
        check.check("", MODE_DIR | 0o755, True, "/")
    assert 'expected "/" mode "ModeFile", got "ModeDir"' in str(info.value)


def test_file_expected_dir():
    check = FileCheckOutput(is_dir=True)
    with pytest.raises(CheckOutputError) as info:
        check.check("x", 0o644, False, "/f")
    assert info.value.expected == "ModeDir"
    assert info.value.actual == "ModeFile"


def test_dir_with_matching_permissions_passes():
    check = FileCheckOutput(is_dir=True, permissions=0o755)
    assert check.check("", MODE_DIR | 0o755, True, "/usr/share") is None


def test_equals_ok_and_fails():
    CheckOutput(equals="hello world").check("hello world", "stdout")
    with pytest.raises(CheckOutputError) as info:
        CheckOutput(equals="hello world\n").check("hello world", "stdout")
    assert info.value.kind == ""
    assert str(info.value) == 'expected "stdout"  "hello world\\n", got "hello world"'


def test_empty_check():
    CheckOutput(empty=True).check("", "stderr")
    with pytest.raises(CheckOutputError) as info:
        CheckOutput(empty=True).check("oops", "stderr")
    assert info.value.kind == "empty"
    assert info.value.actual == "oops"


def test_contains_os_release():
    content = 'NAME="Azure Linux"\nID=azurelinux\nVERSION_ID="3.0"\n'
    CheckOutput(contains=["ID=azurelinux\n"]).check(content, "/etc/os-release")
    with pytest.raises(CheckOutputError) as info:
        CheckOutput(contains=["ID=mariner\n"]).check(content, "/etc/os-release")
    assert info.value.kind == "contains"
    assert info.value.expected == "ID=mariner\n"


def test_starts_with():
    CheckOutput(starts_with="foo_0\n").check("foo_0\n", "/usr/bin/foo0.txt")
    with pytest.raises(CheckOutputError) as info:
        CheckOutput(starts_with="foo_1\n").check("foo_0\n", "/usr/bin/foo1.txt")
    assert info.value.kind == "starts_with"


def test_ends_with():
    CheckOutput(ends_with="world").check("hello world", "p")
    with pytest.raises(CheckOutputError) as info:
        CheckOutput(ends_with="hello").check("hello world", "p")
    assert info.value.kind == "ends_with"


def test_matches():
    CheckOutput(matches=[r"v\d+\.\d+"]).check("version v1.2", "p")
    with pytest.raises(CheckOutputError) as info:
        CheckOutput(matches=[r"^\d+$"]).check("abc", "p")
    assert info.value.kind == "matches"
    assert info.value.expected == r"^\d+$"


def test_invalid_regex_raises():
    with pytest.raises(re.error):
        CheckOutput(matches=["("]).check("abc", "p")


def test_is_empty():
    assert CheckOutput().is_empty() is True
    assert CheckOutput(empty=True).is_empty() is False
    assert CheckOutput(contains=["x"]).is_empty() is False
    assert FileCheckOutput(permissions=0o644).is_empty() is True


def test_file_check_contents():
    check = FileCheckOutput(contains=["ExecStart=/usr/bin/service"], permissions=0o644)
    check.check("[Service]\nExecStart=/usr/bin/service\n", 0o644, False, "/svc")
    with pytest.raises(CheckOutputError) as info:
        check.check("[Service]\n", 0o644, False, "/svc")
    assert info.value.kind == "contains"


def test_quote_escapes_in_message():
    err = CheckOutputError(kind="contains", expected='a"b', actual="tab\there", path="p")
    assert str(err) == 'expected "p" contains "a\\"b", got "tab\\there"'


def test_test_spec_defaults():
    spec = checks.TestSpec(
        name="Check",
        steps=[checks.TestStep(command="/src1", stdout=CheckOutput(equals="hello world\n"))],
    )
    assert spec.files == {}
    assert spec.steps[0].stderr.is_empty() is True
    assert spec.steps[0].stdout.equals == "hello world\n"