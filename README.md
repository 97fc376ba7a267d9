# dalecspec

Declarative checks for the output of package tests. The checks cover what a
command wrote to stdout or stderr, and for a file in a built image: its
contents, its permission bits, and whether it is a directory.

All of it lives in the `dalecspec.checks` module.

## Installation

```
pip install dalecspec
```

## Checking command output

A `CheckOutput` can hold any combination of checks, and every one that is set
must pass. `check(dt, path)` raises `CheckOutputError` on the first check that
fails. `path` is used only to label the error message.

```python
from dalecspec.checks import CheckOutput, CheckOutputError

expect = CheckOutput(equals="hello world\n")
expect.check("hello world\n", "stdout")        # passes, returns None

try:
    CheckOutput(contains=["goodbye"]).check("hello world", "stdout")
except CheckOutputError as err:
    print(err)
    # expected "stdout" contains "goodbye", got "hello world"
    print(err.kind, err.expected, err.actual, err.path)
```

The fields are checked in this order:

- `empty`: the output must be the empty string.
- `equals`: the output must equal this string exactly.
- `contains`: a list of substrings, each of which must occur. Empty entries are ignored.
- `matches`: a list of regular expressions, each of which must be found somewhere in the output. A pattern that does not compile raises `re.error`.
- `starts_with`: a prefix the output must have.
- `ends_with`: a suffix the output must have.

`CheckOutput().is_empty()` returns `True` when no check is set.

## Checking files

`FileCheckOutput` extends `CheckOutput` with three fields:

- `permissions`: the expected permission bits, such as `0o644`. `0` means "do not check".
- `is_dir`: whether the path is expected to be a directory.
- `not_exist`: records that the path is expected to be absent. `check` does not look at this field; the caller decides how to act on it.

`check(dt, mode, is_dir, path)` checks three things in turn: the file type,
then the permission bits of `mode` (the `0o777` part), then the contents
against the inherited output checks.

```python
from dalecspec.checks import FileCheckOutput

contents = "[Service]\nExecStart=/usr/bin/service\n"
check = FileCheckOutput(permissions=0o644, contains=["ExecStart=/usr/bin/service"])
check.check(contents, 0o644, False, "/usr/lib/systemd/system/simple.service")
```

A type mismatch gives a message such as
`expected "/" mode "ModeFile", got "ModeDir"`. A permission mismatch gives
`expected "/" permissions "-rw-r--r--", got "-rwxr-xr-x"`.

`format_permissions(mode)` renders a mode in that `-rw-r--r--` form on its
own. Type bits come first, so `format_permissions(MODE_DIR | 0o755)` is
`drwxr-xr-x`. The constants `MODE_PERM`, `MODE_DIR` and `MODE_SYMLINK` are
exported for building such modes.

## Test specifications

`TestStep` describes one command to run:

- `command`
- `env`
- `stdin`
- `stdout` and `stderr`, each a `CheckOutput`

`TestSpec` groups named steps with:

- a working directory `dir`
- `env`
- `mounts`
- `cache_dirs`
- `files`, a mapping of paths to `FileCheckOutput`

## What this package does not do

This package holds the check definitions and evaluates them against data you
supply. It does not run anything for you:

- It does not run commands or start containers.
- It does not read files from an image.
- It does not expand build arguments in the check fields.
- It does not validate `mounts` or `cache_dirs`. Those fields are kept as you give them.

To use a `TestSpec`, run the steps yourself, then pass the captured output,
file contents and modes to the `check` methods.