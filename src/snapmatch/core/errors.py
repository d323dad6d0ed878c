"""Exception hierarchy for snapmatch.

Only two of these ever escape an assertion as exceptions:

- `ResolutionError`: the call site could not be discovered. This is API
  misuse and surfaces while building the matcher.
- `MismatchError`: raised on purpose by `assert_that`, the normal failure
  channel for a test.

Read and write failures are carried as *values* (inside `Err` results and
`Verdict.error`) so that `matches()` always answers with a boolean.
"""

from __future__ import annotations

from pathlib import Path


class SnapshotError(Exception):
    """Base class for all snapmatch errors."""


class ResolutionError(SnapshotError):
    """No frame outside snapmatch and the test runner could be found."""


class SnapshotEncodeError(SnapshotError, TypeError):
    """The value has no canonical text encoding."""


class SnapshotIOError(SnapshotError):
    """An I/O failure tied to one snapshot file."""

    action = "access"

    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"could not {self.action} snapshot {path}: {cause}")
        self.path = path
        self.cause = cause


class SnapshotWriteError(SnapshotIOError):
    """Creating the directories or the new snapshot file failed."""

    action = "write"


class SnapshotReadError(SnapshotIOError):
    """Reading an existing snapshot file failed."""

    action = "read"


class MismatchError(AssertionError):
    """The value does not match its stored snapshot."""

    def __init__(self, description: str, report: str | None = None) -> None:
        message = description if not report else f"{description}\n{report}"
        super().__init__(message)
        self.description = description
        self.report = report


__all__ = [
    "MismatchError",
    "ResolutionError",
    "SnapshotEncodeError",
    "SnapshotError",
    "SnapshotIOError",
    "SnapshotReadError",
    "SnapshotWriteError",
]
