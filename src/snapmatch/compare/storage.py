"""Disk access for snapshot files.

- Creation is exclusive: an existing snapshot is never overwritten.
- Content is UTF-8 text, written exactly as the encoder produced it.
- Failures come back as `Err(SnapshotWriteError | SnapshotReadError)` rather
  than raised `OSError`, so callers can turn them into a failed verdict.

Usage
-----
>>> store = SnapshotStore()
>>> store.create(Path("snaps/a-0.json"), '{"a":1}\\n')  # doctest: +SKIP
Ok(value=PosixPath('snaps/a-0.json'))
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from snapmatch.core.errors import SnapshotError, SnapshotReadError, SnapshotWriteError
from snapmatch.core.result import Result, err, ok

from .diff import split_lines


class SnapshotStore:
    """Create and read snapshot files."""

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def create(self, path: Path, text: str) -> Result[Path, SnapshotError]:
        """Create parent directories and a *new* file at ``path`` holding ``text``."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # newline="" keeps the encoder's "\n" line endings on every platform
            with path.open("x", encoding="utf-8", newline="") as f:
                f.write(text)
        except OSError as e:
            return err(SnapshotWriteError(path, e))
        return ok(path)

    def read_text(self, path: Path) -> Result[str, SnapshotError]:
        try:
            return ok(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            return err(SnapshotReadError(path, e))

    def read_lines(self, path: Path) -> Result[list[str], SnapshotError]:
        """Return the snapshot's lines in order, without line terminators."""
        return self.read_text(path).map(split_lines)


def iter_snapshots(root: Path, extension: str = ".json") -> Iterator[Path]:
    """Yield every snapshot file below ``root`` in sorted order."""
    if not root.is_dir():
        return
    yield from sorted(p for p in root.rglob(f"*{extension}") if p.is_file())


__all__ = ["SnapshotStore", "iter_snapshots"]
