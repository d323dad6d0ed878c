"""Tests for snapshot file storage."""

from __future__ import annotations

from pathlib import Path

from snapmatch.compare.storage import SnapshotStore, iter_snapshots
from snapmatch.core.errors import SnapshotReadError, SnapshotWriteError


def test_create_makes_parents_and_writes_text(tmp_path: Path) -> None:
    store = SnapshotStore()
    path = tmp_path / "a" / "b" / "t-0.json"

    result = store.create(path, '{\n  "a": 1\n}\n')

    assert result.is_ok() and result.unwrap() == path
    assert path.read_bytes() == b'{\n  "a": 1\n}\n'
    assert store.exists(path)


def test_create_never_overwrites(tmp_path: Path) -> None:
    store = SnapshotStore()
    path = tmp_path / "t-0.json"
    store.create(path, "first\n")

    result = store.create(path, "second\n")

    assert result.is_err()
    error = result.unwrap_err()
    assert isinstance(error, SnapshotWriteError)
    assert error.path == path
    assert path.read_text(encoding="utf-8") == "first\n"


def test_create_fails_when_parent_is_a_file(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    result = SnapshotStore().create(blocker / "t-0.json", "x\n")

    assert isinstance(result.unwrap_err(), SnapshotWriteError)
    assert isinstance(result.unwrap_err().cause, OSError)


def test_read_lines(tmp_path: Path) -> None:
    path = tmp_path / "t-0.json"
    path.write_text('{\n  "a": 1\n}\n', encoding="utf-8")

    assert SnapshotStore().read_lines(path).unwrap() == ["{", '  "a": 1', "}"]


def test_read_missing_or_undecodable(tmp_path: Path) -> None:
    store = SnapshotStore()
    assert isinstance(store.read_lines(tmp_path / "nope.json").unwrap_err(), SnapshotReadError)

    garbage = tmp_path / "bad.json"
    garbage.write_bytes(b"\xff\xfe\xfa")
    assert isinstance(store.read_lines(garbage).unwrap_err(), SnapshotReadError)


def test_iter_snapshots_is_sorted_and_filtered(tmp_path: Path) -> None:
    for rel in ("b/t-0.json", "a/t-1.json", "a/t-0.json", "a/notes.txt"):
        p = tmp_path / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text("{}\n", encoding="utf-8")

    found = [p.relative_to(tmp_path).as_posix() for p in iter_snapshots(tmp_path)]

    assert found == ["a/t-0.json", "a/t-1.json", "b/t-0.json"]
    assert list(iter_snapshots(tmp_path / "missing")) == []
