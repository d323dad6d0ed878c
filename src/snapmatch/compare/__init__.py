"""Snapshot comparison: encoding, diffing, storage and verdicts."""

from __future__ import annotations

from .comparator import SnapshotComparator, Verdict
from .diff import ChangeRegion, diff_lines, format_report
from .encoder import Encoder, JsonEncoder, to_canonical
from .storage import SnapshotStore, iter_snapshots

__all__ = [
    "ChangeRegion",
    "Encoder",
    "JsonEncoder",
    "SnapshotComparator",
    "SnapshotStore",
    "Verdict",
    "diff_lines",
    "format_report",
    "iter_snapshots",
    "to_canonical",
]
