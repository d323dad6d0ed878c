"""
Create-or-compare semantics for one snapshot file.

``evaluate(value, path)``:

1. No file at ``path``: encode ``value``, create the file, pass. A failed
   create is logged and fails the assertion.
2. File present: encode ``value``, read the file, diff the two line
   sequences. No change regions passes; otherwise the verdict fails with a
   report (also echoed to stdout). A failed read is logged and fails the
   assertion without a report.

I/O errors never escape as exceptions; they end up in ``Verdict.error``.
Encoding errors do propagate, since they point at the test, not the disk.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from snapmatch.core.errors import SnapshotError
from snapmatch.core.settings import get_logger, load_settings

from .diff import ChangeRegion, diff_lines, format_report, split_lines
from .encoder import Encoder, JsonEncoder
from .storage import SnapshotStore

Outcome = Literal["created", "matched", "mismatch", "write_error", "read_error"]

logger = get_logger("snapmatch.compare")


@dataclass(frozen=True, slots=True)
class Verdict:
    """
    Outcome of comparing one value against one snapshot path.

    Attributes
    ----------
    passed : bool
        The boolean answer handed back to the test framework.
    outcome : Outcome
        Which branch produced the verdict.
    path : Path
        Snapshot file the value was checked against.
    regions : tuple[ChangeRegion, ...]
        Change regions, only non-empty for ``mismatch``.
    report : str | None
        Rendered mismatch report, only set for ``mismatch``.
    error : SnapshotError | None
        The absorbed I/O failure for ``write_error`` / ``read_error``.
    """

    passed: bool
    outcome: Outcome
    path: Path
    regions: tuple[ChangeRegion, ...] = ()
    report: str | None = None
    error: SnapshotError | None = None


class SnapshotComparator:
    """Compare values against snapshot files, creating missing ones."""

    def __init__(
        self,
        encoder: Encoder | None = None,
        store: SnapshotStore | None = None,
        echo_report: bool | None = None,
    ) -> None:
        self.encoder: Encoder = encoder if encoder is not None else JsonEncoder()
        self.store = store if store is not None else SnapshotStore()
        self.echo_report = echo_report if echo_report is not None else load_settings().echo_report

    def evaluate(self, value: Any, path: Path) -> Verdict:
        if self.store.exists(path):
            return self.compare(value, path)
        return self.create(value, path)

    def create(self, value: Any, path: Path) -> Verdict:
        """Write the first snapshot for ``path``."""
        result = self.store.create(path, self.encoder.encode(value))
        if result.is_err():
            error = result.unwrap_err()
            logger.error("Could not create new snapshot: %s", error)
            return Verdict(passed=False, outcome="write_error", path=path, error=error)
        logger.info("Wrote new snapshot to path %s", path)
        return Verdict(passed=True, outcome="created", path=path)

    def compare(self, value: Any, path: Path) -> Verdict:
        """Diff ``value`` against the existing snapshot; never writes."""
        actual = split_lines(self.encoder.encode(value))
        result = self.store.read_lines(path)
        if result.is_err():
            error = result.unwrap_err()
            logger.error("Could not read snapshot: %s", error)
            return Verdict(passed=False, outcome="read_error", path=path, error=error)

        regions = diff_lines(actual, result.unwrap())
        if not regions:
            return Verdict(passed=True, outcome="matched", path=path)

        report = format_report(regions)
        logger.warning("Snapshot mismatch at %s (%d regions)", path, len(regions))
        if self.echo_report:
            print(report, end="")
        return Verdict(
            passed=False,
            outcome="mismatch",
            path=path,
            regions=tuple(regions),
            report=report,
        )


__all__ = ["Outcome", "SnapshotComparator", "Verdict"]
