"""Line-level diff between a fresh encoding and a stored snapshot.

The freshly encoded value is the *original* sequence and the snapshot file the
*revised* one. When the regions are rendered, the stored snapshot is the side
the test **expected** and the fresh encoding is what it **found**:

    Snapshot mismatch (1 differences found):
    Expected\t<{"a":1}>
    but found\t<{"a":2}>
"""

from __future__ import annotations

import difflib
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

Tag = Literal["replace", "delete", "insert"]


@dataclass(frozen=True, slots=True)
class ChangeRegion:
    """
    One contiguous region where the two line sequences disagree.

    Attributes
    ----------
    tag : Tag
        difflib opcode. ``delete`` means lines only the actual value has,
        ``insert`` lines only the snapshot has.
    actual_start : int
        Zero-based line index of the region in the fresh encoding.
    actual_lines : tuple[str, ...]
        Lines of the fresh encoding inside the region.
    snapshot_start : int
        Zero-based line index of the region in the snapshot file.
    snapshot_lines : tuple[str, ...]
        Lines of the snapshot file inside the region.
    """

    tag: Tag
    actual_start: int
    actual_lines: tuple[str, ...]
    snapshot_start: int
    snapshot_lines: tuple[str, ...]


def split_lines(text: str) -> list[str]:
    """Split encoded text the same way stored files are read back."""
    return text.splitlines()


def diff_lines(actual: Sequence[str], snapshot: Sequence[str]) -> list[ChangeRegion]:
    """Return the change regions turning ``actual`` into ``snapshot``, in order."""
    matcher = difflib.SequenceMatcher(a=list(actual), b=list(snapshot), autojunk=False)
    regions: list[ChangeRegion] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            continue
        regions.append(
            ChangeRegion(
                tag=tag,  # type: ignore[arg-type]
                actual_start=i1,
                actual_lines=tuple(actual[i1:i2]),
                snapshot_start=j1,
                snapshot_lines=tuple(snapshot[j1:j2]),
            )
        )
    return regions


def format_region(region: ChangeRegion) -> str:
    expected = "\n".join(region.snapshot_lines)
    found = "\n".join(region.actual_lines)
    return f"Expected\t<{expected}>\nbut found\t<{found}>"


def format_report(regions: Sequence[ChangeRegion]) -> str:
    """Render the mismatch report; regions are separated by one blank line."""
    header = f"Snapshot mismatch ({len(regions)} differences found):\n"
    return header + "\n\n".join(format_region(r) for r in regions) + "\n"


__all__ = ["ChangeRegion", "diff_lines", "format_region", "format_report", "split_lines"]
