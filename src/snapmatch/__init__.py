"""snapmatch: snapshot-based equality assertions for tests.

The first time an assertion runs, the actual value is encoded and written to a
snapshot file. Later runs re-encode the value and diff it line by line against
that file, failing with a readable report when they drift apart.

Typical use
-----------
>>> from snapmatch import assert_that, matches_snapshot
>>> assert_that({"a": 1}, matches_snapshot())  # doctest: +SKIP
"""

from __future__ import annotations

from snapmatch.matcher import Matcher, SnapshotMatcher, assert_that, matches_snapshot

__all__ = [
    "Matcher",
    "SnapshotMatcher",
    "__version__",
    "assert_that",
    "matches_snapshot",
]
__version__ = "0.1.0"
