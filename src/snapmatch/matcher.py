"""
Matcher facade wiring identity resolution to snapshot comparison.

A test framework only needs two capabilities from a matcher:

- ``matches(value) -> bool``
- ``describe_failure() -> str``

`SnapshotMatcher` provides both. Its call site is captured when it is built
(walking the stack unless an explicit `AssertionSite` is passed), and its
snapshot path is resolved on first use and then cached, so one matcher always
points at one file.

Usage
-----
    from snapmatch import assert_that, matches_snapshot

    class TestOrders:
        def test_totals(self) -> None:
            assert_that(compute_totals(), matches_snapshot())           # .../TestOrders/test_totals-0.json
            assert_that(compute_totals(eu=True), matches_snapshot("eu"))  # .../TestOrders/eu-0.json
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Generic, Protocol, TypeVar

from snapmatch.compare.comparator import SnapshotComparator, Verdict
from snapmatch.core.errors import MismatchError
from snapmatch.identity.resolver import IdentityResolver
from snapmatch.identity.site import AssertionSite

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)


class Matcher(Protocol[T_contra]):
    """What a host framework needs from an assertion matcher."""

    def matches(self, value: T_contra) -> bool: ...

    def describe_failure(self) -> str: ...


class SnapshotMatcher(Generic[T]):
    """Match a value against the snapshot of its assertion site."""

    def __init__(
        self,
        name: str | None = None,
        *,
        site: AssertionSite | None = None,
        resolver: IdentityResolver | None = None,
        comparator: SnapshotComparator | None = None,
    ) -> None:
        if site is None:
            site = AssertionSite.from_stack(name)
        elif name is not None:
            site = site.named(name)
        self.site = site
        self.resolver = resolver if resolver is not None else IdentityResolver()
        self.comparator = comparator if comparator is not None else SnapshotComparator()
        self._path: Path | None = None
        self.last_verdict: Verdict | None = None

    @property
    def path(self) -> Path:
        """Snapshot path of this matcher; resolved once, then cached."""
        if self._path is None:
            self._path = self.resolver.resolve(self.site)
        return self._path

    @property
    def report(self) -> str | None:
        """Mismatch report of the last evaluation, if it produced one."""
        return self.last_verdict.report if self.last_verdict else None

    def matches(self, value: T) -> bool:
        self.last_verdict = self.comparator.evaluate(value, self.path)
        return self.last_verdict.passed

    def describe_failure(self) -> str:
        return f"Object should match snapshot at {self.path}"


def matches_snapshot(
    name: str | None = None,
    *,
    site: AssertionSite | None = None,
    resolver: IdentityResolver | None = None,
    comparator: SnapshotComparator | None = None,
) -> SnapshotMatcher[Any]:
    """Build a snapshot matcher for the calling test.

    Without ``name`` the snapshot is named after the calling test method;
    with it, ``name`` replaces the method name in the snapshot key.
    """
    return SnapshotMatcher(name, site=site, resolver=resolver, comparator=comparator)


def assert_that(value: T, matcher: Matcher[T]) -> None:
    """Raise `MismatchError` unless ``matcher`` accepts ``value``."""
    if not matcher.matches(value):
        raise MismatchError(matcher.describe_failure(), getattr(matcher, "report", None))


__all__ = ["Matcher", "SnapshotMatcher", "assert_that", "matches_snapshot"]
