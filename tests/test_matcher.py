"""Tests for the matcher facade and `assert_that`."""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest

import snapmatch.identity.site as site_module
from snapmatch import assert_that, matches_snapshot
from snapmatch.compare.comparator import SnapshotComparator
from snapmatch.core.errors import MismatchError, ResolutionError
from snapmatch.identity.registry import CounterRegistry
from snapmatch.identity.resolver import IdentityResolver
from snapmatch.identity.site import AssertionSite
from snapmatch.matcher import Matcher, SnapshotMatcher

SITE = AssertionSite.of("shop.tests.TestCart", "test_totals")


def test_path_is_resolved_once_and_cached(resolver: IdentityResolver) -> None:
    matcher: SnapshotMatcher[Any] = SnapshotMatcher(site=SITE, resolver=resolver)

    first = matcher.path
    assert matcher.path is first
    assert matcher.path == resolver.root / "shop/tests/TestCart/test_totals-0.json"
    assert resolver.registry.peek(SITE.key) == 1


def test_each_matcher_gets_its_own_snapshot(
    resolver: IdentityResolver, compact_comparator: SnapshotComparator
) -> None:
    m1 = matches_snapshot(site=SITE, resolver=resolver, comparator=compact_comparator)
    m2 = matches_snapshot(site=SITE, resolver=resolver, comparator=compact_comparator)

    assert m1.matches({"total": 1})
    assert m2.matches({"total": 2})
    assert m1.path.name == "test_totals-0.json"
    assert m2.path.name == "test_totals-1.json"
    assert m1.last_verdict is not None and m1.last_verdict.outcome == "created"


def test_named_matcher_uses_name(resolver: IdentityResolver) -> None:
    matcher = matches_snapshot("eu", site=SITE, resolver=resolver)
    assert matcher.path.name == "eu-0.json"
    assert matcher.site.method == "test_totals"


def test_describe_failure_mentions_path(resolver: IdentityResolver) -> None:
    matcher = matches_snapshot(site=SITE, resolver=resolver)
    assert matcher.describe_failure() == f"Object should match snapshot at {matcher.path}"


def test_assert_that_passes_then_raises_on_drift(
    resolver: IdentityResolver, compact_comparator: SnapshotComparator
) -> None:
    matcher = matches_snapshot(site=SITE, resolver=resolver, comparator=compact_comparator)
    matcher.path.parent.mkdir(parents=True)
    matcher.path.write_text('{"total":10}\n', encoding="utf-8")

    assert_that({"total": 10}, matcher)
    with pytest.raises(MismatchError) as excinfo:
        assert_that({"total": 11}, matcher)

    error = excinfo.value
    assert isinstance(error, AssertionError)
    assert error.description == matcher.describe_failure()
    assert error.report is not None and 'but found\t<{"total":11}>' in error.report
    assert str(matcher.path) in str(error)


def test_default_factory_discovers_calling_test(resolver: IdentityResolver) -> None:
    matcher = matches_snapshot(resolver=resolver)

    assert matcher.site.owner == __name__
    assert matcher.site.method == "test_default_factory_discovers_calling_test"
    assert matcher.path.name == "test_default_factory_discovers_calling_test-0.json"


class TestInsideClass:
    def test_owner_includes_class(self, resolver: IdentityResolver) -> None:
        matcher = matches_snapshot("custom", resolver=resolver)
        assert matcher.site.key == f"{__name__.replace('.', '/')}/TestInsideClass/custom"


def test_resolution_error_surfaces_at_construction(monkeypatch: Any) -> None:
    monkeypatch.setattr(site_module, "inspect", SimpleNamespace(currentframe=lambda: None))
    with pytest.raises(ResolutionError):
        matches_snapshot()


def test_write_failure_is_a_failed_match_not_an_exception(
    tmp_path: Path, compact_comparator: SnapshotComparator
) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    resolver = IdentityResolver(root=blocker, registry=CounterRegistry())

    matcher = matches_snapshot(site=SITE, resolver=resolver, comparator=compact_comparator)

    assert matcher.matches({"a": 1}) is False
    assert matcher.last_verdict is not None and matcher.last_verdict.outcome == "write_error"


def test_assert_that_accepts_any_matcher() -> None:
    class Even:
        def matches(self, value: int) -> bool:
            return value % 2 == 0

        def describe_failure(self) -> str:
            return "value should be even"

    even: Matcher[int] = Even()
    assert_that(4, even)
    with pytest.raises(MismatchError, match="value should be even"):
        assert_that(3, even)
