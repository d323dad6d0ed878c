"""
pytest integration for snapmatch.

Registered through the ``pytest11`` entry point, so installing the package is
enough. The plugin:

- creates one :class:`CounterRegistry` per test run (``pytest_configure``),
- adds ``--snapshot-dir`` to relocate the snapshot tree,
- provides fixtures:

  ``snapshot_root``      session root directory (override it in a conftest)
  ``snapshot_registry``  the test-run registry
  ``snapshot_match``     a factory bound to the requesting test

Call sites come from the collected test node instead of the call stack, so
names stay stable however the test body is structured:

    def test_checkout(snapshot_match):
        snapshot_match.assert_match(build_cart())
        assert snapshot_match("totals").matches(cart.totals)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from snapmatch.compare.comparator import SnapshotComparator
from snapmatch.core.settings import load_settings
from snapmatch.identity.registry import CounterRegistry, init_registry
from snapmatch.identity.resolver import IdentityResolver
from snapmatch.identity.site import AssertionSite
from snapmatch.matcher import SnapshotMatcher, assert_that

registry_key = pytest.StashKey[CounterRegistry]()


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("snapmatch")
    group.addoption(
        "--snapshot-dir",
        action="store",
        default=None,
        help="Directory holding snapshot files (default: SNAPMATCH_SNAPSHOT_DIR).",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.stash[registry_key] = init_registry()


def site_for(node: Any) -> AssertionSite:
    """Build the assertion site of a collected test item.

    The owner is ``module.Class`` for test methods and ``module`` for plain
    functions. Parametrized items share their function's original name.
    """
    cls = getattr(node, "cls", None)
    module = getattr(node, "module", None)
    if cls is not None:
        owner = f"{cls.__module__}.{cls.__qualname__}"
    elif module is not None:
        owner = module.__name__
    else:
        owner = Path(str(node.path)).stem
    method = getattr(node, "originalname", None) or node.name
    return AssertionSite.of(owner, method)


def anchor_root(root: Path, rootpath: Path) -> Path:
    """Anchor a relative snapshot root at the pytest rootdir, not the CWD."""
    return root if root.is_absolute() else rootpath / root


class SnapshotFactory:
    """Build snapshot matchers for one test item."""

    def __init__(
        self,
        site: AssertionSite,
        resolver: IdentityResolver,
        comparator: SnapshotComparator | None = None,
    ) -> None:
        self.site = site
        self.resolver = resolver
        self.comparator = comparator if comparator is not None else SnapshotComparator()

    def __call__(self, name: str | None = None) -> SnapshotMatcher[Any]:
        return SnapshotMatcher(name, site=self.site, resolver=self.resolver, comparator=self.comparator)

    def assert_match(self, value: Any, name: str | None = None) -> None:
        assert_that(value, self(name))


@pytest.fixture(scope="session")
def snapshot_root(pytestconfig: pytest.Config) -> Path:
    """Snapshot tree root; relative paths are anchored at the pytest rootdir."""
    option = pytestconfig.getoption("snapshot_dir")
    root = Path(option) if option else load_settings().snapshot_dir
    return anchor_root(root, pytestconfig.rootpath)


@pytest.fixture(scope="session")
def snapshot_registry(pytestconfig: pytest.Config) -> CounterRegistry:
    return pytestconfig.stash[registry_key]


@pytest.fixture
def snapshot_match(
    request: pytest.FixtureRequest,
    snapshot_root: Path,
    snapshot_registry: CounterRegistry,
) -> SnapshotFactory:
    resolver = IdentityResolver(root=snapshot_root, registry=snapshot_registry)
    return SnapshotFactory(site_for(request.node), resolver)


__all__ = ["SnapshotFactory", "anchor_root", "registry_key", "site_for"]
