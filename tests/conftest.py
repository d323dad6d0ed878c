"""Shared fixtures for the snapmatch test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from snapmatch.compare.comparator import SnapshotComparator
from snapmatch.compare.encoder import JsonEncoder
from snapmatch.identity.registry import CounterRegistry
from snapmatch.identity.resolver import IdentityResolver


@pytest.fixture(scope="session")  # type: ignore[misc]
def snapshot_root(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Keep snapshots written through the plugin fixtures out of the source tree."""
    return tmp_path_factory.mktemp("snapshots")


@pytest.fixture  # type: ignore[misc]
def resolver(tmp_path: Path) -> IdentityResolver:
    """A resolver with its own registry, rooted in a fresh temp dir."""
    return IdentityResolver(root=tmp_path / "snapshots", extension=".json", registry=CounterRegistry())


@pytest.fixture  # type: ignore[misc]
def compact_comparator() -> SnapshotComparator:
    """Single-line JSON encoding and no stdout echo, for exact-text assertions."""
    return SnapshotComparator(encoder=JsonEncoder(indent=None), echo_report=False)
