"""Snapshot identity: call sites, sequence registry and path resolution."""

from __future__ import annotations

from .registry import CounterRegistry, get_registry, init_registry
from .resolver import IdentityResolver, SnapshotIdentity
from .site import AssertionSite

__all__ = [
    "AssertionSite",
    "CounterRegistry",
    "IdentityResolver",
    "SnapshotIdentity",
    "get_registry",
    "init_registry",
]
