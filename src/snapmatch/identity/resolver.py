"""
Identity resolution: from an assertion site to a snapshot path.

- Key:      ``{owner/with/slashes}/{name or method}``
- Identity: ``{key}-{sequence}``, the sequence coming from a
  :class:`~snapmatch.identity.registry.CounterRegistry`
- Path:     ``{root}/{identity}{extension}``

Example
-------
>>> resolver = IdentityResolver(root=Path("snaps"), registry=CounterRegistry())
>>> site = AssertionSite.of("com.acme.FooTest", "testBar")
>>> resolver.resolve(site).as_posix()
'snaps/com/acme/FooTest/testBar-0.json'
>>> resolver.resolve(site).as_posix()
'snaps/com/acme/FooTest/testBar-1.json'
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from snapmatch.core.settings import load_settings

from .registry import CounterRegistry, get_registry
from .site import AssertionSite


@dataclass(frozen=True, slots=True)
class SnapshotIdentity:
    """
    A resolved, unique snapshot identity.

    Attributes
    ----------
    key : str
        Registry key, ``{owner/with/slashes}/{name or method}``.
    sequence : int
        Zero-based position of this resolution among all resolutions of ``key``.
    """

    key: str
    sequence: int

    @property
    def name(self) -> str:
        return f"{self.key}-{self.sequence}"

    def relative_path(self, extension: str) -> Path:
        return Path(f"{self.name}{extension}")


class IdentityResolver:
    """Map assertion sites to unique snapshot paths under a fixed root."""

    def __init__(
        self,
        root: Path | None = None,
        extension: str | None = None,
        registry: CounterRegistry | None = None,
    ) -> None:
        cfg = load_settings()
        self.root: Path = root if root is not None else cfg.snapshot_dir
        self.extension: str = extension if extension is not None else cfg.extension
        self.registry: CounterRegistry = registry if registry is not None else get_registry()

    def identify(self, site: AssertionSite, name: str | None = None) -> SnapshotIdentity:
        """Take the next sequence for the site's key.

        ``name`` overrides the site's own snapshot name when given.
        """
        if name is not None:
            site = site.named(name)
        key = site.key
        return SnapshotIdentity(key=key, sequence=self.registry.next_sequence(key))

    def resolve(self, site: AssertionSite, name: str | None = None) -> Path:
        """Return the path of a brand new identity for ``site``."""
        return self.path_for(self.identify(site, name))

    def path_for(self, identity: SnapshotIdentity) -> Path:
        return self.root / identity.relative_path(self.extension)


__all__ = ["IdentityResolver", "SnapshotIdentity"]
