"""Core package initializer for snapmatch.

Holds the pieces every other subpackage leans on:
    from snapmatch.core.settings import settings, load_settings, Settings, get_logger
    from snapmatch.core.result import Result, ok, err
    from snapmatch.core.errors import SnapshotError, ResolutionError, ...
"""

from __future__ import annotations

__all__ = ["__doc__"]
