"""Root pytest configuration: load the snapmatch plugin for this repository's own tests."""

from __future__ import annotations

pytest_plugins = ["snapmatch.pytest_plugin"]
