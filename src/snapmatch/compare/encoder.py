"""Canonical text encoding of test values.

Snapshots are only as stable as their encoding: the same logical value must
always produce byte-identical text, otherwise every run reports spurious
differences. `JsonEncoder` guarantees that by normalising the value into plain
JSON types first (`to_canonical`) and then dumping with sorted keys.

Normalisation rules
-------------------
- pydantic models  -> ``model_dump(mode="json")``
- dataclasses      -> dict of their fields
- mappings         -> dict with keys coerced to ``str`` (colliding keys rejected)
- lists / tuples   -> lists
- sets / frozensets -> lists sorted by the canonical text of each element
- Enum             -> its ``value``
- date/time types  -> ISO-8601 strings
- Path             -> POSIX string; UUID / Decimal -> ``str``
- other objects    -> their public instance attributes

`bytes` and anything without attributes are rejected with
`SnapshotEncodeError`; a `repr()` fallback would leak memory addresses into
the snapshot.
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import Any, Protocol
from uuid import UUID

from pydantic import BaseModel

from snapmatch.core.errors import SnapshotEncodeError


class Encoder(Protocol):
    """Deterministic value → text encoder used for every snapshot."""

    def encode(self, value: Any) -> str: ...


def to_canonical(value: Any) -> Any:
    """Return a JSON-safe, order-independent representation of ``value``."""
    if isinstance(value, Enum):
        return to_canonical(value.value)
    if value is None or isinstance(value, bool | int | float | str):
        return value
    if isinstance(value, BaseModel):
        return to_canonical(value.model_dump(mode="json"))
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_canonical(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Mapping):
        return _canonical_mapping(value)
    if isinstance(value, list | tuple):
        return [to_canonical(v) for v in value]
    if isinstance(value, set | frozenset):
        items = [to_canonical(v) for v in value]
        return sorted(items, key=lambda item: json.dumps(item, sort_keys=True))
    if isinstance(value, datetime | date | time):
        return value.isoformat()
    if isinstance(value, PurePath):
        return value.as_posix()
    if isinstance(value, UUID | Decimal):
        return str(value)
    if isinstance(value, bytes | bytearray | memoryview):
        raise SnapshotEncodeError("binary values cannot be snapshotted")
    attrs = getattr(value, "__dict__", None)
    if attrs is not None:
        return {k: to_canonical(v) for k, v in attrs.items() if not k.startswith("_")}
    raise SnapshotEncodeError(f"cannot encode value of type {type(value).__name__}")


def _canonical_mapping(value: Mapping[Any, Any]) -> dict[str, Any]:
    """Coerce keys to ``str``; two keys landing on the same text is an error."""
    out: dict[str, Any] = {}
    for k, v in value.items():
        key = _key(k)
        if key in out:
            raise SnapshotEncodeError(f"keys collide once converted to text: {key!r}")
        out[key] = to_canonical(v)
    return out


def _key(k: Any) -> str:
    if isinstance(k, Enum):
        k = k.value
    if isinstance(k, str):
        return k
    if k is None or isinstance(k, bool | int | float):
        return json.dumps(k)
    canonical = to_canonical(k)
    return canonical if isinstance(canonical, str) else json.dumps(canonical, sort_keys=True)


class JsonEncoder:
    """Encode values as sorted-key JSON text ending with a newline.

    ``indent=None`` gives compact single-line output (``{"a":1}``); the default
    two-space indent spreads structures over lines so diffs stay local.
    """

    def __init__(self, indent: int | None = 2) -> None:
        self.indent = indent

    def encode(self, value: Any) -> str:
        separators = (",", ": ") if self.indent is not None else (",", ":")
        text = json.dumps(
            to_canonical(value),
            sort_keys=True,
            indent=self.indent,
            ensure_ascii=False,
            separators=separators,
        )
        return text + "\n"


__all__ = ["Encoder", "JsonEncoder", "to_canonical"]
