"""Tests for the canonical JSON encoder."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from uuid import UUID

import pytest
from pydantic import BaseModel

from snapmatch.compare.encoder import JsonEncoder, to_canonical
from snapmatch.core.errors import SnapshotEncodeError


class Color(Enum):
    RED = "red"
    BLUE = "blue"


@dataclass
class Line:
    sku: str
    qty: int
    tags: set[str] = field(default_factory=set)


class Order(BaseModel):
    id: int
    placed: datetime
    lines: list[str]


class Plain:
    def __init__(self) -> None:
        self.visible = 1
        self._hidden = 2


def test_encoding_is_deterministic() -> None:
    value = {"b": [3, 2, 1], "a": {"z": None, "y": True}, "s": {"x", "w", "v"}}
    enc = JsonEncoder()
    assert enc.encode(value) == enc.encode(value)
    assert enc.encode(value) == enc.encode(json.loads(json.dumps(value, default=sorted)))


def test_keys_are_sorted_and_text_ends_with_newline() -> None:
    text = JsonEncoder().encode({"b": 1, "a": 2})
    assert text == '{\n  "a": 2,\n  "b": 1\n}\n'


def test_compact_form() -> None:
    assert JsonEncoder(indent=None).encode({"a": 1}) == '{"a":1}\n'


def test_non_ascii_is_kept() -> None:
    assert JsonEncoder(indent=None).encode(["café"]) == '["café"]\n'


def test_insertion_order_does_not_matter() -> None:
    enc = JsonEncoder()
    assert enc.encode({"x": 1, "y": 2}) == enc.encode({"y": 2, "x": 1})
    assert enc.encode({3, 1, 2}) == enc.encode({2, 3, 1})


def test_rich_types_are_normalised() -> None:
    stamp = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)
    value = {
        "color": Color.BLUE,
        "line": Line("A-1", 2, {"b", "a"}),
        "order": Order(id=7, placed=stamp, lines=["A-1"]),
        "day": date(2024, 3, 1),
        "path": Path("a") / "b.txt",
        "uuid": UUID("12345678-1234-5678-1234-567812345678"),
        "price": Decimal("9.90"),
        "plain": Plain(),
        "pair": (1, 2),
        Color.RED: "enum key",
        1: "int key",
    }

    assert to_canonical(value) == {
        "color": "blue",
        "line": {"sku": "A-1", "qty": 2, "tags": ["a", "b"]},
        "order": {"id": 7, "placed": "2024-03-01T12:00:00Z", "lines": ["A-1"]},
        "day": "2024-03-01",
        "path": "a/b.txt",
        "uuid": "12345678-1234-5678-1234-567812345678",
        "price": "9.90",
        "plain": {"visible": 1},
        "pair": [1, 2],
        "red": "enum key",
        "1": "int key",
    }


def test_binary_values_are_rejected() -> None:
    with pytest.raises(SnapshotEncodeError):
        JsonEncoder().encode({"blob": b"\x00\x01"})


def test_opaque_objects_are_rejected() -> None:
    with pytest.raises(SnapshotEncodeError):
        JsonEncoder().encode(object())


def test_keys_colliding_as_text_are_rejected() -> None:
    """`{1: ..., "1": ...}` must not collapse into one entry and hide a drift."""
    with pytest.raises(SnapshotEncodeError, match="collide"):
        JsonEncoder(indent=None).encode({1: "int", "1": "str"})
    with pytest.raises(SnapshotEncodeError):
        to_canonical({"nested": {Color.RED: 1, "red": 2}})
