"""Tests for positions and ranges."""
from pathlib import Path as _TestPath
import sys

import pytest

ROOT = _TestPath(__file__).resolve().parents[2]
SRC_PATH = ROOT / 'src'
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from satysfi_index_mcp.grammar.engine import EnginePosition, EngineSpan
from satysfi_index_mcp.syntax.position import Position, Range


def rng(sl, sc, el, ec):
    return Range(Position(sl, sc), Position(el, ec))


def test_positions_order_by_line_then_character():
    assert Position(0, 10) < Position(1, 0)
    assert Position(2, 3) < Position(2, 4)
    assert max(Position(1, 5), Position(1, 2), Position(0, 9)) == Position(1, 5)


def test_offset_is_ignored_by_equality_and_hashing():
    parsed = Position(3, 4, offset=57)
    from_cursor = Position(3, 4)

    assert parsed == from_cursor
    assert hash(parsed) == hash(from_cursor)
    assert len({parsed, from_cursor}) == 1


def test_from_engine_converts_to_zero_based():
    position = Position.from_engine(EnginePosition(offset=12, line=2, column=5))

    assert (position.line, position.character, position.offset) == (1, 4, 12)

    span = EngineSpan(EnginePosition(0, 1, 1), EnginePosition(3, 1, 4))
    assert Range.from_engine(span) == rng(0, 0, 0, 3)


def test_range_includes_both_ends():
    r = rng(1, 2, 1, 6)

    assert r.includes(Position(1, 2))
    assert r.includes(Position(1, 6))
    assert r.includes(Position(1, 4))
    assert not r.includes(Position(1, 1))
    assert not r.includes(Position(1, 7))
    assert not r.includes(Position(0, 4))


def test_zero_width_range_includes_its_position():
    r = rng(4, 0, 4, 0)

    assert r.is_empty
    assert r.includes(Position(4, 0))
    assert not r.includes(Position(4, 1))


def test_range_rejects_end_before_start():
    with pytest.raises(ValueError):
        rng(2, 0, 1, 5)


def test_contains_and_is_contained_in():
    outer = rng(0, 0, 5, 0)
    inner = rng(1, 3, 2, 8)

    assert outer.contains(inner)
    assert inner.is_contained_in(outer)
    assert not inner.contains(outer)
    assert outer.contains(outer)


def test_intersect_overlapping_ranges():
    assert rng(0, 0, 2, 0).intersect(rng(1, 5, 3, 0)) == rng(1, 5, 2, 0)


def test_touching_ranges_intersect_in_a_single_position():
    overlap = rng(0, 0, 0, 3).intersect(rng(0, 3, 0, 9))

    assert overlap == rng(0, 3, 0, 3)
    assert rng(0, 0, 0, 3).has_intersect(rng(0, 3, 0, 9))


def test_disjoint_ranges_do_not_intersect():
    assert rng(0, 0, 0, 3).intersect(rng(0, 4, 0, 9)) is None
    assert not rng(0, 4, 0, 9).has_intersect(rng(0, 0, 0, 3))


def test_to_dict_uses_line_and_character():
    assert rng(1, 2, 3, 4).to_dict() == {
        "start": {"line": 1, "character": 2},
        "end": {"line": 3, "character": 4},
    }
