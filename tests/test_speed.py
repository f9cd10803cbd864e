"""Tests for boundary speed propagation."""

import math
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from party_order.errors import InvalidSlotError, InvalidSpeedError
from party_order.speed import floor_div, floor_mul, propagate

FACTORS = [1.001, 1.05, 1.14, 1.2, 1.5, 2.0]
VALUES = [0, 1, 57, 500, 777, 1000, 1234, 9999, 65535]


def test_floor_helpers():
    assert floor_mul(777, 1.2) == 932
    assert floor_div(777, 1.2) == 647
    assert floor_div(-5, 1.14) == -5  # floors toward -inf


@pytest.mark.parametrize("slot", [1, 2, 3, 4])
@pytest.mark.parametrize("factor", FACTORS)
@pytest.mark.parametrize("value", VALUES)
def test_propagation_rules(slot, factor, value):
    """Anchor is kept, faster slots multiply up, slower slots divide down."""
    s = propagate(slot, value, factor)
    assert len(s) == 4
    assert s[slot - 1] == value
    for i in range(slot - 1):
        assert s[i] == math.floor(s[i + 1] * factor) + 1
    for j in range(slot, 4):
        assert s[j] == math.floor(s[j - 1] / factor) - 1


def test_normal_battle_third_slot():
    s2 = math.floor(1000 * 1.14) + 1
    s1 = math.floor(s2 * 1.14) + 1
    s4 = math.floor(1000 / 1.14) - 1
    assert propagate(3, 1000, 1.14) == [s1, s2, 1000, s4]
    assert s4 == 876


def test_megamon_first_slot():
    assert propagate(1, 1000, 1.2) == [1000, 832, 692, 575]


def test_megamon_second_slot():
    assert propagate(2, 777, 1.2) == [933, 777, 646, 537]


def test_last_slot_only_propagates_upward():
    s = propagate(4, 500, 1.5)
    assert s == [1691, 1127, 751, 500]


def test_downward_chains_from_neighbour():
    """Slot 4 derives from slot 3's boundary, not from the anchor."""
    s = propagate(1, 1000, 1.2)
    assert s[3] == math.floor(s[2] / 1.2) - 1
    assert s[3] != math.floor(1000 / 1.2 ** 3) - 1


def test_small_anchor_goes_negative():
    assert propagate(1, 1, 1.14) == [1, -1, -2, -3]


def test_factor_near_one_large_anchor():
    s = propagate(2, 60000, 1.001)
    assert s[0] > s[1] > s[2] > s[3] > 0
    assert s[0] - s[3] < 500


def test_result_is_fresh_list():
    a = propagate(3, 1000, 1.14)
    a[0] = 0
    assert propagate(3, 1000, 1.14)[0] != 0


@pytest.mark.parametrize("slot", [0, 5, -1, 2.0, True])
def test_invalid_slot(slot):
    with pytest.raises(InvalidSlotError) as exc:
        propagate(slot, 1000, 1.14)
    assert exc.value.kind == "InvalidSlot"


def test_overflowing_factor_raises_party_error():
    with pytest.raises(InvalidSpeedError):
        propagate(3, 1000, 1e308)


def test_floor_helpers_out_of_float_range():
    with pytest.raises(InvalidSpeedError):
        floor_mul(10 ** 400, 1.14)
    with pytest.raises(InvalidSpeedError):
        floor_div(10 ** 400, 1.14)
