"""
Party Order Speed Calculator - Speed Thresholds
=================================================
Derives, from one anchor member's speed, the speed every other party slot
needs so that the turn order stays fixed.

Two neighbours keep their order while the faster one is at most `factor`
times as fast as the slower one. Starting from the anchor:

    faster slots:  s[i] = floor(s[i+1] * factor) + 1
    slower slots:  s[j] = floor(s[j-1] / factor) - 1

Each direction is chained outward from the anchor, never re-derived from the
other side.
"""

import math
from typing import List, Sequence

from party_order.constants import (
    BUFF_PERCENT_MAX, BUFF_PERCENT_MIN, PARTY_SIZE,
)
from party_order.errors import (
    InvalidBuffError, InvalidFactorError, InvalidSlotError, InvalidSpeedError,
)
from party_order.models import PartyConfig, SpeedResult


def floor_div(a, f) -> int:
    try:
        return math.floor(a / f)
    except OverflowError:
        raise InvalidSpeedError(f"Speed out of range: {a!r} / {f!r}") from None


def floor_mul(a, f) -> int:
    try:
        return math.floor(a * f)
    except OverflowError:
        raise InvalidSpeedError(f"Speed out of range: {a!r} * {f!r}") from None


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_finite(value) -> bool:
    try:
        return math.isfinite(value)
    except OverflowError:  # int beyond float range
        return False


def _check_slot(slot) -> None:
    if isinstance(slot, bool) or not isinstance(slot, int) or not 1 <= slot <= PARTY_SIZE:
        raise InvalidSlotError(f"Slot must be between 1 and {PARTY_SIZE}, got {slot!r}")


# ---------------------------------------------------------------------------
# Threshold propagation
# ---------------------------------------------------------------------------

def propagate(anchor_slot: int, anchor_value: int, factor: float) -> List[int]:
    """Boundary speeds for all slots given one slot's speed.

    Args:
        anchor_slot: Slot whose speed is known (1 = acts first).
        anchor_value: Speed of the anchor slot.
        factor: Battle stability factor (> 1).

    Returns:
        [s1, s2, s3, s4]. Slots below the anchor may come out negative when
        the anchor is small; they are not clamped.
    """
    _check_slot(anchor_slot)

    s = [0] * (PARTY_SIZE + 1)  # 1-indexed
    s[anchor_slot] = anchor_value

    # Faster slots: minimum speed that still acts before the lower neighbour
    for i in range(anchor_slot - 1, 0, -1):
        s[i] = floor_mul(s[i + 1], factor) + 1

    # Slower slots: maximum speed that still acts after the upper neighbour
    for j in range(anchor_slot + 1, PARTY_SIZE + 1):
        s[j] = floor_div(s[j - 1], factor) - 1

    return s[1:]


# ---------------------------------------------------------------------------
# Buff-aware resolution
# ---------------------------------------------------------------------------

def resolve_with_buffs(
    anchor_slot: int,
    anchor_raw_speed: int,
    factor: float,
    buffs: Sequence[float],
) -> SpeedResult:
    """Raw and effective speeds per slot with per-slot buff multipliers.

    Propagation runs on effective (buffed) speeds; each non-anchor slot's
    raw speed is then recovered by dividing out its own buff. The anchor's
    raw speed is returned exactly as given.

    Effective speeds are recomputed from the floored raw speeds, so they can
    sit one below the propagated boundary. That is the value shown in game
    and is returned as-is.
    """
    _check_slot(anchor_slot)
    if len(buffs) != PARTY_SIZE:
        raise InvalidBuffError(f"Expected {PARTY_SIZE} buffs, got {len(buffs)}")
    for i, b in enumerate(buffs):
        if not b > 0:
            raise InvalidBuffError(f"Buff for slot {i + 1} must be positive, got {b!r}")

    anchor_effective = floor_mul(anchor_raw_speed, buffs[anchor_slot - 1])
    boundary = propagate(anchor_slot, anchor_effective, factor)

    raw_speeds = []
    for i in range(PARTY_SIZE):
        if i == anchor_slot - 1:
            raw_speeds.append(anchor_raw_speed)
        else:
            raw_speeds.append(floor_div(boundary[i], buffs[i]))

    effective_speeds = [floor_mul(raw, b) for raw, b in zip(raw_speeds, buffs)]

    return SpeedResult(
        raw_speeds=raw_speeds,
        effective_speeds=effective_speeds,
        anchor_slot=anchor_slot,
        factor=factor,
        buffs=list(buffs),
    )


# ---------------------------------------------------------------------------
# Form input handling
# ---------------------------------------------------------------------------

def validate_config(config: PartyConfig) -> None:
    """Reject user input the calculator cannot work with.

    Raises the first PartyOrderError found.
    """
    speed = config.anchor_speed
    if isinstance(speed, bool) or not isinstance(speed, int) or speed <= 0:
        raise InvalidSpeedError(f"Anchor speed must be a positive integer, got {speed!r}")

    _check_slot(config.anchor_slot)

    factor = config.factor
    if not _is_number(factor) or not _is_finite(factor) or not factor > 1:
        raise InvalidFactorError(f"Factor must be a finite number greater than 1, got {factor!r}")

    if len(config.buff_percents) != PARTY_SIZE:
        raise InvalidBuffError(
            f"Expected {PARTY_SIZE} buffs, got {len(config.buff_percents)}")
    for i, pct in enumerate(config.buff_percents):
        if not _is_number(pct):
            raise InvalidBuffError(f"Buff for slot {i + 1} must be a number, got {pct!r}")
        if not BUFF_PERCENT_MIN <= pct <= BUFF_PERCENT_MAX:
            raise InvalidBuffError(
                f"Buff for slot {i + 1} must be {BUFF_PERCENT_MIN}-{BUFF_PERCENT_MAX}%, "
                f"got {pct!r}")


def calculate(config: PartyConfig) -> SpeedResult:
    """Validate a config and resolve its speeds."""
    validate_config(config)
    return resolve_with_buffs(
        config.anchor_slot, config.anchor_speed, config.factor, config.buffs,
    )
