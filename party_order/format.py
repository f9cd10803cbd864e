"""
Party Order Speed Calculator - Output Formatting
==================================================
Pretty-printing for speed results.
"""

import math
from typing import List, Optional

from party_order.constants import DEFAULT_BUFF_PERCENT, PARTY_SIZE
from party_order.models import PartyConfig, SpeedResult


def buff_percent(buff: float) -> int:
    # Half-up, so 1.125 shows as 113% rather than banker's 112%
    return math.floor(buff * 100 + 0.5)


def format_slot_label(slot: int, buff: float) -> str:
    pct = buff_percent(buff)
    suffix = f" ({pct}%)" if pct != DEFAULT_BUFF_PERCENT else ""
    return f"Slot {slot}{suffix}"


def print_result(result: SpeedResult, config: Optional[PartyConfig] = None):
    print()
    print("=" * 50)
    print("  PARTY TURN ORDER SPEEDS")
    if config is not None:
        if config.name and config.name != "Untitled":
            print(f"  Party: {config.name}")
        print(f"  Battle: {config.battle_type.label} (x{result.factor})")
    else:
        print(f"  Factor: x{result.factor}")
    print(f"  Anchor: slot {result.anchor_slot}")
    print("=" * 50)
    print(f" {'':<2} {'Slot':<14} {'Speed':>8} {'Effective':>10}")
    print(f" {'':<2} {'----':<14} {'-----':>8} {'---------':>10}")

    for i in range(PARTY_SIZE):
        marker = "*" if i + 1 == result.anchor_slot else ""
        label = format_slot_label(i + 1, result.buffs[i])
        print(f" {marker:<2} {label:<14} {result.raw_speeds[i]:>8} "
              f"{result.effective_speeds[i]:>10}")


def print_table(results: List[SpeedResult]):
    """Side-by-side raw speeds for several anchor positions."""
    if not results:
        return
    col_w = 12

    print()
    print("=" * (16 + col_w * len(results)))
    print("  SPEEDS BY ANCHOR SLOT")
    print("=" * (16 + col_w * len(results)))

    print(f"{'':>16}", end="")
    for r in results:
        print(f"{'anchor ' + str(r.anchor_slot):>{col_w}}", end="")
    print()

    for i in range(PARTY_SIZE):
        label = format_slot_label(i + 1, results[0].buffs[i])
        print(f" {label:<15}", end="")
        for r in results:
            val = f"{r.raw_speeds[i]} ({r.effective_speeds[i]})"
            print(f"{val:>{col_w}}", end="")
        print()
    print(f"\n {'raw (effective)':<15}")
