"""
Party Order Speed Calculator - Data Models
============================================
Dataclasses passed between the presentation layers and the core.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from party_order.constants import (
    BATTLE_FACTORS, DEFAULT_BASE_POSITION, DEFAULT_BASE_SPEED,
    DEFAULT_BUFF_PERCENT, PARTY_SIZE,
)


class BattleType(Enum):
    NORMAL = "normal"
    MEGAMON = "megamon"

    @property
    def factor(self) -> float:
        return BATTLE_FACTORS[self.value]

    @property
    def label(self) -> str:
        if self is BattleType.MEGAMON:
            return "Megamon / Demon Lord"
        return "Normal"


def _default_buffs() -> List[int]:
    return [DEFAULT_BUFF_PERCENT] * PARTY_SIZE


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

@dataclass
class PartyConfig:
    """Everything the user enters on the calculator form."""
    name: str = "Untitled"
    description: str = ""
    battle_type: BattleType = BattleType.NORMAL
    custom_factor: Optional[float] = None  # overrides the battle type preset
    anchor_slot: int = DEFAULT_BASE_POSITION
    anchor_speed: int = DEFAULT_BASE_SPEED
    buff_percents: List[float] = field(default_factory=_default_buffs)

    @property
    def factor(self) -> float:
        if self.custom_factor is not None:
            return self.custom_factor
        return self.battle_type.factor

    @property
    def buffs(self) -> List[float]:
        """Buff percentages converted to multipliers (150 -> 1.5)."""
        return [p / 100 for p in self.buff_percents]

    def summary(self) -> str:
        factor = f"x{self.factor}"
        if self.custom_factor is not None:
            factor += " (custom)"
        buffs = "/".join(f"{p:g}%" for p in self.buff_percents)
        return (f"{self.battle_type.label} {factor}, anchor slot "
                f"{self.anchor_slot} @ {self.anchor_speed}, buffs {buffs}")


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

@dataclass
class SpeedResult:
    raw_speeds: List[int]
    effective_speeds: List[int]
    anchor_slot: int = DEFAULT_BASE_POSITION
    factor: float = BATTLE_FACTORS["normal"]
    buffs: List[float] = field(default_factory=lambda: [1.0] * PARTY_SIZE)
