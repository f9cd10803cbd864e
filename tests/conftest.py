"""Shared test fixtures for the party turn order test suite."""

import sys
from pathlib import Path

import pytest

# Ensure the project root is on the path so `party_order` imports work
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from party_order.models import BattleType, PartyConfig


@pytest.fixture
def default_config():
    """Form defaults: normal battle, slot 3 at 1000, no buffs."""
    return PartyConfig()


@pytest.fixture
def buffed_config():
    """Megamon battle, slot 2 at 777 with mixed buffs."""
    return PartyConfig(
        name="Buffed",
        battle_type=BattleType.MEGAMON,
        anchor_slot=2,
        anchor_speed=777,
        buff_percents=[150, 100, 200, 80],
    )
