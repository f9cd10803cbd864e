"""
Party Order Speed Calculator - Constants
==========================================
Central registry of the game constants the calculator depends on.
Values match the in-game turn-order rules as published for the web tool.
"""

# ---------------------------------------------------------------------------
# Battle stability factors
# ---------------------------------------------------------------------------
# Turn order between two neighbours stays fixed while the faster one is at
# most `factor` times the speed of the slower one.
#   normal:  every other battle (x1.14)
#   megamon: mega-monster and demon-lord battles (x1.2)

BATTLE_FACTORS = {
    "normal": 1.14,
    "megamon": 1.2,
}

DEFAULT_BATTLE_TYPE = "normal"

# ---------------------------------------------------------------------------
# Party layout
# ---------------------------------------------------------------------------

PARTY_SIZE = 4

DEFAULT_BASE_SPEED = 1000
DEFAULT_BASE_POSITION = 3

# ---------------------------------------------------------------------------
# Buffs (percent)
# ---------------------------------------------------------------------------

DEFAULT_BUFF_PERCENT = 100
BUFF_PERCENT_MIN = 50
BUFF_PERCENT_MAX = 300
