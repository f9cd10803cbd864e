"""
Party Order Speed Calculator - Errors
=======================================
Each error carries a short `kind` string so the web API can report it
without leaking Python class names.
"""


class PartyOrderError(ValueError):
    kind = "PartyOrderError"


class InvalidSlotError(PartyOrderError):
    kind = "InvalidSlot"


class InvalidBuffError(PartyOrderError):
    kind = "InvalidBuff"


class InvalidSpeedError(PartyOrderError):
    kind = "InvalidSpeed"


class InvalidFactorError(PartyOrderError):
    kind = "InvalidFactor"


class UnknownBattleTypeError(PartyOrderError):
    kind = "UnknownBattleType"
