"""
Party Order Speed Calculator - I/O
====================================
Load and save party configs as YAML, export results as JSON.
"""

import json
from pathlib import Path
from typing import List

import yaml

from party_order.constants import (
    DEFAULT_BASE_POSITION, DEFAULT_BASE_SPEED, DEFAULT_BUFF_PERCENT, PARTY_SIZE,
)
from party_order.errors import (
    InvalidBuffError, InvalidFactorError, PartyOrderError, UnknownBattleTypeError,
)
from party_order.models import BattleType, PartyConfig, SpeedResult

PRESETS_DIR = Path(__file__).parent.parent / "data" / "parties"


def parse_battle_type(value: str) -> BattleType:
    try:
        return BattleType(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(bt.value for bt in BattleType)
        raise UnknownBattleTypeError(
            f"Unknown battle type '{value}' (expected one of: {choices})") from None


def parse_buff_string(s: str) -> List[float]:
    """Parse a CLI buff string.

    Format: '100,120,100,100' (percent per slot, '%' suffix allowed).
    """
    parts = [p for p in s.split(",") if p.strip()]
    return _coerce_buffs(parts, s)


def _coerce_buffs(values, source) -> List[float]:
    if len(values) != PARTY_SIZE:
        raise InvalidBuffError(f"Expected {PARTY_SIZE} buffs, got {len(values)}: {source!r}")
    try:
        return [_number(v) for v in values]
    except (TypeError, ValueError, OverflowError):
        raise InvalidBuffError(f"Buffs must be numbers: {source!r}") from None


def _number(value):
    if isinstance(value, bool):
        raise ValueError(value)
    if isinstance(value, str):
        value = value.strip().rstrip("%")
    value = float(value)
    return int(value) if value.is_integer() else value


# ---------------------------------------------------------------------------
# Party configs
# ---------------------------------------------------------------------------

def load_party_config(filepath: str) -> PartyConfig:
    with open(filepath, "r") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise PartyOrderError(
            f"Party config must be a mapping, got {type(data).__name__}: {filepath}")

    buffs = data.get("buffs", [DEFAULT_BUFF_PERCENT] * PARTY_SIZE)
    if isinstance(buffs, str):
        buffs = parse_buff_string(buffs)
    elif isinstance(buffs, list):
        buffs = _coerce_buffs(buffs, buffs)
    else:
        raise InvalidBuffError(f"Buffs must be a list or string, got {buffs!r}")

    custom_factor = data.get("factor")
    if custom_factor is not None:
        try:
            custom_factor = float(custom_factor)
        except (TypeError, ValueError):
            raise InvalidFactorError(f"Factor must be a number, got {custom_factor!r}") from None

    return PartyConfig(
        name=data.get("name", Path(filepath).stem),
        description=data.get("description", ""),
        battle_type=parse_battle_type(data.get("battle_type", BattleType.NORMAL.value)),
        custom_factor=custom_factor,
        anchor_slot=data.get("anchor_slot", DEFAULT_BASE_POSITION),
        anchor_speed=data.get("anchor_speed", DEFAULT_BASE_SPEED),
        buff_percents=list(buffs),
    )


def save_party_config(config: PartyConfig, filepath: str):
    data = {
        "name": config.name,
        "description": config.description,
        "battle_type": config.battle_type.value,
    }
    if config.custom_factor is not None:
        data["factor"] = config.custom_factor
    data["anchor_slot"] = config.anchor_slot
    data["anchor_speed"] = config.anchor_speed
    data["buffs"] = list(config.buff_percents)

    with open(filepath, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def list_presets(directory: Path = PRESETS_DIR) -> List[Path]:
    if not directory.exists():
        return []
    return sorted(directory.glob("*.yaml"))


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

def config_to_dict(config: PartyConfig) -> dict:
    return {
        "name": config.name,
        "description": config.description,
        "battle_type": config.battle_type.value,
        "custom_factor": config.custom_factor,
        "factor": config.factor,
        "anchor_slot": config.anchor_slot,
        "anchor_speed": config.anchor_speed,
        "buff_percents": list(config.buff_percents),
    }


def result_to_dict(result: SpeedResult) -> dict:
    """Convert SpeedResult to a JSON-serializable dict."""
    return {
        "anchor_slot": result.anchor_slot,
        "factor": result.factor,
        "raw_speeds": list(result.raw_speeds),
        "effective_speeds": list(result.effective_speeds),
        "slots": [
            {"slot": i + 1, "buff": b, "raw_speed": raw, "effective_speed": eff}
            for i, (b, raw, eff) in enumerate(
                zip(result.buffs, result.raw_speeds, result.effective_speeds))
        ],
    }


def export_result_json(config: PartyConfig, result: SpeedResult, filepath: str):
    data = {
        "config": config_to_dict(config),
        "result": result_to_dict(result),
    }
    with open(filepath, "w") as f:
        json.dump(data, f, indent=2)
