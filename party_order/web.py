"""
Party Order Speed Calculator - Web API
========================================
FastAPI server exposing the calculator as JSON endpoints.

Usage:
    python -m party_order.web
    python cli.py web [--port 8080]
"""

from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field
import uvicorn

from party_order.constants import (
    BATTLE_FACTORS, BUFF_PERCENT_MAX, BUFF_PERCENT_MIN, DEFAULT_BASE_POSITION,
    DEFAULT_BASE_SPEED, DEFAULT_BATTLE_TYPE, DEFAULT_BUFF_PERCENT, PARTY_SIZE,
)
from party_order.errors import PartyOrderError
from party_order.io import (
    PRESETS_DIR, config_to_dict, list_presets, load_party_config,
    parse_battle_type, result_to_dict,
)
from party_order.models import BattleType, PartyConfig
from party_order.speed import calculate, propagate

app = FastAPI(title="Party Turn Order Calculator")


# ---------------------------------------------------------------------------
# Pydantic models for request/response
# ---------------------------------------------------------------------------

class CalculateRequest(BaseModel):
    battle_type: str = DEFAULT_BATTLE_TYPE
    custom_factor: Optional[float] = None
    anchor_slot: int = DEFAULT_BASE_POSITION
    anchor_speed: int = DEFAULT_BASE_SPEED
    buff_percents: list[float] = Field(
        default_factory=lambda: [DEFAULT_BUFF_PERCENT] * PARTY_SIZE)


class PropagateRequest(BaseModel):
    anchor_slot: int
    anchor_value: int
    factor: float = BATTLE_FACTORS[DEFAULT_BATTLE_TYPE]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _error(e: PartyOrderError) -> HTTPException:
    return HTTPException(400, {"kind": e.kind, "message": str(e)})


def _config_from_request(req: CalculateRequest) -> PartyConfig:
    return PartyConfig(
        battle_type=parse_battle_type(req.battle_type),
        custom_factor=req.custom_factor,
        anchor_slot=req.anchor_slot,
        anchor_speed=req.anchor_speed,
        buff_percents=list(req.buff_percents),
    )


# ---------------------------------------------------------------------------
# API Endpoints
# ---------------------------------------------------------------------------

@app.get("/api/battle-types")
def api_battle_types():
    return {
        "battle_types": [
            {"key": bt.value, "label": bt.label, "factor": bt.factor}
            for bt in BattleType
        ],
    }


@app.get("/api/defaults")
def api_defaults():
    """Initial form values."""
    return {
        "battle_type": DEFAULT_BATTLE_TYPE,
        "anchor_slot": DEFAULT_BASE_POSITION,
        "anchor_speed": DEFAULT_BASE_SPEED,
        "buff_percents": [DEFAULT_BUFF_PERCENT] * PARTY_SIZE,
        "buff_min": BUFF_PERCENT_MIN,
        "buff_max": BUFF_PERCENT_MAX,
        "party_size": PARTY_SIZE,
    }


@app.post("/api/calculate")
def api_calculate(req: CalculateRequest):
    """Resolve raw and effective speeds for every slot."""
    try:
        config = _config_from_request(req)
        result = calculate(config)
    except PartyOrderError as e:
        raise _error(e)
    return {"config": config_to_dict(config), "result": result_to_dict(result)}


@app.post("/api/propagate")
def api_propagate(req: PropagateRequest):
    """Boundary speeds without buffs."""
    if not req.factor > 1:
        raise HTTPException(400, {"kind": "InvalidFactor",
                                  "message": "Factor must be greater than 1"})
    try:
        speeds = propagate(req.anchor_slot, req.anchor_value, req.factor)
    except PartyOrderError as e:
        raise _error(e)
    return {"anchor_slot": req.anchor_slot, "factor": req.factor, "speeds": speeds}


@app.get("/api/presets")
def api_presets():
    """List bundled party configs."""
    return {
        "presets": [{"filename": p.name, "stem": p.stem} for p in list_presets()],
    }


@app.get("/api/presets/{filename}")
def api_preset_detail(filename: str):
    """Load a preset and return it together with its result."""
    filepath = PRESETS_DIR / filename
    if filepath.suffix != ".yaml":
        filepath = filepath.with_name(filepath.name + ".yaml")
    if filepath.parent != PRESETS_DIR or not filepath.exists():
        raise HTTPException(404, f"Preset not found: {filename}")
    try:
        config = load_party_config(str(filepath))
        result = calculate(config)
    except PartyOrderError as e:
        raise _error(e)
    return {"config": config_to_dict(config), "result": result_to_dict(result)}


def start_server(port: int = 8080):
    """Start the uvicorn server."""
    print(f"Starting Party Turn Order Calculator at http://localhost:{port}")
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="info")


if __name__ == "__main__":
    start_server()
