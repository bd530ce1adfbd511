import logging
import threading

from fastapi import Body, Depends, FastAPI, HTTPException
from pydantic import BaseModel

from config import DICE_MAX_COUNT, DICE_SEED, dev_mode_enabled
from logging_config import setup_logging
from rules.core import PRESET_SIDES, RollError, RollResult
from rules.session import SessionState

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Lazy Dice Roller API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

_session = SessionState(seed=DICE_SEED, max_dice_count=DICE_MAX_COUNT)
_session_lock = threading.Lock()


def get_session() -> SessionState:
    return _session


class FieldsUpdate(BaseModel):
    dice: str | None = None
    modifier: str | None = None
    custom_sides: str | None = None


class ModifierSubmit(BaseModel):
    modifier: str | None = None


def _roll_response(session: SessionState, result: RollResult | None, fields: dict) -> dict:
    response = {
        "rolled": result is not None,
        "result": result.as_dict() if result else None,
        "state": session.snapshot(),
    }
    if dev_mode_enabled():
        response["fields_at_roll"] = fields
    return response


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/presets")
def list_presets() -> dict:
    return {"sides": list(PRESET_SIDES)}


@app.get("/state")
def read_state(session: SessionState = Depends(get_session)) -> dict:
    with _session_lock:
        return session.snapshot()


@app.put("/fields")
def update_fields(
    payload: FieldsUpdate,
    session: SessionState = Depends(get_session),
) -> dict:
    with _session_lock:
        session.set_fields(
            dice=payload.dice,
            modifier=payload.modifier,
            custom_sides=payload.custom_sides,
        )
        return session.snapshot()


@app.post("/roll/preset/{sides}")
def roll_preset_die(sides: int, session: SessionState = Depends(get_session)) -> dict:
    with _session_lock:
        fields = session.fields
        try:
            result = session.press_preset(sides)
        except RollError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return _roll_response(session, result, fields)


@app.post("/roll/custom")
def roll_custom_die(session: SessionState = Depends(get_session)) -> dict:
    with _session_lock:
        fields = session.fields
        result = session.press_custom()
        return _roll_response(session, result, fields)


@app.post("/history/clear")
def clear_history(session: SessionState = Depends(get_session)) -> dict:
    with _session_lock:
        session.press_clear()
        return session.snapshot()


@app.post("/modifier/submit")
def submit_modifier(
    payload: ModifierSubmit | None = Body(default=None),
    session: SessionState = Depends(get_session),
) -> dict:
    modifier = payload.modifier if payload else None
    with _session_lock:
        fields = session.fields
        result = session.on_modifier_submit(modifier)
        return _roll_response(session, result, fields)
