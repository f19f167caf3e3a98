"""Match control endpoints used by the browser renderer.

Handlers are ``async`` so they run on the event loop that also drives the
round timer; the match is only ever touched from that one thread.
"""

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from api.ws import event_listener
from config import MAX_ROUNDS
from engine.errors import ConfigurationError
from engine.match import DEFAULT_FRAME_MS, Match, start_match
from engine.scheduler import AsyncioScheduler, Scheduler
from models.events import FrameEvent
from models.inputs import InputSnapshot

router = APIRouter()


class MatchRequest(BaseModel):
    """Fighter selection for a new match."""
    fighter1: str
    fighter2: str
    max_rounds: int = MAX_ROUNDS
    cpu_player: int | None = None   # 1 or 2 for arcade mode


class FrameRequest(BaseModel):
    """Held buttons per player slot, e.g. {"1": ["left", "kick"]}."""
    inputs: dict[str, list[str]] = {}
    delta_ms: float = DEFAULT_FRAME_MS


def _get_match(request: Request) -> Match:
    """Get the current match from app state."""
    match = request.app.state.match
    if match is None:
        raise HTTPException(status_code=404, detail="No match in progress")
    return match


def _get_scheduler(request: Request) -> Scheduler:
    scheduler = getattr(request.app.state, "scheduler", None)
    return scheduler if scheduler is not None else AsyncioScheduler()


def _match_view(match: Match) -> dict:
    return {
        "state": match.state.model_dump(mode="json"),
        "fighters": {
            str(slot): fighter.model_dump(mode="json")
            for slot, fighter in match.fighters.items()
        },
        "paused": match.paused,
        "stopped": match.stopped,
        "cpu_player": match.cpu_player,
    }


def _events_view(match: Match, events: list[FrameEvent]) -> dict:
    return {
        "events": [event.model_dump(mode="json") for event in events],
        **_match_view(match),
    }


@router.post("")
async def create_match(body: MatchRequest, request: Request) -> dict:
    """Start a new match, stopping any current one."""
    current = request.app.state.match
    if current is not None:
        current.stop()

    try:
        match = start_match(
            body.fighter1,
            body.fighter2,
            max_rounds=body.max_rounds,
            scheduler=_get_scheduler(request),
            cpu_player=body.cpu_player,
        )
    except ConfigurationError as e:
        request.app.state.match = None
        raise HTTPException(status_code=400, detail=str(e))

    match.subscribe(event_listener)
    request.app.state.match = match
    return _match_view(match)


@router.get("/state")
async def get_match_state(request: Request) -> dict:
    """Fighter snapshots and match state, polled every frame."""
    return _match_view(_get_match(request))


@router.post("/frame")
async def advance_frame(body: FrameRequest, request: Request) -> dict:
    """Advance the simulation one frame. Unknown button codes are ignored."""
    match = _get_match(request)
    events = match.advance_frame(InputSnapshot.from_raw(body.inputs), body.delta_ms)
    return _events_view(match, events)


@router.post("/timer")
async def advance_round_timer(request: Request) -> dict:
    """Tick the round timer once, for hosts that drive the clock themselves."""
    match = _get_match(request)
    return _events_view(match, match.advance_round_timer())


@router.post("/pause")
async def pause_match(request: Request) -> dict:
    match = _get_match(request)
    match.pause()
    return _match_view(match)


@router.post("/resume")
async def resume_match(request: Request) -> dict:
    match = _get_match(request)
    match.resume()
    return _match_view(match)


@router.post("/stop")
async def stop_match(request: Request) -> dict:
    match = _get_match(request)
    match.stop()
    return _match_view(match)


@router.post("/rematch")
async def rematch(request: Request) -> dict:
    """Replay the match with the same fighters."""
    match = _get_match(request)
    return _events_view(match, match.rematch())
