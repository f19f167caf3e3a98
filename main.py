"""FastAPI app entry point for Arena Fighter."""

from pathlib import Path

from fastapi import FastAPI

from api.match import router as match_router
from api.roster import router as roster_router
from api.ws import router as ws_router
from config import LOG_DIR, LOG_LEVEL
from logs import setup_logger

setup_logger(LOG_LEVEL, Path(LOG_DIR) if LOG_DIR else None)

app = FastAPI(
    title="Arena Fighter",
    description="Combat engine for the browser fighting games",
    version="0.1.0",
)

# One match at a time; the round timer runs on the server's event loop
app.state.match = None
app.state.scheduler = None

app.include_router(roster_router, prefix="/roster", tags=["Roster"])
app.include_router(match_router, prefix="/match", tags=["Match"])
app.include_router(ws_router, prefix="/match", tags=["WebSocket"])


@app.get("/")
def root() -> dict:
    """Root endpoint returning server info."""
    return {"name": "Arena Fighter", "version": "0.1.0", "status": "running"}


@app.get("/health")
def health() -> dict:
    """Health check endpoint."""
    return {"healthy": True}
