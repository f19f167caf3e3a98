"""Fighter select endpoints."""

from fastapi import APIRouter, HTTPException

from engine.errors import NotFound
from engine.roster import archetype_by_id, list_archetypes

router = APIRouter()


@router.get("")
def get_roster() -> list[dict]:
    """All fighter archetypes, in select-screen order."""
    return [archetype.model_dump() for archetype in list_archetypes()]


@router.get("/{archetype_id}")
def get_archetype(archetype_id: str) -> dict:
    """A single archetype with its move list."""
    try:
        archetype = archetype_by_id(archetype_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return archetype.model_dump()
