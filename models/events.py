"""Outcome events emitted to the presentation layer."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class HitLanded(BaseModel):
    """An attack connected and dealt damage."""
    type: Literal["hit_landed"] = "hit_landed"
    attacker: int                   # Player slot
    defender: int
    attacker_id: str                # Archetype ids, for effects lookup
    defender_id: str
    move_name: str
    damage: int
    defender_health: int
    position: tuple[float, float]   # Where to draw the hit effect
    combo: int = 1


class AttackBlocked(BaseModel):
    """An attack connected with a correctly blocking defender."""
    type: Literal["attack_blocked"] = "attack_blocked"
    attacker: int
    defender: int
    move_name: str
    position: tuple[float, float]


class Knockout(BaseModel):
    """A fighter's health reached 0."""
    type: Literal["knockout"] = "knockout"
    winner: int
    loser: int
    position: tuple[float, float]


class RoundStarted(BaseModel):
    type: Literal["round_started"] = "round_started"
    round: int


class SuddenDeath(BaseModel):
    """Timer expired with equal health; the round goes to overtime."""
    type: Literal["sudden_death"] = "sudden_death"
    round: int
    round_timer: int


class RoundEnded(BaseModel):
    type: Literal["round_ended"] = "round_ended"
    round: int
    winner: int | None              # None for a double KO
    reason: Literal["ko", "timeout", "double_ko"]
    rounds_won: list[int]


class MatchEnded(BaseModel):
    type: Literal["match_ended"] = "match_ended"
    winner: int
    rounds_won: list[int]


FrameEvent = Annotated[
    Union[HitLanded, AttackBlocked, Knockout, RoundStarted, SuddenDeath, RoundEnded, MatchEnded],
    Field(discriminator="type"),
]
