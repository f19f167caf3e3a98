"""Match and round progression state."""

import math
from enum import Enum

from pydantic import BaseModel, Field

from config import MAX_ROUNDS, ROUND_TIME_SECONDS


class MatchPhase(str, Enum):
    """Possible phases of a match."""
    PRE_ROUND = "pre_round"         # Fighters being reset
    IN_ROUND = "in_round"           # Fighting, timer running
    ROUND_OVER = "round_over"       # Round decided, next round pending
    MATCH_OVER = "match_over"


class MatchState(BaseModel):
    """Round counters, timer and phase of a match."""
    current_round: int = 1
    rounds_won: list[int] = Field(default_factory=lambda: [0, 0])  # [p1, p2]
    max_rounds: int = Field(default=MAX_ROUNDS, ge=1)
    round_timer: int = ROUND_TIME_SECONDS
    phase: MatchPhase = MatchPhase.PRE_ROUND
    winner: int | None = None
    round_winners: list[int | None] = []  # Per finished round; None for a double KO
    frame: int = 0
    elapsed_ms: float = 0.0

    @property
    def wins_needed(self) -> int:
        return math.ceil(self.max_rounds / 2)

    def wins(self, player: int) -> int:
        return self.rounds_won[player - 1]
