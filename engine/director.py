"""Round and match progression: round timer, knockouts, round and match wins."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from loguru import logger

from config import ROUND_TIME_SECONDS, ROUND_TIMER_INTERVAL, SUDDEN_DEATH_SECONDS
from engine.fighter import reset_fighter
from engine.scheduler import Scheduler, TimerHandle
from models.events import FrameEvent, Knockout, MatchEnded, RoundEnded, RoundStarted, SuddenDeath
from models.fighter import FighterInstance
from models.match import MatchPhase, MatchState


class RoundDirector:
    """Drives MatchState through PreRound -> InRound -> RoundOver -> PreRound | MatchOver.

    The 1 Hz round timer is requested from the injected scheduler on round
    start and its handle is cancelled on every round transition, so at most
    one timer is ever live. Without a scheduler the host is expected to call
    ``tick_timer`` itself once per second.
    """

    def __init__(
        self,
        state: MatchState,
        fighters: dict[int, FighterInstance],
        scheduler: Scheduler | None = None,
        on_tick: Callable[[], object] | None = None,
    ) -> None:
        self.state = state
        self.fighters = fighters
        self._scheduler = scheduler
        self._on_tick = on_tick or self.tick_timer
        self._timer: TimerHandle | None = None

    @property
    def timer_running(self) -> bool:
        return self._timer is not None and not self._timer.cancelled

    def start_timer(self) -> None:
        """(Re)start the round timer callback. Replaces any live handle."""
        self.cancel_timer()
        if self._scheduler is not None:
            self._timer = self._scheduler.call_every(ROUND_TIMER_INTERVAL, self._on_tick)

    def cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def start_round(self) -> list[FrameEvent]:
        """PreRound -> InRound: reset fighters and the clock."""
        if self.state.phase != MatchPhase.PRE_ROUND:
            return []
        for fighter in self.fighters.values():
            reset_fighter(fighter)
        self.state.round_timer = ROUND_TIME_SECONDS
        self.state.phase = MatchPhase.IN_ROUND
        self.start_timer()
        logger.info("Round {} start", self.state.current_round)
        return [RoundStarted(round=self.state.current_round)]

    def next_round(self) -> list[FrameEvent]:
        """RoundOver -> PreRound -> InRound, keeping cumulative round wins."""
        if self.state.phase != MatchPhase.ROUND_OVER:
            return []
        self.state.current_round += 1
        self.state.phase = MatchPhase.PRE_ROUND
        return self.start_round()

    def handle_events(self, events: Sequence[FrameEvent]) -> list[FrameEvent]:
        """End the round immediately on a knockout, regardless of the timer."""
        if self.state.phase != MatchPhase.IN_ROUND:
            return []
        knockouts = [e for e in events if isinstance(e, Knockout)]
        if not knockouts:
            return []
        losers = {ko.loser for ko in knockouts}
        if len(losers) > 1:
            return self.end_round(None, "double_ko")
        return self.end_round(knockouts[0].winner, "ko")

    def tick_timer(self) -> list[FrameEvent]:
        """One second elapsed. Decide the round on health if time runs out."""
        if self.state.phase != MatchPhase.IN_ROUND:
            return []
        self.state.round_timer = max(0, self.state.round_timer - 1)
        if self.state.round_timer > 0:
            return []

        health_1 = self.fighters[1].health
        health_2 = self.fighters[2].health
        if health_1 > health_2:
            return self.end_round(1, "timeout")
        if health_2 > health_1:
            return self.end_round(2, "timeout")

        # Equal health: overtime instead of a draw
        self.state.round_timer = SUDDEN_DEATH_SECONDS
        logger.info("Round {} tied on time, sudden death", self.state.current_round)
        return [SuddenDeath(round=self.state.current_round, round_timer=self.state.round_timer)]

    def end_round(self, winner: int | None, reason: str) -> list[FrameEvent]:
        """InRound -> RoundOver, or MatchOver once a player has enough round wins."""
        if self.state.phase != MatchPhase.IN_ROUND:
            return []
        self.cancel_timer()
        if winner is not None:
            self.state.rounds_won[winner - 1] += 1
        self.state.round_winners.append(winner)
        logger.info(
            "Round {} over: winner={} reason={} score={}",
            self.state.current_round, winner, reason, self.state.rounds_won,
        )

        events: list[FrameEvent] = [
            RoundEnded(
                round=self.state.current_round,
                winner=winner,
                reason=reason,
                rounds_won=list(self.state.rounds_won),
            )
        ]
        if winner is not None and self.state.wins(winner) >= self.state.wins_needed:
            self.state.phase = MatchPhase.MATCH_OVER
            self.state.winner = winner
            logger.info("Match over: player {} wins {}", winner, self.state.rounds_won)
            events.append(MatchEnded(winner=winner, rounds_won=list(self.state.rounds_won)))
        else:
            self.state.phase = MatchPhase.ROUND_OVER
        return events
