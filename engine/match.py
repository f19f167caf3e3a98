"""Match orchestration: setup, the per-frame loop, pause/stop and event fan-out."""

from __future__ import annotations

import random
from collections.abc import Callable

from loguru import logger

from config import MAX_ROUNDS
from engine.ai import CpuController
from engine.collision import resolve_collisions
from engine.director import RoundDirector
from engine.errors import ConfigurationError, NotFound
from engine.fighter import advance_fighter, create_fighter
from engine.roster import archetype_by_id, missing_moves
from engine.scheduler import Scheduler
from models.events import FrameEvent
from models.fighter import FighterInstance
from models.inputs import InputSnapshot
from models.match import MatchPhase, MatchState
from models.roster import FighterArchetype

DEFAULT_FRAME_MS = 1000 / 60

EventListener = Callable[[list[FrameEvent]], object]


class Match:
    """Handle for one two-player match.

    Create matches with ``start_match``. The host calls ``advance_frame``
    once per display frame and, unless a scheduler was injected,
    ``advance_round_timer`` once per second. Renderers read ``fighters`` and
    ``state``, which return copies, or subscribe to events.
    """

    def __init__(
        self,
        archetypes: dict[int, FighterArchetype],
        *,
        max_rounds: int = MAX_ROUNDS,
        scheduler: Scheduler | None = None,
        cpu_player: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._archetypes = archetypes
        self._max_rounds = max_rounds
        self._scheduler = scheduler
        self._listeners: list[EventListener] = []
        self.cpu_player = cpu_player
        self._cpu = CpuController(rng) if cpu_player is not None else None
        self.paused = False
        self.stopped = False
        self._setup()

    def _setup(self) -> None:
        self._fighters = {
            slot: create_fighter(archetype, slot)
            for slot, archetype in self._archetypes.items()
        }
        self._state = MatchState(max_rounds=self._max_rounds)
        self._director = RoundDirector(
            self._state,
            self._fighters,
            scheduler=self._scheduler,
            on_tick=self.advance_round_timer,
        )
        if self._cpu is not None:
            self._cpu.reset()

    # -- read-only views ------------------------------------------------------

    @property
    def state(self) -> MatchState:
        return self._state.model_copy(deep=True)

    @property
    def fighters(self) -> dict[int, FighterInstance]:
        return {slot: f.model_copy(deep=True) for slot, f in self._fighters.items()}

    def fighter(self, player: int) -> FighterInstance:
        return self._fighters[player].model_copy(deep=True)

    def archetype(self, player: int) -> FighterArchetype:
        return self._archetypes[player]

    @property
    def timer_running(self) -> bool:
        return self._director.timer_running

    # -- observers ------------------------------------------------------------

    def subscribe(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, events: list[FrameEvent]) -> list[FrameEvent]:
        if events:
            for listener in list(self._listeners):
                listener(events)
        return events

    # -- lifecycle ------------------------------------------------------------

    def start(self) -> list[FrameEvent]:
        """Begin round 1."""
        return self._emit(self._director.start_round())

    def advance_frame(
        self,
        inputs: InputSnapshot | None = None,
        delta_ms: float = DEFAULT_FRAME_MS,
    ) -> list[FrameEvent]:
        """Run one simulation frame.

        Order: input -> both fighters advance -> collision (both directions)
        -> round director. A finished round rolls into the next one on the
        following frame.

        Args:
            inputs: Buttons held by each player. None means nothing held.
            delta_ms: Wall-clock time since the previous frame.

        Returns:
            Events produced this frame.
        """
        if self.paused or self.stopped:
            return []
        phase = self._state.phase
        if phase == MatchPhase.MATCH_OVER:
            return []

        self._state.frame += 1
        self._state.elapsed_ms += delta_ms

        if phase == MatchPhase.ROUND_OVER:
            return self._emit(self._director.next_round())
        if phase != MatchPhase.IN_ROUND:
            return []

        inputs = inputs or InputSnapshot()
        # Both fighters see the opponent as it was at the start of the frame
        snapshots = self.fighters
        buttons = {slot: inputs.for_player(slot) for slot in self._fighters}
        if self._cpu is not None:
            cpu = self.cpu_player
            buttons[cpu] = self._cpu.decide(
                snapshots[cpu], snapshots[_other(cpu)], delta_ms
            )

        for slot, fighter in self._fighters.items():
            advance_fighter(fighter, self._archetypes[slot], buttons[slot], snapshots[_other(slot)])

        events = resolve_collisions(self._fighters, self._archetypes)
        events.extend(self._director.handle_events(events))
        return self._emit(events)

    def advance_round_timer(self) -> list[FrameEvent]:
        """One second of round time elapsed."""
        if self.paused or self.stopped:
            return []
        return self._emit(self._director.tick_timer())

    def pause(self) -> None:
        """Freeze frames and the round timer."""
        if self.paused or self.stopped:
            return
        self.paused = True
        self._director.cancel_timer()
        logger.info("Match paused")

    def resume(self) -> None:
        if not self.paused or self.stopped:
            return
        self.paused = False
        if self._state.phase == MatchPhase.IN_ROUND:
            self._director.start_timer()
        logger.info("Match resumed")

    def stop(self) -> None:
        """Halt the match for good, releasing the timer handle."""
        self.stopped = True
        self._director.cancel_timer()
        logger.info("Match stopped")

    def rematch(self) -> list[FrameEvent]:
        """Start over with the same fighters and settings."""
        self._director.cancel_timer()
        self.paused = False
        self.stopped = False
        self._setup()
        logger.info("Rematch: {} vs {}", self._archetypes[1].name, self._archetypes[2].name)
        return self.start()


def _other(slot: int) -> int:
    return 2 if slot == 1 else 1


def start_match(
    archetype_id_1: str,
    archetype_id_2: str,
    *,
    max_rounds: int = MAX_ROUNDS,
    scheduler: Scheduler | None = None,
    cpu_player: int | None = None,
    rng: random.Random | None = None,
) -> Match:
    """Set up a match and begin round 1.

    Args:
        archetype_id_1: Roster id for player 1.
        archetype_id_2: Roster id for player 2.
        max_rounds: Best-of count; the match ends at ceil(max_rounds / 2) wins.
        scheduler: Optional scheduler that drives the 1 Hz round timer.
        cpu_player: Slot (1 or 2) to hand to the CPU, or None.
        rng: Random source for the CPU, for seeded play.

    Returns:
        The running Match.

    Raises:
        ConfigurationError: If an archetype is unknown or incomplete, or the
            settings are invalid. No fighter is created in that case.
    """
    if max_rounds < 1:
        raise ConfigurationError(f"max_rounds must be at least 1, got {max_rounds}")
    if cpu_player not in (None, 1, 2):
        raise ConfigurationError(f"cpu_player must be 1, 2 or None, got {cpu_player}")

    archetypes: dict[int, FighterArchetype] = {}
    for slot, archetype_id in ((1, archetype_id_1), (2, archetype_id_2)):
        try:
            archetype = archetype_by_id(archetype_id)
        except NotFound as e:
            raise ConfigurationError(f"Player {slot}: {e}") from e
        missing = missing_moves(archetype)
        if missing:
            raise ConfigurationError(
                f"Player {slot}: {archetype.name} is missing moves {missing}"
            )
        archetypes[slot] = archetype

    match = Match(
        archetypes,
        max_rounds=max_rounds,
        scheduler=scheduler,
        cpu_player=cpu_player,
        rng=rng,
    )
    logger.info("Match start: {} vs {}", archetypes[1].name, archetypes[2].name)
    match.start()
    return match
