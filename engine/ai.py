"""Scripted CPU opponent for single-player (arcade) matches."""

from __future__ import annotations

import random

from config import CPU_DECISION_JITTER_MS, CPU_DECISION_MIN_MS
from models.fighter import FighterInstance
from models.inputs import ATTACK_BUTTONS, Button

# ---------------------------------------------------------------------------
# Range bands (distance between fighter centres)
# ---------------------------------------------------------------------------

APPROACH_DISTANCE = 150
CLOSE_DISTANCE = 80

ATTACK_CHANCE = 0.4
BLOCK_CHANCE = 0.6
JUMP_IN_CHANCE = 0.3


class CpuController:
    """Produces held buttons for a CPU-controlled player slot.

    The CPU re-decides every 500-1500 ms of wall-clock time. Movement and
    block choices are held until the next decision; attack and jump buttons
    are pressed for the single frame the decision is taken on.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._elapsed_ms = 0.0
        self._next_decision_ms = self._roll_interval()
        self.held: frozenset[Button] = frozenset()

    def decide(
        self,
        fighter: FighterInstance,
        opponent: FighterInstance,
        delta_ms: float,
    ) -> frozenset[Button]:
        """Buttons the CPU holds this frame.

        Args:
            fighter: The CPU's fighter.
            opponent: The fighter it is playing against.
            delta_ms: Wall-clock time since the previous frame.
        """
        self._elapsed_ms += delta_ms
        if self._elapsed_ms < self._next_decision_ms:
            return self.held

        self._elapsed_ms = 0.0
        self._next_decision_ms = self._roll_interval()
        held, tapped = self._choose(fighter, opponent)
        self.held = held
        return held | tapped

    def reset(self) -> None:
        self._elapsed_ms = 0.0
        self._next_decision_ms = self._roll_interval()
        self.held = frozenset()

    def _roll_interval(self) -> float:
        return CPU_DECISION_MIN_MS + self._rng.random() * CPU_DECISION_JITTER_MS

    def _choose(
        self,
        fighter: FighterInstance,
        opponent: FighterInstance,
    ) -> tuple[frozenset[Button], frozenset[Button]]:
        """Pick (held, tapped) buttons for the current spacing."""
        distance = abs(fighter.x - opponent.x)
        toward = Button.RIGHT if opponent.x >= fighter.x else Button.LEFT
        away = Button.LEFT if toward == Button.RIGHT else Button.RIGHT

        if distance > APPROACH_DISTANCE:
            return frozenset({toward}), frozenset()

        if distance < CLOSE_DISTANCE:
            if self._rng.random() < ATTACK_CHANCE:
                button, _ = self._rng.choice(ATTACK_BUTTONS)
                return frozenset(), frozenset({button})
            if self._rng.random() < BLOCK_CHANCE:
                return frozenset({Button.DOWN}), frozenset()
            # Backing away also blocks while the opponent is in front
            return frozenset({away}), frozenset()

        # Mid range: occasionally jump in
        if self._rng.random() < JUMP_IN_CHANCE:
            return frozenset({toward}), frozenset({Button.UP})
        return frozenset(), frozenset()
