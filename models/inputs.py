"""Logical input buttons and per-frame input snapshots."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum

from loguru import logger
from pydantic import BaseModel

from engine.errors import InvalidInput


class Button(str, Enum):
    """Logical buttons a player can hold."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    LIGHT_PUNCH = "lightPunch"
    HEAVY_PUNCH = "heavyPunch"
    KICK = "kick"


# Attack buttons in the order they are checked, mapped to move names
ATTACK_BUTTONS: tuple[tuple[Button, str], ...] = (
    (Button.LIGHT_PUNCH, "lightPunch"),
    (Button.HEAVY_PUNCH, "heavyPunch"),
    (Button.KICK, "kick"),
)
JUMP_ATTACK_MOVE = "jumpPunch"


def parse_button(code: str) -> Button:
    """Map a raw input code to a Button.

    Raises:
        InvalidInput: If the code is not a known button.
    """
    try:
        return Button(code)
    except ValueError:
        raise InvalidInput(f"Unmapped input code: {code!r}") from None


def parse_buttons(codes: Iterable[str]) -> frozenset[Button]:
    """Parse raw codes, dropping any that do not map to a button."""
    held = set()
    for code in codes:
        try:
            held.add(parse_button(code))
        except InvalidInput as e:
            logger.debug("Ignoring input: {}", e)
    return frozenset(held)


class InputSnapshot(BaseModel):
    """Buttons currently held by each player."""
    player1: frozenset[Button] = frozenset()
    player2: frozenset[Button] = frozenset()

    def for_player(self, player: int) -> frozenset[Button]:
        return self.player1 if player == 1 else self.player2

    @classmethod
    def from_raw(cls, raw: Mapping[str | int, Iterable[str]]) -> InputSnapshot:
        """Build a snapshot from {"1": [...codes], "2": [...codes]}."""
        players: dict[int, frozenset[Button]] = {}
        for key, codes in raw.items():
            try:
                player = int(key)
            except (TypeError, ValueError):
                logger.debug("Ignoring input for unknown player slot {!r}", key)
                continue
            if player not in (1, 2):
                logger.debug("Ignoring input for unknown player slot {!r}", key)
                continue
            players[player] = parse_buttons(codes)
        return cls(
            player1=players.get(1, frozenset()),
            player2=players.get(2, frozenset()),
        )
