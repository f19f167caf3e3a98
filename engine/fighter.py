"""Per-frame fighter state machine: timers, input mapping, physics."""

from __future__ import annotations

from collections.abc import Set
from typing import TYPE_CHECKING

from loguru import logger

from config import (
    AUTO_BLOCK_RANGE,
    FRICTION,
    GRAVITY,
    GROUND_Y,
    JUMP_VELOCITY,
    MAX_HEALTH,
    SPAWN_FACING,
    SPAWN_X,
    STAGE_MAX_X,
    STAGE_MIN_X,
    WALK_SPEED,
)
from models.fighter import AttackInProgress, BlockStance, CombatState, FighterInstance
from models.inputs import ATTACK_BUTTONS, JUMP_ATTACK_MOVE, Button

if TYPE_CHECKING:
    from models.roster import FighterArchetype

# Below this speed a sliding fighter is considered stopped
_REST_SPEED = 0.1


def create_fighter(archetype: FighterArchetype, player: int) -> FighterInstance:
    """Create a fighter at its spawn point for the given player slot (1 or 2)."""
    if player not in (1, 2):
        raise ValueError(f"Player slot must be 1 or 2, got {player}")
    return FighterInstance(
        player=player,
        archetype_id=archetype.id,
        name=archetype.name,
        x=SPAWN_X[player],
        y=GROUND_Y,
        facing=SPAWN_FACING[player],
    )


def reset_fighter(fighter: FighterInstance) -> FighterInstance:
    """Restore full health and spawn position, clearing all combat state."""
    fighter.x = SPAWN_X[fighter.player]
    fighter.y = GROUND_Y
    fighter.vx = 0.0
    fighter.vy = 0.0
    fighter.facing = SPAWN_FACING[fighter.player]
    fighter.on_ground = True
    fighter.max_health = MAX_HEALTH
    fighter.health = fighter.max_health
    fighter.state = CombatState.IDLE
    fighter.attack = None
    fighter.hitstun_frames = 0
    fighter.invincibility_frames = 0
    fighter.block_stance = BlockStance.NONE
    fighter.animation = "idle"
    fighter.combo_count = 0
    return fighter


def advance_fighter(
    fighter: FighterInstance,
    archetype: FighterArchetype,
    buttons: Set[Button],
    opponent: FighterInstance,
) -> FighterInstance:
    """Advance one fighter by one frame.

    Never raises for a valid fighter: unknown moves and stray buttons are
    ignored.

    Args:
        fighter: The fighter to advance (mutated in place).
        archetype: The fighter's roster entry, for move lookup.
        buttons: Buttons held by this fighter's player this frame.
        opponent: Read-only view of the opponent, for facing and auto-block.

    Returns:
        The updated fighter.
    """
    if fighter.hitstun_frames > 0:
        fighter.hitstun_frames -= 1
    if fighter.invincibility_frames > 0:
        fighter.invincibility_frames -= 1

    if fighter.attack is not None:
        fighter.attack.elapsed_frames += 1
        if fighter.attack.elapsed_frames >= fighter.attack.total_frames:
            fighter.attack = None
            fighter.state = CombatState.IDLE

    walking = False
    if fighter.can_act:
        walking = _apply_input(fighter, archetype, buttons, opponent)
    elif fighter.hitstun_frames > 0:
        fighter.block_stance = BlockStance.NONE

    _integrate(fighter, walking)

    fighter.state = _primary_state(fighter, walking)
    fighter.animation = display_label(fighter)
    return fighter


def start_attack(fighter: FighterInstance, archetype: FighterArchetype, move_name: str) -> bool:
    """Commit the fighter to a move. Unknown moves are a no-op.

    Returns:
        True if the attack started.
    """
    if fighter.attack is not None:
        return False
    move = archetype.moves.get(move_name)
    if move is None:
        logger.debug("{} has no move {!r}, ignoring", archetype.name, move_name)
        return False

    fighter.attack = AttackInProgress(
        move_name=move_name,
        startup_frames=move.startup_frames,
        recovery_frames=move.recovery_frames,
    )
    fighter.block_stance = BlockStance.NONE
    fighter.state = CombatState.ATTACKING
    logger.debug("P{} {} performs {}", fighter.player, fighter.name, move_name)
    return True


def display_label(fighter: FighterInstance) -> str:
    """Animation label for the renderer. No mechanical effect."""
    if fighter.attack is not None:
        return fighter.attack.move_name
    if fighter.hitstun_frames > 0:
        return "hit"
    if not fighter.on_ground:
        return "jump"
    if abs(fighter.vx) > 1:
        return "walk"
    if fighter.is_blocking:
        return "block"
    return "idle"


def _apply_input(
    fighter: FighterInstance,
    archetype: FighterArchetype,
    buttons: Set[Button],
    opponent: FighterInstance,
) -> bool:
    """Map held buttons to stance, movement, jump and attack.

    Returns:
        True if the fighter is actively walking this frame.
    """
    fighter.block_stance = BlockStance.NONE
    walking = False

    # Stance: crouch block > walk (with back block) > reactive high block
    if Button.DOWN in buttons:
        fighter.block_stance = BlockStance.LOW
    elif Button.LEFT in buttons or Button.RIGHT in buttons:
        direction = 1 if Button.RIGHT in buttons else -1
        fighter.vx = direction * WALK_SPEED
        walking = True
        opponent_side = _side_of(fighter, opponent)
        if opponent_side == fighter.facing and direction == -opponent_side:
            fighter.block_stance = BlockStance.BACK
        else:
            fighter.facing = direction
    elif abs(fighter.x - opponent.x) < AUTO_BLOCK_RANGE and opponent.is_attacking:
        # Standing still next to an attacking opponent blocks high automatically
        fighter.block_stance = BlockStance.HIGH

    if Button.UP in buttons and fighter.on_ground:
        fighter.vy = JUMP_VELOCITY
        fighter.on_ground = False

    move_name = _requested_move(fighter, buttons)
    if move_name is not None:
        start_attack(fighter, archetype, move_name)

    return walking


def _requested_move(fighter: FighterInstance, buttons: Set[Button]) -> str | None:
    for button, move_name in ATTACK_BUTTONS:
        if button in buttons:
            return move_name if fighter.on_ground else JUMP_ATTACK_MOVE
    return None


def _side_of(fighter: FighterInstance, opponent: FighterInstance) -> int:
    """1 if the opponent is to the right, -1 if to the left, 0 if level."""
    if opponent.x > fighter.x:
        return 1
    if opponent.x < fighter.x:
        return -1
    return 0


def _integrate(fighter: FighterInstance, walking: bool) -> None:
    if not fighter.on_ground:
        fighter.vy += GRAVITY

    fighter.x += fighter.vx
    fighter.y += fighter.vy

    if fighter.y >= GROUND_Y:
        fighter.y = GROUND_Y
        fighter.vy = 0.0
        fighter.on_ground = True

    fighter.x = max(STAGE_MIN_X, min(STAGE_MAX_X, fighter.x))

    if not walking:
        fighter.vx *= FRICTION
        if abs(fighter.vx) < _REST_SPEED:
            fighter.vx = 0.0


def _primary_state(fighter: FighterInstance, walking: bool) -> CombatState:
    if fighter.hitstun_frames > 0:
        return CombatState.HITSTUN
    if fighter.attack is not None:
        return CombatState.ATTACKING
    if fighter.is_blocking:
        return CombatState.BLOCKING
    if not fighter.on_ground:
        return CombatState.JUMPING
    if walking:
        return CombatState.WALKING
    return CombatState.IDLE
