"""Hit/block resolution between two fighters' geometry."""

from __future__ import annotations

from enum import Enum

from loguru import logger
from pydantic import BaseModel

from config import BLOCK_PUSHBACK, BLOCK_RECOVERY_PENALTY, HITSTUN_FRAMES
from models.events import AttackBlocked, FrameEvent, HitLanded, Knockout
from models.fighter import BlockStance, CombatState, FighterInstance
from models.roster import AttackHeight, FighterArchetype, MoveDefinition

Rect = tuple[float, float, float, float]  # (left, top, width, height)


class HitOutcome(str, Enum):
    NONE = "none"
    HIT = "hit"
    BLOCKED = "blocked"


class HitResolution(BaseModel):
    """What one attacker's move does to the defender this frame."""
    outcome: HitOutcome
    attacker: int
    defender: int
    move_name: str | None = None
    damage: int = 0
    attack_height: AttackHeight | None = None


def attack_hitbox(attacker: FighterInstance, move: MoveDefinition) -> Rect:
    """World-space hitbox of a move, mirrored by the attacker's facing."""
    hitbox = move.hitbox
    origin_x = attacker.x + attacker.facing * hitbox.offset_x
    top = attacker.y + hitbox.offset_y
    left = origin_x if attacker.facing > 0 else origin_x - hitbox.width
    return (left, top, hitbox.width, hitbox.height)


def rects_overlap(a: Rect, b: Rect) -> bool:
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def blocks(defender: FighterInstance, height: AttackHeight) -> bool:
    """Whether the defender's stance nullifies an attack of this height."""
    stance = defender.block_stance
    if stance == BlockStance.BACK:
        return True
    if stance == BlockStance.HIGH:
        return height == AttackHeight.HIGH
    if stance == BlockStance.LOW:
        return height == AttackHeight.LOW
    return False


def resolve_attack(
    attacker: FighterInstance,
    defender: FighterInstance,
    move: MoveDefinition | None,
) -> HitResolution:
    """Decide hit, block or whiff without mutating either fighter.

    Args:
        attacker: Attacker snapshot.
        defender: Defender snapshot.
        move: The attacker's current move, or None if it could not be found.

    Returns:
        HitResolution describing the outcome.
    """
    whiff = HitResolution(
        outcome=HitOutcome.NONE,
        attacker=attacker.player,
        defender=defender.player,
    )
    attack = attacker.attack
    if attack is None or move is None:
        return whiff
    if not attack.is_active or attack.connected:
        return whiff
    if defender.invincibility_frames > 0:
        return whiff
    if not rects_overlap(attack_hitbox(attacker, move), defender.body_rect()):
        return whiff

    height = move.attack_height
    outcome = HitOutcome.BLOCKED if blocks(defender, height) else HitOutcome.HIT
    return HitResolution(
        outcome=outcome,
        attacker=attacker.player,
        defender=defender.player,
        move_name=attack.move_name,
        damage=move.damage if outcome == HitOutcome.HIT else 0,
        attack_height=height,
    )


def apply_resolution(
    resolution: HitResolution,
    attacker: FighterInstance,
    defender: FighterInstance,
) -> list[FrameEvent]:
    """Apply a resolution to both fighters and return the resulting events."""
    if resolution.outcome == HitOutcome.NONE:
        return []

    if attacker.attack is not None:
        attacker.attack.connected = True
    position = (defender.x, defender.y - defender.height / 2)

    if resolution.outcome == HitOutcome.BLOCKED:
        defender.vx += attacker.facing * BLOCK_PUSHBACK
        if attacker.attack is not None:
            attacker.attack.recovery_frames += BLOCK_RECOVERY_PENALTY
        logger.debug("P{} blocks P{}'s {}", defender.player, attacker.player, resolution.move_name)
        return [
            AttackBlocked(
                attacker=attacker.player,
                defender=defender.player,
                move_name=resolution.move_name,
                position=position,
            )
        ]

    damage = resolution.damage
    defender.health = max(0, min(defender.max_health, defender.health - damage))
    defender.hitstun_frames = HITSTUN_FRAMES
    defender.vx = attacker.facing * (damage / 2)
    defender.block_stance = BlockStance.NONE
    defender.state = CombatState.HITSTUN
    defender.combo_count = 0
    attacker.combo_count += 1
    logger.debug(
        "P{} hits P{} with {} for {} damage ({} left)",
        attacker.player, defender.player, resolution.move_name, damage, defender.health,
    )

    events: list[FrameEvent] = [
        HitLanded(
            attacker=attacker.player,
            defender=defender.player,
            attacker_id=attacker.archetype_id,
            defender_id=defender.archetype_id,
            move_name=resolution.move_name,
            damage=damage,
            defender_health=defender.health,
            position=position,
            combo=attacker.combo_count,
        )
    ]
    if defender.health == 0:
        events.append(
            Knockout(winner=attacker.player, loser=defender.player, position=position)
        )
    return events


def resolve_collisions(
    fighters: dict[int, FighterInstance],
    archetypes: dict[int, FighterArchetype],
) -> list[FrameEvent]:
    """Resolve both attack directions for one frame.

    Both outcomes are decided from the same post-movement positions before
    either is applied, so simultaneous hits both land.
    """
    resolutions = []
    for attacker_slot, defender_slot in ((1, 2), (2, 1)):
        attacker = fighters[attacker_slot]
        move = None
        if attacker.attack is not None:
            move = archetypes[attacker_slot].moves.get(attacker.attack.move_name)
        resolutions.append(resolve_attack(attacker, fighters[defender_slot], move))

    events: list[FrameEvent] = []
    for resolution in resolutions:
        events.extend(
            apply_resolution(
                resolution,
                fighters[resolution.attacker],
                fighters[resolution.defender],
            )
        )
    return events
