"""Tests for the per-frame fighter state machine."""

import pytest

from config import FRICTION, GROUND_Y, STAGE_MAX_X, WALK_SPEED
from engine.fighter import advance_fighter, create_fighter, display_label, reset_fighter, start_attack
from engine.roster import archetype_by_id
from models.fighter import AttackInProgress, BlockStance, CombatState, FighterInstance
from models.inputs import Button
from models.roster import FighterArchetype, FighterStats

RAZOR = archetype_by_id("razor")


def _make_fighter(player: int = 1, **overrides) -> FighterInstance:
    """Helper to create a razor fighter with optional field overrides."""
    fighter = create_fighter(RAZOR, player)
    for field, value in overrides.items():
        setattr(fighter, field, value)
    return fighter


def _step(fighter: FighterInstance, opponent: FighterInstance, *buttons: Button) -> FighterInstance:
    return advance_fighter(fighter, RAZOR, frozenset(buttons), opponent)


class TestCreateFighter:
    def test_spawn_positions(self):
        p1 = create_fighter(RAZOR, 1)
        p2 = create_fighter(RAZOR, 2)
        assert (p1.x, p1.y, p1.facing) == (200, GROUND_Y, 1)
        assert (p2.x, p2.y, p2.facing) == (1000, GROUND_Y, -1)
        assert p1.health == p1.max_health == 100
        assert p1.state == CombatState.IDLE

    def test_bad_slot_rejected(self):
        with pytest.raises(ValueError, match="1 or 2"):
            create_fighter(RAZOR, 3)

    def test_reset_restores_spawn(self):
        fighter = _make_fighter(x=600, health=12, hitstun_frames=7, combo_count=3,
                                block_stance=BlockStance.LOW)
        fighter.attack = AttackInProgress(move_name="kick", startup_frames=5, recovery_frames=12)
        reset_fighter(fighter)
        assert fighter.x == 200
        assert fighter.health == 100
        assert fighter.attack is None
        assert fighter.hitstun_frames == 0
        assert fighter.combo_count == 0
        assert fighter.block_stance == BlockStance.NONE


class TestMovement:
    def test_walk_right(self):
        fighter, opponent = _make_fighter(1), _make_fighter(2)
        _step(fighter, opponent, Button.RIGHT)
        assert fighter.x == 200 + WALK_SPEED
        assert fighter.vx == WALK_SPEED
        assert fighter.facing == 1
        assert fighter.state == CombatState.WALKING

    def test_walking_away_back_blocks(self):
        fighter, opponent = _make_fighter(1), _make_fighter(2)
        _step(fighter, opponent, Button.LEFT)
        assert fighter.x == 200 - WALK_SPEED
        assert fighter.facing == 1
        assert fighter.block_stance == BlockStance.BACK
        assert fighter.state == CombatState.BLOCKING

    def test_walking_away_with_opponent_behind_turns_around(self):
        # Opponent is on the left, fighter faces right: walking right is open space
        fighter = _make_fighter(1, x=600)
        opponent = _make_fighter(2, x=300)
        _step(fighter, opponent, Button.RIGHT)
        assert fighter.facing == 1
        assert fighter.block_stance == BlockStance.NONE

        # Walking left toward the opponent turns the fighter around
        _step(fighter, opponent, Button.LEFT)
        assert fighter.facing == -1
        assert fighter.block_stance == BlockStance.NONE

    def test_friction_when_idle(self):
        fighter, opponent = _make_fighter(1, vx=4.0), _make_fighter(2)
        _step(fighter, opponent)
        assert fighter.x == 204
        assert fighter.vx == pytest.approx(4.0 * FRICTION)
        assert fighter.state == CombatState.IDLE

    def test_tiny_velocity_comes_to_rest(self):
        fighter, opponent = _make_fighter(1, vx=0.05), _make_fighter(2)
        _step(fighter, opponent)
        assert fighter.vx == 0.0

    def test_stage_bounds(self):
        fighter, opponent = _make_fighter(1, x=STAGE_MAX_X - 1), _make_fighter(2, x=300)
        _step(fighter, opponent, Button.RIGHT)
        assert fighter.x == STAGE_MAX_X

        fighter = _make_fighter(1, x=51)
        _step(fighter, _make_fighter(2), Button.LEFT)
        assert fighter.x == 50


class TestJumping:
    def test_jump_starts(self):
        fighter, opponent = _make_fighter(1), _make_fighter(2)
        _step(fighter, opponent, Button.UP)
        assert not fighter.on_ground
        assert fighter.vy == pytest.approx(-15 + 0.8)
        assert fighter.y == pytest.approx(GROUND_Y - 14.2)
        assert fighter.state == CombatState.JUMPING
        assert fighter.animation == "jump"

    def test_lands_back_on_ground(self):
        fighter, opponent = _make_fighter(1), _make_fighter(2)
        _step(fighter, opponent, Button.UP)
        for _ in range(60):
            _step(fighter, opponent)
        assert fighter.on_ground
        assert fighter.y == GROUND_Y
        assert fighter.vy == 0.0
        assert fighter.state == CombatState.IDLE

    def test_no_double_jump(self):
        fighter, opponent = _make_fighter(1), _make_fighter(2)
        _step(fighter, opponent, Button.UP)
        vy = fighter.vy
        _step(fighter, opponent, Button.UP)
        assert fighter.vy == pytest.approx(vy + 0.8)

    def test_airborne_attack_is_jump_punch(self):
        fighter, opponent = _make_fighter(1), _make_fighter(2)
        _step(fighter, opponent, Button.UP)
        _step(fighter, opponent, Button.KICK)
        assert fighter.attack is not None
        assert fighter.attack.move_name == "jumpPunch"
        assert fighter.attack.startup_frames == 6


class TestBlocking:
    def test_crouch_blocks_low(self):
        fighter, opponent = _make_fighter(1, vx=0.0), _make_fighter(2)
        _step(fighter, opponent, Button.DOWN, Button.RIGHT)
        assert fighter.block_stance == BlockStance.LOW
        assert fighter.state == CombatState.BLOCKING
        assert fighter.x == 200  # crouching suppresses walking

    def test_auto_block_when_opponent_attacks_nearby(self):
        fighter = _make_fighter(1)
        opponent = _make_fighter(2, x=260)
        opponent.attack = AttackInProgress(move_name="lightPunch", startup_frames=3, recovery_frames=8)
        _step(fighter, opponent)
        assert fighter.block_stance == BlockStance.HIGH
        assert fighter.state == CombatState.BLOCKING

    def test_no_auto_block_out_of_range(self):
        fighter = _make_fighter(1)
        opponent = _make_fighter(2, x=300)
        opponent.attack = AttackInProgress(move_name="lightPunch", startup_frames=3, recovery_frames=8)
        _step(fighter, opponent)
        assert fighter.block_stance == BlockStance.NONE
        assert fighter.state == CombatState.IDLE

    def test_no_auto_block_when_opponent_idle(self):
        fighter, opponent = _make_fighter(1), _make_fighter(2, x=260)
        _step(fighter, opponent)
        assert fighter.block_stance == BlockStance.NONE

    def test_block_released_next_frame(self):
        fighter, opponent = _make_fighter(1), _make_fighter(2)
        _step(fighter, opponent, Button.DOWN)
        _step(fighter, opponent)
        assert fighter.block_stance == BlockStance.NONE


class TestAttacks:
    def test_start_attack(self):
        fighter, opponent = _make_fighter(1), _make_fighter(2)
        _step(fighter, opponent, Button.LIGHT_PUNCH)
        assert fighter.state == CombatState.ATTACKING
        assert fighter.attack.move_name == "lightPunch"
        assert fighter.attack.elapsed_frames == 0
        assert fighter.animation == "lightPunch"

    def test_attack_clears_block(self):
        fighter, opponent = _make_fighter(1), _make_fighter(2)
        _step(fighter, opponent, Button.DOWN, Button.HEAVY_PUNCH)
        assert fighter.attack.move_name == "heavyPunch"
        assert fighter.block_stance == BlockStance.NONE

    def test_button_precedence(self):
        fighter, opponent = _make_fighter(1), _make_fighter(2)
        _step(fighter, opponent, Button.KICK, Button.LIGHT_PUNCH)
        assert fighter.attack.move_name == "lightPunch"

    def test_attack_locks_out_input_until_recovered(self):
        fighter, opponent = _make_fighter(1), _make_fighter(2)
        _step(fighter, opponent, Button.LIGHT_PUNCH)  # frame t
        total = 3 + 8
        for frame in range(1, total):
            _step(fighter, opponent, Button.RIGHT, Button.KICK)
            assert fighter.attack is not None, f"attack ended early at frame {frame}"
            assert fighter.attack.move_name == "lightPunch"
            assert fighter.x == 200

        # Frame t + startup + recovery: free to act again
        _step(fighter, opponent, Button.RIGHT)
        assert fighter.attack is None
        assert fighter.x == 200 + WALK_SPEED
        assert fighter.state == CombatState.WALKING

    def test_unknown_move_is_noop(self):
        stub = FighterArchetype(
            id="stub",
            name="Stub",
            stats=FighterStats(speed=5, power=5, defense=5, technique=5),
            moves={},
        )
        fighter, opponent = _make_fighter(1), _make_fighter(2)
        advance_fighter(fighter, stub, frozenset({Button.KICK}), opponent)
        assert fighter.attack is None
        assert fighter.state == CombatState.IDLE
        assert start_attack(fighter, stub, "lightPunch") is False

    def test_cannot_start_second_attack(self):
        fighter = _make_fighter(1)
        assert start_attack(fighter, RAZOR, "kick") is True
        assert start_attack(fighter, RAZOR, "lightPunch") is False
        assert fighter.attack.move_name == "kick"


class TestTimers:
    def test_hitstun_blocks_input_and_decays(self):
        fighter, opponent = _make_fighter(1, hitstun_frames=5), _make_fighter(2)
        _step(fighter, opponent, Button.RIGHT)
        assert fighter.hitstun_frames == 4
        assert fighter.x == 200
        assert fighter.state == CombatState.HITSTUN
        assert fighter.animation == "hit"

    def test_hitstun_expiry_frees_fighter(self):
        fighter, opponent = _make_fighter(1, hitstun_frames=1), _make_fighter(2)
        _step(fighter, opponent, Button.RIGHT)
        assert fighter.hitstun_frames == 0
        assert fighter.x == 200 + WALK_SPEED

    def test_invincibility_decays(self):
        fighter, opponent = _make_fighter(1, invincibility_frames=2), _make_fighter(2)
        _step(fighter, opponent)
        assert fighter.invincibility_frames == 1
        _step(fighter, opponent)
        _step(fighter, opponent)
        assert fighter.invincibility_frames == 0


class TestDisplayLabel:
    def test_labels(self):
        assert display_label(_make_fighter()) == "idle"
        assert display_label(_make_fighter(vx=3.0)) == "walk"
        assert display_label(_make_fighter(on_ground=False)) == "jump"
        assert display_label(_make_fighter(block_stance=BlockStance.HIGH)) == "block"
