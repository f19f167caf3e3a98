"""Tests for the fighter roster and move data models."""

import pytest
from pydantic import ValidationError

from engine.errors import NotFound
from engine.roster import REQUIRED_MOVES, ROSTER, archetype_by_id, list_archetypes, missing_moves
from models.roster import AttackHeight, FighterArchetype, FighterStats, Hitbox, MoveDefinition


class TestArchetypeById:
    """Tests for archetype_by_id()."""

    def test_razor_light_punch(self):
        razor = archetype_by_id("razor")
        move = razor.moves["lightPunch"]
        assert razor.name == "Razor"
        assert move.damage == 8
        assert move.startup_frames == 3
        assert move.recovery_frames == 8
        assert move.hitbox == Hitbox(offset_x=0, offset_y=-20, width=35, height=15)

    def test_unknown_id_raises(self):
        with pytest.raises(NotFound, match="nonexistent"):
            archetype_by_id("nonexistent")

    def test_not_found_is_key_error(self):
        with pytest.raises(KeyError):
            archetype_by_id("nonexistent")


class TestRosterData:
    """Tests for the built-in roster table."""

    def test_six_archetypes(self):
        ids = [a.id for a in list_archetypes()]
        assert ids == ["razor", "blaze", "frost", "storm", "terra", "mystic"]

    @pytest.mark.parametrize("archetype_id", list(ROSTER))
    def test_every_archetype_has_required_moves(self, archetype_id):
        archetype = archetype_by_id(archetype_id)
        assert missing_moves(archetype) == []
        for name in REQUIRED_MOVES:
            assert archetype.moves[name].name == name

    def test_stats_are_in_range(self):
        for archetype in list_archetypes():
            stats = archetype.stats
            for value in (stats.speed, stats.power, stats.defense, stats.technique):
                assert 1 <= value <= 10

    def test_roster_is_read_only(self):
        with pytest.raises(TypeError):
            ROSTER["razor"] = None

    def test_archetype_is_frozen(self):
        razor = archetype_by_id("razor")
        with pytest.raises(ValidationError):
            razor.name = "Blunt"


class TestMoveDefinition:
    """Tests for move validation and attack height classification."""

    def _move(self, offset_y: int, category: AttackHeight | None = None) -> MoveDefinition:
        return MoveDefinition(
            name="test",
            damage=5,
            startup_frames=2,
            recovery_frames=2,
            hitbox=Hitbox(offset_y=offset_y, width=10, height=10),
            category=category,
        )

    def test_high_hitbox_is_high(self):
        assert self._move(-20).attack_height == AttackHeight.HIGH

    def test_boundary_offset_is_high(self):
        assert self._move(-10).attack_height == AttackHeight.HIGH

    def test_near_ground_hitbox_is_low(self):
        assert self._move(-5).attack_height == AttackHeight.LOW

    def test_explicit_low_tag_wins(self):
        assert self._move(-30, AttackHeight.LOW).attack_height == AttackHeight.LOW

    def test_kicks_are_low(self):
        for archetype in list_archetypes():
            assert archetype.moves["kick"].attack_height == AttackHeight.LOW
            assert archetype.moves["lightPunch"].attack_height == AttackHeight.HIGH

    def test_zero_startup_rejected(self):
        with pytest.raises(ValidationError):
            MoveDefinition(
                name="bad",
                damage=5,
                startup_frames=0,
                recovery_frames=2,
                hitbox=Hitbox(offset_y=-20, width=10, height=10),
            )

    def test_negative_damage_rejected(self):
        with pytest.raises(ValidationError):
            MoveDefinition(
                name="bad",
                damage=-1,
                startup_frames=1,
                recovery_frames=1,
                hitbox=Hitbox(offset_y=-20, width=10, height=10),
            )

    def test_missing_moves_reported(self):
        archetype = FighterArchetype(
            id="partial",
            name="Partial",
            stats=FighterStats(speed=5, power=5, defense=5, technique=5),
            moves={"lightPunch": archetype_by_id("razor").moves["lightPunch"]},
        )
        assert missing_moves(archetype) == ["heavyPunch", "kick", "jumpPunch"]
