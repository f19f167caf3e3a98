"""Static fighter roster: the six archetypes and their move data."""

from __future__ import annotations

from types import MappingProxyType

from models.roster import AttackHeight, FighterArchetype, FighterStats, Hitbox, MoveDefinition

from engine.errors import NotFound

REQUIRED_MOVES = ("lightPunch", "heavyPunch", "kick", "jumpPunch")


def _move(
    name: str,
    damage: int,
    startup: int,
    recovery: int,
    hitbox: tuple[int, int, int, int],
) -> MoveDefinition:
    """Build a move from compact (offset_x, offset_y, width, height) hitbox data.

    Kicks are always classed as low attacks.
    """
    offset_x, offset_y, width, height = hitbox
    return MoveDefinition(
        name=name,
        damage=damage,
        startup_frames=startup,
        recovery_frames=recovery,
        hitbox=Hitbox(offset_x=offset_x, offset_y=offset_y, width=width, height=height),
        category=AttackHeight.LOW if name == "kick" else None,
    )


def _archetype(
    id: str,
    name: str,
    origin: str,
    description: str,
    stats: tuple[int, int, int, int],
    moves: dict[str, tuple[int, int, int, tuple[int, int, int, int]]],
) -> FighterArchetype:
    speed, power, defense, technique = stats
    return FighterArchetype(
        id=id,
        name=name,
        origin=origin,
        description=description,
        stats=FighterStats(speed=speed, power=power, defense=defense, technique=technique),
        moves={
            move_name: _move(move_name, damage, startup, recovery, hitbox)
            for move_name, (damage, startup, recovery, hitbox) in moves.items()
        },
    )


# move name -> (damage, startup, recovery, hitbox)
_ARCHETYPES = [
    _archetype(
        "razor", "Razor", "Shadow Realm",
        "A mysterious warrior from the shadow realm who moves with supernatural speed.",
        (9, 7, 6, 8),
        {
            "lightPunch": (8, 3, 8, (0, -20, 35, 15)),
            "heavyPunch": (15, 8, 15, (0, -25, 45, 20)),
            "kick": (12, 5, 12, (0, -15, 40, 25)),
            "jumpPunch": (14, 6, 10, (0, -30, 38, 18)),
        },
    ),
    _archetype(
        "blaze", "Blaze", "Fire Mountains",
        "Born from the flames, Blaze channels fire into devastating attacks.",
        (7, 9, 5, 6),
        {
            "lightPunch": (10, 4, 10, (0, -22, 38, 18)),
            "heavyPunch": (18, 12, 18, (0, -28, 50, 25)),
            "kick": (13, 6, 14, (0, -18, 42, 28)),
            "jumpPunch": (16, 8, 12, (0, -32, 45, 22)),
        },
    ),
    _archetype(
        "frost", "Frost", "Ice Peaks",
        "Master of ice magic who pairs graceful movement with freezing attacks.",
        (8, 6, 8, 9),
        {
            "lightPunch": (7, 2, 7, (0, -19, 32, 16)),
            "heavyPunch": (14, 6, 13, (0, -26, 48, 22)),
            "kick": (11, 4, 9, (0, -16, 36, 24)),
            "jumpPunch": (13, 5, 11, (0, -28, 40, 20)),
        },
    ),
    _archetype(
        "storm", "Storm", "Sky Temples",
        "Controls lightning and thunder, striking with shocking speed.",
        (10, 7, 4, 7),
        {
            "lightPunch": (9, 2, 6, (0, -21, 33, 14)),
            "heavyPunch": (16, 7, 14, (0, -27, 47, 23)),
            "kick": (12, 3, 10, (0, -17, 39, 26)),
            "jumpPunch": (15, 4, 9, (0, -29, 41, 19)),
        },
    ),
    _archetype(
        "terra", "Terra", "Earth Core",
        "Draws power from the earth itself, with rock-solid defense.",
        (5, 8, 10, 5),
        {
            "lightPunch": (11, 5, 12, (0, -23, 40, 20)),
            "heavyPunch": (20, 15, 22, (0, -30, 55, 28)),
            "kick": (14, 8, 16, (0, -19, 44, 30)),
            "jumpPunch": (17, 10, 15, (0, -33, 48, 26)),
        },
    ),
    _archetype(
        "mystic", "Mystic", "Astral Plane",
        "A feline-human hybrid with mystical powers and incredible agility.",
        (8, 6, 7, 10),
        {
            "lightPunch": (8, 2, 8, (0, -18, 30, 12)),
            "heavyPunch": (13, 5, 11, (0, -24, 42, 18)),
            "kick": (10, 3, 8, (0, -14, 34, 22)),
            "jumpPunch": (12, 4, 10, (0, -26, 36, 16)),
        },
    ),
]

ROSTER: MappingProxyType[str, FighterArchetype] = MappingProxyType(
    {archetype.id: archetype for archetype in _ARCHETYPES}
)


def archetype_by_id(archetype_id: str) -> FighterArchetype:
    """Look up an archetype.

    Raises:
        NotFound: If the id is not in the roster.
    """
    try:
        return ROSTER[archetype_id]
    except KeyError:
        raise NotFound(f"Unknown fighter archetype: {archetype_id!r}") from None


def list_archetypes() -> list[FighterArchetype]:
    """All archetypes in select-screen order."""
    return list(ROSTER.values())


def missing_moves(archetype: FighterArchetype) -> list[str]:
    """Required moves the archetype does not define."""
    return [name for name in REQUIRED_MOVES if name not in archetype.moves]
