"""Fighter archetype and move data models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from config import LOW_ATTACK_OFFSET_Y


class AttackHeight(str, Enum):
    """Which block stance defeats an attack."""
    HIGH = "high"
    LOW = "low"


class Hitbox(BaseModel):
    """Attack rectangle relative to the fighter origin (feet centre)."""
    model_config = ConfigDict(frozen=True)

    offset_x: int = 0
    offset_y: int                   # Negative is upward
    width: int = Field(gt=0)
    height: int = Field(gt=0)


class MoveDefinition(BaseModel):
    """One attack a fighter can perform."""
    model_config = ConfigDict(frozen=True)

    name: str                       # e.g., "lightPunch"
    damage: int = Field(ge=0)
    startup_frames: int = Field(ge=1)
    recovery_frames: int = Field(ge=1)
    hitbox: Hitbox
    category: AttackHeight | None = None  # Explicit tag overrides geometry

    @property
    def attack_height(self) -> AttackHeight:
        """Effective class: low if tagged low or the hitbox sits near the ground."""
        if self.category == AttackHeight.LOW or self.hitbox.offset_y > LOW_ATTACK_OFFSET_Y:
            return AttackHeight.LOW
        return AttackHeight.HIGH


class FighterStats(BaseModel):
    """Flavour stats shown on the select screen. Not used mechanically."""
    model_config = ConfigDict(frozen=True)

    speed: int = Field(ge=1, le=10)
    power: int = Field(ge=1, le=10)
    defense: int = Field(ge=1, le=10)
    technique: int = Field(ge=1, le=10)


class FighterArchetype(BaseModel):
    """Immutable template a FighterInstance is built from."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    origin: str = ""
    description: str = ""
    stats: FighterStats
    moves: dict[str, MoveDefinition]
