"""Per-match fighter state models."""

from enum import Enum

from pydantic import BaseModel

from config import FIGHTER_HEIGHT, FIGHTER_WIDTH, MAX_HEALTH


class CombatState(str, Enum):
    """Primary state of a fighter. Timers are kept as separate counters."""
    IDLE = "idle"
    WALKING = "walking"
    JUMPING = "jumping"
    ATTACKING = "attacking"
    BLOCKING = "blocking"
    HITSTUN = "hitstun"


class BlockStance(str, Enum):
    """Which attacks a blocking fighter nullifies."""
    NONE = "none"
    HIGH = "high"
    LOW = "low"
    BACK = "back"                   # Walking away blocks everything


class AttackInProgress(BaseModel):
    """An attack the fighter is committed to."""
    move_name: str
    elapsed_frames: int = 0
    startup_frames: int
    recovery_frames: int
    connected: bool = False         # Set once the attack hits or is blocked

    @property
    def total_frames(self) -> int:
        return self.startup_frames + self.recovery_frames

    @property
    def is_active(self) -> bool:
        """Hitbox is live from the end of startup until the attack clears."""
        return self.startup_frames <= self.elapsed_frames < self.total_frames


class FighterInstance(BaseModel):
    """One combatant for the duration of a match."""
    player: int                     # 1 or 2
    archetype_id: str
    name: str
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    facing: int = 1                 # 1 = right, -1 = left
    on_ground: bool = True
    width: int = FIGHTER_WIDTH
    height: int = FIGHTER_HEIGHT
    health: int = MAX_HEALTH
    max_health: int = MAX_HEALTH
    state: CombatState = CombatState.IDLE
    attack: AttackInProgress | None = None
    hitstun_frames: int = 0
    invincibility_frames: int = 0
    block_stance: BlockStance = BlockStance.NONE
    animation: str = "idle"         # Display label for the renderer
    combo_count: int = 0

    @property
    def is_blocking(self) -> bool:
        return self.block_stance != BlockStance.NONE

    @property
    def is_attacking(self) -> bool:
        return self.attack is not None

    @property
    def can_act(self) -> bool:
        return self.hitstun_frames == 0 and self.attack is None

    def body_rect(self) -> tuple[float, float, float, float]:
        """Hurtbox as (left, top, width, height), standing on (x, y)."""
        return (self.x - self.width / 2, self.y - self.height, self.width, self.height)
