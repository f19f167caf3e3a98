"""Engine-wide configuration constants for Arena Fighter."""

import os

# Stage geometry
GROUND_Y = 450              # y of the floor; fighters stand with their feet here
STAGE_MIN_X = 50
STAGE_MAX_X = 1150
SPAWN_X = {1: 200, 2: 1000}
SPAWN_FACING = {1: 1, 2: -1}
FIGHTER_WIDTH = 60
FIGHTER_HEIGHT = 100

# Physics (per frame)
GRAVITY = 0.8
FRICTION = 0.85             # x-velocity decay when not walking
WALK_SPEED = 3
JUMP_VELOCITY = -15

# Combat
MAX_HEALTH = 100
HITSTUN_FRAMES = 15
BLOCK_PUSHBACK = 2
BLOCK_RECOVERY_PENALTY = 3  # extra recovery frames for a blocked attacker
AUTO_BLOCK_RANGE = 100
LOW_ATTACK_OFFSET_Y = -10   # hitboxes below this offset count as low

# Match
MAX_ROUNDS = 3
ROUND_TIME_SECONDS = 99
SUDDEN_DEATH_SECONDS = 30
ROUND_TIMER_INTERVAL = 1.0  # seconds between round timer ticks

# CPU opponent
CPU_DECISION_MIN_MS = 500
CPU_DECISION_JITTER_MS = 1000

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_DIR = os.environ.get("LOG_DIR")  # unset = console only
