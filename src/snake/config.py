from dataclasses import dataclass
from typing import Optional

# ----- Window & grid -----
CANVAS_SIZE = 400
GRID_SIZE = 20
HUD_HEIGHT = 36

# ----- Colors -----
BG        = (45, 55, 72)
GRID_LINE = (74, 85, 104)
HEAD      = (72, 187, 120)
BODY      = (104, 211, 145)
EYE       = (255, 255, 255)
FOOD      = (229, 62, 62)
FOOD_SHINE = (252, 129, 129)
HUD_BG    = (26, 32, 44)
TEXT      = (220, 220, 230)

# ----- Directions (dx, dy) -----
UP, DOWN, LEFT, RIGHT = (0, -1), (0, 1), (-1, 0), (1, 0)
STILL = (0, 0)

# ----- Rules -----
FOOD_SCORE = 10
MIN_SPEED_FLOOR = 50       # ms, hard lower bound on the tick delay
SPEED_FLOOR_RATIO = 0.5    # floor is also at least half the base delay
SPEED_STEP_RATIO = 0.02    # each food shaves 2% of the base delay (>= 1ms)
SWIPE_MIN_DISTANCE = 30    # px

# Ordered: keys 1..4 pick these in turn
SPEED_PRESETS = {
    "slow": 200,
    "normal": 150,
    "fast": 100,
    "insane": 70,
}

# ----- Tunables -----
@dataclass
class Config:
    seed: Optional[int] = None
    canvas_size: int = CANVAS_SIZE
    grid_size: int = GRID_SIZE
    base_speed: int = SPEED_PRESETS["normal"]
    food_attempts: int = 100
    scores_path: Optional[str] = "snake_highscore.json"

    @property
    def tile_count(self) -> int:
        return self.canvas_size // self.grid_size


CFG = Config()


def speed_floor(base_speed: float) -> float:
    return max(base_speed * SPEED_FLOOR_RATIO, MIN_SPEED_FLOOR)


def speed_step(base_speed: float) -> float:
    return max(1, base_speed * SPEED_STEP_RATIO)


def preset_speed(name: str) -> int:
    try:
        return SPEED_PRESETS[name]
    except KeyError:
        raise ValueError(
            f"Unknown speed preset {name!r}; expected one of {sorted(SPEED_PRESETS)}"
        ) from None
