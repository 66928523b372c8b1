# game.py
from __future__ import annotations

import enum
import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import numpy as np  # type: ignore

from .config import (
    CFG, Config,
    UP, DOWN, LEFT, RIGHT, STILL,
    FOOD_SCORE,
    preset_speed, speed_floor, speed_step,
)
from .storage import HighScoreStore

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
Listener = Callable[["Snapshot"], None]

MOVES = (UP, DOWN, LEFT, RIGHT)

# occupancy() cell codes
EMPTY, BODY_CELL, HEAD_CELL, FOOD_CELL = 0, 1, 2, 3


class GameStatus(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


# ---------- Helpers ----------
def initial_snake(tile_count: int) -> List[Position]:
    c = tile_count // 2
    return [(c, c), (c - 1, c), (c - 2, c)]


def occupancy_grid(snake, food: Optional[Position], tile_count: int) -> np.ndarray:
    """
    Grid indexed [y, x] with EMPTY / BODY_CELL / HEAD_CELL / FOOD_CELL codes.
    """
    grid = np.zeros((tile_count, tile_count), dtype=np.uint8)
    for x, y in snake[1:]:
        grid[y, x] = BODY_CELL
    if snake:
        hx, hy = snake[0]
        grid[hy, hx] = HEAD_CELL
    if food is not None:
        grid[food[1], food[0]] = FOOD_CELL
    return grid


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


# ---------- State ----------
@dataclass(frozen=True)
class Snapshot:
    snake: Tuple[Position, ...]    # head at index 0
    food: Optional[Position]
    grid_size: int                 # pixels per cell
    tile_count: int                # cells per side
    score: int
    high_score: int
    status: GameStatus
    speed: float                   # current tick delay (ms)
    direction: Tuple[int, int]

    def occupancy(self) -> np.ndarray:
        return occupancy_grid(self.snake, self.food, self.tile_count)


class TickTimer:
    """Holds at most one armed deadline; re-arming replaces the old one."""

    def __init__(self) -> None:
        self.deadline: Optional[float] = None

    @property
    def armed(self) -> bool:
        return self.deadline is not None

    def arm(self, now_ms: float, delay_ms: float) -> None:
        self.deadline = now_ms + delay_ms

    def cancel(self) -> None:
        self.deadline = None

    def due(self, now_ms: float) -> bool:
        return self.deadline is not None and now_ms >= self.deadline


# ---------- Engine ----------
class GameEngine:
    """
    Owns the whole game: board, score, speed and the IDLE/RUNNING/PAUSED/OVER
    state machine.

    The host loop pumps `update(now_ms)`; a tick fires whenever the armed
    deadline has passed and the next one is armed with the speed read fresh
    after the tick. Input adapters only talk to `change_direction` and the
    control methods; renderers subscribe with `add_listener` and receive a
    read-only `Snapshot`.
    """

    def __init__(
        self,
        cfg: Config = CFG,
        store: Optional[HighScoreStore] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        if cfg.tile_count < 4:
            raise ValueError(f"Grid of {cfg.tile_count} tiles cannot fit the initial snake")
        self.cfg = cfg
        self.grid_size = cfg.grid_size
        self.tile_count = cfg.tile_count
        self.rng = rng if rng is not None else random.Random(cfg.seed)
        self.clock = clock if clock is not None else _monotonic_ms
        self.store = store if store is not None else HighScoreStore(None)
        self.high_score = self.store.load()
        self.timer = TickTimer()
        self._listeners: List[Listener] = []

        self.base_speed = _check_speed(cfg.base_speed)
        self.status = GameStatus.IDLE
        self.snake: List[Position] = []
        self.food: Optional[Position] = None
        self.direction: Tuple[int, int] = STILL
        self.score = 0
        self.speed = float(self.base_speed)
        self._init_board()

    def _init_board(self) -> None:
        self.snake = initial_snake(self.tile_count)
        self.direction = STILL
        self.score = 0
        self.speed = float(self.base_speed)
        self.generate_food()

    # ----- Observers -----
    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            snake=tuple(self.snake),
            food=self.food,
            grid_size=self.grid_size,
            tile_count=self.tile_count,
            score=self.score,
            high_score=self.high_score,
            status=self.status,
            speed=self.speed,
            direction=self.direction,
        )

    def _notify(self) -> None:
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)

    # ----- Controls -----
    def start(self) -> None:
        if self.status not in (GameStatus.IDLE, GameStatus.OVER):
            return
        self.status = GameStatus.RUNNING
        self.direction = RIGHT
        self.timer.arm(self.clock(), self.speed)
        logger.info(f"Game started (speed={self.speed:.0f}ms)")
        self._notify()

    def toggle_pause(self) -> None:
        if self.status is GameStatus.RUNNING:
            self.status = GameStatus.PAUSED
            self.timer.cancel()
            logger.info("Game paused")
        elif self.status is GameStatus.PAUSED:
            self.status = GameStatus.RUNNING
            # Fresh full delay, not whatever was left before pausing
            self.timer.arm(self.clock(), self.speed)
            logger.info("Game resumed")
        else:
            return
        self._notify()

    def reset(self) -> None:
        self.timer.cancel()
        self.status = GameStatus.IDLE
        self._init_board()
        logger.info("Game reset")
        self._notify()

    def restart(self) -> None:
        self.reset()
        self.start()

    def set_base_speed(self, ms: int) -> None:
        """Switch the base delay; the current delay follows immediately."""
        self.base_speed = _check_speed(ms)
        self.speed = float(self.base_speed)
        logger.info(f"Base speed set to {self.base_speed}ms")

    def set_speed_preset(self, name: str) -> None:
        self.set_base_speed(preset_speed(name))

    def change_direction(self, dx: int, dy: int) -> bool:
        """
        The only way to steer. Ignored unless RUNNING; a request that would
        reverse along the current axis is dropped. Returns True if applied.
        """
        if self.status is not GameStatus.RUNNING:
            return False
        if (dx, dy) not in MOVES:
            return False

        # Checked against the current heading, not the one last ticked: two quick
        # turns between ticks can point the head back into the neck.
        cur_dx, cur_dy = self.direction
        if dx != 0 and cur_dx != -dx:
            self.direction = (dx, 0)
            return True
        if dy != 0 and cur_dy != -dy:
            self.direction = (0, dy)
            return True
        return False

    # ----- Update -----
    def update(self, now_ms: Optional[float] = None) -> bool:
        """Fire the pending tick if its deadline passed. Returns True if one fired."""
        now = self.clock() if now_ms is None else now_ms
        if not self.timer.due(now):
            return False

        self.timer.cancel()
        self.tick()
        if self.status is GameStatus.RUNNING:
            self.timer.arm(now, self.speed)
        return True

    def tick(self) -> GameStatus:
        """Advance the snake one cell. Collisions end the game."""
        if self.status is not GameStatus.RUNNING:
            return self.status

        hx, hy = self.snake[0]
        dx, dy = self.direction
        new_head = (hx + dx, hy + dy)

        # Wall first, then body (old tail included)
        if not self.in_bounds(new_head):
            self._end_game("wall")
        elif new_head in self.snake:
            self._end_game("self")
        else:
            self.snake.insert(0, new_head)
            if new_head == self.food:
                self._eat()
            else:
                self.snake.pop()

        self._notify()
        return self.status

    def in_bounds(self, pos: Position) -> bool:
        x, y = pos
        return 0 <= x < self.tile_count and 0 <= y < self.tile_count

    def _eat(self) -> None:
        self.score += FOOD_SCORE
        self.generate_food()
        self.speed = max(
            speed_floor(self.base_speed),
            self.speed - speed_step(self.base_speed),
        )
        logger.debug(f"Ate food: score={self.score} length={len(self.snake)} speed={self.speed:.1f}ms")

    def _end_game(self, reason: str) -> None:
        self.status = GameStatus.OVER
        self.timer.cancel()
        logger.info(f"Game over ({reason}): score={self.score}")
        if self.score > self.high_score:
            self.high_score = self.score
            self.store.save(self.high_score)
            logger.info(f"New high score: {self.high_score}")

    # ----- Food -----
    def generate_food(self) -> Optional[Position]:
        """
        Place food on a free cell: uniform random draws first, then a
        row-major scan of the free cells if every draw hit the snake.
        Food is None only when the snake covers the whole board.
        """
        occupied = set(self.snake)
        n = self.tile_count
        for _ in range(self.cfg.food_attempts):
            cell = (self.rng.randrange(n), self.rng.randrange(n))
            if cell not in occupied:
                self.food = cell
                logger.debug(f"Food placed at {cell}")
                return cell

        free = np.argwhere(occupancy_grid(self.snake, None, n) == EMPTY)
        if len(free) == 0:
            logger.warning("No free cell left for food")
            self.food = None
            return None

        fy, fx = free[0]
        self.food = (int(fx), int(fy))
        logger.debug(f"Food placed at {self.food} by scan")
        return self.food


def _check_speed(ms) -> int:
    if isinstance(ms, bool) or not isinstance(ms, int) or ms <= 0:
        raise ValueError(f"Speed must be a positive number of milliseconds, got {ms!r}")
    return ms
