# controls.py
import logging
from typing import Optional, Tuple

import pygame  # type: ignore

from .config import UP, DOWN, LEFT, RIGHT, SPEED_PRESETS, SWIPE_MIN_DISTANCE
from .game import GameEngine, GameStatus

logger = logging.getLogger(__name__)

KEY_DIRECTIONS = {
    pygame.K_UP: UP,
    pygame.K_DOWN: DOWN,
    pygame.K_LEFT: LEFT,
    pygame.K_RIGHT: RIGHT,
    pygame.K_w: UP,
    pygame.K_s: DOWN,
    pygame.K_a: LEFT,
    pygame.K_d: RIGHT,
}

SPEED_KEYS = dict(zip((pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4), SPEED_PRESETS))


def resolve_swipe(dx: float, dy: float, min_distance: float = SWIPE_MIN_DISTANCE) -> Optional[Tuple[int, int]]:
    """Map a drag delta to a direction along its dominant axis (ties go vertical)."""
    if abs(dx) > abs(dy):
        if abs(dx) > min_distance:
            return RIGHT if dx > 0 else LEFT
    elif abs(dy) > min_distance:
        return DOWN if dy > 0 else UP
    return None


class InputController:
    """
    Translates pygame events into engine calls. Steering from keys and
    swipes alike goes through GameEngine.change_direction.
    """

    def __init__(self, engine: GameEngine, window_size: Tuple[int, int],
                 min_swipe: float = SWIPE_MIN_DISTANCE) -> None:
        self.engine = engine
        self.window_size = window_size
        self.min_swipe = min_swipe
        self._press: Optional[Tuple[float, float]] = None

    def handle_event(self, event) -> bool:
        """Apply one event. Return False to quit."""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            return self._on_key(event.key)

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._press = event.pos
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self._release(event.pos)
        elif event.type == pygame.FINGERDOWN:
            self._press = self._finger_pos(event)
        elif event.type == pygame.FINGERUP:
            self._release(self._finger_pos(event))
        return True

    def handle_events(self, events) -> bool:
        running = True
        for event in events:
            if not self.handle_event(event):
                running = False
        return running

    def _on_key(self, key: int) -> bool:
        if key == pygame.K_ESCAPE:
            return False

        engine = self.engine
        if key in KEY_DIRECTIONS:
            engine.change_direction(*KEY_DIRECTIONS[key])
        elif key == pygame.K_SPACE:
            engine.toggle_pause()
        elif key == pygame.K_RETURN:
            engine.start()
        elif key == pygame.K_r:
            engine.restart()
        elif key == pygame.K_BACKSPACE:
            engine.reset()
        elif key in SPEED_KEYS:
            engine.set_speed_preset(SPEED_KEYS[key])
        return True

    def _finger_pos(self, event) -> Tuple[float, float]:
        # Finger events carry coordinates normalized to [0, 1]
        w, h = self.window_size
        return event.x * w, event.y * h

    def _release(self, pos) -> None:
        if self._press is None:
            return
        sx, sy = self._press
        self._press = None
        cand = resolve_swipe(pos[0] - sx, pos[1] - sy, self.min_swipe)
        if cand is None:
            self.tap()
            return
        applied = self.engine.change_direction(*cand)
        logger.debug(f"Swipe {cand} applied={applied}")

    def tap(self) -> None:
        """Short press: start when idle, restart when over, else toggle pause."""
        engine = self.engine
        if engine.status is GameStatus.IDLE:
            engine.start()
        elif engine.status is GameStatus.OVER:
            engine.restart()
        else:
            engine.toggle_pause()
