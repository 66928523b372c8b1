import pygame
import pytest

from src.snake.config import UP, DOWN, LEFT, RIGHT
from src.snake.controls import InputController, resolve_swipe
from src.snake.game import GameStatus


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


def mouse(kind, pos):
    return pygame.event.Event(kind, pos=pos, button=1)


@pytest.fixture
def controls(engine):
    return InputController(engine, window_size=(400, 436))


@pytest.mark.parametrize(
    "dx, dy, expected",
    [
        (40, 5, RIGHT),
        (-40, 5, LEFT),
        (5, 40, DOWN),
        (5, -40, UP),
        (30, 0, None),    # must exceed the threshold
        (31, 0, RIGHT),
        (20, 10, None),
        (40, 40, DOWN),   # ties resolve vertically
    ],
)
def test_resolve_swipe(dx, dy, expected):
    assert resolve_swipe(dx, dy) == expected


def test_arrow_and_wasd_keys_steer(controls, engine):
    engine.start()
    controls.handle_event(key(pygame.K_UP))
    assert engine.direction == UP
    controls.handle_event(key(pygame.K_a))
    assert engine.direction == LEFT


def test_reversing_key_is_ignored(controls, engine):
    engine.start()
    controls.handle_event(key(pygame.K_LEFT))
    assert engine.direction == RIGHT


def test_control_keys(controls, engine):
    controls.handle_event(key(pygame.K_RETURN))
    assert engine.status is GameStatus.RUNNING

    controls.handle_event(key(pygame.K_SPACE))
    assert engine.status is GameStatus.PAUSED
    controls.handle_event(key(pygame.K_SPACE))
    assert engine.status is GameStatus.RUNNING

    engine.tick()
    controls.handle_event(key(pygame.K_BACKSPACE))
    assert engine.status is GameStatus.IDLE
    assert engine.snake == [(10, 10), (9, 10), (8, 10)]

    controls.handle_event(key(pygame.K_r))
    assert engine.status is GameStatus.RUNNING


def test_speed_keys_pick_presets(controls, engine):
    controls.handle_event(key(pygame.K_1))
    assert engine.base_speed == 200
    controls.handle_event(key(pygame.K_4))
    assert engine.base_speed == 70
    assert engine.speed == 70


def test_quit_and_escape_stop_the_loop(controls):
    assert not controls.handle_event(pygame.event.Event(pygame.QUIT))
    assert not controls.handle_event(key(pygame.K_ESCAPE))
    assert controls.handle_event(key(pygame.K_UP))
    assert not controls.handle_events([key(pygame.K_UP), pygame.event.Event(pygame.QUIT)])


def test_mouse_swipe_steers_through_engine(controls, engine):
    engine.start()
    controls.handle_event(mouse(pygame.MOUSEBUTTONDOWN, (200, 200)))
    controls.handle_event(mouse(pygame.MOUSEBUTTONUP, (205, 150)))
    assert engine.direction == UP


def test_swipe_cannot_reverse(controls, engine):
    engine.start()
    controls.handle_event(mouse(pygame.MOUSEBUTTONDOWN, (200, 200)))
    controls.handle_event(mouse(pygame.MOUSEBUTTONUP, (100, 200)))
    assert engine.direction == RIGHT


def test_short_drag_is_a_tap_not_a_turn(controls, engine):
    engine.start()
    controls.handle_event(mouse(pygame.MOUSEBUTTONDOWN, (200, 200)))
    controls.handle_event(mouse(pygame.MOUSEBUTTONUP, (210, 220)))
    assert engine.direction == RIGHT
    assert engine.status is GameStatus.PAUSED


def test_swipe_ignored_while_paused(controls, engine):
    engine.start()
    engine.toggle_pause()
    controls.handle_event(mouse(pygame.MOUSEBUTTONDOWN, (200, 200)))
    controls.handle_event(mouse(pygame.MOUSEBUTTONUP, (200, 300)))
    assert engine.direction == RIGHT


def test_finger_swipe_uses_window_size(controls, engine):
    engine.start()
    controls.handle_event(pygame.event.Event(pygame.FINGERDOWN, x=0.5, y=0.2, finger_id=0, touch_id=0))
    controls.handle_event(pygame.event.Event(pygame.FINGERUP, x=0.5, y=0.4, finger_id=0, touch_id=0))
    assert engine.direction == DOWN


def test_release_without_press_does_nothing(controls, engine):
    engine.start()
    controls.handle_event(mouse(pygame.MOUSEBUTTONUP, (200, 400)))
    assert engine.direction == RIGHT


def finger(kind, x, y):
    return pygame.event.Event(kind, x=x, y=y, finger_id=0, touch_id=0)


def tap(controls, x=0.5, y=0.5):
    controls.handle_event(finger(pygame.FINGERDOWN, x, y))
    controls.handle_event(finger(pygame.FINGERUP, x, y))


def test_touch_only_game(controls, engine):
    tap(controls)
    assert engine.status is GameStatus.RUNNING

    tap(controls)
    assert engine.status is GameStatus.PAUSED
    tap(controls)
    assert engine.status is GameStatus.RUNNING

    engine.snake = [(19, 10), (18, 10), (17, 10)]
    engine.tick()
    assert engine.status is GameStatus.OVER

    tap(controls)
    assert engine.status is GameStatus.RUNNING
    assert engine.snake == [(10, 10), (9, 10), (8, 10)]
    assert engine.score == 0


def test_tap_at_threshold_still_counts_as_tap(controls, engine):
    controls.handle_event(mouse(pygame.MOUSEBUTTONDOWN, (200, 200)))
    controls.handle_event(mouse(pygame.MOUSEBUTTONUP, (230, 200)))
    assert engine.status is GameStatus.RUNNING
    assert engine.direction == RIGHT


def test_window_size_is_required(engine):
    with pytest.raises(TypeError):
        InputController(engine)
