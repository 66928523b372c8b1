# main.py
import argparse
import logging
from dataclasses import replace

import pygame  # type: ignore

from .config import CFG, SPEED_PRESETS, preset_speed
from .controls import InputController
from .game import GameEngine
from .render import Renderer, window_size
from .storage import HighScoreStore


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Snake")
    parser.add_argument(
        "--speed",
        type=str,
        default="normal",
        choices=list(SPEED_PRESETS),
        help="starting speed preset (keys 1-4 switch in game)",
    )
    parser.add_argument("--seed", type=int, default=CFG.seed, help="food placement seed")
    parser.add_argument(
        "--scores",
        type=str,
        default=CFG.scores_path,
        help="JSON file holding the high score",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = replace(CFG, seed=args.seed, base_speed=preset_speed(args.speed), scores_path=args.scores)

    pygame.init()
    font = pygame.font.SysFont(None, 24)
    size = window_size(cfg.canvas_size)
    screen = pygame.display.set_mode(size)
    pygame.display.set_caption("Snake")
    clock = pygame.time.Clock()

    engine = GameEngine(cfg, store=HighScoreStore(cfg.scores_path), clock=pygame.time.get_ticks)
    renderer = Renderer(screen, font)
    engine.add_listener(renderer)
    controls = InputController(engine, window_size=size)

    renderer.draw(engine.snapshot())
    running = True

    while running:
        # 1) input
        running = controls.handle_events(pygame.event.get())
        if not running:
            break

        # 2) update (tick fires only when its deadline passed)
        engine.update(pygame.time.get_ticks())

        # 3) present whatever the listeners drew
        pygame.display.flip()
        clock.tick(60)

    pygame.quit()
    print(f"High score: {engine.high_score}")


if __name__ == "__main__":
    main()
