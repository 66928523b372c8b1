# render.py
from typing import Tuple

import pygame  # type: ignore

from .config import (
    BG, GRID_LINE, HEAD, BODY, EYE, FOOD, FOOD_SHINE, HUD_BG, TEXT,
    HUD_HEIGHT,
)
from .game import GameStatus, Snapshot


def window_size(canvas_size: int) -> Tuple[int, int]:
    return canvas_size, canvas_size + HUD_HEIGHT


class Renderer:
    """Draws a Snapshot onto a surface: HUD strip on top, board below it."""

    def __init__(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        self.surface = surface
        self.font = font
        self.frames = 0

    def __call__(self, snap: Snapshot) -> None:
        self.draw(snap)

    def cell_rect(self, snap: Snapshot, gx: int, gy: int, inset: int = 0) -> pygame.Rect:
        g = snap.grid_size
        return pygame.Rect(
            gx * g + inset,
            HUD_HEIGHT + gy * g + inset,
            g - 2 * inset,
            g - 2 * inset,
        )

    def draw(self, snap: Snapshot) -> None:
        self.surface.fill(BG)
        self._draw_grid(snap)
        self._draw_snake(snap)
        self._draw_food(snap)
        self._draw_hud(snap)

        if snap.status is GameStatus.IDLE:
            self._draw_overlay("SNAKE", "Enter or tap to start, 1-4 for speed")
        elif snap.status is GameStatus.PAUSED:
            self._draw_overlay("PAUSED", "Space or tap to resume")
        elif snap.status is GameStatus.OVER:
            self._draw_overlay("GAME OVER", "R or tap to restart", f"Score: {snap.score}")
        self.frames += 1

    def _draw_grid(self, snap: Snapshot) -> None:
        g = snap.grid_size
        side = snap.tile_count * g
        for i in range(snap.tile_count + 1):
            pygame.draw.line(self.surface, GRID_LINE, (i * g, HUD_HEIGHT), (i * g, HUD_HEIGHT + side))
            pygame.draw.line(self.surface, GRID_LINE, (0, HUD_HEIGHT + i * g), (side, HUD_HEIGHT + i * g))

    def _draw_snake(self, snap: Snapshot) -> None:
        if not snap.snake:
            return
        for x, y in snap.snake[1:]:
            pygame.draw.rect(self.surface, BODY, self.cell_rect(snap, x, y, inset=2))

        hx, hy = snap.snake[0]
        head = self.cell_rect(snap, hx, hy, inset=1)
        pygame.draw.rect(self.surface, HEAD, head)
        # eyes
        left = self.cell_rect(snap, hx, hy)
        pygame.draw.rect(self.surface, EYE, pygame.Rect(left.x + 5, left.y + 5, 3, 3))
        pygame.draw.rect(self.surface, EYE, pygame.Rect(left.x + 12, left.y + 5, 3, 3))

    def _draw_food(self, snap: Snapshot) -> None:
        if snap.food is None:
            return
        rect = self.cell_rect(snap, *snap.food)
        radius = snap.grid_size // 2 - 2
        pygame.draw.circle(self.surface, FOOD, rect.center, radius)
        pygame.draw.circle(self.surface, FOOD_SHINE, (rect.centerx - 3, rect.centery - 3), 3)

    def _draw_hud(self, snap: Snapshot) -> None:
        width = self.surface.get_width()
        pygame.draw.rect(self.surface, HUD_BG, pygame.Rect(0, 0, width, HUD_HEIGHT))
        score = self.font.render(f"Score: {snap.score}", True, TEXT)
        best = self.font.render(f"Best: {snap.high_score}", True, TEXT)
        mid = HUD_HEIGHT // 2
        self.surface.blit(score, score.get_rect(midleft=(8, mid)))
        self.surface.blit(best, best.get_rect(midright=(width - 8, mid)))

    def _draw_overlay(self, title: str, hint: str, detail: str = "") -> None:
        w, h = self.surface.get_size()
        # Dim with translucent overlay
        overlay = pygame.Surface((w, h - HUD_HEIGHT), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 140))  # RGBA
        self.surface.blit(overlay, (0, HUD_HEIGHT))

        cy = HUD_HEIGHT + (h - HUD_HEIGHT) // 2
        lines = [(title, -16), (hint, 16)]
        if detail:
            lines.append((detail, 44))
        for text, offset in lines:
            img = self.font.render(text, True, (240, 240, 250))
            self.surface.blit(img, img.get_rect(center=(w // 2, cy + offset)))
