"""
view.py — View layer.

Draws one frame from a model Snapshot plus the driver's screen state.
Reads cells only; nothing here feeds back into the model.

Layout:
  - HUD strip (score) across the top, HUD_H pixels tall
  - Play field below it: each cell is a CELL x CELL square drawn with a
    1-pixel gap (side CELL - 1)
  - Overlays for splash, paused and game over

Public API:
    GameView(screen)             — bind to a pygame surface
    view.render(snapshot, state) — draw the current frame
"""

import logging

import pygame

from .config import (
    CELL, HUD_H,
    BG, SNAKE_COL, DEAD_COL, FOOD_COL, UI_COL, TITLE_COL, HUD_BG, OVERLAY_BG,
    FONT_NAME, FONT_SIZES,
    STATE_SPLASH, STATE_PAUSED, STATE_OVER,
)
from .model import Cell, Snapshot

logger = logging.getLogger(__name__)


def cell_rect(cell: Cell, cell_size: int = CELL, offset: tuple[int, int] = (0, 0)) -> pygame.Rect:
    """Screen rectangle for a grid cell."""
    x, y = cell
    return pygame.Rect(
        offset[0] + x * cell_size,
        offset[1] + y * cell_size,
        cell_size - 1,
        cell_size - 1,
    )


# ─────────────────────────── GameView ────────────────────────────
class GameView:
    """Renders the complete game frame from a Snapshot."""

    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        w, h = screen.get_size()
        self.cols = w // CELL
        self.rows = (h - HUD_H) // CELL
        self._init_fonts()

    # ── Main entry ───────────────────────────────────────────────
    def render(self, snap: Snapshot, state: str) -> None:
        self.screen.fill(BG)

        if state != STATE_SPLASH:
            self._draw_cells([snap.food], FOOD_COL)
            self._draw_cells(snap.segments, SNAKE_COL if snap.alive else DEAD_COL)

        self._draw_hud(snap, state)

        if state == STATE_SPLASH:
            self._draw_splash()
        elif state == STATE_PAUSED:
            self._draw_overlay("PAUSED", TITLE_COL, ["P / SPACE  TO RESUME"])
        elif state == STATE_OVER and not snap.alive:
            self._draw_game_over(snap)

        pygame.display.flip()

    # ── Field ────────────────────────────────────────────────────
    def _draw_cells(self, cells, color: tuple) -> None:
        for x, y in cells:
            # A dead snake's last head may sit just outside the field.
            if not (0 <= x < self.cols and 0 <= y < self.rows):
                continue
            pygame.draw.rect(self.screen, color, cell_rect((x, y), offset=(0, HUD_H)))

    # ── HUD ──────────────────────────────────────────────────────
    def _draw_hud(self, snap: Snapshot, state: str) -> None:
        w = self.screen.get_width()
        pygame.draw.rect(self.screen, HUD_BG, (0, 0, w, HUD_H))
        if state == STATE_SPLASH:
            return
        score = self.font_small.render(f"SCORE {snap.score}", True, UI_COL)
        self.screen.blit(score, score.get_rect(midleft=(8, HUD_H // 2)))
        length = self.font_small.render(f"LENGTH {len(snap.segments)}", True, UI_COL)
        self.screen.blit(length, length.get_rect(midright=(w - 8, HUD_H // 2)))

    # ── Overlays ─────────────────────────────────────────────────
    def _draw_splash(self) -> None:
        self._draw_overlay("WURM", TITLE_COL, [
            "ARROWS / WASD  MOVE",
            "P / SPACE  PAUSE",
            "ESC  QUIT",
            "",
            "PRESS ANY KEY TO START",
        ])

    def _draw_game_over(self, snap: Snapshot) -> None:
        title = "BOARD FILLED" if snap.filled else "GAME OVER"
        self._draw_overlay(title, FOOD_COL, [
            f"SCORE {snap.score}",
            "",
            "R / ENTER  PLAY AGAIN",
            "ESC  QUIT",
        ])

    def _draw_overlay(self, title: str, color: tuple, lines: list[str]) -> None:
        w, h = self.screen.get_size()
        shade = pygame.Surface((w, h - HUD_H), pygame.SRCALPHA)
        shade.fill(OVERLAY_BG)
        self.screen.blit(shade, (0, HUD_H))

        cy = HUD_H + (h - HUD_H) // 3
        surf = self.font_title.render(title, True, color)
        self.screen.blit(surf, surf.get_rect(center=(w // 2, cy)))
        cy += surf.get_height() + 12
        for line in lines:
            if line:
                txt = self.font_med.render(line, True, UI_COL)
                self.screen.blit(txt, txt.get_rect(center=(w // 2, cy)))
            cy += self.font_med.get_linesize() + 4

    # ── Font init ─────────────────────────────────────────────────
    def _init_fonts(self) -> None:
        for key, size in FONT_SIZES.items():
            attr = f"font_{key}"
            try:
                setattr(self, attr, pygame.font.SysFont(FONT_NAME, size, bold=(key == "title")))
            except (pygame.error, OSError) as exc:
                logger.warning("font %r unavailable (%s), using default", FONT_NAME, exc)
                setattr(self, attr, pygame.font.Font(None, size))
