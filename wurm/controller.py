"""
controller.py — Controller layer (the driver).

Responsibilities:
  - Own the pygame event loop.
  - Poll the keyboard once per tick and turn held keys into a direction.
  - Drive the fixed-timestep clock: tick the model at TICK_DELAY,
    independent of the frame rate.
  - Own the screen state (splash, playing, paused, game over).
    Pausing is purely a driver concern; the model never sees it.
  - Know nothing about rendering details (that's the View's job).
  - Know nothing about game rules (that's the Model's job).

The controller is the only layer that imports pygame directly for events.
"""

import logging
import sys

import pygame

from .config import (
    CELL, HUD_H, FPS, CAPTION, TICK_DELAY, GRID_W, GRID_H,
    STATE_SPLASH, STATE_PLAYING, STATE_PAUSED, STATE_OVER,
)
from .model import Direction, GameModel
from .view import GameView

logger = logging.getLogger(__name__)

KEY_DIRECTIONS = {
    pygame.K_UP:    Direction.UP,
    pygame.K_w:     Direction.UP,
    pygame.K_DOWN:  Direction.DOWN,
    pygame.K_s:     Direction.DOWN,
    pygame.K_LEFT:  Direction.LEFT,
    pygame.K_a:     Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d:     Direction.RIGHT,
}


def directions_from_keys(keys) -> set[Direction]:
    """Directions whose key is held in a pygame.key.get_pressed() result."""
    return {d for key, d in KEY_DIRECTIONS.items() if keys[key]}


class TickTimer:
    """
    Fixed-step accumulator.

    advance() reports at most one due tick per call; whole steps missed
    during a stall are dropped and only the fractional remainder is kept.
    """

    def __init__(self, delay: float = TICK_DELAY):
        if delay <= 0:
            raise ValueError("tick delay must be positive")
        self.delay = delay
        self.elapsed: float = 0.0

    def advance(self, dt: float) -> bool:
        self.elapsed += dt
        if self.elapsed < self.delay:
            return False
        self.elapsed -= self.delay
        if self.elapsed >= self.delay:
            self.elapsed %= self.delay
        return True

    def reset(self) -> None:
        self.elapsed = 0.0


class GameController:
    """
    Owns the main loop.
    Glues Model <-> View without them knowing about each other.
    """

    def __init__(self, width: int = GRID_W, height: int = GRID_H):
        pygame.init()
        self.screen = pygame.display.set_mode((width * CELL, height * CELL + HUD_H))
        pygame.display.set_caption(CAPTION)
        self.clock  = pygame.time.Clock()
        self.timer  = TickTimer()
        self.state  = STATE_SPLASH
        self._grid_size = (width, height)
        self.model  = GameModel(*self._grid_size)
        self.view   = GameView(self.screen)

    # ── Public entry point ────────────────────────────────────────
    def run(self) -> None:
        """Start and run the game loop until the player quits."""
        while True:
            dt = self.clock.tick(FPS) / 1000.0
            self._handle_events()
            self._advance(dt)
            self.view.render(self.model.snapshot(), self.state)

    # ── Simulation ────────────────────────────────────────────────
    def _advance(self, dt: float) -> None:
        """Feed frame time to the tick timer. Only the playing state ticks."""
        if self.state != STATE_PLAYING:
            return
        if self.timer.advance(dt):
            self._step()

    def _step(self) -> None:
        pressed = directions_from_keys(pygame.key.get_pressed())
        self.model.tick(self.model.steer(pressed))
        if not self.model.alive:
            self.state = STATE_OVER
            logger.info("game over: score %d%s", self.model.score,
                        " (board filled)" if self.model.filled else "")

    def _new_game(self) -> None:
        self.model = GameModel(*self._grid_size)
        self.timer.reset()
        self.state = STATE_PLAYING
        logger.info("new game on a %dx%d grid", *self._grid_size)

    # ── Event dispatch ────────────────────────────────────────────
    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit()
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event.key)

    def _handle_keydown(self, key: int) -> None:
        # Esc / Q quit from any state
        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._quit()

        if self.state == STATE_SPLASH:
            self._new_game()
        elif self.state == STATE_PLAYING:
            if key in (pygame.K_p, pygame.K_SPACE):
                self.state = STATE_PAUSED
                logger.info("paused")
        elif self.state == STATE_PAUSED:
            if key in (pygame.K_p, pygame.K_SPACE):
                self.timer.reset()
                self.state = STATE_PLAYING
                logger.info("resumed")
        elif self.state == STATE_OVER:
            if key in (pygame.K_r, pygame.K_RETURN):
                self._new_game()

    # ── Utilities ─────────────────────────────────────────────────
    @staticmethod
    def _quit() -> None:
        pygame.quit()
        sys.exit()
