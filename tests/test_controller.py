"""
Tests for wurm/controller.py - key mapping, the fixed-step timer and the
screen-state driver. The driver tests run on SDL's dummy video driver.
"""

import logging
from collections import defaultdict

import pygame
import pytest

from wurm.config import STATE_OVER, STATE_PAUSED, STATE_PLAYING, STATE_SPLASH
from wurm.controller import GameController, TickTimer, directions_from_keys
from wurm.model import Direction


def held(*keys):
    state = defaultdict(bool)
    for key in keys:
        state[key] = True
    return state


class TestDirectionsFromKeys:
    """Tests for translating held keys into directions."""

    def test_nothing_held(self):
        assert directions_from_keys(held()) == set()

    def test_arrows(self):
        keys = held(pygame.K_UP, pygame.K_LEFT)
        assert directions_from_keys(keys) == {Direction.UP, Direction.LEFT}

    def test_wasd_matches_arrows(self):
        assert directions_from_keys(held(pygame.K_s)) == {Direction.DOWN}
        assert directions_from_keys(held(pygame.K_d)) == {Direction.RIGHT}

    def test_duplicate_bindings_collapse(self):
        keys = held(pygame.K_UP, pygame.K_w)
        assert directions_from_keys(keys) == {Direction.UP}

    def test_other_keys_ignored(self):
        assert directions_from_keys(held(pygame.K_p, pygame.K_SPACE)) == set()


class TestTickTimer:
    """Tests for the fixed-step accumulator."""

    def test_waits_for_full_step(self):
        timer = TickTimer(0.1)
        assert timer.advance(0.05) is False
        assert timer.advance(0.04) is False
        assert timer.advance(0.02) is True
        assert timer.elapsed == pytest.approx(0.01)

    def test_one_tick_per_frame_after_stall(self):
        timer = TickTimer(0.1)
        assert timer.advance(0.35) is True
        assert timer.elapsed == pytest.approx(0.05)
        assert timer.advance(0.0) is False

    def test_frame_rate_independent(self):
        timer = TickTimer(0.125)
        # 32 frames per second for one second; both values are exact in binary
        ticks = sum(timer.advance(1 / 32) for _ in range(32))
        assert ticks == 8
        assert timer.elapsed == 0.0

    def test_reset(self):
        timer = TickTimer(0.1)
        timer.advance(0.09)
        timer.reset()
        assert timer.advance(0.05) is False

    def test_rejects_non_positive_delay(self):
        with pytest.raises(ValueError):
            TickTimer(0)


@pytest.fixture
def controller(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    ctl = GameController(5, 5)
    yield ctl
    pygame.quit()


def play_until_over(ctl, limit=20):
    for _ in range(limit):
        if ctl.state != STATE_PLAYING:
            break
        ctl._step()


class TestGameController:
    """Tests for screen states and tick gating in the driver."""

    def test_splash_does_not_tick(self, controller):
        assert controller.state == STATE_SPLASH
        controller._advance(0.5)
        assert controller.timer.elapsed == 0.0
        assert controller.model.ticks == 0

    def test_any_key_leaves_splash(self, controller):
        controller._handle_keydown(pygame.K_x)
        assert controller.state == STATE_PLAYING
        assert controller.model.alive
        assert controller.model.ticks == 0

    def test_playing_ticks_on_schedule(self, controller):
        controller._handle_keydown(pygame.K_x)
        controller._advance(0.05)
        assert controller.model.ticks == 0
        assert controller.timer.elapsed == pytest.approx(0.05)
        controller._advance(0.06)
        assert controller.model.ticks == 1

    def test_pause_freezes_timer_and_model(self, controller):
        controller._handle_keydown(pygame.K_x)
        controller._advance(0.05)
        controller._handle_keydown(pygame.K_p)
        assert controller.state == STATE_PAUSED

        snap = controller.model.snapshot()
        controller._advance(1.0)
        assert controller.timer.elapsed == pytest.approx(0.05)
        assert controller.model.ticks == 0
        assert controller.model.snapshot() == snap

    def test_resume_resets_timer(self, controller):
        controller._handle_keydown(pygame.K_x)
        controller._advance(0.05)
        controller._handle_keydown(pygame.K_p)
        controller._handle_keydown(pygame.K_SPACE)
        assert controller.state == STATE_PLAYING
        assert controller.timer.elapsed == 0.0

    def test_death_moves_to_game_over(self, controller):
        controller._handle_keydown(pygame.K_x)
        play_until_over(controller)
        assert controller.state == STATE_OVER
        assert not controller.model.alive

    def test_game_over_does_not_tick(self, controller):
        controller._handle_keydown(pygame.K_x)
        play_until_over(controller)
        ticks = controller.model.ticks
        controller.timer.reset()
        controller._advance(1.0)
        assert controller.model.ticks == ticks
        assert controller.timer.elapsed == 0.0

    def test_pause_key_ignored_on_game_over(self, controller):
        controller._handle_keydown(pygame.K_x)
        play_until_over(controller)
        controller._handle_keydown(pygame.K_p)
        assert controller.state == STATE_OVER

    @pytest.mark.parametrize("key", [pygame.K_r, pygame.K_RETURN])
    def test_restart_builds_fresh_model(self, controller, key):
        controller._handle_keydown(pygame.K_x)
        play_until_over(controller)
        dead = controller.model
        controller._handle_keydown(key)
        assert controller.state == STATE_PLAYING
        assert controller.model is not dead
        assert controller.model.alive
        assert controller.model.ticks == 0
        assert controller.timer.elapsed == 0.0

    def test_every_state_renders(self, controller):
        controller.view.render(controller.model.snapshot(), controller.state)
        controller._handle_keydown(pygame.K_x)
        controller._handle_keydown(pygame.K_p)
        controller.view.render(controller.model.snapshot(), controller.state)
        controller._handle_keydown(pygame.K_p)
        play_until_over(controller)
        controller.view.render(controller.model.snapshot(), controller.state)

    def test_game_over_logged_once(self, controller, caplog):
        controller._handle_keydown(pygame.K_x)
        with caplog.at_level(logging.INFO):
            play_until_over(controller)
        over = [r for r in caplog.records
                if r.levelno >= logging.INFO and "over" in r.getMessage()]
        assert len(over) == 1
        assert over[0].name == "wurm.controller"
