"""Tuning constants and the immutable per-session settings record.

The constants mirror the numbers a classic Breakout clone uses: an 800x600
window, a 6x10 brick wall and a small paddle.  ``GameSettings`` bundles them so
that the engine never reaches for module globals directly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

# ---------------------------------------------------------------------------
# Screen and playfield
# ---------------------------------------------------------------------------
W, H = 800, 600

# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
PADDLE_W, PADDLE_H = 100, 16
PADDLE_OFFSET = 50  # distance from the bottom of the playfield to the paddle top
PADDLE_SPEED = 8
BALL_R = 8
BALL_SPEED = 5
SERVE_HEIGHT = 40  # how far above the paddle a served ball appears

BRICK_ROWS, BRICK_COLS = 6, 10
BRICK_H = 22
BRICK_TOP = 60  # leaves room for the HUD

# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------
START_LIVES = 3
TICK_STEP = 1.0
TOGGLE_COOLDOWN_MS = 200

# The leaderboard sits beside the package so the game can be launched from any
# working directory.  ``BREAKOUT_LEADERBOARD`` points it somewhere else.
LEADERBOARD_FILE = os.path.join(os.path.dirname(__file__), "leaderboard.json")
LEADERBOARD_ENV = "BREAKOUT_LEADERBOARD"


@dataclass(frozen=True)
class GameSettings:
    """Everything the simulation needs to know about the playfield."""

    screen_width: int = W
    screen_height: int = H
    game_width: int = W
    game_height: int = H
    block_rows: int = BRICK_ROWS
    block_cols: int = BRICK_COLS
    block_height: int = BRICK_H
    block_top: int = BRICK_TOP
    ball_radius: float = BALL_R
    ball_speed: float = BALL_SPEED
    platform_width: int = PADDLE_W
    platform_height: int = PADDLE_H
    platform_speed: float = PADDLE_SPEED
    platform_offset: int = PADDLE_OFFSET
    serve_height: float = SERVE_HEIGHT
    initial_lives: int = START_LIVES
    tick_step: float = TICK_STEP
    toggle_cooldown_ms: int = TOGGLE_COOLDOWN_MS
    leaderboard_file: str = LEADERBOARD_FILE

    @property
    def block_width(self) -> float:
        return self.game_width / self.block_cols

    @classmethod
    def from_env(cls) -> "GameSettings":
        """Return the default settings with environment overrides applied."""

        settings = cls()
        path = os.environ.get(LEADERBOARD_ENV)
        if path:
            settings = replace(settings, leaderboard_file=path)
        return settings
