"""One-step simulation of the ball, the walls, the paddle and the bricks.

Motion uses fixed per-tick steps rather than elapsed time, so ``tick`` depends
only on the state and settings it is given. It updates ``state`` in place and
writes the leaderboard when a game finishes.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Protocol

from .entities import Ball, Block, CollisionKind, GameState, Platform
from .settings import GameSettings

logger = logging.getLogger(__name__)

BLOCK_POINTS = 10

# Share of the score taken away when a life is lost, keyed by the number of
# lives left afterwards.  Any other count costs nothing.
LIFE_LOSS_PENALTIES: Dict[int, float] = {2: 0.10, 1: 0.25}


class ScoreRecorder(Protocol):
    def add_score(self, score: int, lives: int) -> object: ...


# ---------------------------------------------------------------------------
# Building a fresh game
# ---------------------------------------------------------------------------
def build_blocks(settings: GameSettings) -> List[Block]:
    """Return a full row-by-column wall of bricks spanning the playfield."""

    width = settings.block_width
    blocks = []
    for r in range(settings.block_rows):
        for c in range(settings.block_cols):
            x = c * width
            y = settings.block_top + r * settings.block_height
            blocks.append(Block(x, y, width, settings.block_height))
    return blocks


def serve_ball(ball: Ball, platform: Platform, settings: GameSettings) -> None:
    """Place the ball above the paddle centre, heading right and down."""

    ball.x = platform.center_x
    ball.y = platform.y - settings.serve_height
    ball.dx = settings.ball_speed
    ball.dy = settings.ball_speed


def new_game(settings: GameSettings) -> GameState:
    platform = Platform(
        x=(settings.game_width - settings.platform_width) / 2,
        y=settings.game_height - settings.platform_offset,
        width=settings.platform_width,
        height=settings.platform_height,
    )
    ball = Ball(x=0, y=0, radius=settings.ball_radius, dx=0, dy=0)
    serve_ball(ball, platform, settings)
    return GameState(
        platform=platform,
        blocks=build_blocks(settings),
        balls=[ball],
        lives=settings.initial_lives,
    )


def move_platform(platform: Platform, delta: float, settings: GameSettings) -> None:
    """Slide the paddle horizontally without letting it leave the playfield."""

    platform.x = max(0, min(settings.game_width - platform.width, platform.x + delta))


def deduction_for(score: int, lives_left: int) -> int:
    return math.floor(score * LIFE_LOSS_PENALTIES.get(lives_left, 0.0))


# ---------------------------------------------------------------------------
# The tick
# ---------------------------------------------------------------------------
def finish(state: GameState, scoreboard: ScoreRecorder, won: bool) -> None:
    """End the game and record the score; later calls do nothing."""

    if state.is_game_over:
        return
    state.is_game_over = True
    state.won = won
    logger.info("Game %s with score %d", "won" if won else "lost", state.score)
    scoreboard.add_score(state.score, state.lives)


def _bounce_walls(ball: Ball, settings: GameSettings) -> None:
    # No clamping: the next tick carries the ball back inside.
    if ball.x - ball.radius < 0 or ball.x + ball.radius > settings.game_width:
        ball.dx = -ball.dx
        ball.last_collision = CollisionKind.WALL
    if ball.y - ball.radius < 0:
        ball.dy = -ball.dy
        ball.last_collision = CollisionKind.TOP


def _bounce_platform(ball: Ball, platform: Platform) -> None:
    if ball.y + ball.radius > platform.y and platform.x <= ball.x <= platform.x + platform.width:
        ball.dy = -ball.dy


def _hit_blocks(ball: Ball, state: GameState) -> None:
    for block in state.blocks:
        if block.destroyed:
            continue
        overlaps_y = ball.y + ball.radius > block.y and ball.y - ball.radius < block.y + block.height
        within_x = block.x <= ball.x <= block.x + block.width
        if overlaps_y and within_x:
            block.destroyed = True
            ball.dy = -ball.dy
            ball.last_collision = CollisionKind.BLOCK
            state.score += BLOCK_POINTS


def _lose_life(ball: Ball, state: GameState, settings: GameSettings, scoreboard: ScoreRecorder) -> None:
    state.lives -= 1
    if state.lives <= 0:
        finish(state, scoreboard, won=False)
        return

    state.score -= deduction_for(state.score, state.lives)
    state.score = max(state.score, state.initial_score)
    logger.debug("Life lost, %d left, score now %d", state.lives, state.score)
    serve_ball(ball, state.platform, settings)


def tick(state: GameState, settings: GameSettings, scoreboard: ScoreRecorder) -> None:
    """Advance ``state`` by exactly one fixed step."""

    if state.is_game_over:
        return

    step = settings.tick_step
    for ball in state.balls:
        ball.x += ball.dx * step
        ball.y += ball.dy * step

        _bounce_walls(ball, settings)
        _bounce_platform(ball, state.platform)
        _hit_blocks(ball, state)

        if ball.y > settings.game_height:
            _lose_life(ball, state, settings, scoreboard)
            if state.is_game_over:
                break

    state.blocks = [block for block in state.blocks if not block.destroyed]

    if not state.blocks:
        finish(state, scoreboard, won=True)
