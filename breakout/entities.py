"""Plain state records for the blocks, the ball, the platform and the game."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class CollisionKind(Enum):
    """What the ball bounced off most recently (the renderer picks a colour)."""

    NONE = "none"
    WALL = "wall"
    TOP = "top"
    BLOCK = "block"


class Phase(Enum):
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class Block:
    x: float
    y: float
    width: float
    height: float
    destroyed: bool = False


@dataclass
class Ball:
    x: float
    y: float
    radius: float
    dx: float
    dy: float
    last_collision: CollisionKind = CollisionKind.NONE


@dataclass
class Platform:
    x: float
    y: float
    width: float
    height: float

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2


@dataclass
class GameState:
    """A single game from the first serve until it is won or lost.

    Attributes
    ----------
    initial_score: int
        Floor that life-loss deductions can never push ``score`` below.
    won: bool | None
        ``None`` while the game is running, otherwise the outcome.
    """

    platform: Platform
    blocks: List[Block] = field(default_factory=list)
    balls: List[Ball] = field(default_factory=list)
    score: int = 0
    initial_score: int = 0
    lives: int = 3
    is_game_over: bool = False
    paused: bool = False
    show_leaderboard: bool = False
    won: Optional[bool] = None

    @property
    def phase(self) -> Phase:
        if self.is_game_over:
            return Phase.GAME_OVER
        if self.paused:
            return Phase.PAUSED
        return Phase.PLAYING
