"""Owns the running game and turns one frame of key state into an update."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from . import engine
from .entities import CollisionKind
from .scoreboard import Scoreboard, ScoreEntry
from .settings import GameSettings

PAUSE = "pause"
LEADERBOARD = "leaderboard"


@dataclass(frozen=True)
class InputFrame:
    """Keys held during one frame."""

    left: bool = False
    right: bool = False
    pause: bool = False
    leaderboard: bool = False
    retry: bool = False


class CooldownGate:
    """Accept an action at most once per ``window_ms`` while its key is held."""

    def __init__(self, window_ms: int) -> None:
        self.window_ms = window_ms
        self._last: Dict[str, int] = {}

    def try_accept(self, action: str, now_ms: int) -> bool:
        last = self._last.get(action)
        if last is not None and now_ms - last < self.window_ms:
            return False
        self._last[action] = now_ms
        return True


# ---------------------------------------------------------------------------
# Read-only views handed to the renderer
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class BlockView:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class BallView:
    x: float
    y: float
    radius: float
    last_collision: CollisionKind


@dataclass(frozen=True)
class PlatformView:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Snapshot:
    blocks: Tuple[BlockView, ...]
    balls: Tuple[BallView, ...]
    platform: PlatformView
    score: int
    lives: int
    is_game_over: bool
    paused: bool
    show_leaderboard: bool
    won: Optional[bool]
    top_scores: Tuple[ScoreEntry, ...] = ()


class Session:
    """The single live game plus the settings and leaderboard it reports to."""

    def __init__(self, settings: GameSettings, scoreboard: Scoreboard,
                 clock: Optional[Callable[[], int]] = None) -> None:
        self.settings = settings
        self.scoreboard = scoreboard
        self.clock = clock
        self.gate = CooldownGate(settings.toggle_cooldown_ms)
        self.state = engine.new_game(settings)

    def reset(self) -> None:
        """Throw the current game away and start a new one."""

        self.state = engine.new_game(self.settings)

    def handle_input(self, frame: InputFrame, now_ms: Optional[int] = None) -> None:
        """Apply one frame of input and, while playing, advance the simulation."""

        if now_ms is None:
            now_ms = self.clock() if self.clock is not None else 0

        state = self.state
        if state.is_game_over or state.paused:
            self._handle_menu(frame, now_ms)
            return

        delta = 0.0
        if frame.left:
            delta -= self.settings.platform_speed
        if frame.right:
            delta += self.settings.platform_speed
        if delta:
            engine.move_platform(state.platform, delta, self.settings)

        if frame.pause and self.gate.try_accept(PAUSE, now_ms):
            state.paused = True
        if frame.leaderboard and self.gate.try_accept(LEADERBOARD, now_ms):
            state.show_leaderboard = not state.show_leaderboard

        if not state.paused:
            engine.tick(state, self.settings, self.scoreboard)

    def _handle_menu(self, frame: InputFrame, now_ms: int) -> None:
        state = self.state
        if frame.retry:
            self.reset()
            return
        if frame.pause and self.gate.try_accept(PAUSE, now_ms):
            # A finished game cannot be un-paused, only retried.
            if not state.is_game_over:
                state.paused = False
        if frame.leaderboard and self.gate.try_accept(LEADERBOARD, now_ms):
            state.show_leaderboard = not state.show_leaderboard

    def snapshot(self) -> Snapshot:
        state = self.state
        platform = state.platform
        return Snapshot(
            blocks=tuple(BlockView(b.x, b.y, b.width, b.height) for b in state.blocks if not b.destroyed),
            balls=tuple(BallView(b.x, b.y, b.radius, b.last_collision) for b in state.balls),
            platform=PlatformView(platform.x, platform.y, platform.width, platform.height),
            score=state.score,
            lives=state.lives,
            is_game_over=state.is_game_over,
            paused=state.paused,
            show_leaderboard=state.show_leaderboard,
            won=state.won,
            top_scores=self.scoreboard.top_scores() if state.show_leaderboard else (),
        )
