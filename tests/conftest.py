import pytest

from breakout.entities import Ball, Block, GameState, Platform
from breakout.settings import GameSettings


class RecordingScoreboard:
    """Stands in for the leaderboard and remembers every finished game."""

    def __init__(self):
        self.calls = []

    def add_score(self, score, lives):
        self.calls.append((score, lives))

    def top_scores(self):
        return ()


@pytest.fixture
def settings(tmp_path):
    return GameSettings(leaderboard_file=str(tmp_path / "leaderboard.json"))


@pytest.fixture
def recorder():
    return RecordingScoreboard()


@pytest.fixture
def make_state(settings):
    """Build a small hand-made game: one far-away brick unless told otherwise."""

    def _make(ball, blocks=None, **kwargs):
        platform = Platform(x=350, y=550, width=100, height=16)
        if blocks is None:
            blocks = [Block(700, 60, 80, 22)]
        return GameState(platform=platform, blocks=blocks, balls=[ball], **kwargs)

    return _make


@pytest.fixture
def ball():
    return Ball(x=400, y=300, radius=8, dx=0, dy=0)
