"""Single-player Breakout with a persisted top-ten leaderboard."""

__version__ = "0.1.0"
