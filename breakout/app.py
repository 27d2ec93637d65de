"""pygame front end for the Breakout simulation.

The game follows a traditional structure: initialise pygame, build a session,
and then run the main loop that reads the keyboard, advances the session and
draws whatever the session reports.  All the game rules live in
``breakout.engine``; this module only draws and polls keys.
"""

from __future__ import annotations

import logging
from typing import Sequence, Tuple

import pygame

from .entities import CollisionKind
from .scoreboard import Scoreboard, ScoreEntry
from .session import BlockView, InputFrame, Session, Snapshot
from .settings import GameSettings

logger = logging.getLogger(__name__)

FPS = 60

# Colour palette.  These are intentionally muted to give the bricks visual
# contrast.
BG = (15, 15, 24)
WHITE = (235, 235, 235)
GREY = (120, 120, 130)
BRICK_COLORS = [
    (200, 70, 70),
    (200, 140, 70),
    (200, 200, 70),
    (70, 180, 120),
    (70, 140, 200),
    (140, 90, 200),
]

# The ball changes colour depending on what it last bounced off.
BALL_COLORS = {
    CollisionKind.NONE: WHITE,
    CollisionKind.WALL: (120, 200, 255),
    CollisionKind.TOP: (255, 210, 90),
    CollisionKind.BLOCK: (255, 110, 110),
}


def read_input(keys: Sequence[bool]) -> InputFrame:
    """Translate ``pygame.key.get_pressed()`` into an ``InputFrame``."""

    return InputFrame(
        left=bool(keys[pygame.K_LEFT] or keys[pygame.K_a]),
        right=bool(keys[pygame.K_RIGHT] or keys[pygame.K_d]),
        pause=bool(keys[pygame.K_p]),
        leaderboard=bool(keys[pygame.K_l]),
        retry=bool(keys[pygame.K_r]),
    )


def render_text(surface: pygame.Surface, font: pygame.font.Font, text: str, pos: Tuple[int, int],
                color: Tuple[int, int, int] = WHITE, center: bool = False) -> pygame.Rect:
    """Draw text onto the surface and return the resulting rectangle."""

    text_surface = font.render(text, True, color)
    text_rect = text_surface.get_rect()
    if center:
        text_rect.center = pos
    else:
        text_rect.topleft = pos
    surface.blit(text_surface, text_rect)
    return text_rect


def draw_leaderboard(surface: pygame.Surface, font: pygame.font.Font, entries: Sequence[ScoreEntry]) -> None:
    width, height = surface.get_size()
    panel = pygame.Rect(width // 4, height // 6, width // 2, height * 2 // 3)
    pygame.draw.rect(surface, (20, 20, 30), panel)
    pygame.draw.rect(surface, WHITE, panel, 2)

    render_text(surface, font, "Leaderboard", (width // 2, panel.top + 30), center=True)
    if not entries:
        render_text(surface, font, "No scores yet", (width // 2, panel.top + 80), color=GREY, center=True)
        return

    for index, entry in enumerate(entries, start=1):
        render_text(
            surface,
            font,
            f"{index}. {entry.score}  ({entry.lives} lives)",
            (width // 2, panel.top + 50 + index * 30),
            center=True,
        )


def brick_color(block: BlockView, settings: GameSettings) -> Tuple[int, int, int]:
    """Colour bricks by their row in the wall, counting from the top row."""

    row = int((block.y - settings.block_top) // max(block.height, 1))
    return BRICK_COLORS[row % len(BRICK_COLORS)]


def draw(surface: pygame.Surface, font: pygame.font.Font, snap: Snapshot, settings: GameSettings) -> None:
    """Render the current game state to the window."""

    surface.fill(BG)
    width, height = surface.get_size()

    # bricks; each one is shrunk a little so a thin gap separates them
    for block in snap.blocks:
        rect = pygame.Rect(int(block.x) + 2, int(block.y) + 2, int(block.width) - 4, int(block.height) - 4)
        pygame.draw.rect(surface, brick_color(block, settings), rect, border_radius=4)

    # paddle, ball
    platform = snap.platform
    paddle = pygame.Rect(int(platform.x), int(platform.y), int(platform.width), int(platform.height))
    pygame.draw.rect(surface, WHITE, paddle, border_radius=6)
    for ball in snap.balls:
        pygame.draw.circle(surface, BALL_COLORS[ball.last_collision], (int(ball.x), int(ball.y)), int(ball.radius))

    render_text(surface, font, f"Score: {snap.score}   Lives: {snap.lives}", (20, 20))

    if snap.is_game_over:
        message = "You win!" if snap.won else "Game over"
        render_text(surface, font, message, (width // 2, height // 2 - 20), center=True)
        render_text(surface, font, "R to retry, L for leaderboard", (width // 2, height // 2 + 20), color=GREY,
                    center=True)
    elif snap.paused:
        render_text(surface, font, "Paused", (width // 2, height // 2 - 20), center=True)
        render_text(surface, font, "P to resume, R to restart", (width // 2, height // 2 + 20), color=GREY,
                    center=True)

    if snap.show_leaderboard:
        draw_leaderboard(surface, font, snap.top_scores)

    # ``flip`` swaps the back buffer with what is currently displayed so the
    # drawn frame becomes visible.
    pygame.display.flip()


def main() -> None:
    """Program entry point: open the window and run until it is closed."""

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    settings = GameSettings.from_env()
    scoreboard = Scoreboard(settings.leaderboard_file)
    scoreboard.load()
    logger.info("Loaded %d leaderboard entries from %s", len(scoreboard.top_scores()), scoreboard.path)

    pygame.init()
    pygame.display.set_caption("Breakout")
    surface = pygame.display.set_mode((settings.screen_width, settings.screen_height))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont(None, 36)

    session = Session(settings, scoreboard, clock=pygame.time.get_ticks)

    running = True
    while running:
        clock.tick(FPS)
        # The quit event stops the loop; Escape does the same so pygame can
        # shut down cleanly.
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                running = False
            if e.type == pygame.KEYDOWN and e.key == pygame.K_ESCAPE:
                running = False

        session.handle_input(read_input(pygame.key.get_pressed()))
        draw(surface, font, session.snapshot(), settings)

    pygame.quit()
