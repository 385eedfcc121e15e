"""
Human Play Mode
================

Play Frigate Hop interactively in a pygame window, in real time.

Controls:
    - Arrow keys / WASD: Move the frigate
    - Space/Enter: Start from the title screen
    - R: Restart
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--width WIDTH] [--height HEIGHT]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from frigate_hop.core.config_loader import GameConfig, load_config
from frigate_hop.core.game import SimulationLoop
from frigate_hop.core.scheduler import RealClock, Scheduler
from frigate_hop.high_scores import HighScoreTable

DEFAULT_SCORES_PATH = "frigate_hop_scores.json"

INSTRUCTIONS = (
    "Navigate the Frigate through dangerous waters",
    "Avoid sea mines and icebergs",
    "Use arrow keys to move",
    "Reach the finish line to score points!",
)

# Menu and game-over screens
MENU = "menu"
PLAYING = "playing"
OVER = "over"


class Overlay:
    """Title screen, score badge and game-over box drawn over the game."""

    def __init__(self):
        pygame.font.init()
        self._font_huge = pygame.font.Font(None, 56)
        self._font_large = pygame.font.Font(None, 40)
        self._font_medium = pygame.font.Font(None, 28)
        self._font_small = pygame.font.Font(None, 22)

        self._panel = (17, 24, 39)
        self._panel_border = (55, 65, 81)
        self._badge = (30, 58, 138)
        self._over_fill = (127, 29, 29)
        self._over_border = (185, 28, 28)
        self._button = (37, 99, 235)
        self._text = (255, 255, 255)
        self._text_muted = (209, 213, 219)
        self._accent = (96, 165, 250)

    def _centered(self, screen: pygame.Surface, surface: pygame.Surface, y: int) -> None:
        screen.blit(surface, ((screen.get_width() - surface.get_width()) // 2, y))

    def draw_menu(self, screen: pygame.Surface, table: HighScoreTable) -> None:
        """Instructions, high score list and start prompt."""
        width, height = screen.get_size()
        screen.fill((12, 74, 110))

        box_w, box_h = min(width - 40, 460), min(height - 40, 480)
        box_x, box_y = (width - box_w) // 2, (height - box_h) // 2
        pygame.draw.rect(screen, self._panel, (box_x, box_y, box_w, box_h), border_radius=12)
        pygame.draw.rect(screen, self._panel_border, (box_x, box_y, box_w, box_h), 2, border_radius=12)

        y = box_y + 24
        self._centered(screen, self._font_huge.render("Frigate Hop", True, self._text), y)
        y += 60
        for line in INSTRUCTIONS:
            self._centered(screen, self._font_small.render(line, True, self._text_muted), y)
            y += 24

        y += 16
        self._centered(screen, self._font_medium.render("High Scores", True, self._text), y)
        y += 32

        entries = table.top()
        if not entries:
            text = self._font_small.render("No scores yet. Be the first!", True, self._text_muted)
            self._centered(screen, text, y)
            y += 24
        for rank, entry in enumerate(entries, start=1):
            left = self._font_small.render(f"#{rank}", True, self._text_muted)
            mid = self._font_small.render(f"{entry.score} pts", True, self._accent)
            right = self._font_small.render(entry.date.strftime("%Y-%m-%d"), True, self._text_muted)
            screen.blit(left, (box_x + 40, y))
            screen.blit(mid, ((width - mid.get_width()) // 2, y))
            screen.blit(right, (box_x + box_w - 40 - right.get_width(), y))
            y += 24

        y += 20
        button = self._font_medium.render("Start Mission (Space)", True, self._text)
        button_rect = button.get_rect(center=(width // 2, y + 18)).inflate(32, 16)
        pygame.draw.rect(screen, self._button, button_rect, border_radius=8)
        screen.blit(button, button.get_rect(center=button_rect.center))

    def draw_score(self, screen: pygame.Surface, score: int) -> None:
        text = self._font_medium.render(f"Score: {score}", True, self._text)
        badge = text.get_rect(topleft=(16, 16)).inflate(24, 12)
        surface = pygame.Surface(badge.size, pygame.SRCALPHA)
        surface.fill((*self._badge, 204))
        screen.blit(surface, badge.topleft)
        screen.blit(text, text.get_rect(center=badge.center))

    def draw_game_over(self, screen: pygame.Surface, score: int) -> None:
        width, height = screen.get_size()
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 150))
        screen.blit(overlay, (0, 0))

        box_w, box_h = 320, 190
        box_x, box_y = (width - box_w) // 2, (height - box_h) // 2
        pygame.draw.rect(screen, self._over_fill, (box_x, box_y, box_w, box_h), border_radius=12)
        pygame.draw.rect(screen, self._over_border, (box_x, box_y, box_w, box_h), 2, border_radius=12)

        self._centered(screen, self._font_huge.render("Game Over", True, self._text), box_y + 24)
        self._centered(screen, self._font_large.render(f"Final Score: {score}", True, self._text), box_y + 84)
        self._centered(screen, self._font_medium.render("Try Again (R)", True, self._text_muted), box_y + 136)


class HumanPlayer:
    """
    Real-time Frigate Hop session: the scheduler runs on the wall clock and
    is pumped once per display frame.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        window_width: int = 800,
        window_height: int = 600,
        target_fps: int = 60,
        scores_path: str = DEFAULT_SCORES_PATH,
        debug: bool = False
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is needed to play: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._seed = seed
        self._target_fps = target_fps
        self._debug = debug

        pygame.init()
        self._screen = pygame.display.set_mode((window_width, window_height), pygame.RESIZABLE)
        pygame.display.set_caption("Frigate Hop")
        self._clock = pygame.time.Clock()

        from frigate_hop.core.render_pygame import PygameRenderer
        self._renderer = PygameRenderer(config)
        self._overlay = Overlay()
        self._scores = HighScoreTable(Path(scores_path))

        self._key_directions = {
            pygame.K_UP: "up", pygame.K_w: "up",
            pygame.K_DOWN: "down", pygame.K_s: "down",
            pygame.K_LEFT: "left", pygame.K_a: "left",
            pygame.K_RIGHT: "right", pygame.K_d: "right",
        }

        self._scheduler = Scheduler(RealClock())
        self._game = SimulationLoop(
            config=config,
            seed=seed,
            scheduler=self._scheduler,
            output_size=(window_width, window_height),
            on_score_change=self._on_score_change,
            on_game_over=self._on_game_over,
            render_callback=self._paint,
            debug=debug
        )

        self._running = True
        self._screen_state = MENU
        self._score = 0

    def run(self) -> int:
        """Run the game loop. Returns the last score."""
        print("=== Frigate Hop ===")
        print("Arrow keys or WASD to move, R to restart, ESC to quit")
        print()

        while self._running:
            self._handle_events()

            if self._screen_state == PLAYING:
                # Frames paint through the render callback
                self._scheduler.pump()
                if self._screen_state == PLAYING:
                    self._overlay.draw_score(self._screen, self._score)
            elif self._screen_state == OVER:
                self._paint(self._game.get_render_data())
                self._overlay.draw_score(self._screen, self._score)
                self._overlay.draw_game_over(self._screen, self._score)
            else:
                self._overlay.draw_menu(self._screen, self._scores)

            pygame.display.flip()
            self._clock.tick(self._target_fps)

        self._game.stop()
        self._renderer.close()
        pygame.quit()
        return self._score

    def _handle_events(self) -> None:
        """Dispatch window, resize and key events for the current screen."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.VIDEORESIZE:
                self._screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self._game.resize(event.w, event.h)

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key == pygame.K_r:
                    self._start()
                elif self._screen_state == MENU and event.key in (pygame.K_SPACE, pygame.K_RETURN):
                    self._start()
                elif self._screen_state == PLAYING and event.key in self._key_directions:
                    self._game.handle_input(self._key_directions[event.key])

    def _start(self) -> None:
        self._game.start(seed=self._seed)
        self._screen_state = PLAYING
        if self._debug:
            print("[DEBUG] === Run Started ===")

    def _paint(self, render_data: Dict[str, Any]) -> None:
        self._renderer.draw(self._screen, render_data)

    def _on_score_change(self, score: int) -> None:
        self._score = score

    def _on_game_over(self) -> None:
        self._screen_state = OVER
        recorded = self._scores.record(self._score)
        print(f"\nGAME OVER - Score: {self._score} (level {self._game.level})")
        if recorded:
            print("  New high score entry saved")


def main() -> int:
    parser = argparse.ArgumentParser(description="Play Frigate Hop interactively")
    parser.add_argument("--seed", type=int, default=None, help="Hazard layout seed")
    parser.add_argument("--width", type=int, default=800, help="Window width (default: 800)")
    parser.add_argument("--height", type=int, default=600, help="Window height (default: 600)")
    parser.add_argument("--fps", type=int, default=60, help="Frame rate cap")
    parser.add_argument("--scores", type=str, default=DEFAULT_SCORES_PATH,
                        help=f"High score file (default: {DEFAULT_SCORES_PATH})")
    parser.add_argument("--debug", action="store_true", help="Print debug output")

    args = parser.parse_args()

    try:
        config = load_config()
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            window_width=args.width,
            window_height=args.height,
            target_fps=args.fps,
            scores_path=args.scores,
            debug=args.debug
        )
        score = player.run()
        print(f"\nLast score: {score}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
