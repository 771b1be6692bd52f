"""
pygame front end for the Qix simulation.

Translates keyboard, mouse and touch events into an InputBuffer, runs one
engine tick per frame, and paints the engine's state. All game rules live
in qix.engine; this module only reads the state it is handed.
"""

import argparse
import logging
import random
import sys
from typing import Dict, Optional, Tuple

import pygame

from qix.config import GameConfig
from qix.controls import InputBuffer
from qix.engine import QixEngine, Scoreboard
from qix.entities import SessionPhase

logger = logging.getLogger(__name__)

# Colours taken from the classic neon palette
BACKGROUND = (0, 0, 0)
BORDER_COLOR = (78, 205, 196)
TERRITORY_COLOR = (76, 205, 196, 77)
LINE_COLOR = (255, 107, 107)
QIX_COLOR = (255, 107, 107)
SPARK_COLOR = (255, 255, 0)
PLAYER_IDLE = (255, 255, 255)
HUD_BG = (20, 20, 60)
HUD_TEXT = (230, 230, 230)
BUTTON_BG = (60, 60, 110)
BUTTON_DISABLED = (40, 40, 60)

KEY_DIRECTIONS = {
    pygame.K_UP: 'up',
    pygame.K_DOWN: 'down',
    pygame.K_LEFT: 'left',
    pygame.K_RIGHT: 'right',
}

DPAD_SIZE = 44


# ============================================================================
# HUD
# ============================================================================

class HudScoreboard(Scoreboard):
    """Keeps the latest counters for the HUD row and the game-over card."""

    def __init__(self):
        self.score = 0
        self.lives = 0
        self.territory = 0
        self.final: Optional[Tuple[int, int]] = None

    def show_counters(self, score: int, lives: int, territory: int):
        self.score = score
        self.lives = lives
        self.territory = territory
        if lives > 0:
            self.final = None

    def show_game_over(self, score: int, territory: int):
        self.final = (score, territory)


# ============================================================================
# MAIN APP CLASS
# ============================================================================

class QixApp:
    """
    Window, input and rendering around a QixEngine.

    Handles the frame loop, key and touch input, and drawing of the
    playfield, HUD and overlay screens.
    """

    def __init__(self, config: GameConfig, seed: Optional[int] = None,
                 touch_controls: bool = False):
        self.config = config
        self.scoreboard = HudScoreboard()
        self.engine = QixEngine(config, self.scoreboard, rng=random.Random(seed))
        self.inputs = InputBuffer()
        self.touch_controls = touch_controls

        pygame.init()
        self.screen = pygame.display.set_mode((config.WIDTH, config.screen_height))
        pygame.display.set_caption("Qix")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("consolas", 18, bold=True)
        self.title_font = pygame.font.SysFont("consolas", 42, bold=True)
        self.menu_font = pygame.font.SysFont("consolas", 24, bold=True)

        # Translucent layer for claimed territory
        self.overlay = pygame.Surface((config.WIDTH, config.HEIGHT), pygame.SRCALPHA)

        self.buttons = self._layout_buttons()
        self.dpad = self._layout_dpad()
        self._pointer_dirs: Dict[object, str] = {}  # Pointer id -> d-pad direction

        self.engine.reset()
        self.running = True

    def _layout_buttons(self) -> Dict[str, pygame.Rect]:
        """HUD buttons, right-aligned in the HUD row."""
        cfg = self.config
        width, height = 78, cfg.HUD_HEIGHT - 6
        y = cfg.HEIGHT + 3
        names = ('start', 'pause', 'reset', 'draw') if self.touch_controls else ('start', 'pause', 'reset')
        buttons = {}
        x = cfg.WIDTH - (width + 4) * len(names)
        for name in names:
            buttons[name] = pygame.Rect(x, y, width, height)
            x += width + 4
        return buttons

    def _layout_dpad(self) -> Dict[str, pygame.Rect]:
        """Virtual d-pad in the lower-right corner of the canvas."""
        if not self.touch_controls:
            return {}
        size = DPAD_SIZE
        cx = self.config.WIDTH - size * 2
        cy = self.config.HEIGHT - size * 2
        return {
            'up': pygame.Rect(cx - size // 2, cy - size * 3 // 2, size, size),
            'down': pygame.Rect(cx - size // 2, cy + size // 2, size, size),
            'left': pygame.Rect(cx - size * 3 // 2, cy - size // 2, size, size),
            'right': pygame.Rect(cx + size // 2, cy - size // 2, size, size),
        }

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def handle_input(self):
        """Drain the pygame event queue into the input buffer and session controls."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_key_down(event.key)
            elif event.type == pygame.KEYUP:
                if event.key in KEY_DIRECTIONS:
                    self.inputs.release('keyboard', KEY_DIRECTIONS[event.key])
            elif event.type == pygame.WINDOWFOCUSLOST:
                self.inputs.release_all()
                self._pointer_dirs.clear()
            elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP, pygame.MOUSEMOTION):
                # Touch also arrives as FINGER* events; skip the emulated mouse copy
                if getattr(event, 'touch', False):
                    continue
                if event.type == pygame.MOUSEMOTION and not event.buttons[0]:
                    continue
                self._handle_pointer(event.type, 'mouse', event.pos)
            elif event.type in (pygame.FINGERDOWN, pygame.FINGERUP, pygame.FINGERMOTION):
                pos = (int(event.x * self.config.WIDTH), int(event.y * self.config.screen_height))
                kind = {
                    pygame.FINGERDOWN: pygame.MOUSEBUTTONDOWN,
                    pygame.FINGERUP: pygame.MOUSEBUTTONUP,
                    pygame.FINGERMOTION: pygame.MOUSEMOTION,
                }[event.type]
                self._handle_pointer(kind, ('finger', event.finger_id), pos)

    def _handle_key_down(self, key: int):
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key in KEY_DIRECTIONS:
            self.inputs.press('keyboard', KEY_DIRECTIONS[key])
        elif key == pygame.K_SPACE:
            self.inputs.press_draw()
        elif key == pygame.K_RETURN:
            self.engine.start()
        elif key == pygame.K_p:
            self.engine.toggle_pause()
        elif key == pygame.K_r:
            self.inputs.release_all()
            self.engine.reset()

    def _handle_pointer(self, kind: int, pointer, pos: Tuple[int, int]):
        """
        Route a press, drag or release to the HUD buttons or the d-pad.

        Each pointer holds at most one d-pad direction; dragging onto
        another arrow switches direction, lifting releases it.
        """
        source = f'touch:{pointer}'

        if kind == pygame.MOUSEBUTTONUP:
            self._pointer_dirs.pop(pointer, None)
            self.inputs.release_all(source)
            return

        if kind == pygame.MOUSEBUTTONDOWN:
            for name, rect in self.buttons.items():
                if rect.collidepoint(pos):
                    self._press_button(name)
                    return

        direction = next((d for d, rect in self.dpad.items() if rect.collidepoint(pos)), None)
        if direction == self._pointer_dirs.get(pointer):
            return
        self.inputs.release_all(source)
        if direction is None:
            self._pointer_dirs.pop(pointer, None)
        else:
            self._pointer_dirs[pointer] = direction
            self.inputs.press(source, direction)

    def _press_button(self, name: str):
        if name == 'start':
            self.engine.start()
        elif name == 'pause':
            self.engine.toggle_pause()
        elif name == 'reset':
            self.inputs.release_all()
            self.engine.reset()
        elif name == 'draw':
            self.inputs.press_draw()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self):
        """Paint the playfield, entities and HUD from the engine's state."""
        cfg = self.config
        state = self.engine.state
        screen = self.screen

        screen.fill(BACKGROUND)

        field = pygame.Rect(cfg.MARGIN, cfg.MARGIN,
                            cfg.WIDTH - 2 * cfg.MARGIN, cfg.HEIGHT - 2 * cfg.MARGIN)
        pygame.draw.rect(screen, BORDER_COLOR, field, 3)

        # Territory
        self.overlay.fill((0, 0, 0, 0))
        for area in state.territory:
            pygame.draw.rect(self.overlay, TERRITORY_COLOR,
                             pygame.Rect(area.x, area.y, area.width, area.height))
        screen.blit(self.overlay, (0, 0))

        # Completed lines
        for line in state.drawn_lines:
            if len(line) > 1:
                pygame.draw.lines(screen, BORDER_COLOR, False, line, 2)

        # Line being drawn
        if len(state.current_line) > 1:
            pygame.draw.lines(screen, LINE_COLOR, False, state.current_line, 3)

        # Qix with its trail
        qix = state.qix
        if len(qix.trail) > 1:
            pygame.draw.lines(screen, (170, 70, 70), False, list(qix.trail), 2)
        pygame.draw.circle(screen, QIX_COLOR, (int(qix.x), int(qix.y)), int(qix.size))
        pygame.draw.circle(screen, (255, 180, 180), (int(qix.x), int(qix.y)), int(qix.size / 2))

        for spark in state.sparks:
            pygame.draw.circle(screen, SPARK_COLOR, (int(spark.x), int(spark.y)), 6)

        # Player: colour shows border contact, ring shows drawing
        player = state.player
        if player.on_border:
            color = BORDER_COLOR
        elif player.drawing:
            color = LINE_COLOR
        else:
            color = PLAYER_IDLE
        center = (int(player.x), int(player.y))
        pygame.draw.circle(screen, color, center, int(player.size))
        if player.drawing:
            pygame.draw.circle(screen, LINE_COLOR, center, int(player.size + 5), 2)

        self._render_dpad()
        self._render_hud()

        if state.phase == SessionPhase.STOPPED:
            self._render_title()
        elif state.phase == SessionPhase.PAUSED:
            self._render_banner("PAUSED", "Press P to resume")
        elif state.phase == SessionPhase.GAME_OVER:
            self._render_game_over()

        pygame.display.flip()

    def _render_dpad(self):
        for direction, rect in self.dpad.items():
            held = self.inputs.is_held(direction)
            pygame.draw.rect(self.screen, BUTTON_BG if held else BUTTON_DISABLED, rect, border_radius=6)
            label = self.font.render(direction[0].upper(), True, HUD_TEXT)
            self.screen.blit(label, label.get_rect(center=rect.center))

    def _render_hud(self):
        cfg = self.config
        board = self.scoreboard
        phase = self.engine.phase
        pygame.draw.rect(self.screen, HUD_BG, pygame.Rect(0, cfg.HEIGHT, cfg.WIDTH, cfg.HUD_HEIGHT))

        text = self.font.render(
            f"Score: {board.score}  Territory: {board.territory}%  Lives: {board.lives}",
            True, HUD_TEXT
        )
        self.screen.blit(text, (6, cfg.HEIGHT + 4))

        enabled = {
            'start': phase in (SessionPhase.STOPPED, SessionPhase.GAME_OVER),
            'pause': phase in (SessionPhase.RUNNING, SessionPhase.PAUSED),
            'reset': True,
            'draw': phase == SessionPhase.RUNNING,
        }
        for name, rect in self.buttons.items():
            label = name.capitalize()
            if name == 'pause' and phase == SessionPhase.PAUSED:
                label = "Resume"
            pygame.draw.rect(self.screen, BUTTON_BG if enabled[name] else BUTTON_DISABLED,
                             rect, border_radius=4)
            surface = self.font.render(label, True, HUD_TEXT if enabled[name] else (120, 120, 120))
            self.screen.blit(surface, surface.get_rect(center=rect.center))

    def _render_banner(self, title: str, subtitle: str, color=(255, 255, 100)):
        center_x = self.config.WIDTH // 2
        center_y = self.config.HEIGHT // 2
        heading = self.title_font.render(title, True, color)
        self.screen.blit(heading, heading.get_rect(center=(center_x, center_y - 30)))
        sub = self.menu_font.render(subtitle, True, (200, 200, 200))
        self.screen.blit(sub, sub.get_rect(center=(center_x, center_y + 20)))

    def _render_title(self):
        self._render_banner("QIX", "Press ENTER to start")
        lines = [
            "Arrow keys to move, SPACE to start/finish a line on the border",
            "P pause  R reset  ESC quit",
        ]
        y = self.config.HEIGHT // 2 + 60
        for line in lines:
            text = self.font.render(line, True, (180, 180, 180))
            self.screen.blit(text, text.get_rect(center=(self.config.WIDTH // 2, y)))
            y += 24

    def _render_game_over(self):
        score, territory = self.scoreboard.final or (self.scoreboard.score, self.scoreboard.territory)
        self._render_banner("GAME OVER", f"Score: {score}  Territory: {territory}%",
                            color=(255, 100, 100))
        hint = self.font.render("Press ENTER to play again", True, (180, 180, 180))
        self.screen.blit(hint, hint.get_rect(center=(self.config.WIDTH // 2,
                                                     self.config.HEIGHT // 2 + 60)))

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self):
        """
        Main loop.

        One engine tick and one render per frame; the engine ignores the
        tick itself while stopped, paused or over.
        """
        try:
            while self.running:
                self.clock.tick(self.config.FPS)
                self.handle_input()
                self.engine.update(self.inputs.consume())
                self.render()
        finally:
            pygame.quit()


# ============================================================================
# ENTRY POINT
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="qix", description="Claim territory, dodge the Qix.")
    parser.add_argument("--width", type=int, default=GameConfig.WIDTH, help="canvas width in pixels")
    parser.add_argument("--height", type=int, default=GameConfig.HEIGHT, help="canvas height in pixels")
    parser.add_argument("--fps", type=int, default=GameConfig.FPS, help="frames per second")
    parser.add_argument("--seed", type=int, default=None, help="seed for the Qix's random motion")
    parser.add_argument("--touch", action="store_true", help="show the on-screen d-pad and draw button")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = GameConfig(WIDTH=args.width, HEIGHT=args.height, FPS=args.fps)
    except ValueError as e:
        parser.error(str(e))

    QixApp(config, seed=args.seed, touch_controls=args.touch).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
