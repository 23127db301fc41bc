import pygame

from ..instruments import INSTRUMENTS
from ..logger import get_logger
from ..note_game import FretStatus, NoteGame
from ..note_game_core import GameMode
from ..note_types import FretCoordinate
from ..pitch_space import ALL_NOTES
from ..scales import SCALES
from .layout import BoardGeometry

# Get logger for this module
logger = get_logger(__name__)

FRET_MARKERS = (3, 5, 7, 9)
DOUBLE_MARKER = 12

STATUS_COLORS = {
    FretStatus.NORMAL: (51, 65, 85),
    FretStatus.OUT_OF_RANGE: (22, 28, 40),
    FretStatus.DISABLED: (22, 28, 40),
    FretStatus.HINT: (109, 40, 217),
    FretStatus.FLASH: (59, 130, 246),
    FretStatus.FOUND: (22, 163, 74),
}

HELP_TEXT = (
    "Space: play  P: practice  Esc: stop  I: instrument  M: mode  "
    "R: root  S: scale  N: natural notes"
)


def _cycle(options, current):
    options = list(options)
    index = options.index(current) if current in options else -1
    return options[(index + 1) % len(options)]


class PygameUI:
    """Pygame-based UI for Fretboarder"""

    def __init__(self, width: int = 1100, height: int = 560):
        """Initialize the Pygame UI"""
        self.screen = None
        self.width = width
        self.height = height
        self.bg_color = (15, 23, 42)
        self.text_color = (226, 232, 240)
        self.accent_color = (96, 165, 250)
        self.muted_color = (100, 116, 139)
        self.initialized = False
        self.clock = None
        self.geometry = None

        # Fonts
        self.title_font = None
        self.medium_font = None
        self.small_font = None

        logger.debug("Initializing PygameUI")

    def init_screen(self):
        """Initialize the Pygame screen and resources"""
        try:
            pygame.init()
            self.screen = pygame.display.set_mode((self.width, self.height))
            pygame.display.set_caption("Fretboarder")

            # Initialize fonts
            self.title_font = pygame.font.SysFont("Arial", 36, bold=True)
            self.medium_font = pygame.font.SysFont("Arial", 24)
            self.small_font = pygame.font.SysFont("Arial", 14, bold=True)

            self.clock = pygame.time.Clock()
            self.initialized = True
            logger.info("Pygame UI initialized successfully")
            return self.screen

        except pygame.error as e:
            logger.error(f"Failed to initialize Pygame: {e}")
            self.cleanup()
            raise

    def _layout_for(self, game: NoteGame) -> BoardGeometry:
        geometry = self.geometry
        if (
            geometry is None
            or geometry.string_count != game.instrument.string_count
            or geometry.fret_count != game.instrument.frets
        ):
            geometry = BoardGeometry(
                x=20,
                y=130,
                width=self.width - 40,
                string_count=game.instrument.string_count,
                fret_count=game.instrument.frets,
            )
            self.geometry = geometry
        return geometry

    def _text(self, font, text, color, **position):
        surface = font.render(text, True, color)
        rect = surface.get_rect(**position)
        self.screen.blit(surface, rect)

    def draw_toolbar(self, game: NoteGame):
        state = game.state
        self._text(self.title_font, "Fretboarder", self.text_color, topleft=(20, 16))

        mode = "Note Cycle" if game.game_mode is GameMode.NOTE_CYCLE else "Scale Drill"
        parts = [game.instrument.name, mode]
        if game.game_mode is GameMode.SCALE_DRILL:
            parts.append(f"{game.root} {game.scale}")
        elif game.whole_notes_only:
            parts.append("Natural Notes Only")
        parts.append("Audio" if game.audio.is_ready else "Audio (off)")
        self._text(self.medium_font, "  |  ".join(parts), self.accent_color, topright=(self.width - 20, 24))

        self._text(self.medium_font, state.message, self.text_color, topleft=(20, 70))
        if state.is_active and not state.practice:
            self._text(self.title_font, f"{state.timer:.2f}", self.text_color, topright=(self.width - 20, 62))
        elif state.is_over and not state.practice:
            self._text(self.title_font, f"Final Time {state.timer:.2f}s", self.accent_color, topright=(self.width - 20, 62))

    def draw_progress(self, game: NoteGame, geometry: BoardGeometry):
        if not game.state.is_active or game.state.practice:
            return
        top = geometry.y + geometry.height + 10
        bar_width = self.width - 40
        pygame.draw.rect(self.screen, (30, 41, 59), (20, top, bar_width, 8), border_radius=4)
        filled = int(bar_width * game.progress / 100)
        if filled > 0:
            pygame.draw.rect(self.screen, (59, 130, 246), (20, top, filled, 8), border_radius=4)

    def draw_selectors(self, game: NoteGame, geometry: BoardGeometry):
        start, end = game.fret_range.start, game.fret_range.end
        for row in ("start", "end"):
            selected = start if row == "start" else end
            for fret in range(game.instrument.frets):
                rect = geometry.selector_rect(row, fret)
                if fret == selected:
                    color = (34, 197, 94) if row == "start" else (59, 130, 246)
                    pygame.draw.rect(self.screen, color, rect, 2, border_radius=6)
                    text_color = color
                elif start <= fret <= end:
                    text_color = self.accent_color
                else:
                    text_color = self.muted_color
                x, y, w, h = rect
                self._text(self.small_font, str(fret), text_color, center=(x + w // 2, y + h // 2))

    def draw_board(self, game: NoteGame, geometry: BoardGeometry):
        state = game.state
        revealed = state.revealed
        for string_index, string in enumerate(game.layout):
            x, y, w, h = geometry.label_rect(string_index)
            self._text(self.medium_font, string[0], self.accent_color, center=(x + w // 2, y + h // 2))

            for fret_index in range(len(string)):
                coordinate = FretCoordinate(string_index, fret_index)
                rect = geometry.fret_rect(coordinate)
                status = game.fret_status(coordinate)
                color = STATUS_COLORS[status]
                if fret_index == 0 and status is FretStatus.NORMAL:
                    color = (148, 163, 184)
                pygame.draw.rect(self.screen, color, rect, border_radius=3)
                if state.shake_fret == coordinate.key:
                    pygame.draw.rect(self.screen, (239, 68, 68), rect, 2, border_radius=3)

                rx, ry, rw, rh = rect
                center = (rx + rw // 2, ry + rh // 2)
                pygame.draw.line(self.screen, (100, 116, 139), (rx, center[1]), (rx + rw, center[1]))
                if string_index == 0 and fret_index in FRET_MARKERS:
                    pygame.draw.circle(self.screen, self.accent_color, (center[0], ry - 2), 4)
                if string_index == 0 and fret_index == DOUBLE_MARKER:
                    pygame.draw.circle(self.screen, self.accent_color, (center[0] - 6, ry - 2), 4)
                    pygame.draw.circle(self.screen, self.accent_color, (center[0] + 6, ry - 2), 4)

                label = revealed.get(coordinate.key)
                if label:
                    self._text(self.small_font, label, (147, 197, 253), center=center)

    def update_display(self, game: NoteGame):
        """Update the game display

        Args:
            game: The game instance
        """
        if not self.initialized or not self.screen:
            return

        geometry = self._layout_for(game)
        self.screen.fill(self.bg_color)
        self.draw_toolbar(game)
        self.draw_selectors(game, geometry)
        self.draw_board(game, geometry)
        self.draw_progress(game, geometry)
        self._text(self.small_font, HELP_TEXT, self.muted_color, midbottom=(self.width // 2, self.height - 12))
        pygame.display.flip()

    def handle_click(self, game: NoteGame, pos):
        geometry = self._layout_for(game)
        coordinate = geometry.hit_fret(*pos)
        if coordinate is not None:
            result = game.tap(coordinate.string_index, coordinate.fret_index)
            logger.debug(f"Tap {coordinate}: {result.value}")
            return

        selector = geometry.hit_selector(*pos)
        if selector is not None:
            row, fret = selector
            if row == "start":
                game.set_fret_start(fret)
            else:
                game.set_fret_end(fret)

    def handle_key(self, game: NoteGame, key) -> bool:
        """Apply a key press; returns False when the player wants to quit."""
        if key == pygame.K_ESCAPE:
            if game.state.is_active:
                game.stop()
                return True
            return False
        if key == pygame.K_SPACE:
            game.start(practice=False)
        elif key == pygame.K_p:
            game.start(practice=True)
        elif key == pygame.K_i:
            game.set_instrument(_cycle(INSTRUMENTS, game.instrument.name))
        elif key == pygame.K_m:
            game.set_game_mode(_cycle(GameMode, game.game_mode))
        elif key == pygame.K_r:
            game.set_root(_cycle(ALL_NOTES, game.root))
        elif key == pygame.K_s:
            game.set_scale(_cycle(SCALES, game.scale))
        elif key == pygame.K_n:
            game.set_whole_notes_only(not game.whole_notes_only)
        return True

    def run(self, game: NoteGame):
        """Run the main loop until the window is closed.

        Args:
            game: The game instance to drive
        """
        if not self.initialized:
            self.init_screen()

        logger.info("Starting game loop")
        try:
            running = True
            while running:
                # Milliseconds since the previous frame, capped at 60 fps
                delta = self.clock.tick(60) / 1000.0
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                        self.handle_click(game, event.pos)
                    elif event.type == pygame.KEYDOWN:
                        running = self.handle_key(game, event.key)

                game.update(delta)
                self.update_display(game)
        finally:
            logger.info("Game loop ended")
            game.shutdown()
            self.cleanup()

    def cleanup(self):
        """Clean up Pygame resources"""
        if self.initialized:
            logger.info("Cleaning up Pygame UI")
            pygame.quit()
            self.initialized = False
