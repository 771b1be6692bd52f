"""
Game configuration.

Every tunable constant of the simulation and the window lives here so the
engine and the pygame front end agree on the same numbers.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class GameConfig:
    """Configuration settings for field dimensions, entities and scoring."""

    # Canvas and display settings
    WIDTH: int = 800
    HEIGHT: int = 600
    FPS: int = 60
    HUD_HEIGHT: int = 28

    # Playfield geometry
    MARGIN: int = 50                # Outer border inset from each canvas edge
    BORDER_TOLERANCE: float = 5.0   # How close counts as "on" a border
    BORDER_SAMPLE_STEP: int = 5     # Spacing of the static border points

    # Player
    PLAYER_SIZE: float = 8.0
    PLAYER_SPEED: float = 3.0

    # Qix
    QIX_SIZE: float = 15.0
    QIX_START_VX: float = 2.0
    QIX_START_VY: float = 1.5
    QIX_BOUNCE_INSET: int = 70
    QIX_MAX_SPEED: float = 3.0
    QIX_TURN_CHANCE: float = 0.02   # Per-tick chance of a random nudge
    QIX_TURN_STRENGTH: float = 0.5  # Width of the nudge range per axis
    TRAIL_LENGTH: int = 20

    # Sparks
    SPARK_INSET: int = 100          # Spawn distance from the left/right edge
    SPARK_SPEEDS: Tuple[float, float] = (1.0, 1.2)

    # Collision padding added to the player radius (or qix radius for lines)
    TRAIL_HIT_PAD: float = 5.0
    SPARK_HIT_PAD: float = 8.0
    LINE_HIT_PAD: float = 5.0

    # Game mechanics
    START_LIVES: int = 3
    GRACE_PERIOD: float = 2.0       # Seconds without collisions after start
    MIN_CLAIM_SIZE: float = 20.0
    LINE_POINTS_PER_PIXEL: int = 10
    BONUS_LOW: int = 75
    BONUS_HIGH: int = 80
    BONUS_POINTS: int = 1000

    def __post_init__(self):
        if self.FPS <= 0:
            raise ValueError(f"FPS must be positive, got {self.FPS}")
        if self.PLAYER_SPEED <= 0 or self.QIX_MAX_SPEED <= 0:
            raise ValueError("Speeds must be positive")
        if self.TRAIL_LENGTH < 1:
            raise ValueError(f"TRAIL_LENGTH must be at least 1, got {self.TRAIL_LENGTH}")
        # The Qix bounces inside the border and sparks spawn inside it too,
        # so the canvas has to leave room for both on every side.
        inner = 2 * max(self.QIX_BOUNCE_INSET, self.SPARK_INSET, self.MARGIN)
        if self.WIDTH <= inner or self.HEIGHT <= 2 * max(self.QIX_BOUNCE_INSET, self.MARGIN):
            raise ValueError(
                f"Canvas {self.WIDTH}x{self.HEIGHT} is too small for the "
                f"configured margins"
            )

    @property
    def left(self) -> float:
        return float(self.MARGIN)

    @property
    def right(self) -> float:
        return float(self.WIDTH - self.MARGIN)

    @property
    def top(self) -> float:
        return float(self.MARGIN)

    @property
    def bottom(self) -> float:
        return float(self.HEIGHT - self.MARGIN)

    @property
    def playfield_area(self) -> float:
        """Area used as the denominator of the territory percentage."""
        return float((self.WIDTH - 2 * self.MARGIN) * (self.HEIGHT - 2 * self.MARGIN))

    @property
    def start_position(self) -> Tuple[float, float]:
        """Player spawn point: bottom-left corner of the playfield."""
        return (self.left, self.bottom)

    @property
    def screen_height(self) -> int:
        """Window height including the HUD row."""
        return self.HEIGHT + self.HUD_HEIGHT
