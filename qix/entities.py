"""
Entity state for the Qix simulation.

Plain records mutated only by the engine. Render and HUD code read them
once per frame and never write back.
"""

from collections import deque
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Deque, List, Optional

from qix.config import GameConfig
from qix.geometry import Point, Rect


# ============================================================================
# ENUMS
# ============================================================================

class SessionPhase(IntEnum):
    """Lifecycle of one game session."""
    STOPPED = 0     # Initial state, waiting for start
    RUNNING = 1
    PAUSED = 2
    GAME_OVER = 3   # Lives exhausted; score and territory frozen


# ============================================================================
# GAME ENTITIES
# ============================================================================

class Player:
    """
    The player's cursor.

    Moves freely inside the playfield; may only start or finish a line
    while touching the outer border or a claimed rectangle's edge.
    """

    __slots__ = ['x', 'y', 'size', 'speed', 'drawing', 'on_border']

    def __init__(self, x: float, y: float, size: float = 8.0, speed: float = 3.0):
        self.x = x
        self.y = y
        self.size = size            # Collision radius
        self.speed = speed          # Pixels per tick per held direction
        self.drawing = False        # Currently extruding a line
        self.on_border = True       # Recomputed every tick

    @property
    def position(self) -> Point:
        return (self.x, self.y)

    def respawn(self, x: float, y: float):
        """Put the player back at a spawn point, anchored to the border."""
        self.x = x
        self.y = y
        self.drawing = False
        self.on_border = True


class Qix:
    """
    Roaming enemy that bounces around the inner field.

    Keeps a short trail of its recent positions; the trail is deadly to a
    player who is drawing.
    """

    __slots__ = ['x', 'y', 'vx', 'vy', 'size', 'trail']

    def __init__(self, x: float, y: float, vx: float, vy: float,
                 size: float = 15.0, trail_length: int = 20):
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.size = size
        self.trail: Deque[Point] = deque(maxlen=trail_length)  # Oldest first

    @property
    def position(self) -> Point:
        return (self.x, self.y)

    @property
    def speed(self) -> float:
        return (self.vx * self.vx + self.vy * self.vy) ** 0.5


class Spark:
    """Border patroller confined to the top or bottom row of the field."""

    __slots__ = ['x', 'y', 'direction', 'speed']

    def __init__(self, x: float, y: float, direction: int, speed: float):
        self.x = x
        self.y = y
        self.direction = direction  # +1 moves right, -1 moves left
        self.speed = speed

    @property
    def position(self) -> Point:
        return (self.x, self.y)


# ============================================================================
# SESSION STATE
# ============================================================================

def build_border(config: GameConfig) -> List[Point]:
    """
    Sample points along the outer rectangle.

    Used only as a visual reference; collision code works from the
    configured margins instead.
    """
    step = config.BORDER_SAMPLE_STEP
    points: List[Point] = []
    for y in (config.top, config.bottom):
        points.extend((float(x), y) for x in range(0, config.WIDTH, step))
    for x in (config.left, config.right):
        points.extend((x, float(y)) for y in range(config.MARGIN, config.HEIGHT - config.MARGIN, step))
    return points


def spawn_sparks(config: GameConfig) -> List[Spark]:
    """One spark heading right along the top row, one heading left along the bottom."""
    top_speed, bottom_speed = config.SPARK_SPEEDS
    return [
        Spark(float(config.SPARK_INSET), config.top, 1, top_speed),
        Spark(float(config.WIDTH - config.SPARK_INSET), config.bottom, -1, bottom_speed),
    ]


@dataclass
class GameState:
    """Everything one session owns. Only the engine mutates it."""

    player: Player
    qix: Qix
    sparks: List[Spark]
    border: List[Point]
    current_line: List[Point] = field(default_factory=list)
    drawn_lines: List[List[Point]] = field(default_factory=list)
    territory: List[Rect] = field(default_factory=list)
    score: int = 0
    lives: int = 3
    territory_percentage: int = 0
    phase: SessionPhase = SessionPhase.STOPPED
    game_start_time: Optional[float] = None
    bonus_awarded: bool = False     # Latch for the one-shot territory bonus

    @classmethod
    def initial(cls, config: GameConfig) -> 'GameState':
        """Fresh state with every entity at its spawn point."""
        start_x, start_y = config.start_position
        return cls(
            player=Player(start_x, start_y, config.PLAYER_SIZE, config.PLAYER_SPEED),
            qix=Qix(config.WIDTH / 2, config.HEIGHT / 2,
                    config.QIX_START_VX, config.QIX_START_VY,
                    config.QIX_SIZE, config.TRAIL_LENGTH),
            sparks=spawn_sparks(config),
            border=build_border(config),
            lives=config.START_LIVES,
        )

    @property
    def claimed_area(self) -> float:
        return sum(rect.area for rect in self.territory)
