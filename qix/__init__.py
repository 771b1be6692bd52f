"""Qix: claim territory by drawing lines while dodging the Qix and its sparks."""

from qix.config import GameConfig
from qix.controls import InputBuffer, InputIntent
from qix.engine import QixEngine, Scoreboard
from qix.entities import GameState, Player, Qix, SessionPhase, Spark
from qix.geometry import Rect, bounding_box, distance, polyline_length

__version__ = "1.0.0"

__all__ = [
    "GameConfig", "GameState", "InputBuffer", "InputIntent", "Player", "Qix",
    "QixEngine", "Rect", "Scoreboard", "SessionPhase", "Spark",
    "bounding_box", "distance", "polyline_length",
]
