"""
Input intent for the simulation.

Front-end event handlers push into an InputBuffer; the host loop calls
consume() once per frame and hands the resulting InputIntent to the
engine. Nothing here knows about pygame.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Set

DIRECTIONS = ('up', 'down', 'left', 'right')


@dataclass(frozen=True)
class InputIntent:
    """What the player wants to do this tick."""
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    draw_toggle: bool = False   # Edge-triggered: true for a single tick

    @property
    def dx(self) -> int:
        return int(self.right) - int(self.left)

    @property
    def dy(self) -> int:
        return int(self.down) - int(self.up)


IDLE = InputIntent()


class InputBuffer:
    """
    Merges movement from several sources (keyboard, touch d-pad).

    A direction is held if any source holds it. A draw press is latched
    until the next consume() so it reaches exactly one tick.
    """

    def __init__(self):
        self._held: Dict[str, Set[str]] = {}
        self._draw_pressed = False

    def press(self, source: str, direction: str):
        if direction not in DIRECTIONS:
            raise ValueError(f"Unknown direction {direction!r}")
        self._held.setdefault(source, set()).add(direction)

    def release(self, source: str, direction: str):
        self._held.get(source, set()).discard(direction)

    def release_all(self, source: Optional[str] = None):
        """Drop every direction held by one source, or by all of them."""
        if source is None:
            self._held.clear()
        else:
            self._held.pop(source, None)

    def press_draw(self):
        self._draw_pressed = True

    def is_held(self, direction: str) -> bool:
        return any(direction in held for held in self._held.values())

    def consume(self) -> InputIntent:
        """Snapshot the held directions and clear the draw latch."""
        intent = InputIntent(
            up=self.is_held('up'),
            down=self.is_held('down'),
            left=self.is_held('left'),
            right=self.is_held('right'),
            draw_toggle=self._draw_pressed,
        )
        self._draw_pressed = False
        return intent
