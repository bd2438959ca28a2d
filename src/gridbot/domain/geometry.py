"""Grid geometry value types: Position, Direction and Room.

All three are immutable. Coordinates are integer cells with the origin in
the bottom-left corner; y grows towards NORTH.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple

from ..errors import InvalidDimensionsError, InvalidDirectionSymbolError, InvalidPositionError


@dataclass(frozen=True)
class Position:
    """Non-negative integer cell coordinates."""
    x: int
    y: int

    def __post_init__(self):
        if self.x < 0 or self.y < 0:
            raise InvalidPositionError(self.x, self.y)

    def translate(self, dx: int, dy: int) -> "Position":
        """Return the position shifted by (dx, dy)."""
        return Position(self.x + dx, self.y + dy)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


# Clockwise order; a right turn advances one slot, a left turn goes back one.
_CLOCKWISE = ("N", "E", "S", "W")

_DISPLACEMENTS: Dict[str, Tuple[int, int]] = {
    "N": (0, 1),
    "E": (1, 0),
    "S": (0, -1),
    "W": (-1, 0),
}


class Direction(Enum):
    """Compass heading of a robot."""
    NORTH = "N"
    EAST = "E"
    SOUTH = "S"
    WEST = "W"

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def from_symbol(cls, symbol: Any) -> "Direction":
        """Parse a direction from its single-letter symbol (case-insensitive).

        Args:
            symbol: One of "N", "E", "S", "W" in either case

        Returns:
            The matching Direction

        Raises:
            InvalidDirectionSymbolError: For anything else
        """
        if not isinstance(symbol, str) or len(symbol) != 1:
            raise InvalidDirectionSymbolError(symbol)
        try:
            return cls(symbol.upper())
        except ValueError:
            raise InvalidDirectionSymbolError(symbol) from None

    def turn_left(self) -> "Direction":
        """Rotate 90 degrees counter-clockwise."""
        i = _CLOCKWISE.index(self.value)
        return Direction(_CLOCKWISE[(i - 1) % 4])

    def turn_right(self) -> "Direction":
        """Rotate 90 degrees clockwise."""
        i = _CLOCKWISE.index(self.value)
        return Direction(_CLOCKWISE[(i + 1) % 4])

    def displacement(self) -> Tuple[int, int]:
        """Unit (dx, dy) vector for one step in this direction."""
        return _DISPLACEMENTS[self.value]


@dataclass(frozen=True)
class Room:
    """Rectangular room; valid cells are x in [0, width) and y in [0, height)."""
    width: int
    height: int

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidDimensionsError(self.width, self.height)

    def contains(self, x: int, y: int) -> bool:
        """Check raw coordinates against the room, negatives included."""
        return 0 <= x < self.width and 0 <= y < self.height

    def is_within_bounds(self, position: Position) -> bool:
        """Check whether a position lies inside the room."""
        return self.contains(position.x, position.y)

    def to_dict(self) -> Dict[str, int]:
        return {"width": self.width, "height": self.height}
