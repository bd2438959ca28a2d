"""Robot entity and id generation."""

import logging
import threading
from dataclasses import InitVar, dataclass
from typing import Any, Dict, Optional

from ..errors import OutOfBoundsError
from .geometry import Direction, Position

logger = logging.getLogger(__name__)


class RobotIdGenerator:
    """Hands out unique, increasing robot ids ("Robot1", "Robot2", ...)."""

    def __init__(self, prefix: str = "Robot", start: int = 1):
        self._prefix = prefix
        self._next = start
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            value = self._next
            self._next += 1
        return f"{self._prefix}{value}"


# Used when a robot is built without an explicit generator, so ids stay
# unique across the process.
_default_ids = RobotIdGenerator()


@dataclass(eq=False)
class Robot:
    """Robot with a cell position and a heading.

    A robot holds state only. It does not check the room or other robots;
    SimulationEngine decides which moves are legal before calling
    move_forward().
    """
    position: Position
    direction: Direction
    robot_id: Optional[str] = None
    id_generator: InitVar[Optional[RobotIdGenerator]] = None

    def __post_init__(self, id_generator: Optional[RobotIdGenerator]):
        if self.robot_id is None:
            self.robot_id = (id_generator or _default_ids).next_id()
        logger.debug("Created %s", self)

    def calculate_next_position(self) -> Position:
        """Position one step ahead, without moving.

        Raises:
            OutOfBoundsError: If the step would leave the non-negative
                quadrant, which no room contains
        """
        dx, dy = self.direction.displacement()
        x, y = self.position.x + dx, self.position.y + dy
        if x < 0 or y < 0:
            raise OutOfBoundsError(self.robot_id, (x, y))
        return Position(x, y)

    def turn_left(self) -> None:
        self.direction = self.direction.turn_left()

    def turn_right(self) -> None:
        self.direction = self.direction.turn_right()

    def move_forward(self) -> None:
        self.position = self.calculate_next_position()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "robot_id": self.robot_id,
            "x": self.position.x,
            "y": self.position.y,
            "direction": self.direction.symbol,
        }

    def __str__(self) -> str:
        return f"{self.robot_id} at {self.position} facing {self.direction.symbol}"
