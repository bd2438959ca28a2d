"""In-memory registry of active robots."""

import logging
import threading
from typing import Dict, Optional

from .domain import Position, Robot

logger = logging.getLogger(__name__)


class RobotRegistry:
    """Thread-safe mapping of robot id to Robot.

    Reads hand out copies of the mapping, so a collision check sees one
    consistent point-in-time view even if another thread saves or deletes
    robots meanwhile.
    """

    def __init__(self):
        self._robots: Dict[str, Robot] = {}
        self._lock = threading.Lock()

    def save(self, robot: Robot) -> None:
        """Insert a robot, or replace the entry with the same id."""
        with self._lock:
            self._robots[robot.robot_id] = robot
        logger.debug("Saved %s", robot)

    def find_by_id(self, robot_id: str) -> Optional[Robot]:
        with self._lock:
            return self._robots.get(robot_id)

    def find_all(self) -> Dict[str, Robot]:
        """Snapshot of every registered robot, keyed by id."""
        with self._lock:
            return dict(self._robots)

    def delete(self, robot_id: str) -> None:
        """Remove a robot; unknown ids are ignored."""
        with self._lock:
            removed = self._robots.pop(robot_id, None)
        if removed is not None:
            logger.debug("Deleted %s", robot_id)

    def occupant_at(self, position: Position, exclude_id: Optional[str] = None) -> Optional[Robot]:
        """Return the robot standing on ``position``, other than ``exclude_id``."""
        for robot_id, robot in self.find_all().items():
            if robot_id != exclude_id and robot.position == position:
                return robot
        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._robots)

    def __contains__(self, robot_id: object) -> bool:
        with self._lock:
            return robot_id in self._robots
