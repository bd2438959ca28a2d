"""Domain types for the grid simulator."""

from .geometry import Direction, Position, Room
from .robot import Robot, RobotIdGenerator

__all__ = ["Direction", "Position", "Room", "Robot", "RobotIdGenerator"]
