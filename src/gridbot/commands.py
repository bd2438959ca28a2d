"""Robot commands and the table that maps command letters to them.

A command is anything with a one-letter ``symbol`` and an
``apply(robot, room, registry)`` method. The engine looks every letter up
in a CommandTable, so new letters can be added by registering another
command rather than editing the engine.

Example:
    class UTurn:
        symbol = "U"

        def apply(self, robot, room, registry):
            robot.turn_right()
            robot.turn_right()

    table = CommandTable.default()
    table.register(UTurn())
"""

import logging
from typing import Dict, List, Protocol, runtime_checkable

from .domain import Robot, Room
from .errors import CollisionError, OutOfBoundsError, UnknownCommandError
from .registry import RobotRegistry

logger = logging.getLogger(__name__)


@runtime_checkable
class Command(Protocol):
    """Protocol for a single-letter robot command."""

    symbol: str

    def apply(self, robot: Robot, room: Room, registry: RobotRegistry) -> None:
        """Apply the command to ``robot``.

        Raises:
            SimulationError: If the command cannot be applied; the robot
                must be left untouched in that case
        """
        ...


class TurnLeft:
    symbol = "L"

    def apply(self, robot: Robot, room: Room, registry: RobotRegistry) -> None:
        robot.turn_left()


class TurnRight:
    symbol = "R"

    def apply(self, robot: Robot, room: Room, registry: RobotRegistry) -> None:
        robot.turn_right()


class MoveForward:
    """Step one cell ahead after checking the room bounds, then other robots."""

    symbol = "F"

    def apply(self, robot: Robot, room: Room, registry: RobotRegistry) -> None:
        target = robot.calculate_next_position()
        if not room.is_within_bounds(target):
            raise OutOfBoundsError(robot.robot_id, target.as_tuple())

        occupant = registry.occupant_at(target, exclude_id=robot.robot_id)
        if occupant is not None:
            raise CollisionError(robot.robot_id, target.as_tuple(), occupant.robot_id)

        robot.move_forward()


class CommandTable:
    """Registry of commands keyed by their symbol."""

    def __init__(self):
        self._commands: Dict[str, Command] = {}

    @classmethod
    def default(cls) -> "CommandTable":
        """Table with the built-in L, R and F commands."""
        table = cls()
        for command in (TurnLeft(), TurnRight(), MoveForward()):
            table.register(command)
        return table

    def register(self, command: Command) -> None:
        """Register a command, replacing any command with the same symbol."""
        if not isinstance(command.symbol, str) or len(command.symbol) != 1:
            raise ValueError(f"Command symbol must be a single character, got {command.symbol!r}")
        self._commands[command.symbol] = command
        logger.debug("Registered command %s -> %s", command.symbol, type(command).__name__)

    def get(self, symbol: str) -> Command:
        """Look up the command for ``symbol``.

        Raises:
            UnknownCommandError: If nothing is registered for ``symbol``
        """
        try:
            return self._commands[symbol]
        except KeyError:
            raise UnknownCommandError(symbol) from None

    def symbols(self) -> List[str]:
        return list(self._commands)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._commands
