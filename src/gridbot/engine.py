"""Command execution engine.

Runs a command string against one robot, letter by letter. Each letter is
looked up in the CommandTable and applied in full before the next one. The
first failure aborts the string: the failing step is not applied, and
steps already applied stay applied. Turns never fail, so after an abort a
robot may face a new direction while its position is the last safe cell
it reached.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .commands import CommandTable
from .domain import Direction, Position, Robot, Room
from .errors import MovementError, SimulationError, UnknownCommandError
from .registry import RobotRegistry

logger = logging.getLogger(__name__)


@dataclass
class StepRecord:
    """Robot state right after one applied command."""
    index: int
    command: str
    position: Position
    direction: Direction

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "command": self.command,
            "x": self.position.x,
            "y": self.position.y,
            "direction": self.direction.symbol,
        }


@dataclass
class ExecutionResult:
    """Outcome of one robot's command string."""
    robot_id: str
    commands: str
    final_position: Position
    final_direction: Direction
    steps: List[StepRecord] = field(default_factory=list)
    error: Optional[SimulationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "robot_id": self.robot_id,
            "commands": self.commands,
            "x": self.final_position.x,
            "y": self.final_position.y,
            "direction": self.final_direction.symbol,
            "steps": [s.to_dict() for s in self.steps],
            "error": self.error.to_dict() if self.error is not None else None,
        }


class SimulationEngine:
    """Applies command strings to robots inside one room.

    Example:
        >>> room = Room(5, 5)
        >>> registry = RobotRegistry()
        >>> robot = Robot(Position(0, 0), Direction.NORTH)
        >>> registry.save(robot)
        >>> steps = SimulationEngine(room, registry).execute_commands(robot, "RF")
        >>> str(robot.position)
        '(1, 0)'
    """

    def __init__(
        self,
        room: Room,
        registry: RobotRegistry,
        command_table: Optional[CommandTable] = None,
    ):
        self.room = room
        self.registry = registry
        self.command_table = command_table if command_table is not None else CommandTable.default()
        logger.info("Simulation engine ready for a %dx%d room", room.width, room.height)

    def execute_commands(self, robot: Robot, commands: str) -> List[StepRecord]:
        """Execute ``commands`` against ``robot`` in order, stopping at the first failure.

        Args:
            robot: Robot to drive; should already be saved in the registry
            commands: Upper-case command letters, e.g. "RFFL"

        Returns:
            One StepRecord per applied command

        Raises:
            UnknownCommandError: For a letter with no registered command
            OutOfBoundsError: If a forward move would leave the room
            CollisionError: If a forward move would land on another robot

            Raised errors carry ``index`` (the failing letter's position)
            and ``applied_steps`` (the records committed before it).
        """
        logger.debug("Executing %r for %s", commands, robot)
        steps: List[StepRecord] = []

        for index, symbol in enumerate(commands):
            try:
                command = self.command_table.get(symbol)
                command.apply(robot, self.room, self.registry)
            except UnknownCommandError as exc:
                exc.index = index
                exc.applied_steps = list(steps)
                logger.error("Invalid command %r at index %d for %s", symbol, index, robot.robot_id)
                raise
            except MovementError as exc:
                exc.index = index
                exc.applied_steps = list(steps)
                logger.warning("Movement stopped for %s at index %d: %s", robot.robot_id, index, exc)
                raise

            steps.append(StepRecord(index, symbol, robot.position, robot.direction))
            logger.debug("%s after %s: %s", robot.robot_id, symbol, robot)

        logger.debug("Finished %r for %s", commands, robot)
        return steps

    def execute_all(self, plan: Iterable[Tuple[Robot, str]]) -> List[ExecutionResult]:
        """Run several robots one after another.

        A failure only ends the failing robot's own command string; the
        next robot still runs.

        Args:
            plan: (robot, commands) pairs in execution order

        Returns:
            One ExecutionResult per pair, in the same order
        """
        results = []
        for robot, commands in plan:
            results.append(self.run(robot, commands))
        return results

    def run(self, robot: Robot, commands: str) -> ExecutionResult:
        """Execute one command string and capture its outcome instead of raising."""
        error: Optional[SimulationError] = None
        try:
            steps = self.execute_commands(robot, commands)
        except SimulationError as exc:
            error = exc
            steps = list(getattr(exc, "applied_steps", []))

        return ExecutionResult(
            robot_id=robot.robot_id,
            commands=commands,
            final_position=robot.position,
            final_direction=robot.direction,
            steps=steps,
            error=error,
        )
