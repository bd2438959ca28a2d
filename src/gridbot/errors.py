"""Error types raised by the grid simulator.

Every error derives from SimulationError and carries a stable ``kind``
string so callers (the CLI, trace writers) can report it without caring
about the Python class.
"""

from typing import Any, Dict, List, Optional, Tuple


class SimulationError(Exception):
    """Base class for all simulator errors."""

    kind: str = "SimulationError"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "message": str(self)}


class InvalidDimensionsError(SimulationError, ValueError):
    """Room constructed with a non-positive width or height."""

    kind = "InvalidDimensions"

    def __init__(self, width: int, height: int):
        super().__init__(f"Room dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height


class InvalidPositionError(SimulationError, ValueError):
    """Position constructed with a negative coordinate."""

    kind = "InvalidPosition"

    def __init__(self, x: int, y: int):
        super().__init__(f"Position coordinates cannot be negative, got ({x}, {y})")
        self.x = x
        self.y = y


class InvalidDirectionSymbolError(SimulationError, ValueError):
    """Direction parsed from a symbol outside N, E, S, W."""

    kind = "InvalidDirectionSymbol"

    def __init__(self, symbol: Any):
        super().__init__(f"Invalid direction symbol {symbol!r}. Valid directions are: N, E, S, W")
        self.symbol = symbol


class UnknownCommandError(SimulationError, ValueError):
    """Command character that no command is registered for."""

    kind = "UnknownCommand"

    def __init__(self, command: str, index: Optional[int] = None):
        super().__init__(f"Unknown command: {command!r}")
        self.command = command
        self.index = index
        self.applied_steps: List[Any] = []


class MovementError(SimulationError):
    """A forward move was refused; the robot did not move.

    Attributes:
        robot_id: Robot that attempted the move
        target: (x, y) cell the move aimed at; may hold negative values
        index: Position of the failing command in its command string,
            filled in by the engine
        applied_steps: Steps committed before the failure, filled in by
            the engine
    """

    kind = "Movement"

    def __init__(self, message: str, robot_id: str, target: Tuple[int, int]):
        super().__init__(message)
        self.robot_id = robot_id
        self.target = target
        self.index: Optional[int] = None
        self.applied_steps: List[Any] = []


class OutOfBoundsError(MovementError):
    """Forward move whose target cell lies outside the room."""

    kind = "OutOfBounds"

    def __init__(self, robot_id: str, target: Tuple[int, int]):
        super().__init__(
            f"{robot_id} would move outside room bounds to {target}",
            robot_id,
            target,
        )


class CollisionError(MovementError):
    """Forward move whose target cell is held by another registered robot."""

    kind = "Collision"

    def __init__(self, robot_id: str, target: Tuple[int, int], occupant_id: str):
        super().__init__(
            f"{robot_id} would collide with {occupant_id} at {target}",
            robot_id,
            target,
        )
        self.occupant_id = occupant_id
