"""
Grid robot movement simulator.

Modules:
    domain: Position, Direction, Room and Robot types
    registry: Thread-safe registry of active robots
    commands: Single-letter robot commands and the command table
    engine: Command execution with bounds and collision checks
    models: Validated input models for rooms, robots and scenarios
    scenarios: Built-in scenarios
    trace: JSONL execution traces
    render: Top-down PNG rendering
    cli: Interactive and scenario-driven command line
"""

from importlib import metadata

from .commands import Command, CommandTable, MoveForward, TurnLeft, TurnRight
from .domain import Direction, Position, Robot, RobotIdGenerator, Room
from .engine import ExecutionResult, SimulationEngine, StepRecord
from .errors import (
    CollisionError,
    InvalidDimensionsError,
    InvalidDirectionSymbolError,
    InvalidPositionError,
    MovementError,
    OutOfBoundsError,
    SimulationError,
    UnknownCommandError,
)
from .registry import RobotRegistry

__all__ = [
    "Command",
    "CommandTable",
    "MoveForward",
    "TurnLeft",
    "TurnRight",
    "Direction",
    "Position",
    "Robot",
    "RobotIdGenerator",
    "Room",
    "ExecutionResult",
    "SimulationEngine",
    "StepRecord",
    "CollisionError",
    "InvalidDimensionsError",
    "InvalidDirectionSymbolError",
    "InvalidPositionError",
    "MovementError",
    "OutOfBoundsError",
    "SimulationError",
    "UnknownCommandError",
    "RobotRegistry",
]

try:
    __version__ = metadata.version("gridbot")  # type: ignore[arg-type]
except metadata.PackageNotFoundError:  # pragma: no cover - local dev
    __version__ = "0.0.0"
