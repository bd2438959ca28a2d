"""Built-in scenarios.

Each scenario sets up a room, robot placements and command strings.
run_scenario() registers every robot first, then executes the robots one
after another in listed order.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .domain import Robot, RobotIdGenerator, Room
from .engine import ExecutionResult, SimulationEngine
from .models import RobotSpec, RoomSpec, ScenarioSpec
from .registry import RobotRegistry


def _create_basic_move() -> ScenarioSpec:
    """One robot turns right and steps east."""
    return ScenarioSpec(
        name="basic_move",
        description="Robot at (0, 0) facing N runs 'RF' and ends at (1, 0) facing E",
        room=RoomSpec(width=5, height=5),
        robots=[RobotSpec(x=0, y=0, direction="N", commands="RF")],
    )


def _create_boundary_stop() -> ScenarioSpec:
    """A robot in the top-right corner tries to step north out of the room."""
    return ScenarioSpec(
        name="boundary_stop",
        description="Robot at (4, 4) facing N runs 'F' and is stopped by the wall",
        room=RoomSpec(width=5, height=5),
        robots=[RobotSpec(x=4, y=4, direction="N", commands="F")],
    )


def _create_collision_block() -> ScenarioSpec:
    """A robot tries to step onto a cell another robot is standing on.

    Layout:
    - A at (2, 3) facing S, idle
    - C at (2, 2), idle, blocking the middle cell
    - B at (2, 1) facing N runs 'F' into C
    """
    return ScenarioSpec(
        name="collision_block",
        description="Robot at (2, 1) facing N runs 'F' into a robot parked on (2, 2)",
        room=RoomSpec(width=5, height=5),
        robots=[
            RobotSpec(x=2, y=3, direction="S"),
            RobotSpec(x=2, y=2, direction="E"),
            RobotSpec(x=2, y=1, direction="N", commands="F"),
        ],
    )


def _create_three_robots() -> ScenarioSpec:
    """Three robots each make one turn and one step."""
    return ScenarioSpec(
        name="three_robots",
        description="Three robots run 'RF', 'LF' and 'RF' in turn",
        room=RoomSpec(width=5, height=5),
        robots=[
            RobotSpec(x=0, y=0, direction="N", commands="RF"),
            RobotSpec(x=2, y=2, direction="E", commands="LF"),
            RobotSpec(x=4, y=0, direction="W", commands="RF"),
        ],
    )


# Scenario registry
SCENARIOS: Dict[str, Callable[[], ScenarioSpec]] = {
    "basic_move": _create_basic_move,
    "boundary_stop": _create_boundary_stop,
    "collision_block": _create_collision_block,
    "three_robots": _create_three_robots,
}


def get_scenario(name: str) -> ScenarioSpec:
    """Get a scenario by name.

    Raises:
        ValueError: If no scenario has that name
    """
    if name not in SCENARIOS:
        raise ValueError(f"Unknown scenario: {name}. Available: {list(SCENARIOS.keys())}")
    return SCENARIOS[name]()


@dataclass
class ScenarioRun:
    """Everything a finished scenario run leaves behind."""
    spec: ScenarioSpec
    room: Room
    registry: RobotRegistry
    robots: List[Robot] = field(default_factory=list)
    results: List[ExecutionResult] = field(default_factory=list)


def run_scenario(spec: ScenarioSpec, id_generator: Optional[RobotIdGenerator] = None) -> ScenarioRun:
    """Build the room and robots for ``spec`` and execute every robot in order.

    Args:
        spec: Validated scenario
        id_generator: Id source for the robots; a fresh one by default so
            ids restart at Robot1 for every run

    Returns:
        ScenarioRun with the final registry and one result per robot
    """
    if id_generator is None:
        id_generator = RobotIdGenerator()

    room = spec.room.build()
    registry = RobotRegistry()
    robots = [robot_spec.build(id_generator) for robot_spec in spec.robots]
    for robot in robots:
        registry.save(robot)

    engine = SimulationEngine(room, registry)
    results = engine.execute_all(
        (robot, robot_spec.commands) for robot, robot_spec in zip(robots, spec.robots)
    )
    return ScenarioRun(spec=spec, room=room, registry=registry, robots=robots, results=results)
