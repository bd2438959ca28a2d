"""Tests for gridbot.engine.

Tests:
- Reference scenarios (basic move, boundary, collision, three robots)
- Bounds and no-overlap invariants under random command strings
- Fail-fast semantics: earlier steps kept, failing step not applied
- execute_all keeps going after a failing robot
"""

import random

import pytest

from gridbot.domain import Direction, Position, Robot, RobotIdGenerator, Room
from gridbot.engine import SimulationEngine, StepRecord
from gridbot.errors import CollisionError, OutOfBoundsError, UnknownCommandError
from gridbot.registry import RobotRegistry


@pytest.fixture
def room():
    return Room(5, 5)


@pytest.fixture
def registry():
    return RobotRegistry()


@pytest.fixture
def engine(room, registry):
    return SimulationEngine(room, registry)


def _place(registry, x, y, direction, ids=None):
    robot = Robot(Position(x, y), direction, id_generator=ids)
    registry.save(robot)
    return robot


class TestScenarios:
    """Reference scenarios on a 5x5 room."""

    def test_turn_then_move(self, engine, registry):
        robot = _place(registry, 0, 0, Direction.NORTH)
        engine.execute_commands(robot, "RF")

        assert robot.position == Position(1, 0)
        assert robot.direction is Direction.EAST

    def test_wall_stops_robot(self, engine, registry):
        robot = _place(registry, 4, 4, Direction.NORTH)
        with pytest.raises(OutOfBoundsError):
            engine.execute_commands(robot, "F")
        assert robot.position == Position(4, 4)

    def test_collision_with_parked_robot(self, engine, registry):
        _place(registry, 2, 3, Direction.SOUTH)
        b = _place(registry, 2, 1, Direction.NORTH)
        _place(registry, 2, 2, Direction.EAST)

        with pytest.raises(CollisionError):
            engine.execute_commands(b, "F")
        assert b.position == Position(2, 1)

    def test_three_robots_in_sequence(self, engine, registry):
        ids = RobotIdGenerator()
        a = _place(registry, 0, 0, Direction.NORTH, ids)
        b = _place(registry, 2, 2, Direction.EAST, ids)
        c = _place(registry, 4, 0, Direction.WEST, ids)

        engine.execute_commands(a, "RF")
        engine.execute_commands(b, "LF")
        engine.execute_commands(c, "RF")

        assert (a.position, a.direction) == (Position(1, 0), Direction.EAST)
        assert (b.position, b.direction) == (Position(2, 3), Direction.NORTH)
        assert (c.position, c.direction) == (Position(4, 1), Direction.NORTH)

    def test_west_wall_at_origin(self, engine, registry):
        robot = _place(registry, 0, 0, Direction.WEST)
        with pytest.raises(OutOfBoundsError) as exc_info:
            engine.execute_commands(robot, "F")
        assert exc_info.value.target == (-1, 0)
        assert robot.position == Position(0, 0)


class TestFailFast:
    """Abort at the first failing command."""

    def test_earlier_steps_kept(self, engine, registry):
        robot = _place(registry, 0, 3, Direction.NORTH)
        with pytest.raises(OutOfBoundsError) as exc_info:
            engine.execute_commands(robot, "FRFLFRR")

        # F -> (0,4), R -> E, F -> (1,4), L -> N, F fails at index 4
        err = exc_info.value
        assert err.index == 4
        assert robot.position == Position(1, 4)
        assert robot.direction is Direction.NORTH
        assert [s.command for s in err.applied_steps] == ["F", "R", "F", "L"]

    def test_turns_before_failure_stay_applied(self, engine, registry):
        robot = _place(registry, 4, 0, Direction.NORTH)
        with pytest.raises(OutOfBoundsError):
            engine.execute_commands(robot, "RFLL")
        assert robot.direction is Direction.EAST
        assert robot.position == Position(4, 0)

    def test_unknown_command_aborts(self, engine, registry):
        robot = _place(registry, 1, 1, Direction.NORTH)
        with pytest.raises(UnknownCommandError) as exc_info:
            engine.execute_commands(robot, "FXF")
        assert exc_info.value.index == 1
        assert exc_info.value.command == "X"
        assert robot.position == Position(1, 2)

    def test_lower_case_rejected(self, engine, registry):
        robot = _place(registry, 1, 1, Direction.NORTH)
        with pytest.raises(UnknownCommandError):
            engine.execute_commands(robot, "f")
        assert robot.position == Position(1, 1)

    def test_collision_index(self, engine, registry):
        mover = _place(registry, 0, 0, Direction.EAST)
        _place(registry, 2, 0, Direction.NORTH)
        with pytest.raises(CollisionError) as exc_info:
            engine.execute_commands(mover, "FF")
        assert exc_info.value.index == 1
        assert mover.position == Position(1, 0)


class TestStepRecords:
    """Test returned step records."""

    def test_one_record_per_command(self, engine, registry):
        robot = _place(registry, 0, 0, Direction.NORTH)
        steps = engine.execute_commands(robot, "FRF")

        assert steps == [
            StepRecord(0, "F", Position(0, 1), Direction.NORTH),
            StepRecord(1, "R", Position(0, 1), Direction.EAST),
            StepRecord(2, "F", Position(1, 1), Direction.EAST),
        ]
        assert steps[2].to_dict() == {"index": 2, "command": "F", "x": 1, "y": 1, "direction": "E"}

    def test_empty_commands(self, engine, registry):
        robot = _place(registry, 0, 0, Direction.NORTH)
        assert engine.execute_commands(robot, "") == []
        assert robot.position == Position(0, 0)


class TestExecuteAll:
    """Test running several robots in sequence."""

    def test_failure_does_not_stop_next_robot(self, engine, registry):
        ids = RobotIdGenerator()
        a = _place(registry, 4, 4, Direction.NORTH, ids)
        b = _place(registry, 0, 0, Direction.NORTH, ids)

        results = engine.execute_all([(a, "F"), (b, "FF")])

        assert [r.robot_id for r in results] == ["Robot1", "Robot2"]
        assert not results[0].ok
        assert isinstance(results[0].error, OutOfBoundsError)
        assert results[1].ok
        assert results[1].final_position == Position(0, 2)

    def test_later_robot_sees_settled_positions(self, engine, registry):
        """A robot's final cell blocks the robots that run after it."""
        a = _place(registry, 0, 0, Direction.EAST)
        b = _place(registry, 2, 1, Direction.SOUTH)

        results = engine.execute_all([(a, "FF"), (b, "F")])

        assert results[0].ok
        assert isinstance(results[1].error, CollisionError)
        assert b.position == Position(2, 1)

    def test_result_to_dict(self, engine, registry):
        robot = _place(registry, 4, 4, Direction.NORTH)
        result = engine.run(robot, "RF")
        data = result.to_dict()

        assert data["x"] == 4 and data["y"] == 4
        assert data["direction"] == "E"
        assert data["error"]["kind"] == "OutOfBounds"
        assert len(data["steps"]) == 1


class TestInvariants:
    """Bounds and no-overlap hold for any command strings."""

    @pytest.mark.parametrize("seed", range(20))
    def test_random_command_strings(self, seed):
        rng = random.Random(seed)
        room = Room(rng.randint(1, 6), rng.randint(1, 6))
        registry = RobotRegistry()
        engine = SimulationEngine(room, registry)

        cells = [(x, y) for x in range(room.width) for y in range(room.height)]
        rng.shuffle(cells)
        robots = []
        for x, y in cells[:min(3, len(cells))]:
            robots.append(_place(registry, x, y, rng.choice(list(Direction))))

        for robot in robots:
            commands = "".join(rng.choice("LRF") for _ in range(rng.randint(0, 15)))
            before = robot.position
            result = engine.run(robot, commands)
            if result.error is not None:
                expected = result.steps[-1].position if result.steps else before
                assert robot.position == expected

            positions = [r.position for r in registry.find_all().values()]
            assert len(set(positions)) == len(positions)
            for p in positions:
                assert room.is_within_bounds(p)
