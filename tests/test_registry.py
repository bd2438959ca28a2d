"""Tests for gridbot.registry."""

import threading

from gridbot.domain import Direction, Position, Robot
from gridbot.registry import RobotRegistry


def _robot(x, y, robot_id):
    return Robot(Position(x, y), Direction.NORTH, robot_id=robot_id)


class TestRobotRegistry:
    """Test registry CRUD and snapshots."""

    def test_save_and_find(self):
        registry = RobotRegistry()
        robot = _robot(0, 0, "a")
        registry.save(robot)

        assert registry.find_by_id("a") is robot
        assert registry.find_by_id("missing") is None
        assert "a" in registry
        assert len(registry) == 1

    def test_save_overwrites_same_id(self):
        registry = RobotRegistry()
        registry.save(_robot(0, 0, "a"))
        replacement = _robot(3, 3, "a")
        registry.save(replacement)

        assert len(registry) == 1
        assert registry.find_by_id("a") is replacement

    def test_delete(self):
        registry = RobotRegistry()
        registry.save(_robot(0, 0, "a"))
        registry.delete("a")
        registry.delete("a")  # missing ids are ignored

        assert registry.find_by_id("a") is None
        assert len(registry) == 0

    def test_find_all_is_snapshot(self):
        """Mutating the returned mapping must not touch the registry."""
        registry = RobotRegistry()
        registry.save(_robot(0, 0, "a"))

        snapshot = registry.find_all()
        snapshot.pop("a")
        registry.save(_robot(1, 1, "b"))

        assert set(registry.find_all()) == {"a", "b"}
        assert snapshot == {}

    def test_occupant_at(self):
        registry = RobotRegistry()
        a = _robot(2, 2, "a")
        registry.save(a)

        assert registry.occupant_at(Position(2, 2)) is a
        assert registry.occupant_at(Position(2, 2), exclude_id="a") is None
        assert registry.occupant_at(Position(0, 0)) is None

    def test_concurrent_saves(self):
        registry = RobotRegistry()

        def worker(offset):
            for i in range(50):
                registry.save(_robot(i, offset, f"r{offset}-{i}"))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(registry) == 200
