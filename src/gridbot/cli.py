"""
Command line front end for the grid simulator.

Interactive mode asks for the room, the number of robots, and then each
robot's placement and commands in turn. Scenario mode runs a built-in
scenario without prompting.

Usage:
    gridbot
    gridbot --scenario three_robots --trace runs/three.jsonl --render runs/three.png
    GRIDBOT_LOG_LEVEL=DEBUG gridbot --scenario boundary_stop
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional, TextIO

from .domain import Robot, RobotIdGenerator, Room
from .engine import ExecutionResult, SimulationEngine
from .errors import SimulationError
from .logging_config import configure_logging
from .models import COMMANDS_PATTERN, MAX_ROBOTS, RobotSpec, RoomSpec
from .registry import RobotRegistry
from .render import save_room_png
from .scenarios import SCENARIOS, get_scenario, run_scenario
from .trace import results_to_entries, write_jsonl

logger = logging.getLogger(__name__)

BANNER = [
    "=================================",
    "Welcome to the grid robot simulator",
    "=================================",
    "This simulator allows you to:",
    "- Create a room with custom dimensions",
    "- Place up to three robots in the room",
    "- Control robots using L, R and F commands",
    "- Avoid collisions and boundary violations",
    "=================================",
]

SAFE_STOP_MESSAGE = "Movement stopped - robot is at safe position"


class InteractiveSession:
    """Prompt-driven simulation of up to three robots.

    Args:
        input_fn: Called with no arguments to read one line of input
        out: Stream for prompts and results
        id_generator: Id source for created robots
    """

    def __init__(
        self,
        input_fn: Callable[[], str] = input,
        out: TextIO = sys.stdout,
        id_generator: Optional[RobotIdGenerator] = None,
    ):
        self._input = input_fn
        self._out = out
        self._ids = id_generator or RobotIdGenerator()
        self.room: Optional[Room] = None
        self.registry = RobotRegistry()
        self.engine: Optional[SimulationEngine] = None
        self.robots: List[Robot] = []
        self.results: List[ExecutionResult] = []

    def say(self, message: str = "") -> None:
        print(message, file=self._out)

    def ask(self, prompt: str) -> str:
        self._out.write(prompt)
        self._out.flush()
        return self._input().strip()

    def run(self) -> List[ExecutionResult]:
        """Run the full interactive flow and return one result per executed robot."""
        for line in BANNER:
            self.say(line)

        self.room = self.setup_room()
        self.engine = SimulationEngine(self.room, self.registry)

        count = self.ask_robot_count()
        for number in range(1, count + 1):
            self.say()
            self.say(f"Setting up Robot{number} of {count}")
            try:
                self.handle_robot(number)
            except SimulationError as exc:
                self.say(f"Invalid input for Robot{number}, moving on to the next robot")
                logger.debug("Robot%d setup failed: %s", number, exc)

        self.say()
        self.say("Simulation ended successfully")
        return self.results

    def setup_room(self) -> Room:
        self.say()
        self.say("STEP 1: Room Setup")
        while True:
            line = self.ask("Enter room dimensions (width height), e.g. '5 5': ")
            parts = line.split()
            try:
                if len(parts) != 2:
                    raise ValueError(f"Expected two numbers, got {line!r}")
                room = RoomSpec(width=int(parts[0]), height=int(parts[1])).build()
            except ValueError as exc:
                logger.debug("Rejected room input %r: %s", line, exc)
                self.say("Room needs two positive numbers. Example: '5 5'")
                continue
            self.say(f"Room created with dimensions: {room.width}x{room.height}")
            return room

    def ask_robot_count(self) -> int:
        self.say()
        while True:
            line = self.ask(f"How many robots would you like to add? (1-{MAX_ROBOTS}): ")
            try:
                count = int(line)
            except ValueError:
                self.say(f"Please enter a valid number (1-{MAX_ROBOTS})")
                continue
            if 1 <= count <= MAX_ROBOTS:
                return count
            self.say(f"Please enter a number between 1 and {MAX_ROBOTS}")

    def handle_robot(self, number: int) -> Optional[ExecutionResult]:
        """Create, register and drive one robot."""
        robot = self.create_robot(number)
        self.registry.save(robot)
        self.robots.append(robot)

        commands = self.ask_commands(number)
        result = self.engine.run(robot, commands)
        self.results.append(result)

        self.say()
        if result.ok:
            self.say("Movement completed successfully!")
        else:
            self.say(SAFE_STOP_MESSAGE)
            self.say(f"Reason: {result.error}")
        self.say(f"Position of the robot: {robot}")
        return result

    def create_robot(self, number: int) -> Robot:
        """Ask for a placement until it parses and lands on a free cell in the room."""
        while True:
            self.say()
            self.say(f"Robot{number} - Enter position and direction:")
            self.say("Format: 'x y direction' (Example: '2 3 N')")
            self.say("- x and y: numbers between 0 and room size - 1")
            self.say("- direction: N (North), E (East), S (South), W (West)")
            line = self.ask(f"Robot{number} position: ")
            try:
                spec = RobotSpec.parse_placement(line)
            except ValueError as exc:
                logger.debug("Rejected placement %r for Robot%d: %s", line, number, exc)
                self.say(f"Robot{number} needs 'x y direction' with non-negative numbers. Example: '2 3 N'")
                continue

            if not self.room.contains(spec.x, spec.y):
                self.say(f"({spec.x}, {spec.y}) is outside the {self.room.width}x{self.room.height} room")
                continue
            occupant = self.registry.occupant_at(spec.position)
            if occupant is not None:
                self.say(f"({spec.x}, {spec.y}) is already occupied by {occupant.robot_id}")
                continue

            robot = spec.build(self._ids)
            self.say(f"Created {robot}")
            return robot

    def ask_commands(self, number: int) -> str:
        while True:
            self.say()
            self.say(f"Robot{number} - Enter movement commands:")
            self.say("- L: Turn Left")
            self.say("- R: Turn Right")
            self.say("- F: Move Forward")
            commands = self.ask(f"Robot{number} commands: ").upper()
            logger.debug("Received commands for Robot%d: %s", number, commands)
            if commands and COMMANDS_PATTERN.match(commands):
                return commands
            self.say(f"Invalid command for Robot{number}! Please use only L, R, or F")
            self.say("Examples: 'LRF', 'FFRL', 'RFRFRF'")


def _print_results(results: List[ExecutionResult], out: TextIO) -> None:
    for result in results:
        status = "ok" if result.ok else f"stopped ({result.error.kind}: {result.error})"
        print(
            f"{result.robot_id}: {result.commands or '-'} -> "
            f"{result.final_position} facing {result.final_direction.symbol} [{status}]",
            file=out,
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gridbot", description="Grid robot movement simulator")
    parser.add_argument(
        "--scenario",
        choices=sorted(SCENARIOS),
        help="Run a built-in scenario instead of prompting",
    )
    parser.add_argument("--trace", metavar="PATH", help="Write a JSONL trace of the run")
    parser.add_argument("--render", metavar="PATH", help="Write a PNG of the final room")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: $GRIDBOT_LOG_LEVEL or WARNING)",
    )
    return parser


def main(
    argv: Optional[List[str]] = None,
    input_fn: Callable[[], str] = input,
    out: TextIO = sys.stdout,
) -> int:
    """Entry point for the ``gridbot`` console script."""
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)

    if args.scenario:
        spec = get_scenario(args.scenario)
        print(f"Scenario {spec.name}: {spec.description}", file=out)
        scenario_run = run_scenario(spec)
        room, robots, results = scenario_run.room, scenario_run.robots, scenario_run.results
        _print_results(results, out)
    else:
        session = InteractiveSession(input_fn=input_fn, out=out)
        try:
            results = session.run()
        except (EOFError, KeyboardInterrupt):
            print("\nSimulation aborted", file=out)
            return 1
        room, robots = session.room, session.robots

    if args.trace:
        count = write_jsonl(results_to_entries(results, room), args.trace)
        print(f"Wrote {count} trace entries to {args.trace}", file=out)
    if args.render:
        save_room_png(room, robots, args.render)
        print(f"Saved room image to {args.render}", file=out)

    return 0


if __name__ == "__main__":
    sys.exit(main())
