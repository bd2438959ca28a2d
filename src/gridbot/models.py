"""
Input models for the grid simulator.

Validates user- or file-supplied room, robot and scenario descriptions
before they are turned into domain objects.
"""

import re
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .domain import Direction, Position, Robot, RobotIdGenerator, Room


COMMANDS_PATTERN = re.compile(r"^[LRF]*$")

MAX_ROBOTS = 3


class RoomSpec(BaseModel):
    """Room dimensions.

    Attributes:
        width: Number of columns (x runs from 0 to width - 1)
        height: Number of rows (y runs from 0 to height - 1)
    """
    width: int = Field(..., gt=0, description="Room width in cells")
    height: int = Field(..., gt=0, description="Room height in cells")

    def build(self) -> Room:
        return Room(self.width, self.height)


class RobotSpec(BaseModel):
    """Starting placement and command string for one robot.

    Attributes:
        x: Starting column
        y: Starting row
        direction: Heading symbol, normalised to upper case ("N", "E", "S", "W")
        commands: Command letters, normalised to upper case
    """
    x: int = Field(..., ge=0, description="Starting x coordinate")
    y: int = Field(..., ge=0, description="Starting y coordinate")
    direction: str = Field(..., description="Heading symbol: N, E, S or W")
    commands: str = Field(default="", description="Command letters L, R, F")

    @field_validator("direction")
    @classmethod
    def _normalise_direction(cls, value: str) -> str:
        return Direction.from_symbol(value.strip()).symbol

    @field_validator("commands")
    @classmethod
    def _normalise_commands(cls, value: str) -> str:
        value = value.strip().upper()
        if not COMMANDS_PATTERN.match(value):
            raise ValueError("Commands may only contain L, R and F")
        return value

    @classmethod
    def parse_placement(cls, line: str, commands: str = "") -> "RobotSpec":
        """Parse a placement line such as ``"2 3 N"``.

        Raises:
            ValueError: If the line does not hold exactly ``x y direction``
                or a value is invalid (pydantic's ValidationError is a
                ValueError)
        """
        parts = line.split()
        if len(parts) != 3:
            raise ValueError(f"Expected 'x y direction', got {line!r}")
        x, y = int(parts[0]), int(parts[1])
        return cls(x=x, y=y, direction=parts[2], commands=commands)

    @property
    def position(self) -> Position:
        return Position(self.x, self.y)

    def build(self, id_generator: Optional[RobotIdGenerator] = None) -> Robot:
        return Robot(self.position, Direction.from_symbol(self.direction), id_generator=id_generator)


class ScenarioSpec(BaseModel):
    """A room with up to three robots and their command strings."""
    name: str = Field(..., description="Scenario identifier")
    description: str = Field(default="", description="Human readable summary")
    room: RoomSpec
    robots: List[RobotSpec] = Field(..., min_length=1, max_length=MAX_ROBOTS)

    @model_validator(mode="after")
    def _check_placements(self) -> "ScenarioSpec":
        seen = set()
        for i, robot in enumerate(self.robots):
            if robot.x >= self.room.width or robot.y >= self.room.height:
                raise ValueError(
                    f"Robot {i} starts at ({robot.x}, {robot.y}), outside the "
                    f"{self.room.width}x{self.room.height} room"
                )
            cell = (robot.x, robot.y)
            if cell in seen:
                raise ValueError(f"Robot {i} starts on occupied cell {cell}")
            seen.add(cell)
        return self
