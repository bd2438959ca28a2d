"""Top-down rendering of a room and its robots using numpy and Pillow."""

import base64
import io
from typing import Iterable, Tuple

import numpy as np
from PIL import Image, ImageDraw

from .domain import Robot, Room


# Colors (RGB)
COLOR_BG = (240, 240, 240)
COLOR_GRID = (200, 200, 200)
COLOR_HEADING = (255, 255, 255)
ROBOT_COLORS = [
    (0, 100, 200),  # Blue
    (200, 100, 0),  # Orange
    (0, 160, 80),  # Green
    (160, 40, 160),  # Purple
]


def _cell_origin(x: int, y: int, room: Room, cell_size: int) -> Tuple[int, int]:
    """Top-left pixel of cell (x, y); image rows run top-down, y runs bottom-up."""
    return x * cell_size, (room.height - 1 - y) * cell_size


def render_room_array(room: Room, robots: Iterable[Robot], cell_size: int = 16) -> np.ndarray:
    """Render the room as an (H, W, 3) uint8 array with filled robot cells."""
    if cell_size < 3:
        raise ValueError(f"cell_size must be at least 3, got {cell_size}")

    frame = np.empty((room.height * cell_size, room.width * cell_size, 3), dtype=np.uint8)
    frame[:, :] = COLOR_BG
    frame[::cell_size, :] = COLOR_GRID
    frame[:, ::cell_size] = COLOR_GRID

    for i, robot in enumerate(robots):
        if not room.is_within_bounds(robot.position):
            continue
        px, py = _cell_origin(robot.position.x, robot.position.y, room, cell_size)
        frame[py + 1:py + cell_size, px + 1:px + cell_size] = ROBOT_COLORS[i % len(ROBOT_COLORS)]

    return frame


def _draw_heading(draw: ImageDraw.ImageDraw, robot: Robot, room: Room, cell_size: int) -> None:
    """Draw a tick from the cell center towards the robot's heading."""
    px, py = _cell_origin(robot.position.x, robot.position.y, room, cell_size)
    cx = px + cell_size // 2
    cy = py + cell_size // 2
    dx, dy = robot.direction.displacement()
    half = cell_size // 2 - 1
    draw.line([cx, cy, cx + dx * half, cy - dy * half], fill=COLOR_HEADING, width=max(1, cell_size // 8))


def render_room(room: Room, robots: Iterable[Robot], cell_size: int = 16) -> Image.Image:
    """Render the room with robots and heading ticks as a PIL image.

    Args:
        room: Room to draw
        robots: Robots to draw, colored by their order
        cell_size: Pixel size of one cell

    Returns:
        RGB image of (room.width * cell_size) x (room.height * cell_size)
    """
    robots = list(robots)
    img = Image.fromarray(render_room_array(room, robots, cell_size))
    draw = ImageDraw.Draw(img)
    for robot in robots:
        if room.is_within_bounds(robot.position):
            _draw_heading(draw, robot, room, cell_size)
    return img


def render_room_base64(room: Room, robots: Iterable[Robot], cell_size: int = 16) -> str:
    """Render the room as a base64 encoded PNG string."""
    buffer = io.BytesIO()
    render_room(room, robots, cell_size).save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("utf-8")


def save_room_png(room: Room, robots: Iterable[Robot], path: str, cell_size: int = 16) -> None:
    render_room(room, robots, cell_size).save(path, format="PNG")
