"""JSONL execution traces.

Turns ExecutionResults into flat log entries, one JSON object per line:
a "room" entry describing the room (when known), one "step" entry per
applied command and one "summary" entry per robot.
"""

import json
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional

from .domain import Room
from .engine import ExecutionResult


@dataclass
class TraceEntry:
    """A single trace line."""
    entry_type: str  # "room", "step" or "summary"
    robot_id: Optional[str]
    timestamp: float
    step: Optional[int] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entry_type": self.entry_type,
            "robot_id": self.robot_id,
            "timestamp": self.timestamp,
            "step": self.step,
            "data": self.data,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


def results_to_entries(
    results: Iterable[ExecutionResult],
    room: Optional[Room] = None,
) -> List[TraceEntry]:
    """Convert execution results to trace entries.

    Args:
        results: Results in execution order
        room: Room the results ran in; adds a leading "room" entry

    Returns:
        List of TraceEntry objects
    """
    entries = []
    ts = time.time()

    if room is not None:
        entries.append(TraceEntry(entry_type="room", robot_id=None, timestamp=ts, data=room.to_dict()))

    for result in results:
        for record in result.steps:
            entries.append(TraceEntry(
                entry_type="step",
                robot_id=result.robot_id,
                timestamp=ts,
                step=record.index,
                data=record.to_dict(),
            ))

        summary = result.to_dict()
        summary.pop("steps")
        if result.error is not None:
            summary["failed_index"] = getattr(result.error, "index", None)
        entries.append(TraceEntry(
            entry_type="summary",
            robot_id=result.robot_id,
            timestamp=ts,
            step=len(result.steps),
            data=summary,
        ))

    return entries


def write_jsonl(entries: List[TraceEntry], filepath: str, append: bool = False) -> int:
    """Write trace entries to a JSONL file.

    Returns:
        Number of entries written
    """
    mode = "a" if append else "w"
    with open(filepath, mode) as f:
        for entry in entries:
            f.write(entry.to_json() + "\n")
    return len(entries)


def read_jsonl(filepath: str) -> Iterator[TraceEntry]:
    """Read trace entries back from a JSONL file, skipping blank lines."""
    with open(filepath, "r") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            data = json.loads(line)
            yield TraceEntry(
                entry_type=data["entry_type"],
                robot_id=data.get("robot_id"),
                timestamp=data["timestamp"],
                step=data.get("step"),
                data=data.get("data", {}),
            )
