from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

EMPTY = -1
BLOCKED = -2

Cell = Tuple[int, int]
Grid = List[List[int]]

# Session states
STATUS_READY = "Ready"
STATUS_RUNNING = "Running"
STATUS_SOLVED = "Solved"
STATUS_EXHAUSTED = "Exhausted"
STATUS_TIMED_OUT = "TimedOut"
STATUS_STOPPED = "StoppedExternally"
STATUS_INVALID = "InvalidBoard"


@dataclass(frozen=True)
class Shape:
    index: int
    name: str
    cells: Tuple[Cell, ...]


@dataclass(frozen=True)
class Orientation:
    piece_id: int
    cells: Tuple[Cell, ...]
    lead: Cell  # row-major first cell

    @property
    def width(self) -> int:
        return max(x for x, _ in self.cells) + 1

    @property
    def height(self) -> int:
        return max(y for _, y in self.cells) + 1


@dataclass
class SearchState:
    start_time: float
    piece_index: int = 0
    steps_explored: int = 0
    solutions_found: int = 0
    should_stop: bool = False
    stop_requested: bool = False
    timed_out: bool = False
    finish_time: Optional[float] = None
    solutions: List[Grid] = field(default_factory=list)
    # interrupt hook for a search running in native code (CP-SAT)
    cancel: Optional[Callable[[], None]] = None

    def elapsed_ms(self, now: float) -> int:
        end = self.finish_time if self.finish_time is not None else now
        return max(0, int((end - self.start_time) * 1000))


@dataclass
class SolveResult:
    success: bool
    status: str
    strategy: str
    solutions_found: int = 0
    steps_explored: int = 0
    solving_time: int = 0
    timeout: bool = False
    error: Optional[str] = None
    solutions: List[Grid] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "success": self.success,
            "status": self.status,
            "strategy": self.strategy,
            "solutions_found": self.solutions_found,
            "steps_explored": self.steps_explored,
            "solving_time": self.solving_time,
            "solutions": [[list(row) for row in grid] for grid in self.solutions],
        }
        if self.timeout:
            out["timeout"] = True
        if self.error:
            out["error"] = self.error
        return out


@dataclass(frozen=True)
class BoardPreset:
    id: str
    name: str
    description: str
    width: int
    height: int
    blocked_cells: Tuple[Cell, ...] = ()
    difficulty: str = "medium"
    solution_count: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "width": self.width,
            "height": self.height,
            "blocked_cells": [list(c) for c in self.blocked_cells],
            "difficulty": self.difficulty,
            "solution_count": self.solution_count,
        }
