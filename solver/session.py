# solver/session.py
from __future__ import annotations

import time
from typing import Any, Dict, Iterable, Optional

from config import CFG
from models import (
    STATUS_EXHAUSTED,
    STATUS_INVALID,
    STATUS_RUNNING,
    STATUS_SOLVED,
    STATUS_STOPPED,
    STATUS_TIMED_OUT,
    Cell,
    Grid,
    SearchState,
    SolveResult,
)
from pieces import REQUIRED_EMPTY_CELLS
from progress import ProgressReporter
from solver.backtracking import anchored_search, window_search
from solver.board import Board
from solver.orientations import ORIENTATIONS

STRATEGIES = ("anchored", "window", "cp_sat")


def _coerce_strategy(value: Any) -> str:
    name = str(value or "").strip().lower().replace("-", "_")
    if name not in STRATEGIES:
        raise ValueError(f"Unknown strategy {value!r} (expected one of {', '.join(STRATEGIES)})")
    return name


class PentominoSolver:
    """One solving session: a board, its limits and the state of the last run.

    ``solve`` runs synchronously in the calling thread.  ``stop`` and
    ``get_progress`` may be called from another thread while it runs; they set
    the stop flag (and interrupt CP-SAT when it is running) or read counters.
    """

    def __init__(self, *, label: str = "session", cfg=CFG) -> None:
        self.board = Board()
        self.max_solutions = int(cfg.MAX_SOLUTIONS)
        self.max_time_ms = int(cfg.MAX_TIME_MS)
        self.strategy = _coerce_strategy(cfg.STRATEGY)
        self.search_radius = max(0, int(cfg.SEARCH_RADIUS))
        self.reporter = ProgressReporter(label)
        self._state: Optional[SearchState] = None
        self._pending: Optional[SearchState] = None
        self.last_result: Optional[SolveResult] = None

    # ------------------------------
    # Configuration
    # ------------------------------

    @property
    def status(self) -> str:
        return self.reporter.status

    def init_board(self, width: int, height: int, blocked_cells: Iterable[Cell] = ()) -> None:
        self.board.init(width, height, blocked_cells)
        self._state = None
        self._pending = None
        self.last_result = None
        self.reporter.reset()

    def set_config(
        self,
        max_solutions: int,
        max_time_ms: int,
        *,
        strategy: Optional[str] = None,
        search_radius: Optional[int] = None,
    ) -> None:
        try:
            max_solutions = int(max_solutions)
            max_time_ms = int(max_time_ms)
            radius = self.search_radius if search_radius is None else int(search_radius)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Bad solver limits: {e}") from e
        name = self.strategy if strategy is None else _coerce_strategy(strategy)

        self.max_solutions = max_solutions
        self.max_time_ms = max_time_ms
        self.search_radius = max(0, radius)
        self.strategy = name

    # ------------------------------
    # Solve
    # ------------------------------

    def _finish(self, state: SearchState, found: bool) -> SolveResult:
        state.finish_time = time.monotonic()
        if not found and state.solutions:
            # The search unwound past the last solution; show it again.
            self.board.load(state.solutions[-1])

        if state.timed_out:
            status = STATUS_TIMED_OUT
        elif state.solutions_found > 0:
            status = STATUS_SOLVED
        elif state.stop_requested:
            status = STATUS_STOPPED
        else:
            status = STATUS_EXHAUSTED

        return SolveResult(
            success=True,
            status=status,
            strategy=self.strategy,
            solutions_found=state.solutions_found,
            steps_explored=state.steps_explored,
            solving_time=state.elapsed_ms(state.finish_time),
            timeout=state.timed_out,
            solutions=list(state.solutions),
        )

    def _run(self, state: SearchState) -> bool:
        if self.strategy == "window":
            return window_search(
                self.board,
                state,
                max_solutions=self.max_solutions,
                max_time_ms=self.max_time_ms,
                radius=self.search_radius,
                orientations=ORIENTATIONS,
            )
        if self.strategy == "cp_sat":
            from solver.cp_sat import cp_sat_search  # OR-Tools only when asked for

            return cp_sat_search(
                self.board,
                state,
                max_solutions=self.max_solutions,
                max_time_ms=self.max_time_ms,
                orientations=ORIENTATIONS,
            )
        return anchored_search(
            self.board,
            state,
            max_solutions=self.max_solutions,
            max_time_ms=self.max_time_ms,
            orientations=ORIENTATIONS,
        )

    def prepare_run(self) -> None:
        """Create the next run's state ahead of ``solve``.

        Used when ``solve`` is about to start on another thread: a ``stop()``
        issued in between is kept on the prepared state and ends the run at
        its first node.
        """
        self._pending = SearchState(start_time=time.monotonic())
        self._state = self._pending
        self.reporter.set_status(STATUS_RUNNING)

    def solve(self) -> SolveResult:
        state = self._pending or SearchState(start_time=time.monotonic())
        self._pending = None
        state.start_time = time.monotonic()
        self._state = state

        empty = self.board.count_empty()
        if empty != REQUIRED_EMPTY_CELLS:
            state.finish_time = state.start_time
            result = SolveResult(
                success=False,
                status=STATUS_INVALID,
                strategy=self.strategy,
                error=(
                    f"Invalid board: need exactly {REQUIRED_EMPTY_CELLS} empty cells "
                    f"(found {empty})"
                ),
            )
            self.reporter.set_status(STATUS_INVALID)
            self.reporter.run_finished(result)
            self.last_result = result
            return result

        self.reporter.run_started(
            self.strategy,
            board=f"{self.board.width}x{self.board.height}",
            limits=f"solutions:{self.max_solutions},time_ms:{self.max_time_ms}",
        )
        self.reporter.set_status(STATUS_RUNNING)
        found = self._run(state)
        result = self._finish(state, found)
        self.reporter.run_finished(result)
        self.last_result = result
        return result

    # ------------------------------
    # Queries / control
    # ------------------------------

    def get_board(self) -> Grid:
        return self.board.snapshot()

    def stop(self) -> None:
        state = self._state
        if state is not None:
            state.stop_requested = True
            state.should_stop = True
            cancel = state.cancel
            if cancel is not None:
                cancel()
        self.reporter.stop_requested()

    def get_progress(self) -> Dict[str, Any]:
        return self.reporter.snapshot(self._state)

    def is_running(self) -> bool:
        return self.status == STATUS_RUNNING


__all__ = ["PentominoSolver", "STRATEGIES"]
