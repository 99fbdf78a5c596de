# solver/cp_sat.py
from typing import Dict, List, Optional, Sequence, Tuple

from ortools.sat.python import cp_model as _cp

from config import CFG
from models import EMPTY, Cell, Grid, Orientation, SearchState
from solver.board import Board
from solver.orientations import ORIENTATIONS

Option = Tuple[Orientation, Cell]


def build_options(board: Board, orientations: Sequence[Sequence[Orientation]] = ORIENTATIONS) -> List[List[Option]]:
    """Every legal (orientation, origin) per piece on the board as it stands."""

    options: List[List[Option]] = []
    for piece_orients in orientations:
        piece_opts: List[Option] = []
        for orientation in piece_orients:
            for y in range(board.height - orientation.height + 1):
                for x in range(board.width - orientation.width + 1):
                    if board.can_place(orientation, (x, y)):
                        piece_opts.append((orientation, (x, y)))
        options.append(piece_opts)
    return options


class _SolutionCollector(_cp.CpSolverSolutionCallback):
    def __init__(self, base: Grid, state: SearchState, options, p, max_solutions: int):
        super().__init__()
        self._base = base
        self._state = state
        self._options = options
        self._p = p
        self._max_solutions = max_solutions

    def on_solution_callback(self) -> None:
        grid = [list(row) for row in self._base]
        for piece_id, piece_vars in enumerate(self._p):
            for k, var in enumerate(piece_vars):
                if self.Value(var):
                    orientation, (ox, oy) = self._options[piece_id][k]
                    for dx, dy in orientation.cells:
                        grid[oy + dy][ox + dx] = piece_id
                    break
        state = self._state
        state.solutions_found += 1
        state.solutions.append(grid)
        if self._max_solutions > 0 and state.solutions_found >= self._max_solutions:
            state.should_stop = True
            self.StopSearch()
        elif state.should_stop:
            self.StopSearch()


def cp_sat_search(
    board: Board,
    state: SearchState,
    *,
    max_solutions: int,
    max_time_ms: int,
    orientations: Sequence[Sequence[Orientation]] = ORIENTATIONS,
) -> bool:
    """Exact cover with CP-SAT: each piece once, each empty cell once.

    The solution cap is honoured from the solution callback. ``stop()`` goes
    through ``state.cancel``, which interrupts CP-SAT from the caller's thread.
    On success the last solution found is loaded onto the board.
    """

    options = build_options(board, orientations)
    state.steps_explored = 0
    if any(not opts for opts in options):
        return False

    m = _cp.CpModel()
    p = [[m.NewBoolVar(f"p_{i}_{k}") for k in range(len(options[i]))] for i in range(len(options))]
    for i in range(len(options)):
        m.Add(sum(p[i]) == 1)

    cell_to_vars: Dict[Cell, List[_cp.IntVar]] = {}
    for i, piece_opts in enumerate(options):
        for k, (orientation, (ox, oy)) in enumerate(piece_opts):
            for dx, dy in orientation.cells:
                cell_to_vars.setdefault((ox + dx, oy + dy), []).append(p[i][k])

    base = board.snapshot()
    for y, row in enumerate(base):
        for x, value in enumerate(row):
            if value == EMPTY:
                vars_here = cell_to_vars.get((x, y))
                if not vars_here:
                    # un-coverable empty cell
                    return False
                m.Add(sum(vars_here) == 1)

    solver = _cp.CpSolver()
    if max_time_ms > 0:
        solver.parameters.max_time_in_seconds = max_time_ms / 1000.0
    solver.parameters.max_memory_in_mb = int(getattr(CFG, "MAX_MEMORY_MB", 1024))
    solver.parameters.num_search_workers = 1
    solver.parameters.random_seed = int(getattr(CFG, "RANDOM_SEED", 0))
    solver.parameters.log_search_progress = False
    solver.parameters.enumerate_all_solutions = max_solutions != 1

    collector = _SolutionCollector(base, state, options, p, max_solutions)
    state.cancel = solver.StopSearch
    try:
        if state.should_stop:
            # stop() landed while the model was being built
            return False
        status = solver.Solve(m, collector)
    finally:
        state.cancel = None
    state.steps_explored = int(solver.NumBranches())

    if status in (_cp.UNKNOWN, _cp.FEASIBLE) and not state.should_stop:
        # only the time limit ends an unfinished run without the stop flag
        state.timed_out = True
        state.should_stop = True

    last: Optional[Grid] = state.solutions[-1] if state.solutions else None
    if last is None:
        return False
    board.load(last)
    return True


__all__ = ["build_options", "cp_sat_search"]
