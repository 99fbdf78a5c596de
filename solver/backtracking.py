# solver/backtracking.py
import time
from typing import Sequence

from models import SearchState
from solver.board import Board
from solver.orientations import ORIENTATIONS


def _limits_hit(state: SearchState, max_solutions: int, max_time_ms: int) -> bool:
    """Node-entry checks: deadline, then stop flag, then solution cap."""

    if max_time_ms > 0 and (time.monotonic() - state.start_time) * 1000.0 > max_time_ms:
        state.should_stop = True
        state.timed_out = True
        return True
    if state.should_stop:
        return True
    if max_solutions > 0 and state.solutions_found >= max_solutions:
        state.should_stop = True
        return True
    return False


def _record_solution(board: Board, state: SearchState, max_solutions: int) -> bool:
    """Count the covered board; True when the cap is reached and search should unwind."""

    state.solutions_found += 1
    state.solutions.append(board.snapshot())
    return max_solutions > 0 and state.solutions_found >= max_solutions


def window_search(
    board: Board,
    state: SearchState,
    *,
    max_solutions: int,
    max_time_ms: int,
    radius: int = 2,
    orientations: Sequence[Sequence] = ORIENTATIONS,
) -> bool:
    """Place pieces strictly in catalog order near the first empty cell.

    Piece ``i`` is tried at every origin within ``radius`` cells (Chebyshev
    distance, clipped to the board) of the row-major first empty cell, for each
    of its orientations in generation order.  The window is a pruning heuristic
    and can miss tilings whose next piece sits further away.
    """

    piece_total = len(orientations)
    W, H = board.width, board.height
    radius = max(0, int(radius))

    def _search(i: int) -> bool:
        if _limits_hit(state, max_solutions, max_time_ms):
            return False
        if i >= piece_total:
            return _record_solution(board, state, max_solutions)

        state.piece_index = i
        state.steps_explored += 1

        anchor = board.find_first_empty()
        if anchor is None:
            return False
        ax, ay = anchor
        xs = range(max(0, ax - radius), min(W, ax + radius + 1))
        ys = range(max(0, ay - radius), min(H, ay + radius + 1))

        for orientation in orientations[i]:
            for y in ys:
                for x in xs:
                    if state.should_stop:
                        return False
                    origin = (x, y)
                    if not board.can_place(orientation, origin):
                        continue
                    board.place(orientation, origin, i)
                    if _search(i + 1):
                        return True
                    board.remove(orientation, origin)
        return False

    return _search(0)


def anchored_search(
    board: Board,
    state: SearchState,
    *,
    max_solutions: int,
    max_time_ms: int,
    orientations: Sequence[Sequence] = ORIENTATIONS,
) -> bool:
    """Exact-cover DFS that always covers the first empty cell next.

    Every cell before the first empty one is already filled, so a placement
    covering it must have it as its row-major lead cell: each orientation has
    exactly one candidate origin.  Unused pieces are tried in catalog order,
    which keeps the search complete and deterministic.
    """

    piece_total = len(orientations)
    used = [False] * piece_total

    def _search(depth: int) -> bool:
        if _limits_hit(state, max_solutions, max_time_ms):
            return False
        if depth >= piece_total:
            return _record_solution(board, state, max_solutions)

        state.piece_index = depth
        state.steps_explored += 1

        anchor = board.find_first_empty()
        if anchor is None:
            return False
        ax, ay = anchor

        for piece_id in range(piece_total):
            if used[piece_id]:
                continue
            for orientation in orientations[piece_id]:
                if state.should_stop:
                    return False
                lx, ly = orientation.lead
                origin = (ax - lx, ay - ly)
                if not board.can_place(orientation, origin):
                    continue
                board.place(orientation, origin, piece_id)
                used[piece_id] = True
                if _search(depth + 1):
                    return True
                used[piece_id] = False
                board.remove(orientation, origin)
        return False

    return _search(0)


__all__ = ["anchored_search", "window_search"]
