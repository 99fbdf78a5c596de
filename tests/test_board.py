import pytest

from models import BLOCKED, EMPTY
from solver.board import Board
from solver.orientations import ORIENTATIONS


def test_init_marks_blocked_and_ignores_out_of_range():
    board = Board(4, 3, [(0, 0), (3, 2), (4, 0), (-1, 1), (2, 9)])
    assert board.cells[0][0] == BLOCKED
    assert board.cells[2][3] == BLOCKED
    assert board.count_empty() == 10


def test_init_resets_previous_state():
    board = Board(3, 3, [(1, 1)])
    board.init(2, 2, [])
    assert board.snapshot() == [[EMPTY, EMPTY], [EMPTY, EMPTY]]


def test_negative_dimensions_give_empty_board():
    board = Board(-3, 5)
    assert board.width == 0
    assert board.snapshot() == [[] for _ in range(5)]
    assert board.find_first_empty() is None


def test_can_place_checks_bounds_and_occupancy():
    board = Board(5, 5, [(2, 2)])
    plus = ORIENTATIONS[9][0]
    assert not board.can_place(plus, (1, 1))  # covers the blocked centre
    assert board.can_place(plus, (0, 0))
    assert not board.can_place(plus, (3, 3))  # out of bounds
    assert not board.can_place(plus, (-1, 0))


def test_place_then_remove_restores_board():
    board = Board(6, 6, [(5, 5)])
    before = board.snapshot()
    l_piece = ORIENTATIONS[1][3]
    assert board.can_place(l_piece, (1, 1))
    board.place(l_piece, (1, 1), 1)
    assert board.piece_cell_counts() == {1: 5}
    assert board.count_empty() == 35 - 5
    board.remove(l_piece, (1, 1))
    assert board.snapshot() == before


def test_can_place_does_not_mutate():
    board = Board(5, 5)
    before = board.snapshot()
    board.can_place(ORIENTATIONS[0][0], (0, 0))
    assert board.snapshot() == before


def test_find_first_empty_is_row_major():
    board = Board(3, 2, [(0, 0)])
    assert board.find_first_empty() == (1, 0)
    board.cells[0][1] = 4
    board.cells[0][2] = 4
    assert board.find_first_empty() == (0, 1)


def test_snapshot_is_a_copy():
    board = Board(2, 2)
    snap = board.snapshot()
    snap[0][0] = 7
    assert board.cells[0][0] == EMPTY


def test_load_rejects_mismatched_grid():
    board = Board(2, 2)
    with pytest.raises(ValueError):
        board.load([[EMPTY, EMPTY]])
    board.load([[0, 0], [BLOCKED, EMPTY]])
    assert board.count_empty() == 1
