import pytest

from models import BLOCKED, EMPTY
from pieces import PIECE_COUNT


def assert_consistent(grid, *, blocked=(), complete=False):
    """Every piece id holds 0 or 5 cells; blocked cells untouched."""

    counts = {}
    for row in grid:
        for value in row:
            if value >= 0:
                assert value < PIECE_COUNT
                counts[value] = counts.get(value, 0) + 1
            else:
                assert value in (EMPTY, BLOCKED)
    assert all(n == 5 for n in counts.values()), counts
    for x, y in blocked:
        assert grid[y][x] == BLOCKED
    if complete:
        assert sorted(counts) == list(range(PIECE_COUNT))
        assert not any(EMPTY in row for row in grid)
    return counts


@pytest.fixture
def consistent():
    return assert_consistent


@pytest.fixture(autouse=True)
def _outputs_in_tmp(tmp_path, monkeypatch):
    from config import CFG

    monkeypatch.setattr(CFG, "SOLUTION_OUT", str(tmp_path / "solution.txt"))
    monkeypatch.setattr(CFG, "LAYOUT_HTML", str(tmp_path / "layout_view.html"))
