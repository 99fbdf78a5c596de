"""Named boards and a lenient board-configuration validator."""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Tuple

from config import CFG
from models import BoardPreset, Cell
from pieces import REQUIRED_EMPTY_CELLS

BOARD_PRESETS: Tuple[BoardPreset, ...] = (
    BoardPreset(
        id="classic-8x8-hole",
        name="8×8 with 2×2 Hole",
        description="Fit all 12 pieces in an 8×8 grid with a 2×2 hole in the center",
        width=8,
        height=8,
        blocked_cells=((3, 3), (4, 3), (3, 4), (4, 4)),
        difficulty="medium",
        solution_count=65,
    ),
    BoardPreset(
        id="rectangle-6x10",
        name="6×10 Rectangle",
        description="Rectangular board using all 12 pentomino pieces",
        width=6,
        height=10,
        difficulty="easy",
        solution_count=2339,
    ),
    BoardPreset(
        id="rectangle-5x12",
        name="5×12 Rectangle",
        description="Narrow rectangular board",
        width=5,
        height=12,
        difficulty="medium",
        solution_count=1010,
    ),
    BoardPreset(
        id="rectangle-4x15",
        name="4×15 Rectangle",
        description="Very narrow rectangle",
        width=4,
        height=15,
        difficulty="hard",
        solution_count=368,
    ),
    BoardPreset(
        id="rectangle-3x20",
        name="3×20 Rectangle",
        description="Extremely narrow rectangle",
        width=3,
        height=20,
        difficulty="expert",
        solution_count=2,
    ),
)

_BY_ID = {p.id: p for p in BOARD_PRESETS}


def get_preset(preset_id: str) -> BoardPreset:
    try:
        return _BY_ID[str(preset_id)]
    except KeyError:
        raise KeyError(f"Unknown board preset: {preset_id!r}") from None


def coerce_cells(raw: Any) -> List[Cell]:
    """Accept ``[[x, y], ...]`` or ``[{"x": .., "y": ..}, ...]``."""

    cells: List[Cell] = []
    if raw is None:
        return cells
    for item in raw:
        if isinstance(item, dict):
            x, y = item.get("x"), item.get("y")
        else:
            x, y = item
        cells.append((int(x), int(y)))
    return cells


def validate_board_config(
    width: int,
    height: int,
    blocked_cells: Iterable[Cell],
    *,
    max_side: Optional[int] = None,
) -> List[str]:
    errors: List[str] = []
    limit = CFG.MAX_BOARD_SIDE if max_side is None else int(max_side)

    if width <= 0:
        errors.append("Board width must be positive")
    if height <= 0:
        errors.append("Board height must be positive")
    if width > limit or height > limit:
        errors.append(f"Board dimensions are too large (max {limit}x{limit})")

    blocked = set()
    for x, y in blocked_cells:
        if not (0 <= x < width and 0 <= y < height):
            errors.append(f"Blocked cell ({x}, {y}) is outside board bounds")
            continue
        blocked.add((x, y))

    empty = max(0, width) * max(0, height) - len(blocked)
    if empty < REQUIRED_EMPTY_CELLS:
        errors.append(
            f"Not enough empty cells for all pentominoes (need {REQUIRED_EMPTY_CELLS}, have {empty})"
        )
    return errors


__all__ = ["BOARD_PRESETS", "coerce_cells", "get_preset", "validate_board_config"]
