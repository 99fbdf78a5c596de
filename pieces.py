# pieces.py: the twelve pentominoes
from typing import Dict, Tuple

from models import Shape

CELLS_PER_PIECE = 5

# Catalog order is also the search order for the window strategy.
SHAPES: Tuple[Shape, ...] = (
    Shape(0, "I", ((0, 0), (0, 1), (0, 2), (0, 3), (0, 4))),
    Shape(1, "L", ((0, 0), (0, 1), (0, 2), (0, 3), (1, 3))),
    Shape(2, "N", ((0, 0), (0, 1), (1, 1), (1, 2), (1, 3))),
    Shape(3, "P", ((0, 0), (0, 1), (1, 0), (1, 1), (1, 2))),
    Shape(4, "Y", ((0, 0), (0, 1), (0, 2), (0, 3), (1, 1))),
    Shape(5, "T", ((0, 0), (1, 0), (2, 0), (1, 1), (1, 2))),
    Shape(6, "U", ((0, 0), (0, 1), (1, 1), (2, 1), (2, 0))),
    Shape(7, "V", ((0, 0), (0, 1), (0, 2), (1, 2), (2, 2))),
    Shape(8, "W", ((0, 0), (0, 1), (1, 1), (1, 2), (2, 2))),
    Shape(9, "X", ((1, 0), (0, 1), (1, 1), (2, 1), (1, 2))),
    Shape(10, "Z", ((0, 0), (1, 0), (1, 1), (1, 2), (2, 2))),
    Shape(11, "F", ((1, 0), (2, 0), (0, 1), (1, 1), (1, 2))),
)

PIECE_COUNT = len(SHAPES)
REQUIRED_EMPTY_CELLS = PIECE_COUNT * CELLS_PER_PIECE

NAME_TO_INDEX: Dict[str, int] = {s.name: s.index for s in SHAPES}

PIECE_COLORS: Dict[str, str] = {
    "F": "#ffb3ba",
    "I": "#bae1ff",
    "L": "#baffc9",
    "N": "#ffffba",
    "P": "#ffdfba",
    "T": "#e0bbff",
    "U": "#ffb3e6",
    "V": "#b3ffb3",
    "W": "#ffb3d9",
    "X": "#b3d9ff",
    "Y": "#d9ffb3",
    "Z": "#ffd9b3",
}


def piece_name(piece_id: int) -> str:
    if 0 <= piece_id < PIECE_COUNT:
        return SHAPES[piece_id].name
    return "?"


def piece_color(piece_id: int) -> str:
    return PIECE_COLORS.get(piece_name(piece_id), "#cccccc")


__all__ = [
    "CELLS_PER_PIECE",
    "NAME_TO_INDEX",
    "PIECE_COLORS",
    "PIECE_COUNT",
    "REQUIRED_EMPTY_CELLS",
    "SHAPES",
    "piece_color",
    "piece_name",
]
