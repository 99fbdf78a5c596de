# solver/orientations.py
from typing import Iterable, List, Tuple

from models import Cell, Orientation, Shape
from pieces import SHAPES


def _normalize(cells: Iterable[Cell]) -> Tuple[Cell, ...]:
    cells = list(cells)
    min_x = min(x for x, _ in cells)
    min_y = min(y for _, y in cells)
    return tuple(sorted((x - min_x, y - min_y) for x, y in cells))


def _rotate(cells: Iterable[Cell]) -> List[Cell]:
    # 90° clockwise
    return [(y, -x) for x, y in cells]


def _reflect(cells: Iterable[Cell]) -> List[Cell]:
    return [(-x, y) for x, y in cells]


def generate_orientations(shape: Shape) -> List[Orientation]:
    """Distinct rotations of the shape, then of its mirror image.

    Order is the generation order: the four rotations of the raw shape first,
    then the four rotations of its horizontal reflection, each kept only the
    first time its normalized form appears.
    """

    seen = set()
    out: List[Orientation] = []
    for start in (list(shape.cells), _reflect(shape.cells)):
        current = start
        for _ in range(4):
            canon = _normalize(current)
            if canon not in seen:
                seen.add(canon)
                lead = min(canon, key=lambda c: (c[1], c[0]))
                out.append(Orientation(shape.index, canon, lead))
            current = _rotate(current)
    return out


# Built once per process; read-only during search.
ORIENTATIONS: Tuple[Tuple[Orientation, ...], ...] = tuple(
    tuple(generate_orientations(shape)) for shape in SHAPES
)

__all__ = ["ORIENTATIONS", "generate_orientations"]
