from typing import Dict, List, Tuple

from models import BLOCKED, EMPTY, Grid
from pieces import piece_color, piece_name

BLOCKED_FILL = "#64748b"
EMPTY_FILL = "#ffffff"


def render_board(grid: Grid, scale: int = 30) -> Tuple[str, str]:
    """Return ``(svg, legend_html)`` for a board snapshot."""

    H = len(grid)
    W = len(grid[0]) if H else 0
    svg_w = W * scale + 2
    svg_h = H * scale + 2

    palette: Dict[str, str] = {}
    rects: List[str] = []
    for y, row in enumerate(grid):
        for x, value in enumerate(row):
            if value == BLOCKED:
                fill = BLOCKED_FILL
            elif value == EMPTY:
                fill = EMPTY_FILL
            else:
                fill = piece_color(value)
                palette.setdefault(piece_name(value), fill)
            px = x * scale + 1
            py = y * scale + 1
            rects.append(
                f'<rect x="{px}" y="{py}" width="{scale}" height="{scale}" fill="{fill}" stroke="#e2e8f0" stroke-width="1"/>'
            )
            if value >= 0:
                rects.append(
                    f'<text x="{px + scale // 2}" y="{py + scale // 2 + 4}" font-size="12" '
                    f'text-anchor="middle" fill="black">{piece_name(value)}</text>'
                )
    frame = f'<rect x="1" y="1" width="{svg_w-2}" height="{svg_h-2}" fill="none" stroke="black" stroke-width="2"/>'
    svg = (
        f'<svg class="board-svg" xmlns="http://www.w3.org/2000/svg" '
        f'width="{svg_w}" height="{svg_h}" '
        f'viewBox="0 0 {svg_w} {svg_h}" preserveAspectRatio="xMinYMin meet">'
        f'{"".join(rects)}{frame}</svg>'
    )

    legend = "".join(
        f"<li><span class='swatch' style='background:{c}'></span>{n}</li>"
        for n, c in sorted(palette.items())
    )
    return svg, legend
