"""Helpers for writing solver outputs to disk."""

from __future__ import annotations

import os

from config import CFG
from models import BLOCKED, EMPTY, Grid
from pieces import piece_name


def _resolve_output_path(base_dir: str, configured_name: str, fallback: str) -> str:
    """Return the absolute path where an output artifact should be written."""

    name = (configured_name or "").strip() or fallback
    if os.path.isabs(name):
        return name
    return os.path.join(base_dir, name)


def format_grid(grid: Grid) -> str:
    """One line per row: piece letters, ``#`` for blocked, ``.`` for empty."""

    lines = []
    for row in grid:
        chars = []
        for value in row:
            if value == BLOCKED:
                chars.append("#")
            elif value == EMPTY:
                chars.append(".")
            else:
                chars.append(piece_name(value))
        lines.append("".join(chars))
    return "\n".join(lines)


def write_solution(grid: Grid, base_dir: str, *, solved: bool = True) -> str:
    """Write the board layout to the configured text file."""

    path = _resolve_output_path(base_dir, CFG.SOLUTION_OUT, "solution.txt")
    os.makedirs(os.path.dirname(path), exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        if not solved:
            f.write("No solution\n")
        f.write(format_grid(grid) + "\n")
    return path


def write_layout_view_html(svg: str, legend_html: str, base_dir: str, *, title: str = "Layout View") -> str:
    """Write the rendered SVG/legend preview to the configured HTML file."""

    path = _resolve_output_path(base_dir, CFG.LAYOUT_HTML, "layout_view.html")
    os.makedirs(os.path.dirname(path), exist_ok=True)

    with open(path, "w", encoding="utf-8") as vf:
        vf.write(
            f"""<!doctype html>
<html><head><meta charset='utf-8'><title>{title}</title></head>
<body class='container'>
<h1>{title}</h1>
<section class='card'>{svg}</section>
<section class='card'><h3>Legend</h3><ul>{legend_html}</ul></section>
</body></html>"""
        )
    return path


__all__ = ["format_grid", "write_layout_view_html", "write_solution"]
