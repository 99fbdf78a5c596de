# app.py: JSON surface over a single solving session
from __future__ import annotations
import os
import threading
from typing import Any, Dict, Optional, Tuple

from flask import Flask, Response, jsonify, request, send_from_directory

from config import CFG
from io_files import write_layout_view_html, write_solution
from models import SolveResult
from presets import BOARD_PRESETS, coerce_cells, get_preset, validate_board_config
from render import render_board
from solver.session import PentominoSolver

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def _output_location(configured: str, fallback: str) -> Tuple[str, str]:
    name = (configured or "").strip() or fallback
    full_path = name if os.path.isabs(name) else os.path.abspath(os.path.join(BASE_DIR, name))
    return os.path.dirname(full_path) or BASE_DIR, os.path.basename(full_path) or fallback


SESSION = PentominoSolver(label="http")
SESSION.init_board(BOARD_PRESETS[0].width, BOARD_PRESETS[0].height, BOARD_PRESETS[0].blocked_cells)
SOLVE_LOCK = threading.Lock()
SOLVE_THREAD: Optional[threading.Thread] = None

LAST_RESULT: Dict[str, Any] = {
    "ok": False,
    "result": None,
    "solution_filename": "",
    "layout_filename": "",
}

app = Flask(__name__)


@app.after_request
def _no_cache_progress(resp):
    if request.path == "/api/progress":
        resp.headers["Cache-Control"] = "no-store, max-age=0"
        resp.headers["Pragma"] = "no-cache"
        resp.headers["Expires"] = "0"
    return resp


def _error(message: str, status: int = 400):
    return jsonify({"ok": False, "error": message}), status


def _payload() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _busy() -> bool:
    if SOLVE_THREAD is not None and SOLVE_THREAD.is_alive():
        return True
    return SOLVE_LOCK.locked() or SESSION.is_running()


def _claim() -> bool:
    """Take SOLVE_LOCK without waiting; False while a solve owns the session."""
    if _busy():
        return False
    return SOLVE_LOCK.acquire(blocking=False)


def _write_outputs(result: SolveResult) -> None:
    grid = SESSION.get_board()
    solved = result.solutions_found > 0
    LAST_RESULT["solution_filename"] = ""
    LAST_RESULT["layout_filename"] = ""
    try:
        path = write_solution(grid, BASE_DIR, solved=solved)
        LAST_RESULT["solution_filename"] = os.path.basename(path)
        svg, legend = render_board(grid)
        layout = write_layout_view_html(svg, legend, BASE_DIR)
        LAST_RESULT["layout_filename"] = os.path.basename(layout)
    except OSError as e:
        app.logger.warning("could not write solver outputs: %s", e)


def _run_solve() -> SolveResult:
    # caller holds SOLVE_LOCK via _claim()
    try:
        result = SESSION.solve()
        LAST_RESULT["ok"] = result.success
        LAST_RESULT["result"] = result.to_dict()
        if result.success:
            _write_outputs(result)
    finally:
        SOLVE_LOCK.release()
    return result


@app.route("/api/presets")
def presets():
    return jsonify({"ok": True, "presets": [p.to_dict() for p in BOARD_PRESETS]})


@app.route("/api/board", methods=["GET"])
def board_get():
    return jsonify({
        "ok": True,
        "width": SESSION.board.width,
        "height": SESSION.board.height,
        "board": SESSION.get_board(),
    })


@app.route("/api/board", methods=["POST"])
def board_init():
    p = _payload()
    if p.get("preset"):
        try:
            preset = get_preset(p["preset"])
        except KeyError as e:
            return _error(str(e.args[0]), 404)
        width, height, blocked = preset.width, preset.height, list(preset.blocked_cells)
    else:
        try:
            width = int(p.get("width") or 0)
            height = int(p.get("height") or 0)
            blocked = coerce_cells(p.get("blocked_cells") or p.get("blocked"))
        except (TypeError, ValueError) as e:
            return _error(f"Bad board: {e}")

    warnings = validate_board_config(width, height, blocked)
    if not _claim():
        return _error("solver is running", 409)
    try:
        SESSION.init_board(width, height, blocked)
    finally:
        SOLVE_LOCK.release()
    return jsonify({
        "ok": True,
        "width": SESSION.board.width,
        "height": SESSION.board.height,
        "warnings": warnings,
        "board": SESSION.get_board(),
    })


@app.route("/api/config", methods=["POST"])
def config_set():
    p = _payload()
    if not _claim():
        return _error("solver is running", 409)
    try:
        SESSION.set_config(
            p.get("max_solutions", SESSION.max_solutions),
            p.get("max_time_ms", SESSION.max_time_ms),
            strategy=p.get("strategy"),
            search_radius=p.get("search_radius"),
        )
    except ValueError as e:
        return _error(str(e))
    finally:
        SOLVE_LOCK.release()
    return jsonify({
        "ok": True,
        "max_solutions": SESSION.max_solutions,
        "max_time_ms": SESSION.max_time_ms,
        "strategy": SESSION.strategy,
        "search_radius": SESSION.search_radius,
    })


@app.route("/api/solve", methods=["POST"])
def solve():
    global SOLVE_THREAD
    if not _claim():
        return _error("solver is running", 409)

    if _payload().get("background"):
        # a stop sent before the thread reaches solve() still lands on this run
        SESSION.prepare_run()
        th = threading.Thread(target=_run_solve, daemon=True)
        SOLVE_THREAD = th
        th.start()
        return jsonify({"ok": True, "started": True, "progress": SESSION.get_progress()}), 202

    result = _run_solve()
    return jsonify({"ok": result.success, **result.to_dict()})


@app.route("/api/stop", methods=["POST"])
def stop():
    SESSION.stop()
    return jsonify({"ok": True, "progress": SESSION.get_progress()})


@app.route("/api/progress")
def progress():
    return jsonify(SESSION.get_progress())


@app.route("/api/result")
def result_latest():
    if LAST_RESULT["result"] is None:
        return _error("no solve has finished yet", 404)
    return jsonify(LAST_RESULT)


@app.route("/board.svg")
def board_svg():
    svg, _legend = render_board(SESSION.get_board())
    return Response(svg, mimetype="image/svg+xml")


@app.route("/download/solution")
def download_solution():
    directory, filename = _output_location(CFG.SOLUTION_OUT, "solution.txt")
    return send_from_directory(directory, filename, as_attachment=True)


if __name__ == "__main__":
    app.run(debug=False)
