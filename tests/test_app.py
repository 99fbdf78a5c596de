import threading
import time
import types

import pytest

pytest.importorskip("flask")

import app as app_module  # noqa: E402
from models import (  # noqa: E402
    STATUS_INVALID,
    STATUS_SOLVED,
    STATUS_STOPPED,
    STATUS_TIMED_OUT,
    SolveResult,
)


@pytest.fixture
def client(monkeypatch):
    session = app_module.PentominoSolver(label="test-http")
    monkeypatch.setattr(app_module, "SESSION", session)
    monkeypatch.setattr(app_module, "SOLVE_THREAD", None)
    monkeypatch.setattr(
        app_module,
        "LAST_RESULT",
        {"ok": False, "result": None, "solution_filename": "", "layout_filename": ""},
    )
    app_module.app.config["TESTING"] = True
    with app_module.app.test_client() as c:
        yield c


def test_presets_listing(client):
    data = client.get("/api/presets").get_json()
    assert data["ok"]
    assert [p["id"] for p in data["presets"]][:2] == ["classic-8x8-hole", "rectangle-6x10"]


def test_board_from_preset(client):
    resp = client.post("/api/board", json={"preset": "rectangle-3x20"})
    data = resp.get_json()
    assert resp.status_code == 200
    assert (data["width"], data["height"]) == (3, 20)
    assert data["warnings"] == []
    assert client.get("/api/board").get_json()["board"][0] == [-1, -1, -1]


def test_board_unknown_preset(client):
    resp = client.post("/api/board", json={"preset": "nope"})
    assert resp.status_code == 404
    assert resp.get_json()["ok"] is False


def test_custom_board_returns_warnings(client):
    resp = client.post("/api/board", json={"width": 3, "height": 3, "blocked_cells": [{"x": 9, "y": 9}]})
    data = resp.get_json()
    assert resp.status_code == 200
    assert any("outside board bounds" in w for w in data["warnings"])


def test_config_rejects_bad_strategy(client):
    resp = client.post("/api/config", json={"strategy": "guess"})
    assert resp.status_code == 400
    ok = client.post("/api/config", json={"max_solutions": 2, "max_time_ms": 1000, "strategy": "window"})
    assert ok.get_json()["strategy"] == "window"
    assert ok.get_json()["max_solutions"] == 2


def test_solve_invalid_board(client):
    client.post("/api/board", json={"width": 3, "height": 3})
    data = client.post("/api/solve").get_json()
    assert data["ok"] is False
    assert data["status"] == STATUS_INVALID
    assert "Invalid board" in data["error"]
    assert client.get("/api/result").get_json()["ok"] is False


def test_result_before_any_solve(client):
    assert client.get("/api/result").status_code == 404


def test_solve_writes_outputs(client, tmp_path):
    client.post("/api/board", json={"preset": "rectangle-6x10"})
    client.post("/api/config", json={"max_solutions": 1, "max_time_ms": 30000})
    data = client.post("/api/solve").get_json()

    assert data["ok"] is True
    assert data["status"] == STATUS_SOLVED
    assert data["solutions_found"] == 1
    assert (tmp_path / "solution.txt").exists()
    assert (tmp_path / "layout_view.html").exists()

    download = client.get("/download/solution")
    assert download.status_code == 200
    assert len(download.data.decode("utf-8").splitlines()) == 10

    svg = client.get("/board.svg")
    assert svg.mimetype == "image/svg+xml"


def test_background_solve_and_stop(client):
    client.post("/api/board", json={"preset": "rectangle-3x20"})
    client.post("/api/config", json={"max_solutions": 0, "max_time_ms": 60000})

    resp = client.post("/api/solve", json={"background": True})
    assert resp.status_code == 202
    assert client.post("/api/board", json={"preset": "rectangle-6x10"}).status_code == 409

    deadline = time.time() + 5
    while client.get("/api/progress").get_json()["steps_explored"] == 0 and time.time() < deadline:
        time.sleep(0.005)
    client.post("/api/stop")
    app_module.SOLVE_THREAD.join(timeout=10)
    assert not app_module.SOLVE_THREAD.is_alive()

    progress = client.get("/api/progress")
    assert progress.headers["Cache-Control"].startswith("no-store")
    assert progress.get_json()["done"] is True


def test_board_and_config_refused_during_sync_solve(client):
    client.post("/api/board", json={"preset": "rectangle-3x20"})
    client.post("/api/config", json={"max_solutions": 0, "max_time_ms": 60000})

    responses = []

    def _sync_solve():
        with app_module.app.test_client() as other:
            responses.append(other.post("/api/solve"))

    th = threading.Thread(target=_sync_solve, daemon=True)
    th.start()
    deadline = time.time() + 5
    while not app_module.SESSION.is_running() and time.time() < deadline:
        time.sleep(0.005)

    assert client.post("/api/board", json={"width": 2, "height": 2}).status_code == 409
    assert client.post("/api/config", json={"max_solutions": 1}).status_code == 409
    assert client.post("/api/solve").status_code == 409

    client.post("/api/stop")
    th.join(timeout=10)
    assert not th.is_alive()

    data = responses[0].get_json()
    assert data["ok"] is True
    assert data["status"] in (STATUS_STOPPED, STATUS_SOLVED)
    assert "timeout" not in data
    assert app_module.SESSION.board.width == 3
    assert not app_module.SOLVE_LOCK.locked()
    assert client.post("/api/board", json={"preset": "rectangle-6x10"}).status_code == 200


class _DeferredThread:
    """Thread stand-in whose body only runs when the test calls ``run()``."""

    def __init__(self, target, daemon=None):
        self._target = target

    def start(self):
        pass

    def is_alive(self):
        return False

    def run(self):
        self._target()


def test_stop_before_background_thread_starts(client, monkeypatch):
    monkeypatch.setattr(app_module, "threading", types.SimpleNamespace(Thread=_DeferredThread))
    client.post("/api/board", json={"preset": "rectangle-6x10"})

    assert client.post("/api/solve", json={"background": True}).status_code == 202
    assert client.post("/api/config", json={"max_solutions": 3}).status_code == 409
    client.post("/api/stop")
    app_module.SOLVE_THREAD.run()

    result = client.get("/api/result").get_json()["result"]
    assert result["status"] == STATUS_STOPPED
    assert result["steps_explored"] == 0
    assert not app_module.SOLVE_LOCK.locked()


def test_interrupted_run_with_a_tiling_is_written_as_solved(client, tmp_path):
    client.post("/api/board", json={"preset": "rectangle-6x10"})
    result = SolveResult(success=True, status=STATUS_TIMED_OUT, strategy="anchored", solutions_found=1, timeout=True)

    app_module._write_outputs(result)

    lines = (tmp_path / "solution.txt").read_text(encoding="utf-8").splitlines()
    assert lines[0] != "No solution"
    assert len(lines) == 10


def test_run_without_tiling_is_marked(client, tmp_path):
    client.post("/api/board", json={"preset": "rectangle-6x10"})
    result = SolveResult(success=True, status=STATUS_STOPPED, strategy="anchored")

    app_module._write_outputs(result)

    lines = (tmp_path / "solution.txt").read_text(encoding="utf-8").splitlines()
    assert lines[0] == "No solution"
