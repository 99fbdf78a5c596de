from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import Any, Dict, Optional

from config import CFG
from models import STATUS_READY, SearchState, SolveResult

# ------------------------------
# Attempt log
# ------------------------------


def _log_path() -> Path:
    configured = (CFG.LOG_DIR or "").strip()
    base = Path(configured) if configured else Path(__file__).resolve().parent / "logs"
    return base / "solver_attempts.log"


def _init_logger() -> logging.Logger:
    logger = logging.getLogger("pentomino.attempt_log")
    if logger.handlers:
        return logger

    log_path = _log_path()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    except OSError:
        # Unwritable log directory: run without the attempt log.
        logger.handlers.clear()
    return logger


ATTEMPT_LOGGER = _init_logger()


def _log_enabled() -> bool:
    return bool(ATTEMPT_LOGGER.handlers)


def _emit_log(event: str, **fields: Any) -> None:
    if not _log_enabled():
        return
    extras = [
        f"{key}={value}"
        for key, value in fields.items()
        if value is not None and value != ""
    ]
    try:
        if extras:
            ATTEMPT_LOGGER.info("%s | %s", event, " ".join(extras))
        else:
            ATTEMPT_LOGGER.info("%s", event)
    except Exception:
        # Logging failures must never bubble back to the solver.
        pass


# ------------------------------
# Helpers
# ------------------------------

def _now() -> float:
    return time.monotonic()


def _fmt_elapsed(ms: float) -> str:
    seconds = max(0.0, float(ms) / 1000.0)
    if seconds < 60:
        return f"{seconds:.2f}s"
    m, s = divmod(int(seconds), 60)
    if m < 60:
        return f"{m}m {s}s"
    h, m = divmod(m, 60)
    return f"{h}h {m}m"


# ------------------------------
# Per-session reporter
# ------------------------------

class ProgressReporter:
    """Run bookkeeping for one solving session.

    Counters are owned by the session's ``SearchState``; the reporter keeps the
    run envelope (status, run id, message) behind a lock so that a second
    thread can take snapshots while ``solve`` is running.
    """

    def __init__(self, label: str = "session") -> None:
        self.label = label
        self._lock = threading.Lock()
        self._state: Dict[str, Any] = {
            "status": STATUS_READY,
            "strategy": "",
            "message": "",
            "done": False,
            "ok": None,
            "run_id": 0,
        }

    def reset(self) -> None:
        with self._lock:
            self._state.update({
                "status": STATUS_READY,
                "message": "",
                "done": False,
                "ok": None,
            })

    def set_status(self, status: str) -> None:
        with self._lock:
            self._state["status"] = str(status)

    @property
    def status(self) -> str:
        with self._lock:
            return self._state["status"]

    def run_started(self, strategy: str, *, board: str = "", limits: str = "") -> int:
        with self._lock:
            self._state["run_id"] = int(self._state.get("run_id", 0)) + 1
            self._state.update({
                "strategy": strategy,
                "message": "",
                "done": False,
                "ok": None,
            })
            run_id = self._state["run_id"]
        _emit_log(
            "Run started",
            session=self.label,
            run=run_id,
            strategy=strategy,
            board=board,
            limits=limits,
        )
        return run_id

    def run_finished(self, result: SolveResult) -> None:
        with self._lock:
            self._state.update({
                "status": result.status,
                "strategy": result.strategy,
                "message": result.error or "",
                "done": True,
                "ok": result.success,
            })
            run_id = self._state["run_id"]
        _emit_log(
            "Run finished",
            session=self.label,
            run=run_id,
            status=result.status,
            ok=result.success,
            solutions=result.solutions_found,
            steps=result.steps_explored,
            duration=_fmt_elapsed(result.solving_time),
            timeout=result.timeout or None,
            error=result.error,
        )

    def stop_requested(self) -> None:
        with self._lock:
            run_id = self._state["run_id"]
            status = self._state["status"]
        _emit_log("Stop requested", session=self.label, run=run_id, status=status)

    def snapshot(self, state: Optional[SearchState]) -> Dict[str, Any]:
        with self._lock:
            envelope = dict(self._state)
        if state is None:
            steps = solutions = elapsed = 0
        else:
            steps = state.steps_explored
            solutions = state.solutions_found
            elapsed = state.elapsed_ms(_now())
        return {
            "steps_explored": steps,
            "solutions_found": solutions,
            "time_elapsed": elapsed,
            "elapsed_str": _fmt_elapsed(elapsed),
            "status": envelope["status"],
            "strategy": envelope["strategy"],
            "message": envelope["message"],
            "done": envelope["done"],
            "ok": envelope["ok"],
            "run_id": envelope["run_id"],
        }


__all__ = ["ATTEMPT_LOGGER", "ProgressReporter"]
