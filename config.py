# config.py
import os

# ======= Search limits =======
# <= 0 means unbounded for both limits.
MAX_SOLUTIONS = int(os.getenv("PS_MAX_SOLUTIONS", "1"))
MAX_TIME_MS   = int(os.getenv("PS_MAX_TIME_MS", "30000"))

# ======= Search strategy =======
# window   : fixed piece order, origins within SEARCH_RADIUS of the first empty cell
# anchored : first empty cell must be covered, any unused piece may cover it
# cp_sat   : OR-Tools exact cover model
STRATEGY      = os.getenv("PS_STRATEGY", "anchored").strip().lower()
SEARCH_RADIUS = int(os.getenv("PS_SEARCH_RADIUS", "2"))

# ======= Board guards =======
MAX_BOARD_SIDE = int(os.getenv("PS_MAX_BOARD_SIDE", "50"))

# ======= CP-SAT knobs =======
MAX_MEMORY_MB = int(os.getenv("PS_MAX_MEMORY_MB", "1024"))
RANDOM_SEED   = int(os.getenv("PS_RANDOM_SEED", "0"))

# ======= Output names =======
SOLUTION_OUT = os.getenv("PS_SOLUTION_OUT", "solution.txt")
LAYOUT_HTML  = os.getenv("PS_LAYOUT_HTML", "layout_view.html")
LOG_DIR      = os.getenv("PS_LOG_DIR", "")

class CFG:
    MAX_SOLUTIONS = MAX_SOLUTIONS
    MAX_TIME_MS   = MAX_TIME_MS

    STRATEGY      = STRATEGY
    SEARCH_RADIUS = SEARCH_RADIUS

    MAX_BOARD_SIDE = MAX_BOARD_SIDE

    MAX_MEMORY_MB = MAX_MEMORY_MB
    RANDOM_SEED   = RANDOM_SEED

    SOLUTION_OUT = SOLUTION_OUT
    LAYOUT_HTML  = LAYOUT_HTML
    LOG_DIR      = LOG_DIR

__all__ = ["CFG"]
