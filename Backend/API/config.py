import os
from dotenv import load_dotenv

load_dotenv()

DB_DSN = os.getenv("DB_DSN")

# Fixed first secret for local development; random when unset.
SERVER_SEED = os.getenv("SERVER_SEED") or None

DEFAULT_ROWS = int(os.getenv("PLINKO_DEFAULT_ROWS", "12"))
MAX_ROWS = int(os.getenv("PLINKO_MAX_ROWS", "32"))


def check_rows(default_rows: int, max_rows: int):
    if max_rows < 1 or not 1 <= default_rows <= max_rows:
        raise ValueError(f"PLINKO_DEFAULT_ROWS={default_rows} must be in [1, PLINKO_MAX_ROWS={max_rows}]")


check_rows(DEFAULT_ROWS, MAX_ROWS)

# 'rotate'   -> reveal the seed with each round, then rotate it
# 'deferred' -> reveal only after POST /admin/seed/rotate
REVEAL_MODE = os.getenv("PLINKO_REVEAL_MODE", "rotate").lower()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
