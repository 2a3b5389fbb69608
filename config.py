
import os

from dotenv import load_dotenv

load_dotenv()


def _optional_int(name):
    value = os.environ.get(name)
    return int(value) if value not in (None, "") else None


class Config:
    # Base directory
    BASE_DIR = os.path.abspath(os.path.dirname(__file__))

    SECRET_KEY = os.environ.get("SECRET_KEY", "change-me-please")
    SESSION_COOKIE_NAME = "sudoku_tiles_session"
    DEBUG = os.environ.get("DEBUG", "0") == "1"

    # Game
    DEFAULT_DIFFICULTY = os.environ.get("DEFAULT_DIFFICULTY", "medium")
    # Seeds the process-wide random source; unset means fresh randomness
    RANDOM_SEED = _optional_int("RANDOM_SEED")

    # Pacing hints for the client's computer-turn timers
    COMPUTER_THINK_MS = int(os.environ.get("COMPUTER_THINK_MS", "1500"))
    COMPUTER_PLACE_MS = int(os.environ.get("COMPUTER_PLACE_MS", "1000"))

    # Logging
    LOG_FILE = os.environ.get("LOG_FILE") or os.path.join(BASE_DIR, "app.log")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_MAX_BYTES = int(os.environ.get("LOG_MAX_BYTES", "10000"))
    LOG_BACKUP_COUNT = int(os.environ.get("LOG_BACKUP_COUNT", "3"))
