import logging
import sys
from datetime import datetime
from typing import Any, Dict, Optional

from common.config.settings import settings

# === File output path ===
BASE_LOG_DIR = settings.BASE_DIR / "logs"
BASE_LOG_DIR.mkdir(parents=True, exist_ok=True)
LOG_FILE = BASE_LOG_DIR / f"vidgraph_{datetime.now().strftime('%Y%m%d')}.log"

# === Colors for terminal logs ===
COLOR_MAP = {
    "DEBUG": "\033[94m",  # Blue
    "INFO": "\033[92m",  # Green
    "WARNING": "\033[93m",  # Yellow
    "ERROR": "\033[91m",  # Red
    "CRITICAL": "\033[95m",  # Magenta
    "ENDC": "\033[0m"
}

LOG_FORMAT = "[%(asctime)s] %(levelname)s | %(message)s%(context_text)s"


def render_context(context: Optional[Dict[str, Any]]) -> str:
    """Render operation context as sorted ``key=value`` pairs, e.g. ``collection=likes entity_id=...``."""
    if not context:
        return ""
    return " | " + " ".join(f"{key}={context[key]}" for key in sorted(context))


class ContextFormatter(logging.Formatter):
    def format(self, record):
        record.context_text = render_context(getattr(record, "context", None))
        return super().format(record)


class ColorFormatter(ContextFormatter):
    def format(self, record):
        levelname = record.levelname
        record.levelname = f"{COLOR_MAP.get(levelname, '')}{levelname}{COLOR_MAP['ENDC']}"
        try:
            return super().format(record)
        finally:
            # file handler shares the record
            record.levelname = levelname


# === Create logger ===
logger = logging.getLogger("vidgraph")
logger.setLevel(settings.LOG_LEVEL.upper())
logger.propagate = False

if not logger.handlers:
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(ColorFormatter(LOG_FORMAT))
    logger.addHandler(console_handler)

    file_handler = logging.FileHandler(LOG_FILE, encoding="utf-8")
    file_handler.setFormatter(ContextFormatter(LOG_FORMAT))
    logger.addHandler(file_handler)


# === Public Logging Functions ===
def log_debug(message: str, extra: Optional[dict] = None):
    logger.debug(message, extra={"context": extra or {}})

def log_info(message: str, extra: Optional[dict] = None):
    logger.info(message, extra={"context": extra or {}})

def log_warning(message: str, extra: Optional[dict] = None):
    logger.warning(message, extra={"context": extra or {}})

def log_error(message: str, extra: Optional[dict] = None, exc_info: bool = False):
    logger.error(message, extra={"context": extra or {}}, exc_info=exc_info)
