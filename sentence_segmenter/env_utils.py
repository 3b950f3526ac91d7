import logging
import os

LOG_LEVEL_ENV = "SENTENCE_SEGMENTER_LOG_LEVEL"


def log_level(default: int = logging.WARNING) -> int:
    """Return the logging level named by the env var, or ``default``."""
    val = os.getenv(LOG_LEVEL_ENV)
    if not val:
        return default
    if val.isdigit():
        return int(val)
    level = logging.getLevelName(val.upper())
    return level if isinstance(level, int) else default
