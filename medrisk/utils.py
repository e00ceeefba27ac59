"""
Shared helpers: logger factory and integer percentage rounding.
"""
import logging
import math
from typing import Optional

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_configured = False


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a single stream handler to the ``medrisk`` logger tree."""
    global _configured
    root = logging.getLogger("medrisk")
    if level is not None:
        root.setLevel(level.upper())
    if _configured:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(handler)
    root.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a module logger; handlers are configured once on first use."""
    if not _configured:
        from medrisk.config import settings
        configure_logging(settings.log_level)
    return logging.getLogger(name)


def round_half_up(value: float) -> int:
    """Round to nearest integer, .5 away from zero for positives (12.5 -> 13)."""
    return int(math.floor(value + 0.5))


def clamp_percent(value: float) -> int:
    """Round half-up and clamp into the 0-100 integer range."""
    return max(0, min(100, round_half_up(value)))
