"""
Configuration constants for the grid search visualizer.

Every tunable lives here. Each can be overridden from the environment;
the viewer also accepts `--key=value` on the command line (see `resolve_option`).
"""

import logging
import os
import sys
from typing import Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_bool(raw: str) -> bool:
    v = raw.strip().lower()
    if v in ("1", "true", "yes", "on"):
        return True
    if v in ("0", "false", "no", "off"):
        return False
    raise ValueError(raw)


def env_value(name: str, default: T, parse: Callable[[str], T]) -> T:
    """Read `name` from the environment, falling back to `default` if unset or invalid."""
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return parse(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %r", name, raw, default)
        return default


def resolve_option(key: str, default: T, parse: Callable[[str], T], argv: Optional[list] = None) -> T:
    """Return the last `--key=value` from argv, else `default`."""
    value = default
    prefix = f"--{key}="
    for arg in (sys.argv if argv is None else argv):
        if arg.startswith(prefix):
            raw = arg.split("=", 1)[1]
            try:
                value = parse(raw)
            except ValueError:
                logger.warning("Ignoring invalid %s, using %r", arg, value)
    return value


# =============================================================================
# Grid
# =============================================================================

# Edge length of a cell in pixels
CELL_SIZE = env_value("GRIDSEARCH_CELL_SIZE", 30, int)

# Initial drawing area (the right-hand panel is extra)
VIEWPORT_WIDTH = env_value("GRIDSEARCH_WIDTH", 1200, int)
VIEWPORT_HEIGHT = env_value("GRIDSEARCH_HEIGHT", 720, int)

# =============================================================================
# Search
# =============================================================================

# Milliseconds between two step() calls while animating
STEP_DELAY_MS = env_value("GRIDSEARCH_STEP_DELAY_MS", 7, int)

# Cost of entering a weighted ("school zone") cell; must be >= 1
WEIGHT_MULTIPLIER = env_value("GRIDSEARCH_WEIGHT", 3, int)

# Whether weighted cells cost WEIGHT_MULTIPLIER (False: every move costs 1)
WEIGHTING_ENABLED = env_value("GRIDSEARCH_WEIGHTING", False, parse_bool)

# =============================================================================
# Logging
# =============================================================================

# Log level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
