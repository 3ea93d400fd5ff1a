"""
Intcode VM — Run Configuration
==============================

Module-level settings shared by the engine, the search/diagnostic
helpers and the intcodekit CLI. The CLI exposes the ones worth overriding
per run.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


# =============================================================================
#  ENGINE
# =============================================================================
# No step bound by default. A program that never reaches HALT runs until
# the caller's watchdog (max_steps) stops it.
DEFAULT_MAX_STEPS: Optional[int] = None

# Named watchdog presets for `intcodekit run --profile`.
RUN_PROFILES = {
    "unbounded": {"max_steps": None,       "description": "Run until HALT or fault"},
    "quick":     {"max_steps": 10_000,     "description": "Small test programs"},
    "standard":  {"max_steps": 1_000_000,  "description": "Typical puzzle inputs"},
    "long":      {"max_steps": 50_000_000, "description": "Search loops and heavy inputs"},
}


# =============================================================================
#  NOUN / VERB SEARCH
# =============================================================================
NOUN_ADDR = 1
VERB_ADDR = 2
NOUN_RANGE = range(100)
VERB_RANGE = range(100)

# Output the gravity-assist program must leave at address 0.
GRAVITY_ASSIST_TARGET = 19_690_720

# Per-candidate watchdog during search.
SEARCH_MAX_STEPS = 100_000


# =============================================================================
#  DIAGNOSTICS
# =============================================================================
DIAG_SYSTEM_ID = 1        # air conditioner unit


# =============================================================================
#  OUTPUT / LOGGING
# =============================================================================
DUMP_WIDTH = 8

CONSOLE_LOG_FORMAT = '%(levelname)s: %(message)s'
FILE_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(verbose: int = 0, quiet: bool = False,
                  log_file: Optional[str] = None) -> logging.Logger:
    """Configure root logging for CLI use.

    verbose=0 -> INFO, verbose>=1 -> DEBUG, quiet -> ERROR only.
    A log file, if given, always receives DEBUG.
    """
    if quiet:
        level = logging.ERROR
    elif verbose == 0:
        level = logging.INFO
    else:
        level = logging.DEBUG

    handlers = []

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_LOG_FORMAT))
    handlers.append(console)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG if log_file else level,
        handlers=handlers,
        force=True
    )

    return logging.getLogger('intcodekit')
