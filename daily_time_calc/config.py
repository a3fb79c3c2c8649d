"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.environ.get("DAILY_CALC_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# =============================================================================
# PATHS (optional defaults for the CLI)
# =============================================================================

_output_dir = os.environ.get("DAILY_CALC_OUTPUT_DIR", "")
OUTPUT_DIR = Path(_output_dir) if _output_dir else None

_default_schedule = os.environ.get("DAILY_CALC_DEFAULT_SCHEDULE", "")
DEFAULT_SCHEDULE_PATH = Path(_default_schedule) if _default_schedule else None

# =============================================================================
# OUTPUT FILES
# =============================================================================

CALCULATED_TIMES_FILENAME = "calculated_times.csv"
CALCULATED_TIMES_HEADERS = [
    "id", "direction", "category", "booked_time", "calculated_time", "paired", "status",
]
