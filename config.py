"""
Configuration, constants, and logging.
"""

import os
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# --- LOAD ENV ---
load_dotenv()

# --- LOGGING ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger("insights_kit")


def log_event(level: int, message: str, **data):
    """Lightweight structured logging helper."""
    serialized = " | ".join(f"{k}={v}" for k, v in data.items())
    logger.log(level, f"{message}{' | ' + serialized if serialized else ''}")


# --- PATHS ---
INSIGHTS_HOME = Path(os.getenv("INSIGHTS_HOME", Path.home() / ".claude-insights")).expanduser()
ANNOTATIONS_PATH = INSIGHTS_HOME / "annotations.json"
HISTORY_DIR = INSIGHTS_HOME / "history"

# Project-relative artifact locations
CLAUDE_MD_FILENAME = "CLAUDE.md"
SETTINGS_DIRNAME = ".claude"
SETTINGS_FILENAME = "settings.json"
SKILLS_DIRNAME = "skills"

# --- CONSTANTS ---
SIMILARITY_THRESHOLD = 0.8
ANNOTATION_STORE_VERSION = 1
SECTION_HEADER = "## Claude Insights Additions"


def get_annotations_path(override: Optional[str] = None) -> Path:
    """Resolve the annotation store path, honoring an explicit override."""
    return Path(override) if override else ANNOTATIONS_PATH
