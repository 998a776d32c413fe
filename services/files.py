"""
Flat-file reads and writes at the edges of the merge engine.

Reads degrade to None on anything unreadable; writes raise FileWriteError.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from config import log_event


class FileWriteError(OSError):
    """A target file could not be written."""

    def __init__(self, path: Path, cause: Exception):
        super().__init__(f"Failed to write {path}: {cause}")
        self.path = Path(path)
        self.cause = cause


def read_text_file(path: Path) -> Optional[str]:
    """Return the file's text, or None if it does not exist or cannot be read."""
    path = Path(path)
    if not path.exists():
        return None
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        log_event(logging.WARNING, "file_read_failed", path=str(path), error=str(e))
        return None
    log_event(logging.DEBUG, "file_read", path=str(path), bytes=len(content))
    return content


def write_text_file(path: Path, content: str) -> None:
    """Write `content`, creating parent directories as needed."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        log_event(logging.ERROR, "file_write_failed", path=str(path), error=str(e))
        raise FileWriteError(path, e) from e
    log_event(logging.INFO, "file_written", path=str(path), bytes=len(content))


def read_json_file(path: Path) -> Optional[Any]:
    """Parse a JSON file. Missing or corrupt files yield None."""
    content = read_text_file(path)
    if content is None:
        return None
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        log_event(logging.WARNING, "json_corrupt", path=str(path), error=str(e))
        return None


def write_json_file(path: Path, data: Any) -> None:
    write_text_file(path, json.dumps(data, indent=2) + "\n")
