"""Ignore file loading — read raw pattern lines from the scan root."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

from ignorescan import IgnoreFileError

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_FILE: Final[str] = ".dockerignore"


def load_ignore_lines(root: Path, name: str = DEFAULT_IGNORE_FILE) -> list[str] | None:
    """Load raw lines of the ignore file in *root*.

    Args:
        root: Directory containing the ignore file.
        name: File name of the ignore file.

    Returns:
        The file's lines, or ``None`` when the file does not exist.

    Raises:
        IgnoreFileError: If the file exists but cannot be read.
    """
    ignore_path = root / name
    try:
        return ignore_path.read_text(encoding="utf-8", errors="surrogateescape").splitlines()
    except FileNotFoundError:
        logger.debug("No ignore file at %s, using default patterns", ignore_path)
        return None
    except OSError as exc:
        raise IgnoreFileError(ignore_path, exc) from exc
