"""Decide whether a file belongs to the time tracking data directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

TRACKING_SUFFIX = ".md"

PathLike = Union[str, "os.PathLike[str]"]


def is_tracking_file(
    document_path: Optional[PathLike], tracking_root: Optional[PathLike]
) -> bool:
    """Return True for Markdown files at or below the tracking root.

    Both paths are resolved through symlinks first. Anything that cannot be
    resolved (deleted file, missing root) is simply not a tracking file.
    """
    if not document_path or not tracking_root:
        return False

    path = _canonicalize(document_path)
    root = _canonicalize(tracking_root)
    if path is None or root is None:
        return False

    return path.suffix == TRACKING_SUFFIX and path.is_relative_to(root)


def _canonicalize(value: PathLike) -> Optional[Path]:
    try:
        return Path(value).expanduser().resolve(strict=True)
    except (OSError, RuntimeError, ValueError) as exc:
        logger.debug("Could not resolve %s: %s", value, exc)
        return None
