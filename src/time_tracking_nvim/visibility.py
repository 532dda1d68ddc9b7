"""Answer whether any time tracking file is currently on screen."""

from __future__ import annotations

from typing import Optional

from .classifier import PathLike, is_tracking_file
from .preview import is_preview_name
from .registry import ViewRegistry


def any_tracked_visible(
    registry: ViewRegistry, tracking_root: Optional[PathLike]
) -> bool:
    for entry in registry.iter_views():
        if is_preview_name(entry.name):
            continue
        if is_tracking_file(entry.name, tracking_root):
            return True
    return False
