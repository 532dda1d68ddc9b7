"""Event-driven orchestration of the preview window."""

from __future__ import annotations

import logging
import time
from datetime import timedelta
from typing import Callable, Optional

from .classifier import is_tracking_file
from .config import PreviewSettings
from .host import Host
from .preview import PreviewSurface, is_preview_name
from .registry import ViewRegistry
from .reporting import DaySummaryFormatter, MarkdownDaySummary
from .visibility import any_tracked_visible

logger = logging.getLogger(__name__)


class LifecycleController:
    """React to editor events by opening, refreshing or closing the preview.

    The controller keeps no state of its own: every decision is made against
    the live editor layout. Handlers for automatic events log and swallow
    failures; user commands let them propagate.
    """

    def __init__(
        self,
        host: Host,
        settings: PreviewSettings,
        formatter: Optional[DaySummaryFormatter] = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.host = host
        self.settings = settings
        self.formatter = formatter or MarkdownDaySummary()
        self.registry = ViewRegistry(host)
        self.preview = PreviewSurface(
            host,
            self.registry,
            width_divisor=settings.width_divisor,
            min_width=settings.min_width,
        )
        self._sleep = sleep

    def current_is_tracking(self) -> bool:
        entry = self.registry.current_document()
        if is_preview_name(entry.name):
            return False
        return is_tracking_file(entry.name, self.settings.data_directory)

    def render_current(self) -> str:
        entry = self.registry.current_document()
        content = self.registry.document_text(entry.document)
        return self.formatter.day_summary(
            content, "", self.settings.prefix, self.settings.suffix
        )

    def toggle(self) -> None:
        if not self.current_is_tracking():
            return
        if self.preview.is_open():
            self.preview.close()
        else:
            self.preview.create_or_update(self.render_current())

    def update(self) -> None:
        if not self.current_is_tracking() or not self.preview.is_open():
            return
        self.preview.create_or_update(self.render_current())

    def close(self) -> None:
        self.preview.close()

    def auto_open(self) -> None:
        try:
            self._settle(self.settings.open_delay)
            if not self.current_is_tracking():
                logger.debug("Auto-open: not a tracking file.")
                return
            if self.preview.is_open():
                return
            self.preview.create_or_update(self.render_current())
        except Exception as exc:
            self._report("Auto-open failed", exc)

    def auto_close(self) -> None:
        try:
            self._settle(self.settings.close_delay)
            logger.debug("Auto-closing preview (leaving tracking file).")
            self.preview.close()
        except Exception as exc:
            self._report("Auto-close failed", exc)

    def maybe_close_if_invisible(self) -> None:
        try:
            if not any_tracked_visible(self.registry, self.settings.data_directory):
                self.preview.close()
        except Exception as exc:
            self._report("Closing hidden preview failed", exc)

    def shutdown(self) -> None:
        try:
            self.preview.destroy()
        except Exception as exc:
            self._report("Wiping preview on exit failed", exc)

    def _settle(self, delay: timedelta) -> None:
        seconds = delay.total_seconds()
        if seconds > 0:
            self._sleep(seconds)

    def _report(self, message: str, exc: Exception) -> None:
        logger.exception("%s", message)
        try:
            self.host.notify(f"{message}: {exc}", logging.ERROR)
        except Exception:
            logger.debug("Could not notify editor.", exc_info=True)
