"""Neovim remote plugin exposing the time tracking preview commands."""

from __future__ import annotations

import logging
from typing import Optional

import pynvim

from .config import ConfigError, ConfigFile, PreviewSettings
from .controller import LifecycleController
from .nvim_host import NvimHost
from .paths import get_log_path
from .preview import PREVIEW_NAME

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
VAR_PREFIX = "time_tracking_"

_logging_configured = False


def configure_logging(level: int = logging.INFO) -> None:
    """Send package logs to the per-user log file once per process."""
    global _logging_configured
    if _logging_configured:
        return
    package_logger = logging.getLogger(__package__ or "time_tracking_nvim")
    try:
        handler = logging.FileHandler(get_log_path(), encoding="utf-8")
    except OSError:
        logger.debug("Log file unavailable; keeping default handlers.", exc_info=True)
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    package_logger.setLevel(level)
    _logging_configured = True


def load_settings(host: NvimHost) -> PreviewSettings:
    """Read the config file and apply ``g:time_tracking_*`` overrides."""
    settings = PreviewSettings.from_file()
    overrides = {
        key: host.get_var(VAR_PREFIX + key) for key in ConfigFile.model_fields
    }
    return settings.with_overrides(overrides)


@pynvim.plugin
class TimeTrackingPlugin:
    """Commands and autocommands wiring Neovim events to the controller."""

    def __init__(self, nvim: pynvim.Nvim) -> None:
        self.nvim = nvim
        self.host = NvimHost(nvim)
        self._controller: Optional[LifecycleController] = None
        configure_logging()

    @property
    def controller(self) -> LifecycleController:
        if self._controller is None:
            try:
                settings = load_settings(self.host)
            except ConfigError as exc:
                logger.error("%s", exc)
                self.host.notify(str(exc), logging.ERROR)
                settings = PreviewSettings()
            logger.info("Tracking files under %s", settings.data_directory)
            self._controller = LifecycleController(self.host, settings)
        return self._controller

    @pynvim.command("TimeTrackingToggle", sync=True)
    def toggle(self) -> None:
        self.controller.toggle()

    @pynvim.command("TimeTrackingUpdate", sync=True)
    def update(self) -> None:
        self.controller.update()

    @pynvim.command("TimeTrackingClose", sync=True)
    def close(self) -> None:
        self.controller.close()

    @pynvim.command("TimeTrackingAutoOpen", sync=True)
    def auto_open(self) -> None:
        self.controller.auto_open()

    @pynvim.command("TimeTrackingAutoClose", sync=True)
    def auto_close(self) -> None:
        self.controller.auto_close()

    @pynvim.command("TimeTrackingMaybeCloseIfInvisible", sync=True)
    def maybe_close_if_invisible(self) -> None:
        self.controller.maybe_close_if_invisible()

    @pynvim.command("TimeTrackingReload", sync=True)
    def reload(self) -> None:
        """Re-read the config file and editor variables."""
        self._controller = None
        self.host.notify(
            f"Tracking files under {self.controller.settings.data_directory}"
        )

    @pynvim.autocmd("TextChanged", pattern="*")
    def on_text_changed(self) -> None:
        self.controller.update()

    @pynvim.autocmd("TextChangedI", pattern="*")
    def on_text_changed_insert(self) -> None:
        self.controller.update()

    @pynvim.autocmd("VimEnter", pattern="*")
    def on_vim_enter(self) -> None:
        self._auto_open()

    @pynvim.autocmd("BufWinEnter", pattern="*.md")
    def on_buf_win_enter(self) -> None:
        self._auto_open()

    @pynvim.autocmd("BufWinLeave", pattern="*.md")
    def on_buf_win_leave(self) -> None:
        self.controller.auto_close()

    @pynvim.autocmd("BufEnter", pattern="*")
    def on_buf_enter(self) -> None:
        self.controller.maybe_close_if_invisible()

    @pynvim.autocmd("WinClosed", pattern="*")
    def on_win_closed(self) -> None:
        self.controller.maybe_close_if_invisible()

    @pynvim.autocmd("TabEnter", pattern="*")
    def on_tab_enter(self) -> None:
        self.controller.maybe_close_if_invisible()

    @pynvim.autocmd("QuitPre", pattern="*", sync=True)
    def on_quit_pre(self) -> None:
        self.controller.close()

    @pynvim.autocmd("VimLeavePre", pattern="*", sync=True)
    def on_vim_leave_pre(self) -> None:
        logger.debug("Wiping %s before exit.", PREVIEW_NAME)
        self.controller.shutdown()

    def _auto_open(self) -> None:
        if self.controller.settings.auto_open:
            self.controller.auto_open()
