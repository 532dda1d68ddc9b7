"""Neovim implementation of the host interface over a pynvim session."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from pynvim.api import Buffer, Nvim, NvimError, Window

from .host import HostError, HostErrorKind

# Neovim's vim.log.levels
_NOTIFY_LEVELS = {
    logging.DEBUG: 1,
    logging.INFO: 2,
    logging.WARNING: 3,
    logging.ERROR: 4,
}


def classify_nvim_error(message: str) -> HostErrorKind:
    """Map a Neovim error message onto a structured error kind."""
    if "E242" in message or "Can't split a window while closing another" in message:
        return HostErrorKind.CONCURRENT_CLOSE
    if "Invalid window id" in message or "Invalid buffer id" in message:
        return HostErrorKind.INVALID_HANDLE
    return HostErrorKind.OTHER


@contextmanager
def _host_errors() -> Iterator[None]:
    try:
        yield
    except NvimError as exc:
        message = str(exc)
        raise HostError(message, classify_nvim_error(message)) from exc


class NvimHost:
    """Host adapter that talks to Neovim through its RPC API."""

    def __init__(self, nvim: Nvim) -> None:
        self.nvim = nvim

    def list_views(self) -> list[Window]:
        with _host_errors():
            return list(self.nvim.api.list_wins())

    def list_documents(self) -> list[Buffer]:
        with _host_errors():
            return list(self.nvim.api.list_bufs())

    def view_document(self, view: Window) -> Buffer:
        with _host_errors():
            return self.nvim.api.win_get_buf(view)

    def current_document(self) -> Buffer:
        with _host_errors():
            return self.nvim.api.get_current_buf()

    def document_name(self, document: Buffer) -> str:
        with _host_errors():
            return self.nvim.api.buf_get_name(document)

    def set_document_name(self, document: Buffer, name: str) -> None:
        with _host_errors():
            self.nvim.api.buf_set_name(document, name)

    def document_lines(self, document: Buffer) -> list[str]:
        with _host_errors():
            return list(self.nvim.api.buf_get_lines(document, 0, -1, False))

    def set_document_lines(self, document: Buffer, lines: list[str]) -> None:
        with _host_errors():
            self.nvim.api.buf_set_lines(document, 0, -1, False, lines)

    def set_document_option(self, document: Buffer, name: str, value: Any) -> None:
        with _host_errors():
            self.nvim.api.set_option_value(name, value, {"buf": document.handle})

    def set_view_option(self, view: Window, name: str, value: Any) -> None:
        with _host_errors():
            self.nvim.api.set_option_value(name, value, {"win": view.handle})

    def create_scratch_document(self) -> Buffer:
        with _host_errors():
            return self.nvim.api.create_buf(False, True)

    def split_view(self) -> Window:
        with _host_errors():
            self.nvim.command("rightbelow vsplit")
            return self.nvim.api.get_current_win()

    def set_view_document(self, view: Window, document: Buffer) -> None:
        with _host_errors():
            self.nvim.api.win_set_buf(view, document)

    def set_view_width(self, view: Window, width: int) -> None:
        with _host_errors():
            self.nvim.api.win_set_width(view, width)

    def close_view(self, view: Window) -> None:
        with _host_errors():
            self.nvim.api.win_close(view, False)

    def focus_previous_view(self) -> None:
        with _host_errors():
            self.nvim.command("wincmd p")

    def wipe_document(self, document: Buffer) -> None:
        with _host_errors():
            self.nvim.api.buf_delete(document, {"force": True})

    def total_columns(self) -> int:
        with _host_errors():
            return int(self.nvim.api.get_option_value("columns", {}))

    def notify(self, message: str, level: int = logging.INFO) -> None:
        nvim_level = _NOTIFY_LEVELS.get(level, 2)
        with _host_errors():
            self.nvim.api.notify(f"[time-tracking] {message}", nvim_level, {})

    def get_var(self, name: str, default: Any = None) -> Any:
        """Return ``g:<name>`` or ``default`` when it is not set."""
        with _host_errors():
            return self.nvim.vars.get(name, default)
