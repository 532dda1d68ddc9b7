"""Singleton read-only preview window showing the day summary."""

from __future__ import annotations

import logging
from typing import Optional

from .host import Handle, Host, HostError, HostErrorKind
from .models import DocumentEntry, ViewEntry
from .registry import ViewRegistry

logger = logging.getLogger(__name__)

PREVIEW_NAME = "[Time Tracking Preview]"

# Buffer options applied once when the preview document is created.
PREVIEW_DOCUMENT_OPTIONS: tuple[tuple[str, object], ...] = (
    ("buflisted", False),
    ("modifiable", False),
    ("bufhidden", "wipe"),
    ("swapfile", False),
)


def is_preview_name(name: Optional[str]) -> bool:
    """Return True if a document name identifies the preview.

    Neovim expands buffer names to absolute paths, so the reserved name is
    matched as a suffix.
    """
    return bool(name) and name.endswith(PREVIEW_NAME)


def split_lines(text: str) -> list[str]:
    r"""Split on ``\n`` and ``\r\n`` only; a trailing newline adds no line."""
    lines = text.split("\n")
    tail = lines.pop()
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    if tail:
        lines.append(tail)
    return lines


class PreviewSurface:
    """Create, refresh and close the preview document and its window.

    The preview is always located by name, never by a stored handle, so a
    document wiped by the editor between calls is simply recreated.
    """

    def __init__(
        self,
        host: Host,
        registry: Optional[ViewRegistry] = None,
        *,
        width_divisor: int = 3,
        min_width: int = 20,
    ) -> None:
        self.host = host
        self.registry = registry or ViewRegistry(host)
        self.width_divisor = width_divisor
        self.min_width = min_width

    def find_document(self) -> Optional[DocumentEntry]:
        return self.registry.find_document(is_preview_name)

    def find_view(self) -> Optional[ViewEntry]:
        return self.registry.find_view(is_preview_name)

    def is_open(self) -> bool:
        return self.find_view() is not None

    def create_or_update(self, text: str) -> None:
        """Show ``text`` in the preview, creating the buffer and split if needed."""
        if not self.registry.has_views():
            # Editor is still starting up.
            return

        entry = self.find_document()
        document = entry.document if entry else self._create_document()
        self._write(document, text)

        if not self.registry.shows_document(document):
            self._open_view(document)

    def close(self) -> None:
        entry = self.find_view()
        if entry is None:
            return
        logger.debug("Closing preview window %s", entry.view)
        try:
            self.host.close_view(entry.view)
        except HostError as exc:
            if exc.kind is not HostErrorKind.INVALID_HANDLE:
                raise
            logger.debug("Preview window %s was already gone.", entry.view)

    def destroy(self) -> None:
        """Wipe the preview document, closing any window showing it."""
        entry = self.find_document()
        if entry is None:
            return
        logger.debug("Wiping preview buffer %s", entry.document)
        self.host.wipe_document(entry.document)

    def preview_width(self) -> int:
        return max(self.host.total_columns() // self.width_divisor, self.min_width)

    def _create_document(self) -> Handle:
        document = self.host.create_scratch_document()
        self.host.set_document_name(document, PREVIEW_NAME)
        for name, value in PREVIEW_DOCUMENT_OPTIONS:
            self.host.set_document_option(document, name, value)
        logger.debug("Created preview buffer %s", document)
        return document

    def _write(self, document: Handle, text: str) -> None:
        self.host.set_document_option(document, "modifiable", True)
        try:
            self.host.set_document_lines(document, split_lines(text))
        finally:
            self.host.set_document_option(document, "modifiable", False)

    def _open_view(self, document: Handle) -> None:
        try:
            view = self.host.split_view()
        except HostError as exc:
            if exc.kind is HostErrorKind.CONCURRENT_CLOSE:
                logger.debug("Skipping preview split while a window is closing.")
            else:
                logger.warning("Failed to split for preview: %s", exc)
            return

        try:
            self.host.set_view_document(view, document)
        except HostError as exc:
            logger.warning("Failed to show preview buffer: %s", exc)
            try:
                self.host.close_view(view)
            except HostError:
                logger.debug("Could not close orphaned preview split.", exc_info=True)
            return

        try:
            self.host.set_view_option(view, "winfixwidth", True)
            self.host.set_view_width(view, self.preview_width())
        except HostError as exc:
            logger.debug("Could not size preview window: %s", exc)

        try:
            self.host.focus_previous_view()
        except HostError as exc:
            logger.debug("Could not return to previous window: %s", exc)
