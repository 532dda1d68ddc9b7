"""Host editor interface consumed by the preview core."""

from __future__ import annotations

import enum
import logging
from typing import Any, Protocol, Sequence

Handle = Any


class HostErrorKind(enum.Enum):
    CONCURRENT_CLOSE = "concurrent_close"
    INVALID_HANDLE = "invalid_handle"
    OTHER = "other"


class HostError(Exception):
    """Raised by host adapters when an editor operation fails."""

    def __init__(self, message: str, kind: HostErrorKind = HostErrorKind.OTHER) -> None:
        super().__init__(message)
        self.kind = kind


class Host(Protocol):
    """Operations the preview core needs from the editor.

    Handles are opaque; the core compares them with ``==`` and never caches
    them across calls.
    """

    def list_views(self) -> Sequence[Handle]: ...

    def list_documents(self) -> Sequence[Handle]: ...

    def view_document(self, view: Handle) -> Handle: ...

    def current_document(self) -> Handle: ...

    def document_name(self, document: Handle) -> str: ...

    def set_document_name(self, document: Handle, name: str) -> None: ...

    def document_lines(self, document: Handle) -> list[str]: ...

    def set_document_lines(self, document: Handle, lines: list[str]) -> None: ...

    def set_document_option(self, document: Handle, name: str, value: Any) -> None: ...

    def set_view_option(self, view: Handle, name: str, value: Any) -> None: ...

    def create_scratch_document(self) -> Handle: ...

    def split_view(self) -> Handle:
        """Open a split to the right and return the new (focused) view."""
        ...

    def set_view_document(self, view: Handle, document: Handle) -> None: ...

    def set_view_width(self, view: Handle, width: int) -> None: ...

    def close_view(self, view: Handle) -> None: ...

    def focus_previous_view(self) -> None: ...

    def wipe_document(self, document: Handle) -> None: ...

    def total_columns(self) -> int: ...

    def notify(self, message: str, level: int = logging.INFO) -> None: ...
