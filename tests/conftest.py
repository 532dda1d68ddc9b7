import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import pytest

from time_tracking_nvim.host import HostError, HostErrorKind

WORKING_DIR = "/work"


@dataclass
class FakeDocument:
    name: str = ""
    lines: list = field(default_factory=lambda: [""])
    options: dict = field(default_factory=lambda: {"modifiable": True})


class FakeHost:
    """In-memory stand-in for Neovim's buffer and window tables."""

    def __init__(self, columns: int = 120) -> None:
        self.columns = columns
        self.documents: dict[int, FakeDocument] = {}
        self.views: dict[int, int] = {}
        self.view_options: dict[int, dict] = {}
        self.view_widths: dict[int, int] = {}
        self.notifications: list[tuple[str, int]] = []
        self.split_error: Optional[HostError] = None
        self.bind_error: Optional[HostError] = None
        self.calls: list[str] = []
        self._next_id = 1
        first_doc = self._new_document()
        self.current = self._new_view(first_doc)
        self.previous = self.current

    def _new_id(self) -> int:
        value = self._next_id
        self._next_id += 1
        return value

    def _new_document(self, name: str = "", lines: Optional[list] = None) -> int:
        doc = self._new_id()
        self.documents[doc] = FakeDocument(name=name, lines=list(lines or [""]))
        return doc

    def _new_view(self, doc: int) -> int:
        view = self._new_id()
        self.views[view] = doc
        self.view_options[view] = {}
        return view

    def _check_view(self, view: int) -> None:
        if view not in self.views:
            raise HostError(f"Invalid window id: {view}", HostErrorKind.INVALID_HANDLE)

    def _check_document(self, doc: int) -> None:
        if doc not in self.documents:
            raise HostError(f"Invalid buffer id: {doc}", HostErrorKind.INVALID_HANDLE)

    # test helpers

    def edit(self, path: Any, lines: Optional[list] = None) -> int:
        """Open ``path`` in the current window like ``:edit``."""
        doc = self._new_document(str(path), lines)
        self.views[self.current] = doc
        return doc

    def split_and_edit(self, path: Any, lines: Optional[list] = None) -> int:
        doc = self._new_document(str(path), lines)
        self.previous = self.current
        self.current = self._new_view(doc)
        return doc

    def preview_documents(self) -> list[int]:
        return [
            doc
            for doc, data in self.documents.items()
            if data.name.endswith("[Time Tracking Preview]")
        ]

    def preview_views(self) -> list[int]:
        previews = set(self.preview_documents())
        return [view for view, doc in self.views.items() if doc in previews]

    def preview_lines(self) -> list[str]:
        (doc,) = self.preview_documents()
        return self.documents[doc].lines

    # Host interface

    def list_views(self) -> list[int]:
        return list(self.views)

    def list_documents(self) -> list[int]:
        return list(self.documents)

    def view_document(self, view: int) -> int:
        self._check_view(view)
        return self.views[view]

    def current_document(self) -> int:
        return self.views[self.current]

    def document_name(self, document: int) -> str:
        self._check_document(document)
        return self.documents[document].name

    def set_document_name(self, document: int, name: str) -> None:
        self._check_document(document)
        full_name = name if name.startswith("/") else f"{WORKING_DIR}/{name}"
        for other, data in self.documents.items():
            if other != document and data.name == full_name:
                raise HostError("E95: Buffer with this name already exists")
        self.documents[document].name = full_name

    def document_lines(self, document: int) -> list[str]:
        self._check_document(document)
        return list(self.documents[document].lines)

    def set_document_lines(self, document: int, lines: list[str]) -> None:
        self._check_document(document)
        data = self.documents[document]
        if not data.options.get("modifiable", True):
            raise HostError("E21: Cannot make changes, 'modifiable' is off")
        self.calls.append("set_lines")
        data.lines = list(lines) or [""]

    def set_document_option(self, document: int, name: str, value: Any) -> None:
        self._check_document(document)
        self.calls.append(f"{name}={value}")
        self.documents[document].options[name] = value

    def set_view_option(self, view: int, name: str, value: Any) -> None:
        self._check_view(view)
        self.view_options[view][name] = value

    def create_scratch_document(self) -> int:
        doc = self._new_document()
        self.documents[doc].options.update({"buftype": "nofile"})
        return doc

    def split_view(self) -> int:
        if self.split_error is not None:
            raise self.split_error
        view = self._new_view(self.views[self.current])
        self.previous, self.current = self.current, view
        return view

    def set_view_document(self, view: int, document: int) -> None:
        self._check_view(view)
        self._check_document(document)
        if self.bind_error is not None:
            raise self.bind_error
        self.views[view] = document

    def set_view_width(self, view: int, width: int) -> None:
        self._check_view(view)
        self.view_widths[view] = width

    def close_view(self, view: int) -> None:
        self._check_view(view)
        if len(self.views) == 1:
            raise HostError("E444: Cannot close last window")
        doc = self.views.pop(view)
        self.view_options.pop(view, None)
        if self.current == view:
            self.current = self.previous if self.previous in self.views else next(iter(self.views))
        if self.previous not in self.views:
            self.previous = self.current
        data = self.documents.get(doc)
        if data and data.options.get("bufhidden") == "wipe" and doc not in self.views.values():
            del self.documents[doc]

    def focus_previous_view(self) -> None:
        self.previous, self.current = self.current, self.previous

    def wipe_document(self, document: int) -> None:
        self._check_document(document)
        for view in [v for v, doc in self.views.items() if doc == document]:
            if len(self.views) > 1:
                self.close_view(view)
        self.documents.pop(document, None)

    def total_columns(self) -> int:
        return self.columns

    def notify(self, message: str, level: int = logging.INFO) -> None:
        self.notifications.append((message, level))


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def tracking_dir(tmp_path):
    """A data directory with a couple of day files in it."""
    root = tmp_path / "data"
    (root / "jan").mkdir(parents=True)
    (root / "jan" / "notes.md").write_text("- 09:00-10:30 Alpha: planning\n")
    (root / "jan" / "notes.txt").write_text("plain\n")
    return root


@pytest.fixture
def outside_file(tmp_path) -> Path:
    path = tmp_path / "outside" / "outside.md"
    path.parent.mkdir()
    path.write_text("- 09:00-10:00 Beta\n")
    return path
