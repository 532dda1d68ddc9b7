"""Read-only queries over the editor's open views and documents."""

from __future__ import annotations

from typing import Callable, Iterator, Optional

from .host import Handle, Host
from .models import DocumentEntry, ViewEntry

NamePredicate = Callable[[str], bool]


class ViewRegistry:
    """Enumerate live host state. Nothing is cached between calls."""

    def __init__(self, host: Host) -> None:
        self.host = host

    def iter_views(self) -> Iterator[ViewEntry]:
        for view in self.host.list_views():
            document = self.host.view_document(view)
            yield ViewEntry(
                view=view,
                document=document,
                name=self.host.document_name(document),
            )

    def views(self) -> list[ViewEntry]:
        return list(self.iter_views())

    def documents(self) -> list[DocumentEntry]:
        return [
            DocumentEntry(document=document, name=self.host.document_name(document))
            for document in self.host.list_documents()
        ]

    def find_document(self, predicate: NamePredicate) -> Optional[DocumentEntry]:
        for document in self.host.list_documents():
            name = self.host.document_name(document)
            if predicate(name):
                return DocumentEntry(document=document, name=name)
        return None

    def find_view(self, predicate: NamePredicate) -> Optional[ViewEntry]:
        for entry in self.iter_views():
            if predicate(entry.name):
                return entry
        return None

    def shows_document_named(self, predicate: NamePredicate) -> bool:
        return self.find_view(predicate) is not None

    def shows_document(self, document: Handle) -> bool:
        return any(
            self.host.view_document(view) == document for view in self.host.list_views()
        )

    def has_views(self) -> bool:
        return bool(self.host.list_views())

    def current_document(self) -> DocumentEntry:
        document = self.host.current_document()
        return DocumentEntry(document=document, name=self.host.document_name(document))

    def document_text(self, document: Handle) -> str:
        """Return the document's lines joined with newlines."""
        return "\n".join(self.host.document_lines(document))
