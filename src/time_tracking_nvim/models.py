"""Snapshots of host documents and views as seen by the preview core."""

from __future__ import annotations

from dataclasses import dataclass

from .host import Handle


@dataclass(frozen=True, slots=True)
class DocumentEntry:
    """A host document paired with the name it had when it was listed."""

    document: Handle
    name: str


@dataclass(frozen=True, slots=True)
class ViewEntry:
    """A host view and the document it was showing when listed."""

    view: Handle
    document: Handle
    name: str
