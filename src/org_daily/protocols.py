"""Protocols for the collaborators journal operations depend on."""

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from org_daily.models.outline import Document


@runtime_checkable
class AgendaProtocol(Protocol):
    """Protocol for the list of directories an agenda viewer reads."""

    def register_agenda_directory(self, path: Path) -> None:
        """Add path to the list unless it is already there."""
        ...


@runtime_checkable
class TablesProtocol(Protocol):
    """Protocol for recomputing derived content (clock tables, formulas)."""

    def recompute_derived_tables(self, document: Document) -> Document:
        """Return document with derived content refreshed."""
        ...


class CommandRunner(Protocol):
    """Callable running an external command and returning its stdout."""

    def __call__(self, argv: Sequence[str]) -> str: ...


@runtime_checkable
class DocumentWriterProtocol(Protocol):
    """Protocol for loading and persisting whole documents."""

    dry_run: bool

    def read_document(self, path: Path) -> Document:
        """Load a document; a missing file yields an empty document."""
        ...

    def write_document(self, document: Document) -> None:
        """Persist the whole document at document.path."""
        ...

    def summary(self) -> str:
        """Describe what was written so far."""
        ...
