"""Exceptions raised by journal operations."""

from pathlib import Path

from org_daily.models.outline import Document


class JournalError(Exception):
    """Base class for failures that abort a journal operation."""


class DirectoryCreateError(JournalError):
    """The journal directory could not be created."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot create journal directory {str(path)!r}: {reason}")
        self.path = path


class DocumentReadError(JournalError):
    """A document exists but could not be read as UTF-8 text."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot read document {str(path)!r}: {reason}")
        self.path = path


class PersistError(JournalError):
    """Writing a document failed after records were taken from their sources.

    Sources listed in ``persisted`` are already on disk without their tasks.
    The destination was not written; ``destination`` holds its in-memory
    state with every extracted record appended, so nothing is dropped.
    """

    role = "document"

    def __init__(
        self,
        path: Path,
        reason: str,
        *,
        persisted: tuple[Path, ...],
        destination: Document,
    ) -> None:
        super().__init__(f"Failed to write {self.role} {str(path)!r}: {reason}")
        self.path = path
        self.persisted = persisted
        self.destination = destination


class SourcePersistError(PersistError):
    """Writing a migration source failed."""

    role = "source"


class DestinationPersistError(PersistError):
    """Writing the destination document failed."""

    role = "destination"
