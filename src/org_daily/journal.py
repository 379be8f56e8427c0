"""Locate today's journal document, creating it from the template if needed."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from loguru import logger

from org_daily.collaborators import run_command as default_run_command
from org_daily.config import (
    CALENDAR_COMMAND,
    DATE_FORMAT,
    FORTUNE_COMMAND,
    JOURNAL_EXTENSION,
    JournalConfig,
)
from org_daily.core.outline.parser import parse
from org_daily.errors import DirectoryCreateError
from org_daily.models.outline import Document
from org_daily.protocols import AgendaProtocol, CommandRunner, DocumentWriterProtocol

TEMPLATE_HEADING = "* MOTD"
TIMESTAMP_FORMAT = "%A, %B %d, %Y %H:%M"


@dataclass(frozen=True)
class ResolvedDocument:
    """Today's document and whether this call created it.

    When ``created`` is true and the document was resolved with
    ``persist=False`` the file does not exist yet; the caller writes it.
    """

    document: Document
    path: Path
    created: bool


def day_filename(day: datetime) -> str:
    return day.strftime(DATE_FORMAT) + JOURNAL_EXTENSION


def render_template(now: datetime, *, calendar: str, fortune: str, additional: str) -> str:
    """Build the text of a new day document.

    Empty pieces are skipped; non-empty ones end with a newline.
    """
    parts = [TEMPLATE_HEADING + "\n", now.strftime(TIMESTAMP_FORMAT) + "\n"]
    for piece in (calendar, fortune, additional):
        if not piece:
            continue
        parts.append(piece if piece.endswith("\n") else piece + "\n")
    return "".join(parts)


class JournalStore:
    """Today's document inside the configured journal directory."""

    def __init__(
        self,
        config: JournalConfig,
        *,
        writer: DocumentWriterProtocol,
        agenda: AgendaProtocol,
        run_command: CommandRunner = default_run_command,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config
        self.writer = writer
        self.agenda = agenda
        self.run_command = run_command
        self.clock = clock

    @property
    def directory(self) -> Path:
        return self.config.journal_directory

    def today_path(self) -> Path:
        return self.directory / day_filename(self.clock())

    def ensure_directory(self) -> None:
        """Create the journal directory (no-op if it exists) and register it."""
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreateError(self.directory, e.strerror or str(e)) from e
        self.agenda.register_agenda_directory(self.directory)

    def _additional_text(self) -> str:
        path = self.config.additional_file_path
        if path is None or not path.is_file():
            return ""
        return path.read_text(encoding="utf-8")

    def resolve_today_document(self, *, persist: bool = True) -> ResolvedDocument:
        """Return today's document, creating it from the template if absent.

        Existence of the file is what decides whether the template is
        rendered, so calling this twice a day never duplicates it.

        Args:
            persist: Write a newly rendered document right away. Callers that
                are about to change the document pass False and write it
                once themselves.
        """
        self.ensure_directory()
        path = self.today_path()
        if path.exists():
            logger.debug("Using existing journal document {}", path)
            return ResolvedDocument(self.writer.read_document(path), path=path, created=False)

        now = self.clock()
        text = render_template(
            now,
            calendar=self.run_command(CALENDAR_COMMAND),
            fortune=self.run_command(FORTUNE_COMMAND),
            additional=self._additional_text(),
        )
        document = parse(text, path)
        if persist:
            self.writer.write_document(document)
            logger.info("Created journal document {}", path)
        else:
            logger.debug("Rendered template for {}", path)
        return ResolvedDocument(document, path=path, created=True)
