"""Journal operations: today's entry/task, task migration and aggregation."""

from collections.abc import Callable, Iterable
from datetime import datetime
from pathlib import Path

from loguru import logger

from org_daily.collaborators import PassThroughTables
from org_daily.collaborators import run_command as default_run_command
from org_daily.config import JournalConfig
from org_daily.core.aggregate import AggregationReport, aggregate_tasks
from org_daily.core.migrate import MigrationReport, dedupe_sources, migrate_tasks, select_sources
from org_daily.core.tasks.extractor import ExtractMode, append_chunks
from org_daily.journal import JournalStore, ResolvedDocument
from org_daily.protocols import AgendaProtocol, CommandRunner, DocumentWriterProtocol, TablesProtocol
from org_daily.writer import DocumentWriter


class Journal:
    """Entry points operating on one journal directory.

    Nothing is cached between calls: each operation reads the files it
    needs and writes every changed document exactly once, a newly created
    day document included.
    """

    def __init__(
        self,
        config: JournalConfig,
        *,
        agenda: AgendaProtocol,
        tables: TablesProtocol | None = None,
        writer: DocumentWriterProtocol | None = None,
        run_command: CommandRunner = default_run_command,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config
        self.tables = tables or PassThroughTables()
        self.writer = writer or DocumentWriter()
        self.clock = clock
        self.store = JournalStore(
            config,
            writer=self.writer,
            agenda=agenda,
            run_command=run_command,
            clock=clock,
        )

    def _append_to_today(self, text: str) -> Path:
        resolved = self.store.resolve_today_document(persist=False)
        self.writer.write_document(append_chunks(resolved.document, [text], separator=""))
        return resolved.path

    def _migrate(
        self, sources: list[Path], resolved: ResolvedDocument, mode: ExtractMode
    ) -> MigrationReport:
        report = migrate_tasks(
            sources, resolved.document, writer=self.writer, tables=self.tables, mode=mode
        )
        if resolved.created and not report.moved:
            self.writer.write_document(resolved.document)
        return report

    def create_today_entry(self, title: str = "") -> Path:
        """Add a time-stamped top-level heading to today's document."""
        heading = f"* {self.clock():%H:%M} {title}".rstrip()
        path = self._append_to_today(heading + "\n")
        logger.info("Added entry to {}", path.name)
        return path

    def create_today_task(self, title: str, *, scheduled: str | None = None) -> Path:
        """Add a TODO heading scheduled for today (or for ``scheduled``) to today's document."""
        when = scheduled or f"{self.clock():%Y-%m-%d %a}"
        path = self._append_to_today(f"* TODO {title}\nSCHEDULED: <{when}>\n")
        logger.info("Added task to {}", path.name)
        return path

    def move_matching_tasks(
        self,
        wildcard: str,
        *,
        mode: ExtractMode = ExtractMode.METADATA,
    ) -> MigrationReport:
        """Move open tasks from journal documents matching wildcard into today's document."""
        resolved = self.store.resolve_today_document(persist=False)
        sources = select_sources(self.store.directory, wildcard, exclude=resolved.path)
        logger.debug("Sources for {!r}: {}", wildcard, [p.name for p in sources])
        return self._migrate(sources, resolved, mode)

    def move_tasks_from_files(
        self,
        paths: Iterable[Path],
        *,
        mode: ExtractMode = ExtractMode.HEADLINE,
    ) -> MigrationReport:
        """Move open tasks from the given files, in the given order, into today's document."""
        resolved = self.store.resolve_today_document(persist=False)
        sources = dedupe_sources(paths, exclude=resolved.path)
        return self._migrate(sources, resolved, mode)

    def aggregate_tasks_and_dones(self, wildcard: str, target: Path) -> AggregationReport:
        """Copy TODO and DONE records from matching journal documents into target."""
        self.store.resolve_today_document()
        sources = select_sources(self.store.directory, wildcard, exclude=target)
        return aggregate_tasks(
            sources,
            self.writer.read_document(target),
            writer=self.writer,
            tables=self.tables,
        )
