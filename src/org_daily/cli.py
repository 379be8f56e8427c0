"""CLI for org-daily: today's document, task migration and aggregation."""

from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from org_daily.api import Journal
from org_daily.collaborators import AgendaFileList
from org_daily.config import AGENDA_FILE_LIST, load_config
from org_daily.core.outline.navigation import build_tree
from org_daily.core.tasks.extractor import ExtractMode
from org_daily.errors import JournalError, PersistError
from org_daily.logging_config import configure_logging
from org_daily.models.outline import Keyword, OutlineNode
from org_daily.writer import DocumentWriter

app = typer.Typer(help="org-daily: one outline document per day, with open tasks carried forward.")

JournalDirOption = Annotated[
    Path | None,
    typer.Option("--journal-dir", "-d", help="Journal directory"),
]
AdditionalFileOption = Annotated[
    Path | None,
    typer.Option("--additional-file", help="File appended to every new day document"),
]
AgendaFileOption = Annotated[
    Path,
    typer.Option("--agenda-file", help="Agenda directory list to register the journal in"),
]
DryRunOption = Annotated[bool, typer.Option("--dry-run", help="Do not write anything")]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _journal(
    journal_dir: Path | None,
    additional_file: Path | None,
    agenda_file: Path,
    dry_run: bool,
) -> Journal:
    config = load_config(journal_dir, additional_file)
    return Journal(
        config,
        agenda=AgendaFileList(agenda_file),
        writer=DocumentWriter(dry_run=dry_run),
    )


@app.command()
def today(
    title: str = typer.Argument("", help="Heading text for the new entry"),
    journal_dir: JournalDirOption = None,
    additional_file: AdditionalFileOption = None,
    agenda_file: AgendaFileOption = AGENDA_FILE_LIST,
    dry_run: DryRunOption = False,
) -> None:
    """Add an entry heading to today's document (creating the document if needed)."""
    journal = _journal(journal_dir, additional_file, agenda_file, dry_run)
    try:
        path = journal.create_today_entry(title)
    except JournalError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    logger.info("Outputs: {}", journal.writer.summary())
    typer.echo(str(path))


@app.command()
def task(
    title: str = typer.Argument(..., help="Task title"),
    scheduled: Annotated[
        str | None,
        typer.Option("--scheduled", "-s", help="Schedule text, e.g. '2024-01-15 Mon'"),
    ] = None,
    journal_dir: JournalDirOption = None,
    additional_file: AdditionalFileOption = None,
    agenda_file: AgendaFileOption = AGENDA_FILE_LIST,
    dry_run: DryRunOption = False,
) -> None:
    """Add a TODO to today's document."""
    journal = _journal(journal_dir, additional_file, agenda_file, dry_run)
    try:
        path = journal.create_today_task(title, scheduled=scheduled)
    except JournalError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    logger.info("Outputs: {}", journal.writer.summary())
    typer.echo(str(path))


def _report_persist_failure(e: PersistError) -> None:
    logger.error("{}", e)
    if e.persisted:
        logger.error(
            "Already written without their tasks: {}",
            ", ".join(p.name for p in e.persisted),
        )
    logger.error(
        "Destination {} was not written. Its intended contents:\n{}",
        e.destination.name,
        e.destination.text,
    )


@app.command()
def move(
    wildcard: str = typer.Argument("*", help="Filename wildcard, e.g. '2024*'"),
    headline_only: bool = typer.Option(
        False, "--headline-only", help="Leave property and logbook drawers behind"
    ),
    journal_dir: JournalDirOption = None,
    additional_file: AdditionalFileOption = None,
    agenda_file: AgendaFileOption = AGENDA_FILE_LIST,
    dry_run: DryRunOption = False,
) -> None:
    """Move open TODOs from matching journal documents into today's document."""
    journal = _journal(journal_dir, additional_file, agenda_file, dry_run)
    mode = ExtractMode.HEADLINE if headline_only else ExtractMode.METADATA
    try:
        report = journal.move_matching_tasks(wildcard, mode=mode)
    except PersistError as e:
        _report_persist_failure(e)
        raise typer.Exit(1) from e
    except JournalError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    logger.info("Outputs: {}", journal.writer.summary())
    typer.echo(f"Moved {report.moved} task(s) from {len(report.sources)} document(s)")


@app.command("move-files")
def move_files(
    paths: list[Path] = typer.Argument(..., exists=True, dir_okay=False, help="Source documents"),
    with_metadata: bool = typer.Option(
        False, "--with-metadata", help="Move property and logbook drawers along"
    ),
    journal_dir: JournalDirOption = None,
    additional_file: AdditionalFileOption = None,
    agenda_file: AgendaFileOption = AGENDA_FILE_LIST,
    dry_run: DryRunOption = False,
) -> None:
    """Move open TODOs from the given documents into today's document."""
    journal = _journal(journal_dir, additional_file, agenda_file, dry_run)
    mode = ExtractMode.METADATA if with_metadata else ExtractMode.HEADLINE
    try:
        report = journal.move_tasks_from_files(paths, mode=mode)
    except PersistError as e:
        _report_persist_failure(e)
        raise typer.Exit(1) from e
    except JournalError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    logger.info("Outputs: {}", journal.writer.summary())
    typer.echo(f"Moved {report.moved} task(s) from {len(report.sources)} document(s)")


@app.command()
def aggregate(
    wildcard: str = typer.Argument(..., help="Filename wildcard, e.g. '202401*'"),
    target: Path = typer.Argument(..., dir_okay=False, help="Document receiving the copies"),
    journal_dir: JournalDirOption = None,
    additional_file: AdditionalFileOption = None,
    agenda_file: AgendaFileOption = AGENDA_FILE_LIST,
    dry_run: DryRunOption = False,
) -> None:
    """Copy TODO and DONE items from matching journal documents into target."""
    journal = _journal(journal_dir, additional_file, agenda_file, dry_run)
    try:
        report = journal.aggregate_tasks_and_dones(wildcard, target)
    except PersistError as e:
        _report_persist_failure(e)
        raise typer.Exit(1) from e
    except JournalError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    logger.info("Outputs: {}", journal.writer.summary())
    typer.echo(f"Copied {report.copied} task(s) from {len(report.sources)} document(s)")


def _echo_tree(nodes: tuple[OutlineNode, ...] | list[OutlineNode], *, tasks_only: bool, depth: int = 0) -> None:
    for node in nodes:
        record = node.record
        if not tasks_only or record.keyword is not Keyword.NONE:
            keyword = "" if record.keyword is Keyword.NONE else f"{record.keyword.value} "
            line = f"{'  ' * depth}- {keyword}{record.title}"
            if record.scheduled:
                line += f"  ({record.scheduled})"
            typer.echo(line)
        _echo_tree(node.children, tasks_only=tasks_only, depth=depth + 1)


@app.command()
def show(
    path: Annotated[
        Path | None,
        typer.Argument(exists=True, dir_okay=False, help="Document to show (default: today's)"),
    ] = None,
    tasks_only: bool = typer.Option(False, "--tasks", "-t", help="Only TODO/DONE headlines"),
    journal_dir: JournalDirOption = None,
) -> None:
    """Print the outline of a document."""
    writer = DocumentWriter(dry_run=True)
    if path is None:
        config = load_config(journal_dir)
        journal = Journal(config, agenda=AgendaFileList(AGENDA_FILE_LIST), writer=writer)
        path = journal.store.today_path()
        if not path.exists():
            typer.echo(f"No document for today ({path.name}).")
            raise typer.Exit(1)
    _echo_tree(build_tree(writer.read_document(path)), tasks_only=tasks_only)
