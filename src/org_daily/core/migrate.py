"""Move open tasks from source documents into a destination document."""

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from org_daily.config import JOURNAL_EXTENSION
from org_daily.core.tasks.extractor import ExtractMode, append_chunks, extract
from org_daily.core.tasks.matcher import TASK_OPEN, TaskPredicate, filename_matches, wildcard_to_pattern
from org_daily.errors import DestinationPersistError, SourcePersistError
from org_daily.models.outline import Document
from org_daily.protocols import DocumentWriterProtocol, TablesProtocol


@dataclass(frozen=True)
class MigrationReport:
    """Summary of a migration."""

    destination: Path
    moved: int
    sources: tuple[Path, ...]


def _same_file(a: Path, b: Path) -> bool:
    return a.resolve() == b.resolve()


def select_sources(
    directory: Path,
    wildcard: str,
    *,
    exclude: Path,
    extension: str = JOURNAL_EXTENSION,
) -> list[Path]:
    """Files in directory whose name matches wildcard + extension, sorted.

    ``exclude`` (the destination) is skipped even when its name matches.
    """
    pattern = wildcard_to_pattern(wildcard, extension)
    return sorted(
        p
        for p in directory.iterdir()
        if p.is_file() and filename_matches(p, pattern) and not _same_file(p, exclude)
    )


def dedupe_sources(paths: Iterable[Path], *, exclude: Path) -> list[Path]:
    """Keep the first occurrence of each path, without the destination."""
    seen: set[Path] = set()
    result: list[Path] = []
    for path in paths:
        key = path.resolve()
        if key in seen or _same_file(path, exclude):
            continue
        seen.add(key)
        result.append(path)
    return result


def migrate_tasks(
    sources: list[Path],
    destination: Document,
    *,
    writer: DocumentWriterProtocol,
    tables: TablesProtocol,
    mode: ExtractMode = ExtractMode.METADATA,
    predicate: TaskPredicate = TASK_OPEN,
) -> MigrationReport:
    """Cut matching records out of every source and append them to destination.

    Sources are visited in the given order and their records keep document
    order. All mutated sources are written before the destination, so a
    failed source write never leaves moved records only in the destination
    file.

    Args:
        sources: Source paths, already filtered and ordered.
        destination: Freshly loaded destination document (must have a path).
        writer: Persistence for sources and destination.
        tables: Collaborator refreshing derived tables in the destination.
        mode: How much of each record moves.
        predicate: Which records move.

    Returns:
        MigrationReport with the number of records moved and the sources touched.

    Raises:
        SourcePersistError: A source could not be written; the destination
            was not written.
        DestinationPersistError: All sources were written but the destination
            was not; the error carries the destination with the moved records.
        ValueError: destination has no path.
    """
    if destination.path is None:
        msg = "Destination document has no path"
        raise ValueError(msg)
    dest_path = destination.path
    remainders: list[tuple[Path, Document]] = []
    chunks: list[str] = []
    for path in sources:
        source = writer.read_document(path)
        extraction = extract(source, predicate, mode)
        if not extraction:
            logger.debug("No {} tasks in {}", predicate.name, path.name)
            continue
        logger.debug("Moving {} task(s) from {}", len(extraction.records), path.name)
        remainders.append((path, extraction.remainder))
        chunks.extend(extraction.chunks)

    if not chunks:
        logger.info("No {} tasks to move", predicate.name)
        return MigrationReport(destination=dest_path, moved=0, sources=())

    destination = append_chunks(destination, chunks)

    persisted: list[Path] = []
    for path, remainder in remainders:
        try:
            writer.write_document(remainder)
        except OSError as e:
            raise SourcePersistError(
                path,
                e.strerror or str(e),
                persisted=tuple(persisted),
                destination=destination,
            ) from e
        persisted.append(path)

    destination = tables.recompute_derived_tables(destination)
    try:
        writer.write_document(destination)
    except OSError as e:
        raise DestinationPersistError(
            dest_path,
            e.strerror or str(e),
            persisted=tuple(persisted),
            destination=destination,
        ) from e

    logger.info(
        "Moved {} task(s) from {} document(s) into {}",
        len(chunks), len(persisted), destination.name,
    )
    return MigrationReport(destination=dest_path, moved=len(chunks), sources=tuple(persisted))
