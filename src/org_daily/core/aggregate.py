"""Copy tasks from source documents into a target document."""

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from org_daily.core.tasks.extractor import ExtractMode, append_chunks, copy_matching
from org_daily.core.tasks.matcher import TASK_CLOSED_OR_OPEN, TaskPredicate
from org_daily.errors import DestinationPersistError
from org_daily.models.outline import Document
from org_daily.protocols import DocumentWriterProtocol, TablesProtocol


@dataclass(frozen=True)
class AggregationReport:
    """Summary of an aggregation."""

    destination: Path
    copied: int
    sources: tuple[Path, ...]


def aggregate_tasks(
    sources: list[Path],
    destination: Document,
    *,
    writer: DocumentWriterProtocol,
    tables: TablesProtocol,
    predicate: TaskPredicate = TASK_CLOSED_OR_OPEN,
) -> AggregationReport:
    """Append copies of matching records from sources to destination.

    Sources are read only. Copies are not deduplicated against what the
    destination already holds. A matching record is copied with its whole
    subtree.
    """
    if destination.path is None:
        msg = "Destination document has no path"
        raise ValueError(msg)
    dest_path = destination.path
    chunks: list[str] = []
    contributing: list[Path] = []
    for path in sources:
        found = copy_matching(writer.read_document(path), predicate, ExtractMode.FULL)
        if found:
            logger.debug("Copying {} task(s) from {}", len(found), path.name)
            chunks.extend(found)
            contributing.append(path)

    if not chunks:
        logger.info("No tasks to aggregate into {}", destination.name)
        return AggregationReport(destination=dest_path, copied=0, sources=())

    destination = tables.recompute_derived_tables(append_chunks(destination, chunks, separator=""))
    try:
        writer.write_document(destination)
    except OSError as e:
        raise DestinationPersistError(
            dest_path, e.strerror or str(e), persisted=(), destination=destination
        ) from e

    logger.info("Aggregated {} task(s) into {}", len(chunks), destination.name)
    return AggregationReport(
        destination=dest_path, copied=len(chunks), sources=tuple(contributing)
    )
