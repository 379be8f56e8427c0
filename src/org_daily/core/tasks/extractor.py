"""Extract matching records from a document as verbatim text."""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from org_daily.core.outline.navigation import subtree_end
from org_daily.core.outline.parser import parse
from org_daily.core.tasks.matcher import TaskPredicate, matches
from org_daily.models.outline import Document, HeadlineRecord


class ExtractMode(str, Enum):
    """How much of a matching record is taken."""

    HEADLINE = "headline"  # headline + schedule line
    METADATA = "metadata"  # headline + schedule line + drawers
    FULL = "full"  # the whole record and its subtree


def record_chunk(record: HeadlineRecord, mode: ExtractMode) -> str:
    if mode is ExtractMode.HEADLINE:
        return record.entry
    if mode is ExtractMode.METADATA:
        return record.entry_with_metadata
    return record.text


def _matching(
    document: Document, predicate: TaskPredicate, mode: ExtractMode
) -> Iterator[tuple[HeadlineRecord, str]]:
    """Yield (record, chunk) for each match, in document order.

    In FULL mode the chunk is the record's whole subtree, and matches nested
    inside an already taken subtree are not yielded again.
    """
    records = document.records
    i = 0
    while i < len(records):
        record = records[i]
        if not matches(record, predicate):
            i += 1
            continue
        if mode is ExtractMode.FULL:
            end = subtree_end(document, i)
            yield record, "".join(r.text for r in records[i:end])
            i = end
        else:
            yield record, record_chunk(record, mode)
            i += 1


@dataclass(frozen=True)
class Extraction:
    """Result of extract().

    ``chunks`` and ``spans`` are parallel to ``records``. ``remainder`` is the
    source document with every span cut out.
    """

    records: tuple[HeadlineRecord, ...]
    chunks: tuple[str, ...]
    spans: tuple[tuple[int, int], ...]
    remainder: Document

    def __bool__(self) -> bool:
        return bool(self.records)


def extract(document: Document, predicate: TaskPredicate, mode: ExtractMode) -> Extraction:
    """Find records matching predicate and cut them out of document.

    Text outside the cut spans is left exactly as it was. In HEADLINE and
    METADATA modes whatever is not taken (body, and drawers for HEADLINE)
    stays behind and joins the preceding record once the remainder is
    re-parsed.
    """
    records: list[HeadlineRecord] = []
    chunks: list[str] = []
    spans: list[tuple[int, int]] = []
    for record, chunk in _matching(document, predicate, mode):
        records.append(record)
        chunks.append(chunk)
        spans.append((record.start, record.start + len(chunk)))

    if not records:
        return Extraction((), (), (), document)

    return Extraction(
        records=tuple(records),
        chunks=tuple(chunks),
        spans=tuple(spans),
        remainder=parse(cut_spans(document.text, spans), document.path),
    )


def copy_matching(document: Document, predicate: TaskPredicate, mode: ExtractMode) -> tuple[str, ...]:
    """Text of matching records without touching the document."""
    return tuple(chunk for _, chunk in _matching(document, predicate, mode))


def cut_spans(text: str, spans: list[tuple[int, int]]) -> str:
    """Remove non-overlapping, ordered spans from text."""
    kept: list[str] = []
    pos = 0
    for start, end in spans:
        kept.append(text[pos:start])
        pos = end
    kept.append(text[pos:])
    return "".join(kept)


def append_chunks(document: Document, chunks: list[str] | tuple[str, ...], *, separator: str = "\n") -> Document:
    """Append chunks at the end of document, each followed by separator.

    The existing text gets a trailing newline first if it lacks one, and so
    does every chunk.
    """
    if not chunks:
        return document
    text = document.text
    if text and not text.endswith("\n"):
        text += "\n"
    for chunk in chunks:
        if not chunk.endswith("\n"):
            chunk += "\n"
        text += chunk + separator
    return parse(text, document.path)
