"""Domain models for outline documents."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Keyword(str, Enum):
    """Task state attached to a headline."""

    TODO = "TODO"
    DONE = "DONE"
    NONE = "NONE"


@dataclass(frozen=True)
class HeadlineRecord:
    """A single headline with everything that belongs to it up to the next headline.

    All text fields are kept verbatim (newlines included) so that a document
    can be reassembled byte for byte.
    """

    level: int
    keyword: Keyword
    title: str
    headline: str
    schedule_line: str = ""
    metadata_block: str = ""
    body: str = ""
    # Offset of the headline in the parsed text, only meaningful for removal.
    start: int = field(default=0, compare=False)

    @property
    def scheduled(self) -> str | None:
        """Opaque date text of the schedule line, if any."""
        if not self.schedule_line:
            return None
        _, _, when = self.schedule_line.partition("SCHEDULED:")
        return when.strip()

    @property
    def entry(self) -> str:
        """Headline plus schedule line."""
        return self.headline + self.schedule_line

    @property
    def entry_with_metadata(self) -> str:
        """Headline, schedule line and metadata drawers."""
        return self.headline + self.schedule_line + self.metadata_block

    @property
    def text(self) -> str:
        """The full record, body included."""
        return self.headline + self.schedule_line + self.metadata_block + self.body

    @property
    def end(self) -> int:
        return self.start + len(self.text)


@dataclass(frozen=True)
class Document:
    """An outline document: free text before the first headline, then records."""

    path: Path | None
    preamble: str = ""
    records: tuple[HeadlineRecord, ...] = ()

    @property
    def text(self) -> str:
        return self.preamble + "".join(r.text for r in self.records)

    @property
    def name(self) -> str:
        return self.path.name if self.path is not None else "<memory>"


@dataclass(frozen=True)
class OutlineNode:
    """A record placed in the outline tree."""

    index: int
    record: HeadlineRecord
    children: tuple["OutlineNode", ...] = ()
