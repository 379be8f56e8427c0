"""Parse outline text into headline records and serialize it back."""

import re
from pathlib import Path

from org_daily.models.outline import Document, HeadlineRecord, Keyword

HEADLINE_RE = re.compile(r"^(?P<stars>\*+)[ \t]+(?P<rest>.*)$")
KEYWORD_RE = re.compile(r"^(?P<keyword>TODO|DONE)(?:[ \t]+|$)")
SCHEDULE_RE = re.compile(r"^[ \t]*SCHEDULED:")
DRAWER_BEGIN_RE = re.compile(r"^[ \t]*:(?:PROPERTIES|LOGBOOK):[ \t]*$")
DRAWER_END_RE = re.compile(r"^[ \t]*:END:[ \t]*$")


def _split_lines(text: str) -> list[str]:
    """Split on newlines only, keeping them, so that joining gives back text."""
    lines = [line + "\n" for line in text.split("\n")]
    lines[-1] = lines[-1][:-1]
    if not lines[-1]:
        lines.pop()
    return lines


def _content(line: str) -> str:
    return line.rstrip("\n").rstrip("\r")


def _is_headline(line: str) -> bool:
    return HEADLINE_RE.match(_content(line)) is not None


def _parse_headline(m: re.Match[str]) -> tuple[int, Keyword, str]:
    rest = m.group("rest")
    kw = KEYWORD_RE.match(rest)
    if kw is None:
        return len(m.group("stars")), Keyword.NONE, rest.strip()
    return len(m.group("stars")), Keyword(kw.group("keyword")), rest[kw.end():].strip()


def _take_drawers(lines: list[str], i: int) -> tuple[str, int]:
    """Consume consecutive closed drawers starting at line i.

    An unterminated drawer is not consumed; it stays part of the body.
    """
    block = ""
    while i < len(lines) and DRAWER_BEGIN_RE.match(_content(lines[i])):
        j = i + 1
        while j < len(lines) and not _is_headline(lines[j]):
            if DRAWER_END_RE.match(_content(lines[j])):
                break
            j += 1
        if j >= len(lines) or _is_headline(lines[j]):
            break
        block += "".join(lines[i : j + 1])
        i = j + 1
    return block, i


def parse(text: str, path: Path | None = None) -> Document:
    """Parse outline text into a Document.

    Every headline line opens a record of its own; nesting is carried by
    ``level``. Parsing never fails: a headline without a recognised keyword
    gets ``Keyword.NONE``.

    Args:
        text: Raw document text.
        path: Where the text came from, if anywhere.

    Returns:
        Document whose ``text`` equals the input.
    """
    lines = _split_lines(text)
    i = 0
    preamble = ""
    while i < len(lines) and not _is_headline(lines[i]):
        preamble += lines[i]
        i += 1

    pos = len(preamble)
    records: list[HeadlineRecord] = []
    while i < len(lines):
        headline = lines[i]
        m = HEADLINE_RE.match(_content(headline))
        if m is None:
            msg = f"Expected a headline at line {i + 1}: {headline!r}"
            raise ValueError(msg)
        level, keyword, title = _parse_headline(m)
        i += 1

        schedule_line = ""
        if i < len(lines) and SCHEDULE_RE.match(lines[i]):
            schedule_line = lines[i]
            i += 1

        metadata_block, i = _take_drawers(lines, i)

        body = ""
        while i < len(lines) and not _is_headline(lines[i]):
            body += lines[i]
            i += 1

        record = HeadlineRecord(
            level=level,
            keyword=keyword,
            title=title,
            headline=headline,
            schedule_line=schedule_line,
            metadata_block=metadata_block,
            body=body,
            start=pos,
        )
        records.append(record)
        pos = record.end

    return Document(path=path, preamble=preamble, records=tuple(records))


def serialize(document: Document) -> str:
    """Inverse of parse()."""
    return document.text


def read_document(path: Path) -> Document:
    """Load and parse a document from disk."""
    return parse(path.read_text(encoding="utf-8"), path)
