"""Task predicates over records and filename predicates over documents."""

import re
from dataclasses import dataclass
from pathlib import Path

from org_daily.models.outline import HeadlineRecord, Keyword


@dataclass(frozen=True)
class TaskPredicate:
    """Matches records whose keyword is one of ``keywords``."""

    name: str
    keywords: frozenset[Keyword]

    def __call__(self, record: HeadlineRecord) -> bool:
        return record.keyword in self.keywords


TASK_OPEN = TaskPredicate("open", frozenset({Keyword.TODO}))
TASK_CLOSED_OR_OPEN = TaskPredicate("open-or-closed", frozenset({Keyword.TODO, Keyword.DONE}))


def matches(record: HeadlineRecord, predicate: TaskPredicate) -> bool:
    # Keyword.NONE is never part of a predicate.
    return predicate(record)


def wildcard_to_pattern(wildcard: str, suffix: str = "") -> re.Pattern[str]:
    """Translate a filename wildcard into an anchored, case-sensitive pattern.

    Each ``*`` matches any run of characters; everything else is literal.
    ``suffix`` (usually the journal extension) is appended unless the
    wildcard already ends with it.

    >>> bool(wildcard_to_pattern("2024*", ".org").fullmatch("20240101.org"))
    True
    """
    if suffix and not wildcard.endswith(suffix):
        wildcard += suffix
    regex = ".*".join(re.escape(part) for part in wildcard.split("*"))
    return re.compile(f"^{regex}$")


def filename_matches(path: Path, pattern: re.Pattern[str]) -> bool:
    """Apply pattern to the base filename only."""
    return pattern.match(path.name) is not None
