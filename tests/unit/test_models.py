"""Tests for domain models."""

from pathlib import Path

import pytest

from org_daily.models.outline import Document, HeadlineRecord, Keyword


def test_record_is_frozen() -> None:
    record = HeadlineRecord(level=1, keyword=Keyword.TODO, title="a", headline="* TODO a\n")
    with pytest.raises(AttributeError):
        record.title = "changed"  # type: ignore[misc]


def test_record_text_parts() -> None:
    record = HeadlineRecord(
        level=1,
        keyword=Keyword.TODO,
        title="a",
        headline="* TODO a\n",
        schedule_line="SCHEDULED: <2024-01-01 Mon>\n",
        metadata_block=":PROPERTIES:\n:END:\n",
        body="text\n",
        start=10,
    )

    assert record.entry == "* TODO a\nSCHEDULED: <2024-01-01 Mon>\n"
    assert record.entry_with_metadata == record.entry + ":PROPERTIES:\n:END:\n"
    assert record.text == record.entry_with_metadata + "text\n"
    assert record.end == 10 + len(record.text)


def test_document_name() -> None:
    assert Document(path=Path("/j/20240101.org")).name == "20240101.org"
    assert Document(path=None).name == "<memory>"
