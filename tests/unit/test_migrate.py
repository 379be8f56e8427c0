"""Tests for the migration engine."""

from pathlib import Path

import pytest

from org_daily.core.migrate import dedupe_sources, migrate_tasks, select_sources
from org_daily.core.outline.parser import parse
from org_daily.core.tasks.extractor import ExtractMode
from org_daily.errors import DestinationPersistError, JournalError, SourcePersistError
from org_daily.models.outline import Keyword
from org_daily.writer import DocumentWriter
from tests.unit.fakes import FailingWriter, RecordingTables
from tests.unit.helpers import write_docs

SOURCES = {
    "20240101.org": "* Notes\n* TODO first\n:PROPERTIES:\n:ID: 1\n:END:\n* DONE finished\n* TODO second\n",
    "20240102.org": "* TODO third\nSCHEDULED: <2024-01-02 Tue>\n* plain\n",
    "20240103.org": "* nothing to do\n",
}


def test_select_sources_sorted_and_excludes_destination(tmp_path: Path) -> None:
    write_docs(tmp_path, {**SOURCES, "20240115.org": "* TODO today\n", "notes.txt": ""})

    sources = select_sources(tmp_path, "2024*", exclude=tmp_path / "20240115.org")

    assert [p.name for p in sources] == ["20240101.org", "20240102.org", "20240103.org"]


def test_select_sources_skips_directories(tmp_path: Path) -> None:
    write_docs(tmp_path, SOURCES)
    (tmp_path / "2024-archive.org").mkdir()

    sources = select_sources(tmp_path, "*", exclude=tmp_path / "today.org")

    assert "2024-archive.org" not in [p.name for p in sources]


def test_dedupe_sources_keeps_order_and_drops_destination(tmp_path: Path) -> None:
    a, b, dest = tmp_path / "a.org", tmp_path / "b.org", tmp_path / "d.org"

    assert dedupe_sources([b, a, b, dest, a], exclude=dest) == [b, a]


def test_migrate_moves_open_tasks_in_order(tmp_path: Path) -> None:
    write_docs(tmp_path, SOURCES)
    dest_path = tmp_path / "20240115.org"
    sources = select_sources(tmp_path, "2024*", exclude=dest_path)

    report = migrate_tasks(
        sources,
        parse("* MOTD\n", dest_path),
        writer=DocumentWriter(),
        tables=RecordingTables(),
    )

    assert report.moved == 3
    assert [p.name for p in report.sources] == ["20240101.org", "20240102.org"]
    assert dest_path.read_text(encoding="utf-8") == (
        "* MOTD\n"
        "* TODO first\n:PROPERTIES:\n:ID: 1\n:END:\n\n"
        "* TODO second\n\n"
        "* TODO third\nSCHEDULED: <2024-01-02 Tue>\n\n"
    )
    assert (tmp_path / "20240101.org").read_text(encoding="utf-8") == "* Notes\n* DONE finished\n"
    assert (tmp_path / "20240102.org").read_text(encoding="utf-8") == "* plain\n"


def test_migrate_headline_mode_leaves_drawers(tmp_path: Path) -> None:
    write_docs(tmp_path, SOURCES)
    dest_path = tmp_path / "20240115.org"

    migrate_tasks(
        [tmp_path / "20240101.org"],
        parse("", dest_path),
        writer=DocumentWriter(),
        tables=RecordingTables(),
        mode=ExtractMode.HEADLINE,
    )

    assert dest_path.read_text(encoding="utf-8") == "* TODO first\n\n* TODO second\n\n"
    source_text = (tmp_path / "20240101.org").read_text(encoding="utf-8")
    assert source_text == "* Notes\n:PROPERTIES:\n:ID: 1\n:END:\n* DONE finished\n"


def test_migrate_without_matches_writes_nothing(tmp_path: Path) -> None:
    write_docs(tmp_path, {"20240103.org": "* nothing to do\n"})
    dest_path = tmp_path / "20240115.org"
    writer = DocumentWriter()

    report = migrate_tasks(
        [tmp_path / "20240103.org"], parse("* MOTD\n", dest_path), writer=writer, tables=RecordingTables()
    )

    assert report.moved == 0
    assert writer.updates == []
    assert not dest_path.exists()


def test_migrate_passes_destination_through_tables(tmp_path: Path) -> None:
    write_docs(tmp_path, SOURCES)
    tables = RecordingTables()

    migrate_tasks(
        [tmp_path / "20240102.org"],
        parse("", tmp_path / "20240115.org"),
        writer=DocumentWriter(),
        tables=tables,
    )

    assert len(tables.documents) == 1
    assert [r.keyword for r in tables.documents[0].records] == [Keyword.TODO]


def test_migrate_source_failure_keeps_destination_unwritten(tmp_path: Path) -> None:
    write_docs(tmp_path, SOURCES)
    dest_path = tmp_path / "20240115.org"
    failing = tmp_path / "20240102.org"
    writer = FailingWriter(fail_on=failing)

    with pytest.raises(SourcePersistError) as excinfo:
        migrate_tasks(
            [tmp_path / "20240101.org", failing],
            parse("* MOTD\n", dest_path),
            writer=writer,
            tables=RecordingTables(),
        )

    err = excinfo.value
    assert err.path == failing
    assert err.persisted == (tmp_path / "20240101.org",)
    assert "* TODO third" in err.destination.text
    assert "* TODO first" in err.destination.text
    assert not dest_path.exists()
    assert writer.written == [tmp_path / "20240101.org"]
    assert failing.read_text(encoding="utf-8") == SOURCES["20240102.org"]


def test_migrate_destination_failure_keeps_records_in_error(tmp_path: Path) -> None:
    """Sources are already written; the error holds the destination with the moved records."""
    write_docs(tmp_path, SOURCES)
    dest_path = tmp_path / "20240115.org"
    writer = FailingWriter(fail_on=dest_path)

    with pytest.raises(DestinationPersistError) as excinfo:
        migrate_tasks(
            [tmp_path / "20240101.org", tmp_path / "20240102.org"],
            parse("* MOTD\n", dest_path),
            writer=writer,
            tables=RecordingTables(),
        )

    err = excinfo.value
    assert err.path == dest_path
    assert err.persisted == (tmp_path / "20240101.org", tmp_path / "20240102.org")
    assert [r.title for r in err.destination.records if r.keyword is Keyword.TODO] == [
        "first",
        "second",
        "third",
    ]
    assert not dest_path.exists()
    assert (tmp_path / "20240102.org").read_text(encoding="utf-8") == "* plain\n"


def test_migrate_unreadable_source_is_journal_error(tmp_path: Path) -> None:
    bad = tmp_path / "20240101.org"
    bad.write_bytes(b"* TODO caf\xe9\n")
    dest_path = tmp_path / "20240115.org"

    with pytest.raises(JournalError, match="20240101.org"):
        migrate_tasks([bad], parse("* MOTD\n", dest_path), writer=DocumentWriter(), tables=RecordingTables())

    assert not dest_path.exists()
    assert bad.read_bytes() == b"* TODO caf\xe9\n"


def test_migrate_rejects_destination_without_path(tmp_path: Path) -> None:
    write_docs(tmp_path, SOURCES)

    with pytest.raises(ValueError, match="no path"):
        migrate_tasks(
            [tmp_path / "20240102.org"], parse(""), writer=DocumentWriter(), tables=RecordingTables()
        )

    assert (tmp_path / "20240102.org").read_text(encoding="utf-8") == SOURCES["20240102.org"]
