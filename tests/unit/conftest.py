"""Shared test fixtures."""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pytest

from org_daily.api import Journal
from org_daily.config import JournalConfig
from tests.unit.fakes import FakeAgenda, FakeCommandRunner, RecordingTables
from tests.unit.helpers import TODAY


@pytest.fixture
def clock() -> Callable[[], datetime]:
    return lambda: TODAY


@pytest.fixture
def journal_dir(tmp_path: Path) -> Path:
    return tmp_path / "journal"


@pytest.fixture
def config(journal_dir: Path) -> JournalConfig:
    return JournalConfig(journal_directory=journal_dir)


@pytest.fixture
def agenda() -> FakeAgenda:
    return FakeAgenda()


@pytest.fixture
def runner() -> FakeCommandRunner:
    return FakeCommandRunner({"calendar": "Jan 15\tcalendar line\n", "fortune": "A quote.\n"})


@pytest.fixture
def tables() -> RecordingTables:
    return RecordingTables()


@pytest.fixture
def journal(
    config: JournalConfig,
    agenda: FakeAgenda,
    runner: FakeCommandRunner,
    tables: RecordingTables,
    clock: Callable[[], datetime],
) -> Journal:
    return Journal(config, agenda=agenda, tables=tables, run_command=runner, clock=clock)
