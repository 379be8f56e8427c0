"""Configuration for org-daily."""

import os
from dataclasses import dataclass
from pathlib import Path

# Journal location. First directory which is found is used.
JOURNAL_DIRECTORIES: list[Path] = [
    Path("~/org/journal").expanduser(),
    Path("~/journal").expanduser(),
    Path("~/.local/share/org-daily").expanduser(),
]

# Every day document is named YYYYMMDD plus this extension.
JOURNAL_EXTENSION: str = ".org"
DATE_FORMAT: str = "%Y%m%d"

# Plain text list of agenda directories, one path per line.
AGENDA_FILE_LIST: Path = Path("~/.config/org-daily/agenda-files.txt").expanduser()

# External commands whose output goes into a new day document.
CALENDAR_COMMAND: tuple[str, ...] = ("calendar", "-f", "/usr/share/calendar/calendar.computer")
FORTUNE_COMMAND: tuple[str, ...] = ("fortune",)
COMMAND_TIMEOUT: float = 10.0

ENV_JOURNAL_DIR = "ORG_DAILY_JOURNAL_DIR"
ENV_ADDITIONAL_FILE = "ORG_DAILY_ADDITIONAL_FILE"


@dataclass(frozen=True)
class JournalConfig:
    """Everything an operation needs to know about where the journal lives."""

    journal_directory: Path
    additional_file_path: Path | None = None


def resolve_journal_directory() -> Path:
    """Return the first existing candidate directory, or the first candidate."""
    for candidate in JOURNAL_DIRECTORIES:
        if candidate.is_dir():
            return candidate
    return JOURNAL_DIRECTORIES[0]


def load_config(
    journal_directory: Path | None = None,
    additional_file: Path | None = None,
) -> JournalConfig:
    """Build a JournalConfig from explicit values, then environment, then defaults."""
    if journal_directory is None:
        if env_dir := os.getenv(ENV_JOURNAL_DIR):
            journal_directory = Path(env_dir)
        else:
            journal_directory = resolve_journal_directory()

    if additional_file is None and (env_file := os.getenv(ENV_ADDITIONAL_FILE)):
        additional_file = Path(env_file)

    return JournalConfig(
        journal_directory=journal_directory.expanduser(),
        additional_file_path=additional_file.expanduser() if additional_file else None,
    )
