"""Default implementations of the external collaborators."""

import shlex
import subprocess
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from org_daily.config import COMMAND_TIMEOUT
from org_daily.models.outline import Document


class AgendaFileList:
    """Agenda directories kept in a plain text file, one path per line."""

    def __init__(self, list_file: Path) -> None:
        self.list_file = list_file

    def entries(self) -> list[str]:
        try:
            text = self.list_file.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        return [line.strip() for line in text.splitlines() if line.strip()]

    def register_agenda_directory(self, path: Path) -> None:
        entry = str(path.expanduser().resolve())
        entries = self.entries()
        if entry in entries:
            return
        entries.append(entry)
        self.list_file.parent.mkdir(parents=True, exist_ok=True)
        self.list_file.write_text("\n".join(entries) + "\n", encoding="utf-8")
        logger.debug("Registered agenda directory {}", entry)


class PassThroughTables:
    """Derived-table recomputation is done by the editor; leave documents alone."""

    def recompute_derived_tables(self, document: Document) -> Document:
        return document


def run_command(argv: Sequence[str]) -> str:
    """Run argv and return its stdout.

    A missing executable, a non-zero exit or a timeout gives an empty string.
    """
    cmd = list(argv)
    logger.debug("Running: {}", " ".join(map(shlex.quote, cmd)))
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=COMMAND_TIMEOUT,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning("Command {} failed: {}", cmd[0], e)
        return ""
    if result.returncode != 0:
        logger.warning("Command {} exited with {}", cmd[0], result.returncode)
        return ""
    return result.stdout
