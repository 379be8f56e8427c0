"""Sample documents and file helpers shared by tests."""

from datetime import datetime
from pathlib import Path

TODAY = datetime(2024, 1, 15, 9, 30)

SAMPLE_DOC = """#+TITLE: Notes
Some preamble text.
* Project
** TODO Write report
SCHEDULED: <2024-01-10 Wed>
:PROPERTIES:
:ID: abc-123
:END:
:LOGBOOK:
CLOCK: [2024-01-10 Wed 10:00]--[2024-01-10 Wed 11:00] =>  1:00
:END:
Draft is in the shared folder.
** DONE Send invoice
CLOSED: [2024-01-09 Tue 17:00]
** Meeting notes
- talked about budget
* TODO Call plumber
"""


def write_docs(directory: Path, docs: dict[str, str]) -> None:
    """Write name -> text pairs into directory, creating it."""
    directory.mkdir(parents=True, exist_ok=True)
    for name, text in docs.items():
        (directory / name).write_text(text, encoding="utf-8")
