"""Whole-document reader/writer with change tracking."""

import os
import tempfile
from pathlib import Path

from loguru import logger

from org_daily.core.outline.parser import parse
from org_daily.errors import DocumentReadError
from org_daily.models.outline import Document


class DocumentWriter:
    """Load and persist outline documents.

    - Every write replaces the whole file atomically (temporary file in the
      same directory, then ``os.replace``).
    - Files whose contents did not change are not rewritten.
    - Actions are recorded so a summary can be reported at the end.
    """

    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run
        # list of (action, filename) tuples
        self._updates: list[tuple[str, str]] = []

    @property
    def updates(self) -> list[tuple[str, str]]:
        return list(self._updates)

    def read_document(self, path: Path) -> Document:
        """Load path; a file that does not exist reads as an empty document.

        Raises:
            DocumentReadError: The file exists but is unreadable or not UTF-8.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            text = ""
        except UnicodeDecodeError as e:
            raise DocumentReadError(path, f"not valid UTF-8 ({e.reason} at byte {e.start})") from e
        except OSError as e:
            raise DocumentReadError(path, e.strerror or str(e)) from e
        return parse(text, path)

    def write_document(self, document: Document) -> None:
        """Write document.text to document.path."""
        if document.path is None:
            msg = "Cannot write a document without a path"
            raise ValueError(msg)
        path = document.path
        contents = document.text

        action = "create"
        try:
            if path.read_text(encoding="utf-8") == contents:
                logger.debug("Unchanged: {}", path)
                return
            action = "update"
        except FileNotFoundError:
            pass
        except UnicodeDecodeError:
            action = "update"

        self._updates.append((action, str(path)))

        if self.dry_run:
            logger.info("dry-run: would {} {}", action, path)
            return

        logger.debug("Writing ({}) {}", action, path)
        path.parent.mkdir(parents=True, exist_ok=True)
        mode = path.stat().st_mode & 0o777 if action == "update" else 0o644
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(contents)
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def summary(self) -> str:
        """One-line description of what was written, e.g. for logging."""
        if not self._updates:
            return "no changes"
        parts: list[str] = []
        last_action = None
        for action, fname in self._updates:
            part = repr(Path(fname).stem)
            if action != last_action:
                part = f"{action} {part}"
                last_action = action
            parts.append(part)
        return ", ".join(parts)
