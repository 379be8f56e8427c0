"""Daily outline journal with task migration."""

from org_daily.api import Journal
from org_daily.config import JournalConfig
from org_daily.writer import DocumentWriter

__all__ = ["DocumentWriter", "Journal", "JournalConfig"]
