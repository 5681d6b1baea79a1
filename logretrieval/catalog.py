"""Date-partitioned log file discovery and line reading."""

import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Generator

from logretrieval.errors import DirectoryUnavailable

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
DEFAULT_PREFIX = "app-"
DEFAULT_SUFFIX = ".log"


def is_calendar_date(value: str) -> bool:
    """True if value is a real calendar date written exactly as YYYY-MM-DD."""
    # strptime alone accepts "2024-1-5"
    if not re.fullmatch(r"\d{4}-\d{2}-\d{2}", value):
        return False
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return False
    return True


@dataclass(frozen=True)
class LogFile:
    date: str
    path: str

    def exists(self) -> bool:
        return os.path.isfile(self.path)

    def lines(self) -> Generator[str, None, None]:
        """Yield each line in file order. The file is closed when the generator finishes."""
        with open(self.path, "r", encoding="utf-8", errors="replace") as f:
            yield from f


class LogCatalog:
    """Maps calendar dates to ``<prefix><YYYY-MM-DD><suffix>`` files in one flat directory."""

    def __init__(self, log_dir: str, prefix: str = DEFAULT_PREFIX,
                 suffix: str = DEFAULT_SUFFIX):
        self.log_dir = log_dir
        self.prefix = prefix
        self.suffix = suffix
        self._name_re = re.compile(
            re.escape(prefix) + r"(\d{4}-\d{2}-\d{2})" + re.escape(suffix)
        )

    def exists(self) -> bool:
        return os.path.isdir(self.log_dir)

    def filename_for(self, date: str) -> str:
        return f"{self.prefix}{date}{self.suffix}"

    def file_for(self, date: str) -> LogFile:
        """Build the handle for one date. Does not touch the filesystem."""
        return LogFile(date=date, path=os.path.join(self.log_dir, self.filename_for(date)))

    def date_of(self, filename: str) -> str | None:
        """Return the date embedded in a matching filename, else None."""
        m = self._name_re.fullmatch(filename)
        if not m or not is_calendar_date(m.group(1)):
            return None
        return m.group(1)

    def list_files(self) -> list[LogFile]:
        """Return every date-partitioned log file, oldest first.

        Raises DirectoryUnavailable if the directory is missing or cannot be
        listed. A directory with no matching files gives an empty list.
        """
        try:
            names = os.listdir(self.log_dir)
        except (FileNotFoundError, NotADirectoryError):
            raise DirectoryUnavailable(f"log directory not found: {self.log_dir}")
        except OSError as exc:
            raise DirectoryUnavailable(
                f"log directory cannot be listed: {self.log_dir} ({exc.strerror})"
            ) from exc

        files = []
        for name in names:
            date = self.date_of(name)
            if date is None:
                continue
            path = os.path.join(self.log_dir, name)
            if os.path.isfile(path):
                files.append(LogFile(date=date, path=path))

        files.sort(key=lambda f: f.date)
        logger.debug("Found %d log file(s) in %s", len(files), self.log_dir)
        return files
