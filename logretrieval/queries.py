"""By-date and by-log-ID queries over the date-partitioned log files."""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date as date_cls, timedelta
from typing import Callable, Iterable

from logretrieval.catalog import LogCatalog, LogFile, is_calendar_date
from logretrieval.errors import DirectoryUnavailable, InvalidDate, LogFileNotFound
from logretrieval.models import DateQueryResult, LogEntry
from logretrieval.parser import parse_line

logger = logging.getLogger(__name__)


def _parse_lines(lines: Iterable[str]) -> Iterable[LogEntry]:
    """Parse each line, silently dropping the ones that yield no entry."""
    entries = (parse_line(line) for line in lines)
    return (e for e in entries if e is not None)


def read_entries(log_file: LogFile,
                 predicate: Callable[[LogEntry], bool] | None = None) -> list[LogEntry]:
    """Read one file in order and return its valid entries, optionally filtered."""
    entries = _parse_lines(log_file.lines())
    if predicate is not None:
        entries = (e for e in entries if predicate(e))
    return list(entries)


def query_by_date(catalog: LogCatalog, date: str) -> DateQueryResult:
    """Return every valid entry in the file for *date*, in file order.

    Raises InvalidDate before any I/O if *date* is not YYYY-MM-DD,
    DirectoryUnavailable if the log directory is missing, and
    LogFileNotFound if there is no file for that date.
    """
    if not is_calendar_date(date):
        raise InvalidDate(f"invalid date format: {date!r}, expected YYYY-MM-DD")

    if not catalog.exists():
        raise DirectoryUnavailable(f"log directory not found: {catalog.log_dir}")

    log_file = catalog.file_for(date)
    if not log_file.exists():
        raise LogFileNotFound(f"log file not found: {log_file.path}")

    try:
        entries = read_entries(log_file)
    except FileNotFoundError as exc:
        raise LogFileNotFound(f"log file not found: {log_file.path}") from exc
    logger.debug("Read %d entries from %s", len(entries), log_file.path)
    return DateQueryResult(entries=entries, total=len(entries))


def _within_lookback(files: list[LogFile], lookback_days: int,
                     today: date_cls | None) -> list[LogFile]:
    today = today or date_cls.today()
    oldest = (today - timedelta(days=lookback_days - 1)).isoformat()
    newest = today.isoformat()
    return [f for f in files if oldest <= f.date <= newest]


def _scan_for_log_id(log_file: LogFile, log_id: str) -> list[LogEntry]:
    try:
        return read_entries(log_file, lambda e: e.log_id == log_id)
    except FileNotFoundError:
        logger.warning("Log file disappeared before it could be read: %s", log_file.path)
        return []


def query_by_log_id(catalog: LogCatalog, log_id: str, max_workers: int = 1,
                    lookback_days: int | None = None,
                    today: date_cls | None = None) -> list[LogEntry]:
    """Return entries with this log ID from every log file, oldest timestamp first.

    An empty *log_id* matches nothing. With *lookback_days* set, only files
    dated within that many days up to *today* are scanned. Files are
    scanned in a thread pool when *max_workers* > 1; the merged result is
    sorted only after every scan has finished.
    """
    if not log_id:
        return []

    files = catalog.list_files()
    if lookback_days:
        files = _within_lookback(files, lookback_days, today)

    if max_workers > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            per_file = list(pool.map(lambda f: _scan_for_log_id(f, log_id), files))
    else:
        per_file = [_scan_for_log_id(f, log_id) for f in files]

    matches = [entry for entries in per_file for entry in entries]
    matches.sort(key=lambda e: e.timestamp)
    logger.debug("log_id=%s matched %d entries across %d file(s)",
                 log_id, len(matches), len(files))
    return matches
