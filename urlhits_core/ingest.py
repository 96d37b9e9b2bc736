"""Drive the record parser over an input source and fill a TallyStore."""
from __future__ import annotations
import logging
import pathlib
from typing import Iterable, Iterator

from .config import DEFAULT_ENCODING
from .exceptions import FileProcessingError, RecordParseError
from .record_parser import AccessEvent, parse_record_line
from .tally import TallyStore

logger = logging.getLogger("urlhits")


def iter_access_events(lines: Iterable[str]) -> Iterator[AccessEvent]:
    """Lazily parse lines, skipping blank ones.

    Parse failures are re-raised with the 1-based line number attached.
    """
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            logger.debug("skipping blank line %d", line_number)
            continue
        try:
            yield parse_record_line(line)
        except RecordParseError as e:
            raise RecordParseError(str(e), line=line, line_number=line_number) from None


def ingest_lines(lines: Iterable[str], store: TallyStore) -> int:
    """Tally every record in ``lines`` into ``store``; returns records added."""
    added = 0
    for event in iter_access_events(lines):
        store.increment(event.gmt_date, event.url)
        added += 1
    return added


def ingest_file(path: str | pathlib.Path, store: TallyStore, encoding: str = DEFAULT_ENCODING) -> int:
    """Stream the file at ``path`` into ``store``.

    The handle is closed on every exit path. Open, read and decode failures
    surface as FileProcessingError; records tallied before the failure stay
    in the store.
    """
    path = pathlib.Path(path)
    logger.debug("ingesting %s", path)
    try:
        with path.open("r", encoding=encoding) as f:
            added = ingest_lines(f, store)
    except (OSError, UnicodeDecodeError) as e:
        raise FileProcessingError(f"Failed to read input file {path}: {e}") from e
    logger.debug("ingested %d records from %s (%d dates)", added, path, len(store))
    return added
