"""Wire ingestion and emission into a single report run."""
from __future__ import annotations
import logging
import pathlib
from typing import Dict, Optional, TextIO

from .config import DateFormat, DEFAULT_DATE_FORMAT, DEFAULT_ENCODING
from .ingest import ingest_file
from .report import emit_report
from .tally import TallyStore

logger = logging.getLogger("urlhits")


def run_daily_report(path: str | pathlib.Path,
                     out: Optional[TextIO] = None,
                     date_format: DateFormat = DEFAULT_DATE_FORMAT,
                     encoding: str = DEFAULT_ENCODING) -> Dict:
    """Ingest ``path`` completely, then write the report to ``out``.

    Emission starts only after the whole input is tallied, so an ingest
    failure propagates before anything is written.
    """
    store = TallyStore()
    records = ingest_file(path, store, encoding=encoding)
    lines = emit_report(store, out=out, date_format=date_format)

    summary = {
        'input': str(path),
        'records': records,
        'dates': len(store),
        'report_lines': lines,
    }
    logger.debug("report summary: %s", summary)
    return summary
