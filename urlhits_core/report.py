"""Render a TallyStore as the daily URL hit report.

Report layout, one block per date, earliest date first::

    09/09/2001 GMT
    /a 2
    /b 1

Within a date URLs are ordered by descending count, ties by ascending URL.
"""
from __future__ import annotations
import sys
from typing import Iterator, List, Optional, TextIO, Tuple

import pandas as pd

from .config import DateFormat, DEFAULT_DATE_FORMAT
from .record_parser import GmtDate
from .tally import TallyStore

REPORT_COLUMNS = ['dt', 'url', 'cnt']


def _url_order(item: Tuple[str, int]):
    url, cnt = item
    return -cnt, url


def sorted_entries(store: TallyStore) -> List[Tuple[GmtDate, List[Tuple[str, int]]]]:
    """Return the store's contents in report order. Does not mutate the store."""
    return [
        (day, sorted(urls.items(), key=_url_order))
        for day, urls in sorted(store.entries(), key=lambda e: e[0])
    ]


def format_date_header(day: GmtDate, date_format: DateFormat = DEFAULT_DATE_FORMAT) -> str:
    return day.header(date_format)


def iter_report_lines(store: TallyStore, date_format: DateFormat = DEFAULT_DATE_FORMAT) -> Iterator[str]:
    for day, urls in sorted_entries(store):
        yield format_date_header(day, date_format)
        for url, cnt in urls:
            yield f"{url} {cnt}"


def emit_report(store: TallyStore, out: Optional[TextIO] = None,
                date_format: DateFormat = DEFAULT_DATE_FORMAT) -> int:
    """Write the report to ``out`` (stdout by default); returns lines written."""
    out = out if out is not None else sys.stdout
    written = 0
    for line in iter_report_lines(store, date_format):
        out.write(line + "\n")
        written += 1
    return written


def tally_frame(store: TallyStore) -> pd.DataFrame:
    """Flatten the store into a (dt, url, cnt) frame in report order."""
    rows = [
        (day.isoformat(), url, cnt)
        for day, urls in sorted_entries(store)
        for url, cnt in urls
    ]
    df = pd.DataFrame(rows, columns=REPORT_COLUMNS)
    return df.astype({'cnt': 'int64'})
