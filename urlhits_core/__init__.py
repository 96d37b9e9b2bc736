"""Daily URL hit report core: parse, tally, and render access logs by GMT date."""

from .record_parser import AccessEvent, GmtDate, civil_from_days, gmt_date, parse_record_line
from .tally import TallyStore
from .ingest import ingest_file, ingest_lines, iter_access_events
from .report import emit_report, iter_report_lines, sorted_entries, tally_frame
from .pipeline import run_daily_report
from .export import export_tally

__all__ = [
    "AccessEvent",
    "GmtDate",
    "civil_from_days",
    "gmt_date",
    "parse_record_line",
    "TallyStore",
    "ingest_file",
    "ingest_lines",
    "iter_access_events",
    "emit_report",
    "iter_report_lines",
    "sorted_entries",
    "tally_frame",
    "run_daily_report",
    "export_tally",
]
