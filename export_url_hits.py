#!/usr/bin/env python
"""Tally a `<epoch_seconds>|<url>` access log and export it to DuckDB.

Usage examples:
  # Write table url_hits_daily into url_hits.duckdb
  python export_url_hits.py access.log

  # Custom database / table, JSON stats
  python export_url_hits.py access.log --db reports.duckdb --table hits --json

  # Defaults from a YAML file (keys: db, table, encoding)
  python export_url_hits.py access.log --config urlhits.yaml

Command-line flags override config values.

Exit codes:
  0 success
  1 unreadable input, malformed record, bad config, or export failure
"""
from __future__ import annotations
import argparse
import json
import logging
import pathlib
import sys
from typing import Optional

from urlhits_core.config import (
    DEFAULT_ENCODING,
    DEFAULT_EXPORT_DB,
    DEFAULT_EXPORT_TABLE,
    load_report_config,
)
from urlhits_core.exceptions import UrlHitsError
from urlhits_core.export import export_tally
from urlhits_core.ingest import ingest_file
from urlhits_core.timing import PhaseTimer
from urlhits_core.tally import TallyStore


def print_result(obj: dict, use_json: bool):
    if use_json:
        print(json.dumps(obj, indent=2, default=str))
        return
    for k, v in obj.items():
        if isinstance(v, dict):
            print(f"{k}:")
            for sk, sv in v.items():
                print(f"  {sk}: {sv}")
        else:
            print(f"{k}: {v}")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Export daily URL hit counts to a DuckDB table")
    p.add_argument("input", help="Access log of <epoch_seconds>|<url> lines")
    p.add_argument("--db", default=None, help=f"DuckDB database file path (default: {DEFAULT_EXPORT_DB})")
    p.add_argument("--table", default=None, help=f"Target table name (default: {DEFAULT_EXPORT_TABLE})")
    p.add_argument("--config", default=None, help="YAML file with db/table/encoding defaults")
    p.add_argument("--json", action="store_true", help="Print machine-readable JSON output")
    p.add_argument("--verbose", action="store_true", help="Log debug output to stderr")
    return p


def cmd_export(args: argparse.Namespace) -> int:
    cfg = load_report_config(pathlib.Path(args.config)) if args.config else {}
    db = args.db or cfg.get('db') or DEFAULT_EXPORT_DB
    table = args.table or cfg.get('table') or DEFAULT_EXPORT_TABLE
    encoding = cfg.get('encoding') or DEFAULT_ENCODING

    timer = PhaseTimer()
    store = TallyStore()
    with timer.phase('ingest'):
        records = ingest_file(args.input, store, encoding=encoding)
    with timer.phase('export'):
        result = export_tally(store, db, table=table)

    result['records'] = records
    result['ingest_records_per_s'] = timer.rate('ingest', records)
    result['timings'] = timer.as_dict()
    print_result(result, args.json)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.ERROR)
    try:
        return cmd_export(args)
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return 1
    except UrlHitsError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
