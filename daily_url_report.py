#!/usr/bin/env python
"""Print a per-day URL hit report for a `<epoch_seconds>|<url>` access log.

Usage:
  python daily_url_report.py access.log

Output, earliest GMT date first, URLs by descending hits:
  09/09/2001 GMT
  /a 2
  /b 1

Exit codes:
  0 success
  1 wrong number of arguments, unreadable input, or malformed record
"""
from __future__ import annotations
import logging
import sys
from typing import Optional

from urlhits_core.exceptions import UrlHitsError
from urlhits_core.pipeline import run_daily_report

USAGE_ERROR = "Invalid number of arguments"


def main(argv: Optional[list[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print(USAGE_ERROR)
        return 1

    logging.basicConfig(level=logging.ERROR)
    # report is UTF-8 whatever the locale says
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8")
    try:
        run_daily_report(args[0], out=sys.stdout)
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return 1
    except UrlHitsError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
