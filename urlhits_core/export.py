"""Export a TallyStore to a DuckDB table for ad-hoc SQL analysis."""
from __future__ import annotations
import logging
import pathlib
import re

import duckdb

from .config import DEFAULT_EXPORT_TABLE
from .exceptions import ExportError
from .report import tally_frame
from .tally import TallyStore

logger = logging.getLogger("urlhits")


def _ident(name: str) -> str:
    out = re.sub(r"[^0-9a-zA-Z_]", "_", name)
    if out and out[0].isdigit():
        out = "_" + out
    return out or DEFAULT_EXPORT_TABLE


def _quoted(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def export_tally(store: TallyStore, db_path: str | pathlib.Path,
                 table: str = DEFAULT_EXPORT_TABLE) -> dict:
    """Replace ``table`` in the DuckDB database at ``db_path`` with the tally.

    Resulting schema: ``dt DATE, url VARCHAR, cnt BIGINT``, one row per
    (date, url), inserted in report order.

    Returns:
        Dictionary with export statistics
    """
    table = _ident(table)
    target = _quoted(table)
    df = tally_frame(store)

    try:
        conn = duckdb.connect(str(db_path))
    except duckdb.Error as e:
        raise ExportError(f"Failed to open DuckDB database {db_path}: {e}") from e

    try:
        conn.register('tally_df', df)
        conn.execute(f"""
            CREATE OR REPLACE TABLE {target} AS
            SELECT CAST(dt AS DATE) AS dt,
                   CAST(url AS VARCHAR) AS url,
                   CAST(cnt AS BIGINT) AS cnt
            FROM tally_df
        """)
        conn.unregister('tally_df')
        rows = conn.execute(f"SELECT count(*) FROM {target}").fetchone()[0]
    except duckdb.Error as e:
        raise ExportError(f"Failed to export tally to {db_path}:{table}: {e}") from e
    finally:
        conn.close()

    logger.debug("exported %d rows to %s:%s", rows, db_path, table)
    return {
        'db': str(db_path),
        'table': table,
        'rows': rows,
        'dates': len(store),
        'total_hits': store.total(),
    }
