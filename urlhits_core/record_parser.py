"""Record parsing: one `<epoch_seconds>|<url>` line -> (GMT date, URL).

Dates are computed with Howard Hinnant's civil-from-days algorithm so every
signed 64-bit epoch value maps onto the proleptic Gregorian calendar, well
beyond the year range of ``datetime.date``.
"""
from __future__ import annotations
import re
from datetime import date
from typing import NamedTuple, Tuple

from .config import (
    RECORD_SEPARATOR,
    SECONDS_PER_DAY,
    GMT_SUFFIX,
    INT64_MIN,
    INT64_MAX,
    DateFormat,
    DEFAULT_DATE_FORMAT,
)
from .exceptions import RecordParseError

# optional sign, ASCII digits only (no underscores, no spaces)
_EPOCH_RE = re.compile(r'^[+-]?[0-9]+$')
_INT64_DIGITS = len(str(INT64_MAX))


class GmtDate(NamedTuple):
    """A calendar date in GMT. Tuple ordering is chronological ordering."""
    year: int
    month: int
    day: int

    def render(self, date_format: DateFormat = DEFAULT_DATE_FORMAT) -> str:
        return date_format.value.format(year=self.year, month=self.month, day=self.day)

    def header(self, date_format: DateFormat = DEFAULT_DATE_FORMAT) -> str:
        """Report header line, e.g. ``09/09/2001 GMT``."""
        return f"{self.render(date_format)} {GMT_SUFFIX}"

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def to_date(self) -> date:
        """Convert to ``datetime.date``; raises ValueError outside years 1..9999."""
        return date(self.year, self.month, self.day)


class AccessEvent(NamedTuple):
    """One parsed record. Transient: consumed by the tally, never stored."""
    epoch_seconds: int
    url: str

    @property
    def gmt_date(self) -> GmtDate:
        return gmt_date(self.epoch_seconds)


def civil_from_days(days: int) -> Tuple[int, int, int]:
    """Return (year, month, day) for a count of days since 1970-01-01.

    Hinnant's algorithm; ``//`` already floors, so no separate branch is
    needed for days before the epoch.
    """
    z = days + 719468
    era = z // 146097
    doe = z - era * 146097                                   # [0, 146096]
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365  # [0, 399]
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)          # [0, 365]
    mp = (5 * doy + 2) // 153                                # [0, 11], March based
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    year = yoe + era * 400 + (1 if month <= 2 else 0)
    return year, month, day


def gmt_date(epoch_seconds: int) -> GmtDate:
    """Project a UNIX epoch-seconds instant onto the GMT calendar."""
    return GmtDate(*civil_from_days(epoch_seconds // SECONDS_PER_DAY))


def _clip(text: str, limit: int = 40) -> str:
    return text if len(text) <= limit else f"{text[:limit]}... ({len(text)} chars)"


def parse_epoch_seconds(raw: str) -> int:
    text = raw.strip()
    if not _EPOCH_RE.match(text):
        raise RecordParseError(f"timestamp is not a base-10 integer: {_clip(raw)!r}")
    sign = text[0] if text[0] in "+-" else ""
    digits = text.lstrip("+-").lstrip("0") or "0"
    # int64 needs at most 19 significant digits; longer runs never reach int()
    if len(digits) > _INT64_DIGITS:
        raise RecordParseError(f"timestamp out of signed 64-bit range: {_clip(text)}")
    value = int(sign + digits)
    if not INT64_MIN <= value <= INT64_MAX:
        raise RecordParseError(f"timestamp out of signed 64-bit range: {text}")
    return value


def parse_record_line(line: str) -> AccessEvent:
    """Parse ``<epoch_seconds>|<url>`` into an AccessEvent.

    The line is split on every separator and only the first two fields are
    used, so a URL containing ``|`` is cut at its first ``|``.
    """
    fields = line.rstrip('\r\n').split(RECORD_SEPARATOR)
    if len(fields) < 2:
        raise RecordParseError(f"missing '{RECORD_SEPARATOR}' separator", line=line)

    try:
        epoch_seconds = parse_epoch_seconds(fields[0])
    except RecordParseError as e:
        raise RecordParseError(str(e), line=line) from None

    url = fields[1].strip()
    if not url:
        raise RecordParseError("empty URL", line=line)

    return AccessEvent(epoch_seconds, url)
