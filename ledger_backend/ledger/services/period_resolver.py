# ledger/services/period_resolver.py

"""
PERIOD RESOLVER

Maps a symbolic reporting period token to inclusive [start, end] dates.

Tokens:
- this_month / last_month
- this_quarter / last_quarter
- this_year / last_year
- all_time: LEDGER["ALL_TIME_START"] .. today

A missing token means all_time. Unknown tokens resolve to all_time and
are reported as a diagnostic.
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta
from django.utils import timezone

from ledger.conf import all_time_start
from ledger.services import diagnostics as diag
from ledger.services.diagnostics import Diagnostics
from ledger.services.exceptions import InvalidPeriodError

logger = logging.getLogger(__name__)

THIS_MONTH = "this_month"
LAST_MONTH = "last_month"
THIS_QUARTER = "this_quarter"
LAST_QUARTER = "last_quarter"
THIS_YEAR = "this_year"
LAST_YEAR = "last_year"
ALL_TIME = "all_time"
CUSTOM = "custom"

PERIOD_TOKENS = (
    THIS_MONTH,
    LAST_MONTH,
    THIS_QUARTER,
    LAST_QUARTER,
    THIS_YEAR,
    LAST_YEAR,
    ALL_TIME,
)


@dataclass(frozen=True)
class Period:
    start: date
    end: date
    token: str = CUSTOM

    @staticmethod
    def from_bounds(start: date, end: date) -> "Period":
        if start is None or end is None:
            raise InvalidPeriodError("Both start_date and end_date are required")
        if start > end:
            raise InvalidPeriodError("start_date cannot be after end_date")
        return Period(start=start, end=end, token=CUSTOM)

    def contains(self, d: date | None) -> bool:
        return d is not None and self.start <= d <= self.end

    def day_before_start(self) -> date:
        return self.start - timedelta(days=1)

    def as_dict(self) -> dict:
        return {
            "token": self.token,
            "start_date": self.start.isoformat(),
            "end_date": self.end.isoformat(),
        }


def _as_local_date(now) -> date:
    if now is None:
        return timezone.localdate()
    if isinstance(now, datetime):
        if timezone.is_aware(now):
            now = timezone.localtime(now)
        return now.date()
    return now


def _month_bounds(d: date) -> tuple[date, date]:
    last_day = calendar.monthrange(d.year, d.month)[1]
    return date(d.year, d.month, 1), date(d.year, d.month, last_day)


def _quarter_bounds(d: date) -> tuple[date, date]:
    first_month = 3 * ((d.month - 1) // 3) + 1
    start = date(d.year, first_month, 1)
    end = start + relativedelta(months=3) - timedelta(days=1)
    return start, end


def _year_bounds(year: int) -> tuple[date, date]:
    return date(year, 1, 1), date(year, 12, 31)


def resolve_period(token: str | None, now=None, *, diagnostics: Diagnostics | None = None) -> Period:
    today = _as_local_date(now)
    key = (token or "").strip().lower()

    if key == THIS_MONTH:
        start, end = _month_bounds(today)
    elif key == LAST_MONTH:
        start, end = _month_bounds(today - relativedelta(months=1))
    elif key == THIS_QUARTER:
        start, end = _quarter_bounds(today)
    elif key == LAST_QUARTER:
        start, end = _quarter_bounds(today - relativedelta(months=3))
    elif key == THIS_YEAR:
        start, end = _year_bounds(today.year)
    elif key == LAST_YEAR:
        start, end = _year_bounds(today.year - 1)
    else:
        if key and key != ALL_TIME and diagnostics is not None:
            diagnostics.warn(
                diag.UNKNOWN_PERIOD_TOKEN,
                f"Unknown period token {token!r}; using all_time",
                token=token,
            )
        key = ALL_TIME
        start, end = all_time_start(), today

    logger.debug(
        "Period resolved",
        extra={"token": key, "start": start.isoformat(), "end": end.isoformat()},
    )
    return Period(start=start, end=end, token=key)


def period_from_request(
    token: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    *,
    now=None,
    diagnostics: Diagnostics | None = None,
) -> Period:
    """
    Explicit bounds win over a token. Giving only one bound is an error.
    """
    if start_date is not None or end_date is not None:
        return Period.from_bounds(start_date, end_date)
    return resolve_period(token, now, diagnostics=diagnostics)
