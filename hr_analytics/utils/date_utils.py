# utils/date_utils.py

"""Date utility functions for period-based HR metrics."""

from datetime import date, datetime
from typing import Optional, Union

import numpy as np
import pandas as pd  # type: ignore[import-untyped]
from dateutil.relativedelta import relativedelta

DateLike = Union[date, datetime, pd.Timestamp, str, None]


def to_date(value: DateLike) -> Optional[date]:
    """
    Coerce a date-like value to a ``datetime.date``.
    Unparseable values, blanks and NaT give None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and not value.strip():
        return None
    ts = pd.to_datetime(value, errors="coerce")
    if pd.isna(ts):
        return None
    return ts.date()


def completed_years(birth_date: DateLike, as_of: DateLike) -> Optional[int]:
    """
    Age in whole completed years at ``as_of``.
    One year less than the calendar-year difference while the birthday has not
    yet come round. May be negative for a birth date after ``as_of``.
    """
    bd = to_date(birth_date)
    ref = to_date(as_of)
    if bd is None or ref is None:
        return None
    years = ref.year - bd.year
    if (ref.month, ref.day) < (bd.month, bd.day):
        years -= 1
    return years


def months_between(start: DateLike, as_of: DateLike) -> Optional[int]:
    """Whole months from ``start`` to ``as_of``: year diff * 12 + month diff (days ignored)."""
    sd = to_date(start)
    ref = to_date(as_of)
    if sd is None or ref is None:
        return None
    return (ref.year - sd.year) * 12 + (ref.month - sd.month)


def month_start(value: DateLike) -> Optional[date]:
    d = to_date(value)
    if d is None:
        return None
    return d.replace(day=1)


def shift_months(value: DateLike, months: int) -> Optional[date]:
    """First day of the month ``months`` away from ``value``."""
    start = month_start(value)
    if start is None:
        return None
    return start + relativedelta(months=months)


def in_same_month(value: DateLike, reference: DateLike) -> bool:
    d = to_date(value)
    ref = to_date(reference)
    if d is None or ref is None:
        return False
    return d.year == ref.year and d.month == ref.month


def working_days_in_month(reference: DateLike) -> int:
    """Number of Monday-Friday days in the month of ``reference``."""
    start = month_start(reference)
    if start is None:
        return 0
    end = start + relativedelta(months=1)
    return int(np.busday_count(np.datetime64(start, "D"), np.datetime64(end, "D")))


def inclusive_days(start: DateLike, end: DateLike) -> Optional[int]:
    """Calendar days from ``start`` to ``end``, counting both ends; no end date means one day."""
    sd = to_date(start)
    if sd is None:
        return None
    ed = to_date(end)
    if ed is None:
        ed = sd
    return (ed - sd).days + 1


def period_label(value: DateLike) -> Optional[str]:
    """'YYYY-MM' label for the month containing ``value``."""
    d = to_date(value)
    if d is None:
        return None
    return f"{d.year:04d}-{d.month:02d}"
