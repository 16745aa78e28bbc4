# hr_analytics/engines/absence.py
"""
Absenteeism indicators for one period.

Absences are categorised from their free-text type label, durations are
counted in calendar days (both ends included) and the absenteeism rate is
expressed against the theoretical working days of the active roster
(headcount x Monday-Friday days in the month).
"""

import logging
import re
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple

from hr_analytics.config.models import AnalyticsConfig, resolve_config
from hr_analytics.state.frames import absences_to_frame, employees_to_frame
from hr_analytics.state.metrics import AbsenceMetrics
from hr_analytics.state.records import AbsenceRecord, EmployeeRecord
from hr_analytics.state.schema import (
    ABS_CATEGORY,
    ABS_DAYS,
    ABS_END,
    ABS_START,
    ABS_TYPE,
    EMP_ACTIVE,
    EMP_ID,
)
from hr_analytics.utils.date_utils import DateLike, inclusive_days, to_date, working_days_in_month
from hr_analytics.utils.stats import PCT_PLACES, YEARS_PLACES, mean, percentage, round_half_up, safe_divide
from logging_config import CALCULATION_LOGGER

logger = logging.getLogger(__name__)
calc_logger = logging.getLogger(CALCULATION_LOGGER)

__all__ = ["AbsenceCategory", "categorize_absence", "calculate_absence_metrics"]


class AbsenceCategory(Enum):
    SICKNESS = "sickness"
    WORK_ACCIDENT = "work_accident"
    PAID_LEAVE = "paid_leave"
    TRAINING = "training"
    OTHER = "other"


# Checked in this order; keywords of two letters or fewer must match a whole word
ABSENCE_KEYWORDS: Tuple[Tuple[AbsenceCategory, Tuple[str, ...]], ...] = (
    (AbsenceCategory.SICKNESS, ("maladie", "arrêt maladie", "sick")),
    (AbsenceCategory.WORK_ACCIDENT, ("accident", "at")),
    (AbsenceCategory.PAID_LEAVE, ("congé", "conges", "cp", "vacation", "holiday", "paid leave")),
    (AbsenceCategory.TRAINING, ("formation", "training")),
)

_WORD_SPLIT = re.compile(r"[^\w]+")


def categorize_absence(label: Optional[str]) -> AbsenceCategory:
    """Map a free-text absence type to its category; unrecognised labels are OTHER."""
    text = str(label or "").strip().lower()
    if not text:
        return AbsenceCategory.OTHER
    words = set(_WORD_SPLIT.split(text))
    for category, keywords in ABSENCE_KEYWORDS:
        for keyword in keywords:
            if len(keyword) <= 2:
                if keyword in words:
                    return category
            elif keyword in text:
                return category
    return AbsenceCategory.OTHER


def calculate_absence_metrics(
    absences: Iterable[AbsenceRecord],
    employees: Iterable[EmployeeRecord],
    period_date: DateLike,
    config: Optional[AnalyticsConfig] = None,
) -> AbsenceMetrics:
    """
    Compute absenteeism for the month of ``period_date``.

    Returns the default (all-zero) metrics when there is no absence, no
    employee or no active employee. Absences without a start date, or whose
    duration falls outside [1, max_duration_days], are dropped with a warning.
    """
    settings = resolve_config(config).absence
    as_of = to_date(period_date)

    abs_df = absences_to_frame(list(absences))
    emp_df = employees_to_frame(list(employees))
    if abs_df.empty or emp_df.empty or as_of is None:
        logger.info("No absences or employees for the period; returning default absence metrics")
        return AbsenceMetrics.default()

    headcount = int(emp_df[EMP_ACTIVE].sum())
    if headcount == 0:
        logger.info("No active employees; returning default absence metrics")
        return AbsenceMetrics.default()

    abs_df[ABS_DAYS] = [
        inclusive_days(start, end) for start, end in zip(abs_df[ABS_START], abs_df[ABS_END])
    ]
    in_range = abs_df[ABS_DAYS].map(
        lambda days: days is not None and 1 <= days <= settings.max_duration_days
    ).astype(bool)
    if not in_range.all():
        dropped = abs_df.loc[~in_range, [EMP_ID, ABS_START, ABS_END]].to_dict("records")
        logger.warning(f"Dropped {len(dropped)} absence(s) with missing or out-of-range duration: {dropped}")
    valid = abs_df.loc[in_range].copy()
    working_days = working_days_in_month(as_of)
    if valid.empty:
        logger.info("No usable absence left for the period; returning default absence metrics")
        return AbsenceMetrics.default(working_days=working_days)
    valid[ABS_DAYS] = valid[ABS_DAYS].astype(int)
    valid[ABS_CATEGORY] = valid[ABS_TYPE].astype(object).map(categorize_absence).astype(object)

    days_by_category: Dict[AbsenceCategory, int] = {
        category: int(valid.loc[valid[ABS_CATEGORY] == category, ABS_DAYS].sum())
        for category in AbsenceCategory
    }
    total_days = int(valid[ABS_DAYS].sum())
    sickness_total = days_by_category[AbsenceCategory.SICKNESS] + days_by_category[AbsenceCategory.WORK_ACCIDENT]

    theoretical_days = headcount * working_days

    metrics = AbsenceMetrics(
        absenteeism_rate=round_half_up(percentage(total_days, theoretical_days), PCT_PLACES),
        sickness_absenteeism_rate=round_half_up(percentage(sickness_total, theoretical_days), PCT_PLACES),
        absence_days=total_days,
        sickness_absence_days=sickness_total,
        absence_count=len(valid),
        absent_employee_count=int(valid[EMP_ID].nunique()),
        mean_absence_duration=round_half_up(mean(valid[ABS_DAYS].tolist()), YEARS_PLACES),
        absence_frequency=round_half_up(safe_divide(len(valid), headcount), PCT_PLACES),
        sickness_days=days_by_category[AbsenceCategory.SICKNESS],
        work_accident_days=days_by_category[AbsenceCategory.WORK_ACCIDENT],
        paid_leave_days=days_by_category[AbsenceCategory.PAID_LEAVE],
        training_days=days_by_category[AbsenceCategory.TRAINING],
        other_days=days_by_category[AbsenceCategory.OTHER],
        working_days=working_days,
    )

    calc_logger.info(
        f"Absence {as_of:%Y-%m}: {metrics.absence_count} absence(s), {total_days} day(s), "
        f"rate={metrics.absenteeism_rate:.2f}% over {headcount} x {working_days} working days"
    )
    return metrics
