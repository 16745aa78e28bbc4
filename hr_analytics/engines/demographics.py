# hr_analytics/engines/demographics.py
"""
Roster demographics: age and seniority pyramids, gender split and the
equality index, computed over the active employees of one period.
"""

import logging
from typing import Iterable, Optional

from hr_analytics.config.models import AnalyticsConfig
from hr_analytics.state.age import AgeBand, age_band_counts, apply_age
from hr_analytics.state.frames import employees_to_frame
from hr_analytics.state.metrics import DemographicsMetrics
from hr_analytics.state.records import EmployeeRecord
from hr_analytics.state.schema import (
    EMP_ACTIVE,
    EMP_AGE,
    EMP_AGE_BAND,
    EMP_BIRTH_DATE,
    EMP_GENDER,
    EMP_HIRE_DATE,
    EMP_SENIORITY_BAND,
    EMP_SENIORITY_MONTHS,
)
from hr_analytics.state.tenure import SeniorityBand, apply_seniority, seniority_band_counts
from hr_analytics.utils.date_utils import DateLike, to_date
from hr_analytics.utils.stats import (
    PCT_PLACES,
    YEARS_PLACES,
    finite_or_zero,
    mean,
    median,
    percentage,
    round_half_up,
)
from hr_analytics.utils.status_enums import Gender
from logging_config import CALCULATION_LOGGER

logger = logging.getLogger(__name__)
calc_logger = logging.getLogger(CALCULATION_LOGGER)

__all__ = ["calculate_demographics_metrics", "equality_index"]


def equality_index(male_count: int, female_count: int) -> Optional[float]:
    """
    Gender balance score in [0, 100]: 100 for a 50/50 split, 0 for total imbalance.

    Computed on the share of men among employees of recognised gender. None
    when either count is 0, meaning there is not enough data for a score.
    """
    if male_count <= 0 or female_count <= 0:
        return None
    pct_male = male_count / (male_count + female_count) * 100
    return round_half_up(max(0.0, 100 - 2 * abs(pct_male - 50)), 0)


def _years(value) -> float:
    return round_half_up(finite_or_zero(value), YEARS_PLACES)


def _pct(count: int, headcount: int) -> float:
    return round_half_up(percentage(count, headcount), PCT_PLACES)


def calculate_demographics_metrics(
    employees: Iterable[EmployeeRecord],
    period_date: DateLike,
    config: Optional[AnalyticsConfig] = None,
) -> DemographicsMetrics:
    """
    Compute the demographic snapshot of the active roster at ``period_date``.

    Non-active employees are ignored entirely. Ages outside [0, 120) and
    negative seniorities are dropped from means, medians and buckets but the
    employee still counts in the headcount denominator. Without any active
    employee the default (all-zero) snapshot is returned.

    ``config`` is accepted for signature symmetry with the other calculators;
    the calculation itself has no tunable constant.
    """
    as_of = to_date(period_date)
    df = employees_to_frame(list(employees))
    active = df.loc[df[EMP_ACTIVE]].copy() if not df.empty else df
    headcount = len(active)

    if headcount == 0 or as_of is None:
        if as_of is None:
            logger.warning(f"Unusable period date {period_date!r}; returning default demographics")
        else:
            logger.info("No active employees; returning default demographics")
        return DemographicsMetrics.default()

    apply_age(active, EMP_BIRTH_DATE, as_of, out_age_col=EMP_AGE, out_band_col=EMP_AGE_BAND)
    apply_seniority(
        active,
        EMP_HIRE_DATE,
        as_of,
        out_months_col=EMP_SENIORITY_MONTHS,
        out_band_col=EMP_SENIORITY_BAND,
    )

    ages = active[EMP_AGE].dropna().astype(int).tolist()
    months = active[EMP_SENIORITY_MONTHS].dropna().astype(int).tolist()

    dropped_ages = int(active[EMP_BIRTH_DATE].notna().sum()) - len(ages)
    dropped_months = int(active[EMP_HIRE_DATE].notna().sum()) - len(months)
    if dropped_ages:
        logger.warning(f"Dropped {dropped_ages} age(s) outside [0, 120) as of {as_of}")
    if dropped_months:
        logger.warning(f"Dropped {dropped_months} negative seniority value(s) as of {as_of}")

    age_counts = age_band_counts(active[EMP_AGE_BAND])
    seniority_counts = seniority_band_counts(active[EMP_SENIORITY_BAND])

    male = int((active[EMP_GENDER] == Gender.MALE).sum())
    female = int((active[EMP_GENDER] == Gender.FEMALE).sum())

    metrics = DemographicsMetrics(
        mean_age=_years(mean(ages)),
        median_age=_years(median(ages)),
        mean_seniority_months=_years(mean(months)),
        median_seniority_months=_years(median(months)),
        pct_male=_pct(male, headcount),
        pct_female=_pct(female, headcount),
        equality_index=equality_index(male, female),
        pct_age_under_25=_pct(age_counts[AgeBand.UNDER_25], headcount),
        pct_age_25_35=_pct(age_counts[AgeBand.EARLY], headcount),
        pct_age_35_45=_pct(age_counts[AgeBand.MID], headcount),
        pct_age_45_55=_pct(age_counts[AgeBand.LATE], headcount),
        pct_age_over_55=_pct(age_counts[AgeBand.OVER_55], headcount),
        pct_seniority_under_1=_pct(seniority_counts[SeniorityBand.NEW_HIRE], headcount),
        pct_seniority_1_3=_pct(seniority_counts[SeniorityBand.EARLY], headcount),
        pct_seniority_3_5=_pct(seniority_counts[SeniorityBand.CORE], headcount),
        pct_seniority_5_10=_pct(seniority_counts[SeniorityBand.EXPERIENCED], headcount),
        pct_seniority_over_10=_pct(seniority_counts[SeniorityBand.VETERAN], headcount),
        active_headcount=headcount,
    )

    calc_logger.info(
        f"Demographics as of {as_of}: {headcount} active, mean age {metrics.mean_age}, "
        f"{metrics.pct_male}% M / {metrics.pct_female}% F, equality index {metrics.equality_index}"
    )
    return metrics
