# hr_analytics/engines/workforce.py
"""
Headcount, FTE, hires/exits, turnover and contract mix for one period.

Headcount is taken from a single end-of-period roster, so start, end and
average headcount are the same figure. Turnover rates are monthly, with an
annualised projection (monthly x 12) alongside for benchmark comparisons.
"""

import logging
import math
from typing import Iterable, Optional

import pandas as pd

from hr_analytics.config.models import AnalyticsConfig, resolve_config
from hr_analytics.engines.payroll import total_fte
from hr_analytics.state.frames import employees_to_frame
from hr_analytics.state.metrics import WorkforceMetrics
from hr_analytics.state.records import EmployeeRecord
from hr_analytics.state.schema import (
    EMP_ACTIVE,
    EMP_CONTRACT,
    EMP_EXIT_DATE,
    EMP_EXIT_REASON,
    EMP_HIRE_DATE,
)
from hr_analytics.utils.date_utils import DateLike, in_same_month, to_date
from hr_analytics.utils.stats import MONEY_PLACES, PCT_PLACES, percentage, round_half_up
from hr_analytics.utils.status_enums import ContractType, ExitReason, normalize_exit_reason
from logging_config import CALCULATION_LOGGER

logger = logging.getLogger(__name__)
calc_logger = logging.getLogger(CALCULATION_LOGGER)

MONTHS_PER_YEAR = 12

__all__ = ["calculate_workforce_metrics", "split_exits"]


def split_exits(reasons: pd.Series, voluntary_share: float):
    """
    Return ``(voluntary, involuntary)`` exit counts.

    Reasons recognised as voluntary or involuntary are counted as such; the
    remaining exits are split with ``voluntary_share``, voluntary part floored.
    """
    # object dtype: an empty string column would otherwise keep its string dtype
    classified = reasons.astype(object).map(normalize_exit_reason).astype(object)
    voluntary = int((classified == ExitReason.VOLUNTARY).sum())
    involuntary = int((classified == ExitReason.INVOLUNTARY).sum())
    unknown = len(classified) - voluntary - involuntary
    if unknown:
        unknown_voluntary = math.floor(unknown * voluntary_share)
        voluntary += unknown_voluntary
        involuntary += unknown - unknown_voluntary
    return voluntary, involuntary


def _rate(count: int, headcount: float, months: int = 1) -> float:
    return round_half_up(percentage(count, headcount) * months, PCT_PLACES)


def calculate_workforce_metrics(
    employees: Iterable[EmployeeRecord],
    period_date: DateLike,
    config: Optional[AnalyticsConfig] = None,
) -> WorkforceMetrics:
    """
    Compute workforce movements and contract mix for the month of ``period_date``.

    Hires and exits are counted over every employee passed in, whatever the
    status; headcount, FTE and contract mix over the active ones only.
    """
    cfg = resolve_config(config)
    as_of = to_date(period_date)
    df = employees_to_frame(list(employees))

    if df.empty or as_of is None:
        logger.info(f"No employees (or unusable period {period_date!r}); returning default workforce metrics")
        return WorkforceMetrics.default()

    active = df.loc[df[EMP_ACTIVE]]
    headcount = len(active)
    fte = total_fte(active, cfg.payroll.default_fte)

    hires = int(df[EMP_HIRE_DATE].map(lambda d: in_same_month(d, as_of)).sum())
    exited = df.loc[df[EMP_EXIT_DATE].map(lambda d: in_same_month(d, as_of)).astype(bool)]
    exits = len(exited)
    voluntary, involuntary = split_exits(exited[EMP_EXIT_REASON], cfg.workforce.voluntary_exit_share)

    contracts = active[EMP_CONTRACT]
    counts = {ct: int((contracts == ct).sum()) for ct in ContractType}
    pct_permanent = percentage(counts[ContractType.PERMANENT], headcount)

    turnover_monthly = _rate(exits, headcount)
    voluntary_monthly = _rate(voluntary, headcount)

    metrics = WorkforceMetrics(
        headcount_start=headcount,
        headcount_end=headcount,
        headcount_average=float(headcount),
        fte_start=round_half_up(fte, MONEY_PLACES),
        fte_end=round_half_up(fte, MONEY_PLACES),
        fte_average=round_half_up(fte, MONEY_PLACES),
        hires=hires,
        exits=exits,
        voluntary_exits=voluntary,
        involuntary_exits=involuntary,
        turnover_rate=turnover_monthly,
        voluntary_turnover_rate=voluntary_monthly,
        turnover_rate_monthly=turnover_monthly,
        turnover_rate_annualized=_rate(exits, headcount, MONTHS_PER_YEAR),
        voluntary_turnover_rate_monthly=voluntary_monthly,
        voluntary_turnover_rate_annualized=_rate(voluntary, headcount, MONTHS_PER_YEAR),
        permanent_count=counts[ContractType.PERMANENT],
        fixed_term_count=counts[ContractType.FIXED_TERM],
        apprenticeship_count=counts[ContractType.APPRENTICESHIP],
        internship_count=counts[ContractType.INTERNSHIP],
        temp_agency_count=counts[ContractType.TEMP_AGENCY],
        pct_permanent=round_half_up(pct_permanent, PCT_PLACES),
        pct_fixed_term=round_half_up(percentage(counts[ContractType.FIXED_TERM], headcount), PCT_PLACES),
        pct_apprenticeship=round_half_up(
            percentage(counts[ContractType.APPRENTICESHIP], headcount), PCT_PLACES
        ),
        pct_internship=round_half_up(percentage(counts[ContractType.INTERNSHIP], headcount), PCT_PLACES),
        pct_precarity=round_half_up(100 - pct_permanent, PCT_PLACES) if headcount else 0.0,
    )

    calc_logger.info(
        f"Workforce {as_of:%Y-%m}: headcount={headcount}, FTE={metrics.fte_end:.2f}, "
        f"hires={hires}, exits={exits} ({voluntary} voluntary), "
        f"turnover={metrics.turnover_rate:.2f}% monthly"
    )
    return metrics
