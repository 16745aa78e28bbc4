# hr_analytics/reporting/comparison.py
"""
Period comparison: resolve the reference period for a comparison mode and
recompute the Price/Volume waterfall from stored payroll snapshots.

Snapshots are supplied by the caller as a mapping keyed by
``(establishment_id, "YYYY-MM")``; this module never reads a store itself.
Effects are always recomputed at read time.
"""

import logging
from datetime import date
from enum import Enum
from typing import Mapping, Optional, Tuple

from hr_analytics.config.models import AnalyticsConfig
from hr_analytics.engines.effects import calculate_effects, detect_annual_bonus, generate_commentary
from hr_analytics.reporting.waterfall import WaterfallData, build_waterfall
from hr_analytics.state.metrics import PayrollMetrics
from hr_analytics.utils.date_utils import DateLike, month_start, period_label, shift_months

logger = logging.getLogger(__name__)

SnapshotKey = Tuple[str, str]


class ComparisonMode(Enum):
    PREVIOUS_MONTH = "previous_month"
    SAME_MONTH_LAST_YEAR = "same_month_last_year"


_MONTH_OFFSETS = {
    ComparisonMode.PREVIOUS_MONTH: -1,
    ComparisonMode.SAME_MONTH_LAST_YEAR: -12,
}


def resolve_comparison_period(period: DateLike, mode: ComparisonMode = ComparisonMode.PREVIOUS_MONTH) -> date:
    """First day of the month ``period`` is compared against."""
    mode = ComparisonMode(mode)
    if month_start(period) is None:
        raise ValueError(f"Cannot resolve comparison period from {period!r}")
    return shift_months(period, _MONTH_OFFSETS[mode])


def snapshot_key(establishment_id: str, period: DateLike) -> SnapshotKey:
    return str(establishment_id), period_label(period)


def build_comparison(
    current: PayrollMetrics,
    comparison: Optional[PayrollMetrics],
    config: Optional[AnalyticsConfig] = None,
) -> WaterfallData:
    """Effects, commentary and annual-bonus note of two snapshots, laid out as a waterfall."""
    effects = calculate_effects(current, comparison, config)
    commentary = generate_commentary(effects, config)

    bonus_note = None
    bonus = detect_annual_bonus(current, comparison, config)
    if bonus.detected:
        bonus_note = (
            f"Probable annual bonus in {bonus.period or bonus.which}: exceptional bonuses "
            f"of {bonus.amount:.2f} ({bonus.pct_of_gross:.1f}% of gross payroll)"
        )

    return build_waterfall(effects, commentary, bonus_note, current)


def compare_periods(
    snapshots: Mapping[SnapshotKey, PayrollMetrics],
    establishment_id: str,
    period: DateLike,
    mode: ComparisonMode = ComparisonMode.PREVIOUS_MONTH,
    config: Optional[AnalyticsConfig] = None,
) -> WaterfallData:
    """
    Build the waterfall of ``period`` against the period chosen by ``mode``.

    A missing comparison snapshot gives the neutral effects; a missing current
    snapshot is treated as an empty period.
    """
    current_key = snapshot_key(establishment_id, period)
    comparison_key = snapshot_key(establishment_id, resolve_comparison_period(period, mode))

    current = snapshots.get(current_key)
    if current is None:
        logger.warning(f"No payroll snapshot for {current_key}; comparing an empty period")
        current = PayrollMetrics.default(period=current_key[1])
    comparison = snapshots.get(comparison_key)
    if comparison is None:
        logger.info(f"No comparison snapshot for {comparison_key}")

    return build_comparison(current, comparison, config)
