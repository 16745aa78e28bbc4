# hr_analytics/engines/effects.py
"""
Price/Volume decomposition of the payroll variation between two periods.

With ``avg = gross / FTE`` for each period:

    price  = (current avg - comparison avg) * comparison FTE
    volume = (current FTE - comparison FTE) * current avg

so that ``price + volume == current gross - comparison gross``. The identity
is re-checked on every call and the outcome reported in ``coherence_ok``; a
failed check is logged, never raised.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from hr_analytics.config.models import AnalyticsConfig, resolve_config
from hr_analytics.reporting.formatters import format_currency, format_signed_currency
from hr_analytics.state.metrics import PayrollEffects, PayrollMetrics
from hr_analytics.utils.stats import (
    MONEY_PLACES,
    PCT_PLACES,
    finite_or_zero,
    percentage,
    round_half_up,
    safe_divide,
)
from logging_config import COHERENCE_LOGGER, ERROR_LOGGER

logger = logging.getLogger(__name__)
coherence_logger = logging.getLogger(COHERENCE_LOGGER)
error_logger = logging.getLogger(ERROR_LOGGER)

__all__ = [
    "AnnualBonusDetection",
    "calculate_effects",
    "detect_annual_bonus",
    "generate_commentary",
]


def _neutral(current: Optional[PayrollMetrics], comparison: Optional[PayrollMetrics]) -> PayrollEffects:
    return PayrollEffects.default(
        current_period=getattr(current, "period", None),
        comparison_period=getattr(comparison, "period", None),
    )


def _value(raw, label: str, places: int = MONEY_PLACES) -> float:
    return round_half_up(finite_or_zero(raw, label), places)


def calculate_effects(
    current: PayrollMetrics,
    comparison: Optional[PayrollMetrics],
    config: Optional[AnalyticsConfig] = None,
) -> PayrollEffects:
    """
    Split the payroll variation from ``comparison`` to ``current`` into a
    Price effect and a Volume effect.

    Args:
        current: Payroll snapshot of the period being analysed.
        comparison: Payroll snapshot of the reference period, or None when the
            establishment has no earlier data.
        config: Analytics configuration; defaults when omitted.

    Returns:
        PayrollEffects. Without a comparison snapshot, or when either snapshot
        has a negative gross/FTE or a zero FTE, the neutral object (all zeros,
        ``coherence_ok=True``) is returned.
    """
    settings = resolve_config(config).effects

    if comparison is None:
        logger.info(f"No comparison snapshot for period {current.period}; returning neutral effects")
        return _neutral(current, comparison)

    cur_gross = finite_or_zero(current.gross_payroll, "current gross payroll")
    cmp_gross = finite_or_zero(comparison.gross_payroll, "comparison gross payroll")
    cur_fte = finite_or_zero(current.total_fte, "current FTE")
    cmp_fte = finite_or_zero(comparison.total_fte, "comparison FTE")

    negatives = {
        name: value
        for name, value in (
            ("current_gross", cur_gross),
            ("comparison_gross", cmp_gross),
            ("current_fte", cur_fte),
            ("comparison_fte", cmp_fte),
        )
        if value < 0
    }
    if negatives:
        error_logger.error(
            f"Negative payroll inputs for effects {comparison.period} -> {current.period}: "
            f"{negatives}; returning neutral effects"
        )
        return _neutral(current, comparison)

    if cur_fte == 0 or cmp_fte == 0:
        logger.warning(
            f"Zero FTE (current={cur_fte}, comparison={cmp_fte}) for effects "
            f"{comparison.period} -> {current.period}; returning neutral effects"
        )
        return _neutral(current, comparison)

    cur_avg = safe_divide(cur_gross, cur_fte)
    cmp_avg = safe_divide(cmp_gross, cmp_fte)

    price = finite_or_zero((cur_avg - cmp_avg) * cmp_fte, "price effect")
    volume = finite_or_zero((cur_fte - cmp_fte) * cur_avg, "volume effect")

    variation = cur_gross - cmp_gross
    variation_pct = percentage(variation, cmp_gross)

    gap = abs(variation - (price + volume))
    if variation != 0:
        gap_pct = gap / abs(variation) * 100
        coherent = gap_pct < settings.coherence_tolerance_pct
    else:
        gap_pct = 0.0
        coherent = gap <= settings.absolute_tolerance

    if coherent:
        coherence_logger.info(
            f"Effects {comparison.period} -> {current.period}: price={price:.2f}, "
            f"volume={volume:.2f}, variation={variation:.2f} (gap {gap:.4f})"
        )
    else:
        coherence_logger.warning(
            f"Price + Volume does not reconcile for {comparison.period} -> {current.period}: "
            f"variation={variation:.2f}, price+volume={price + volume:.2f}, "
            f"gap={gap:.2f} ({gap_pct:.2f}%)"
        )

    return PayrollEffects(
        current_avg_cost=_value(cur_avg, "current average cost"),
        comparison_avg_cost=_value(cmp_avg, "comparison average cost"),
        current_fte=_value(cur_fte, "current FTE"),
        comparison_fte=_value(cmp_fte, "comparison FTE"),
        current_gross=_value(cur_gross, "current gross"),
        comparison_gross=_value(cmp_gross, "comparison gross"),
        price_effect=_value(price, "price effect"),
        volume_effect=_value(volume, "volume effect"),
        variation=_value(variation, "variation"),
        variation_pct=_value(variation_pct, "variation pct", PCT_PLACES),
        coherence_ok=coherent,
        coherence_gap=_value(gap, "coherence gap"),
        coherence_gap_pct=_value(gap_pct, "coherence gap pct", PCT_PLACES),
        current_period=current.period,
        comparison_period=comparison.period,
    )


@dataclass(frozen=True)
class AnnualBonusDetection:
    """Outcome of the 13th-month / annual bonus check."""
    detected: bool = False
    amount: float = 0.0
    pct_of_gross: float = 0.0
    period: Optional[str] = None
    which: Optional[str] = None  # "current" or "comparison"


def _bonus_share(metrics: PayrollMetrics) -> float:
    return safe_divide(metrics.exceptional_bonus_total, metrics.gross_payroll)


def detect_annual_bonus(
    current: PayrollMetrics,
    comparison: Optional[PayrollMetrics] = None,
    config: Optional[AnalyticsConfig] = None,
) -> AnnualBonusDetection:
    """
    Flag a probable annual bonus: exceptional bonuses above the configured
    share (30%) of gross payroll in either period. The current period is
    checked first. Does not touch the Price/Volume figures.
    """
    threshold = resolve_config(config).effects.annual_bonus_threshold
    candidates = [("current", current)]
    if comparison is not None:
        candidates.append(("comparison", comparison))

    for which, metrics in candidates:
        if metrics.gross_payroll <= 0:
            continue
        if metrics.exceptional_bonus_total > metrics.gross_payroll * threshold:
            share = _bonus_share(metrics)
            logger.info(
                f"Annual bonus detected in {which} period {metrics.period}: "
                f"{metrics.exceptional_bonus_total:.2f} ({share * 100:.1f}% of gross)"
            )
            return AnnualBonusDetection(
                detected=True,
                amount=round_half_up(metrics.exceptional_bonus_total, MONEY_PLACES),
                pct_of_gross=round_half_up(share * 100, PCT_PLACES),
                period=metrics.period,
                which=which,
            )
    return AnnualBonusDetection()


def generate_commentary(effects: PayrollEffects, config: Optional[AnalyticsConfig] = None) -> List[str]:
    """Plain-language reading of a PayrollEffects object. Pure function."""
    settings = resolve_config(config).effects
    price = effects.price_effect
    volume = effects.volume_effect
    variation_pct = effects.variation_pct
    comments: List[str] = []

    if abs(price) > abs(volume) * settings.dominance_ratio:
        if price > 0:
            comments.append(
                f"Significant rise in pay costs ({format_signed_currency(price)}): raises or promotions"
            )
        else:
            comments.append(
                f"Savings on pay costs ({format_currency(price)}): restructuring or pay cuts"
            )

    if abs(volume) > abs(price) * settings.dominance_ratio:
        if volume > 0:
            comments.append(f"Headcount growth drives the cost increase ({format_signed_currency(volume)})")
        else:
            comments.append(f"Headcount reduction generates savings ({format_currency(volume)})")

    if abs(variation_pct) > settings.exceptional_variation_pct:
        sign = "+" if variation_pct >= 0 else ""
        comments.append(f"Exceptional variation of {sign}{variation_pct:.0f}% vs comparison period")

    if price != 0 and volume != 0 and abs(price - volume) < abs(price) * settings.balance_ratio:
        comments.append("Price and Volume effects contribute in a balanced way")

    if not comments:
        if variation_pct > 0:
            comments.append(f"Normal payroll increase (+{variation_pct:.1f}%)")
        elif variation_pct < 0:
            comments.append(f"Payroll decrease ({variation_pct:.1f}%)")
        else:
            comments.append("Payroll stable over the period")

    return comments
