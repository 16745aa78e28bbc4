# hr_analytics/engines/payroll.py
"""
Payroll aggregation for one establishment and period.

Turns the compensation lines of a period (plus the roster, for FTE) into a
PayrollMetrics snapshot: totals per component, gross/loaded payroll, employer
cost, per-FTE costs and the two headline ratios.
"""

import logging
from typing import Iterable, Optional

import pandas as pd

from hr_analytics.config.models import AnalyticsConfig, resolve_config
from hr_analytics.state.frames import (
    compensation_to_frame,
    employees_to_frame,
    split_valid_compensation,
)
from hr_analytics.state.metrics import PayrollMetrics
from hr_analytics.state.records import CompensationRecord, EmployeeRecord
from hr_analytics.state.schema import (
    COMP_ALLOWANCES,
    COMP_BASE,
    COMP_BENEFITS,
    COMP_CONTRIBUTIONS,
    COMP_EXCEPTIONAL_BONUS,
    COMP_FIXED_BONUS,
    COMP_GROSS,
    COMP_OVERTIME,
    COMP_VARIABLE_BONUS,
    CHARGE_COLS,
    EMP_FTE,
    EMP_ID,
    GROSS_COMPONENT_COLS,
    MONEY_COLS,
)
from hr_analytics.utils.stats import (
    MONEY_PLACES,
    PCT_PLACES,
    finite_or_zero,
    mean,
    median,
    percentage,
    round_half_up,
    safe_divide,
)
from logging_config import CALCULATION_LOGGER

logger = logging.getLogger(__name__)
calc_logger = logging.getLogger(CALCULATION_LOGGER)

__all__ = ["calculate_payroll_metrics", "total_fte", "fte_lookup"]


def _money(value, label: str) -> float:
    return round_half_up(finite_or_zero(value, label), MONEY_PLACES)


def _pct(value, label: str) -> float:
    return round_half_up(finite_or_zero(value, label), PCT_PLACES)


def fte_lookup(employees: pd.DataFrame, default_fte: float = 1.0) -> pd.Series:
    """FTE per employee id, missing FTE filled with ``default_fte``; first row wins on duplicates."""
    if employees.empty:
        return pd.Series(dtype=float)
    deduped = employees.drop_duplicates(subset=EMP_ID, keep="first")
    return deduped.set_index(EMP_ID)[EMP_FTE].fillna(default_fte).astype(float)


def total_fte(employees: pd.DataFrame, default_fte: float = 1.0) -> float:
    """
    Sum of the roster FTE fractions.

    Missing FTE counts as ``default_fte``; negative FTE is bad data and is left
    out of the sum.
    """
    if employees.empty:
        return 0.0
    fte = employees[EMP_FTE].fillna(default_fte).astype(float)
    negative = fte < 0
    if negative.any():
        bad_ids = employees.loc[negative, EMP_ID].tolist()
        logger.warning(f"Excluding {len(bad_ids)} employee(s) with negative FTE from total FTE: {bad_ids}")
    return float(fte[~negative].sum())


def _cost_per_fte_values(valid: pd.DataFrame, fte_by_id: pd.Series, default_fte: float) -> list:
    """One gross/FTE value per compensation line; FTE <= 0 and zero costs skipped."""
    fte = valid[EMP_ID].map(fte_by_id).fillna(default_fte).astype(float)
    gross = valid[COMP_GROSS].astype(float)
    usable = (fte > 0) & (gross != 0)
    return (gross[usable] / fte[usable]).tolist()


def calculate_payroll_metrics(
    compensation: Iterable[CompensationRecord],
    employees: Iterable[EmployeeRecord],
    config: Optional[AnalyticsConfig] = None,
    period: Optional[str] = None,
) -> PayrollMetrics:
    """
    Aggregate one period of compensation records into a PayrollMetrics snapshot.

    Args:
        compensation: Compensation lines for the period.
        employees: Roster rows for the period (used for FTE).
        config: Analytics configuration; defaults when omitted.
        period: Optional period label copied into the result.

    Returns:
        PayrollMetrics. An empty compensation list, or one where every line is
        rejected, gives the all-zero snapshot; records carrying a negative
        amount are excluded and counted in ``excluded_record_count``.
    """
    settings = resolve_config(config).payroll

    comp_df = compensation_to_frame(list(compensation))
    if comp_df.empty:
        logger.info(f"No compensation records for period {period}; returning zeroed payroll metrics")
        return PayrollMetrics.default(period=period)

    valid, rejected = split_valid_compensation(comp_df)
    if not rejected.empty:
        for _, row in rejected.iterrows():
            bad = [col for col in MONEY_COLS if row[col] < 0]
            logger.warning(
                f"Excluding compensation record for employee {row[EMP_ID]} "
                f"(period {period}): negative amount in {bad}"
            )
    if valid.empty:
        logger.warning(
            f"All {len(rejected)} compensation record(s) rejected for period {period}; "
            "returning zeroed payroll metrics"
        )
        return PayrollMetrics.default(excluded_record_count=len(rejected), period=period)

    totals = valid[MONEY_COLS].sum()
    gross = float(totals[GROSS_COMPONENT_COLS].sum())
    charges = float(totals[CHARGE_COLS].sum())
    contributions = float(totals[COMP_CONTRIBUTIONS])
    loaded = gross + settings.employee_contribution_share * contributions
    employer_cost = gross + charges

    emp_df = employees_to_frame(list(employees))
    fte_total = total_fte(emp_df, settings.default_fte)
    fte_by_id = fte_lookup(emp_df, settings.default_fte)

    base = valid[COMP_BASE]
    paid_base = base[base > 0].tolist()
    cost_values = _cost_per_fte_values(valid, fte_by_id, settings.default_fte)

    base_total = float(totals[COMP_BASE])
    variable_total = float(totals[COMP_VARIABLE_BONUS] + totals[COMP_EXCEPTIONAL_BONUS])

    metrics = PayrollMetrics(
        gross_payroll=_money(gross, "gross_payroll"),
        loaded_payroll=_money(loaded, "loaded_payroll"),
        total_employer_cost=_money(employer_cost, "total_employer_cost"),
        mean_base_salary=_money(mean(paid_base), "mean_base_salary"),
        median_base_salary=_money(median(paid_base), "median_base_salary"),
        mean_cost_per_fte=_money(safe_divide(gross, fte_total), "mean_cost_per_fte"),
        median_cost_per_fte=_money(median(cost_values), "median_cost_per_fte"),
        base_salary_total=_money(base_total, "base_salary_total"),
        fixed_bonus_total=_money(totals[COMP_FIXED_BONUS], "fixed_bonus_total"),
        variable_bonus_total=_money(totals[COMP_VARIABLE_BONUS], "variable_bonus_total"),
        exceptional_bonus_total=_money(totals[COMP_EXCEPTIONAL_BONUS], "exceptional_bonus_total"),
        overtime_total=_money(totals[COMP_OVERTIME], "overtime_total"),
        benefits_in_kind_total=_money(totals[COMP_BENEFITS], "benefits_in_kind_total"),
        allowances_total=_money(totals[COMP_ALLOWANCES], "allowances_total"),
        social_contributions_total=_money(contributions, "social_contributions_total"),
        variable_pay_share=_pct(percentage(variable_total, base_total), "variable_pay_share"),
        charges_rate=_pct(percentage(charges, gross), "charges_rate"),
        total_fte=_money(fte_total, "total_fte"),
        record_count=len(valid),
        paid_employee_count=int(valid.loc[valid[COMP_GROSS] > 0, EMP_ID].nunique()),
        excluded_record_count=len(rejected),
        period=period,
    )

    calc_logger.info(
        f"Payroll {period}: {metrics.record_count} record(s), gross={metrics.gross_payroll:.2f}, "
        f"employer cost={metrics.total_employer_cost:.2f}, FTE={metrics.total_fte:.2f}, "
        f"excluded={metrics.excluded_record_count}"
    )
    return metrics
