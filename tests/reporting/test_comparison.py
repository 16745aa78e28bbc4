from datetime import date

import pytest

from hr_analytics.reporting.comparison import (
    ComparisonMode,
    build_comparison,
    compare_periods,
    resolve_comparison_period,
    snapshot_key,
)
from hr_analytics.state.metrics import PayrollMetrics


@pytest.mark.parametrize(
    "period, mode, expected",
    [
        (date(2024, 6, 30), ComparisonMode.PREVIOUS_MONTH, date(2024, 5, 1)),
        (date(2024, 1, 15), ComparisonMode.PREVIOUS_MONTH, date(2023, 12, 1)),
        (date(2024, 3, 31), ComparisonMode.SAME_MONTH_LAST_YEAR, date(2023, 3, 1)),
        ("2024-02-29", "same_month_last_year", date(2023, 2, 1)),
    ],
)
def test_resolve_comparison_period(period, mode, expected):
    assert resolve_comparison_period(period, mode) == expected


def test_resolve_comparison_period_rejects_bad_input():
    with pytest.raises(ValueError):
        resolve_comparison_period("garbage")
    with pytest.raises(ValueError):
        resolve_comparison_period(date(2024, 6, 1), "quarterly")


def test_snapshot_key():
    assert snapshot_key(12, date(2024, 6, 30)) == ("12", "2024-06")


@pytest.fixture
def snapshots():
    return {
        ("EST1", "2024-06"): PayrollMetrics(gross_payroll=110000, total_fte=20, period="2024-06"),
        ("EST1", "2024-05"): PayrollMetrics(gross_payroll=100000, total_fte=18, period="2024-05"),
        ("EST1", "2023-06"): PayrollMetrics(gross_payroll=100000, total_fte=20, period="2023-06"),
    }


def test_compare_with_previous_month(snapshots):
    waterfall = compare_periods(snapshots, "EST1", date(2024, 6, 15))

    assert waterfall.effects.comparison_period == "2024-05"
    assert waterfall.effects.volume_effect == pytest.approx(11000.0)
    assert waterfall.commentary == ["Headcount growth drives the cost increase (+11k€)"]


def test_compare_with_same_month_last_year(snapshots):
    waterfall = compare_periods(
        snapshots, "EST1", date(2024, 6, 15), ComparisonMode.SAME_MONTH_LAST_YEAR
    )

    assert waterfall.effects.comparison_period == "2023-06"
    assert waterfall.effects.price_effect == pytest.approx(10000.0)
    assert waterfall.effects.volume_effect == 0.0


def test_missing_comparison_snapshot_gives_neutral_effects(snapshots):
    waterfall = compare_periods(snapshots, "EST2", date(2024, 6, 15))

    assert waterfall.effects.variation == 0.0
    assert waterfall.effects.coherence_ok
    assert waterfall.effects.current_period == "2024-06"
    assert waterfall.commentary == ["Payroll stable over the period"]


def test_build_comparison_adds_bonus_note():
    current = PayrollMetrics(
        gross_payroll=150000, exceptional_bonus_total=50000, total_fte=20, period="2024-12"
    )
    comparison = PayrollMetrics(gross_payroll=100000, total_fte=20, period="2024-11")

    waterfall = build_comparison(current, comparison)

    assert waterfall.bonus_note.startswith("Probable annual bonus in 2024-12")
    assert waterfall.effects.price_effect == pytest.approx(50000.0)


def test_first_period_waterfall_closes_on_current_payroll(snapshots):
    waterfall = compare_periods(snapshots, "EST1", date(2024, 5, 15))

    assert waterfall.effects.variation == 0.0
    assert waterfall.steps[-1].label == "Payroll 2024-05"
    assert waterfall.steps[-1].value == 100000.0
