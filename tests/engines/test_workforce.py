from datetime import date

import pandas as pd
import pytest

from hr_analytics.config.models import AnalyticsConfig, WorkforceSettings
from hr_analytics.engines.workforce import calculate_workforce_metrics, split_exits
from hr_analytics.state.metrics import WorkforceMetrics


@pytest.fixture
def moving_roster(make_employee):
    """Ten active permanent employees (two hired this month) and five June leavers."""
    active = [
        make_employee(f"A{i}", contract_type="CDI", hire_date=date(2020, 1, 1)) for i in range(8)
    ] + [
        make_employee("H1", contract_type="CDI", hire_date=date(2024, 6, 3)),
        make_employee("H2", contract_type="CDI", hire_date=date(2024, 6, 17), fte=0.5),
    ]
    leavers = [
        make_employee("X1", status="Inactive", exit_date=date(2024, 6, 10), exit_reason="Démission"),
        make_employee("X2", status="Inactive", exit_date=date(2024, 6, 12), exit_reason="Licenciement"),
        make_employee("X3", status="Inactive", exit_date=date(2024, 6, 14)),
        make_employee("X4", status="Inactive", exit_date=date(2024, 6, 20), exit_reason="Mutation"),
        make_employee("X5", status="Inactive", exit_date=date(2024, 6, 28)),
        make_employee("X6", status="Inactive", exit_date=date(2024, 5, 31), exit_reason="Démission"),
    ]
    return active + leavers


def test_headcount_fte_and_contract_mix(roster, period_date):
    metrics = calculate_workforce_metrics(roster, period_date)

    assert metrics.headcount_end == 5
    assert metrics.headcount_start == metrics.headcount_end
    assert metrics.fte_end == 4.5
    assert metrics.permanent_count == 3
    assert metrics.fixed_term_count == 1
    assert metrics.apprenticeship_count == 1
    assert metrics.pct_permanent == 60.0
    assert metrics.pct_precarity == 40.0


def test_movements_and_turnover(moving_roster, period_date):
    metrics = calculate_workforce_metrics(moving_roster, period_date)

    assert metrics.headcount_end == 10
    assert metrics.fte_end == 9.5
    assert metrics.hires == 2
    assert metrics.exits == 5
    # One known voluntary + floor(3 * 0.6) of the unknown reasons
    assert metrics.voluntary_exits == 2
    assert metrics.involuntary_exits == 3
    assert metrics.turnover_rate == 50.0
    assert metrics.turnover_rate_monthly == 50.0
    assert metrics.turnover_rate_annualized == 600.0
    assert metrics.voluntary_turnover_rate == 20.0
    assert metrics.pct_precarity == 0.0


def test_voluntary_share_is_configurable(moving_roster, period_date):
    config = AnalyticsConfig(workforce=WorkforceSettings(voluntary_exit_share=1.0))
    metrics = calculate_workforce_metrics(moving_roster, period_date, config)

    assert metrics.voluntary_exits == 4
    assert metrics.involuntary_exits == 1


@pytest.mark.parametrize(
    "reasons, share, expected",
    [
        (["Démission", None, None], 0.6, (2, 1)),
        (["Retraite", "Fin de CDD"], 0.6, (1, 1)),
        ([None, None, None, None], 0.6, (2, 2)),
        ([], 0.6, (0, 0)),
    ],
)
def test_split_exits(reasons, share, expected):
    assert split_exits(pd.Series(reasons, dtype=object), share) == expected


def test_empty_roster_gives_default(period_date):
    assert calculate_workforce_metrics([], period_date) == WorkforceMetrics.default()


def test_no_active_employee_has_zero_precarity(make_employee, period_date):
    metrics = calculate_workforce_metrics(
        [make_employee("X1", status="Inactive", exit_date=date(2024, 6, 5))], period_date
    )

    assert metrics.headcount_end == 0
    assert metrics.exits == 1
    assert metrics.turnover_rate == 0.0
    assert metrics.pct_precarity == 0.0


def test_past_leaver_with_reason_and_no_exit_this_month(make_employee, period_date):
    roster = [
        make_employee("E1", contract_type="CDI"),
        make_employee("E2", status="Inactive", exit_date=date(2023, 1, 31), exit_reason="Démission"),
    ]

    metrics = calculate_workforce_metrics(roster, period_date)

    assert metrics.headcount_end == 1
    assert metrics.exits == 0
    assert metrics.voluntary_exits == 0
    assert metrics.involuntary_exits == 0
    assert metrics.turnover_rate == 0.0


def test_shared_roster_has_no_exit_this_month(roster, period_date):
    metrics = calculate_workforce_metrics(roster, period_date)

    assert metrics.exits == 0
    assert metrics.voluntary_turnover_rate_annualized == 0.0


def test_split_exits_on_empty_string_series():
    assert split_exits(pd.Series([], dtype="string"), 0.6) == (0, 0)
