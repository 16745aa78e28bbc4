import pytest

from hr_analytics.config.models import AnalyticsConfig, PayrollSettings
from hr_analytics.engines.payroll import calculate_payroll_metrics, total_fte
from hr_analytics.state.frames import employees_to_frame
from hr_analytics.state.metrics import PayrollMetrics


@pytest.fixture
def compensation(make_compensation):
    return [
        make_compensation(
            "E1",
            base_salary=3000,
            fixed_bonus=200,
            variable_bonus=300,
            overtime=100,
            benefits_in_kind=50,
            allowances=50,
            social_contributions=1000,
            payroll_taxes=200,
            other_charges=100,
        ),
        make_compensation(
            "E2",
            base_salary=2000,
            exceptional_bonus=500,
            social_contributions=600,
        ),
    ]


@pytest.fixture
def employees(make_employee):
    return [make_employee("E1", fte=1.0), make_employee("E2", fte=0.5)]


def test_empty_compensation_returns_zeroed_metrics(employees):
    metrics = calculate_payroll_metrics([], employees, period="2024-06")

    assert metrics == PayrollMetrics.default(period="2024-06")
    assert metrics.record_count == 0


def test_totals_and_ratios(compensation, employees):
    metrics = calculate_payroll_metrics(compensation, employees, period="2024-06")

    assert metrics.gross_payroll == 6200.0
    assert metrics.loaded_payroll == 7000.0
    assert metrics.total_employer_cost == 8100.0
    assert metrics.base_salary_total == 5000.0
    assert metrics.exceptional_bonus_total == 500.0
    assert metrics.social_contributions_total == 1600.0
    assert metrics.variable_pay_share == 16.0
    assert metrics.charges_rate == 30.65
    assert metrics.record_count == 2
    assert metrics.paid_employee_count == 2
    assert metrics.period == "2024-06"


def test_cost_per_fte_uses_individual_fte(compensation, employees):
    metrics = calculate_payroll_metrics(compensation, employees)

    assert metrics.total_fte == 1.5
    assert metrics.mean_cost_per_fte == 4133.33
    # 3700 / 1.0 and 2500 / 0.5
    assert metrics.median_cost_per_fte == 4350.0
    assert metrics.mean_base_salary == 2500.0
    assert metrics.median_base_salary == 2500.0


def test_missing_fte_defaults_to_full_time(compensation, make_employee):
    metrics = calculate_payroll_metrics(compensation, [make_employee("E1"), make_employee("E2")])

    assert metrics.total_fte == 2.0
    assert metrics.mean_cost_per_fte == 3100.0
    assert metrics.median_cost_per_fte == 3100.0


def test_negative_record_is_excluded(compensation, employees, make_compensation, caplog):
    with caplog.at_level("WARNING"):
        metrics = calculate_payroll_metrics(
            compensation + [make_compensation("E3", base_salary=1000, overtime=-10)],
            employees,
        )

    assert metrics.gross_payroll == 6200.0
    assert metrics.excluded_record_count == 1
    assert metrics.record_count == 2
    assert "E3" in caplog.text


def test_all_records_rejected(make_compensation, employees):
    metrics = calculate_payroll_metrics([make_compensation("E1", base_salary=-1)], employees)

    assert metrics.gross_payroll == 0.0
    assert metrics.excluded_record_count == 1


def test_zero_fte_gives_zero_cost_per_fte(compensation, make_employee):
    metrics = calculate_payroll_metrics(
        compensation, [make_employee("E1", fte=0), make_employee("E2", fte=0)]
    )

    assert metrics.total_fte == 0.0
    assert metrics.mean_cost_per_fte == 0.0
    assert metrics.median_cost_per_fte == 0.0


def test_employee_contribution_share_is_configurable(compensation, employees):
    config = AnalyticsConfig(payroll=PayrollSettings(employee_contribution_share=0.25))
    metrics = calculate_payroll_metrics(compensation, employees, config)

    assert metrics.loaded_payroll == 6600.0


def test_total_fte_skips_negative_values(make_employee, caplog):
    df = employees_to_frame(
        [make_employee("E1", fte=0.8), make_employee("E2"), make_employee("E3", fte=-1)]
    )
    with caplog.at_level("WARNING"):
        assert total_fte(df) == pytest.approx(1.8)
    assert "E3" in caplog.text


def test_repeated_calls_give_identical_results(compensation, employees):
    first = calculate_payroll_metrics(compensation, employees, period="2024-06")
    second = calculate_payroll_metrics(compensation, employees, period="2024-06")

    assert first == second
