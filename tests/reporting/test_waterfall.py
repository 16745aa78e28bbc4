import pytest

from hr_analytics.engines.effects import calculate_effects
from hr_analytics.reporting.waterfall import STEP_DELTA, STEP_TOTAL, build_waterfall
from hr_analytics.state.metrics import PayrollEffects, PayrollMetrics


@pytest.fixture
def effects():
    return calculate_effects(
        PayrollMetrics(gross_payroll=110000, total_fte=20, period="2024-06"),
        PayrollMetrics(gross_payroll=100000, total_fte=18, period="2024-05"),
    )


def test_waterfall_steps_chain(effects):
    waterfall = build_waterfall(effects, ["comment"])
    opening, price, volume, closing = waterfall.steps

    assert opening.kind == STEP_TOTAL
    assert opening.label == "Payroll 2024-05"
    assert opening.end == 100000.0
    assert price.kind == STEP_DELTA
    assert price.start == 100000.0
    assert price.end == pytest.approx(99000.0)
    assert volume.start == price.end
    assert volume.end == pytest.approx(110000.0)
    assert closing.label == "Payroll 2024-06"
    assert closing.value == 110000.0
    assert waterfall.reconciles
    assert waterfall.commentary == ["comment"]


def test_waterfall_to_dict_is_plain_data(effects):
    data = build_waterfall(effects, bonus_note="note").to_dict()

    assert [step["label"] for step in data["steps"]] == [
        "Payroll 2024-05",
        "Price effect",
        "Volume effect",
        "Payroll 2024-06",
    ]
    assert data["effects"]["variation"] == 10000.0
    assert data["bonus_note"] == "note"


def test_neutral_effects_give_flat_waterfall():
    waterfall = build_waterfall(PayrollEffects.default())

    assert [step.value for step in waterfall.steps] == [0.0, 0.0, 0.0, 0.0]
    assert waterfall.steps[0].label == "Payroll comparison"
    assert waterfall.commentary == []


def test_first_period_closing_bar_shows_current_payroll():
    current = PayrollMetrics(gross_payroll=52000.0, total_fte=12, period="2024-06")

    waterfall = build_waterfall(calculate_effects(current, None), current=current)
    opening, price, volume, closing = waterfall.steps

    assert opening.value == 0.0
    assert price.value == 0.0
    assert volume.value == 0.0
    assert closing.label == "Payroll 2024-06"
    assert closing.value == 52000.0
    assert closing.end == 52000.0
