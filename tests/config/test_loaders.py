from pathlib import Path

import pytest
from pydantic import ValidationError

from hr_analytics.config.loaders import build_config, load_config, load_yaml_config
from hr_analytics.config.models import AnalyticsConfig, DEFAULT_CONFIG, DemographicsSettings
from hr_analytics.errors import ConfigLoadError


def write(tmp_path, text, name="analytics.yaml"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_partial_config_keeps_defaults(tmp_path):
    path = write(
        tmp_path,
        "effects:\n"
        "  coherence_tolerance_pct: 2.5\n"
        "absence:\n"
        "  benchmarks:\n"
        "    services: 4.0\n",
    )
    config = load_config(path)

    assert isinstance(config, AnalyticsConfig)
    assert config.effects.coherence_tolerance_pct == 2.5
    assert config.effects.absolute_tolerance == 0.01
    assert config.absence.benchmarks == {"services": 4.0}
    assert config.payroll == DEFAULT_CONFIG.payroll


def test_empty_file_gives_default_config(tmp_path):
    path = write(tmp_path, "")

    assert load_yaml_config(path) == {}
    assert load_config(path) == DEFAULT_CONFIG


def test_missing_file(tmp_path):
    with pytest.raises(ConfigLoadError, match="not found"):
        load_config(tmp_path / "missing.yaml")


def test_invalid_yaml(tmp_path):
    with pytest.raises(ConfigLoadError, match="parsing"):
        load_yaml_config(write(tmp_path, "effects: [unclosed\n"))


def test_non_mapping_yaml(tmp_path):
    with pytest.raises(ConfigLoadError, match="Expected a dictionary"):
        load_yaml_config(write(tmp_path, "- a\n- b\n"))


@pytest.mark.parametrize(
    "data",
    [
        {"effects": {"unknown_key": 1}},
        {"payroll": {"employee_contribution_share": 1.5}},
        {"demographics": {"pyramid_medium_ratio": 2.5, "pyramid_high_ratio": 2.0}},
        {"payroll": {"low_cost_per_fte": 9000}},
        {"workforce": {"benchmarks": {"tech": {"turnover_annual_pct": 10}}}},
    ],
)
def test_invalid_values_are_rejected(data):
    with pytest.raises(ConfigLoadError):
        build_config(data)


def test_config_is_frozen():
    with pytest.raises(ValidationError):
        DEFAULT_CONFIG.payroll.default_fte = 0.5


def test_default_thresholds():
    assert DEFAULT_CONFIG.payroll.employee_contribution_share == 0.5
    assert DEFAULT_CONFIG.effects.coherence_tolerance_pct == 1.0
    assert DEFAULT_CONFIG.effects.annual_bonus_threshold == 0.30
    assert DEFAULT_CONFIG.workforce.voluntary_exit_share == 0.6
    assert DEFAULT_CONFIG.workforce.benchmarks["retail"].turnover_annual_pct == 25.0
    assert DEFAULT_CONFIG.absence.benchmarks["tech"] == 3.5
    assert DemographicsSettings().pyramid_high_ratio == 2.0


def test_shipped_config_matches_defaults():
    path = Path(__file__).resolve().parents[2] / "config" / "analytics.yaml"
    assert load_config(path) == DEFAULT_CONFIG
