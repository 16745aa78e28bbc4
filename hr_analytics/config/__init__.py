"""Analytics configuration: pydantic models and YAML loaders."""

from .models import (
    AbsenceSettings,
    AnalyticsConfig,
    DEFAULT_CONFIG,
    DemographicsSettings,
    EffectsSettings,
    PayrollSettings,
    WorkforceBenchmark,
    WorkforceSettings,
    resolve_config,
)
from .loaders import build_config, load_config, load_yaml_config

__all__ = [
    "AnalyticsConfig",
    "DEFAULT_CONFIG",
    "PayrollSettings",
    "EffectsSettings",
    "DemographicsSettings",
    "WorkforceSettings",
    "WorkforceBenchmark",
    "AbsenceSettings",
    "resolve_config",
    "build_config",
    "load_config",
    "load_yaml_config",
]
