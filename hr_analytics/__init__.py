"""
hr_analytics: payroll decomposition and demographic aggregation for HR data.

The public entry points are re-exported here; see the subpackages for the
record types, configuration models and advisory helpers.
"""

from .config import AnalyticsConfig, DEFAULT_CONFIG, load_config
from .engines import (
    calculate_absence_metrics,
    calculate_demographics_metrics,
    calculate_effects,
    calculate_payroll_metrics,
    calculate_workforce_metrics,
    detect_annual_bonus,
    generate_commentary,
)
from .errors import ConfigLoadError, DataReadError, HRAnalyticsError
from .reporting.comparison import ComparisonMode, compare_periods, resolve_comparison_period
from .state import (
    AbsenceMetrics,
    AbsenceRecord,
    CompensationRecord,
    DemographicsMetrics,
    EmployeeRecord,
    PayrollEffects,
    PayrollMetrics,
    WorkforceMetrics,
)

__version__ = "0.1.0"

__all__ = [
    "AnalyticsConfig",
    "DEFAULT_CONFIG",
    "load_config",
    "calculate_payroll_metrics",
    "calculate_demographics_metrics",
    "calculate_effects",
    "detect_annual_bonus",
    "generate_commentary",
    "calculate_workforce_metrics",
    "calculate_absence_metrics",
    "ComparisonMode",
    "compare_periods",
    "resolve_comparison_period",
    "HRAnalyticsError",
    "ConfigLoadError",
    "DataReadError",
    "EmployeeRecord",
    "CompensationRecord",
    "AbsenceRecord",
    "PayrollMetrics",
    "DemographicsMetrics",
    "PayrollEffects",
    "WorkforceMetrics",
    "AbsenceMetrics",
]
