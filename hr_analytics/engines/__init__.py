"""
Engines package for the HR analytics core.

Each engine is a pure function turning one period of records (or two
snapshots, for the effects) into an immutable metrics object.
"""

from .payroll import calculate_payroll_metrics
from .demographics import calculate_demographics_metrics
from .effects import calculate_effects, detect_annual_bonus, generate_commentary
from .workforce import calculate_workforce_metrics
from .absence import calculate_absence_metrics

__all__ = [
    "calculate_payroll_metrics",
    "calculate_demographics_metrics",
    "calculate_effects",
    "detect_annual_bonus",
    "generate_commentary",
    "calculate_workforce_metrics",
    "calculate_absence_metrics",
]
