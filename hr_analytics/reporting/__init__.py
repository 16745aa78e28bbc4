"""
Advisory text, waterfall layout and formatting on top of computed metrics.

Period comparison lives in ``hr_analytics.reporting.comparison``; it depends
on the engines and is not imported here.
"""

from .analysis import (
    analyze_absence,
    analyze_demographics,
    analyze_payroll,
    analyze_workforce,
    calculate_stability,
    compare_absence_benchmark,
    compare_workforce_benchmark,
    detect_absence_patterns,
    detect_pyramid_inversion,
)
from .formatters import format_currency
from .waterfall import WaterfallData, WaterfallStep, build_waterfall

__all__ = [
    "analyze_demographics",
    "detect_pyramid_inversion",
    "analyze_payroll",
    "analyze_workforce",
    "calculate_stability",
    "compare_workforce_benchmark",
    "analyze_absence",
    "detect_absence_patterns",
    "compare_absence_benchmark",
    "format_currency",
    "WaterfallData",
    "WaterfallStep",
    "build_waterfall",
]
