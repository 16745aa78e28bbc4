"""
Exception classes raised at the I/O boundaries of hr_analytics.

Calculators never raise: missing data, bad records and numerical problems all
degrade to neutral results. Only config and data loading surface errors.
"""


class HRAnalyticsError(Exception):
    """Base exception for all hr_analytics errors."""

    pass


class ConfigLoadError(HRAnalyticsError):
    """Raised when an analytics configuration file cannot be loaded or validated."""

    pass


class DataReadError(HRAnalyticsError):
    """Raised when an input data file cannot be found, read, or processed."""

    pass
