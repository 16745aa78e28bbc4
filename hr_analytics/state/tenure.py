# hr_analytics/state/tenure.py
"""Seniority-related helper functions for roster snapshots.

Seniority is counted in whole months (year difference * 12 + month
difference); bands are assigned on the equivalent number of years.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Tuple

import pandas as pd

from hr_analytics.utils.date_utils import months_between


class SeniorityBand(Enum):
    """Enumeration of seniority bands for employee categorization."""

    NEW_HIRE = "<1"
    EARLY = "1-3"
    CORE = "3-5"
    EXPERIENCED = "5-10"
    VETERAN = "10+"


# Seniority cutoffs: (min_years, max_years, SeniorityBand)
# Each tuple defines the range [min_years, max_years) for the given band
SENIORITY_CUTOFFS: List[Tuple[float, float, SeniorityBand]] = [
    (0.0, 1.0, SeniorityBand.NEW_HIRE),
    (1.0, 3.0, SeniorityBand.EARLY),
    (3.0, 5.0, SeniorityBand.CORE),
    (5.0, 10.0, SeniorityBand.EXPERIENCED),
    (10.0, float("inf"), SeniorityBand.VETERAN),
]

SENIORITY_BAND_CATEGORICAL_DTYPE = pd.CategoricalDtype(
    categories=[band.value for band in SeniorityBand], ordered=True
)

__all__ = [
    "SeniorityBand",
    "SENIORITY_CUTOFFS",
    "SENIORITY_BAND_CATEGORICAL_DTYPE",
    "categorize_seniority",
    "assign_seniority_band",
    "apply_seniority",
    "seniority_band_counts",
]


def categorize_seniority(months):
    """Categorize seniority in months into a SeniorityBand enum value."""
    if months is None or pd.isna(months) or months < 0:
        return pd.NA

    years = months / 12
    for min_years, max_years, band in SENIORITY_CUTOFFS:
        if min_years <= years < max_years:
            return band

    return pd.NA


def assign_seniority_band(months):
    """Map seniority months to a categorical band string."""
    band = categorize_seniority(months)
    if pd.isna(band):
        return pd.NA

    return band.value


def apply_seniority(
    df: pd.DataFrame, hire_col: str, as_of, *, out_months_col: str, out_band_col: str
) -> pd.DataFrame:
    """Seniority months + band calculation and assignment.

    Parameters
    ----------
    df : DataFrame to modify in place.
    hire_col : column containing hire dates.
    as_of : date to measure seniority against.
    out_months_col : name for the integer seniority column (nullable).
    out_band_col : name for categorical band column.

    Negative seniority (hire date after ``as_of``) is bad data and left as NA.
    """
    months = df[hire_col].map(lambda hd: months_between(hd, as_of))
    months = months.map(lambda m: m if m is not None and m >= 0 else pd.NA)
    df[out_months_col] = months.astype("Int64")
    df[out_band_col] = (
        df[out_months_col].map(assign_seniority_band).astype(SENIORITY_BAND_CATEGORICAL_DTYPE)
    )
    return df


def seniority_band_counts(bands: pd.Series) -> Dict[SeniorityBand, int]:
    return {band: int((bands == band.value).sum()) for band in SeniorityBand}
