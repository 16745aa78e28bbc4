"""Age-related helper functions for roster snapshots."""

from __future__ import annotations
import pandas as pd
from enum import Enum
from typing import Dict, List, Tuple

from hr_analytics.utils.date_utils import completed_years

# ────────────────────────────────────────────────────────────────────────────────
# A.  Age bands – the five pyramid buckets used by every demographic report
# ────────────────────────────────────────────────────────────────────────────────
class AgeBand(Enum):
    UNDER_25 = "<25"
    EARLY    = "25-35"
    MID      = "35-45"
    LATE     = "45-55"
    OVER_55  = "55+"

MIN_VALID_AGE = 0
MAX_VALID_AGE = 120  # exclusive

AGE_CUTOFFS: List[Tuple[int, int, AgeBand]] = [
    (   0, 25, AgeBand.UNDER_25),
    (  25, 35, AgeBand.EARLY),
    (  35, 45, AgeBand.MID),
    (  45, 55, AgeBand.LATE),
    (  55, MAX_VALID_AGE, AgeBand.OVER_55),
]

AGE_BAND_CATEGORICAL_DTYPE = pd.CategoricalDtype(
    categories=[band.value for band in AgeBand],
    ordered=True,
)

# ────────────────────────────────────────────────────────────────────────────────
# B.  Helpers – identical pattern to tenure.py
# ────────────────────────────────────────────────────────────────────────────────
def is_valid_age(age) -> bool:
    if age is None or pd.isna(age):
        return False
    return MIN_VALID_AGE <= age < MAX_VALID_AGE

def categorize_age(age) -> AgeBand | pd.NA:
    if not is_valid_age(age):
        return pd.NA
    for lo, hi, band in AGE_CUTOFFS:
        if lo <= age < hi:
            return band
    return pd.NA

def assign_age_band(age):
    band = categorize_age(age)
    return pd.NA if pd.isna(band) else band.value

def apply_age(df: pd.DataFrame,
              birth_col: str,
              as_of,
              *,
              out_age_col: str,
              out_band_col: str
) -> pd.DataFrame:
    """Completed-years age + band calculation (mutates df).

    Ages outside [0, 120) are bad data and left as NA in both columns.
    """
    ages = df[birth_col].map(lambda bd: completed_years(bd, as_of))
    ages = ages.map(lambda a: a if is_valid_age(a) else pd.NA)
    df[out_age_col] = ages.astype("Int64")
    df[out_band_col] = df[out_age_col].map(assign_age_band).astype(AGE_BAND_CATEGORICAL_DTYPE)
    return df

def age_band_counts(bands: pd.Series) -> Dict[AgeBand, int]:
    return {band: int((bands == band.value).sum()) for band in AgeBand}
