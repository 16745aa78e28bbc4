# hr_analytics/state/frames.py
"""
Conversions from record lists to pandas DataFrames.

Calculators work on frames; these helpers are the single place where records
are flattened and status/gender/contract labels are normalised.
"""

import logging
from dataclasses import asdict
from typing import Iterable, List

import pandas as pd

from hr_analytics.state.records import AbsenceRecord, CompensationRecord, EmployeeRecord
from hr_analytics.state.schema import (
    ABSENCE_COLS,
    COMP_GROSS,
    COMPENSATION_COLS,
    EMP_ACTIVE,
    EMP_CONTRACT,
    EMP_EXIT_REASON,
    EMP_FTE,
    EMP_GENDER,
    EMP_STATUS,
    EMPLOYEE_COLS,
    GROSS_COMPONENT_COLS,
    MONEY_COLS,
)
from hr_analytics.utils.status_enums import (
    EmploymentStatus,
    normalize_contract_type,
    normalize_exit_reason,
    normalize_gender,
    normalize_status,
)

logger = logging.getLogger(__name__)

__all__ = [
    "employees_to_frame",
    "compensation_to_frame",
    "absences_to_frame",
    "split_valid_compensation",
]


def _records_frame(records: Iterable, columns: List[str]) -> pd.DataFrame:
    rows = [asdict(r) for r in records]
    if not rows:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(rows, columns=columns)


def employees_to_frame(records: Iterable[EmployeeRecord]) -> pd.DataFrame:
    """Roster frame with normalised enums, an ``active`` flag and raw ``fte`` (NaN when missing)."""
    df = _records_frame(records, EMPLOYEE_COLS)
    df[EMP_STATUS] = df[EMP_STATUS].map(normalize_status)
    df[EMP_GENDER] = df[EMP_GENDER].map(normalize_gender)
    df[EMP_CONTRACT] = df[EMP_CONTRACT].map(normalize_contract_type)
    df[EMP_EXIT_REASON] = df[EMP_EXIT_REASON].astype(object).map(normalize_exit_reason)
    df[EMP_FTE] = pd.to_numeric(df[EMP_FTE], errors="coerce")
    df[EMP_ACTIVE] = df[EMP_STATUS] == EmploymentStatus.ACTIVE
    return df


def compensation_to_frame(records: Iterable[CompensationRecord]) -> pd.DataFrame:
    """Compensation frame with float money columns and a derived ``gross_pay`` column."""
    df = _records_frame(records, COMPENSATION_COLS)
    for col in MONEY_COLS:
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0.0).astype(float)
    df[COMP_GROSS] = df[GROSS_COMPONENT_COLS].sum(axis=1)
    return df


def split_valid_compensation(df: pd.DataFrame):
    """Return ``(valid, rejected)``: rows with any negative monetary field are rejected."""
    negative = (df[MONEY_COLS] < 0).any(axis=1)
    return df.loc[~negative], df.loc[negative]


def absences_to_frame(records: Iterable[AbsenceRecord]) -> pd.DataFrame:
    return _records_frame(records, ABSENCE_COLS)
