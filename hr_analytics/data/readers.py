# hr_analytics/data/readers.py
"""
Functions for reading input data files (roster, compensation, absences).

CSV and Parquet are supported. Known column aliases, including the French
payroll export headers (``matricule``, ``salaire_de_base``...), are renamed to
the canonical column names before rows are turned into records.
"""

import logging
from dataclasses import MISSING, fields
from pathlib import Path
from typing import Any, Callable, Dict, List, Type, TypeVar, Union

import pandas as pd

from hr_analytics.errors import DataReadError
from hr_analytics.state.records import (
    AbsenceRecord,
    CompensationRecord,
    EmployeeRecord,
    record_field_names,
)
from hr_analytics.state.schema import (
    ABS_END,
    ABS_START,
    ABS_TYPE,
    COMP_ALLOWANCES,
    COMP_BASE,
    COMP_BENEFITS,
    COMP_CONTRIBUTIONS,
    COMP_EXCEPTIONAL_BONUS,
    COMP_FIXED_BONUS,
    COMP_OTHER_CHARGES,
    COMP_OVERTIME,
    COMP_PERIOD,
    COMP_TAXES,
    COMP_VARIABLE_BONUS,
    EMP_BIRTH_DATE,
    EMP_CONTRACT,
    EMP_EXIT_DATE,
    EMP_EXIT_REASON,
    EMP_FTE,
    EMP_GENDER,
    EMP_HIRE_DATE,
    EMP_ID,
    EMP_PERIOD,
    EMP_STATUS,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
RecordT = TypeVar("RecordT")

SUPPORTED_SUFFIXES = (".csv", ".parquet")

# Normalised header (lower case, spaces and dashes as underscores) -> canonical column
ID_ALIASES: Dict[str, str] = {
    "employee_id": EMP_ID,
    "matricule": EMP_ID,
    "emp_id": EMP_ID,
    "id": EMP_ID,
}

EMPLOYEE_ALIASES: Dict[str, str] = {
    **ID_ALIASES,
    "statut_emploi": EMP_STATUS,
    "statut": EMP_STATUS,
    "status": EMP_STATUS,
    "date_naissance": EMP_BIRTH_DATE,
    "birth_date": EMP_BIRTH_DATE,
    "date_entree": EMP_HIRE_DATE,
    "hire_date": EMP_HIRE_DATE,
    "sexe": EMP_GENDER,
    "gender": EMP_GENDER,
    "type_contrat": EMP_CONTRACT,
    "contract_type": EMP_CONTRACT,
    "temps_travail": EMP_FTE,
    "etp": EMP_FTE,
    "fte": EMP_FTE,
    "date_sortie": EMP_EXIT_DATE,
    "exit_date": EMP_EXIT_DATE,
    "motif_sortie": EMP_EXIT_REASON,
    "exit_reason": EMP_EXIT_REASON,
    "periode": EMP_PERIOD,
    "period": EMP_PERIOD,
}

COMPENSATION_ALIASES: Dict[str, str] = {
    **ID_ALIASES,
    "periode": COMP_PERIOD,
    "period": COMP_PERIOD,
    "salaire_de_base": COMP_BASE,
    "base_salary": COMP_BASE,
    "primes_fixes": COMP_FIXED_BONUS,
    "fixed_bonus": COMP_FIXED_BONUS,
    "primes_variables": COMP_VARIABLE_BONUS,
    "variable_bonus": COMP_VARIABLE_BONUS,
    "primes_exceptionnelles": COMP_EXCEPTIONAL_BONUS,
    "exceptional_bonus": COMP_EXCEPTIONAL_BONUS,
    "heures_supp_montant": COMP_OVERTIME,
    "heures_supp": COMP_OVERTIME,
    "overtime": COMP_OVERTIME,
    "avantages_nature": COMP_BENEFITS,
    "benefits_in_kind": COMP_BENEFITS,
    "indemnites": COMP_ALLOWANCES,
    "allowances": COMP_ALLOWANCES,
    "cotisations_sociales": COMP_CONTRIBUTIONS,
    "social_contributions": COMP_CONTRIBUTIONS,
    "taxes_sur_salaire": COMP_TAXES,
    "payroll_taxes": COMP_TAXES,
    "autres_charges": COMP_OTHER_CHARGES,
    "other_charges": COMP_OTHER_CHARGES,
}

ABSENCE_ALIASES: Dict[str, str] = {
    **ID_ALIASES,
    "type_absence": ABS_TYPE,
    "absence_type": ABS_TYPE,
    "date_debut": ABS_START,
    "start_date": ABS_START,
    "date_fin": ABS_END,
    "end_date": ABS_END,
}


def _normalise_header(name: Any) -> str:
    return str(name).strip().lower().replace(" ", "_").replace("-", "_")


def read_frame(file_path: PathLike) -> pd.DataFrame:
    """
    Read a CSV or Parquet file into a DataFrame.

    CSV cells are kept as strings (identifiers keep their leading zeros) and
    the delimiter is sniffed, so semicolon exports load as well.

    Raises:
        DataReadError: If the file is missing, has an unsupported suffix or
            cannot be parsed.
    """
    if not isinstance(file_path, Path):
        file_path = Path(file_path)

    logger.info(f"Attempting to read data from: {file_path}")

    if not file_path.exists():
        logger.error(f"Data file not found: {file_path}")
        raise DataReadError(f"Data file not found: {file_path}")

    suffix = file_path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        logger.error(f"Unsupported file format: {file_path}. Please use .csv or .parquet.")
        raise DataReadError(f"Unsupported file format: {file_path.suffix}")

    try:
        if suffix == ".parquet":
            df = pd.read_parquet(file_path)
        else:
            df = pd.read_csv(file_path, sep=None, engine="python", dtype=str, encoding="utf-8-sig")
    except Exception as e:
        logger.exception(f"An unexpected error occurred while reading {file_path}")
        raise DataReadError(f"Error reading data file {file_path}") from e

    logger.info(f"Loaded {len(df)} rows from {file_path}")
    return df


def standardize_columns(df: pd.DataFrame, aliases: Dict[str, str], source: PathLike = "<frame>") -> pd.DataFrame:
    """
    Rename aliased columns to their canonical names.

    The first alias found for a canonical column wins; later duplicates are
    dropped with a warning. Raises DataReadError when no identifier column
    is present.
    """
    renames: Dict[str, str] = {}
    seen = set()
    duplicates = []
    for col in df.columns:
        canonical = aliases.get(_normalise_header(col))
        if canonical is None:
            continue
        if canonical in seen:
            duplicates.append(col)
            continue
        seen.add(canonical)
        renames[col] = canonical

    if duplicates:
        logger.warning(f"Ignoring duplicate columns {duplicates} in {source}")
        df = df.drop(columns=duplicates)
    if EMP_ID not in seen:
        logger.error(f"Could not find a recognizable employee identifier column in {source}")
        raise DataReadError(f"Missing required employee identifier column in {source}")

    return df.rename(columns=renames)


def _clean(value: Any) -> Any:
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        return value
    if isinstance(value, str) and not value.strip():
        return None
    return value


def frame_to_records(df: pd.DataFrame, record_type: Type[RecordT]) -> List[RecordT]:
    """
    Build one record per row from the canonical columns; rows without an id are skipped.
    Blank cells fall back to the record default, or None for fields without one.
    """
    names = [name for name in record_field_names(record_type) if name in df.columns]
    required = {
        f.name for f in fields(record_type)
        if f.default is MISSING and f.default_factory is MISSING
    }
    records: List[RecordT] = []
    skipped = 0
    for row in df[names].to_dict("records"):
        values = {name: _clean(row[name]) for name in names}
        if values.get(EMP_ID) is None:
            skipped += 1
            continue
        records.append(
            record_type(**{k: v for k, v in values.items() if v is not None or k in required})
        )
    if skipped:
        logger.warning(f"Skipped {skipped} row(s) without an employee identifier")
    return records


def _read_records(
    file_path: PathLike,
    aliases: Dict[str, str],
    record_type: Type[RecordT],
    prepare: Callable[[pd.DataFrame], pd.DataFrame] = lambda df: df,
) -> List[RecordT]:
    df = read_frame(file_path)
    df = standardize_columns(df, aliases, file_path)
    try:
        records = frame_to_records(prepare(df), record_type)
    except (TypeError, ValueError) as e:
        logger.exception(f"Could not build {record_type.__name__} rows from {file_path}")
        raise DataReadError(f"Invalid {record_type.__name__} data in {file_path}") from e
    logger.info(f"Built {len(records)} {record_type.__name__}(s) from {file_path}")
    return records


def _require_absence_columns(df: pd.DataFrame) -> pd.DataFrame:
    missing = [col for col in (ABS_TYPE, ABS_START) if col not in df.columns]
    if missing:
        raise DataReadError(f"Missing required absence column(s): {missing}")
    return df


def read_employee_records(file_path: PathLike) -> List[EmployeeRecord]:
    """Read a roster file into EmployeeRecord objects."""
    return _read_records(file_path, EMPLOYEE_ALIASES, EmployeeRecord)


def read_compensation_records(file_path: PathLike) -> List[CompensationRecord]:
    """Read a compensation file into CompensationRecord objects; missing amounts are 0."""
    return _read_records(file_path, COMPENSATION_ALIASES, CompensationRecord)


def read_absence_records(file_path: PathLike) -> List[AbsenceRecord]:
    """Read an absence file into AbsenceRecord objects; type and start date columns are required."""
    return _read_records(file_path, ABSENCE_ALIASES, AbsenceRecord, _require_absence_columns)
