"""
Input record types delivered by the import pipeline.

One EmployeeRecord and one CompensationRecord per employee per period; records
are immutable, a correction means re-importing the period.
"""

from dataclasses import dataclass, fields
from datetime import date
from typing import List, Optional

from hr_analytics.state.schema import GROSS_COMPONENT_COLS, MONEY_COLS
from hr_analytics.utils.date_utils import to_date
from hr_analytics.utils.stats import to_float
from hr_analytics.utils.status_enums import (
    EmploymentStatus,
    Gender,
    normalize_gender,
    normalize_status,
)


@dataclass(frozen=True)
class EmployeeRecord:
    """One roster row for one employee in one period.

    Args:
        employee_id: Identifier, unique within the period
        status: Employment status label (``Active``/``Actif``, ``Inactive``...)
        birth_date: Date of birth, if known
        hire_date: Date of entry, if known
        gender: Raw gender code (``M``/``H``/``F``/full words), if known
        contract_type: Raw contract label (``CDI``, ``Permanent``...)
        fte: Full-time-equivalent fraction; None means 1.0
        exit_date: Departure date, if the employee left
        exit_reason: Raw departure reason, if known
        period: Period label the row belongs to
    """
    employee_id: str
    status: str = "Active"
    birth_date: Optional[date] = None
    hire_date: Optional[date] = None
    gender: Optional[str] = None
    contract_type: Optional[str] = None
    fte: Optional[float] = None
    exit_date: Optional[date] = None
    exit_reason: Optional[str] = None
    period: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "employee_id", str(self.employee_id).strip())
        for name in ("birth_date", "hire_date", "exit_date"):
            object.__setattr__(self, name, to_date(getattr(self, name)))
        if self.fte is not None:
            object.__setattr__(self, "fte", to_float(self.fte, default=None))

    @property
    def employment_status(self) -> EmploymentStatus:
        return normalize_status(self.status)

    @property
    def is_active(self) -> bool:
        return self.employment_status is EmploymentStatus.ACTIVE

    @property
    def normalized_gender(self) -> Gender:
        return normalize_gender(self.gender)

    def fte_or_default(self, default: float = 1.0) -> float:
        """FTE fraction, ``default`` when missing."""
        return default if self.fte is None else self.fte


@dataclass(frozen=True)
class CompensationRecord:
    """Compensation line items for one employee in one period.

    All monetary fields should be non-negative; a negative amount is a
    data-quality error and the record is excluded from aggregates.
    """
    employee_id: str
    period: Optional[str] = None
    base_salary: float = 0.0
    fixed_bonus: float = 0.0
    variable_bonus: float = 0.0
    exceptional_bonus: float = 0.0
    overtime: float = 0.0
    benefits_in_kind: float = 0.0
    allowances: float = 0.0
    social_contributions: float = 0.0
    payroll_taxes: float = 0.0
    other_charges: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "employee_id", str(self.employee_id).strip())
        for name in MONEY_COLS:
            object.__setattr__(self, name, to_float(getattr(self, name)))

    def negative_fields(self) -> List[str]:
        """Names of monetary fields holding a negative amount."""
        return [name for name in MONEY_COLS if getattr(self, name) < 0]

    @property
    def is_valid(self) -> bool:
        return not self.negative_fields()

    @property
    def gross_pay(self) -> float:
        """Sum of the direct compensation components (before employer charges)."""
        return sum(getattr(self, name) for name in GROSS_COMPONENT_COLS)


@dataclass(frozen=True)
class AbsenceRecord:
    """One absence event; a missing end date means a single day."""
    employee_id: str
    absence_type: str
    start_date: Optional[date]
    end_date: Optional[date] = None

    def __post_init__(self):
        object.__setattr__(self, "employee_id", str(self.employee_id).strip())
        object.__setattr__(self, "absence_type", str(self.absence_type or "").strip())
        object.__setattr__(self, "start_date", to_date(self.start_date))
        object.__setattr__(self, "end_date", to_date(self.end_date))


def record_field_names(record_type) -> List[str]:
    return [f.name for f in fields(record_type)]
