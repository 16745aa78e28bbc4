"""Record types, metric snapshots, band helpers and frame conversion."""

from .records import AbsenceRecord, CompensationRecord, EmployeeRecord
from .metrics import (
    AbsenceMetrics,
    DemographicsMetrics,
    PayrollEffects,
    PayrollMetrics,
    WorkforceMetrics,
)

__all__ = [
    "EmployeeRecord",
    "CompensationRecord",
    "AbsenceRecord",
    "PayrollMetrics",
    "DemographicsMetrics",
    "PayrollEffects",
    "WorkforceMetrics",
    "AbsenceMetrics",
]
