import os
import sys
from datetime import date

import pytest

# Ensure project root is on sys.path before imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from hr_analytics.state.records import AbsenceRecord, CompensationRecord, EmployeeRecord  # noqa: E402


# Define pytest markers for test categories
def pytest_configure(config):
    """
    Register custom markers to avoid pytest warnings.
    """
    config.addinivalue_line("markers", "unit: mark a test as a unit test")
    config.addinivalue_line("markers", "integration: mark a test as an integration test")
    config.addinivalue_line("markers", "engines: mark a test as an engines test")
    config.addinivalue_line("markers", "reporting: mark a test as a reporting test")
    config.addinivalue_line("markers", "config: mark a test as a config test")


PERIOD = date(2024, 6, 30)


@pytest.fixture
def period_date():
    return PERIOD


@pytest.fixture
def make_employee():
    """Factory for EmployeeRecord with sensible defaults."""
    def _make(employee_id="E1", **kwargs):
        kwargs.setdefault("status", "Active")
        return EmployeeRecord(employee_id=employee_id, **kwargs)
    return _make


@pytest.fixture
def make_compensation():
    """Factory for CompensationRecord; only the given amounts are non-zero."""
    def _make(employee_id="E1", **kwargs):
        kwargs.setdefault("period", "2024-06")
        return CompensationRecord(employee_id=employee_id, **kwargs)
    return _make


@pytest.fixture
def make_absence():
    def _make(employee_id="E1", absence_type="Maladie", start_date=date(2024, 6, 3), end_date=None):
        return AbsenceRecord(
            employee_id=employee_id,
            absence_type=absence_type,
            start_date=start_date,
            end_date=end_date,
        )
    return _make


@pytest.fixture
def roster(make_employee):
    """Five active employees aged 24, 30, 40, 50 and 60 at PERIOD, plus one inactive."""
    return [
        make_employee("E1", birth_date=date(2000, 1, 15), hire_date=date(2024, 1, 1), gender="F",
                      contract_type="CDI", fte=1.0),
        make_employee("E2", birth_date=date(1994, 3, 1), hire_date=date(2022, 3, 1), gender="M",
                      contract_type="CDI", fte=0.5),
        make_employee("E3", birth_date=date(1984, 6, 30), hire_date=date(2020, 1, 1), gender="H",
                      contract_type="CDD"),
        make_employee("E4", birth_date=date(1974, 1, 1), hire_date=date(2016, 6, 1), gender="Femme",
                      contract_type="Alternance", fte=1.0),
        make_employee("E5", birth_date=date(1964, 2, 2), hire_date=date(2010, 1, 1), gender="male",
                      contract_type="CDI", fte=1.0),
        make_employee("E6", status="Inactif", birth_date=date(1950, 1, 1), hire_date=date(1990, 1, 1),
                      gender="M", contract_type="CDI", fte=1.0, exit_date=date(2015, 3, 31),
                      exit_reason="Retraite"),
    ]
