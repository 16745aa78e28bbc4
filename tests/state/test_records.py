from dataclasses import FrozenInstanceError
from datetime import date

import pytest

from hr_analytics.state.frames import (
    compensation_to_frame,
    employees_to_frame,
    split_valid_compensation,
)
from hr_analytics.state.metrics import DemographicsMetrics, PayrollEffects, PayrollMetrics
from hr_analytics.state.records import CompensationRecord, EmployeeRecord
from hr_analytics.utils.status_enums import ContractType, EmploymentStatus, Gender


def test_employee_record_coerces_inputs():
    rec = EmployeeRecord(employee_id=" 007 ", birth_date="1990-05-01", fte="0,5", gender="H")
    assert rec.employee_id == "007"
    assert rec.birth_date == date(1990, 5, 1)
    assert rec.fte == 0.5
    assert rec.is_active
    assert rec.normalized_gender is Gender.MALE
    assert rec.fte_or_default() == 0.5
    assert EmployeeRecord(employee_id="1").fte_or_default(1.0) == 1.0


def test_records_are_immutable():
    rec = CompensationRecord(employee_id="E1", base_salary=1000)
    with pytest.raises(FrozenInstanceError):
        rec.base_salary = 2000


def test_compensation_record_gross_and_validity():
    rec = CompensationRecord(
        employee_id="E1",
        base_salary="3000",
        fixed_bonus=100,
        overtime=50,
        social_contributions=900,
    )
    assert rec.gross_pay == 3150.0
    assert rec.is_valid

    bad = CompensationRecord(employee_id="E2", base_salary=1000, payroll_taxes=-5)
    assert not bad.is_valid
    assert bad.negative_fields() == ["payroll_taxes"]


def test_employees_to_frame_normalises_labels(make_employee):
    df = employees_to_frame(
        [
            make_employee("E1", status="Actif", gender="F", contract_type="CDI"),
            make_employee("E2", status="Inactive", contract_type="Stage", fte=0.8),
        ]
    )
    assert df["status"].tolist() == [EmploymentStatus.ACTIVE, EmploymentStatus.INACTIVE]
    assert df["active"].tolist() == [True, False]
    assert df["contract_type"].tolist() == [ContractType.PERMANENT, ContractType.INTERNSHIP]
    assert df["fte"].isna().iloc[0]
    assert df["fte"].iloc[1] == 0.8


def test_empty_frames_keep_columns():
    assert "employee_id" in employees_to_frame([]).columns
    assert "gross_pay" in compensation_to_frame([]).columns


def test_split_valid_compensation(make_compensation):
    df = compensation_to_frame(
        [
            make_compensation("E1", base_salary=1000),
            make_compensation("E2", base_salary=1000, allowances=-1),
        ]
    )
    valid, rejected = split_valid_compensation(df)
    assert valid["employee_id"].tolist() == ["E1"]
    assert rejected["employee_id"].tolist() == ["E2"]


def test_metric_defaults_are_neutral():
    payroll = PayrollMetrics.default(period="2024-06")
    assert payroll.gross_payroll == 0.0
    assert payroll.period == "2024-06"
    assert not payroll.has_data

    demo = DemographicsMetrics.default()
    assert demo.equality_index is None
    assert sum(demo.age_distribution.values()) == 0

    effects = PayrollEffects.default()
    assert effects.coherence_ok is True
    assert effects.to_dict()["price_effect"] == 0.0
