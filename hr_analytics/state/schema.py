# hr_analytics/state/schema.py
"""Centralized column constants for employee, compensation and absence frames.

Record dataclasses use these names as their field names, so a list of records
converts to a DataFrame whose columns match the constants below.
"""
from __future__ import annotations

from typing import List

# -----------------------------------------------------------------------------
# Employee columns
# -----------------------------------------------------------------------------
EMP_ID = "employee_id"
EMP_PERIOD = "period"
EMP_STATUS = "status"
EMP_BIRTH_DATE = "birth_date"
EMP_HIRE_DATE = "hire_date"
EMP_GENDER = "gender"
EMP_CONTRACT = "contract_type"
EMP_FTE = "fte"
EMP_EXIT_DATE = "exit_date"
EMP_EXIT_REASON = "exit_reason"

# Derived employee columns
EMP_ACTIVE = "active"
EMP_AGE = "age"
EMP_AGE_BAND = "age_band"
EMP_SENIORITY_MONTHS = "seniority_months"
EMP_SENIORITY_BAND = "seniority_band"

EMPLOYEE_COLS: List[str] = [
    EMP_ID,
    EMP_STATUS,
    EMP_BIRTH_DATE,
    EMP_HIRE_DATE,
    EMP_GENDER,
    EMP_CONTRACT,
    EMP_FTE,
    EMP_EXIT_DATE,
    EMP_EXIT_REASON,
    EMP_PERIOD,
]

# -----------------------------------------------------------------------------
# Compensation columns
# -----------------------------------------------------------------------------
COMP_PERIOD = "period"
COMP_BASE = "base_salary"
COMP_FIXED_BONUS = "fixed_bonus"
COMP_VARIABLE_BONUS = "variable_bonus"
COMP_EXCEPTIONAL_BONUS = "exceptional_bonus"
COMP_OVERTIME = "overtime"
COMP_BENEFITS = "benefits_in_kind"
COMP_ALLOWANCES = "allowances"
COMP_CONTRIBUTIONS = "social_contributions"
COMP_TAXES = "payroll_taxes"
COMP_OTHER_CHARGES = "other_charges"

# Derived compensation columns
COMP_GROSS = "gross_pay"

# Components summed into gross payroll
GROSS_COMPONENT_COLS: List[str] = [
    COMP_BASE,
    COMP_FIXED_BONUS,
    COMP_VARIABLE_BONUS,
    COMP_EXCEPTIONAL_BONUS,
    COMP_OVERTIME,
    COMP_BENEFITS,
    COMP_ALLOWANCES,
]

# Employer-side charges on top of gross payroll
CHARGE_COLS: List[str] = [
    COMP_CONTRIBUTIONS,
    COMP_TAXES,
    COMP_OTHER_CHARGES,
]

MONEY_COLS: List[str] = GROSS_COMPONENT_COLS + CHARGE_COLS

COMPENSATION_COLS: List[str] = [EMP_ID, COMP_PERIOD] + MONEY_COLS

# -----------------------------------------------------------------------------
# Absence columns
# -----------------------------------------------------------------------------
ABS_TYPE = "absence_type"
ABS_START = "start_date"
ABS_END = "end_date"
ABS_DAYS = "days"
ABS_CATEGORY = "category"

ABSENCE_COLS: List[str] = [EMP_ID, ABS_TYPE, ABS_START, ABS_END]
