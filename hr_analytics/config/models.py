# hr_analytics/config/models.py
"""
Pydantic models for validating the analytics configuration loaded from YAML.

Every business constant used by the calculators and advisory functions lives
here, so that thresholds can be tuned per deployment without code changes.
"""

import logging
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

logger = logging.getLogger(__name__)


class _StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


# --- Payroll ---


class PayrollSettings(_StrictModel):
    """Assumptions and advisory thresholds for payroll aggregation."""

    employee_contribution_share: float = Field(
        0.5,
        ge=0.0,
        le=1.0,
        description="Share of social contributions borne by the employee (loaded payroll)",
    )
    default_fte: float = Field(
        1.0, gt=0.0, description="FTE fraction assumed when an employee has none"
    )
    high_variable_share_pct: float = Field(30.0, ge=0.0)
    low_variable_share_pct: float = Field(5.0, ge=0.0)
    high_charges_rate_pct: float = Field(50.0, ge=0.0)
    low_charges_rate_pct: float = Field(35.0, ge=0.0)
    exceptional_bonus_base_ratio: float = Field(
        0.5, ge=0.0, description="Exceptional bonus / base salary ratio flagged as annual bonus"
    )
    low_cost_per_fte: float = Field(2000.0, ge=0.0)
    high_cost_per_fte: float = Field(5000.0, ge=0.0)

    @model_validator(mode="after")
    def check_bounds_ordered(self) -> "PayrollSettings":
        if self.low_variable_share_pct > self.high_variable_share_pct:
            raise ValueError("low_variable_share_pct must not exceed high_variable_share_pct")
        if self.low_charges_rate_pct > self.high_charges_rate_pct:
            raise ValueError("low_charges_rate_pct must not exceed high_charges_rate_pct")
        if self.low_cost_per_fte > self.high_cost_per_fte:
            raise ValueError("low_cost_per_fte must not exceed high_cost_per_fte")
        return self


# --- Price/Volume effects ---


class EffectsSettings(_StrictModel):
    """Reconciliation tolerances and commentary ratios for the Price/Volume split."""

    coherence_tolerance_pct: float = Field(
        1.0, gt=0.0, description="Max gap between Price+Volume and real variation, in % of variation"
    )
    absolute_tolerance: float = Field(
        0.01, ge=0.0, description="Max absolute gap when the real variation is exactly 0"
    )
    annual_bonus_threshold: float = Field(
        0.30, gt=0.0, le=1.0, description="Exceptional bonus / gross payroll ratio flagged as 13th month"
    )
    dominance_ratio: float = Field(3.0, gt=1.0)
    exceptional_variation_pct: float = Field(50.0, gt=0.0)
    balance_ratio: float = Field(0.3, gt=0.0, lt=1.0)


# --- Demographics ---


class DemographicsSettings(_StrictModel):
    """Alert thresholds for the demographic advisory functions."""

    aging_mean_age: float = Field(50.0, gt=0.0)
    young_mean_age: float = Field(30.0, gt=0.0)
    succession_over_55_pct: float = Field(30.0, ge=0.0, le=100.0)
    high_turnover_under_1_pct: float = Field(40.0, ge=0.0, le=100.0)
    loyalty_over_10_pct: float = Field(50.0, ge=0.0, le=100.0)
    gender_gap_alert_pts: float = Field(30.0, ge=0.0, le=100.0)
    gender_gap_balanced_pts: float = Field(10.0, ge=0.0, le=100.0)
    equality_index_alert: float = Field(75.0, ge=0.0, le=100.0)
    balanced_25_35_pct: float = Field(30.0, ge=0.0, le=100.0)
    balanced_35_45_pct: float = Field(25.0, ge=0.0, le=100.0)
    pyramid_medium_ratio: float = Field(1.5, gt=0.0)
    pyramid_high_ratio: float = Field(2.0, gt=0.0)

    @model_validator(mode="after")
    def check_pyramid_ratios(self) -> "DemographicsSettings":
        """Validate that the high-risk ratio is not below the medium-risk ratio."""
        if self.pyramid_high_ratio < self.pyramid_medium_ratio:
            raise ValueError(
                f"pyramid_high_ratio ({self.pyramid_high_ratio}) must be >= "
                f"pyramid_medium_ratio ({self.pyramid_medium_ratio})"
            )
        return self


# --- Workforce ---


class WorkforceBenchmark(_StrictModel):
    """Annual sector averages."""

    turnover_annual_pct: float = Field(..., ge=0.0)
    pct_permanent: float = Field(..., ge=0.0, le=100.0)


def _default_workforce_benchmarks() -> Dict[str, WorkforceBenchmark]:
    return {
        "industry": WorkforceBenchmark(turnover_annual_pct=12.0, pct_permanent=85.0),
        "services": WorkforceBenchmark(turnover_annual_pct=18.0, pct_permanent=70.0),
        "retail": WorkforceBenchmark(turnover_annual_pct=25.0, pct_permanent=60.0),
        "tech": WorkforceBenchmark(turnover_annual_pct=15.0, pct_permanent=80.0),
    }


class WorkforceSettings(_StrictModel):
    """Movement assumptions and thresholds for workforce analysis (monthly rates)."""

    voluntary_exit_share: float = Field(
        0.6,
        ge=0.0,
        le=1.0,
        description="Share of exits without a recorded reason counted as voluntary",
    )
    critical_turnover_pct: float = Field(10.0, ge=0.0)
    high_turnover_pct: float = Field(5.0, ge=0.0)
    moderate_turnover_pct: float = Field(2.0, ge=0.0)
    low_turnover_pct: float = Field(1.0, ge=0.0)
    high_precarity_pct: float = Field(40.0, ge=0.0, le=100.0)
    moderate_precarity_pct: float = Field(25.0, ge=0.0, le=100.0)
    part_time_fte_ratio: float = Field(0.85, ge=0.0)
    full_time_fte_ratio: float = Field(0.95, ge=0.0)
    training_contracts_pct: float = Field(15.0, ge=0.0, le=100.0)
    majority_permanent_pct: float = Field(80.0, ge=0.0, le=100.0)
    benchmarks: Dict[str, WorkforceBenchmark] = Field(default_factory=_default_workforce_benchmarks)


# --- Absence ---


def _default_absence_benchmarks() -> Dict[str, float]:
    return {"industry": 5.5, "services": 4.5, "retail": 5.0, "tech": 3.5}


class AbsenceSettings(_StrictModel):
    """Validation bounds and thresholds for absenteeism analysis."""

    max_duration_days: int = Field(365, ge=1)
    critical_rate_pct: float = Field(10.0, ge=0.0)
    high_rate_pct: float = Field(7.0, ge=0.0)
    normal_rate_pct: float = Field(4.0, ge=0.0)
    long_duration_days: float = Field(14.0, ge=0.0)
    short_duration_days: float = Field(2.0, ge=0.0)
    high_frequency: float = Field(2.0, ge=0.0)
    sickness_share_alert_pct: float = Field(80.0, ge=0.0, le=100.0)
    accident_share_alert_pct: float = Field(20.0, ge=0.0, le=100.0)
    pattern_fragmented_frequency: float = Field(1.5, ge=0.0)
    pattern_long_duration_days: float = Field(10.0, ge=0.0)
    pattern_sickness_ratio: float = Field(0.8, ge=0.0, le=1.0)
    pattern_accident_ratio: float = Field(0.15, ge=0.0, le=1.0)
    benchmarks: Dict[str, float] = Field(default_factory=_default_absence_benchmarks)


# --- Top-level ---


class AnalyticsConfig(_StrictModel):
    """Complete analytics configuration; every section is optional in YAML."""

    payroll: PayrollSettings = Field(default_factory=PayrollSettings)
    effects: EffectsSettings = Field(default_factory=EffectsSettings)
    demographics: DemographicsSettings = Field(default_factory=DemographicsSettings)
    workforce: WorkforceSettings = Field(default_factory=WorkforceSettings)
    absence: AbsenceSettings = Field(default_factory=AbsenceSettings)


DEFAULT_CONFIG = AnalyticsConfig()


def resolve_config(config: Optional[AnalyticsConfig]) -> AnalyticsConfig:
    return DEFAULT_CONFIG if config is None else config
