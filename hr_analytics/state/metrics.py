"""
Immutable metric snapshots returned by the calculators.

Every snapshot type can be built in its neutral form with ``default()``; the
neutral form is what calculators return for missing data instead of raising.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


class _Snapshot:
    """Serialisation helpers shared by the snapshot dataclasses."""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def default(cls, **overrides):
        """Neutral snapshot: every numeric field 0, optional fields None."""
        return cls(**overrides)


@dataclass(frozen=True)
class PayrollMetrics(_Snapshot):
    """Payroll aggregate for one establishment and period."""

    # Totals
    gross_payroll: float = 0.0
    loaded_payroll: float = 0.0
    total_employer_cost: float = 0.0

    # Means & medians
    mean_base_salary: float = 0.0
    median_base_salary: float = 0.0
    mean_cost_per_fte: float = 0.0
    median_cost_per_fte: float = 0.0

    # Component totals
    base_salary_total: float = 0.0
    fixed_bonus_total: float = 0.0
    variable_bonus_total: float = 0.0
    exceptional_bonus_total: float = 0.0
    overtime_total: float = 0.0
    benefits_in_kind_total: float = 0.0
    allowances_total: float = 0.0
    social_contributions_total: float = 0.0

    # Ratios (percent)
    variable_pay_share: float = 0.0
    charges_rate: float = 0.0

    # Bases and bookkeeping
    total_fte: float = 0.0
    record_count: int = 0
    paid_employee_count: int = 0
    excluded_record_count: int = 0
    period: Optional[str] = None

    @property
    def has_data(self) -> bool:
        return self.record_count > 0


@dataclass(frozen=True)
class DemographicsMetrics(_Snapshot):
    """Roster demographics for one establishment and period."""

    # Age (years)
    mean_age: float = 0.0
    median_age: float = 0.0

    # Seniority (months)
    mean_seniority_months: float = 0.0
    median_seniority_months: float = 0.0

    # Gender
    pct_male: float = 0.0
    pct_female: float = 0.0
    equality_index: Optional[float] = None

    # Age pyramid (% of active headcount)
    pct_age_under_25: float = 0.0
    pct_age_25_35: float = 0.0
    pct_age_35_45: float = 0.0
    pct_age_45_55: float = 0.0
    pct_age_over_55: float = 0.0

    # Seniority pyramid (% of active headcount)
    pct_seniority_under_1: float = 0.0
    pct_seniority_1_3: float = 0.0
    pct_seniority_3_5: float = 0.0
    pct_seniority_5_10: float = 0.0
    pct_seniority_over_10: float = 0.0

    active_headcount: int = 0

    @property
    def age_distribution(self) -> Dict[str, float]:
        return {
            "<25": self.pct_age_under_25,
            "25-35": self.pct_age_25_35,
            "35-45": self.pct_age_35_45,
            "45-55": self.pct_age_45_55,
            "55+": self.pct_age_over_55,
        }

    @property
    def seniority_distribution(self) -> Dict[str, float]:
        return {
            "<1": self.pct_seniority_under_1,
            "1-3": self.pct_seniority_1_3,
            "3-5": self.pct_seniority_3_5,
            "5-10": self.pct_seniority_5_10,
            "10+": self.pct_seniority_over_10,
        }


@dataclass(frozen=True)
class PayrollEffects(_Snapshot):
    """Price/Volume decomposition of the payroll variation between two periods.

    Derivable at any time from two PayrollMetrics; never stored as the source
    of truth.
    """

    # Bases
    current_avg_cost: float = 0.0
    comparison_avg_cost: float = 0.0
    current_fte: float = 0.0
    comparison_fte: float = 0.0
    current_gross: float = 0.0
    comparison_gross: float = 0.0

    # Effects
    price_effect: float = 0.0
    volume_effect: float = 0.0

    # Variation
    variation: float = 0.0
    variation_pct: float = 0.0

    # Reconciliation check
    coherence_ok: bool = True
    coherence_gap: float = 0.0
    coherence_gap_pct: float = 0.0

    current_period: Optional[str] = None
    comparison_period: Optional[str] = None


@dataclass(frozen=True)
class WorkforceMetrics(_Snapshot):
    """Headcount, movements, turnover and contract mix for one period."""

    # Headcount
    headcount_start: int = 0
    headcount_end: int = 0
    headcount_average: float = 0.0

    # FTE
    fte_start: float = 0.0
    fte_end: float = 0.0
    fte_average: float = 0.0

    # Movements
    hires: int = 0
    exits: int = 0
    voluntary_exits: int = 0
    involuntary_exits: int = 0

    # Turnover (percent); turnover_rate is the monthly figure
    turnover_rate: float = 0.0
    voluntary_turnover_rate: float = 0.0
    turnover_rate_monthly: float = 0.0
    turnover_rate_annualized: float = 0.0
    voluntary_turnover_rate_monthly: float = 0.0
    voluntary_turnover_rate_annualized: float = 0.0

    # Contract mix
    permanent_count: int = 0
    fixed_term_count: int = 0
    apprenticeship_count: int = 0
    internship_count: int = 0
    temp_agency_count: int = 0

    pct_permanent: float = 0.0
    pct_fixed_term: float = 0.0
    pct_apprenticeship: float = 0.0
    pct_internship: float = 0.0
    pct_precarity: float = 0.0


@dataclass(frozen=True)
class AbsenceMetrics(_Snapshot):
    """Absenteeism indicators for one period."""

    # Rates (percent)
    absenteeism_rate: float = 0.0
    sickness_absenteeism_rate: float = 0.0

    # Volumes
    absence_days: int = 0
    sickness_absence_days: int = 0
    absence_count: int = 0
    absent_employee_count: int = 0

    # Averages
    mean_absence_duration: float = 0.0
    absence_frequency: float = 0.0

    # Breakdown (days)
    sickness_days: int = 0
    work_accident_days: int = 0
    paid_leave_days: int = 0
    training_days: int = 0
    other_days: int = 0

    working_days: int = 0
