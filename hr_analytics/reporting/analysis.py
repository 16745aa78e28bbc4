# hr_analytics/reporting/analysis.py
"""
Advisory layer: turns computed metric snapshots into alert and insight
strings, risk levels, stability scores and sector benchmark positions.

Every function here is a pure function of a metrics object and the
configured thresholds. None of them alters the figures they read.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from hr_analytics.config.models import AnalyticsConfig, resolve_config
from hr_analytics.state.metrics import (
    AbsenceMetrics,
    DemographicsMetrics,
    PayrollMetrics,
    WorkforceMetrics,
)
from hr_analytics.utils.stats import safe_divide
from hr_analytics.utils.status_enums import Sector, normalize_sector

logger = logging.getLogger(__name__)


class RiskLevel(Enum):
    NONE = "none"
    MEDIUM = "medium"
    HIGH = "high"


class PayrollLevel(Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


class WorkforceTrend(Enum):
    STABLE = "stable"
    GROWTH = "growth"
    DECLINE = "decline"
    TURBULENT = "turbulent"


class StabilityLevel(Enum):
    UNSTABLE = "unstable"
    FRAGILE = "fragile"
    STABLE = "stable"
    VERY_STABLE = "very stable"


class AbsenceLevel(Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    CRITICAL = "critical"


class BenchmarkPosition(Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    CONCERNING = "concerning"


@dataclass(frozen=True)
class Advisory:
    """Alert and insight strings produced for one metrics snapshot."""
    alerts: List[str] = field(default_factory=list)
    insights: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class PyramidRisk:
    level: RiskLevel
    young_pct: float
    senior_pct: float
    message: str

    @property
    def at_risk(self) -> bool:
        return self.level is not RiskLevel.NONE


@dataclass(frozen=True)
class PayrollAnalysis:
    level: PayrollLevel
    insights: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class WorkforceAnalysis:
    trend: WorkforceTrend
    alerts: List[str] = field(default_factory=list)
    insights: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class StabilityScore:
    score: int
    level: StabilityLevel
    factors: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class WorkforceBenchmarkComparison:
    sector: Sector
    turnover_position: BenchmarkPosition
    permanent_position: BenchmarkPosition
    message: str


@dataclass(frozen=True)
class AbsenceAnalysis:
    level: AbsenceLevel
    alerts: List[str] = field(default_factory=list)
    insights: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class AbsencePatterns:
    patterns: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class AbsenceBenchmarkComparison:
    sector: Sector
    position: BenchmarkPosition
    message: str


# ---------------------------------------------------------------------------
# Demographics
# ---------------------------------------------------------------------------


def analyze_demographics(
    metrics: DemographicsMetrics, config: Optional[AnalyticsConfig] = None
) -> Advisory:
    """
    Alerts and insights for a demographic snapshot.

    Thresholds (configurable): mean age above 50 is an ageing workforce, more
    than 30% over 55 calls for succession planning, more than 40% under one
    year of seniority hints at an integration problem, and a gender gap above
    30 points is a diversity alert while one under 10 points is a positive
    insight. Gender messages are skipped when no gender is recorded.
    """
    settings = resolve_config(config).demographics
    alerts: List[str] = []
    insights: List[str] = []

    if metrics.active_headcount == 0:
        return Advisory()

    if metrics.mean_age > settings.aging_mean_age:
        alerts.append(
            f"Ageing workforce (mean age {metrics.mean_age:.0f}): plan for renewal"
        )
    elif metrics.mean_age < settings.young_mean_age:
        insights.append(
            f"Young workforce (mean age {metrics.mean_age:.0f}): dynamism and innovation"
        )

    if metrics.pct_age_over_55 > settings.succession_over_55_pct:
        alerts.append(
            f"{metrics.pct_age_over_55:.0f}% of staff are over 55: succession plan needed"
        )

    if metrics.pct_seniority_under_1 > settings.high_turnover_under_1_pct:
        alerts.append(
            f"High rotation ({metrics.pct_seniority_under_1:.0f}% under 1 year): "
            "check onboarding and culture"
        )

    if metrics.pct_seniority_over_10 > settings.loyalty_over_10_pct:
        insights.append(
            f"Strong loyalty ({metrics.pct_seniority_over_10:.0f}% over 10 years): "
            "expertise and stability"
        )

    if metrics.pct_male + metrics.pct_female > 0:
        gender_gap = abs(metrics.pct_male - metrics.pct_female)
        split = f"{metrics.pct_male:.0f}% M / {metrics.pct_female:.0f}% F"
        if gender_gap > settings.gender_gap_alert_pts:
            alerts.append(f"Strong gender imbalance ({split}): diversity actions recommended")
        elif gender_gap < settings.gender_gap_balanced_pts:
            insights.append(f"Excellent gender balance ({split})")

    if metrics.equality_index is not None and metrics.equality_index < settings.equality_index_alert:
        alerts.append(
            f"Low gender equality index ({metrics.equality_index:.0f}/100): action plan required"
        )

    if (
        metrics.pct_age_25_35 > settings.balanced_25_35_pct
        and metrics.pct_age_35_45 > settings.balanced_35_45_pct
    ):
        insights.append("Well-balanced population between juniors and seniors")

    return Advisory(alerts=alerts, insights=insights)


def detect_pyramid_inversion(
    metrics: DemographicsMetrics, config: Optional[AnalyticsConfig] = None
) -> PyramidRisk:
    """Compare the senior share (45+) with the young share (under 35) of the age pyramid."""
    settings = resolve_config(config).demographics
    young = metrics.pct_age_under_25 + metrics.pct_age_25_35
    senior = metrics.pct_age_45_55 + metrics.pct_age_over_55

    if senior > young * settings.pyramid_high_ratio:
        level = RiskLevel.HIGH
        message = f"Critical inverted pyramid: {senior:.0f}% seniors vs {young:.0f}% young"
    elif senior > young * settings.pyramid_medium_ratio:
        level = RiskLevel.MEDIUM
        message = f"Ageing pyramid: {senior:.0f}% seniors vs {young:.0f}% young"
    else:
        level = RiskLevel.NONE
        message = f"Balanced pyramid: {young:.0f}% young, {senior:.0f}% seniors"

    return PyramidRisk(level=level, young_pct=young, senior_pct=senior, message=message)


# ---------------------------------------------------------------------------
# Payroll
# ---------------------------------------------------------------------------


def analyze_payroll(metrics: PayrollMetrics, config: Optional[AnalyticsConfig] = None) -> PayrollAnalysis:
    """Cost level and insights for a payroll snapshot; no data gives NORMAL with no insight."""
    settings = resolve_config(config).payroll
    insights: List[str] = []

    if not metrics.has_data:
        return PayrollAnalysis(level=PayrollLevel.NORMAL)

    if metrics.variable_pay_share > settings.high_variable_share_pct:
        insights.append(
            f"High variable pay share ({metrics.variable_pay_share:.1f}%): incentive-driven pay policy"
        )
    elif metrics.variable_pay_share < settings.low_variable_share_pct:
        insights.append(
            f"Low variable pay share ({metrics.variable_pay_share:.1f}%): mostly fixed pay"
        )

    if metrics.charges_rate > settings.high_charges_rate_pct:
        insights.append(f"High charges rate ({metrics.charges_rate:.1f}%): review possible optimisations")
    elif metrics.charges_rate < settings.low_charges_rate_pct:
        insights.append(f"Optimised charges rate ({metrics.charges_rate:.1f}%)")

    if metrics.exceptional_bonus_total > metrics.base_salary_total * settings.exceptional_bonus_base_ratio:
        insights.append("Large exceptional bonuses (probable 13th month or annual bonus)")

    level = PayrollLevel.NORMAL
    if metrics.mean_cost_per_fte < settings.low_cost_per_fte:
        level = PayrollLevel.LOW
        insights.append(
            f"Low average cost ({metrics.mean_cost_per_fte:.0f}€/FTE): junior profiles or part-time"
        )
    elif metrics.mean_cost_per_fte > settings.high_cost_per_fte:
        level = PayrollLevel.HIGH
        insights.append(
            f"High average cost ({metrics.mean_cost_per_fte:.0f}€/FTE): senior or executive profiles"
        )

    return PayrollAnalysis(level=level, insights=insights)


# ---------------------------------------------------------------------------
# Workforce
# ---------------------------------------------------------------------------


def analyze_workforce(metrics: WorkforceMetrics, config: Optional[AnalyticsConfig] = None) -> WorkforceAnalysis:
    """
    Trend, alerts and insights for a workforce snapshot (monthly turnover).

    The trend is TURBULENT above the critical turnover, then overridden by
    GROWTH or DECLINE whenever hires and exits do not cancel out.
    """
    settings = resolve_config(config).workforce
    alerts: List[str] = []
    insights: List[str] = []
    trend = WorkforceTrend.STABLE

    if metrics.headcount_end == 0 and metrics.exits == 0 and metrics.hires == 0:
        return WorkforceAnalysis(trend=trend)

    turnover = metrics.turnover_rate
    if turnover > settings.critical_turnover_pct:
        trend = WorkforceTrend.TURBULENT
        alerts.append(f"Critical turnover ({turnover:.1f}% monthly): urgent retention actions")
    elif turnover > settings.high_turnover_pct:
        alerts.append(f"High turnover ({turnover:.1f}% monthly): workplace climate survey recommended")
    elif turnover < settings.low_turnover_pct:
        insights.append(f"Low turnover ({turnover:.1f}% monthly): excellent stability")

    net = metrics.hires - metrics.exits
    if net > 0:
        trend = WorkforceTrend.GROWTH
        insights.append(f"Growth: {net} net hire(s) this month")
    elif net < 0:
        trend = WorkforceTrend.DECLINE
        alerts.append(f"Decline: {abs(net)} net departure(s)")

    if metrics.headcount_end > 0:
        if metrics.pct_precarity > settings.high_precarity_pct:
            alerts.append(
                f"High precarity ({metrics.pct_precarity:.0f}% non-permanent): potential instability"
            )
        elif metrics.pct_precarity > settings.moderate_precarity_pct:
            insights.append(
                f"Moderate precarity ({metrics.pct_precarity:.0f}% non-permanent): flexibility vs stability"
            )
        else:
            insights.append(f"Stable contracts ({metrics.pct_permanent:.0f}% permanent)")

        fte_ratio = safe_divide(metrics.fte_end, metrics.headcount_end)
        if fte_ratio < settings.part_time_fte_ratio:
            alerts.append(f"High share of part-time work (FTE ratio {fte_ratio:.2f})")
        elif fte_ratio > settings.full_time_fte_ratio:
            insights.append(f"Near-universal full-time work (FTE ratio {fte_ratio:.2f})")

        training_share = metrics.pct_apprenticeship + metrics.pct_internship
        if training_share > settings.training_contracts_pct:
            insights.append(
                f"Active training policy ({training_share:.0f}% apprentices/interns)"
            )

    return WorkforceAnalysis(trend=trend, alerts=alerts, insights=insights)


def calculate_stability(metrics: WorkforceMetrics, config: Optional[AnalyticsConfig] = None) -> StabilityScore:
    """0-100 stability score: turnover and precarity penalties, bonus for a permanent majority."""
    settings = resolve_config(config).workforce
    factors: List[str] = []
    score = 100

    if metrics.turnover_rate > settings.critical_turnover_pct:
        score -= 30
        factors.append("Very high turnover (-30)")
    elif metrics.turnover_rate > settings.high_turnover_pct:
        score -= 20
        factors.append("High turnover (-20)")
    elif metrics.turnover_rate > settings.moderate_turnover_pct:
        score -= 10
        factors.append("Moderate turnover (-10)")

    if metrics.pct_precarity > settings.high_precarity_pct:
        score -= 25
        factors.append("High precarity (-25)")
    elif metrics.pct_precarity > settings.moderate_precarity_pct:
        score -= 15
        factors.append("Moderate precarity (-15)")

    if metrics.pct_permanent > settings.majority_permanent_pct:
        factors.append("Permanent majority (+10)")
        score = min(100, score + 10)

    score = max(0, min(100, score))
    if score >= 80:
        level = StabilityLevel.VERY_STABLE
    elif score >= 60:
        level = StabilityLevel.STABLE
    elif score >= 40:
        level = StabilityLevel.FRAGILE
    else:
        level = StabilityLevel.UNSTABLE

    return StabilityScore(score=score, level=level, factors=factors)


def compare_workforce_benchmark(
    metrics: WorkforceMetrics,
    sector: Union[str, Sector] = Sector.SERVICES,
    config: Optional[AnalyticsConfig] = None,
) -> WorkforceBenchmarkComparison:
    """Position annualised turnover and permanent-contract share against sector averages."""
    settings = resolve_config(config).workforce
    sector = normalize_sector(sector)
    bench = settings.benchmarks[sector.value]

    turnover = metrics.turnover_rate_annualized or metrics.turnover_rate * 12
    turnover_gap = turnover - bench.turnover_annual_pct
    if turnover_gap < -5:
        turnover_position = BenchmarkPosition.EXCELLENT
    elif turnover_gap < 0:
        turnover_position = BenchmarkPosition.GOOD
    elif turnover_gap < 5:
        turnover_position = BenchmarkPosition.AVERAGE
    else:
        turnover_position = BenchmarkPosition.CONCERNING

    permanent_gap = metrics.pct_permanent - bench.pct_permanent
    if permanent_gap > 10:
        permanent_position = BenchmarkPosition.EXCELLENT
    elif permanent_gap > 0:
        permanent_position = BenchmarkPosition.GOOD
    elif permanent_gap > -10:
        permanent_position = BenchmarkPosition.AVERAGE
    else:
        permanent_position = BenchmarkPosition.CONCERNING

    message = (
        f"Sector {sector.value}: turnover {turnover_position.value} "
        f"({turnover:.1f}% annualised vs {bench.turnover_annual_pct:g}% benchmark), "
        f"permanent contracts {permanent_position.value} "
        f"({metrics.pct_permanent:.0f}% vs {bench.pct_permanent:g}%)"
    )
    return WorkforceBenchmarkComparison(
        sector=sector,
        turnover_position=turnover_position,
        permanent_position=permanent_position,
        message=message,
    )


# ---------------------------------------------------------------------------
# Absence
# ---------------------------------------------------------------------------


def analyze_absence(metrics: AbsenceMetrics, config: Optional[AnalyticsConfig] = None) -> AbsenceAnalysis:
    settings = resolve_config(config).absence
    alerts: List[str] = []
    insights: List[str] = []
    rate = metrics.absenteeism_rate

    if rate > settings.critical_rate_pct:
        level = AbsenceLevel.CRITICAL
        alerts.append(f"Critical absenteeism rate ({rate:.1f}%): urgent action required")
    elif rate > settings.high_rate_pct:
        level = AbsenceLevel.HIGH
        alerts.append(f"High absenteeism rate ({rate:.1f}%): investigation recommended")
    elif rate > settings.normal_rate_pct:
        level = AbsenceLevel.NORMAL
        insights.append(f"Absenteeism rate within norms ({rate:.1f}%)")
    else:
        level = AbsenceLevel.LOW
        insights.append(f"Low absenteeism rate ({rate:.1f}%): excellent organisational health")

    if metrics.mean_absence_duration > settings.long_duration_days:
        alerts.append(
            f"Long average absence ({metrics.mean_absence_duration:.1f} days): possible long-term leave"
        )
    elif metrics.mean_absence_duration < settings.short_duration_days and metrics.absence_count > 0:
        insights.append(
            f"Short absences on average ({metrics.mean_absence_duration:.1f} day): fragmented absenteeism"
        )

    if metrics.absence_frequency > settings.high_frequency:
        alerts.append(f"High frequency ({metrics.absence_frequency:.1f} absences per employee)")

    if metrics.absence_days > 0:
        sickness_share = metrics.sickness_days / metrics.absence_days * 100
        if sickness_share > settings.sickness_share_alert_pct:
            alerts.append(f"{sickness_share:.0f}% of absence days are sickness: review working conditions")

        accident_share = metrics.work_accident_days / metrics.absence_days * 100
        if accident_share > settings.accident_share_alert_pct:
            alerts.append(f"{accident_share:.0f}% work accidents: safety audit needed")

        if metrics.training_days > 0:
            training_share = metrics.training_days / metrics.absence_days * 100
            insights.append(
                f"{metrics.training_days} training day(s) ({training_share:.0f}% of absences): "
                "investment in development"
            )

    return AbsenceAnalysis(level=level, alerts=alerts, insights=insights)


def detect_absence_patterns(
    metrics: AbsenceMetrics, config: Optional[AnalyticsConfig] = None
) -> AbsencePatterns:
    """Recognise fragmented, long-term, sickness-dominated and accident-heavy absenteeism."""
    settings = resolve_config(config).absence
    patterns: List[str] = []
    recommendations: List[str] = []

    if (
        metrics.mean_absence_duration < settings.short_duration_days
        and metrics.absence_frequency > settings.pattern_fragmented_frequency
    ):
        patterns.append("Fragmented absenteeism: short but frequent absences")
        recommendations.append("Analyse absences by weekday (Mondays/Fridays?)")
        recommendations.append("Hold individual reviews with managers")

    if (
        metrics.mean_absence_duration > settings.pattern_long_duration_days
        and metrics.absence_count < metrics.absent_employee_count * 1.5
    ):
        patterns.append("Long absences: a few cases of extended leave")
        recommendations.append("Medical follow-up and HR support")
        recommendations.append("Check workload and burnout prevention")

    sickness_ratio = safe_divide(metrics.sickness_absence_days, metrics.absence_days)
    if sickness_ratio > settings.pattern_sickness_ratio:
        patterns.append(f"Sickness predominance: {sickness_ratio * 100:.0f}% of absence days")
        recommendations.append("Audit working conditions (ergonomics, climate)")
        recommendations.append("Health prevention actions")

    if metrics.absence_days > 0 and (
        metrics.work_accident_days > metrics.absence_days * settings.pattern_accident_ratio
    ):
        patterns.append("Significant work accidents")
        recommendations.append("Urgent safety audit")
        recommendations.append("Reinforce safety training")

    return AbsencePatterns(patterns=patterns, recommendations=recommendations)


def compare_absence_benchmark(
    metrics: AbsenceMetrics,
    sector: Union[str, Sector] = Sector.SERVICES,
    config: Optional[AnalyticsConfig] = None,
) -> AbsenceBenchmarkComparison:
    settings = resolve_config(config).absence
    sector = normalize_sector(sector)
    benchmark = settings.benchmarks[sector.value]
    rate = metrics.absenteeism_rate
    gap = rate - benchmark

    if gap < -1:
        position = BenchmarkPosition.EXCELLENT
        message = f"Excellent: {rate:.1f}% vs {benchmark:g}% ({sector.value} benchmark)"
    elif gap < 0.5:
        position = BenchmarkPosition.GOOD
        message = f"Good: {rate:.1f}% close to the {sector.value} benchmark ({benchmark:g}%)"
    elif gap < 2:
        position = BenchmarkPosition.AVERAGE
        message = f"Average: {rate:.1f}% above the {sector.value} benchmark ({benchmark:g}%)"
    else:
        position = BenchmarkPosition.CONCERNING
        message = f"Concerning: {rate:.1f}% well above the {sector.value} benchmark ({benchmark:g}%)"

    return AbsenceBenchmarkComparison(sector=sector, position=position, message=message)
