# hr_analytics/reporting/waterfall.py
"""
Chart-ready waterfall built from a PayrollEffects object:
comparison total -> price effect -> volume effect -> current total.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from hr_analytics.state.metrics import PayrollEffects, PayrollMetrics
from hr_analytics.utils.stats import MONEY_PLACES, round_half_up

STEP_TOTAL = "total"
STEP_DELTA = "delta"


@dataclass(frozen=True)
class WaterfallStep:
    label: str
    value: float
    start: float
    end: float
    kind: str = STEP_DELTA


@dataclass(frozen=True)
class WaterfallData:
    steps: List[WaterfallStep]
    effects: PayrollEffects
    commentary: List[str] = field(default_factory=list)
    bonus_note: Optional[str] = None

    @property
    def reconciles(self) -> bool:
        return self.effects.coherence_ok

    def to_dict(self) -> Dict[str, Any]:
        return {
            "steps": [asdict(step) for step in self.steps],
            "effects": self.effects.to_dict(),
            "commentary": list(self.commentary),
            "bonus_note": self.bonus_note,
        }


def build_waterfall(
    effects: PayrollEffects,
    commentary: Optional[List[str]] = None,
    bonus_note: Optional[str] = None,
    current: Optional[PayrollMetrics] = None,
) -> WaterfallData:
    """
    Lay the effects out as four consecutive bars.

    The price bar starts at the comparison total and the volume bar at the end
    of the price bar. The closing bar is the current total as reported, so any
    reconciliation gap shows up between the volume bar and the closing bar.

    Neutral effects (first period, or an unusable snapshot) carry no current
    total; pass ``current`` so the closing bar still shows the payroll of the
    period.
    """
    comparison_total = effects.comparison_gross
    after_price = round_half_up(comparison_total + effects.price_effect, MONEY_PLACES)
    after_volume = round_half_up(after_price + effects.volume_effect, MONEY_PLACES)
    closing_total = effects.current_gross
    closing_period = effects.current_period
    if current is not None and not closing_total:
        closing_total = round_half_up(current.gross_payroll, MONEY_PLACES)
        closing_period = closing_period or current.period

    steps = [
        WaterfallStep(
            label=f"Payroll {effects.comparison_period or 'comparison'}",
            value=comparison_total,
            start=0.0,
            end=comparison_total,
            kind=STEP_TOTAL,
        ),
        WaterfallStep(
            label="Price effect",
            value=effects.price_effect,
            start=comparison_total,
            end=after_price,
        ),
        WaterfallStep(
            label="Volume effect",
            value=effects.volume_effect,
            start=after_price,
            end=after_volume,
        ),
        WaterfallStep(
            label=f"Payroll {closing_period or 'current'}",
            value=closing_total,
            start=0.0,
            end=closing_total,
            kind=STEP_TOTAL,
        ),
    ]
    return WaterfallData(
        steps=steps,
        effects=effects,
        commentary=list(commentary or []),
        bonus_note=bonus_note,
    )
