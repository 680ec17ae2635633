# src/flipcheck/analysis/scenarios.py
from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from flipcheck.analysis.costs import (
    acquisition_costs,
    financing_costs,
    holding_costs,
    rehab_costs,
    selling_costs,
)
from flipcheck.analysis.profitability import (
    DEFAULT_MARKET_SCORE,
    DEFAULT_RISK_SCORE,
    assemble_metrics,
    evaluate_deal,
)
from flipcheck.domain.deal import Deal
from flipcheck.domain.metrics import DealMetrics
from flipcheck.domain.scenarios import (
    SCENARIO_PRESETS,
    ProfitBand,
    RiskScenarioImpact,
    ScenarioAdjustment,
    ScenarioResult,
    SensitivityRow,
    TimelinePoint,
    WorstCaseSimulation,
    get_preset,
)

DAYS_PER_MONTH = 30
MAJOR_REPAIR_COST = 20_000.0
ARV_SENSITIVITY_STEPS = (-10.0, -5.0, 0.0, 5.0, 10.0)


def adjusted_holding_months(deal: Deal, adjustment: ScenarioAdjustment) -> float:
    return (
        deal.holding_months
        + adjustment.holding_period_adjustment
        + adjustment.permit_delay_days / DAYS_PER_MONTH
    )


def apply_scenario(
    deal: Deal,
    adjustment: ScenarioAdjustment,
    *,
    name: str = "custom",
    default_risk_score: float = DEFAULT_RISK_SCORE,
    default_market_score: float = DEFAULT_MARKET_SCORE,
) -> ScenarioResult:
    """
    Re-run the full cost stack under a scenario delta.

    - ARV scales by market appreciation; selling costs follow the same percent
    - rehab uses the adjustment's overrun override (None keeps the deal's)
    - holding + financing accrue over months + adjustment + permit days / 30
    - acquisition is unaffected

    The base preset reproduces evaluate_deal() exactly.
    """
    appreciation = adjustment.market_appreciation_percent
    months = adjusted_holding_months(deal, adjustment)
    arv = deal.arv * (1 + appreciation / 100)

    metrics = assemble_metrics(
        deal,
        arv=arv,
        acquisition=acquisition_costs(deal),
        financing=financing_costs(deal, months),
        rehab=rehab_costs(deal, adjustment.rehab_overrun_percent),
        holding=holding_costs(deal, months),
        selling=selling_costs(deal, appreciation),
        default_risk_score=default_risk_score,
        default_market_score=default_market_score,
    )

    return ScenarioResult(
        name=name,
        adjustment=adjustment,
        arv=arv,
        holding_months=months,
        metrics=metrics,
    )


def apply_preset(deal: Deal, preset: str, **kwargs) -> ScenarioResult:
    return apply_scenario(deal, get_preset(preset), name=preset.strip().lower(), **kwargs)


def run_presets(
    deal: Deal,
    presets: Iterable[str] | None = None,
    **kwargs,
) -> Dict[str, ScenarioResult]:
    names = list(presets) if presets is not None else list(SCENARIO_PRESETS)
    return {n: apply_preset(deal, n, **kwargs) for n in names}


def simulate_worst_case(deal: Deal, **kwargs) -> WorstCaseSimulation:
    """
    Four independent stress tests, reported as net profit:

      market_crash          ARV -20%
      major_repair          an extra $20k of rehab on top of the planned overrun
      extended_timeline     +6 months
      financing_fallthrough buyer financing collapses, ~4 months to resell
    """
    crash = apply_scenario(deal, ScenarioAdjustment(market_appreciation_percent=-20), **kwargs)

    base_rehab = deal.rehab_costs
    repair_percent = MAJOR_REPAIR_COST / base_rehab * 100 if base_rehab > 0 else 0.0
    repair = apply_scenario(
        deal,
        ScenarioAdjustment(rehab_overrun_percent=deal.rehab_overrun_percent + repair_percent),
        **kwargs,
    )

    delay = apply_scenario(deal, ScenarioAdjustment(holding_period_adjustment=6), **kwargs)
    fallthrough = apply_scenario(deal, ScenarioAdjustment(holding_period_adjustment=4), **kwargs)

    return WorstCaseSimulation(
        market_crash=crash.net_profit,
        major_repair=repair.net_profit,
        extended_timeline=delay.net_profit,
        financing_fallthrough=fallthrough.net_profit,
    )


def simulate_risk_scenario(
    deal: Deal,
    metrics: DealMetrics,
    permit_delay_months: float,
    market_decline_percent: float,
    rehab_overrun_percent: float,
    **kwargs,
) -> RiskScenarioImpact:
    adjustment = ScenarioAdjustment(
        rehab_overrun_percent=rehab_overrun_percent,
        holding_period_adjustment=0,
        market_appreciation_percent=-market_decline_percent,
        permit_delay_days=permit_delay_months * DAYS_PER_MONTH,
    )
    result = apply_scenario(deal, adjustment, **kwargs)
    return RiskScenarioImpact(
        profit=result.net_profit,
        impact=metrics.net_profit - result.net_profit,
    )


def timeline_projections(deal: Deal, max_months: int = 12, **kwargs) -> List[TimelinePoint]:
    """Net profit if the flip closes in month 1, 2, ... max_months."""
    points: List[TimelinePoint] = []
    for month in range(1, max_months + 1):
        adjustment = ScenarioAdjustment(holding_period_adjustment=month - deal.holding_months)
        res = apply_scenario(deal, adjustment, **kwargs)
        points.append(TimelinePoint(month=month, profit=res.net_profit))
    return points


def _profit_band(net_profit: float) -> ProfitBand:
    if net_profit > 30_000:
        return "strong"
    if net_profit > 15_000:
        return "good"
    if net_profit > 0:
        return "thin"
    return "loss"


def arv_sensitivity(
    deal: Deal,
    changes: Sequence[float] = ARV_SENSITIVITY_STEPS,
    **kwargs,
) -> List[SensitivityRow]:
    """
    Re-evaluate the deal at shifted ARVs.

    Only the ARV moves; percentage-based selling costs follow it because they
    are computed from the deal's ARV.
    """
    rows: List[SensitivityRow] = []
    for change in changes:
        shifted = deal.model_copy(update={"arv": deal.arv * (1 + change / 100)})
        m = evaluate_deal(shifted, **kwargs)
        rows.append(
            SensitivityRow(
                arv_change_percent=change,
                arv=shifted.arv,
                net_profit=m.net_profit,
                roi=m.roi,
                is_profitable=m.net_profit > 0,
                band=_profit_band(m.net_profit),
            )
        )
    return rows
