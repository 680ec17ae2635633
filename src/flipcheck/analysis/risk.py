# src/flipcheck/analysis/risk.py
from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from flipcheck.analysis.scenarios import apply_scenario
from flipcheck.domain.deal import Deal, PropertyIntelligence
from flipcheck.domain.finance import round_half_up
from flipcheck.domain.metrics import DealMetrics
from flipcheck.domain.risk import (
    CurvePoint,
    HiddenCost,
    RiskProfile,
    ScenarioOutcome,
    Threat,
    TimelineCollision,
    TimelineRisk,
    TimelineRisks,
)
from flipcheck.domain.scenarios import ScenarioAdjustment

CURVE_MIN_PROFIT = -50_000.0
CURVE_MAX_PROFIT = 200_000.0
CURVE_STEPS = 50

DELAY_COST_PER_DAY = 50.0
MAX_THREATS = 3

# National base rates (percent) before property-specific updates.
BASE_RATES = {
    "structural_damage": 22.0,
    "title_defect": 3.1,
    "hoa_fees": 17.0,
    "permit_rework": 29.0,
}
DEFAULT_YEAR_BUILT = 2000
DEFAULT_PROPERTY_TYPE = "Single-Family"


# ---------------------------------------------------------------------
# Scenario-set statistics
# ---------------------------------------------------------------------

def _arrays(outcomes: Sequence[ScenarioOutcome]) -> tuple[np.ndarray, np.ndarray]:
    profit = np.asarray([o.profit for o in outcomes], dtype=float)
    weight = np.asarray([o.probability for o in outcomes], dtype=float) / 100.0
    return profit, weight


def expected_value(outcomes: Sequence[ScenarioOutcome]) -> float:
    if not outcomes:
        return 0.0
    profit, weight = _arrays(outcomes)
    return float(np.sum(profit * weight))


def loss_probability(outcomes: Sequence[ScenarioOutcome]) -> float:
    if not outcomes:
        return 0.0
    profit, weight = _arrays(outcomes)
    return float(np.sum(weight[profit < 0])) * 100


def break_even_confidence(outcomes: Sequence[ScenarioOutcome]) -> float:
    if not outcomes:
        return 0.0
    profit, weight = _arrays(outcomes)
    return float(np.sum(weight[profit >= 0])) * 100


def probability_curve(
    outcomes: Sequence[ScenarioOutcome],
    min_profit: float = CURVE_MIN_PROFIT,
    max_profit: float = CURVE_MAX_PROFIT,
    steps: int = CURVE_STEPS,
) -> List[CurvePoint]:
    """
    P(profit >= threshold) for steps + 1 evenly spaced thresholds.

    Thresholds are reported in whole dollars, probabilities in percent with one
    decimal. Non-increasing in the threshold for any outcome set with
    non-negative probabilities.
    """
    if steps <= 0:
        return []
    profit, weight = _arrays(outcomes)
    step_size = (max_profit - min_profit) / steps
    thresholds = min_profit + step_size * np.arange(steps + 1, dtype=float)

    if profit.size:
        # (thresholds x outcomes) mask
        hits = profit[np.newaxis, :] >= thresholds[:, np.newaxis]
        cumulative = (hits * weight[np.newaxis, :]).sum(axis=1) * 100
    else:
        cumulative = np.zeros_like(thresholds)

    return [
        CurvePoint(profit=round_half_up(float(t)), probability=round_half_up(float(p), 1))
        for t, p in zip(thresholds, cumulative)
    ]


# ---------------------------------------------------------------------
# Composite risk score + threats
# ---------------------------------------------------------------------

def risk_score(
    deal: Deal,
    metrics: DealMetrics,
    outcomes: Sequence[ScenarioOutcome],
    arv_shift_percent: float = 0.0,
) -> float:
    """
    0 (safe) .. 100 (high risk).

    40% of the loss probability plus tiered bumps for thin ROI, large planned
    rehab overrun, long holds and a falling ARV assumption.
    """
    score = loss_probability(outcomes) * 0.4

    if metrics.roi < 10:
        score += 20
    elif metrics.roi < 15:
        score += 10

    overrun = deal.rehab_overrun_percent
    if overrun > 30:
        score += 15
    elif overrun > 20:
        score += 8

    months = deal.holding_months
    if months > 8:
        score += 15
    elif months > 6:
        score += 8

    if arv_shift_percent < -10:
        score += 10

    return min(100.0, max(0.0, score))


def _money(x: float) -> str:
    return f"${round_half_up(x):,.0f}"


def top_threats(
    deal: Deal,
    metrics: DealMetrics,
    hidden: Sequence[HiddenCost] | None = None,
    timeline: TimelineRisks | None = None,
    arv_shift_percent: float = 0.0,
    limit: int = MAX_THREATS,
) -> List[Threat]:
    threats: List[Threat] = []

    overrun_pct = deal.rehab_overrun_percent
    if overrun_pct > 20:
        cost = metrics.rehab.total * (overrun_pct / 100)
        threats.append(
            Threat(
                name="Rehab Overrun",
                probability=min(100.0, overrun_pct * 2),
                impact=f"+{_money(cost)} cost",
                severity="high" if cost > 10_000 else "medium",
                impact_value=cost,
            )
        )

    if timeline is not None and timeline.permit_delay is not None:
        permit = timeline.permit_delay
        threats.append(
            Threat(
                name="Permit Delay",
                probability=permit.probability,
                impact=f"+{permit.days:g} days, +{_money(permit.cost)}",
                severity="high" if permit.days > 20 else "medium",
                impact_value=permit.cost,
            )
        )

    if arv_shift_percent < -5:
        shift = abs(arv_shift_percent)
        loss = metrics.arv * (shift / 100)
        threats.append(
            Threat(
                name="ARV Decline",
                probability=min(100.0, shift * 5),
                impact=f"-{_money(loss)} sale price",
                severity="high" if loss > 15_000 else "medium",
                impact_value=loss,
            )
        )

    for cost in hidden or ():
        if cost.probability > 15:
            threats.append(
                Threat(
                    name=cost.name,
                    probability=cost.probability,
                    impact=f"+{_money(cost.impact)}",
                    severity="high" if cost.impact > 10_000 else "medium",
                    impact_value=cost.impact,
                )
            )

    # stable: ties keep discovery order
    threats.sort(key=lambda t: t.probability * abs(t.impact_value), reverse=True)
    return threats[:limit]


# ---------------------------------------------------------------------
# Solvers / timeline
# ---------------------------------------------------------------------

def min_arv(
    deal: Deal,
    metrics: DealMetrics,
    target_profit: float = 0.0,
    holding_months: float | None = None,
) -> float:
    """
    ARV needed to clear target_profit.

    Rehab is grossed up by the deal's overrun percent; holding cost is scaled
    from the evaluated per-month rate to `holding_months` (defaults to the
    deal's own hold).
    """
    months = deal.holding_months if holding_months is None else holding_months
    rehab_total = metrics.rehab.total * (1 + deal.rehab_overrun_percent / 100)

    evaluated_months = metrics.holding.holding_months
    if evaluated_months > 0:
        monthly_holding = metrics.holding.total / evaluated_months
    else:
        monthly_holding = metrics.holding.total_monthly
    extended_holding = monthly_holding * months

    value = (
        deal.purchase_price
        + metrics.acquisition.fees_only
        + metrics.financing.total
        + rehab_total
        + extended_holding
        + metrics.selling.total
        + target_profit
    )
    return round_half_up(value)


def timeline_collision(
    risks: TimelineRisks | None,
    cost_per_day: float = DELAY_COST_PER_DAY,
) -> Optional[TimelineCollision]:
    """
    Combine permit / contractor / inspection delays.

    A risk counts toward the 30+ day collision when it alone is >= 20 days.
    """
    if risks is None:
        return None

    entries = [
        risks.permit_delay or TimelineRisk(0.0, 0.0),
        risks.contractor_delay or TimelineRisk(0.0, 0.0),
        risks.inspection_delay or TimelineRisk(0.0, 0.0),
    ]

    prob_30_plus = sum(r.probability / 100 for r in entries if r.days >= 20)
    total_days = sum(r.days for r in entries)
    total_cost = sum(r.days * cost_per_day for r in entries)

    return TimelineCollision(
        probability_30_plus=min(100.0, prob_30_plus * 100),
        total_days=total_days,
        total_cost=total_cost,
        roi_impact=(total_cost / 100_000) * 15 if total_cost > 0 else 0.0,
    )


def default_timeline_risks(
    year_built: int | None,
    holding_months: float,
    cost_per_day: float = DELAY_COST_PER_DAY,
) -> TimelineRisks:
    """Typical delay exposure; older houses wait longer on permits."""
    year = year_built or DEFAULT_YEAR_BUILT
    scale = holding_months / 6
    old = year < 1980

    permit_days = 22 if old else 15
    return TimelineRisks(
        permit_delay=TimelineRisk(
            probability=65 if old else 45,
            days=permit_days,
            cost=permit_days * cost_per_day * scale,
        ),
        contractor_delay=TimelineRisk(probability=40, days=7, cost=7 * cost_per_day * scale),
        inspection_delay=TimelineRisk(probability=25, days=5, cost=5 * cost_per_day * scale),
    )


# ---------------------------------------------------------------------
# Hidden costs (base rates updated by age / type)
# ---------------------------------------------------------------------

def hidden_costs(
    deal: Deal,
    intelligence: PropertyIntelligence | None = None,
) -> List[HiddenCost]:
    """
    National base rates, multiplicatively updated by property facts:

      structural damage   x1.5 built before 1980, another x1.3 before 1970
      permit rework       x1.2 built before 1980
      HOA surprise fees   only for condos / townhouses
      title defect        no update
    """
    year_built = (
        (intelligence.year_built if intelligence else None)
        or deal.year_built
        or DEFAULT_YEAR_BUILT
    )
    property_type = (
        (intelligence.property_type if intelligence else None)
        or deal.property_type
        or DEFAULT_PROPERTY_TYPE
    )

    costs: List[HiddenCost] = []

    structural = BASE_RATES["structural_damage"]
    if year_built < 1980:
        structural *= 1.5
    if year_built < 1970:
        structural *= 1.3
    costs.append(
        HiddenCost(
            name="Undisclosed Structural Damage",
            probability=min(100.0, structural),
            impact=25_000.0 if year_built < 1980 else 8_000.0,
            base_prob=BASE_RATES["structural_damage"],
        )
    )

    costs.append(
        HiddenCost(
            name="Title Defect / Lien",
            probability=BASE_RATES["title_defect"],
            impact=5_000.0,
            base_prob=BASE_RATES["title_defect"],
        )
    )

    pt = property_type.lower()
    if "condo" in pt or "townhouse" in pt or "townhome" in pt:
        costs.append(
            HiddenCost(
                name="HOA Surprise Fees",
                probability=BASE_RATES["hoa_fees"],
                impact=1_200.0,
                base_prob=BASE_RATES["hoa_fees"],
            )
        )

    permit = BASE_RATES["permit_rework"]
    if year_built < 1980:
        permit *= 1.2
    costs.append(
        HiddenCost(
            name="Permit Rework Required",
            probability=min(100.0, permit),
            impact=3_500.0,
            base_prob=BASE_RATES["permit_rework"],
        )
    )

    return costs


# ---------------------------------------------------------------------
# Default scenario set + full profile
# ---------------------------------------------------------------------

def default_outcomes(deal: Deal, **kwargs) -> List[ScenarioOutcome]:
    """
    Three-point scenario set: Best 20%, Most Likely 50%, Worst 30%.

    Most Likely keeps the deal's own overrun and hold; Best and Worst replace
    the overrun and shift hold time and ARV.
    """
    cases = [
        ("Best Case", 20.0, ScenarioAdjustment(
            rehab_overrun_percent=-10, holding_period_adjustment=-1, market_appreciation_percent=5,
        )),
        ("Most Likely", 50.0, ScenarioAdjustment()),
        ("Worst Case", 30.0, ScenarioAdjustment(
            rehab_overrun_percent=30, holding_period_adjustment=3, market_appreciation_percent=-10,
        )),
    ]
    return [
        ScenarioOutcome(
            name=name,
            profit=apply_scenario(deal, adj, name=name, **kwargs).net_profit,
            probability=prob,
        )
        for name, prob, adj in cases
    ]


def build_risk_profile(
    deal: Deal,
    metrics: DealMetrics,
    outcomes: Sequence[ScenarioOutcome],
    *,
    hidden: Sequence[HiddenCost] | None = None,
    timeline: TimelineRisks | None = None,
    arv_shift_percent: float = 0.0,
    curve_min_profit: float = CURVE_MIN_PROFIT,
    curve_max_profit: float = CURVE_MAX_PROFIT,
    curve_steps: int = CURVE_STEPS,
) -> RiskProfile:
    return RiskProfile(
        expected_value=expected_value(outcomes),
        loss_probability=loss_probability(outcomes),
        break_even_confidence=break_even_confidence(outcomes),
        risk_score=risk_score(deal, metrics, outcomes, arv_shift_percent),
        probability_curve=probability_curve(
            outcomes, curve_min_profit, curve_max_profit, curve_steps
        ),
        threats=top_threats(deal, metrics, hidden, timeline, arv_shift_percent),
    )
