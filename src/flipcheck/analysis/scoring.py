# src/flipcheck/analysis/scoring.py
from __future__ import annotations

from typing import Dict, List, Literal

from flipcheck.domain.finance import round_half_up
from flipcheck.domain.metrics import RiskTier
from flipcheck.domain.scenarios import ScenarioResult

DealHealth = Literal["healthy", "caution", "critical"]

# Component weights; they sum to 1.0
ROI_WEIGHT = 0.30
CASH_FLOW_WEIGHT = 0.20
RISK_WEIGHT = 0.30
MARKET_WEIGHT = 0.20

ROI_FOR_FULL_MARKS = 20.0          # percent
CASH_FLOW_FOR_FULL_MARKS = 500.0   # dollars / month


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(x, hi))


def cash_flow_proxy(net_profit: float) -> float:
    """
    Monthly cash-flow stand-in for flips: net profit spread over 12 months.

    Not a real rental cash flow; kept so scores stay comparable across the app.
    """
    return net_profit / 12 if net_profit > 0 else 0.0


def deal_quality_score(
    roi: float,
    monthly_cash_flow: float,
    risk_score: float,
    market_score: float,
) -> int:
    """
    Composite 0-100 deal score.

    Each input is normalized to a 0-100 sub-score first:
      - ROI: 20%+ -> 100, negative -> 0
      - cash flow: $500/mo+ -> 100, negative -> 0
      - risk: inverted, 100 - risk (risk is 0-100 where 100 is worst)
      - market: passed through, clamped to 0-100
    then weighted 30/20/30/20 and rounded.
    """
    roi_component = _clamp(roi / ROI_FOR_FULL_MARKS * 100, 0.0, 100.0)
    cf_component = _clamp(monthly_cash_flow / CASH_FLOW_FOR_FULL_MARKS * 100, 0.0, 100.0)
    risk_component = 100.0 - _clamp(risk_score, 0.0, 100.0)
    market_component = _clamp(market_score, 0.0, 100.0)

    score = (
        roi_component * ROI_WEIGHT
        + cf_component * CASH_FLOW_WEIGHT
        + risk_component * RISK_WEIGHT
        + market_component * MARKET_WEIGHT
    )
    return int(_clamp(round_half_up(score), 0.0, 100.0))


def risk_tier(score: float) -> RiskTier:
    if score > 75:
        return "Low"
    if score > 50:
        return "Medium"
    return "High"


def deal_health(roi: float, margin: float) -> DealHealth:
    if roi > 15 and margin > 12:
        return "healthy"
    if roi > 8 and margin > 8:
        return "caution"
    return "critical"


def scenario_alerts(result: ScenarioResult) -> List[Dict[str, str]]:
    """Warnings a UI shows next to a projected scenario."""
    alerts: List[Dict[str, str]] = []
    if result.roi < 10:
        alerts.append({"type": "warning", "message": "ROI dropped below 10%"})
    if result.net_profit < 0:
        alerts.append({"type": "danger", "message": "Project is projected to lose money"})
    if result.holding_months > 12:
        alerts.append({"type": "warning", "message": "Timeline extends beyond 1 year"})
    return alerts
