from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

Severity = Literal["high", "medium"]


@dataclass(frozen=True)
class ScenarioOutcome:
    """One weighted point of the scenario space. probability is 0-100."""
    name: str
    profit: float
    probability: float


@dataclass(frozen=True)
class CurvePoint:
    profit: float       # threshold, whole dollars
    probability: float  # P(profit >= threshold), percent, one decimal


@dataclass(frozen=True)
class Threat:
    name: str
    probability: float
    impact: str          # human readable
    severity: Severity
    impact_value: float  # dollars, used for ranking


@dataclass(frozen=True)
class HiddenCost:
    name: str
    probability: float  # percent after age/type updates
    impact: float       # dollars
    base_prob: float    # national prior, percent


@dataclass(frozen=True)
class TimelineRisk:
    probability: float
    days: float
    cost: float = 0.0


@dataclass(frozen=True)
class TimelineRisks:
    permit_delay: Optional[TimelineRisk] = None
    contractor_delay: Optional[TimelineRisk] = None
    inspection_delay: Optional[TimelineRisk] = None


@dataclass(frozen=True)
class TimelineCollision:
    probability_30_plus: float
    total_days: float
    total_cost: float
    roi_impact: float  # rough ROI percentage points lost


@dataclass(frozen=True)
class RiskProfile:
    expected_value: float
    loss_probability: float
    break_even_confidence: float
    risk_score: float
    probability_curve: List[CurvePoint] = field(default_factory=list)
    threats: List[Threat] = field(default_factory=list)
