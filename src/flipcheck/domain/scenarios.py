from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal

from pydantic import BaseModel, ConfigDict, field_validator

from flipcheck.domain.deal import to_number, to_optional_number
from flipcheck.domain.metrics import DealMetrics, RiskTier


class ScenarioAdjustment(BaseModel):
    """
    Delta applied on top of a Deal.

    rehab_overrun_percent is an explicit override: None keeps the deal's own
    overrun assumption, any number (0 included) replaces it.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    rehab_overrun_percent: float | None = None
    holding_period_adjustment: float = 0.0   # months, signed
    market_appreciation_percent: float = 0.0
    permit_delay_days: float = 0.0

    @field_validator("rehab_overrun_percent", mode="before")
    @classmethod
    def _optional(cls, v: Any) -> float | None:
        return to_optional_number(v)

    @field_validator(
        "holding_period_adjustment",
        "market_appreciation_percent",
        "permit_delay_days",
        mode="before",
    )
    @classmethod
    def _numeric(cls, v: Any) -> float:
        return to_number(v)


# Two "worst" and two "best" presets exist side by side as separate stress tests.
SCENARIO_PRESETS: Dict[str, ScenarioAdjustment] = {
    "base": ScenarioAdjustment(),
    "best": ScenarioAdjustment(
        rehab_overrun_percent=-10,
        holding_period_adjustment=-1,
        market_appreciation_percent=5,
        permit_delay_days=0,
    ),
    "best_b": ScenarioAdjustment(
        rehab_overrun_percent=-5,
        holding_period_adjustment=-1,
        market_appreciation_percent=5,
        permit_delay_days=0,
    ),
    "worst_a": ScenarioAdjustment(
        rehab_overrun_percent=25,
        holding_period_adjustment=3,
        market_appreciation_percent=-10,
        permit_delay_days=0,
    ),
    "worst_b": ScenarioAdjustment(
        rehab_overrun_percent=20,
        holding_period_adjustment=3,
        market_appreciation_percent=-10,
        permit_delay_days=60,
    ),
}


def get_preset(name: str) -> ScenarioAdjustment:
    key = name.strip().lower()
    if key not in SCENARIO_PRESETS:
        raise ValueError(
            f"unknown scenario preset: {name!r} (expected one of {sorted(SCENARIO_PRESETS)})"
        )
    return SCENARIO_PRESETS[key]


@dataclass(frozen=True)
class ScenarioResult:
    name: str
    adjustment: ScenarioAdjustment
    arv: float
    holding_months: float
    metrics: DealMetrics

    @property
    def net_profit(self) -> float:
        return self.metrics.net_profit

    @property
    def roi(self) -> float:
        return self.metrics.roi

    @property
    def total_project_cost(self) -> float:
        return self.metrics.total_project_cost

    @property
    def score(self) -> int:
        return self.metrics.score

    @property
    def risk(self) -> RiskTier:
        return self.metrics.risk


@dataclass(frozen=True)
class WorstCaseSimulation:
    market_crash: float
    major_repair: float
    extended_timeline: float
    financing_fallthrough: float


@dataclass(frozen=True)
class RiskScenarioImpact:
    profit: float
    impact: float  # base net profit minus scenario profit


@dataclass(frozen=True)
class TimelinePoint:
    month: int
    profit: float


ProfitBand = Literal["strong", "good", "thin", "loss"]


@dataclass(frozen=True)
class SensitivityRow:
    arv_change_percent: float
    arv: float
    net_profit: float
    roi: float
    is_profitable: bool
    band: ProfitBand
