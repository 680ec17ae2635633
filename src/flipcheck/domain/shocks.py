from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ShockKind = Literal["rate_spike", "demand_drop", "construction_inflation", "regulatory"]


@dataclass(frozen=True)
class MarketShock:
    """
    One market stress the deal might live through.

    impact_percent means different things per kind:
      rate_spike              holding cost increase
      demand_drop             sale price change (negative)
      construction_inflation  rehab budget increase
    impact_days is the extra days on market (demand_drop); a regulatory shock
    may report one for display but it does not move the numbers. impact_cost
    is a flat dollar cost (regulatory).
    """
    kind: ShockKind
    probability: float
    impact_percent: float = 0.0
    impact_days: float = 0.0
    impact_cost: float = 0.0
    indicator: float | None = None  # current rate / inventory / lumber index
    data_source: str = ""
