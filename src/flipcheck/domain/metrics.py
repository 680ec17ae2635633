from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from flipcheck.domain.costs import (
    AcquisitionCosts,
    FinancingCosts,
    HoldingCosts,
    RehabCosts,
    SellingCosts,
)

RiskTier = Literal["Low", "Medium", "High"]


@dataclass(frozen=True)
class CostPercentages:
    """
    Share of each bucket in (total project cost + selling costs), in percent.

    Buckets sum to 100 whenever that denominator is positive, else all 0.
    """
    purchase: float
    acquisition_fees: float
    financing: float
    rehab: float
    holding: float
    selling: float


@dataclass(frozen=True)
class DealMetrics:
    arv: float                  # ARV used for this evaluation (scenario-adjusted if any)
    purchase_price: float
    holding_months: float       # months used for holding + financing

    acquisition: AcquisitionCosts
    financing: FinancingCosts
    rehab: RehabCosts
    holding: HoldingCosts
    selling: SellingCosts

    total_cash_invested: float  # acquisition.total + rehab.total
    total_project_cost: float   # selling costs excluded
    gross_profit: float
    net_profit: float

    roi: float                  # percent
    annualized_roi: float       # percent, normalized to 12 months
    profit_margin: float        # percent of ARV

    cash_flow_proxy: float      # net_profit / 12 when positive
    score: int                  # 0-100
    risk: RiskTier

    percentages: CostPercentages
