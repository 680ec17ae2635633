# src/flipcheck/analysis/market_shocks.py
from __future__ import annotations

import math
from dataclasses import replace
from typing import Dict

from flipcheck.analysis.profitability import assemble_metrics
from flipcheck.domain.deal import Deal
from flipcheck.domain.metrics import DealMetrics
from flipcheck.domain.shocks import MarketShock, ShockKind

DAYS_PER_MONTH = 30

SHOCK_KINDS: tuple[ShockKind, ...] = (
    "rate_spike",
    "demand_drop",
    "construction_inflation",
    "regulatory",
)


def default_market_shocks() -> Dict[str, MarketShock]:
    """Fallback shock set used when no live market read is available."""
    return {
        "rate_spike": MarketShock(
            kind="rate_spike",
            probability=35,
            impact_percent=18,
            indicator=4.5,
            data_source="FRED Economic Data",
        ),
        "demand_drop": MarketShock(
            kind="demand_drop",
            probability=28,
            impact_percent=-7,
            impact_days=19,
            indicator=1200,
            data_source="Local MLS",
        ),
        "construction_inflation": MarketShock(
            kind="construction_inflation",
            probability=42,
            impact_percent=12,
            indicator=145.2,
            data_source="U.S. BLS CPI",
        ),
        "regulatory": MarketShock(
            kind="regulatory",
            probability=15,
            impact_days=0,
            impact_cost=0,
            data_source="Municipal records",
        ),
    }


def normalize_shock_kind(kind: str) -> ShockKind:
    # accepts rate_spike, rateSpike, rate-spike, ...
    key = kind.strip().replace("-", "").replace("_", "").lower()
    for k in SHOCK_KINDS:
        if k.replace("_", "") == key:
            return k
    raise ValueError(f"unknown market shock: {kind!r} (expected one of {list(SHOCK_KINDS)})")


def apply_market_shock(
    deal: Deal,
    metrics: DealMetrics,
    kind: str,
    shock: MarketShock,
    **kwargs,
) -> DealMetrics:
    """
    Re-compose metrics after one market shock.

      rate_spike              holding total x (1 + pct/100)
      demand_drop             ARV x (1 - |pct|/100), plus ceil(days/30) more
                              months of holding at the current per-month rate
      construction_inflation  rehab total x (1 + pct/100)
      regulatory              flat cost added to the rehab permit line; its
                              impact_days are not modelled

    Selling costs are carried over unchanged and category line items still add
    up to their totals. Project cost, profit, ROI (against total cash
    invested), margin and score are recomputed.
    """
    k = normalize_shock_kind(kind)

    arv = metrics.arv
    rehab = metrics.rehab
    holding = metrics.holding

    if k == "rate_spike":
        f = 1 + shock.impact_percent / 100
        holding = replace(
            holding,
            monthly_tax=holding.monthly_tax * f,
            monthly_insurance=holding.monthly_insurance * f,
            monthly_utilities=holding.monthly_utilities * f,
            monthly_hoa=holding.monthly_hoa * f,
            monthly_lawn=holding.monthly_lawn * f,
            total_monthly=holding.total_monthly * f,
            total=holding.total * f,
        )

    elif k == "demand_drop":
        arv = arv * (1 - abs(shock.impact_percent) / 100)
        extra_months = math.ceil(shock.impact_days / DAYS_PER_MONTH) if shock.impact_days > 0 else 0
        if holding.holding_months > 0:
            per_month = holding.total / holding.holding_months
        else:
            per_month = holding.total_monthly
        holding = replace(
            holding,
            holding_months=holding.holding_months + extra_months,
            total=holding.total + per_month * extra_months,
        )

    elif k == "construction_inflation":
        increase = rehab.total * (shock.impact_percent / 100)
        rehab = replace(rehab, overrun=rehab.overrun + increase, total=rehab.total + increase)

    else:  # regulatory
        rehab = replace(
            rehab,
            permit_fees=rehab.permit_fees + shock.impact_cost,
            total=rehab.total + shock.impact_cost,
        )

    return assemble_metrics(
        deal,
        arv=arv,
        acquisition=metrics.acquisition,
        financing=metrics.financing,
        rehab=rehab,
        holding=holding,
        selling=metrics.selling,
        **kwargs,
    )
