# src/flipcheck/analysis/profitability.py
from __future__ import annotations

from flipcheck.analysis.costs import (
    acquisition_costs,
    financing_costs,
    holding_costs,
    rehab_costs,
    selling_costs,
)
from flipcheck.analysis.scoring import cash_flow_proxy, deal_quality_score, risk_tier
from flipcheck.domain.costs import (
    AcquisitionCosts,
    FinancingCosts,
    HoldingCosts,
    RehabCosts,
    SellingCosts,
)
from flipcheck.domain.deal import Deal
from flipcheck.domain.finance import safe_pct
from flipcheck.domain.metrics import CostPercentages, DealMetrics

DEFAULT_RISK_SCORE = 50.0
DEFAULT_MARKET_SCORE = 70.0


def annualize_roi(roi: float, months: float) -> float:
    """
    Compound a holding-period ROI up to a 12-month basis:
        ((1 + roi/100) ** (12/months) - 1) * 100

    0 when roi is 0 or months <= 0. A wipe-out (roi <= -100) annualizes to -100.
    """
    if roi == 0 or months <= 0:
        return 0.0
    growth = 1 + roi / 100
    if growth <= 0:
        return -100.0
    try:
        return (growth ** (12 / months) - 1) * 100
    except OverflowError:
        return float("inf")


def cost_percentages(
    purchase_price: float,
    acquisition: AcquisitionCosts,
    financing: FinancingCosts,
    rehab: RehabCosts,
    holding: HoldingCosts,
    selling: SellingCosts,
    total_project_cost: float,
) -> CostPercentages:
    all_costs = total_project_cost + selling.total
    return CostPercentages(
        purchase=safe_pct(purchase_price, all_costs),
        acquisition_fees=safe_pct(acquisition.fees_only, all_costs),
        financing=safe_pct(financing.total, all_costs),
        rehab=safe_pct(rehab.total, all_costs),
        holding=safe_pct(holding.total, all_costs),
        selling=safe_pct(selling.total, all_costs),
    )


def assemble_metrics(
    deal: Deal,
    *,
    arv: float,
    acquisition: AcquisitionCosts,
    financing: FinancingCosts,
    rehab: RehabCosts,
    holding: HoldingCosts,
    selling: SellingCosts,
    default_risk_score: float = DEFAULT_RISK_SCORE,
    default_market_score: float = DEFAULT_MARKET_SCORE,
) -> DealMetrics:
    """
    Compose category outputs into DealMetrics.

    Shared by the base evaluation and every scenario so both follow exactly the
    same formulas (selling costs excluded from project cost, ROI on cash
    invested, score from the deal's own risk/market inputs or the defaults).
    """
    purchase_price = deal.purchase_price
    months = holding.holding_months

    total_cash_invested = acquisition.total + rehab.total
    total_project_cost = (
        purchase_price
        + acquisition.fees_only
        + financing.total
        + rehab.total
        + holding.total
    )

    gross_profit = arv - total_project_cost
    net_profit = gross_profit - selling.total

    roi = net_profit / total_cash_invested * 100 if total_cash_invested > 0 else 0.0
    profit_margin = safe_pct(net_profit, arv)
    annualized = annualize_roi(roi, months)

    proxy = cash_flow_proxy(net_profit)
    risk_input = deal.risk_score if deal.risk_score is not None else default_risk_score
    market_input = deal.market_score if deal.market_score is not None else default_market_score
    score = deal_quality_score(roi, proxy, risk_input, market_input)

    return DealMetrics(
        arv=arv,
        purchase_price=purchase_price,
        holding_months=months,
        acquisition=acquisition,
        financing=financing,
        rehab=rehab,
        holding=holding,
        selling=selling,
        total_cash_invested=total_cash_invested,
        total_project_cost=total_project_cost,
        gross_profit=gross_profit,
        net_profit=net_profit,
        roi=roi,
        annualized_roi=annualized,
        profit_margin=profit_margin,
        cash_flow_proxy=proxy,
        score=score,
        risk=risk_tier(score),
        percentages=cost_percentages(
            purchase_price, acquisition, financing, rehab, holding, selling, total_project_cost
        ),
    )


def evaluate_deal(
    deal: Deal,
    *,
    default_risk_score: float = DEFAULT_RISK_SCORE,
    default_market_score: float = DEFAULT_MARKET_SCORE,
) -> DealMetrics:
    """
    Base-case evaluation: all five calculators with no overrides.
    """
    return assemble_metrics(
        deal,
        arv=deal.arv,
        acquisition=acquisition_costs(deal),
        financing=financing_costs(deal),
        rehab=rehab_costs(deal),
        holding=holding_costs(deal),
        selling=selling_costs(deal),
        default_risk_score=default_risk_score,
        default_market_score=default_market_score,
    )
