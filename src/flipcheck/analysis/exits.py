# src/flipcheck/analysis/exits.py
from __future__ import annotations

from flipcheck.domain.assumptions import ExitAssumptions
from flipcheck.domain.deal import Deal
from flipcheck.domain.exits import BrrrrProjection, ExitComparison, ExitOption, MaoCheck
from flipcheck.domain.finance import monthly_mortgage_payment
from flipcheck.domain.metrics import DealMetrics

MAO_FACTOR = 0.70
MAO_FACTOR_CONSERVATIVE = 0.65

FLIP_PROS = ["Large lump sum", "Clean exit", "No tenant headaches"]
WHOLESALE_PROS = ["Quick cash", "No rehab risk", "Minimal capital required"]
BRRRR_PROS = ["Wealth building", "Tax benefits", "Passive income"]


def brrrr_projection(
    purchase_price: float,
    arv: float,
    rehab_costs: float,
    refi_percent: float | None = None,
    assumptions: ExitAssumptions | None = None,
) -> BrrrrProjection:
    """
    Buy, rehab, rent, refinance, repeat.

    Cash in is purchase + rehab + buy-side closing; the cash-out refi is a
    percentage of ARV amortized over a fixed-rate term. Rent is estimated from
    ARV (rent-to-value) and operating expenses as a share of rent.
    """
    a = assumptions or ExitAssumptions()
    pct = a.refi_percent if refi_percent is None else refi_percent

    refi_amount = arv * (pct / 100)
    closing = purchase_price * a.closing_cost_pct
    total_invested = purchase_price + rehab_costs + closing
    capital_recovered = refi_amount - total_invested

    rent = arv * a.rent_to_value
    mortgage = monthly_mortgage_payment(refi_amount, a.refi_interest_rate, a.refi_term_years)
    expenses = rent * a.expense_ratio
    monthly_cf = rent - mortgage - expenses

    return BrrrrProjection(
        refi_amount=refi_amount,
        total_invested=total_invested,
        capital_recovered=capital_recovered,
        estimated_rent=rent,
        mortgage_payment=mortgage,
        expenses=expenses,
        monthly_cash_flow=monthly_cf,
        annual_cash_flow=monthly_cf * 12,
        is_perfect_brrrr=capital_recovered >= 0,
    )


def wholesale_spread(arv: float, rehab_costs: float, purchase_price: float, factor: float = MAO_FACTOR) -> float:
    """Assignment spread: what an investor buyer pays (factor x ARV - rehab) over our contract price, floored at 0."""
    return max((arv * factor - rehab_costs) - purchase_price, 0.0)


def compare_exit_strategies(
    deal: Deal,
    metrics: DealMetrics,
    assumptions: ExitAssumptions | None = None,
) -> ExitComparison:
    a = assumptions or ExitAssumptions()

    projection = brrrr_projection(deal.purchase_price, deal.arv, deal.rehab_costs, assumptions=a)

    return ExitComparison(
        flip=ExitOption(strategy="flip", profit=metrics.net_profit, pros=list(FLIP_PROS)),
        wholesale=ExitOption(
            strategy="wholesale",
            profit=wholesale_spread(deal.arv, deal.rehab_costs, deal.purchase_price, a.wholesale_arv_factor),
            pros=list(WHOLESALE_PROS),
        ),
        brrrr=ExitOption(strategy="brrrr", profit=projection.annual_cash_flow, pros=list(BRRRR_PROS)),
        brrrr_projection=projection,
    )


def mao_70_rule(arv: float, rehab_costs: float, conservative: bool = False) -> float:
    """Maximum allowable offer: ARV x 0.70 (0.65 conservative) minus rehab."""
    factor = MAO_FACTOR_CONSERVATIVE if conservative else MAO_FACTOR
    return arv * factor - rehab_costs


def seventy_percent_check(
    deal: Deal,
    metrics: DealMetrics | None = None,
    conservative: bool = False,
) -> MaoCheck:
    # rehab here is the all-in budget when metrics are available
    rehab = metrics.rehab.total if metrics is not None else deal.rehab_costs
    mao = mao_70_rule(deal.arv, rehab, conservative)
    difference = mao - deal.purchase_price
    return MaoCheck(
        factor=MAO_FACTOR_CONSERVATIVE if conservative else MAO_FACTOR,
        mao=mao,
        difference=difference,
        is_good_deal=difference >= 0,
    )
