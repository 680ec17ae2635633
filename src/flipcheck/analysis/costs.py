# src/flipcheck/analysis/costs.py
from __future__ import annotations

from flipcheck.domain.costs import (
    AcquisitionCosts,
    FinancingCosts,
    HoldingCosts,
    RehabCosts,
    SellingCosts,
)
from flipcheck.domain.deal import Deal


def acquisition_costs(deal: Deal) -> AcquisitionCosts:
    """
    Cash needed at closing on the buy side.

    total    = down payment + points + inspection + appraisal + title
               + buy-side closing + transfer tax
    fees_only = total - down payment (the aggregator adds the full purchase
                price separately, so the down payment must not be counted twice)
    """
    purchase_price = deal.purchase_price

    down_payment = purchase_price * (deal.down_payment_percent / 100)
    loan_amount = purchase_price - down_payment
    points = loan_amount * (deal.hard_money_points / 100)

    transfer_tax = purchase_price * (deal.transfer_tax_rate / 100)

    fees_only = (
        points
        + deal.inspection_cost
        + deal.appraisal_cost
        + deal.title_insurance
        + deal.closing_costs_buying
        + transfer_tax
    )
    total = down_payment + fees_only

    return AcquisitionCosts(
        down_payment=down_payment,
        hard_money_points=points,
        inspection=deal.inspection_cost,
        appraisal=deal.appraisal_cost,
        title_insurance=deal.title_insurance,
        closing_costs_buying=deal.closing_costs_buying,
        transfer_tax=transfer_tax,
        fees_only=fees_only,
        total=total,
    )


def financing_costs(deal: Deal, months: float | None = None) -> FinancingCosts:
    """Interest-only hard money carry over the holding period."""
    loan_amount = deal.purchase_price * (1 - deal.down_payment_percent / 100)
    n = deal.holding_months if months is None else months

    monthly_interest = loan_amount * (deal.hard_money_rate / 100 / 12)
    total_interest = monthly_interest * n

    return FinancingCosts(
        loan_amount=loan_amount,
        monthly_interest=monthly_interest,
        total_interest=total_interest,
        holding_months=n,
        total=total_interest,
    )


def rehab_costs(deal: Deal, overrun_percent: float | None = None) -> RehabCosts:
    """
    Rehab budget with overrun, contingency and permits.

    overrun_percent=None uses the deal's own rehab_overrun_percent; an explicit
    value (including 0) replaces it.
    """
    base = deal.rehab_costs
    active_overrun = deal.rehab_overrun_percent if overrun_percent is None else overrun_percent

    overrun = base * (active_overrun / 100)
    contingency = base * (deal.contingency_percent / 100)
    permits = deal.permit_fees

    return RehabCosts(
        base_rehab=base,
        overrun_percent=active_overrun,
        overrun=overrun,
        contingency=contingency,
        permit_fees=permits,
        total=base + overrun + contingency + permits,
    )


def holding_costs(deal: Deal, months: float | None = None) -> HoldingCosts:
    n = deal.holding_months if months is None else months

    total_monthly = (
        deal.property_tax
        + deal.insurance
        + deal.utilities
        + deal.hoa
        + deal.lawn_maintenance
    )

    return HoldingCosts(
        monthly_tax=deal.property_tax,
        monthly_insurance=deal.insurance,
        monthly_utilities=deal.utilities,
        monthly_hoa=deal.hoa,
        monthly_lawn=deal.lawn_maintenance,
        total_monthly=total_monthly,
        holding_months=n,
        total=total_monthly * n,
    )


def selling_costs(deal: Deal, arv_adjustment_percent: float = 0.0) -> SellingCosts:
    """
    Exit costs against the (possibly scenario-adjusted) sale price.

    Commission, closing and the buyer-financing fall-through reserve are
    percentages of the adjusted ARV; staging and marketing are flat.
    """
    sale_price = deal.arv * (1 + arv_adjustment_percent / 100)

    commission = sale_price * (deal.realtor_commission / 100)
    closing = sale_price * (deal.closing_costs_selling / 100)
    fallthrough = sale_price * (deal.buyer_financing_fallthrough / 100)

    total = commission + closing + deal.staging_cost + deal.marketing_cost + fallthrough

    return SellingCosts(
        sale_price=sale_price,
        realtor_commission=commission,
        closing_costs_selling=closing,
        staging=deal.staging_cost,
        marketing=deal.marketing_cost,
        fallthrough_cost=fallthrough,
        total=total,
    )
