# src/flipcheck/adapters/deal_mapping.py
from __future__ import annotations

from typing import Any, Mapping

from flipcheck.domain.deal import Deal, PropertyIntelligence, to_optional_number

# ---------------------------------------------------------------------
# Field aliases, first usable value wins.
#
# Payloads arrive from three places:
#   - form / app state (camelCase)
#   - our own snake_case API
#   - persisted deal rows, whose column names drifted over time
#     (e.g. realtor_commission_percent, permit_inspection_fees)
# ---------------------------------------------------------------------
DEAL_ALIASES: dict[str, tuple[str, ...]] = {
    "purchase_price": ("purchase_price", "purchasePrice"),
    "arv": ("arv", "ARV", "after_repair_value", "afterRepairValue"),
    "down_payment_percent": ("down_payment_percent", "downPaymentPercent"),
    "hard_money_rate": ("hard_money_rate", "hardMoneyRate"),
    "hard_money_points": ("hard_money_points", "hardMoneyPoints"),
    "inspection_cost": ("inspection_cost", "inspectionCost", "inspection_costs", "inspectionCosts"),
    "appraisal_cost": ("appraisal_cost", "appraisalCost", "appraisal_costs", "appraisalCosts"),
    "title_insurance": ("title_insurance", "titleInsurance", "title_costs", "titleCosts"),
    "closing_costs_buying": (
        "closing_costs_buying",
        "closingCostsBuying",
        "closing_costs_buyer",
        "closing_costs",
        "closingCosts",
    ),
    "transfer_tax_rate": ("transfer_tax_rate", "transferTaxRate"),
    "rehab_costs": ("rehab_costs", "rehabCosts"),
    "rehab_overrun_percent": ("rehab_overrun_percent", "rehabOverrunPercent"),
    "contingency_percent": ("contingency_percent", "contingencyPercent"),
    "permit_fees": ("permit_fees", "permitFees", "permit_inspection_fees"),
    "holding_months": ("holding_months", "holdingMonths"),
    "property_tax": ("property_tax", "propertyTax"),
    "insurance": ("insurance",),
    "utilities": ("utilities",),
    "hoa": ("hoa", "HOA"),
    "lawn_maintenance": ("lawn_maintenance", "lawnMaintenance"),
    "realtor_commission": ("realtor_commission", "realtorCommission", "realtor_commission_percent"),
    "closing_costs_selling": (
        "closing_costs_selling",
        "closingCostsSelling",
        "seller_closing_costs_percent",
    ),
    "staging_cost": ("staging_cost", "stagingCost", "staging_costs"),
    "marketing_cost": ("marketing_cost", "marketingCost", "marketing_costs"),
    "buyer_financing_fallthrough": (
        "buyer_financing_fallthrough",
        "buyerFinancingFallthrough",
        "buyer_financing_fallthrough_percent",
    ),
    "risk_score": ("risk_score", "riskScore"),
    "market_score": ("market_score", "marketScore"),
    "year_built": ("year_built", "yearBuilt"),
}

TEXT_ALIASES: dict[str, tuple[str, ...]] = {
    "address": ("address",),
    "zipcode": ("zipcode", "zip_code", "zipCode", "zip"),
    "property_type": ("property_type", "propertyType"),
}

INTELLIGENCE_KEYS = ("property_intelligence", "propertyIntelligence")


def _first_number(payload: Mapping[str, Any], keys: tuple[str, ...]) -> float | None:
    for k in keys:
        if k in payload:
            f = to_optional_number(payload[k])
            if f is not None:
                return f
    return None


def _first_text(payload: Mapping[str, Any], keys: tuple[str, ...]) -> str | None:
    for k in keys:
        v = payload.get(k)
        if v is not None and str(v).strip():
            return str(v).strip()
    return None


def deal_from_payload(payload: Mapping[str, Any] | Deal) -> Deal:
    """
    Resolve every known alias into one explicit Deal.

    Unknown keys are ignored; fields with no usable value fall through to the
    Deal defaults (0 for numbers, None for optional scores/facts).
    """
    if isinstance(payload, Deal):
        return payload

    fields: dict[str, Any] = {}
    for name, keys in DEAL_ALIASES.items():
        f = _first_number(payload, keys)
        if f is not None:
            fields[name] = f
    for name, keys in TEXT_ALIASES.items():
        s = _first_text(payload, keys)
        if s is not None:
            fields[name] = s

    return Deal(**fields)


def intelligence_from_payload(payload: Mapping[str, Any]) -> PropertyIntelligence | None:
    raw = None
    for k in INTELLIGENCE_KEYS:
        if isinstance(payload.get(k), Mapping):
            raw = payload[k]
            break
    if raw is None:
        return None

    return PropertyIntelligence(
        year_built=_first_number(raw, ("year_built", "yearBuilt")),
        property_type=_first_text(raw, ("property_type", "propertyType")),
        roof_age=_first_text(raw, ("roof_age", "roofAge")),
    )
