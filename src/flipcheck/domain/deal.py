# src/flipcheck/domain/deal.py
from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Every numeric input the cost calculators read. Missing / garbage -> 0.0
NUMERIC_FIELDS = (
    "purchase_price",
    "arv",
    "down_payment_percent",
    "hard_money_rate",
    "hard_money_points",
    "rehab_costs",
    "rehab_overrun_percent",
    "contingency_percent",
    "permit_fees",
    "holding_months",
    "property_tax",
    "insurance",
    "utilities",
    "hoa",
    "lawn_maintenance",
    "realtor_commission",
    "closing_costs_selling",
    "staging_cost",
    "marketing_cost",
    "transfer_tax_rate",
    "inspection_cost",
    "appraisal_cost",
    "title_insurance",
    "closing_costs_buying",
    "buyer_financing_fallthrough",
)


def to_optional_number(val: Any) -> float | None:
    """
    Parse values like:
      - 250000 / 250000.0
      - "250000", "250,000", "$250,000"
      - "6.5%"  (percent sign stripped, value kept in percent units)
    Returns None for missing / blank / garbage / NaN / inf.
    """
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, (int, float)):
        f = float(val)
    elif isinstance(val, str):
        s = val.strip().replace(",", "").replace("$", "")
        if s.endswith("%"):
            s = s[:-1]
        try:
            f = float(s)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(f):
        return None
    return f


def to_number(val: Any) -> float:
    """Lenient converter for engine inputs: anything unusable becomes 0.0."""
    f = to_optional_number(val)
    return 0.0 if f is None else f


class Deal(BaseModel):
    """
    One fix-and-flip opportunity, as seen by the engine.

    All money fields are dollars, all *_percent / *_rate / commission fields are
    percent units (20 means 20%). Monthly carrying costs (property_tax,
    insurance, utilities, hoa, lawn_maintenance) are per month.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    # identifying only, never used in maths
    address: str = ""
    zipcode: str = ""

    # purchase / financing
    purchase_price: float = 0.0
    arv: float = Field(default=0.0, description="After-repair value")
    down_payment_percent: float = 0.0
    hard_money_rate: float = Field(default=0.0, description="Annual rate, percent")
    hard_money_points: float = Field(default=0.0, description="Points, percent of loan")

    # acquisition fees
    inspection_cost: float = 0.0
    appraisal_cost: float = 0.0
    title_insurance: float = 0.0
    closing_costs_buying: float = 0.0
    transfer_tax_rate: float = 0.0

    # rehab
    rehab_costs: float = 0.0
    rehab_overrun_percent: float = 0.0
    contingency_percent: float = 0.0
    permit_fees: float = 0.0

    # holding (monthly)
    holding_months: float = 0.0
    property_tax: float = 0.0
    insurance: float = 0.0
    utilities: float = 0.0
    hoa: float = 0.0
    lawn_maintenance: float = 0.0

    # selling
    realtor_commission: float = 0.0
    closing_costs_selling: float = 0.0
    staging_cost: float = 0.0
    marketing_cost: float = 0.0
    buyer_financing_fallthrough: float = 0.0

    # optional scorer inputs; None -> caller placeholder
    risk_score: float | None = None
    market_score: float | None = None

    # optional property facts for hidden-cost priors
    year_built: int | None = None
    property_type: str | None = None

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def _coerce_numeric(cls, v: Any) -> float:
        return to_number(v)

    @field_validator("risk_score", "market_score", mode="before")
    @classmethod
    def _coerce_optional_score(cls, v: Any) -> float | None:
        return to_optional_number(v)

    @field_validator("year_built", mode="before")
    @classmethod
    def _coerce_year(cls, v: Any) -> int | None:
        f = to_optional_number(v)
        if f is None or f <= 0:
            return None
        return int(f)

    @field_validator("property_type", mode="before")
    @classmethod
    def _coerce_type(cls, v: Any) -> str | None:
        if v is None:
            return None
        s = str(v).strip()
        return s or None

    @field_validator("address", "zipcode", mode="before")
    @classmethod
    def _coerce_str(cls, v: Any) -> str:
        return "" if v is None else str(v)


class PropertyIntelligence(BaseModel):
    """Optional enrichment from property-data providers."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    year_built: int | None = None
    property_type: str | None = None
    roof_age: str | None = None

    @field_validator("year_built", mode="before")
    @classmethod
    def _coerce_year(cls, v: Any) -> int | None:
        f = to_optional_number(v)
        if f is None or f <= 0:
            return None
        return int(f)

    @field_validator("property_type", "roof_age", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str | None:
        if v is None:
            return None
        s = str(v).strip()
        return s or None
