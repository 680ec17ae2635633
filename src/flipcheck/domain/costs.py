# src/flipcheck/domain/costs.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, List


@dataclass(frozen=True)
class LineItem:
    label: str
    amount: float


class CostCategory(ABC):
    """
    Common shape of the five category outputs: named line items + a total.

    `total` is always the sum of `line_items()` amounts.
    """

    name: ClassVar[str] = ""
    total: float

    @abstractmethod
    def line_items(self) -> List[LineItem]:
        ...


@dataclass(frozen=True)
class AcquisitionCosts(CostCategory):
    name: ClassVar[str] = "acquisition"

    down_payment: float
    hard_money_points: float
    inspection: float
    appraisal: float
    title_insurance: float
    closing_costs_buying: float
    transfer_tax: float
    fees_only: float  # total minus down payment; purchase price is counted separately
    total: float

    def line_items(self) -> List[LineItem]:
        return [
            LineItem("Down Payment", self.down_payment),
            LineItem("Hard Money Points", self.hard_money_points),
            LineItem("Inspection", self.inspection),
            LineItem("Appraisal", self.appraisal),
            LineItem("Title Insurance", self.title_insurance),
            LineItem("Closing Costs (Buy)", self.closing_costs_buying),
            LineItem("Transfer Tax", self.transfer_tax),
        ]


@dataclass(frozen=True)
class FinancingCosts(CostCategory):
    name: ClassVar[str] = "financing"

    loan_amount: float
    monthly_interest: float
    total_interest: float
    holding_months: float
    total: float

    def line_items(self) -> List[LineItem]:
        return [LineItem("Hard Money Interest", self.total_interest)]


@dataclass(frozen=True)
class RehabCosts(CostCategory):
    name: ClassVar[str] = "rehab"

    base_rehab: float
    overrun_percent: float
    overrun: float
    contingency: float
    permit_fees: float
    total: float

    def line_items(self) -> List[LineItem]:
        return [
            LineItem("Base Rehab Budget", self.base_rehab),
            LineItem("Overrun", self.overrun),
            LineItem("Contingency", self.contingency),
            LineItem("Permit Fees", self.permit_fees),
        ]


@dataclass(frozen=True)
class HoldingCosts(CostCategory):
    name: ClassVar[str] = "holding"

    monthly_tax: float
    monthly_insurance: float
    monthly_utilities: float
    monthly_hoa: float
    monthly_lawn: float
    total_monthly: float
    holding_months: float
    total: float

    def line_items(self) -> List[LineItem]:
        m = self.holding_months
        return [
            LineItem("Property Tax", self.monthly_tax * m),
            LineItem("Insurance", self.monthly_insurance * m),
            LineItem("Utilities", self.monthly_utilities * m),
            LineItem("HOA", self.monthly_hoa * m),
            LineItem("Lawn Maintenance", self.monthly_lawn * m),
        ]


@dataclass(frozen=True)
class SellingCosts(CostCategory):
    name: ClassVar[str] = "selling"

    sale_price: float  # ARV after any scenario adjustment
    realtor_commission: float
    closing_costs_selling: float
    staging: float
    marketing: float
    fallthrough_cost: float  # buyer-financing fall-through reserve
    total: float

    def line_items(self) -> List[LineItem]:
        return [
            LineItem("Realtor Commission", self.realtor_commission),
            LineItem("Closing Costs (Sell)", self.closing_costs_selling),
            LineItem("Staging", self.staging),
            LineItem("Marketing", self.marketing),
            LineItem("Financing Fall-through Reserve", self.fallthrough_cost),
        ]
