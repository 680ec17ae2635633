from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class BrrrrProjection:
    refi_amount: float
    total_invested: float
    capital_recovered: float   # refi proceeds minus cash in; >= 0 means all capital back
    estimated_rent: float      # monthly
    mortgage_payment: float    # monthly P&I on the refi loan
    expenses: float            # monthly
    monthly_cash_flow: float
    annual_cash_flow: float
    is_perfect_brrrr: bool


@dataclass(frozen=True)
class ExitOption:
    strategy: str
    profit: float
    pros: List[str]


@dataclass(frozen=True)
class ExitComparison:
    flip: ExitOption
    wholesale: ExitOption
    brrrr: ExitOption
    brrrr_projection: BrrrrProjection


@dataclass(frozen=True)
class MaoCheck:
    factor: float
    mao: float
    difference: float  # MAO minus purchase price
    is_good_deal: bool
