# src/flipcheck/domain/assumptions.py
from pydantic import BaseModel


class ExitAssumptions(BaseModel):
    """Rules of thumb behind the wholesale and BRRRR exits. Rates are fractions."""

    wholesale_arv_factor: float = 0.70
    refi_percent: float = 75.0       # percent of ARV
    refi_interest_rate: float = 0.07
    refi_term_years: int = 30
    rent_to_value: float = 0.008     # monthly rent / ARV
    expense_ratio: float = 0.40      # share of rent
    closing_cost_pct: float = 0.03   # of purchase price
