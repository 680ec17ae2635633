import math


def annuity_payment(rate_monthly: float, n_months: int, principal: float) -> float:
    """
    Standard fixed-rate amortization formula:
    M = P * [ r(1+r)^n / ((1+r)^n - 1) ]
    """
    r = rate_monthly
    if n_months <= 0:
        return 0.0
    if r == 0:
        return principal / n_months
    return principal * (r * (1 + r) ** n_months) / ((1 + r) ** n_months - 1)


def monthly_mortgage_payment(principal: float, annual_rate: float, years: int) -> float:
    return annuity_payment(annual_rate / 12.0, years * 12, principal)


def round_half_up(x: float, ndigits: int = 0) -> float:
    # Python's round() is banker's rounding; display values round .5 up.
    scale = 10 ** ndigits
    return math.floor(x * scale + 0.5) / scale


def safe_pct(numerator: float, denominator: float) -> float:
    """numerator / denominator * 100, or 0.0 when the denominator is not positive."""
    if denominator > 0:
        return numerator / denominator * 100.0
    return 0.0
