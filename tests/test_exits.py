import pytest

from flipcheck.analysis.exits import (
    brrrr_projection,
    compare_exit_strategies,
    mao_70_rule,
    seventy_percent_check,
    wholesale_spread,
)
from flipcheck.analysis.profitability import evaluate_deal
from flipcheck.domain.assumptions import ExitAssumptions
from flipcheck.domain.finance import monthly_mortgage_payment

from fixtures.deals import textbook_flip


def test_mortgage_payment_matches_amortization_table():
    # 150k at 7% over 30 years
    assert monthly_mortgage_payment(150_000, 0.07, 30) == pytest.approx(997.95, abs=0.01)
    assert monthly_mortgage_payment(120_000, 0.0, 10) == pytest.approx(1_000)
    assert monthly_mortgage_payment(120_000, 0.07, 0) == 0


def test_brrrr_projection_textbook_flip():
    b = brrrr_projection(100_000, 200_000, 30_000)

    assert b.refi_amount == pytest.approx(150_000)
    assert b.total_invested == pytest.approx(133_000)
    assert b.capital_recovered == pytest.approx(17_000)
    assert b.is_perfect_brrrr
    assert b.estimated_rent == pytest.approx(1_600)
    assert b.expenses == pytest.approx(640)
    assert b.monthly_cash_flow == pytest.approx(1_600 - 997.95 - 640, abs=0.01)
    assert b.annual_cash_flow == pytest.approx(b.monthly_cash_flow * 12)


def test_brrrr_refi_percent_override():
    b = brrrr_projection(100_000, 200_000, 30_000, refi_percent=60)
    assert b.refi_amount == pytest.approx(120_000)
    assert not b.is_perfect_brrrr


def test_wholesale_spread_floors_at_zero():
    assert wholesale_spread(200_000, 30_000, 100_000) == pytest.approx(10_000)
    assert wholesale_spread(200_000, 30_000, 150_000) == 0


def test_compare_exit_strategies():
    deal = textbook_flip()
    m = evaluate_deal(deal)
    cmp = compare_exit_strategies(deal, m)

    assert cmp.flip.profit == pytest.approx(42_600)
    assert cmp.wholesale.profit == pytest.approx(10_000)
    assert cmp.brrrr.profit == pytest.approx(cmp.brrrr_projection.annual_cash_flow)
    assert cmp.flip.pros == ["Large lump sum", "Clean exit", "No tenant headaches"]
    assert cmp.wholesale.pros == ["Quick cash", "No rehab risk", "Minimal capital required"]
    assert cmp.brrrr.pros == ["Wealth building", "Tax benefits", "Passive income"]


def test_compare_exit_strategies_with_custom_assumptions():
    deal = textbook_flip()
    m = evaluate_deal(deal)
    a = ExitAssumptions(wholesale_arv_factor=0.75, refi_percent=80, rent_to_value=0.01)
    cmp = compare_exit_strategies(deal, m, a)

    assert cmp.wholesale.profit == pytest.approx(20_000)
    assert cmp.brrrr_projection.refi_amount == pytest.approx(160_000)
    assert cmp.brrrr_projection.estimated_rent == pytest.approx(2_000)


def test_mao_70_rule():
    assert mao_70_rule(200_000, 30_000) == pytest.approx(110_000)
    assert mao_70_rule(200_000, 30_000, conservative=True) == pytest.approx(100_000)


def test_seventy_percent_check_uses_all_in_rehab():
    deal = textbook_flip()
    m = evaluate_deal(deal)

    check = seventy_percent_check(deal, m)
    assert check.mao == pytest.approx(107_000)
    assert check.difference == pytest.approx(7_000)
    assert check.is_good_deal

    strict = seventy_percent_check(deal, m, conservative=True)
    assert strict.factor == 0.65
    assert strict.difference == pytest.approx(-3_000)
    assert not strict.is_good_deal

    assert seventy_percent_check(deal).mao == pytest.approx(110_000)
