import math

import pytest

from flipcheck.analysis.costs import (
    acquisition_costs,
    financing_costs,
    holding_costs,
    rehab_costs,
    selling_costs,
)
from flipcheck.domain.costs import CostCategory, LineItem
from flipcheck.domain.deal import Deal

from fixtures.deals import textbook_flip, textbook_flip_with_carry


def test_textbook_flip_hand_checked_costs():
    deal = textbook_flip()

    acq = acquisition_costs(deal)
    assert acq.down_payment == pytest.approx(20_000)
    assert acq.hard_money_points == pytest.approx(1_600)
    assert acq.fees_only == pytest.approx(1_600)
    assert acq.total == pytest.approx(21_600)

    fin = financing_costs(deal)
    assert fin.loan_amount == pytest.approx(80_000)
    assert fin.monthly_interest == pytest.approx(800)
    assert fin.total_interest == pytest.approx(4_800)
    assert fin.total == fin.total_interest

    rehab = rehab_costs(deal)
    assert rehab.contingency == pytest.approx(3_000)
    assert rehab.overrun == 0
    assert rehab.total == pytest.approx(33_000)

    sell = selling_costs(deal)
    assert sell.realtor_commission == pytest.approx(12_000)
    assert sell.closing_costs_selling == pytest.approx(6_000)
    assert sell.total == pytest.approx(18_000)


def test_fees_only_excludes_down_payment():
    deal = textbook_flip().model_copy(
        update={"inspection_cost": 500.0, "appraisal_cost": 450.0, "transfer_tax_rate": 1.0}
    )
    acq = acquisition_costs(deal)

    assert acq.transfer_tax == pytest.approx(1_000)
    assert acq.fees_only == pytest.approx(1_600 + 500 + 450 + 1_000)
    assert acq.total - acq.fees_only == pytest.approx(acq.down_payment)


def test_rehab_override_none_keeps_deal_overrun_and_zero_replaces_it():
    deal = textbook_flip().model_copy(update={"rehab_overrun_percent": 15.0})

    kept = rehab_costs(deal)
    assert kept.overrun_percent == 15.0
    assert kept.overrun == pytest.approx(4_500)

    zeroed = rehab_costs(deal, 0)
    assert zeroed.overrun_percent == 0
    assert zeroed.overrun == 0
    assert zeroed.total == pytest.approx(33_000)

    negative = rehab_costs(deal, -10)
    assert negative.overrun == pytest.approx(-3_000)


def test_months_override_scales_financing_and_holding():
    deal = textbook_flip_with_carry()

    assert holding_costs(deal).total == pytest.approx(3_000)
    assert holding_costs(deal, 9).total == pytest.approx(4_500)
    assert financing_costs(deal, 9).total == pytest.approx(7_200)
    assert holding_costs(deal, 9).holding_months == 9


def test_selling_costs_follow_adjusted_sale_price():
    deal = textbook_flip().model_copy(
        update={"staging_cost": 2_000.0, "marketing_cost": 500.0, "buyer_financing_fallthrough": 1.0}
    )
    sell = selling_costs(deal, -10)

    assert sell.sale_price == pytest.approx(180_000)
    assert sell.realtor_commission == pytest.approx(10_800)
    assert sell.closing_costs_selling == pytest.approx(5_400)
    assert sell.fallthrough_cost == pytest.approx(1_800)
    assert sell.total == pytest.approx(10_800 + 5_400 + 2_000 + 500 + 1_800)


@pytest.mark.parametrize(
    "calc",
    [acquisition_costs, financing_costs, rehab_costs, holding_costs, selling_costs],
)
def test_line_items_sum_to_total(calc):
    deal = textbook_flip_with_carry().model_copy(
        update={
            "inspection_cost": 400.0,
            "title_insurance": 1_100.0,
            "closing_costs_buying": 900.0,
            "permit_fees": 1_500.0,
            "rehab_overrun_percent": 12.0,
            "hoa": 75.0,
            "staging_cost": 1_200.0,
        }
    )
    cat = calc(deal)
    assert math.isclose(sum(li.amount for li in cat.line_items()), cat.total, rel_tol=1e-9, abs_tol=1e-9)


def test_empty_deal_costs_are_zero():
    deal = Deal()
    for cat in (
        acquisition_costs(deal),
        financing_costs(deal),
        rehab_costs(deal),
        holding_costs(deal),
        selling_costs(deal),
    ):
        assert cat.total == 0


def test_cost_category_requires_line_items():
    with pytest.raises(TypeError):
        CostCategory()

    class NoItems(CostCategory):
        total = 0.0

    with pytest.raises(TypeError):
        NoItems()

    class OneItem(CostCategory):
        name = "one"
        total = 5.0

        def line_items(self):
            return [LineItem("only", 5.0)]

    assert OneItem().line_items() == [LineItem("only", 5.0)]
