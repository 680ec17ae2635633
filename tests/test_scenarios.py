import pytest
from hypothesis import given, settings, strategies as st

from flipcheck.analysis.profitability import evaluate_deal
from flipcheck.analysis.scenarios import (
    apply_preset,
    apply_scenario,
    arv_sensitivity,
    run_presets,
    simulate_risk_scenario,
    simulate_worst_case,
    timeline_projections,
)
from flipcheck.domain.deal import Deal
from flipcheck.domain.scenarios import SCENARIO_PRESETS, ScenarioAdjustment, get_preset

from fixtures.deals import textbook_flip, textbook_flip_with_carry


def test_base_preset_reproduces_evaluation():
    deal = textbook_flip_with_carry().model_copy(update={"rehab_overrun_percent": 12.0})
    base = apply_preset(deal, "base")
    m = evaluate_deal(deal)

    assert base.net_profit == m.net_profit
    assert base.roi == m.roi
    assert base.total_project_cost == m.total_project_cost
    assert base.score == m.score
    assert base.metrics == m


@pytest.mark.parametrize(
    "preset, expected_net",
    [
        ("base", 42_600),
        ("best", 55_500),
        ("worst_a", 14_500),
        ("worst_b", 14_400),
    ],
)
def test_preset_profits_for_textbook_flip(preset, expected_net):
    assert apply_preset(textbook_flip(), preset).net_profit == pytest.approx(expected_net)


def test_worst_b_counts_permit_delay_days_as_months():
    res = apply_preset(textbook_flip(), "worst_b")
    assert res.holding_months == pytest.approx(11)
    assert res.arv == pytest.approx(180_000)
    assert res.metrics.rehab.total == pytest.approx(39_000)


def test_preset_names_are_case_insensitive_and_unknown_raises():
    assert apply_preset(textbook_flip(), " Best ").name == "best"
    with pytest.raises(ValueError):
        get_preset("apocalypse")
    with pytest.raises(ValueError):
        apply_preset(textbook_flip(), "worst")


def test_run_presets_covers_every_preset():
    results = run_presets(textbook_flip())
    assert set(results) == set(SCENARIO_PRESETS)
    assert results["best"].net_profit > results["base"].net_profit > results["worst_a"].net_profit


def test_scenario_risk_tier_is_score_based():
    res = apply_scenario(textbook_flip(), ScenarioAdjustment(market_appreciation_percent=-30))
    # net -12,000: roi and cash flow components vanish, 15 + 14 left
    assert res.score == 29
    assert res.risk == "High"


def test_worst_case_simulation_textbook_flip():
    w = simulate_worst_case(textbook_flip())
    assert w.market_crash == pytest.approx(6_200)
    assert w.major_repair == pytest.approx(22_600)
    assert w.extended_timeline == pytest.approx(37_800)
    assert w.financing_fallthrough == pytest.approx(39_400)


@settings(max_examples=60)
@given(
    price=st.floats(min_value=50_000, max_value=500_000),
    uplift=st.floats(min_value=1.3, max_value=2.5),
    rehab=st.floats(min_value=5_000, max_value=120_000),
    overrun=st.floats(min_value=0, max_value=30),
    months=st.floats(min_value=1, max_value=12),
    carry=st.floats(min_value=0, max_value=1_500),
)
def test_worst_case_never_beats_base(price, uplift, rehab, overrun, months, carry):
    deal = Deal(
        purchase_price=price,
        arv=price * uplift + rehab,
        down_payment_percent=20,
        hard_money_rate=12,
        hard_money_points=2,
        rehab_costs=rehab,
        rehab_overrun_percent=overrun,
        contingency_percent=10,
        holding_months=months,
        property_tax=carry,
        realtor_commission=6,
        closing_costs_selling=3,
    )
    base = evaluate_deal(deal).net_profit
    w = simulate_worst_case(deal)

    for v in (w.market_crash, w.major_repair, w.extended_timeline, w.financing_fallthrough):
        assert v <= base + 1e-6


def test_simulate_risk_scenario_folds_permit_delay_into_the_hold():
    deal = textbook_flip()
    m = evaluate_deal(deal)
    r = simulate_risk_scenario(deal, m, permit_delay_months=2, market_decline_percent=10, rehab_overrun_percent=20)

    # 8 month hold: 180k - (100k + 1.6k fees + 6.4k interest + 39k rehab) - 16.2k selling
    assert r.profit == pytest.approx(16_800)
    assert r.impact == pytest.approx(42_600 - 16_800)


def test_timeline_projections_lose_800_a_month():
    points = timeline_projections(textbook_flip())
    assert [p.month for p in points] == list(range(1, 13))
    assert points[0].profit == pytest.approx(46_600)
    assert points[-1].profit == pytest.approx(37_800)
    assert points[5].profit == pytest.approx(evaluate_deal(textbook_flip()).net_profit)


def test_arv_sensitivity_bands():
    rows = arv_sensitivity(textbook_flip())
    by_change = {r.arv_change_percent: r for r in rows}

    assert [r.arv_change_percent for r in rows] == [-10, -5, 0, 5, 10]
    assert by_change[-10].net_profit == pytest.approx(24_400)
    assert by_change[-10].band == "good"
    assert by_change[0].band == "strong"
    assert by_change[10].arv == pytest.approx(220_000)
    assert by_change[10].net_profit == pytest.approx(60_800)

    loss = arv_sensitivity(textbook_flip(), changes=(-40,))[0]
    assert loss.band == "loss"
    assert not loss.is_profitable


def test_adjustment_accepts_loose_inputs():
    adj = ScenarioAdjustment(rehab_overrun_percent="", market_appreciation_percent="5%", permit_delay_days=None)
    assert adj.rehab_overrun_percent is None
    assert adj.market_appreciation_percent == 5
    assert adj.permit_delay_days == 0
