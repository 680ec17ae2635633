import pytest
from hypothesis import given, strategies as st

from flipcheck.analysis.scenarios import apply_scenario
from flipcheck.analysis.scoring import (
    cash_flow_proxy,
    deal_health,
    deal_quality_score,
    risk_tier,
    scenario_alerts,
)
from flipcheck.domain.scenarios import ScenarioAdjustment

from fixtures.deals import textbook_flip

finite = st.floats(allow_nan=False, allow_infinity=False)


@given(roi=finite, cf=finite, risk=finite, market=finite)
def test_score_always_in_bounds(roi, cf, risk, market):
    score = deal_quality_score(roi, cf, risk, market)
    assert isinstance(score, int)
    assert 0 <= score <= 100


def test_score_components():
    assert deal_quality_score(20, 500, 0, 100) == 100
    assert deal_quality_score(-50, -100, 100, 0) == 0
    # 10% roi -> 50 * .3, $250 -> 50 * .2, risk 50 -> 50 * .3, market 50 -> 50 * .2
    assert deal_quality_score(10, 250, 50, 50) == 50


def test_score_rounds_half_up():
    # roi component 5 * .3 = 1.5 -> 2, everything else zero
    assert deal_quality_score(1, 0, 100, 0) == 2


def test_cash_flow_proxy():
    assert cash_flow_proxy(12_000) == 1_000
    assert cash_flow_proxy(0) == 0
    assert cash_flow_proxy(-5_000) == 0


@pytest.mark.parametrize(
    "score, tier",
    [(100, "Low"), (76, "Low"), (75, "Medium"), (51, "Medium"), (50, "High"), (0, "High")],
)
def test_risk_tier_thresholds(score, tier):
    assert risk_tier(score) == tier


def test_deal_health():
    assert deal_health(20, 15) == "healthy"
    assert deal_health(20, 10) == "caution"
    assert deal_health(10, 9) == "caution"
    assert deal_health(8, 20) == "critical"


def test_scenario_alerts():
    deal = textbook_flip()

    ok = apply_scenario(deal, ScenarioAdjustment())
    assert scenario_alerts(ok) == []

    long_hold = apply_scenario(deal, ScenarioAdjustment(holding_period_adjustment=7))
    assert [a["message"] for a in scenario_alerts(long_hold)] == ["Timeline extends beyond 1 year"]

    crash = apply_scenario(deal, ScenarioAdjustment(market_appreciation_percent=-40))
    types = {a["type"] for a in scenario_alerts(crash)}
    assert types == {"warning", "danger"}
