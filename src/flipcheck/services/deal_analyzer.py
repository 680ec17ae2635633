from __future__ import annotations

import dataclasses
import math
from typing import Any, Mapping, Sequence

from pydantic import BaseModel

from flipcheck.adapters.config import AppConfig, config
from flipcheck.adapters.deal_mapping import deal_from_payload, intelligence_from_payload
from flipcheck.adapters.logging_utils import deal_context, get_logger
from flipcheck.analysis.exits import compare_exit_strategies, seventy_percent_check
from flipcheck.analysis.market_shocks import apply_market_shock, default_market_shocks
from flipcheck.analysis.profitability import evaluate_deal
from flipcheck.analysis.risk import (
    build_risk_profile,
    default_outcomes,
    default_timeline_risks,
    hidden_costs,
    min_arv,
    timeline_collision,
)
from flipcheck.analysis.scenarios import (
    apply_preset,
    apply_scenario,
    arv_sensitivity,
    run_presets,
    simulate_worst_case,
    timeline_projections,
)
from flipcheck.analysis.scoring import deal_health, scenario_alerts
from flipcheck.domain.assumptions import ExitAssumptions
from flipcheck.domain.deal import Deal
from flipcheck.domain.risk import ScenarioOutcome
from flipcheck.domain.scenarios import ScenarioAdjustment, ScenarioResult

logger = get_logger(__name__)


# ---------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------

def to_jsonable(obj: Any) -> Any:
    """
    Dataclasses / pydantic models -> plain dicts, recursively.

    Non-finite floats (an annualized ROI can overflow) become None so the
    result is always valid JSON.
    """
    if isinstance(obj, ScenarioResult):
        return {
            "name": obj.name,
            "adjustment": obj.adjustment.model_dump(),
            "arv": to_jsonable(obj.arv),
            "holding_months": to_jsonable(obj.holding_months),
            "metrics": to_jsonable(obj.metrics),
            "alerts": scenario_alerts(obj),
        }
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_jsonable(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, BaseModel):
        return to_jsonable(obj.model_dump())
    if isinstance(obj, Mapping):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]
    if isinstance(obj, float) and not math.isfinite(obj):
        return None
    return obj


# ---------------------------------------------------------------------
# Config -> engine parameters
# ---------------------------------------------------------------------

def score_defaults(settings: AppConfig = config) -> dict[str, float]:
    return {
        "default_risk_score": settings.DEFAULT_RISK_SCORE,
        "default_market_score": settings.DEFAULT_MARKET_SCORE,
    }


def exit_assumptions(settings: AppConfig = config) -> ExitAssumptions:
    return ExitAssumptions(
        wholesale_arv_factor=settings.WHOLESALE_ARV_FACTOR,
        refi_percent=settings.BRRRR_REFI_PERCENT,
        refi_interest_rate=settings.BRRRR_INTEREST_RATE,
        refi_term_years=settings.BRRRR_TERM_YEARS,
        rent_to_value=settings.RENT_TO_VALUE,
        expense_ratio=settings.BRRRR_EXPENSE_RATIO,
        closing_cost_pct=settings.BRRRR_CLOSING_COST_PCT,
    )


# ---------------------------------------------------------------------
# Single-purpose entry points (used by the HTTP layer)
# ---------------------------------------------------------------------

def deal_metrics(payload: Mapping[str, Any] | Deal, settings: AppConfig = config) -> dict[str, Any]:
    deal = deal_from_payload(payload)
    metrics = evaluate_deal(deal, **score_defaults(settings))
    return {
        "metrics": to_jsonable(metrics),
        "health": deal_health(metrics.roi, metrics.profit_margin),
    }


def preset_scenario(
    payload: Mapping[str, Any] | Deal,
    preset: str,
    settings: AppConfig = config,
) -> dict[str, Any]:
    deal = deal_from_payload(payload)
    return to_jsonable(apply_preset(deal, preset, **score_defaults(settings)))


def custom_scenario(
    payload: Mapping[str, Any] | Deal,
    adjustment: ScenarioAdjustment | Mapping[str, Any],
    settings: AppConfig = config,
) -> dict[str, Any]:
    deal = deal_from_payload(payload)
    if not isinstance(adjustment, ScenarioAdjustment):
        adjustment = ScenarioAdjustment(**adjustment)
    return to_jsonable(apply_scenario(deal, adjustment, name="custom", **score_defaults(settings)))


def risk_analysis(
    payload: Mapping[str, Any] | Deal,
    *,
    outcomes: Sequence[ScenarioOutcome] | None = None,
    arv_shift_percent: float = 0.0,
    target_profit: float | None = None,
    settings: AppConfig = config,
) -> dict[str, Any]:
    """
    Risk picture for one deal.

    Without explicit outcomes the default Best / Most Likely / Worst set is used.
    """
    deal = deal_from_payload(payload)
    intel = intelligence_from_payload(payload) if isinstance(payload, Mapping) else None
    defaults = score_defaults(settings)

    metrics = evaluate_deal(deal, **defaults)
    if outcomes is None:
        outcomes = default_outcomes(deal, **defaults)

    year_built = (intel.year_built if intel else None) or deal.year_built
    timeline = default_timeline_risks(year_built, deal.holding_months, settings.DELAY_COST_PER_DAY)
    hidden = hidden_costs(deal, intel)

    profile = build_risk_profile(
        deal,
        metrics,
        outcomes,
        hidden=hidden,
        timeline=timeline,
        arv_shift_percent=arv_shift_percent,
        curve_min_profit=settings.CURVE_MIN_PROFIT,
        curve_max_profit=settings.CURVE_MAX_PROFIT,
        curve_steps=settings.CURVE_STEPS,
    )

    target = settings.DEFAULT_TARGET_PROFIT if target_profit is None else target_profit
    return {
        "outcomes": to_jsonable(list(outcomes)),
        "profile": to_jsonable(profile),
        "hidden_costs": to_jsonable(hidden),
        "timeline_risks": to_jsonable(timeline),
        "timeline_collision": to_jsonable(timeline_collision(timeline, settings.DELAY_COST_PER_DAY)),
        "min_arv": {
            "target_profit": target,
            "min_arv": min_arv(deal, metrics, target),
            "break_even_arv": min_arv(deal, metrics, 0.0),
        },
        "worst_case": to_jsonable(simulate_worst_case(deal, **defaults)),
        "market_shocks": {
            kind: {
                "shock": to_jsonable(shock),
                "net_profit": to_jsonable(apply_market_shock(deal, metrics, kind, shock, **defaults).net_profit),
            }
            for kind, shock in default_market_shocks().items()
        },
    }


def exit_analysis(payload: Mapping[str, Any] | Deal, settings: AppConfig = config) -> dict[str, Any]:
    deal = deal_from_payload(payload)
    metrics = evaluate_deal(deal, **score_defaults(settings))
    return {
        "comparison": to_jsonable(compare_exit_strategies(deal, metrics, exit_assumptions(settings))),
        "mao": to_jsonable(seventy_percent_check(deal, metrics)),
        "mao_conservative": to_jsonable(seventy_percent_check(deal, metrics, conservative=True)),
    }


# ---------------------------------------------------------------------
# Full analysis
# ---------------------------------------------------------------------

def analyze_deal(
    raw_payload: Mapping[str, Any] | Deal,
    *,
    arv_shift_percent: float = 0.0,
    target_profit: float | None = None,
    settings: AppConfig = config,
) -> dict[str, Any]:
    """
    One full evaluation: base metrics, every preset, stress tests, risk
    profile, exit comparison and the 70% rule, as a single JSON-ready dict.
    """
    deal = deal_from_payload(raw_payload)
    defaults = score_defaults(settings)

    metrics = evaluate_deal(deal, **defaults)
    scenarios = run_presets(deal, **defaults)

    risk = risk_analysis(
        raw_payload,
        arv_shift_percent=arv_shift_percent,
        target_profit=target_profit,
        settings=settings,
    )
    exits = exit_analysis(deal, settings)

    result: dict[str, Any] = {
        "deal": deal.model_dump(),
        "metrics": to_jsonable(metrics),
        "health": deal_health(metrics.roi, metrics.profit_margin),
        "scenarios": {name: to_jsonable(res) for name, res in scenarios.items()},
        "timeline": to_jsonable(timeline_projections(deal, **defaults)),
        "arv_sensitivity": to_jsonable(arv_sensitivity(deal, **defaults)),
        "risk": risk,
        "exits": exits,
    }

    logger.info("deal_analyzed", extra={"context": deal_context(deal, metrics)})
    return result
