# src/flipcheck/api/http.py
from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException

from flipcheck.adapters.config import config
from flipcheck.adapters.logging_utils import get_logger
from flipcheck.domain.risk import ScenarioOutcome
from flipcheck.domain.scenarios import SCENARIO_PRESETS, ScenarioAdjustment
from flipcheck.services.deal_analyzer import (
    analyze_deal,
    custom_scenario,
    deal_metrics,
    exit_analysis,
    preset_scenario,
    risk_analysis,
)
from .schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    CustomScenarioRequest,
    DealRequest,
    PresetItem,
    RiskRequest,
)

app = FastAPI(title="flipcheck")

log = get_logger(__name__)

# request-level knobs; everything else in the body is deal data
_ANALYZE_KNOBS = {"arv_shift_percent", "target_profit", "outcomes"}


def _deal_body(payload: DealRequest) -> dict[str, Any]:
    return {k: v for k, v in payload.model_dump().items() if k not in _ANALYZE_KNOBS}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "env": config.ENV}


@app.get("/scenarios/presets", response_model=list[PresetItem])
def list_presets() -> list[PresetItem]:
    return [PresetItem(name=name, **adj.model_dump()) for name, adj in SCENARIO_PRESETS.items()]


@app.post("/analyze", response_model=AnalyzeResponse)
def analyze_endpoint(payload: AnalyzeRequest) -> AnalyzeResponse:
    try:
        result = analyze_deal(
            _deal_body(payload),
            arv_shift_percent=payload.arv_shift_percent,
            target_profit=payload.target_profit,
        )
        return AnalyzeResponse(**result)
    except ValueError as e:
        log.warning("analyze_failed", extra={"context": {"error": str(e)}})
        raise HTTPException(status_code=400, detail=str(e)) from e


@app.post("/metrics")
def metrics_endpoint(payload: DealRequest) -> dict[str, Any]:
    return deal_metrics(_deal_body(payload))


# declared before /scenarios/{preset} so "custom" is not taken as a preset name
@app.post("/scenarios/custom")
def custom_scenario_endpoint(payload: CustomScenarioRequest) -> dict[str, Any]:
    adjustment = ScenarioAdjustment(
        rehab_overrun_percent=payload.rehab_overrun_percent,
        holding_period_adjustment=payload.holding_period_adjustment,
        market_appreciation_percent=payload.market_appreciation_percent,
        permit_delay_days=payload.permit_delay_days,
    )
    return custom_scenario(payload.deal, adjustment)


@app.post("/scenarios/{preset}")
def preset_scenario_endpoint(preset: str, payload: DealRequest) -> dict[str, Any]:
    try:
        return preset_scenario(_deal_body(payload), preset)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@app.post("/risk")
def risk_endpoint(payload: RiskRequest) -> dict[str, Any]:
    outcomes = None
    if payload.outcomes is not None:
        outcomes = [ScenarioOutcome(name=o.name, profit=o.profit, probability=o.probability) for o in payload.outcomes]
    try:
        return risk_analysis(
            _deal_body(payload),
            outcomes=outcomes,
            arv_shift_percent=payload.arv_shift_percent,
            target_profit=payload.target_profit,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@app.post("/exits")
def exits_endpoint(payload: DealRequest) -> dict[str, Any]:
    return exit_analysis(_deal_body(payload))
