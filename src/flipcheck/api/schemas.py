# src/flipcheck/api/schemas.py
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# --------------------------------------------
# Requests
# --------------------------------------------

class DealRequest(BaseModel):
    """
    Raw deal payload.

    Kept permissive: camelCase, snake_case and legacy column names all pass
    through untouched and are resolved by the deal mapping adapter.
    """
    model_config = ConfigDict(extra="allow")


class AnalyzeRequest(DealRequest):
    arv_shift_percent: float = 0.0
    target_profit: float | None = None


class OutcomeIn(BaseModel):
    name: str
    profit: float
    probability: float = Field(ge=0, le=100)


class RiskRequest(DealRequest):
    outcomes: list[OutcomeIn] | None = None
    arv_shift_percent: float = 0.0
    target_profit: float | None = None


class CustomScenarioRequest(BaseModel):
    deal: dict[str, Any]
    rehab_overrun_percent: float | None = None
    holding_period_adjustment: float = 0.0
    market_appreciation_percent: float = 0.0
    permit_delay_days: float = 0.0


# --------------------------------------------
# Responses
# --------------------------------------------

class AnalyzeResponse(BaseModel):
    """
    The analyzer returns a rich nested dict; only the top-level keys are pinned.
    """
    model_config = ConfigDict(extra="allow")

    deal: dict[str, Any]
    metrics: dict[str, Any]
    health: str
    scenarios: dict[str, Any]
    risk: dict[str, Any]
    exits: dict[str, Any]


class PresetItem(BaseModel):
    name: str
    rehab_overrun_percent: float | None
    holding_period_adjustment: float
    market_appreciation_percent: float
    permit_delay_days: float
