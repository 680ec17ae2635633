# flipcheck/services/portfolio.py

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Sequence

import numpy as np
import pandas as pd
from loguru import logger
from pydantic import ValidationError

from flipcheck.adapters.config import AppConfig, config
from flipcheck.adapters.deal_mapping import deal_from_payload
from flipcheck.analysis.exits import MAO_FACTOR, MAO_FACTOR_CONSERVATIVE
from flipcheck.analysis.profitability import evaluate_deal
from flipcheck.analysis.scoring import deal_health

# Columns persisted per evaluated deal
SUMMARY_COLUMNS = [
    "address",
    "zipcode",
    "purchase_price",
    "arv",
    "total_cash_invested",
    "total_project_cost",
    "net_profit",
    "roi",
    "annualized_roi",
    "profit_margin",
    "score",
    "risk",
    "health",
]

RISK_ORDER = ["Low", "Medium", "High"]


def _records(deals: pd.DataFrame | Iterable[Mapping[str, Any]]) -> List[Any]:
    if isinstance(deals, pd.DataFrame):
        # NaN cells drop out so aliases further down the list can still match
        return [
            {k: v for k, v in row.items() if not (isinstance(v, float) and np.isnan(v))}
            for row in deals.to_dict(orient="records")
        ]
    return list(deals)


def evaluate_deals(
    deals: pd.DataFrame | Iterable[Mapping[str, Any]],
    settings: AppConfig = config,
) -> pd.DataFrame:
    """
    Score many deals at once.

    Every input row is mapped through the alias adapter and evaluated on its
    own; rows that cannot be mapped are logged and skipped. Returns one row of
    SUMMARY_COLUMNS per evaluated deal, in input order.
    """
    rows: List[Dict[str, Any]] = []
    skipped = 0

    for idx, rec in enumerate(_records(deals)):
        try:
            deal = deal_from_payload(dict(rec))
        except (ValidationError, TypeError, ValueError) as exc:
            skipped += 1
            logger.warning("Skipping deal row", row=idx, error=str(exc))
            continue

        m = evaluate_deal(
            deal,
            default_risk_score=settings.DEFAULT_RISK_SCORE,
            default_market_score=settings.DEFAULT_MARKET_SCORE,
        )
        rows.append(
            {
                "address": deal.address,
                "zipcode": deal.zipcode,
                "purchase_price": deal.purchase_price,
                "arv": deal.arv,
                "total_cash_invested": m.total_cash_invested,
                "total_project_cost": m.total_project_cost,
                "net_profit": m.net_profit,
                "roi": m.roi,
                "annualized_roi": m.annualized_roi,
                "profit_margin": m.profit_margin,
                "score": m.score,
                "risk": m.risk,
                "health": deal_health(m.roi, m.profit_margin),
            }
        )

    logger.info("Evaluated deals", evaluated=len(rows), skipped=skipped)
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def seventy_percent_screen(df: pd.DataFrame, conservative: bool = False) -> pd.DataFrame:
    """
    Vectorized 70% rule over a frame with arv, rehab_costs, purchase_price.

    Adds mao, mao_difference and passes_70_rule.
    """
    factor = MAO_FACTOR_CONSERVATIVE if conservative else MAO_FACTOR

    arv = pd.to_numeric(df["arv"], errors="coerce").fillna(0.0).to_numpy(dtype=float)
    rehab = pd.to_numeric(df["rehab_costs"], errors="coerce").fillna(0.0).to_numpy(dtype=float)
    price = pd.to_numeric(df["purchase_price"], errors="coerce").fillna(0.0).to_numpy(dtype=float)

    mao = arv * factor - rehab
    diff = mao - price

    out = df.copy()
    out["mao"] = mao
    out["mao_difference"] = diff
    out["passes_70_rule"] = diff >= 0
    return out


def rank_deals(
    summary: pd.DataFrame,
    *,
    min_score: int | None = None,
    risk: Sequence[str] | None = None,
    top: int | None = None,
) -> pd.DataFrame:
    """Best first: score, then net profit."""
    out = summary
    if min_score is not None:
        out = out[out["score"] >= min_score]
    if risk:
        out = out[out["risk"].isin(list(risk))]
    out = out.sort_values(["score", "net_profit"], ascending=[False, False], kind="mergesort")
    if top is not None:
        out = out.head(top)
    return out.reset_index(drop=True)


def summarize_by_risk(summary: pd.DataFrame) -> pd.DataFrame:
    """Count, mean score / ROI and total net profit per risk tier (Low, Medium, High)."""
    if summary.empty:
        return pd.DataFrame(
            columns=["risk", "deals", "avg_score", "avg_roi", "total_net_profit"]
        )

    grouped = (
        summary.groupby("risk")
        .agg(
            deals=("score", "size"),
            avg_score=("score", "mean"),
            avg_roi=("roi", "mean"),
            total_net_profit=("net_profit", "sum"),
        )
        .reindex(RISK_ORDER)
        .dropna(subset=["deals"])
        .rename_axis("risk")
        .reset_index()
    )
    grouped["deals"] = grouped["deals"].astype(int)
    return grouped
