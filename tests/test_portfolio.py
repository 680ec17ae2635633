import pandas as pd
import pytest

from flipcheck.adapters.storage import read_deals_frame, write_frame
from flipcheck.services.portfolio import (
    SUMMARY_COLUMNS,
    evaluate_deals,
    rank_deals,
    seventy_percent_screen,
    summarize_by_risk,
)

from fixtures.deals import textbook_payload_camel


def _frame() -> pd.DataFrame:
    good = textbook_payload_camel()
    thin = textbook_payload_camel() | {"address": "9 Thin Margin Rd", "arv": 160_000}
    empty = {"address": "0 Nowhere"}
    return pd.DataFrame([good, thin, empty])


def test_evaluate_deals_summary_rows():
    summary = evaluate_deals(_frame())

    assert list(summary.columns) == SUMMARY_COLUMNS
    assert len(summary) == 3
    assert summary.loc[0, "net_profit"] == pytest.approx(42_600)
    assert summary.loc[0, "risk"] == "Low"
    # missing numbers in a mixed frame come through as NaN and map to 0
    assert summary.loc[2, "net_profit"] == 0
    assert summary.loc[2, "risk"] == "High"


def test_evaluate_deals_accepts_records():
    summary = evaluate_deals([textbook_payload_camel()])
    assert summary.loc[0, "score"] == 79


def test_evaluate_deals_skips_unmappable_rows():
    summary = evaluate_deals([textbook_payload_camel(), "not a deal", 42])
    assert len(summary) == 1


def test_rank_deals_orders_and_filters():
    summary = evaluate_deals(_frame())
    ranked = rank_deals(summary)
    assert ranked.loc[0, "address"] == "123 Test St"
    assert list(ranked["score"]) == sorted(ranked["score"], reverse=True)

    low_only = rank_deals(summary, risk=["Low"])
    assert set(low_only["risk"]) == {"Low"}

    assert len(rank_deals(summary, top=1)) == 1
    assert rank_deals(summary, min_score=101).empty


def test_summarize_by_risk():
    summary = evaluate_deals(_frame())
    by_risk = summarize_by_risk(summary)

    assert list(by_risk.columns) == ["risk", "deals", "avg_score", "avg_roi", "total_net_profit"]
    assert by_risk["deals"].sum() == 3
    tiers = list(by_risk["risk"])
    assert tiers == [t for t in ["Low", "Medium", "High"] if t in tiers]

    assert summarize_by_risk(summary.iloc[0:0]).empty


def test_seventy_percent_screen():
    df = pd.DataFrame(
        {
            "arv": [200_000, 200_000],
            "rehab_costs": [30_000, 30_000],
            "purchase_price": [100_000, 120_000],
        }
    )
    out = seventy_percent_screen(df)
    assert list(out["mao"]) == pytest.approx([110_000, 110_000])
    assert list(out["passes_70_rule"]) == [True, False]


def test_storage_round_trip(tmp_path):
    summary = evaluate_deals([textbook_payload_camel()])
    path = tmp_path / "out" / "ranked.csv"
    write_frame(summary, path)

    back = read_deals_frame(path)
    assert back.loc[0, "net_profit"] == pytest.approx(42_600)

    with pytest.raises(FileNotFoundError):
        read_deals_frame(tmp_path / "missing.csv")
