# entrypoints/cli/evaluate_deals.py
from __future__ import annotations

import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", "src")))

import argparse
from pathlib import Path

import pandas as pd
from loguru import logger

from flipcheck.adapters.storage import read_deals_frame, write_frame
from flipcheck.services.portfolio import (
    evaluate_deals,
    rank_deals,
    seventy_percent_screen,
    summarize_by_risk,
)

# at least one alias of each must be present for a row to mean anything
REQUIRED_ANY_OF = {
    "purchase price": ("purchase_price", "purchasePrice"),
    "arv": ("arv", "ARV", "after_repair_value", "afterRepairValue"),
}


def load_deals(path: Path) -> pd.DataFrame:
    """
    Load deals from CSV / Parquet / JSON records.

    Column names may be snake_case, camelCase or legacy database columns;
    see flipcheck.adapters.deal_mapping for the accepted aliases.
    """
    if not path.exists():
        raise SystemExit(f"Deals file not found: {path}")

    df = read_deals_frame(path)

    missing = [label for label, keys in REQUIRED_ANY_OF.items() if not any(k in df.columns for k in keys)]
    if missing:
        raise SystemExit(f"Deals file missing required columns: {missing}")

    return df


def main() -> None:
    ap = argparse.ArgumentParser(description="Score a file of fix-and-flip deals.")
    ap.add_argument("--input", required=True, help="CSV / Parquet / JSON file of deals")
    ap.add_argument("--out", default=None, help="Where to write the ranked summary (csv/parquet/json)")
    ap.add_argument("--min-score", type=int, default=None, help="Drop deals scoring below this")
    ap.add_argument(
        "--risk",
        nargs="*",
        choices=["Low", "Medium", "High"],
        default=None,
        help="Keep only these risk tiers",
    )
    ap.add_argument("--top", type=int, default=None, help="Keep the N best deals")
    ap.add_argument("--conservative", action="store_true", help="Use the 65%% MAO factor")
    args = ap.parse_args()

    df = load_deals(Path(args.input))
    logger.info("Loaded deals", path=args.input, rows=len(df))

    summary = evaluate_deals(df)

    # the 70% screen lines up row-for-row only when nothing was skipped
    if len(summary) == len(df) and {"arv", "rehab_costs", "purchase_price"}.issubset(df.columns):
        screened = seventy_percent_screen(df, conservative=args.conservative)
        summary["passes_70_rule"] = screened["passes_70_rule"].to_numpy()

    ranked = rank_deals(summary, min_score=args.min_score, risk=args.risk, top=args.top)

    by_risk = summarize_by_risk(summary)
    print(by_risk.to_string(index=False))
    print()
    print(ranked.head(20).to_string(index=False))

    if args.out:
        write_frame(ranked, args.out)
        logger.info("Wrote ranked deals", out=args.out, rows=len(ranked))


if __name__ == "__main__":
    main()
