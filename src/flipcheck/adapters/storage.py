from pathlib import Path

import pandas as pd

SUPPORTED_SUFFIXES = (".csv", ".parquet", ".json")


def read_deals_frame(path: str | Path) -> pd.DataFrame:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"deal file not found: {p}")
    if p.suffix == ".parquet":
        return pd.read_parquet(p)
    if p.suffix == ".json":
        return pd.read_json(p, orient="records")
    return pd.read_csv(p)


def write_frame(df: pd.DataFrame, path: str | Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    if p.suffix == ".parquet":
        df.to_parquet(p, index=False)
    elif p.suffix == ".json":
        df.to_json(p, orient="records", indent=2)
    else:
        df.to_csv(p, index=False)
