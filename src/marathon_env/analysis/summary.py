"""Descriptive tables for the analysis table."""

from pathlib import Path

import numpy as np
import pandas as pd
from scipy import stats

from marathon_env.config.features import ENV_COLS, PREDICTOR_COLS, TARGET_COL


def summarize_by(df: pd.DataFrame, by: str | list[str]) -> pd.DataFrame:
    """Summarize %CR per group.

    Args:
        df: Analysis table.
        by: Column or columns to group by (e.g. "site", ["sex", "age_group"]).

    Returns:
        DataFrame with count, mean, std and median of the target per group,
        observed groups only.
    """
    keys = [by] if isinstance(by, str) else list(by)
    summary = (
        df.groupby(keys, observed=True)[TARGET_COL]
        .agg(["count", "mean", "std", "median"])
        .reset_index()
    )
    return summary


def environment_by_site(df: pd.DataFrame) -> pd.DataFrame:
    """Mean environmental readings and AQI per site."""
    cols = [*ENV_COLS, "mean_aqi"]
    return df.groupby("site", observed=True)[cols].mean().reset_index()


def correlation_table(df: pd.DataFrame) -> pd.DataFrame:
    """Pearson correlation of each predictor with %CR.

    Rows missing either value are skipped pairwise. Predictors with fewer
    than three usable rows or no variance get NaN.

    Returns:
        DataFrame with predictor, n, r and p_value sorted by |r| descending.
    """
    rows = []
    for col in PREDICTOR_COLS:
        pair = df[[col, TARGET_COL]].dropna()
        r_value, p_value = np.nan, np.nan
        if len(pair) >= 3 and pair[col].nunique() > 1 and pair[TARGET_COL].nunique() > 1:
            result = stats.pearsonr(pair[col], pair[TARGET_COL])
            r_value, p_value = float(result[0]), float(result[1])
        rows.append({"predictor": col, "n": len(pair), "r": r_value, "p_value": p_value})

    table = pd.DataFrame(rows)
    order = table["r"].abs().sort_values(ascending=False, na_position="last").index
    return table.loc[order].reset_index(drop=True)


def write_summary_tables(df: pd.DataFrame, out_dir: str | Path) -> dict[str, Path]:
    """Write all descriptive tables as CSV.

    Returns:
        Mapping of table name to written path.
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    tables = {
        "by_site": summarize_by(df, "site"),
        "by_sex": summarize_by(df, "sex"),
        "by_age_group": summarize_by(df, "age_group"),
        "by_sex_age_group": summarize_by(df, ["sex", "age_group"]),
        "environment_by_site": environment_by_site(df),
        "correlations": correlation_table(df),
    }

    paths: dict[str, Path] = {}
    for name, table in tables.items():
        path = out_dir / f"{name}.csv"
        table.to_csv(path, index=False)
        print(f"Saved {name} table to {path}")
        paths[name] = path
    return paths
