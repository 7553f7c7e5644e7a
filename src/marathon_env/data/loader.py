"""Data loading utilities for the marathon and air-quality sources."""

from pathlib import Path
from typing import IO, Union

import pandas as pd

from marathon_env.config.features import (
    AGE_GROUP_LABELS,
    AIR_QUALITY_COLS,
    OUTPUT_COLS,
    PERFORMANCE_ALIASES,
    PERFORMANCE_COLS,
    SEX_LABELS,
    SITE_LABELS,
)
from marathon_env.errors import ConfigurationError, DataValidityError

CsvSource = Union[str, Path, IO[str]]


def _read_csv(source: CsvSource, name: str, **kwargs) -> pd.DataFrame:
    try:
        df = pd.read_csv(source, **kwargs)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Cannot read {name} source {source}: {exc}") from exc
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as exc:
        raise ConfigurationError(f"Malformed {name} source {source}: {exc}") from exc
    return df.rename(columns=lambda col: str(col).strip())


def _require_columns(
    df: pd.DataFrame, required: tuple[str, ...], name: str
) -> pd.DataFrame:
    duplicated = sorted(set(df.columns[df.columns.duplicated()]))
    if duplicated:
        raise ConfigurationError(
            f"{name} source has duplicate columns: " + ", ".join(duplicated)
        )
    missing_cols = [col for col in required if col not in df.columns]
    if missing_cols:
        raise ConfigurationError(
            f"{name} source is missing required columns: " + ", ".join(missing_cols)
        )
    return pd.DataFrame(df.loc[:, list(required)])


def _to_categorical(
    series: pd.Series, categories: list[str], name: str, ordered: bool = False
) -> pd.Categorical:
    unknown = sorted(set(series.dropna().astype(str)) - set(categories))
    if unknown:
        raise DataValidityError(f"Unknown {name} labels: {unknown}")
    return pd.Categorical(series, categories=categories, ordered=ordered)


def load_performance(source: CsvSource) -> pd.DataFrame:
    """Load the marathon performance CSV.

    Published dataset headers are renamed to canonical column names and
    extra columns are dropped. A header that names the same column twice,
    directly or through an alias, is rejected.

    Args:
        source: Path or open text handle.

    Returns:
        DataFrame with PERFORMANCE_COLS in order, values as read.

    Raises:
        ConfigurationError: If the source is unreadable or lacks a column.
    """
    df = _read_csv(source, "performance", skipinitialspace=True)
    df = df.rename(columns=PERFORMANCE_ALIASES)
    return _require_columns(df, PERFORMANCE_COLS, "performance")


def load_air_quality(source: CsvSource) -> pd.DataFrame:
    """Load the air-quality CSV (one row per site reading).

    Site names are kept exactly as written, surrounding whitespace included.

    Args:
        source: Path or open text handle.

    Returns:
        DataFrame with the site name and AQI columns.

    Raises:
        ConfigurationError: If the source is unreadable or lacks a column.
    """
    df = _read_csv(source, "air quality")
    return _require_columns(df, AIR_QUALITY_COLS, "air quality")


def load_analysis_table(path: str | Path) -> pd.DataFrame:
    """Load a saved analysis table, restoring categorical columns.

    Raises:
        ConfigurationError: If the file is unreadable or lacks a column.
        DataValidityError: If a site, sex or age group label is unknown.
    """
    df = _read_csv(path, "analysis table")
    df = _require_columns(df, OUTPUT_COLS, "analysis table")
    df["site"] = _to_categorical(df["site"], list(SITE_LABELS.values()), "site")
    df["sex"] = _to_categorical(df["sex"], list(SEX_LABELS.values()), "sex")
    df["age_group"] = _to_categorical(
        df["age_group"], list(AGE_GROUP_LABELS), "age group", ordered=True
    )
    return df
