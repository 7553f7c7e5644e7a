"""Cleaning, aggregation and derivation stages for the analysis table.

Every function takes a DataFrame and returns a new one; inputs are never
modified in place.
"""

from typing import cast

import pandas as pd

from marathon_env.config.features import (
    AGE_GROUP_LABELS,
    AGE_GROUPS,
    ENV_COLS,
    NUMERIC_COLS,
    SEX_LABELS,
    SITE_LABELS,
)
from marathon_env.errors import DataValidityError


def coerce_environment(df: pd.DataFrame) -> pd.DataFrame:
    """Coerce environmental readings and %CR to numeric.

    Values that cannot be parsed become NaN so Filtering can drop them.

    Args:
        df: Raw performance DataFrame.

    Returns:
        Copy of df with NUMERIC_COLS as float columns.
    """
    df = df.copy()
    for col in NUMERIC_COLS:
        df[col] = pd.to_numeric(df[col], errors="coerce").astype(float)
    return df


def _map_codes(series: pd.Series, labels: dict[int, str], name: str) -> pd.Categorical:
    codes = pd.to_numeric(series, errors="coerce")
    valid = codes.isin(list(labels))
    if not valid.all():
        bad_values = sorted({repr(value) for value in series[~valid].tolist()})
        raise DataValidityError(
            f"Invalid {name} code(s): {', '.join(bad_values)} "
            f"(expected one of {sorted(labels)})"
        )
    mapped = codes.astype(int).map(labels)
    return pd.Categorical(mapped, categories=list(labels.values()))


def map_site_codes(df: pd.DataFrame) -> pd.DataFrame:
    """Replace site_code with the categorical site label.

    Raises:
        DataValidityError: If any code is outside SITE_LABELS.
    """
    df = df.copy()
    df["site"] = _map_codes(df["site_code"], SITE_LABELS, "site")
    return df.drop(columns=["site_code"])


def map_sex_codes(df: pd.DataFrame) -> pd.DataFrame:
    """Replace sex_code with the categorical sex label.

    Raises:
        DataValidityError: If any code is outside SEX_LABELS.
    """
    df = df.copy()
    df["sex"] = _map_codes(df["sex_code"], SEX_LABELS, "sex")
    return df.drop(columns=["sex_code"])


def normalize_performance(df: pd.DataFrame) -> pd.DataFrame:
    """Coerce numeric columns, then decode site and sex codes."""
    df = coerce_environment(df)
    df = map_site_codes(df)
    df = map_sex_codes(df)
    ordered = ["site", "sex", "age", "pct_off_record", *ENV_COLS]
    return cast(pd.DataFrame, df[ordered])


def count_missing_environment(df: pd.DataFrame) -> pd.Series:
    """Count missing values per environmental column."""
    return df[list(ENV_COLS)].isna().sum()


def filter_complete_environment(df: pd.DataFrame) -> pd.DataFrame:
    """Drop rows missing any of the environmental readings.

    A row survives only when all ENV_COLS are present; nothing is imputed.
    """
    complete = df[list(ENV_COLS)].notna().all(axis=1)
    return cast(pd.DataFrame, df.loc[complete].reset_index(drop=True))


def find_ambiguous_site_names(df: pd.DataFrame) -> dict[str, list[str]]:
    """Find site names that only differ by case or surrounding whitespace.

    Args:
        df: Air-quality DataFrame with a marathon column.

    Returns:
        Mapping of normalized name to the distinct raw spellings, only for
        names with more than one spelling.
    """
    names = df["marathon"].dropna().astype(str).unique().tolist()
    spellings: dict[str, set[str]] = {}
    for name in names:
        spellings.setdefault(name.strip().casefold(), set()).add(name)
    return {
        key: sorted(values) for key, values in spellings.items() if len(values) > 1
    }


def aggregate_air_quality(df: pd.DataFrame) -> pd.DataFrame:
    """Average AQI per site name.

    Missing readings are excluded from the mean; a site whose readings are
    all missing keeps a row with a NaN mean. Rows without a site name are
    dropped since they cannot be joined.

    Args:
        df: Air-quality DataFrame with marathon and aqi columns.

    Returns:
        DataFrame with one row per site name: marathon, mean_aqi.
    """
    keyed = df.loc[df["marathon"].notna(), ["marathon", "aqi"]].copy()
    keyed["marathon"] = keyed["marathon"].astype(str)
    keyed["aqi"] = pd.to_numeric(keyed["aqi"], errors="coerce").astype(float)
    aggregated = (
        keyed.groupby("marathon", sort=False)["aqi"]
        .mean()
        .rename("mean_aqi")
        .reset_index()
    )
    return cast(pd.DataFrame, aggregated)


def join_air_quality(performance: pd.DataFrame, air_quality: pd.DataFrame) -> pd.DataFrame:
    """Left-join mean AQI onto performance rows by site.

    Row order and count of the performance table are preserved; rows for
    sites without air-quality data get a NaN mean_aqi.

    Args:
        performance: Normalized performance DataFrame with a site column.
        air_quality: Aggregated air quality with marathon and mean_aqi.

    Returns:
        Performance rows with a mean_aqi column appended.

    Raises:
        DataValidityError: If air_quality has more than one row per site.
    """
    left = performance.reset_index(drop=True).assign(
        _site_key=performance["site"].astype(str).to_numpy()
    )
    right = air_quality[["marathon", "mean_aqi"]].rename(
        columns={"marathon": "_site_key"}
    )
    try:
        merged = left.merge(right, on="_site_key", how="left", validate="many_to_one")
    except pd.errors.MergeError as exc:
        raise DataValidityError(f"Air quality has duplicate site rows: {exc}") from exc

    if len(merged) != len(performance):
        raise DataValidityError(
            f"Join changed row count: {len(performance)} -> {len(merged)}"
        )
    return merged.drop(columns=["_site_key"])


def age_to_group(age: int) -> str:
    """Map an age in years to its age-group label.

    Raises:
        DataValidityError: If age is below the first bucket.
    """
    for label, min_inclusive, max_inclusive in AGE_GROUPS:
        if age < min_inclusive:
            break
        if max_inclusive is None or age <= max_inclusive:
            return label
    raise DataValidityError(f"Age {age} is outside the supported age groups.")


def add_age_group(
    df: pd.DataFrame, min_age: int = 14, max_age: int | None = 85
) -> pd.DataFrame:
    """Add the ordered age_group column.

    Args:
        df: DataFrame with an age column.
        min_age: Smallest accepted age.
        max_age: Largest accepted age, or None for no upper limit.

    Returns:
        Copy of df with integer age and categorical age_group.

    Raises:
        DataValidityError: If any age is missing, fractional or out of range.
    """
    df = df.copy()
    ages = pd.to_numeric(df["age"], errors="coerce")
    invalid = ages.isna() | (ages % 1 != 0) | (ages < min_age)
    if max_age is not None:
        invalid |= ages > max_age
    if invalid.any():
        bad_values = sorted({repr(value) for value in df.loc[invalid, "age"].tolist()})
        raise DataValidityError(
            f"Age(s) out of domain [{min_age}, {max_age if max_age is not None else 'inf'}]: "
            + ", ".join(bad_values)
        )

    df["age"] = ages.astype(int)
    df["age_group"] = pd.Categorical(
        df["age"].map(age_to_group), categories=list(AGE_GROUP_LABELS), ordered=True
    )
    return df
