"""Pipeline joining marathon performance with air-quality data."""

from pathlib import Path
from typing import cast

import pandas as pd

from marathon_env.config.features import OUTPUT_COLS
from marathon_env.config.settings import PipelineConfig
from marathon_env.data.loader import load_air_quality, load_performance
from marathon_env.data.preprocessor import (
    add_age_group,
    aggregate_air_quality,
    count_missing_environment,
    filter_complete_environment,
    find_ambiguous_site_names,
    join_air_quality,
    normalize_performance,
)


def build_analysis_table(
    performance_df: pd.DataFrame,
    air_quality_df: pd.DataFrame,
    min_age: int = 14,
    max_age: int | None = 85,
) -> pd.DataFrame:
    """Build the analysis table from raw performance and air-quality frames.

    Args:
        performance_df: Raw performance rows (canonical column names).
        air_quality_df: Raw air-quality rows.
        min_age: Smallest accepted runner age.
        max_age: Largest accepted runner age, or None for no limit.

    Returns:
        DataFrame with OUTPUT_COLS, one row per performance row with all
        environmental readings, in input order.
    """
    print("Normalizing performance data...")
    normalized = normalize_performance(performance_df)
    print(f"Performance data: {len(normalized)} rows")

    missing = count_missing_environment(normalized)
    if missing.any():
        print("Missing environmental readings per column:")
        print(missing[missing > 0].to_string())

    filtered = filter_complete_environment(normalized)
    removed = len(normalized) - len(filtered)
    if removed:
        print(f"Removed {removed} rows with missing environmental readings")

    print("Aggregating air quality data...")
    ambiguous = find_ambiguous_site_names(air_quality_df)
    for key, spellings in ambiguous.items():
        print(
            f"  Warning: site names differing only by case/whitespace "
            f"({key}): {', '.join(repr(name) for name in spellings)}"
        )
    aggregated = aggregate_air_quality(air_quality_df)
    print(f"Air quality data: {len(air_quality_df)} rows -> {len(aggregated)} sites")

    joined = join_air_quality(filtered, aggregated)
    unmatched = joined["mean_aqi"].isna()
    if unmatched.any():
        sites = sorted(joined.loc[unmatched, "site"].astype(str).unique())
        print(f"No mean AQI for {int(unmatched.sum())} rows (sites: {', '.join(sites)})")

    result = add_age_group(joined, min_age=min_age, max_age=max_age)
    return cast(pd.DataFrame, result[list(OUTPUT_COLS)])


def run_pipeline(config: PipelineConfig | None = None) -> pd.DataFrame:
    """Run the full pipeline from CSV inputs.

    Inputs are validated and the whole table is built before anything is
    written, so a failed run leaves no output file.

    Args:
        config: Pipeline settings (defaults to PipelineConfig()).

    Returns:
        The analysis table.
    """
    if config is None:
        config = PipelineConfig()

    print(f"\n{'=' * 50}")
    print("Building analysis table")
    print(f"{'=' * 50}")

    print(f"Loading performance data from {config.performance_file}...")
    performance_df = load_performance(config.performance_file)
    print(f"Loading air quality data from {config.air_quality_file}...")
    air_quality_df = load_air_quality(config.air_quality_file)

    table = build_analysis_table(
        performance_df,
        air_quality_df,
        min_age=config.min_age,
        max_age=config.max_age,
    )
    print(f"Analysis table: {len(table)} rows")

    if config.output_file is not None:
        output_path = Path(config.output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        table.to_csv(output_path, index=False)
        print(f"Saved to {output_path}")

    return table
