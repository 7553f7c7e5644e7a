"""Shared fixtures for marathon_env tests."""

import numpy as np
import pandas as pd
import pytest

from marathon_env.config.features import ENV_COLS
from marathon_env.pipeline.join_data import build_analysis_table


def env_readings(**overrides):
    """Complete environmental readings for one row."""
    readings = {
        "dry_bulb_temp": 12.0,
        "wet_bulb_temp": 9.5,
        "rel_humidity": 70.0,
        "globe_temp": 20.1,
        "solar_radiation": 450.0,
        "dew_point": 7.0,
        "wind_speed": 11.0,
        "wbgt": 12.3,
    }
    readings.update(overrides)
    return readings


@pytest.fixture
def performance_df() -> pd.DataFrame:
    """Raw performance rows covering the filtering and join edge cases."""
    rows = [
        {"site_code": 0, "sex_code": 0, "age": 19, "pct_off_record": 10.0, **env_readings()},
        {
            "site_code": 1,
            "sex_code": 1,
            "age": 20,
            "pct_off_record": 12.0,
            **env_readings(dry_bulb_temp="n/a"),
        },
        {
            "site_code": 2,
            "sex_code": 1,
            "age": 49,
            "pct_off_record": 14.0,
            **env_readings(wind_speed=np.nan),
        },
        {"site_code": 4, "sex_code": 0, "age": 50, "pct_off_record": 20.0, **env_readings()},
        {"site_code": 3, "sex_code": 1, "age": 33, "pct_off_record": 8.0, **env_readings()},
        {"site_code": 0, "sex_code": 1, "age": 85, "pct_off_record": 40.0, **env_readings()},
    ]
    return pd.DataFrame(rows)


@pytest.fixture
def air_quality_df() -> pd.DataFrame:
    """Raw air-quality rows; Grandmas is absent and TwinCities has no readings."""
    return pd.DataFrame(
        {
            "date_local": [
                "2012-04-16",
                "2012-04-16",
                "2012-04-16",
                "2012-10-07",
                "2012-11-04",
                "2012-10-07",
            ],
            "marathon": ["Boston", "Boston", "Boston", "Chicago", "NYC", "TwinCities"],
            "aqi": [10.0, 20.0, np.nan, 30.0, 40.0, np.nan],
        }
    )


@pytest.fixture
def performance_csv(tmp_path, performance_df):
    path = tmp_path / "performance.csv"
    performance_df.to_csv(path, index=False)
    return path


@pytest.fixture
def air_quality_csv(tmp_path, air_quality_df):
    path = tmp_path / "aqi.csv"
    air_quality_df.to_csv(path, index=False)
    return path


@pytest.fixture
def analysis_df() -> pd.DataFrame:
    """Synthetic analysis table where WBGT drives performance."""
    rng = np.random.default_rng(0)
    n = 120
    performance = pd.DataFrame(
        {
            "site_code": rng.integers(0, 5, n),
            "sex_code": rng.integers(0, 2, n),
            "age": rng.integers(14, 86, n),
        }
    )
    for col in ENV_COLS:
        performance[col] = rng.normal(15.0, 5.0, n)
    performance["pct_off_record"] = 5.0 + 1.5 * performance["wbgt"] + rng.normal(0, 1.0, n)

    air_quality = pd.DataFrame(
        {
            "marathon": ["Boston", "Chicago", "NYC", "TwinCities"] * 3,
            "aqi": rng.uniform(20, 60, 12),
        }
    )
    return build_analysis_table(performance, air_quality)
