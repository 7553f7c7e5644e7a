"""Tests for the cleaning, aggregation, join and derivation stages."""

import numpy as np
import pandas as pd
import pytest

from marathon_env.config.features import AGE_GROUPS, ENV_COLS
from marathon_env.data.preprocessor import (
    add_age_group,
    age_to_group,
    aggregate_air_quality,
    coerce_environment,
    count_missing_environment,
    filter_complete_environment,
    find_ambiguous_site_names,
    join_air_quality,
    map_sex_codes,
    map_site_codes,
    normalize_performance,
)
from marathon_env.errors import DataValidityError


class TestNormalization:
    """Test numeric coercion and code mapping."""

    def test_non_numeric_text_becomes_missing(self, performance_df):
        df = coerce_environment(performance_df)

        assert np.isnan(df.loc[1, "dry_bulb_temp"])
        assert df["dry_bulb_temp"].dtype == float
        assert df.loc[0, "dry_bulb_temp"] == 12.0

    def test_does_not_modify_input(self, performance_df):
        before = performance_df.copy()

        normalize_performance(performance_df)

        pd.testing.assert_frame_equal(performance_df, before)

    def test_site_and_sex_labels(self, performance_df):
        df = normalize_performance(performance_df)

        assert df["site"].astype(str).tolist() == [
            "Boston",
            "Chicago",
            "NYC",
            "Grandmas",
            "TwinCities",
            "Boston",
        ]
        assert df["sex"].astype(str).tolist() == [
            "Female",
            "Male",
            "Male",
            "Female",
            "Male",
            "Male",
        ]
        assert "site_code" not in df.columns
        assert "sex_code" not in df.columns

    def test_site_code_outside_domain_raises(self, performance_df):
        performance_df.loc[0, "site_code"] = 7

        with pytest.raises(DataValidityError, match="site"):
            map_site_codes(performance_df)

    @pytest.mark.parametrize("bad_code", [-1, 5, 1.5, "Boston", np.nan])
    def test_invalid_site_codes(self, bad_code):
        df = pd.DataFrame({"site_code": pd.Series([0, bad_code], dtype=object)})

        with pytest.raises(DataValidityError):
            map_site_codes(df)

    def test_sex_code_outside_domain_raises(self):
        df = pd.DataFrame({"sex_code": [0, 1, 2]})

        with pytest.raises(DataValidityError, match="sex"):
            map_sex_codes(df)

    def test_float_codes_are_accepted(self):
        df = pd.DataFrame({"sex_code": [0.0, 1.0]})

        result = map_sex_codes(df)

        assert result["sex"].astype(str).tolist() == ["Female", "Male"]


class TestFiltering:
    """Test removal of rows with incomplete environmental readings."""

    def test_drops_rows_missing_any_reading(self, performance_df):
        normalized = normalize_performance(performance_df)

        filtered = filter_complete_environment(normalized)

        assert len(filtered) == 4
        assert filtered["age"].tolist() == [19, 50, 33, 85]

    def test_survivors_are_complete_and_numeric(self, performance_df):
        filtered = filter_complete_environment(normalize_performance(performance_df))

        assert filtered[list(ENV_COLS)].notna().all().all()
        for col in ENV_COLS:
            assert pd.api.types.is_float_dtype(filtered[col])

    def test_single_missing_field_is_enough_to_drop(self):
        rows = []
        for col in ENV_COLS:
            row = {c: 1.0 for c in ENV_COLS}
            row[col] = np.nan
            rows.append(row)
        rows.append({c: 1.0 for c in ENV_COLS})

        filtered = filter_complete_environment(pd.DataFrame(rows))

        assert len(filtered) == 1

    def test_missing_counts(self, performance_df):
        counts = count_missing_environment(normalize_performance(performance_df))

        assert counts["dry_bulb_temp"] == 1
        assert counts["wind_speed"] == 1
        assert counts.sum() == 2


class TestAggregation:
    """Test the per-site AQI mean."""

    def test_missing_readings_excluded_from_mean(self, air_quality_df):
        aggregated = aggregate_air_quality(air_quality_df)
        means = aggregated.set_index("marathon")["mean_aqi"]

        assert means["Boston"] == pytest.approx(15.0)
        assert means["Chicago"] == pytest.approx(30.0)

    def test_site_with_only_missing_readings_is_kept(self, air_quality_df):
        aggregated = aggregate_air_quality(air_quality_df)

        assert "TwinCities" in aggregated["marathon"].tolist()
        assert aggregated.set_index("marathon")["mean_aqi"].isna()["TwinCities"]

    def test_one_row_per_site(self, air_quality_df):
        aggregated = aggregate_air_quality(air_quality_df)

        assert aggregated["marathon"].is_unique
        assert aggregated["marathon"].tolist() == ["Boston", "Chicago", "NYC", "TwinCities"]
        assert list(aggregated.columns) == ["marathon", "mean_aqi"]

    def test_rows_without_site_are_dropped(self):
        df = pd.DataFrame({"marathon": ["Boston", None], "aqi": [10.0, 99.0]})

        aggregated = aggregate_air_quality(df)

        assert aggregated["marathon"].tolist() == ["Boston"]
        assert aggregated["mean_aqi"].tolist() == [10.0]

    def test_non_numeric_aqi_is_excluded(self):
        df = pd.DataFrame({"marathon": ["NYC", "NYC"], "aqi": ["40", "bad"]})

        aggregated = aggregate_air_quality(df)

        assert aggregated["mean_aqi"].tolist() == [40.0]

    def test_ambiguous_site_names_are_flagged_not_merged(self):
        df = pd.DataFrame(
            {"marathon": ["Boston", "boston ", "NYC"], "aqi": [10.0, 20.0, 30.0]}
        )

        assert find_ambiguous_site_names(df) == {"boston": ["Boston", "boston "]}
        assert len(aggregate_air_quality(df)) == 3


class TestJoin:
    """Test the left join of mean AQI onto performance rows."""

    def test_preserves_row_count_and_order(self, performance_df, air_quality_df):
        filtered = filter_complete_environment(normalize_performance(performance_df))
        aggregated = aggregate_air_quality(air_quality_df)

        joined = join_air_quality(filtered, aggregated)

        assert len(joined) == len(filtered)
        assert joined["site"].astype(str).tolist() == filtered["site"].astype(str).tolist()
        assert joined["age"].tolist() == filtered["age"].tolist()

    def test_unmatched_site_gets_null(self, performance_df, air_quality_df):
        filtered = filter_complete_environment(normalize_performance(performance_df))
        joined = join_air_quality(filtered, aggregate_air_quality(air_quality_df))

        grandmas = joined[joined["site"] == "Grandmas"]
        assert len(grandmas) == 1
        assert grandmas["mean_aqi"].isna().all()

    def test_duplicate_right_keys_raise(self, performance_df):
        filtered = filter_complete_environment(normalize_performance(performance_df))
        duplicated = pd.DataFrame(
            {"marathon": ["Boston", "Boston"], "mean_aqi": [10.0, 20.0]}
        )

        with pytest.raises(DataValidityError):
            join_air_quality(filtered, duplicated)

    def test_keeps_site_categorical(self, performance_df, air_quality_df):
        filtered = filter_complete_environment(normalize_performance(performance_df))
        joined = join_air_quality(filtered, aggregate_air_quality(air_quality_df))

        assert isinstance(joined["site"].dtype, pd.CategoricalDtype)
        assert "_site_key" not in joined.columns
        assert "marathon" not in joined.columns


class TestAgeGroups:
    """Test the age-group derivation."""

    @pytest.mark.parametrize("age", range(14, 86))
    def test_every_age_has_exactly_one_bucket(self, age):
        matches = [
            label
            for label, low, high in AGE_GROUPS
            if low <= age and (high is None or age <= high)
        ]

        assert len(matches) == 1
        assert age_to_group(age) == matches[0]

    @pytest.mark.parametrize(
        "age,expected",
        [
            (14, "Teenager"),
            (19, "Teenager"),
            (20, "YoungAdult"),
            (29, "YoungAdult"),
            (30, "MiddleAged"),
            (49, "MiddleAged"),
            (50, "OlderAdult"),
            (85, "OlderAdult"),
        ],
    )
    def test_boundaries(self, age, expected):
        assert age_to_group(age) == expected

    def test_below_first_bucket_raises(self):
        with pytest.raises(DataValidityError):
            age_to_group(13)

    def test_add_age_group_is_ordered(self):
        df = pd.DataFrame({"age": [50, 19, 33]})

        result = add_age_group(df)

        assert result["age_group"].tolist() == ["OlderAdult", "Teenager", "MiddleAged"]
        assert result["age_group"].cat.ordered
        assert result["age_group"].min() == "Teenager"

    @pytest.mark.parametrize("age", [13, 90, 30.5, np.nan])
    def test_out_of_domain_ages_raise(self, age):
        df = pd.DataFrame({"age": [25, age]})

        with pytest.raises(DataValidityError):
            add_age_group(df)

    def test_upper_limit_can_be_disabled(self):
        df = pd.DataFrame({"age": [90]})

        result = add_age_group(df, max_age=None)

        assert result["age_group"].tolist() == ["OlderAdult"]
