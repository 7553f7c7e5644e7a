"""Data loading and preprocessing modules."""

from .loader import load_air_quality, load_analysis_table, load_performance
from .preprocessor import (
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

__all__ = [
    "add_age_group",
    "age_to_group",
    "aggregate_air_quality",
    "coerce_environment",
    "count_missing_environment",
    "filter_complete_environment",
    "find_ambiguous_site_names",
    "join_air_quality",
    "load_air_quality",
    "load_analysis_table",
    "load_performance",
    "map_sex_codes",
    "map_site_codes",
    "normalize_performance",
]
