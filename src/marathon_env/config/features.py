"""Column definitions for the marathon/air-quality datasets."""

# Environmental readings required on every analysed row
ENV_COLS: tuple[str, ...] = (
    "dry_bulb_temp",
    "wet_bulb_temp",
    "rel_humidity",
    "globe_temp",
    "solar_radiation",
    "dew_point",
    "wind_speed",
    "wbgt",
)

# Columns coerced to numeric during normalization
NUMERIC_COLS: tuple[str, ...] = ("pct_off_record",) + ENV_COLS

# Required performance columns (canonical names)
PERFORMANCE_COLS: tuple[str, ...] = (
    "site_code",
    "sex_code",
    "age",
    "pct_off_record",
) + ENV_COLS

# Required air-quality columns
AIR_QUALITY_COLS: tuple[str, ...] = (
    "marathon",
    "aqi",
)

# Headers used by the published marathon/weather dataset
PERFORMANCE_ALIASES: dict[str, str] = {
    "Race (0=Boston, 1=Chicago, 2=NYC, 3=TC, 4=D)": "site_code",
    "Sex (0=F, 1=M)": "sex_code",
    "Age (yr)": "age",
    "%CR": "pct_off_record",
    "Td, C": "dry_bulb_temp",
    "Tw, C": "wet_bulb_temp",
    "%rh": "rel_humidity",
    "Tg, C": "globe_temp",
    "SR W/m2": "solar_radiation",
    "DP": "dew_point",
    "Wind": "wind_speed",
    "WBGT": "wbgt",
}

SITE_LABELS: dict[int, str] = {
    0: "Boston",
    1: "Chicago",
    2: "NYC",
    3: "TwinCities",
    4: "Grandmas",
}

SEX_LABELS: dict[int, str] = {
    0: "Female",
    1: "Male",
}

# (label, min_inclusive, max_inclusive); None means no upper bound
AGE_GROUPS: tuple[tuple[str, int, int | None], ...] = (
    ("Teenager", 14, 19),
    ("YoungAdult", 20, 29),
    ("MiddleAged", 30, 49),
    ("OlderAdult", 50, None),
)

AGE_GROUP_LABELS: tuple[str, ...] = tuple(label for label, _, _ in AGE_GROUPS)

# Analysis table columns, in output order
OUTPUT_COLS: tuple[str, ...] = (
    "site",
    "sex",
    "age",
    "pct_off_record",
) + ENV_COLS + (
    "mean_aqi",
    "age_group",
)

# Predictors of interest for correlations and model rankings
PREDICTOR_COLS: tuple[str, ...] = ENV_COLS + ("mean_aqi",)

# Non-environmental controls added to the model features
CONTROL_COLS: tuple[str, ...] = (
    "age",
    "is_male",
)

TARGET_COL = "pct_off_record"


def get_model_feature_columns(available_cols: list[str]) -> list[str]:
    """Get model feature columns present in a frame."""
    feature_cols: list[str] = []
    feature_cols.extend(PREDICTOR_COLS)
    feature_cols.extend(CONTROL_COLS)
    return [col for col in feature_cols if col in available_cols]
