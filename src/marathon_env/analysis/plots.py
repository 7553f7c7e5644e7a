"""Figures for the marathon/environment analysis."""

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402
import seaborn as sns  # noqa: E402

from marathon_env.config.features import ENV_COLS, PREDICTOR_COLS, TARGET_COL  # noqa: E402

AXIS_LABELS: dict[str, str] = {
    "pct_off_record": "% off course record",
    "dry_bulb_temp": "Dry-bulb temp (C)",
    "wet_bulb_temp": "Wet-bulb temp (C)",
    "rel_humidity": "Relative humidity (%)",
    "globe_temp": "Globe temp (C)",
    "solar_radiation": "Solar radiation (W/m2)",
    "dew_point": "Dew point (C)",
    "wind_speed": "Wind speed",
    "wbgt": "WBGT (C)",
    "mean_aqi": "Mean AQI",
}


def _save(fig: plt.Figure, path: Path) -> Path:
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    print(f"Saved figure to {path}")
    return path


def plot_age_group_by_sex(df: pd.DataFrame, path: Path) -> Path:
    """Box plot of %CR by age group, split by sex."""
    fig, ax = plt.subplots(figsize=(9, 5))
    sns.boxplot(data=df, x="age_group", y=TARGET_COL, hue="sex", ax=ax)
    ax.set_xlabel("Age group")
    ax.set_ylabel(AXIS_LABELS[TARGET_COL])
    ax.set_title("Performance by age group and sex")
    return _save(fig, path)


def plot_environment_scatter(df: pd.DataFrame, path: Path) -> Path:
    """Scatter of %CR against each environmental reading with a linear trend."""
    ncols = 4
    nrows = int(np.ceil(len(ENV_COLS) / ncols))
    fig, axes = plt.subplots(nrows, ncols, figsize=(4 * ncols, 3.5 * nrows), sharey=True)
    for ax, col in zip(np.ravel(axes), ENV_COLS):
        sns.regplot(
            data=df,
            x=col,
            y=TARGET_COL,
            ax=ax,
            scatter_kws={"s": 4, "alpha": 0.3},
            line_kws={"color": "black"},
        )
        ax.set_xlabel(AXIS_LABELS[col])
        ax.set_ylabel(AXIS_LABELS[TARGET_COL])
    for ax in np.ravel(axes)[len(ENV_COLS):]:
        ax.set_visible(False)
    fig.suptitle("Performance against environmental conditions")
    return _save(fig, path)


def plot_correlation_heatmap(df: pd.DataFrame, path: Path) -> Path:
    """Heatmap of Pearson correlations between %CR and the predictors."""
    cols = [TARGET_COL, *PREDICTOR_COLS]
    corr = df[cols].corr()
    fig, ax = plt.subplots(figsize=(9, 7))
    sns.heatmap(corr, annot=True, fmt=".2f", cmap="coolwarm", vmin=-1, vmax=1, ax=ax)
    ax.set_title("Correlation matrix")
    return _save(fig, path)


def plot_site_means(df: pd.DataFrame, path: Path) -> Path:
    """Bar chart of mean %CR per site."""
    means = df.groupby("site", observed=True)[TARGET_COL].mean().reset_index()
    fig, ax = plt.subplots(figsize=(7, 4))
    sns.barplot(data=means, x="site", y=TARGET_COL, ax=ax, color="steelblue")
    ax.set_xlabel("Marathon")
    ax.set_ylabel(f"Mean {AXIS_LABELS[TARGET_COL]}")
    ax.set_title("Mean performance by marathon")
    return _save(fig, path)


def save_all_plots(df: pd.DataFrame, out_dir: str | Path) -> list[Path]:
    """Write every figure as PNG into out_dir.

    Returns:
        Paths of the written figures.
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    return [
        plot_age_group_by_sex(df, out_dir / "age_group_by_sex.png"),
        plot_environment_scatter(df, out_dir / "environment_scatter.png"),
        plot_correlation_heatmap(df, out_dir / "correlation_heatmap.png"),
        plot_site_means(df, out_dir / "site_means.png"),
    ]
