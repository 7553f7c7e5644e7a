"""CLI for generating a markdown report from the analysis outputs."""

from __future__ import annotations

import argparse
import json
import os
from pathlib import Path

import pandas as pd

from marathon_env.config.settings import MODEL_TYPES, ReportConfig
from marathon_env.data.loader import load_analysis_table


SUMMARY_SECTIONS: list[tuple[str, str]] = [
    ("Performance by marathon", "by_site"),
    ("Performance by sex", "by_sex"),
    ("Performance by age group", "by_age_group"),
    ("Performance by sex and age group", "by_sex_age_group"),
    ("Conditions by marathon", "environment_by_site"),
    ("Correlation with % off course record", "correlations"),
]

MODEL_TITLES: dict[str, str] = {
    "linear": "Linear regression (standardized coefficients)",
    "forest": "Random forest (impurity importance)",
}


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    defaults = ReportConfig()
    parser = argparse.ArgumentParser(
        description="Generate a markdown report from tables, figures and models.",
    )
    parser.add_argument("--input", type=Path, default=Path(defaults.input_file))
    parser.add_argument("--tables-dir", type=Path, default=Path(defaults.tables_dir))
    parser.add_argument("--figures-dir", type=Path, default=Path(defaults.figures_dir))
    parser.add_argument("--models-dir", type=Path, default=Path(defaults.models_dir))
    parser.add_argument(
        "--output",
        type=Path,
        default=Path(defaults.output_file),
        help=f"Output markdown path (default: {defaults.output_file}).",
    )
    return parser.parse_args()


def _format_value(value: object, decimals: int | None = None) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and pd.isna(value):
        return ""
    if decimals is not None:
        try:
            return f"{float(value):.{decimals}f}"
        except (TypeError, ValueError):
            return ""
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return f"{value:.3f}"
    return str(value)


def _render_table(df: pd.DataFrame, columns: list[tuple[str, str]] | None = None) -> list[str]:
    if columns is None:
        columns = [(col, col) for col in df.columns]
    header = "| " + " | ".join([label for label, _ in columns]) + " |"
    divider = "| " + " | ".join(["---"] * len(columns)) + " |"
    lines = [header, divider]
    for _, row in df.iterrows():
        items = []
        for _, key in columns:
            items.append(_format_value(row.get(key)))
        lines.append("| " + " | ".join(items) + " |")
    return lines


def _render_models(models_dir: Path) -> list[str]:
    lines = ["## Predictor rankings"]
    found = False
    for model_type in MODEL_TYPES:
        ranking_path = models_dir / f"{model_type}_ranking.csv"
        metrics_path = models_dir / f"{model_type}_metrics.json"
        if not ranking_path.exists():
            continue
        found = True
        lines.append("")
        lines.append(f"### {MODEL_TITLES[model_type]}")
        if metrics_path.exists():
            with metrics_path.open("r", encoding="utf-8") as handle:
                metrics = json.load(handle)
            metric_rows = pd.DataFrame(
                [
                    {"Metric": "Rows", "Value": _format_value(metrics.get("rows"))},
                    {"Metric": "Holdout MAE", "Value": _format_value(metrics.get("holdout_mae"), 3)},
                    {"Metric": "Holdout RMSE", "Value": _format_value(metrics.get("holdout_rmse"), 3)},
                    {"Metric": "Holdout R2", "Value": _format_value(metrics.get("holdout_r2"), 3)},
                    {"Metric": "CV R2", "Value": _format_value(metrics.get("cv_r2_mean"), 3)},
                ]
            )
            lines.append("")
            lines.extend(_render_table(metric_rows))
        lines.append("")
        lines.extend(_render_table(pd.read_csv(ranking_path)))
    if not found:
        lines.extend(["", "No model outputs found."])
    return lines


def render_report(
    input_file: Path,
    tables_dir: Path,
    figures_dir: Path,
    models_dir: Path,
    output_path: Path,
) -> str:
    """Render the markdown report.

    Missing tables, figures or model outputs are skipped.

    Raises:
        FileNotFoundError: If the analysis table does not exist.
        ConfigurationError: If the analysis table lacks a column.
    """
    if not input_file.exists():
        raise FileNotFoundError(f"Missing analysis table: {input_file}")

    table = load_analysis_table(input_file)
    lines = ["# Marathon performance and environmental conditions", ""]
    lines.append("## Dataset")
    dataset_rows = pd.DataFrame(
        [
            {"Metric": "Rows", "Value": str(len(table))},
            {"Metric": "Marathons", "Value": str(table["site"].nunique())},
            {
                "Metric": "Rows without AQI",
                "Value": str(int(table["mean_aqi"].isna().sum())),
            },
        ]
    )
    lines.extend(_render_table(dataset_rows))

    for title, name in SUMMARY_SECTIONS:
        path = tables_dir / f"{name}.csv"
        if not path.exists():
            continue
        lines.append("")
        lines.append(f"## {title}")
        lines.extend(_render_table(pd.read_csv(path)))

    lines.append("")
    lines.extend(_render_models(models_dir))

    figures = sorted(figures_dir.glob("*.png")) if figures_dir.exists() else []
    if figures:
        lines.append("")
        lines.append("## Figures")
        for figure in figures:
            relative = Path(os.path.relpath(figure, output_path.parent)).as_posix()
            lines.append("")
            lines.append(f"![{figure.stem.replace('_', ' ')}]({relative})")

    return "\n".join(lines) + "\n"


def main() -> None:
    """Main entry point for markdown report generation."""
    args = parse_args()
    report = render_report(
        args.input, args.tables_dir, args.figures_dir, args.models_dir, args.output
    )
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(report, encoding="utf-8")
    print(f"Saved markdown report to {args.output}")


if __name__ == "__main__":
    main()
