"""CLI for writing descriptive tables and figures.

Usage:
    python -m marathon_env describe
    python -m marathon_env plots
"""

import argparse
from pathlib import Path

from marathon_env.analysis.plots import save_all_plots
from marathon_env.analysis.summary import write_summary_tables
from marathon_env.config.settings import ReportConfig
from marathon_env.data.loader import load_analysis_table


def parse_args(description: str, out_flag: str, out_default: str) -> argparse.Namespace:
    """Parse command-line arguments."""
    defaults = ReportConfig()
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--input",
        type=Path,
        default=Path(defaults.input_file),
        help=f"Analysis table CSV (default: {defaults.input_file})",
    )
    parser.add_argument(
        out_flag,
        dest="out_dir",
        type=Path,
        default=Path(out_default),
        help=f"Output directory (default: {out_default})",
    )
    return parser.parse_args()


def main() -> None:
    """Main entry point for descriptive tables."""
    args = parse_args(
        "Write descriptive tables for the analysis table.",
        "--tables-dir",
        ReportConfig().tables_dir,
    )
    df = load_analysis_table(args.input)
    print(f"Loaded {len(df)} rows from {args.input}")
    write_summary_tables(df, args.out_dir)


def plots_main() -> None:
    """Main entry point for figures."""
    args = parse_args(
        "Write figures for the analysis table.",
        "--figures-dir",
        ReportConfig().figures_dir,
    )
    df = load_analysis_table(args.input)
    print(f"Loaded {len(df)} rows from {args.input}")
    save_all_plots(df, args.out_dir)


if __name__ == "__main__":
    main()
