"""CLI for building the analysis table.

Usage:
    python -m marathon_env build
    marathon-build --performance data/project1.csv --air-quality data/aqi_values.csv
"""

import argparse

from marathon_env.config.settings import PipelineConfig
from marathon_env.pipeline.join_data import run_pipeline


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    defaults = PipelineConfig()
    parser = argparse.ArgumentParser(
        description="Clean and merge marathon and air-quality data.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Build with default paths:
        marathon-build

    Build from custom inputs:
        marathon-build --performance runs.csv --air-quality aqi.csv --output table.csv

    Accept any age from 14 upwards:
        marathon-build --no-max-age
        """,
    )
    parser.add_argument(
        "--performance",
        type=str,
        default=defaults.performance_file,
        help=f"Performance CSV (default: {defaults.performance_file})",
    )
    parser.add_argument(
        "--air-quality",
        type=str,
        default=defaults.air_quality_file,
        help=f"Air-quality CSV (default: {defaults.air_quality_file})",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=defaults.output_file,
        help=f"Output CSV (default: {defaults.output_file})",
    )
    parser.add_argument(
        "--min-age",
        type=int,
        default=defaults.min_age,
        help=f"Smallest accepted age (default: {defaults.min_age})",
    )
    parser.add_argument(
        "--max-age",
        type=int,
        default=defaults.max_age,
        help=f"Largest accepted age (default: {defaults.max_age})",
    )
    parser.add_argument(
        "--no-max-age",
        action="store_const",
        const=None,
        dest="max_age",
        help="Disable the upper age limit.",
    )
    return parser.parse_args()


def main() -> None:
    """Main entry point for the build CLI."""
    args = parse_args()
    config = PipelineConfig(
        performance_file=args.performance,
        air_quality_file=args.air_quality,
        output_file=args.output,
        min_age=args.min_age,
        max_age=args.max_age,
    )
    run_pipeline(config)


if __name__ == "__main__":
    main()
