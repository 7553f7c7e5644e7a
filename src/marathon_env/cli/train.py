"""CLI for training predictor-ranking models.

Usage:
    python -m marathon_env train --model linear
    python -m marathon_env train --model all
    marathon-train --model forest --input data/analysis_table.csv
"""

import argparse

from marathon_env.config.settings import MODEL_TYPES, ModelConfig
from marathon_env.training.trainer import train_model


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Rank environmental predictors of marathon performance.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Fit both models:
        marathon-train --model all

    Fit only the random forest on a custom table:
        marathon-train --model forest --input table.csv --output-dir out/
        """,
    )
    parser.add_argument(
        "--model",
        type=str,
        default="all",
        choices=[*MODEL_TYPES, "all"],
        help="Model type to train (default: all)",
    )
    parser.add_argument(
        "--input",
        type=str,
        default=None,
        help=f"Analysis table CSV (default: {ModelConfig.input_file})",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help=f"Directory for rankings and metrics (default: {ModelConfig.output_dir})",
    )
    return parser.parse_args()


def main() -> None:
    """Main entry point for training CLI."""
    args = parse_args()

    model_types = list(MODEL_TYPES) if args.model == "all" else [args.model]

    for model_type in model_types:
        print(f"\n{'=' * 60}")
        print(f"Training {model_type.upper()} model")
        print(f"{'=' * 60}\n")
        train_model(model_type, input_file=args.input, output_dir=args.output_dir)


if __name__ == "__main__":
    main()
