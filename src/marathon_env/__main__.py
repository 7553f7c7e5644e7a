"""Main entry point for marathon_env package.

Usage:
    python -m marathon_env build --performance data/project1.csv --air-quality data/aqi_values.csv
    python -m marathon_env describe
    python -m marathon_env plots
    python -m marathon_env train --model all
    python -m marathon_env report
"""

import sys


def main() -> None:
    """Main entry point for the CLI."""
    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        print("""Marathon Environment Analysis CLI

Usage:
    python -m marathon_env <command> [options]

Commands:
    build     Clean and merge performance and air-quality data
    describe  Write descriptive tables
    plots     Write figures
    train     Rank environmental predictors with linear/forest models
    report    Render a markdown report from the outputs above

Examples:
    python -m marathon_env build
    python -m marathon_env describe --tables-dir reports/tables
    python -m marathon_env train --model forest
    python -m marathon_env report --output reports/analysis.md

Run 'python -m marathon_env <command> --help' for command-specific help.
""")
        return

    command = sys.argv[1]
    # Remove the command from argv so subcommand parser sees the right args
    sys.argv = [f"marathon_env {command}"] + sys.argv[2:]

    if command == "build":
        from marathon_env.cli.build import main as build_main
        build_main()
    elif command == "describe":
        from marathon_env.cli.describe import main as describe_main
        describe_main()
    elif command == "plots":
        from marathon_env.cli.describe import plots_main
        plots_main()
    elif command == "train":
        from marathon_env.cli.train import main as train_main
        train_main()
    elif command == "report":
        from marathon_env.cli.report import main as report_main
        report_main()
    else:
        print(f"Unknown command: {command}")
        print("Valid commands: build, describe, plots, train, report")
        sys.exit(1)


if __name__ == "__main__":
    main()
