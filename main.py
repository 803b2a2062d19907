#!/usr/bin/env python3
"""
Nomograph Performance Engine: Main Entry Point
==============================================

Usage:
    python main.py --chart CHART.json --inputs 15 2000 9000
                                        Read a chained chart
    python main.py --wind 090 120 15   Resolve wind against a runway heading
    python main.py --validate-charts   Run chart regressions against baselines
    python main.py --summary           Show configuration summary

"""

import argparse
import logging
import sys
from pathlib import Path

project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from config import config  # noqa: E402
from core.charts import load_chart  # noqa: E402
from core.wind import wind_components  # noqa: E402


def validate_config() -> bool:
    """Validate engine configuration."""
    print("Validating configuration...")
    errors = config.validate()

    if errors:
        print("\nCONFIGURATION ERRORS:")
        for err in errors:
            print(f"  [!] {err}")
        return False

    print("  Configuration valid.")
    return True


def validate_charts() -> bool:
    """Run chart regressions against stored baselines."""
    from core.regression import ChartRegressionRunner

    print("\n--- Validating Chart Readings ---")
    runner = ChartRegressionRunner()
    passed, current, failures = runner.compare_to_baseline(
        baseline_path=config.regression.baseline_path,
        report_dir=config.regression.report_dir,
    )

    for name, value in current.items():
        shown = "no result" if value is None else f"{value:.4f}"
        print(f"  {name}: {shown}")

    if passed:
        print("  Chart regressions PASSED")
    else:
        print("  Chart regressions FAILED:")
        for failure in failures:
            print(f"   - {failure}")
    return passed


def read_chart(chart_path: Path, inputs) -> int:
    """Evaluate one chart file and print the reading."""
    try:
        chart = load_chart(chart_path)
    except (OSError, ValueError) as e:
        print(f"  Error loading chart: {e}")
        return 1

    print(f"\n--- Reading {chart.name} ---")
    if len(inputs) != len(chart.input_names):
        print(
            f"  Chart takes {len(chart.input_names)} inputs "
            f"({', '.join(chart.input_names)}), got {len(inputs)}."
        )
        return 1

    for name, value in zip(chart.input_names, inputs):
        print(f"  {name}: {value:g}")

    result = chart.diagnose(*inputs)
    if result.ok:
        print(f"  RESULT: {result.value:.2f}")
        return 0

    step = "-" if result.failed_step is None else result.failed_step + 1
    print(f"  RESULT: no result ({result.failure.value} at step {step})")
    return 2


def show_wind(heading: float, direction: float, speed: float) -> None:
    """Print runway wind components."""
    wind = wind_components(heading, direction, speed)
    print(f"\n--- Wind {direction:03.0f}/{speed:g} on heading {heading:03.0f} ---")
    if wind.is_tailwind:
        print(f"  Tailwind:  {wind.tailwind:.2f}")
    else:
        print(f"  Headwind:  {wind.headwind:.2f}")
    print(f"  Crosswind: {wind.crosswind_speed:.2f} {wind.crosswind_direction}")


def main():
    parser = argparse.ArgumentParser(description="Nomograph Performance Engine")
    parser.add_argument("--chart", type=Path, help="Chart definition (JSON) to read")
    parser.add_argument(
        "--inputs", type=float, nargs="+", default=[], help="Chart inputs in order"
    )
    parser.add_argument(
        "--wind",
        type=float,
        nargs=3,
        metavar=("HEADING", "DIRECTION", "SPEED"),
        help="Resolve wind components for a runway heading",
    )
    parser.add_argument(
        "--validate", action="store_true", help="Validate configuration only"
    )
    parser.add_argument(
        "--validate-charts",
        action="store_true",
        help="Validate chart readings against stored baselines",
    )
    parser.add_argument(
        "--summary", action="store_true", help="Show configuration summary"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log per-step diagnostics"
    )

    args = parser.parse_args()

    if len(sys.argv) == 1:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    print(f"{config.project_name} v{config.version}")

    if args.summary:
        print(config.summary())
        return 0

    if args.validate:
        return 0 if validate_config() else 1

    if not validate_config():
        print("\nAborting due to configuration errors.")
        return 1

    status = 0

    if args.validate_charts and not validate_charts():
        status = 1

    if args.chart:
        status = max(status, read_chart(args.chart, args.inputs))

    if args.wind:
        show_wind(*args.wind)

    print("\nDone.")
    return status


if __name__ == "__main__":
    sys.exit(main())
