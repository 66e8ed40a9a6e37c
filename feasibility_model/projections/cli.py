# feasibility_model/projections/cli.py
# Command-line interface entry point (argparse)
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd

from feasibility_model import scenario_loader
from feasibility_model.config.loaders import (
    ConfigLoadError,
    load_engine_config,
    load_norm_config,
    validate_scenario_document,
)
from feasibility_model.projections.reporting import to_legacy_payload
from feasibility_model.projections.runner import run_feasibility
from feasibility_model.projections.summaries import build_yearly_summary

# Import logging configuration
from logging_config import ERROR_LOGGER, PROJECTION_LOGGER, get_logger, setup_logging

# Get logger for this module
logger = logging.getLogger(__name__)

# Directory for log files
LOG_DIR = Path("output_dev/feasibility_logs")


def parse_arguments(argv: Optional[list] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Run a three-year school feasibility projection.")

    # Required arguments
    parser.add_argument(
        "--scenario",
        type=str,
        required=True,
        help="Path to the scenario YAML/JSON file (may use 'extends')."
    )

    # Optional arguments
    parser.add_argument(
        "--norm",
        type=str,
        default=None,
        help="Path to the norm config file. Defaults to the scenario's 'norm' section."
    )
    parser.add_argument(
        "--engine-config",
        type=str,
        default=None,
        help="Optional YAML overriding engine defaults (grade keys, bands, thresholds)."
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the JSON result here instead of stdout."
    )
    parser.add_argument(
        "--summary-csv",
        type=str,
        default=None,
        help="Also write the year-by-year summary table as CSV."
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=str(LOG_DIR),
        help=f"Directory to store log files (default: {LOG_DIR})"
    )

    return parser.parse_args(argv)


def load_inputs(args: argparse.Namespace) -> Dict[str, Any]:
    """Load scenario, norm config and engine config named on the command line.

    Raises:
        ConfigLoadError: If any file is missing, unparsable or fails validation.
    """
    scenario_path = Path(args.scenario)
    if not scenario_path.is_file():
        raise ConfigLoadError(f"Scenario file not found: {scenario_path}")
    try:
        scenario = scenario_loader.load(str(scenario_path))
    except (FileNotFoundError, ValueError) as e:
        raise ConfigLoadError(f"Could not resolve scenario {scenario_path}: {e}") from e
    validate_scenario_document(scenario)

    if args.norm:
        norm_config = load_norm_config(Path(args.norm))
    else:
        norm_config = scenario.get("norm")
        if norm_config is None:
            logger.warning("No norm config given; curriculum hours are empty and no teachers will be required.")

    engine_config = load_engine_config(Path(args.engine_config) if args.engine_config else None)
    return {"scenario": scenario, "norm_config": norm_config, "config": engine_config}


def initialize_logging(debug: bool, log_dir: Path) -> None:
    """Initialize logging configuration.

    Args:
        debug: Whether to enable debug logging
        log_dir: Directory to store log files
    """
    setup_logging(log_dir=log_dir, debug=debug)
    logger.info(f"Command line arguments: {sys.argv}")
    logger.info(f"Pandas version: {pd.__version__}")
    if debug:
        logger.debug("Debug logging enabled")


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the feasibility CLI."""
    args = parse_arguments(argv)
    initialize_logging(debug=args.debug, log_dir=Path(args.log_dir))

    err_logger = get_logger(ERROR_LOGGER)
    logger.info(f"Starting feasibility run with arguments: {vars(args)}")

    try:
        inputs = load_inputs(args)
    except ConfigLoadError as e:
        err_logger.error(f"Invalid input: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    try:
        run_projection(args, inputs)
        return 0
    except OSError as e:
        err_logger.error(f"Could not write output: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
    return 1


def run_projection(args: argparse.Namespace, inputs: Dict[str, Any]) -> None:
    """Run the three-year projection and write its outputs.

    Raises:
        OSError: If an output file cannot be written
    """
    proj_logger = logging.getLogger(PROJECTION_LOGGER)
    scenario_name = inputs["scenario"].get("name") or Path(args.scenario).stem
    proj_logger.info(f"Running feasibility projection for scenario '{scenario_name}'")

    result = run_feasibility(inputs["scenario"], inputs["norm_config"], inputs["config"])
    payload = to_legacy_payload(result)
    summary = build_yearly_summary(result)

    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text, encoding="utf-8")
        logger.info(f"Result written to {output_path}")
    else:
        print(text)

    if args.summary_csv:
        csv_path = Path(args.summary_csv)
        csv_path.parent.mkdir(parents=True, exist_ok=True)
        summary.to_csv(csv_path)
        logger.info(f"Yearly summary written to {csv_path}")

    with pd.option_context("display.width", 200, "display.max_columns", None):
        print(summary.to_string(), file=sys.stderr)

    proj_logger.info(f"Scenario '{scenario_name}' multi_year_valid={result.multi_year_valid}")


if __name__ == "__main__":
    sys.exit(main())
