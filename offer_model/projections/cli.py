# offer_model/projections/cli.py
# Command-line interface entry point (argparse)
import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

import pandas as pd

from logging_config import DEFAULT_LOG_DIR, ERROR_LOGGER, PERFORMANCE_LOGGER, PROJECTION_LOGGER, setup_logging
from offer_model.config.loaders import ConfigLoadError, load_offer_config
from offer_model.config.models import OfferConfig
from offer_model.engines.calculator import calculate_offer
from offer_model.projections.reporting import (
    breakdown_to_frame,
    format_breakdown_table,
    plot_projection_results,
    save_projection_results,
    summary_lines,
)
from offer_model.projections.results import CompensationProjection

# Get logger for this module
logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Project a job offer's compensation over its vesting period."
    )

    # Required arguments
    parser.add_argument(
        "--config",
        type=str,
        required=True,
        help="Path to the offer YAML configuration file."
    )

    # Optional arguments
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=str(DEFAULT_LOG_DIR),
        help=f"Directory to store log files (default: {DEFAULT_LOG_DIR})"
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory to save output files. Overrides config if provided."
    )
    parser.add_argument(
        "--scenario-name",
        type=str,
        default=None,
        help="Name used in output file naming. Overrides config if provided."
    )
    parser.add_argument(
        "--no-plots",
        action="store_true",
        help="Skip writing chart images"
    )

    return parser.parse_args(argv)


def initialize_logging(debug: bool = False, log_dir: Path = DEFAULT_LOG_DIR) -> None:
    """Initialize the logging configuration.

    Args:
        debug: Whether to enable debug logging
        log_dir: Directory to store log files
    """
    try:
        setup_logging(log_dir=log_dir, debug=debug)

        logger.info("Starting offer projection")
        logger.info(f"Command line arguments: {sys.argv}")
        logger.info(f"Python version: {sys.version}")
        logger.info(f"Pandas version: {pd.__version__}")

        if debug:
            logger.debug("Debug logging enabled")

    except Exception as e:
        print(f"Error initializing logging: {e}", file=sys.stderr)
        raise


def run_offer(config: OfferConfig, output_path: Path, scenario_name: str, plots: bool = True) -> CompensationProjection:
    """Calculate the projection for ``config``, print it and save reports.

    Raises:
        ValueError: If the inputs cannot be projected
        Exception: For any other unexpected errors
    """
    proj_logger = logging.getLogger(PROJECTION_LOGGER)
    perf_logger = logging.getLogger(PERFORMANCE_LOGGER)

    started = time.perf_counter()
    projection = calculate_offer(config.offer, config.current)
    perf_logger.info(f"Offer calculated in {(time.perf_counter() - started) * 1000:.3f} ms")

    proj_logger.info(
        f"Projected {projection.vesting_years} year(s): first-year CTC {projection.first_year.total:,.2f}, "
        f"hike {projection.hike_percentage:.2f}%"
    )
    if projection.yearly_breakdown and not projection.vesting_is_valid:
        proj_logger.warning(
            f"Vesting schedule totals {projection.vesting_total_percentage:.2f}%; figures assume it as given."
        )

    df = breakdown_to_frame(projection)
    if not df.empty:
        print(format_breakdown_table(df).to_string(index=False))
        print()
    for line in summary_lines(projection):
        print(line)

    started = time.perf_counter()
    save_projection_results(output_path, scenario_name, projection, config_to_save=config)
    if plots:
        plot_projection_results(projection, output_path, scenario_name)
    perf_logger.info(f"Reports written in {(time.perf_counter() - started) * 1000:.1f} ms")

    return projection


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the offer projection CLI."""
    # Get error logger early in case we need it for initialization errors
    err_logger = logging.getLogger(ERROR_LOGGER)

    try:
        args = parse_arguments(argv)

        log_dir = Path(args.log_dir)
        initialize_logging(debug=args.debug, log_dir=log_dir)

        logger.info(f"Starting projection run with arguments: {vars(args)}")

        try:
            logger.info(f"Loading configuration from: {args.config}")
            config = load_offer_config(Path(args.config))

            # Set log level from config unless debugging
            if not args.debug:
                logging.getLogger().setLevel(getattr(logging, config.reporting.log_level, logging.INFO))
                logger.info(f"Logging level set to: {config.reporting.log_level}")

            # Determine output directory
            scenario_name = args.scenario_name or config.reporting.scenario_name
            if args.output_dir:
                output_path = Path(args.output_dir)
            elif config.reporting.output_directory:
                output_path = Path(config.reporting.output_directory)
            else:
                output_path = Path(f"output_dev/{scenario_name}_results")

            output_path.mkdir(parents=True, exist_ok=True)
            logger.info(f"Output will be saved to: {output_path}")

            run_offer(config, output_path, scenario_name, plots=config.reporting.plots and not args.no_plots)
            return 0

        except (ConfigLoadError, FileNotFoundError) as e:
            err_logger.error(f"Could not load configuration: {e}", exc_info=True)
        except ValueError as e:
            err_logger.error(f"Invalid configuration: {e}", exc_info=True)
        except Exception:
            err_logger.critical("Fatal error during projection", exc_info=True)

        return 1

    except Exception as e:
        # This is a last resort catch for errors before logging is properly set up
        print(f"FATAL: {str(e)}", file=sys.stderr)
        err_logger.critical("Fatal initialization error", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
