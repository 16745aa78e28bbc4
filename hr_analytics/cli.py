# hr_analytics/cli.py
# Command-line interface entry point (argparse)
import argparse
import json
import logging
import sys
from dataclasses import asdict, is_dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from hr_analytics.config.loaders import load_config
from hr_analytics.config.models import AnalyticsConfig, DEFAULT_CONFIG
from hr_analytics.data.readers import (
    read_absence_records,
    read_compensation_records,
    read_employee_records,
)
from hr_analytics.engines.absence import calculate_absence_metrics
from hr_analytics.engines.demographics import calculate_demographics_metrics
from hr_analytics.engines.payroll import calculate_payroll_metrics
from hr_analytics.engines.workforce import calculate_workforce_metrics
from hr_analytics.errors import HRAnalyticsError
from hr_analytics.reporting.analysis import (
    analyze_absence,
    analyze_demographics,
    analyze_payroll,
    analyze_workforce,
    calculate_stability,
    compare_absence_benchmark,
    compare_workforce_benchmark,
    detect_absence_patterns,
    detect_pyramid_inversion,
)
from hr_analytics.reporting.comparison import (
    ComparisonMode,
    build_comparison,
    resolve_comparison_period,
)
from hr_analytics.utils.date_utils import period_label, to_date
from hr_analytics.utils.status_enums import normalize_sector

# Import logging configuration
from logging_config import CALCULATION_LOGGER, DEFAULT_LOG_DIR, ERROR_LOGGER, setup_logging

# Get logger for this module
logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="hr-analytics",
        description="Compute payroll, demographic, workforce and absence metrics for one period.",
    )

    # Required arguments
    parser.add_argument("--employees", type=str, required=True, help="Roster file (.csv or .parquet).")
    parser.add_argument("--compensation", type=str, required=True, help="Compensation file (.csv or .parquet).")
    parser.add_argument("--period", type=str, required=True, help="Period analysed (YYYY-MM or YYYY-MM-DD).")

    # Optional arguments
    parser.add_argument("--absences", type=str, default=None, help="Absence file (.csv or .parquet).")
    parser.add_argument(
        "--comparison-employees",
        type=str,
        default=None,
        help="Roster of the comparison period. Defaults to the current roster.",
    )
    parser.add_argument(
        "--comparison-compensation",
        type=str,
        default=None,
        help="Compensation file of the comparison period; enables the Price/Volume waterfall.",
    )
    parser.add_argument(
        "--comparison-period",
        type=str,
        default=None,
        help="Comparison period. Defaults to the one implied by --comparison-mode.",
    )
    parser.add_argument(
        "--comparison-mode",
        choices=[mode.value for mode in ComparisonMode],
        default=ComparisonMode.PREVIOUS_MONTH.value,
        help="How the comparison period is chosen when --comparison-period is omitted.",
    )
    parser.add_argument("--sector", type=str, default="services", help="Sector used for benchmarks.")
    parser.add_argument("--config", type=str, default=None, help="Path to the YAML configuration file.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--log-dir",
        type=str,
        default=str(DEFAULT_LOG_DIR),
        help=f"Directory to store log files (default: {DEFAULT_LOG_DIR})",
    )
    parser.add_argument("--output", type=str, default=None, help="Write the JSON report here instead of stdout.")

    return parser.parse_args(argv)


def initialize_logging(debug: bool = False, log_dir: Path = DEFAULT_LOG_DIR) -> None:
    """Initialize the logging configuration.

    Args:
        debug: Whether to enable debug logging
        log_dir: Directory to store log files
    """
    try:
        setup_logging(log_dir=log_dir, debug=debug)

        logger.info("Starting hr-analytics run")
        logger.info(f"Command line arguments: {sys.argv}")
        logger.info(f"Python version: {sys.version}")
        logger.info(f"Pandas version: {pd.__version__}")
        logger.info(f"NumPy version: {np.__version__}")

        if debug:
            logger.debug("Debug logging enabled")

    except Exception as e:
        print(f"Error initializing logging: {e}", file=sys.stderr)
        raise


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        if hasattr(value, "to_dict"):
            return value.to_dict()
        return asdict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _advisory(result: Any) -> Dict[str, Any]:
    data = asdict(result)
    if hasattr(result, "at_risk"):
        data["at_risk"] = result.at_risk
    return data


def build_report(args: argparse.Namespace, config: AnalyticsConfig = DEFAULT_CONFIG) -> Dict[str, Any]:
    """Read the input files named in ``args`` and compute the full report."""
    period_date = to_date(args.period)
    if period_date is None:
        raise HRAnalyticsError(f"Invalid --period value: {args.period!r}")
    label = period_label(period_date)
    try:
        sector = normalize_sector(args.sector)
    except ValueError as e:
        raise HRAnalyticsError(f"Unknown --sector value: {args.sector!r}") from e

    employees = read_employee_records(args.employees)
    compensation = read_compensation_records(args.compensation)

    payroll = calculate_payroll_metrics(compensation, employees, config, period=label)
    demographics = calculate_demographics_metrics(employees, period_date, config)
    workforce = calculate_workforce_metrics(employees, period_date, config)

    report: Dict[str, Any] = {
        "period": label,
        "payroll": payroll.to_dict(),
        "payroll_analysis": _advisory(analyze_payroll(payroll, config)),
        "demographics": demographics.to_dict(),
        "demographics_analysis": _advisory(analyze_demographics(demographics, config)),
        "pyramid_risk": _advisory(detect_pyramid_inversion(demographics, config)),
        "workforce": workforce.to_dict(),
        "workforce_analysis": _advisory(analyze_workforce(workforce, config)),
        "stability": _advisory(calculate_stability(workforce, config)),
        "workforce_benchmark": _advisory(compare_workforce_benchmark(workforce, sector, config)),
    }

    if args.absences:
        absences = read_absence_records(args.absences)
        absence = calculate_absence_metrics(absences, employees, period_date, config)
        report["absence"] = absence.to_dict()
        report["absence_analysis"] = _advisory(analyze_absence(absence, config))
        report["absence_patterns"] = _advisory(detect_absence_patterns(absence, config))
        report["absence_benchmark"] = _advisory(compare_absence_benchmark(absence, sector, config))

    if args.comparison_compensation:
        if args.comparison_period:
            comparison_date = to_date(args.comparison_period)
            if comparison_date is None:
                raise HRAnalyticsError(f"Invalid --comparison-period value: {args.comparison_period!r}")
        else:
            comparison_date = resolve_comparison_period(period_date, ComparisonMode(args.comparison_mode))
        comparison_employees = (
            read_employee_records(args.comparison_employees) if args.comparison_employees else employees
        )
        comparison_payroll = calculate_payroll_metrics(
            read_compensation_records(args.comparison_compensation),
            comparison_employees,
            config,
            period=period_label(comparison_date),
        )
        report["comparison_payroll"] = comparison_payroll.to_dict()
        report["waterfall"] = build_comparison(payroll, comparison_payroll, config).to_dict()

    return report


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the hr-analytics CLI."""
    args = parse_arguments(argv)
    initialize_logging(debug=args.debug, log_dir=Path(args.log_dir))

    err_logger = logging.getLogger(ERROR_LOGGER)
    calc_logger = logging.getLogger(CALCULATION_LOGGER)
    logger.info(f"Starting analytics run with arguments: {vars(args)}")

    try:
        config = load_config(args.config) if args.config else DEFAULT_CONFIG
        report = build_report(args, config)
    except HRAnalyticsError as e:
        err_logger.error(f"Analytics run failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    payload = json.dumps(report, indent=2, ensure_ascii=False, default=_jsonable)
    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(payload + "\n", encoding="utf-8")
        calc_logger.info(f"Report written to {output_path}")
    else:
        print(payload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
