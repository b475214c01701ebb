#!/usr/bin/env python3
"""
Conditional Validation CLI

Validates a record file against a rules file.
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

import yaml

from conditional_validation import ConfigurationError, DictRecord, RecordValidator

LOG_LEVEL_ENV = "CONDITIONAL_VALIDATION_LOG_LEVEL"

EXIT_PASS = 0
EXIT_FAIL = 1
EXIT_CONFIG_ERROR = 2


def setup_logging(level: str = "INFO"):
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def load_record(path: str) -> DictRecord:
    """Load a record graph from a YAML or JSON file."""
    record_path = Path(path)
    if not record_path.exists():
        raise FileNotFoundError(f"Record file not found: {path}")

    with open(record_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ConfigurationError(f"Record file {path} must contain a mapping")
    return DictRecord.from_dict(data)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate a record against conditional validation rules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate an order with the example rules
  conditional-validate --rules conditional_validation/rules/orders.yaml --record order.yaml

  # Only validate two attributes in the "checkout" scenario, JSON output
  conditional-validate --rules rules.yaml --record order.yaml \\
      --scenario checkout --attributes shipping_method,billing_zip --format json
        """,
    )

    parser.add_argument(
        "--rules",
        type=str,
        default=None,
        help="Path to the rules YAML (default: $CONDITIONAL_VALIDATION_RULES)",
    )
    parser.add_argument("--record", type=str, required=True,
                        help="Path to the record YAML/JSON file")
    parser.add_argument("--scenario", type=str, default=None,
                        help="Active validation scenario")
    parser.add_argument("--attributes", type=str, default=None,
                        help="Comma separated attributes to validate (default: all)")
    parser.add_argument("--format", choices=["text", "json"], default="text",
                        help="Output format (default: text)")
    parser.add_argument(
        "--log-level",
        type=str,
        default=os.getenv(LOG_LEVEL_ENV, "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: ${LOG_LEVEL_ENV} or WARNING)",
    )
    return parser


def main(argv=None) -> int:
    """Main CLI entrypoint."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    attributes = None
    if args.attributes:
        attributes = [a.strip() for a in args.attributes.split(",") if a.strip()]

    try:
        validator = RecordValidator(rules_path=args.rules, enable_metrics=False)
        record = load_record(args.record)
        result = validator.validate(record, attributes=attributes, scenario=args.scenario)
    except (ConfigurationError, FileNotFoundError) as e:
        logger.error(f"Configuration error: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if args.format == "json":
        print(json.dumps(result.to_dict(), indent=2, default=str))
    elif result.passed:
        print("[OK] Record is valid")
    else:
        print(f"Record has {len(result.errors)} error(s):")
        for failure in result.errors:
            print(f"  - {failure}")

    return EXIT_PASS if result.passed else EXIT_FAIL


if __name__ == "__main__":
    sys.exit(main())
