"""Command-line interface for the registration extractor."""

import argparse
import logging
import sys
from pathlib import Path

from .config import OUTPUT_FORMATS, RunConfig
from .crawler import collect_registrations
from .exceptions import RegistryExtractorError
from .output import write_records
from .utils import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog='registry-extractor',
        description='Fetches German company registrations from the register announcement search.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Today's registrations as CSV on stdout
  python -m registry_extractor

  # A week of registrations as JSON Lines
  python -m registry_extractor --output jsonl \\
    --start-date 2024-02-01 --end-date 2024-02-07 \\
    --output-file registrations.jsonl

  # Settings from a YAML file, dates from the command line
  python -m registry_extractor --config registry.yaml --start-date 2024-02-01
"""
    )

    parser.add_argument(
        '--output',
        choices=OUTPUT_FORMATS,
        help='Output format (default: csv)'
    )

    parser.add_argument(
        '--start-date', '--start_date',
        dest='start_date',
        help='First day to search, YYYY-MM-DD (default: today)'
    )

    parser.add_argument(
        '--end-date', '--end_date',
        dest='end_date',
        help='Last day to search, YYYY-MM-DD (default: today)'
    )

    parser.add_argument(
        '--output-file',
        type=Path,
        help='Write records to this file instead of stdout'
    )

    parser.add_argument(
        '--config',
        type=Path,
        help='Load settings from a YAML file (command line flags take precedence)'
    )

    parser.add_argument(
        '--land',
        dest='land_abk',
        help='Jurisdiction code used in detail page URLs (default: bw)'
    )

    parser.add_argument(
        '--max-workers',
        type=int,
        help='Concurrent detail page fetches (default: 4)'
    )

    parser.add_argument(
        '--politeness-delay',
        type=float,
        help='Minimum seconds between requests (default: 0.2)'
    )

    parser.add_argument(
        '--request-timeout',
        type=int,
        help='HTTP request timeout in seconds (default: 30)'
    )

    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable the progress bar'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    return parser.parse_args(argv)


def build_config(args) -> RunConfig:
    """Create a RunConfig from parsed arguments, validating all inputs.

    Raises:
        ValueError: On invalid dates or output format
    """
    overrides = {
        'start_date': args.start_date,
        'end_date': args.end_date,
        'output_format': args.output,
        'land_abk': args.land_abk,
        'max_workers': args.max_workers,
        'politeness_delay': args.politeness_delay,
        'request_timeout': args.request_timeout,
    }
    if args.no_progress:
        overrides['show_progress'] = False

    if args.config:
        return RunConfig.from_yaml(args.config, **overrides)
    return RunConfig(**{k: v for k, v in overrides.items() if v is not None})


def run(args) -> int:
    """Validate inputs, crawl and write the records. Returns the exit code."""
    try:
        config = build_config(args)
    except (ValueError, OSError) as e:
        logger.error(str(e))
        return 1

    registrations = collect_registrations(config)

    if args.output_file:
        with open(args.output_file, 'w', encoding='utf-8', newline='') as f:
            write_records(registrations, config.output_format, f)
        logger.info(f"Wrote {len(registrations)} registrations to {args.output_file}")
    else:
        write_records(registrations, config.output_format, sys.stdout)

    return 0


def main(argv=None):
    """Main CLI entrypoint."""
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        sys.exit(run(args))
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)
    except RegistryExtractorError as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == '__main__':
    main()
