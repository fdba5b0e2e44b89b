#!/usr/bin/env python3
# cli.py — command line front end for hailstorm

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from hailstorm.config import LoadConfig, parse_percentiles
from hailstorm.core import run_load
from hailstorm.errors import HailstormError
from hailstorm.logging_config import setup_logging
from hailstorm.models import DEFAULT_PERCENTILES
from hailstorm.rendering import render_latency_histogram, render_report, render_worker_breakdown

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_RUN_FAILED = 2
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hailstorm",
        description="Hailstorm: concurrent HTTP GET load generator",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument("url", nargs="?", default=None, help="Target URL to request")

    # Load shape
    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        default=1,
        help="Number of concurrent workers",
    )
    parser.add_argument(
        "-r",
        "--requests",
        type=int,
        default=1,
        help="Number of sequential requests per worker",
    )
    parser.add_argument(
        "-s",
        "--status",
        type=int,
        default=200,
        help="Response status considered a success",
    )
    parser.add_argument(
        "-p",
        "--percentiles",
        type=parse_percentiles,
        default=DEFAULT_PERCENTILES,
        help="Comma separated percentile ranks to report",
    )

    # Output
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not show a progress bar on stderr",
    )
    parser.add_argument(
        "--histogram",
        action="store_true",
        help="Print a latency histogram of successful requests",
    )
    parser.add_argument(
        "--per-worker",
        action="store_true",
        help="Print a per-worker breakdown",
    )

    # Logging & Debugging
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log per-request diagnostics to stderr",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional file to write logs to (e.g., hailstorm.log)",
    )

    return parser


def _validation_messages(err: ValidationError) -> list[str]:
    messages = []
    for e in err.errors():
        cause = e.get("ctx", {}).get("error")
        messages.append(str(cause) if cause else f"{'.'.join(map(str, e['loc']))}: {e['msg']}")
    return messages


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = LoadConfig.from_args(args)
    except ValidationError as e:
        for message in _validation_messages(e):
            print(message, file=sys.stderr)
        return EXIT_CONFIG

    setup_logging(level="DEBUG" if config.verbose else "WARNING", log_file=config.log_file)

    try:
        results, stats = asyncio.run(run_load(config))
    except HailstormError as e:
        logging.error(f"Load run aborted: {e}")
        return EXIT_RUN_FAILED
    except KeyboardInterrupt:
        logging.warning("Interrupted, no statistics produced")
        return EXIT_INTERRUPTED

    print(render_report(stats, config.percentiles))
    if config.per_worker:
        print()
        print(render_worker_breakdown(results))
    if config.histogram:
        print()
        print(render_latency_histogram(results.passed_latencies()))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
