from __future__ import annotations

import argparse

from .metrics import DEFAULT_METRIC, METRICS


def positive_int(value: str) -> int:
    n = int(value)
    if n <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return n


def add_common_io_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose logging",
    )


def add_search_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-n",
        "--num-workers",
        type=positive_int,
        default=1,
        help="The number of worker threads to use (default: 1)",
    )
    parser.add_argument(
        "--metric",
        default=DEFAULT_METRIC,
        choices=sorted(METRICS),
        help=f"Similarity metric (default: {DEFAULT_METRIC})",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not show the progress bar",
    )
