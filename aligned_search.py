#!/usr/bin/env python3
"""Read a multi-FASTA file where all sequences are pre-aligned (possibly with gaps).
For each query sequence, report its nearest neighbor in the database set.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

_THIS_DIR = Path(__file__).resolve().parent
if str(_THIS_DIR) not in sys.path:
    sys.path.insert(0, str(_THIS_DIR))

from aligned_nn.cli import add_common_io_args, add_search_args
from aligned_nn.errors import AlignedInputError
from aligned_nn.fasta import load_aligned_records, read_id_list
from aligned_nn.pipeline import compute_store_nearest_neighbors
from aligned_nn.search import SearchParams
from aligned_nn.store import AlignmentStore

_TAG = "[aligned_search]"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Nearest neighbor (gap-aware percent identity) for every query in an aligned FASTA."
    )
    parser.add_argument(
        "-i",
        "--input-fasta",
        required=True,
        help="The path to the aligned multi-FASTA file",
    )
    parser.add_argument(
        "-o",
        "--out-path",
        required=True,
        help="The path to output the result to (TSV: query, neighbor, score)",
    )
    parser.add_argument(
        "-q",
        "--query-id-file",
        default=None,
        help="Optional text file of FASTA record IDs, one per line. Restricts the queries to these IDs.",
    )
    parser.add_argument(
        "-d",
        "--database-id-file",
        default=None,
        help="Optional text file of FASTA record IDs, one per line. Restricts the database to these IDs.",
    )
    add_search_args(parser)
    add_common_io_args(parser)
    return parser.parse_args(argv)


def _parse_id_file(path: str | None, arg_name: str) -> list[str] | None:
    if path is None:
        print(f"{_TAG} No file specified for {arg_name} -- the entire collection will be used.")
        return None
    print(f"{_TAG} Parsing {arg_name} IDs from file: {path}")
    return read_id_list(path)


def _fail(msg: str) -> int:
    print(f"{_TAG} ERROR: {msg}", file=sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        records = load_aligned_records(args.input_fasta)
    except (OSError, AlignedInputError) as e:
        return _fail(f"Unable to parse FASTA file. Reason: {e}")
    if len(records) < 2:
        return _fail("There must be at least two FASTA records.")

    store = AlignmentStore.from_records(records)
    if args.verbose:
        print(f"{_TAG} Loaded {len(store)} records, aligned length {store.length}")

    print(f"{_TAG} Number of workers = {args.num_workers}")
    params = SearchParams(metric=args.metric, num_workers=args.num_workers, progress=not args.no_progress)

    try:
        query_ids = _parse_id_file(args.query_id_file, "query")
        db_ids = _parse_id_file(args.database_id_file, "database")
    except (OSError, UnicodeDecodeError) as e:
        return _fail(f"Error reading ID file: {e}")

    out_path = Path(args.out_path)
    if out_path.exists():
        print(f"{_TAG} The output file {out_path} already exists. It will be overwritten!")

    try:
        results = compute_store_nearest_neighbors(store, out_path, query_ids, db_ids, params, verbose=args.verbose)
    except (OSError, AlignedInputError) as e:
        return _fail(f"Error while performing nearest neighbors. Reason: {e}")

    if args.verbose:
        print(f"{_TAG} Metric = {params.metric}, queries = {len(results)}")
    print(f"{_TAG} Successfully computed nearest neighbors to: {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
