#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path

_THIS_DIR = Path(__file__).resolve().parent
if str(_THIS_DIR) not in sys.path:
    sys.path.insert(0, str(_THIS_DIR))

from aligned_nn.fasta import read_fasta, write_id_list


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Utility: write the IDs of records [skip, skip+n) of a FASTA file, one per line. "
        "Useful for building query/database ID files."
    )
    p.add_argument("-i", "--input", required=True, help="Input FASTA")
    p.add_argument("-o", "--output", required=True, help="Output ID list")
    p.add_argument("--n", type=int, default=None, help="Number of IDs to keep (default: all)")
    p.add_argument("--skip", type=int, default=0, help="Number of leading records to skip (default: 0)")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.n is not None and args.n <= 0:
        raise ValueError("--n must be positive")
    if args.skip < 0:
        raise ValueError("--skip must be non-negative")

    ids: list[str] = []
    for i, rec in enumerate(read_fasta(args.input)):
        if i < args.skip:
            continue
        ids.append(rec.id)
        if args.n is not None and len(ids) >= args.n:
            break

    if not ids:
        raise ValueError("No FASTA records selected")

    out = write_id_list(args.output, ids)
    print(f"[make_idlist] Wrote {len(ids)} IDs to {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
