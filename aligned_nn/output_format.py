"""
output_format.py
================
Defines the output table (TSV, no header):

    query_id<TAB>neighbor_id<TAB>score

One line per query, same order as the query view. Scores are written as plain decimals
(identity) or integers (hamming); never scientific notation.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence, TextIO

import numpy as np

from .errors import InvariantError


@dataclass(frozen=True)
class NeighborResult:
    query_id: str
    neighbor_id: str
    score: float | int  # identity in [0, 1], or hamming distance


def format_score(score: float | int) -> str:
    if isinstance(score, (int, np.integer)) and not isinstance(score, bool):
        return str(int(score))
    # 1.0 -> "1", 0.75 -> "0.75", 1e-05 -> "0.00001"
    return np.format_float_positional(float(score), trim="-")


def write_neighbor_table(out: TextIO, rows: Iterable[NeighborResult]) -> None:
    for r in rows:
        out.write(f"{r.query_id}\t{r.neighbor_id}\t{format_score(r.score)}\n")


def write_results(path: str | Path, results: Sequence[NeighborResult], num_queries: int) -> Path:
    """Write the result table, replacing any existing file at `path`."""
    if len(results) != num_queries:
        raise InvariantError(
            f"Results length should always match query length! ({len(results)} != {num_queries})"
        )

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    # same directory as the target so replace() stays a rename
    tmp = p.with_name(f".{p.name}.tmp")
    try:
        with tmp.open("w", encoding="utf-8", newline="\n") as out:
            write_neighbor_table(out, results)
        tmp.replace(p)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    return p
