"""
metrics.py
==========
Similarity metrics between aligned sequences of equal length.
- percent identity (default): gap-aware, columns that are '-' in both sequences are skipped
- hamming distance: plain count of differing columns

Each metric has a pairwise form (two FastaRecords) and a "to_many" form that scores one
encoded query row against every row of a uint8 matrix. The pairwise form is the
to_many form applied to a single row.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

from .errors import LengthMismatchError
from .fasta import FastaRecord
from .store import encode_sequence

GAP = "-"
_GAP_CODE = np.uint8(ord(GAP))


def _check_rows(q: np.ndarray, X: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    q = np.asarray(q, dtype=np.uint8)
    X = np.asarray(X, dtype=np.uint8)
    if q.ndim != 1:
        raise ValueError("Expected 1D query row (L,)")
    if X.ndim != 2:
        raise ValueError("Expected 2D matrix (n, L)")
    if X.shape[1] != q.shape[0]:
        raise ValueError(f"Query length {q.shape[0]} != matrix width {X.shape[1]}")
    return q, X


def percent_identity_to_many(q: np.ndarray, X: np.ndarray) -> np.ndarray:
    """Gap-aware percent identity from q to each row of X, as float64 in [0, 1].

    A row whose every column is a double gap scores 0.0.
    """
    q, X = _check_rows(q, X)
    counted = ~((X == _GAP_CODE) & (q == _GAP_CODE)[None, :])
    numer = np.count_nonzero((X == q[None, :]) & counted, axis=1)
    denom = np.count_nonzero(counted, axis=1)
    out = np.zeros(X.shape[0], dtype=np.float64)
    np.divide(numer, denom, out=out, where=denom > 0)
    return out


def hamming_to_many(q: np.ndarray, X: np.ndarray) -> np.ndarray:
    """Number of differing columns from q to each row of X (int64)."""
    q, X = _check_rows(q, X)
    return np.count_nonzero(X != q[None, :], axis=1).astype(np.int64, copy=False)


def _pair_rows(x: FastaRecord, y: FastaRecord) -> tuple[np.ndarray, np.ndarray]:
    if len(x.sequence) != len(y.sequence):
        raise LengthMismatchError(
            f"Cannot compare {x.id} (len {len(x.sequence)}) with {y.id} (len {len(y.sequence)})",
            ids=(x.id, y.id),
        )
    return encode_sequence(x.sequence), encode_sequence(y.sequence)[None, :]


def percent_identity(x: FastaRecord, y: FastaRecord) -> float:
    q, X = _pair_rows(x, y)
    return float(percent_identity_to_many(q, X)[0])


def hamming_distance(x: FastaRecord, y: FastaRecord) -> int:
    q, X = _pair_rows(x, y)
    return int(hamming_to_many(q, X)[0])


@dataclass(frozen=True)
class Metric:
    name: str
    to_many: Callable[[np.ndarray, np.ndarray], np.ndarray]
    higher_is_better: bool  # identity: keep max, hamming: keep min
    exclude_self: bool  # drop candidates sharing the query's ID


METRICS: dict[str, Metric] = {
    "identity": Metric("identity", percent_identity_to_many, higher_is_better=True, exclude_self=False),
    "hamming": Metric("hamming", hamming_to_many, higher_is_better=False, exclude_self=True),
}

DEFAULT_METRIC = "identity"


def get_metric(name: str) -> Metric:
    try:
        return METRICS[name.lower().strip()]
    except KeyError:
        raise ValueError(f"Unsupported metric: {name} (choose from {', '.join(METRICS)})") from None
