"""
store.py
========
Holds the loaded alignment as a single (n, L) uint8 matrix plus the matching IDs.
Every other part of the pipeline refers to records by row index into this store,
so query/database views never copy sequence data.
- AlignmentStore.from_records: builds the matrix from validated FASTA records
- AlignmentStore.select: subset filter by ID membership (order preserving)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from .fasta import FastaRecord


def encode_sequence(seq: str) -> np.ndarray:
    """ASCII codes of an aligned sequence as a 1D uint8 array."""
    return np.frombuffer(seq.encode("ascii"), dtype=np.uint8)


@dataclass(frozen=True)
class AlignmentStore:
    """In-memory alignment with ID mapping."""

    ids: list[str]
    matrix: np.ndarray  # shape (n, L), uint8, one row per record

    def __post_init__(self) -> None:
        if self.matrix.ndim != 2:
            raise ValueError("matrix must be 2D (n, L)")
        if self.matrix.shape[0] != len(self.ids):
            raise ValueError("matrix rows must match ids length")
        if self.matrix.shape[0] == 0:
            raise ValueError("store must hold at least one record")
        # read-only: shared by all search workers
        self.matrix.setflags(write=False)

    @classmethod
    def from_records(cls, records: Sequence[FastaRecord]) -> "AlignmentStore":
        if not records:
            raise ValueError("store must hold at least one record")
        rows = [encode_sequence(rec.sequence) for rec in records]
        width = rows[0].shape[0]
        if any(r.shape[0] != width for r in rows):
            # load_aligned_records() rejects these before we get here
            raise ValueError("all records must have the same aligned length")
        return cls(ids=[rec.id for rec in records], matrix=np.vstack(rows))

    def __len__(self) -> int:
        return int(self.matrix.shape[0])

    @property
    def length(self) -> int:
        """Aligned length L shared by every record."""
        return int(self.matrix.shape[1])

    def select(self, ids: Iterable[str] | None = None) -> np.ndarray:
        """Row indices of records whose ID is in `ids` (all rows when `ids` is None).

        Unknown IDs are ignored and duplicates collapse; collection order is kept.
        """
        if ids is None:
            return np.arange(len(self), dtype=np.intp)
        wanted = set(ids)
        return np.asarray([i for i, rid in enumerate(self.ids) if rid in wanted], dtype=np.intp)
