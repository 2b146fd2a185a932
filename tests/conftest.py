import sys
from pathlib import Path

import pytest

# Repo root = one level above tests/
REPO_ROOT = Path(__file__).resolve().parents[1]

# Ensure repo root is on sys.path so the root scripts (aligned_search.py, ...) import.
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from aligned_nn.fasta import FastaRecord  # noqa: E402
from aligned_nn.store import AlignmentStore  # noqa: E402


@pytest.fixture
def write_fasta(tmp_path: Path):
    """Write (id, sequence) pairs to a FASTA file under tmp_path and return its path."""

    def _write(pairs, name="seqs.fasta"):
        p = tmp_path / name
        p.write_text("".join(f">{rid}\n{seq}\n" for rid, seq in pairs), encoding="utf-8")
        return p

    return _write


@pytest.fixture
def make_store():
    def _make(pairs):
        return AlignmentStore.from_records([FastaRecord(id=rid, sequence=seq) for rid, seq in pairs])

    return _make


# Scenario with explicit query / database ID lists (13 aligned columns).
QUERY_DB_RECORDS = [
    ("q_1", "AAAAAAAAAAAAA"),
    ("db_1", "AAAAAAAAAAAAA"),
    ("q_2", "CCCCCCCCCCCCC"),
    ("db_2", "CCCCCCCCCCCCA"),
]
