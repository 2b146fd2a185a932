from pathlib import Path

import numpy as np
import pytest

from aligned_nn.errors import InvariantError
from aligned_nn.output_format import NeighborResult, format_score, write_results


@pytest.mark.parametrize(
    "score, expected",
    [
        (1.0, "1"),
        (0.0, "0"),
        (0.75, "0.75"),
        (1e-05, "0.00001"),
        (13, "13"),
        (np.int64(12), "12"),
    ],
)
def test_format_score(score, expected):
    assert format_score(score) == expected


def test_write_results_overwrites(tmp_path: Path):
    out = tmp_path / "nn.tsv"
    out.write_text("stale\n", encoding="utf-8")
    rows = [NeighborResult("q_1", "db_1", 1.0), NeighborResult("q_2", "db_2", 0.5)]

    write_results(out, rows, num_queries=2)
    assert out.read_text(encoding="utf-8") == "q_1\tdb_1\t1\nq_2\tdb_2\t0.5\n"


def test_write_results_rejects_misaligned_results(tmp_path: Path):
    out = tmp_path / "nn.tsv"
    with pytest.raises(InvariantError):
        write_results(out, [NeighborResult("q_1", "db_1", 1.0)], num_queries=2)
    assert not out.exists()


def test_write_results_failure_keeps_previous_file(tmp_path: Path):
    out = tmp_path / "nn.tsv"
    out.write_text("stale\n", encoding="utf-8")
    rows = [NeighborResult("q_1", "db_1", 1.0), NeighborResult("q_2", "db_2", "not-a-score")]

    with pytest.raises(ValueError):
        write_results(out, rows, num_queries=2)
    assert out.read_text(encoding="utf-8") == "stale\n"
    assert [p.name for p in tmp_path.iterdir()] == ["nn.tsv"]
