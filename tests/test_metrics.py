import numpy as np
import pytest

from aligned_nn.errors import LengthMismatchError
from aligned_nn.fasta import FastaRecord
from aligned_nn.metrics import (
    get_metric,
    hamming_distance,
    hamming_to_many,
    percent_identity,
    percent_identity_to_many,
)
from aligned_nn.store import encode_sequence


def rec(rid, seq):
    return FastaRecord(id=rid, sequence=seq)


def test_pct_identity_basic():
    assert percent_identity(rec("input1", "AAAAAAA"), rec("input2", "AAAACCA")) == 5.0 / 7.0
    assert percent_identity(rec("input1", "AAAA"), rec("input2", "CCCC")) == 0.0
    assert percent_identity(rec("input1", "AAAA"), rec("input2", "AAAA")) == 1.0


def test_pct_identity_length_mismatch_names_both_ids():
    with pytest.raises(LengthMismatchError) as exc:
        percent_identity(rec("input1", "AAAA"), rec("input2", "AAA"))
    assert exc.value.ids == ("input1", "input2")


def test_pct_identity_skips_double_gaps():
    x = rec("input1", "----AAAA----")
    y = rec("input2", "----AAA-----")
    assert percent_identity(x, y) == 3.0 / 4.0

    # counting the double-gap columns would give 3/4 here instead of 1/2
    assert percent_identity(rec("a", "--AC"), rec("b", "--AG")) == 0.5


def test_pct_identity_gap_against_residue_is_mismatch():
    assert percent_identity(rec("a", "A-"), rec("b", "AA")) == 0.5


def test_pct_identity_prefers_overlapping_residues():
    x1 = rec("x1", "-----------------------------------------AAAAAAAAAA---------------------")
    x2 = rec("x2", "-------------------------CCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCC-------------")
    y = rec("y", "--------------------------------------------CCC-------------------------")
    assert percent_identity(x2, y) > percent_identity(x1, y)


def test_pct_identity_symmetric():
    rng = np.random.default_rng(7)
    alphabet = np.array(list("ACGT-"))
    for _ in range(20):
        a = "".join(rng.choice(alphabet, size=25))
        b = "".join(rng.choice(alphabet, size=25))
        assert percent_identity(rec("a", a), rec("b", b)) == percent_identity(rec("b", b), rec("a", a))


def test_pct_identity_self_is_one():
    assert percent_identity(rec("a", "--AC-GT-"), rec("a", "--AC-GT-")) == 1.0


def test_pct_identity_all_double_gaps_is_zero():
    score = percent_identity(rec("a", "----"), rec("b", "----"))
    assert score == 0.0
    assert not np.isnan(score)


def test_hamming_distance():
    assert hamming_distance(rec("a", "AAAA"), rec("b", "AACC")) == 2
    # no gap exclusion for hamming
    assert hamming_distance(rec("a", "--AA"), rec("b", "--AA")) == 0
    assert hamming_distance(rec("a", "A-AA"), rec("b", "AAAA")) == 1
    with pytest.raises(LengthMismatchError):
        hamming_distance(rec("a", "AAAA"), rec("b", "AAA"))


def test_to_many_scores_every_row():
    q = encode_sequence("AC-T")
    X = np.vstack([encode_sequence(s) for s in ["AC-T", "AG-T", "----", "TGCA"]])

    ident = percent_identity_to_many(q, X)
    assert ident.tolist() == [1.0, 2.0 / 3.0, 0.0, 0.0]

    dist = hamming_to_many(q, X)
    assert dist.tolist() == [0, 1, 3, 4]


def test_to_many_rejects_wrong_width():
    with pytest.raises(ValueError):
        percent_identity_to_many(encode_sequence("AAA"), np.vstack([encode_sequence("AAAA")]))


def test_get_metric():
    ident = get_metric("identity")
    assert ident.higher_is_better and not ident.exclude_self
    ham = get_metric(" Hamming ")
    assert not ham.higher_is_better and ham.exclude_self
    with pytest.raises(ValueError):
        get_metric("blosum62")
