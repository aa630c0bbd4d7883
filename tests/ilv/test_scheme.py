"""
Tests for the ILV inner-product commitment scheme.

Covers:
- commit (known values, zero vector, linearity, dimension overflow)
- prove / verify completeness on honest and over-long keys
- verify rejects wrong claims, wrong public vectors, wrong commitments
"""

import pytest

from zkp.ilv.field import FR, G1, ec_mul, ec_add
from zkp.ilv import scheme
from zkp.ilv.srs import CommitmentKey
from zkp.ilv.scheme import (
    commit, commit_public, prove, open_, verify, inner_product, zero_vector,
)
from zkp.ilv.errors import DimensionExceeded, SchemeError


class _UnreadableKey:
    """dim만 있고 SRS를 읽으면 실패하는 키."""

    dim = 2

    @property
    def powers_g1(self):
        raise AssertionError("SRS must not be read")

    def g1_power(self, k):
        raise AssertionError("SRS must not be read")

    def g2_power(self, k):
        raise AssertionError("SRS must not be read")


# ─────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────

class TestHelpers:
    def test_inner_product(self):
        assert inner_product([1, 2, 3], [4, 5, 6]) == FR(32)

    def test_inner_product_shorter_vector(self):
        assert inner_product([1, 2, 3], [2]) == FR(2)

    def test_zero_vector(self):
        assert zero_vector(3) == [FR(0), FR(0), FR(0)]

    def test_open_is_prove(self):
        assert open_ is prove


# ─────────────────────────────────────────────────────────────────────
# Commit
# ─────────────────────────────────────────────────────────────────────

class TestCommit:
    """commit 테스트."""

    def test_unit_vector(self, honest_key):
        assert commit(honest_key, [1]) == G1
        assert commit(honest_key, [0, 1]) == honest_key.powers_g1[1]

    def test_known_vector(self, honest_key):
        P = honest_key.powers_g1
        expected = ec_add(ec_mul(P[0], 2), ec_mul(P[1], 3))
        assert commit(honest_key, [2, 3]) == expected

    def test_accepts_fr(self, honest_key):
        assert commit(honest_key, [FR(2), FR(3)]) == commit(honest_key, [2, 3])

    def test_zero_vector_is_identity(self, honest_key, leaked_key, dim):
        assert commit(honest_key, zero_vector(dim)) is None
        assert commit(leaked_key, zero_vector(dim)) is None

    def test_empty_vector_is_identity(self, honest_key):
        assert commit(honest_key, []) is None

    def test_linearity(self, honest_key):
        a = [1, 2, 3, 4]
        b = [5, 0, 7, 1]
        a_plus_b = [x + y for x, y in zip(a, b)]
        assert commit(honest_key, a_plus_b) == ec_add(commit(honest_key, a), commit(honest_key, b))

    def test_negation(self, honest_key):
        assert commit(honest_key, [-3, 1]) == ec_mul(commit(honest_key, [3, -1]), -1)

    def test_same_on_leaked_key(self, honest_key, leaked_key):
        """The extra element is never used for commitments."""
        a = [9, 8, 7, 6]
        assert commit(leaked_key, a) == commit(honest_key, a)

    def test_too_long(self, honest_key, dim):
        with pytest.raises(DimensionExceeded) as exc_info:
            commit(honest_key, [1] * (dim + 1))
        assert exc_info.value.name == "a"
        assert exc_info.value.length == dim + 1
        assert exc_info.value.dim == dim

    def test_too_long_on_leaked_key(self, leaked_key, dim):
        """powers_g1 has dim+2 entries, but dim+1 entries are still rejected."""
        with pytest.raises(DimensionExceeded):
            commit(leaked_key, [1] * (dim + 1))

    def test_too_long_fails_before_reading_srs(self):
        with pytest.raises(DimensionExceeded):
            commit(_UnreadableKey(), [1, 2, 3])

    def test_dimension_error_types(self, honest_key, dim):
        with pytest.raises(SchemeError):
            commit(honest_key, [1] * (dim + 1))
        with pytest.raises(ValueError):
            commit(honest_key, [1] * (dim + 1))


class TestCommitPublic:
    def test_slot_positions(self, honest_key, dim):
        """b[dim-1] sits at β²·h, b[0] at β^(dim+1)·h."""
        b = [0] * (dim - 1) + [1]
        assert commit_public(honest_key, b) == honest_key.powers_g2_high[0]
        assert commit_public(honest_key, [1]) == honest_key.powers_g2_high[-1]

    def test_too_long(self, honest_key, dim):
        with pytest.raises(DimensionExceeded) as exc_info:
            commit_public(honest_key, [1] * (dim + 1))
        assert exc_info.value.name == "b"


# ─────────────────────────────────────────────────────────────────────
# Prove / Verify
# ─────────────────────────────────────────────────────────────────────

VECTORS = [
    ([1, 2, 3, 4], [1, 1, 1, 1]),
    ([5, 0, 0, 9], [2, 3, 4, 5]),
    ([7], [3]),
    ([1, 2], [0, 0, 0, 1]),
    ([0, 0, 0, 0], [1, 2, 3, 4]),
    ([-1, 2, -3, 4], [4, 3, 2, 1]),
]


class TestProve:
    """prove 테스트."""

    @pytest.mark.parametrize("a,b", VECTORS)
    def test_claimed_is_inner_product(self, honest_key, a, b):
        m, _ = prove(honest_key, a, b)
        assert m == inner_product(a, b)

    def test_same_proof_on_leaked_key(self, honest_key, leaked_key):
        a, b = [1, 2, 3, 4], [4, 3, 2, 1]
        assert prove(leaked_key, a, b) == prove(honest_key, a, b)

    def test_ignores_extra_g1_element(self, honest_key, dim):
        """An honest prover never reads powers_g1[dim+1], whatever it holds."""
        key = CommitmentKey(
            honest_key.powers_g1 + ("junk",), honest_key.powers_g1_high,
            honest_key.powers_g2, honest_key.powers_g2_high, dim,
        )
        a, b = [3, 1, 4, 1], [5, 9, 2, 6]
        assert prove(key, a, b) == prove(honest_key, a, b)

    def test_zero_vector_proof(self, honest_key, dim):
        m, W = prove(honest_key, zero_vector(dim), [1] * dim)
        assert m == FR(0)
        assert W is None

    def test_too_long_a(self, honest_key, dim):
        with pytest.raises(DimensionExceeded) as exc_info:
            prove(honest_key, [1] * (dim + 1), [1])
        assert exc_info.value.name == "a"

    def test_too_long_b(self, honest_key, dim):
        with pytest.raises(DimensionExceeded) as exc_info:
            prove(honest_key, [1], [1] * (dim + 1))
        assert exc_info.value.name == "b"

    def test_too_long_fails_before_reading_srs(self):
        with pytest.raises(DimensionExceeded):
            prove(_UnreadableKey(), [1, 2, 3], [1])

    def test_gap_coefficient_mismatch_raises(self, honest_key, monkeypatch):
        """The gap coefficient is checked against ⟨a, b⟩ with a ValueError."""
        monkeypatch.setattr(scheme, "inner_product", lambda a, b: FR(999))
        with pytest.raises(ValueError, match="열기 증명 생성 실패"):
            prove(honest_key, [1, 2, 3, 4], [1, 1, 1, 1])


class TestVerify:
    """verify 테스트."""

    @pytest.mark.parametrize("a,b", VECTORS)
    def test_completeness(self, honest_key, a, b):
        C = commit(honest_key, a)
        m, W = prove(honest_key, a, b)
        assert verify(honest_key, C, b, m, W) is True

    def test_completeness_on_leaked_key(self, leaked_key):
        a, b = [1, 2, 3, 4], [2, 2, 2, 2]
        C = commit(leaked_key, a)
        m, W = prove(leaked_key, a, b)
        assert verify(leaked_key, C, b, m, W)

    def test_accepts_int_claim(self, honest_key):
        a, b = [1, 2, 3, 4], [1, 1, 1, 1]
        _, W = prove(honest_key, a, b)
        assert verify(honest_key, commit(honest_key, a), b, 10, W)

    def test_wrong_claim(self, honest_key):
        a, b = [1, 2, 3, 4], [1, 1, 1, 1]
        C = commit(honest_key, a)
        m, W = prove(honest_key, a, b)
        assert not verify(honest_key, C, b, m + FR(1), W)

    def test_wrong_public_vector(self, honest_key):
        a, b = [1, 2, 3, 4], [1, 1, 1, 1]
        C = commit(honest_key, a)
        m, W = prove(honest_key, a, b)
        assert not verify(honest_key, C, [1, 1, 1, 2], m, W)

    def test_wrong_commitment(self, honest_key):
        a, b = [1, 2, 3, 4], [1, 1, 1, 1]
        m, W = prove(honest_key, a, b)
        C_other = commit(honest_key, [1, 2, 3, 5])
        assert not verify(honest_key, C_other, b, m, W)

    def test_wrong_proof(self, honest_key):
        a, b = [1, 2, 3, 4], [1, 1, 1, 1]
        C = commit(honest_key, a)
        m, W = prove(honest_key, a, b)
        assert not verify(honest_key, C, b, m, ec_add(W, G1))

    def test_proof_for_other_vector(self, honest_key):
        """A valid opening of a different vector does not transfer."""
        b = [1, 1, 1, 1]
        C = commit(honest_key, [1, 2, 3, 4])
        m, W = prove(honest_key, [2, 2, 3, 4], b)
        assert not verify(honest_key, C, b, m, W)

    def test_too_long_public_vector_is_rejected(self, honest_key, dim):
        a = [1, 2, 3, 4]
        C = commit(honest_key, a)
        m, W = prove(honest_key, a, [1] * dim)
        assert verify(honest_key, C, [1] * (dim + 1), m, W) is False
