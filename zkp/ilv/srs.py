"""
ILV Structured Reference String (CommitmentKey)
================================================

ILV 내적 커밋먼트에 필요한 범용 신뢰 설정(powers-of-tau)을 표현하고 검증한다.

**레이아웃** (n = 선언된 최대 벡터 길이 dim):
  powers_g1       = [g, β·g, β²·g, ..., β^n·g]            (n+1개)
  powers_g1_high  = [β^(n+2)·g, ..., β^(2n)·g]             (n-1개)
  powers_g2       = [h, β·h]                              (정확히 2개)
  powers_g2_high  = [β²·h, ..., β^(n+1)·h]                 (n개)

  G1 쪽에서 β^(n+1)·g 는 절대로 공개되어서는 안 된다. 이 원소는
  ⟨a, b⟩ 항이 놓이는 자리이며, 이것을 아는 사람은 임의의 내적 값에
  대한 증명을 위조할 수 있다 (zkp.ilv.attack 참고).

**결함 있는 세레모니**:
  generate(..., off_by_one=True)는 powers_g1을 n+2개 만든다. 즉
  범위를 한 칸 더 돌아 β^(n+1)·g 를 노출한다.

**검증**:
  - validate_dimension: 세그먼트 길이가 선언된 차원과 맞는지
  - validate_consistency: 인접 원소가 같은 β의 연속 거듭제곱인지 (페어링)
  두 검사는 서로 독립이다. 올바른 거듭제곱 수열이라도 길이가 하나 더 길면
  안전하지 않다.

사용 예시:
    >>> key = CommitmentKey.generate(dim=4, seed=42)
    >>> len(key.powers_g1)  # 5
    >>> validate_dimension(key, 4)
    >>> validate_consistency(key)
"""

import hashlib
import logging
import secrets

from zkp.ilv.field import FR, G1, G2, CURVE_ORDER, ec_mul, ec_add, ec_pairing
from zkp.ilv.errors import WrongLength, InconsistentPowers
from zkp.ilv.transcript import Transcript

logger = logging.getLogger(__name__)

# 퍼즐 인스턴스가 지원하는 최대 벡터 길이
SUPPORTED_DIM = 512


class CommitmentKey:
    """ILV 커밋먼트 키 (SRS). 생성 후 변경되지 않는다.

    속성:
        dim: 호출자가 선언한 최대 벡터 길이 (리스트 길이로부터 추론하지 않음)
        powers_g1: β^0..β^dim 의 G1 원소
        powers_g1_high: β^(dim+2)..β^(2dim) 의 G1 원소
        powers_g2: [h, β·h]
        powers_g2_high: β^2..β^(dim+1) 의 G2 원소
    """

    def __init__(self, powers_g1, powers_g1_high, powers_g2, powers_g2_high, dim):
        self.powers_g1 = tuple(powers_g1)
        self.powers_g1_high = tuple(powers_g1_high)
        self.powers_g2 = tuple(powers_g2)
        self.powers_g2_high = tuple(powers_g2_high)
        self.dim = dim

    def __repr__(self):
        return (
            f"CommitmentKey(dim={self.dim}, g1={len(self.powers_g1)}"
            f"+{len(self.powers_g1_high)}, g2={len(self.powers_g2)}"
            f"+{len(self.powers_g2_high)})"
        )

    def __eq__(self, other):
        if not isinstance(other, CommitmentKey):
            return NotImplemented
        return (
            self.dim == other.dim
            and self.powers_g1 == other.powers_g1
            and self.powers_g1_high == other.powers_g1_high
            and self.powers_g2 == other.powers_g2
            and self.powers_g2_high == other.powers_g2_high
        )

    __hash__ = None

    @property
    def gap_index(self):
        """G1 쪽에서 비워 두어야 하는 지수 dim+1."""
        return self.dim + 1

    def g1_power(self, k):
        """β^k·g 를 돌려준다 (k ∈ [0, 2dim] \\ {dim+1}).

        powers_g1에 dim+1번째 원소가 들어 있더라도 돌려주지 않는다.
        정직한 증명자는 이 메서드로만 G1 거듭제곱을 읽는다.

        Raises:
            IndexError: k = dim+1 이거나 범위를 벗어날 때
        """
        if k == self.gap_index:
            raise IndexError(f"β^{k}·g 는 키에 포함되지 않는 거듭제곱입니다")
        if 0 <= k <= self.dim:
            return self.powers_g1[k]
        if self.dim + 2 <= k <= 2 * self.dim:
            return self.powers_g1_high[k - self.dim - 2]
        raise IndexError(f"G1 거듭제곱 지수 {k}가 범위를 벗어났습니다")

    def g2_power(self, k):
        """β^k·h 를 돌려준다 (k ∈ [0, dim+1])."""
        if 0 <= k <= 1:
            return self.powers_g2[k]
        if 2 <= k <= self.dim + 1:
            return self.powers_g2_high[k - 2]
        raise IndexError(f"G2 거듭제곱 지수 {k}가 범위를 벗어났습니다")

    @classmethod
    def generate(cls, dim, seed=None, off_by_one=False):
        """SRS를 생성한다.

        Args:
            dim: 지원할 최대 벡터 길이 (1 이상).
            seed: 결정론적 생성을 위한 시드 (교육/테스트용).
                  실제 시스템에서는 MPC 세레모니를 사용해야 한다.
            off_by_one: True이면 결함 있는 세레모니를 재현한다.
                        powers_g1에 β^(dim+1)·g 가 추가로 들어간다.

        Returns:
            CommitmentKey

        예시:
            >>> key = CommitmentKey.generate(dim=4, seed=1234, off_by_one=True)
            >>> len(key.powers_g1)  # 6
        """
        if dim < 1:
            raise ValueError(f"dim은 1 이상이어야 합니다: {dim}")

        # toxic waste β
        if seed is not None:
            h = hashlib.sha256(str(seed).encode()).digest()
            beta_int = int.from_bytes(h, "big") % CURVE_ORDER
        else:
            beta_int = secrets.randbelow(CURVE_ORDER - 1) + 1
        beta = FR(beta_int)

        # β^0 .. β^(2dim)
        beta_powers = [FR(1)]
        for _ in range(2 * dim):
            beta_powers.append(beta_powers[-1] * beta)

        low_count = dim + 2 if off_by_one else dim + 1
        powers_g1 = [ec_mul(G1, beta_powers[k]) for k in range(low_count)]
        powers_g1_high = [ec_mul(G1, beta_powers[k]) for k in range(dim + 2, 2 * dim + 1)]
        powers_g2 = [G2, ec_mul(G2, beta)]
        # β^(dim+1) 은 G2 쪽에서는 공개해도 된다 (G2 → G1 사상이 없음)
        powers_g2_high = [ec_mul(G2, beta_powers[k]) for k in range(2, dim + 2)]

        logger.debug(
            "SRS 생성: dim=%d, powers_g1=%d개 (off_by_one=%s)",
            dim, len(powers_g1), off_by_one,
        )
        return cls(powers_g1, powers_g1_high, powers_g2, powers_g2_high, dim)


# ─────────────────────────────────────────────────────────────────────
# 길이 검사
# ─────────────────────────────────────────────────────────────────────

def expected_lengths(dim):
    """선언된 차원 dim에 대한 세그먼트별 기대 길이 (검사 순서대로)."""
    return [
        ("powers_g2", 2),
        ("powers_g2_high", dim),
        ("powers_g1_high", max(dim - 1, 0)),
        ("powers_g1", dim + 1),
    ]


def validate_dimension(key, dim):
    """키의 세그먼트 길이가 선언된 차원 dim과 정확히 맞는지 확인한다.

    powers_g1을 마지막에 검사한다. 따라서 segment == "powers_g1"인
    WrongLength는 나머지 세그먼트가 모두 올바르다는 뜻이다.

    Raises:
        WrongLength: 어느 세그먼트든 길이가 다를 때
    """
    for segment, expected in expected_lengths(dim):
        actual = len(getattr(key, segment))
        if actual != expected:
            logger.warning(
                "SRS 길이 불일치: %s=%d (dim=%d이면 %d)", segment, actual, dim, expected
            )
            raise WrongLength(segment, expected, actual)


# ─────────────────────────────────────────────────────────────────────
# 페어링 일관성 검사
# ─────────────────────────────────────────────────────────────────────

def check_adjacent(key, i):
    """e(powers_g1[i], β·h) == e(powers_g1[i+1], h) 인지 확인한다.

    powers_g1[i+1]이 powers_g1[i]에 β를 한 번 더 곱한 원소인지를
    β를 모르는 채로 확인한다.
    """
    h, h_beta = key.powers_g2[0], key.powers_g2[1]
    return ec_pairing(key.powers_g1[i], h_beta) == ec_pairing(key.powers_g1[i + 1], h)


def _relations(key):
    """키가 만족해야 하는 모든 페어링 관계를 나열한다.

    각 관계는 (segment, index, lhs, rhs, side) 이고 e(*lhs) == e(*rhs)를 뜻한다.
    side는 선형결합 시 스칼라를 곱할 쪽 ("g1" 또는 "g2")이다.
    """
    g1 = key.powers_g1
    g1_high = key.powers_g1_high
    h, h_beta = key.powers_g2
    relations = []

    # G1: Pᵢ → Pᵢ₊₁ (남는 원소가 있다면 그것까지 포함)
    for i in range(len(g1) - 1):
        relations.append(("powers_g1", i, (g1[i], h_beta), (g1[i + 1], h), "g1"))

    # G1: β^dim → β^(dim+2) 는 β²·h 로 건너뛴다
    if len(g1) > key.dim and g1_high and key.powers_g2_high:
        relations.append(
            ("powers_g1_high", -1, (g1[key.dim], key.powers_g2_high[0]), (g1_high[0], h), "g1")
        )

    for j in range(len(g1_high) - 1):
        relations.append(("powers_g1_high", j, (g1_high[j], h_beta), (g1_high[j + 1], h), "g1"))

    # G2: e(β·g, β^k·h) == e(g, β^(k+1)·h)
    if len(g1) >= 2:
        ladder = [h_beta] + list(key.powers_g2_high)
        for k in range(len(ladder) - 1):
            relations.append(("powers_g2_high", k - 1, (g1[1], ladder[k]), (g1[0], ladder[k + 1]), "g2"))

    return relations


def _absorb_key(key):
    transcript = Transcript()
    transcript.append_scalar(b"dim", key.dim)
    for point in key.powers_g1:
        transcript.append_point(b"g1", point)
    for point in key.powers_g1_high:
        transcript.append_point(b"g1h", point)
    for point in key.powers_g2:
        transcript.append_g2_point(b"g2", point)
    for point in key.powers_g2_high:
        transcript.append_g2_point(b"g2h", point)
    return transcript


def _accumulate(terms, pair, coeff, side):
    """같은 고정 점을 공유하는 항끼리 coeff를 곱해 더한다."""
    g1_point, g2_point = pair
    if side == "g1":
        anchor, moving = g2_point, g1_point
    else:
        anchor, moving = g1_point, g2_point
    slot = terms.setdefault((side, id(anchor)), [anchor, None])
    slot[1] = ec_add(slot[1], ec_mul(moving, coeff))


def _pairing_product(terms):
    result = None
    for (side, _), (anchor, acc) in terms.items():
        value = ec_pairing(acc, anchor) if side == "g1" else ec_pairing(anchor, acc)
        result = value if result is None else result * value
    return result


def validate_consistency(key):
    """SRS의 모든 원소가 하나의 β에 대한 연속 거듭제곱인지 확인한다.

    모든 인접 관계를 트랜스크립트에서 뽑은 계수 [1, r, r², ...]로
    선형결합하여 고정된 수의 페어링으로 확인한다. 일괄 검사가 실패하면
    관계를 하나씩 검사하여 처음 깨진 위치를 보고한다.

    길이는 검사하지 않는다 (validate_dimension 참고).

    Raises:
        WrongLength: powers_g2가 [h, β·h] 두 개가 아닐 때 (검사 자체가 불가능)
        InconsistentPowers: 어느 관계든 성립하지 않을 때
    """
    if len(key.powers_g2) != 2:
        raise WrongLength("powers_g2", 2, len(key.powers_g2))
    if not key.powers_g1 or key.powers_g1[0] is None:
        raise InconsistentPowers("powers_g1", 0, "생성자가 항등원입니다")
    if key.powers_g2[0] is None:
        raise InconsistentPowers("powers_g2", 0, "생성자가 항등원입니다")

    relations = _relations(key)
    if not relations:
        return

    coeffs = _absorb_key(key).challenge_powers(b"batch", len(relations))
    lhs_terms, rhs_terms = {}, {}
    for (_, _, lhs, rhs, side), coeff in zip(relations, coeffs):
        _accumulate(lhs_terms, lhs, coeff, side)
        _accumulate(rhs_terms, rhs, coeff, side)

    if _pairing_product(lhs_terms) == _pairing_product(rhs_terms):
        logger.debug("SRS 일관성 검사 통과: 관계 %d개", len(relations))
        return

    for segment, index, lhs, rhs, _ in relations:
        if ec_pairing(*lhs) != ec_pairing(*rhs):
            logger.warning("SRS 일관성 검사 실패: %s[%d]", segment, index)
            raise InconsistentPowers(segment, index)
    raise InconsistentPowers("batch", None, "일괄 검사만 실패했습니다")
