"""
SRS 감사(audit) 및 위조 공격
=============================

결함 있는 세레모니가 만든 SRS를 찾아내고, 그것으로 거짓 내적 증명을
위조한 뒤, 정직한 검증자와 같은 verify로 위조가 통과함을 확인한다.

**결함**:
  dim 차원을 지원한다고 선언한 키의 powers_g1은 β^0..β^dim (dim+1개)여야
  한다. 세레모니가 범위를 한 칸 더 돌면 L = β^(dim+1)·g 가 노출된다.

**위조**:
  영 벡터에 커밋하면 C = 항등원이므로 e(C, Ĥ_b) = 1 이다 (b와 무관).
  W = -m·L 로 두면

      e(W, h) · e(m·[β^n]₁, [β]₂)
        = e(g, h)^(-m·β^(n+1)) · e(g, h)^(m·β^(n+1)) = 1

  이므로 임의의 m ≠ 0 (정직한 값은 항상 0)과 임의의 b에 대해 검증이 통과한다.
  커밋/검증 연산에는 잘못이 없다. 결함은 전적으로 SRS 생성에 있다.

사용 예시:
    >>> key = CommitmentKey.generate(dim=4, seed=7, off_by_one=True)
    >>> result = audit(key, 4)
    >>> result.leaks, result.leaked_index   # (True, 5)
    >>> forged = forge(key, 4)
    >>> forged.assert_attack_works(key, 4)
"""

import logging
import random

from zkp.ilv.field import FR, ec_mul, random_fr, is_identity, to_fr
from zkp.ilv.errors import WrongLength, InconsistentPowers, AttackFailed
from zkp.ilv.srs import validate_dimension, check_adjacent
from zkp.ilv.scheme import commit, verify, inner_product, zero_vector

logger = logging.getLogger(__name__)

# 위조 값 m을 뽑는 난수 시드. 프로토콜의 신뢰 모델과 무관한 테스트용 값이다.
FORGE_RNG_SEED = 0


class AuditResult:
    """audit()의 결과.

    속성:
        dim: 선언된 차원
        g1_length: powers_g1의 실제 길이
        leaked_index: 노출된 거듭제곱의 지수 (dim+1) 또는 None
        leaked_power: 노출된 원소 L = β^(dim+1)·g 또는 None
    """

    def __init__(self, dim, g1_length, leaked_index=None, leaked_power=None):
        self.dim = dim
        self.g1_length = g1_length
        self.leaked_index = leaked_index
        self.leaked_power = leaked_power

    @property
    def leaks(self):
        return self.leaked_index is not None

    def __repr__(self):
        return (
            f"AuditResult(dim={self.dim}, g1_length={self.g1_length}, "
            f"leaked_index={self.leaked_index})"
        )


class Attack:
    """위조된 (벡터, 커밋먼트, 주장 값, 증명) 묶음.

    속성:
        a: 커밋한 벡터 (영 벡터)
        commitment: commit(key, a) = 항등원
        claimed: 주장하는 내적 값 (0이 아님 → 거짓)
        proof: W = -claimed · L
    """

    def __init__(self, a, commitment, claimed, proof):
        self.a = a
        self.commitment = commitment
        self.claimed = claimed
        self.proof = proof

    def assert_attack_works(self, key, dim, b=None):
        """위조가 정직한 verify를 통과하는지 확인한다.

        Args:
            key: 공격 대상 CommitmentKey
            dim: 선언된 차원
            b: 공개 벡터 (기본값: 길이 dim의 1 벡터). 어떤 b든 통과해야 한다.

        Raises:
            AttackFailed: 커밋먼트가 a와 맞지 않거나, 주장 값이 참이거나,
                          verify가 거부할 때
        """
        if b is None:
            b = [FR(1)] * dim

        if commit(key, self.a) != self.commitment:
            raise AttackFailed("커밋먼트가 커밋한 벡터와 일치하지 않습니다")
        if to_fr(self.claimed) == inner_product(self.a, b):
            raise AttackFailed("주장 값이 실제 내적과 같아 위조가 아닙니다")
        if not verify(key, self.commitment, b, self.claimed, self.proof):
            raise AttackFailed("위조된 증명이 검증을 통과하지 못했습니다")

        logger.info("위조 재현 성공: claimed=%d", int(self.claimed))


def audit(key, dim):
    """SRS가 β^(dim+1)·g 를 노출하는지 감사한다.

    Args:
        key: CommitmentKey
        dim: 호출자가 선언한 차원 (키의 길이로부터 추론하지 않는다)

    Returns:
        AuditResult

    Raises:
        WrongLength: dim+2 이외의 길이 불일치
        InconsistentPowers: 남는 원소가 β^(dim+1)·g 가 아닐 때
    """
    g1_length = len(key.powers_g1)
    try:
        validate_dimension(key, dim)
    except WrongLength as err:
        if err.segment != "powers_g1" or err.actual != dim + 2:
            raise
    else:
        logger.info("SRS 감사: dim=%d, 노출 없음", dim)
        return AuditResult(dim, g1_length)

    # 경계 인덱스에서 일관성 관계를 다시 확인한다: e(β^dim·g, β·h) == e(L, h)
    if not check_adjacent(key, dim):
        raise InconsistentPowers("powers_g1", dim, "남는 원소가 β^(dim+1)·g 가 아닙니다")

    leaked_index = dim + 1
    logger.info("SRS 감사: dim=%d, β^%d·g 노출", dim, leaked_index)
    return AuditResult(dim, g1_length, leaked_index, key.powers_g1[leaked_index])


def forge(key, dim, claimed=None, rng=None):
    """노출된 L로 영 벡터 커밋먼트에 대한 거짓 증명을 만든다.

    Args:
        key: CommitmentKey
        dim: 선언된 차원
        claimed: 주장할 내적 값. None이면 rng로 0이 아닌 값을 뽑는다.
        rng: random.Random 호환 객체 (기본값: FORGE_RNG_SEED로 시드한 Random)

    Returns:
        Attack

    Raises:
        AttackFailed: 키가 L을 노출하지 않거나 영 벡터 커밋먼트가 항등원이 아닐 때
    """
    result = audit(key, dim)
    if not result.leaks:
        raise AttackFailed("SRS가 β^(dim+1)·g 를 노출하지 않아 위조할 수 없습니다")

    a = zero_vector(dim)
    commitment = commit(key, a)
    if not is_identity(commitment):
        raise AttackFailed("영 벡터의 커밋먼트가 항등원이 아닙니다")

    if claimed is None:
        if rng is None:
            rng = random.Random(FORGE_RNG_SEED)
        claimed = random_fr(rng)
    claimed = to_fr(claimed)

    proof = ec_mul(result.leaked_power, -claimed)
    logger.debug("위조 증명 생성: claimed=%d", int(claimed))
    return Attack(a, commitment, claimed, proof)


def attack(key, dim):
    """감사 → 위조를 한 번에 수행한다 (퍼즐 진입점에서 호출)."""
    return forge(key, dim)
