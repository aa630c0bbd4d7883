"""
ILV 내적 커밋먼트 스킴
======================

비밀 벡터 a에 커밋한 뒤, 임의의 공개 벡터 b에 대해 ⟨a, b⟩ = m 임을
a를 드러내지 않고 증명한다.

**커밋**:
  C = A(β)·g = Σ aᵢ · [β^i]₁

**열기 증명**:
  P(x) = A(x)·B̂(x),  B̂(x) = Σ bᵢ·x^(n+1-i)
  P의 x^(n+1) 계수가 m = ⟨a, b⟩ 이다. 나머지 항이 증명이 된다:
    W = (P(β) - m·β^(n+1))·g = Σ_{k ≠ n+1} P_k · [β^k]₁
  [β^(n+1)]₁ 은 키에 없으므로 m을 바꾼 채로 W를 맞출 방법이 없다.

**검증**:
  Ĥ_b = B̂(β)·h = Σ bᵢ · [β^(n+1-i)]₂

    e(C, Ĥ_b) == e(W, h) · e(m·[β^n]₁, [β]₂)

  즉 e(C, Ĥ_b) · e(-m·[β^n]₁, [β]₂) == e(W, h).
  e([β^n]₁, [β]₂) = e(g, h)^(β^(n+1)) 이 빠진 거듭제곱을 GT에서 대신한다.

사용 예시:
    >>> key = CommitmentKey.generate(dim=4, seed=42)
    >>> C = commit(key, [1, 2, 3, 4])
    >>> m, W = prove(key, [1, 2, 3, 4], [1, 1, 1, 1])   # m = 10
    >>> verify(key, C, [1, 1, 1, 1], m, W)               # True
"""

import logging

from zkp.ilv.field import FR, to_fr_list, ec_mul, ec_lincomb, ec_pairing
from zkp.ilv.polynomial import Polynomial
from zkp.ilv.errors import DimensionExceeded

logger = logging.getLogger(__name__)


def zero_vector(dim):
    """길이 dim 인 영 벡터."""
    return [FR(0)] * dim


def inner_product(a, b):
    """⟨a, b⟩ (짧은 쪽은 0으로 채운 것으로 본다)."""
    result = FR(0)
    for a_i, b_i in zip(to_fr_list(a), to_fr_list(b)):
        result = result + a_i * b_i
    return result


def _check_dimension(name, vector, dim):
    if len(vector) > dim:
        logger.warning("벡터 %s 거부: 길이 %d > dim %d", name, len(vector), dim)
        raise DimensionExceeded(name, len(vector), dim)


def commit(key, a):
    """비밀 벡터 a에 커밋한다: C = Σ aᵢ · powers_g1[i].

    β를 모르므로 A(β)를 직접 평가하지 않고 SRS 원소의 선형결합으로 계산한다.
    영 벡터의 커밋먼트는 키와 무관하게 항등원(None)이다.

    Args:
        key: CommitmentKey
        a: 길이 ≤ key.dim 인 FR(또는 정수) 리스트

    Returns:
        G1 점: 커밋먼트 C

    Raises:
        DimensionExceeded: len(a) > key.dim (SRS를 읽기 전에 실패)
    """
    _check_dimension("a", a, key.dim)
    a = to_fr_list(a)
    return ec_lincomb(key.powers_g1[:len(a)], a)


def commit_public(key, b):
    """공개 벡터 b를 G2에 커밋한다: Ĥ_b = Σ bᵢ · [β^(n+1-i)]₂."""
    _check_dimension("b", b, key.dim)
    b = to_fr_list(b)
    points = [key.g2_power(key.dim + 1 - i) for i in range(len(b))]
    return ec_lincomb(points, b)


def prove(key, a, b):
    """⟨a, b⟩에 대한 열기 증명을 만든다.

    Args:
        key: CommitmentKey
        a: 비밀 벡터 (commit에 쓴 것과 같은 벡터)
        b: 공개 벡터

    Returns:
        (m, W): m = ⟨a, b⟩ (FR), W = 증명 (G1 점)

    Raises:
        DimensionExceeded: a 또는 b가 key.dim보다 길 때
        ValueError: 다항식 곱의 x^(dim+1) 계수가 내적과 다를 때
    """
    _check_dimension("a", a, key.dim)
    _check_dimension("b", b, key.dim)
    a = to_fr_list(a)
    b = to_fr_list(b)

    product = Polynomial.from_vector(a) * Polynomial.from_public_vector(b, key.dim)
    m = product.coeff(key.gap_index)
    if m != inner_product(a, b):
        raise ValueError("열기 증명 생성 실패: x^(dim+1) 계수가 내적과 다릅니다")

    # x^(n+1) 항을 제외한 나머지 계수로 W를 만든다
    degrees = [
        k for k, c in enumerate(product.coeffs)
        if k != key.gap_index and c != FR(0)
    ]
    points = [key.g1_power(k) for k in degrees]
    scalars = [product.coeffs[k] for k in degrees]
    proof = ec_lincomb(points, scalars)

    logger.debug("열기 증명 생성: dim=%d, 비영 계수 %d개", key.dim, len(degrees))
    return m, proof


# open 별칭. builtins.open과 겹치지 않도록 밑줄을 붙인다.
open_ = prove


def verify(key, commitment, b, claimed, proof):
    """커밋먼트가 b에 대해 claimed로 열리는지 검증한다.

    검증 방정식:
        e(C, Ĥ_b) == e(W, h) · e(claimed·[β^n]₁, [β]₂)

    잘못된 증명은 예외가 아니라 예상된 결과이므로 항상 bool을 돌려준다.
    b가 키의 차원보다 길면 False.

    Args:
        key: CommitmentKey
        commitment: G1 점 C
        b: 공개 벡터
        claimed: 주장하는 내적 값 m (FR 또는 정수)
        proof: G1 점 W

    Returns:
        bool: 검증 성공 여부
    """
    if len(b) > key.dim:
        logger.warning("검증 거부: 공개 벡터 길이 %d > dim %d", len(b), key.dim)
        return False

    h, h_beta = key.powers_g2[0], key.powers_g2[1]
    public = commit_public(key, b)
    claimed_term = ec_mul(key.powers_g1[key.dim], claimed)

    lhs = ec_pairing(commitment, public)
    rhs = ec_pairing(proof, h) * ec_pairing(claimed_term, h_beta)
    result = lhs == rhs
    logger.debug("검증 결과: %s", result)
    return result
