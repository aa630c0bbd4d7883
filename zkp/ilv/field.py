"""
ILV 기반 모듈: 스칼라 필드 및 페어링 그룹 연산
================================================

이 모듈은 ILV 내적(inner-product) 커밋먼트 전체에서 사용되는
기본 대수적 도구를 정의한다. 곡선 연산 자체는 py_ecc에 위임한다.

**스칼라 필드 FR**:
  bn128 타원곡선의 스칼라 필드. 벡터 원소, 다항식 계수, 주장된 내적 값이
  모두 이 필드의 원소이다.

**페어링 그룹 (G1, G2, GT)**:
  - G1: 커밋먼트, 증명, SRS의 g^(β^i) 원소
  - G2: SRS의 h^(β^i) 원소, 공개 벡터 b의 커밋먼트
  - GT: 페어링 결과 (동등 비교만 사용)
  항등원(무한원점)은 py_ecc 관례대로 None으로 표현한다.

사용 예시:
    >>> from zkp.ilv.field import FR, G1, G2, ec_mul, ec_pairing
    >>> P = ec_mul(G1, FR(5))          # 5·G1
    >>> ec_pairing(P, G2) == ec_pairing(G1, ec_mul(G2, 5))  # True
"""

from py_ecc import bn128
from py_ecc.fields import bn128_FQ as FQ


# ─────────────────────────────────────────────────────────────────────
# 스칼라 필드 FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ 클래스를 상속하여 +, -, *, /, ** 등의 필드 연산을 제공한다.

    예시:
        >>> FR(3) * FR(7)     # FR(21)
        >>> -FR(1) == FR(CURVE_ORDER - 1)  # True
    """
    field_modulus = bn128.curve_order


CURVE_ORDER = bn128.curve_order


def to_fr(value):
    """정수 또는 FR 값을 FR 원소로 변환한다."""
    if isinstance(value, FR):
        return value
    return FR(int(value) % CURVE_ORDER)


def to_fr_list(values):
    """정수/FR 리스트 → FR 리스트."""
    return [to_fr(v) for v in values]


def random_fr(rng, nonzero=True):
    """rng(random.Random 호환 객체)로 FR 원소를 뽑는다.

    암호학적 용도가 아니다. 데모/테스트에서 임의의 스칼라가 필요할 때 쓴다.
    """
    low = 1 if nonzero else 0
    return FR(rng.randrange(low, CURVE_ORDER))


# ─────────────────────────────────────────────────────────────────────
# 그룹 상수 및 연산
# ─────────────────────────────────────────────────────────────────────

# G1 생성자 g
G1 = bn128.G1

# G2 생성자 h
G2 = bn128.G2


def is_identity(point):
    """점이 항등원(무한원점)인지 확인한다."""
    return point is None


def ec_mul(point, scalar):
    """스칼라 곱셈: scalar · point.

    Args:
        point: G1 또는 G2 위의 점 (또는 None)
        scalar: 정수 또는 FR 원소

    Returns:
        scalar · point. 스칼라가 0이면 None.
    """
    if point is None:
        return None
    return bn128.multiply(point, int(scalar) % CURVE_ORDER)


def ec_add(p1, p2):
    """점 덧셈: p1 + p2 (None은 항등원)."""
    return bn128.add(p1, p2)


def ec_lincomb(points, scalars):
    """다중 스칼라 곱 (MSM): Σ sᵢ · Pᵢ.

    계수가 0인 항은 건너뛴다. 따라서 영 벡터에 대해서는 어떤 점도
    읽지 않고 항등원(None)을 돌려준다.

    Args:
        points: 점 리스트 (scalars와 같은 길이 이상)
        scalars: FR 원소 또는 정수 리스트

    Returns:
        Σ sᵢ · Pᵢ
    """
    result = None
    for point, scalar in zip(points, scalars):
        if int(scalar) % CURVE_ORDER == 0:
            continue
        result = ec_add(result, ec_mul(point, scalar))
    return result


def ec_pairing(g1_point, g2_point):
    """쌍선형 페어링 e(P, Q) → GT.

    주의:
        py_ecc.bn128.pairing의 인자 순서는 (G2, G1)이다.
        어느 한쪽이 항등원이면 GT의 항등원(FQ12.one())을 돌려준다.

    예시:
        >>> ec_pairing(ec_mul(G1, 5), G2) == ec_pairing(G1, ec_mul(G2, 5))
        True
    """
    if g1_point is None or g2_point is None:
        return bn128.FQ12.one()
    return bn128.pairing(g2_point, g1_point)


def is_on_curve_g1(point):
    """G1 점이 곡선 위에 있는지 확인한다 (항등원 포함)."""
    return point is None or bn128.is_on_curve(point, bn128.b)


def is_on_curve_g2(point):
    """G2 점이 twist 곡선 위에 있는지 확인한다 (항등원 포함)."""
    return point is None or bn128.is_on_curve(point, bn128.b2)
