"""
SRS 검증용 Fiat-Shamir 트랜스크립트
====================================

SRS 일관성 검사를 일괄(batch) 처리할 때 필요한 랜덤 계수를
SRS 자체를 해싱하여 결정론적으로 만든다.

**왜 필요한가?**
  인접한 거듭제곱 관계 e(Pᵢ, h^β) == e(Pᵢ₊₁, h)를 하나씩 확인하면
  페어링이 2·(n+1)번 필요하다. 랜덤 계수 rᵢ로 선형결합하면

      e(Σ rᵢ·Pᵢ, h^β) == e(Σ rᵢ·Pᵢ₊₁, h)

  한 번의 비교로 모든 관계를 (압도적 확률로) 확인할 수 있다.
  계수는 SRS 전체를 흡수한 뒤에 뽑으므로 SRS 생성자가 미리 맞출 수 없다.

사용 예시:
    >>> t = Transcript()
    >>> t.append_point(b"g1", srs_point)
    >>> r = t.challenge_scalar(b"r")
"""

import hashlib

from zkp.ilv.field import FR, CURVE_ORDER

# 좌표 하나를 직렬화하는 바이트 수
WORD = 32


def _words(values):
    return b"".join(int(v).to_bytes(WORD, "big") for v in values)


def g1_bytes(point):
    """G1 점 → x ‖ y (64바이트). 항등원은 0으로 채운다."""
    if point is None:
        return bytes(2 * WORD)
    return _words(point)


def g2_bytes(point):
    """G2 점 → x.c0 ‖ x.c1 ‖ y.c0 ‖ y.c1 (128바이트). 항등원은 0으로 채운다."""
    if point is None:
        return bytes(4 * WORD)
    return _words(c for coord in point for c in coord.coeffs)


class Transcript:
    """SHA-256 기반 Fiat-Shamir 트랜스크립트.

    흡수한 메시지는 해시 객체 하나에 누적된다. 레이블 앞에 길이를 붙여
    (레이블, 데이터) 경계가 모호해지지 않게 한다.
    """

    def __init__(self, label=b"ilv-srs"):
        self._hasher = hashlib.sha256()
        self._absorb(b"domain", label)

    def _absorb(self, label, data):
        self._hasher.update(len(label).to_bytes(1, "big"))
        self._hasher.update(label)
        self._hasher.update(data)

    def append_scalar(self, label, scalar):
        self._absorb(label, (int(scalar) % CURVE_ORDER).to_bytes(WORD, "big"))

    def append_point(self, label, point):
        """G1 점을 흡수한다."""
        self._absorb(label, g1_bytes(point))

    def append_g2_point(self, label, point):
        """G2 점을 흡수한다. 계수 4개를 모두 넣는다."""
        self._absorb(label, g2_bytes(point))

    def challenge_scalar(self, label):
        """지금까지의 메시지로부터 FR 챌린지를 뽑는다.

        뽑은 다이제스트를 다시 흡수하므로 같은 레이블로 연달아 호출해도
        서로 다른 챌린지가 나온다.

        Args:
            label: 챌린지 이름

        Returns:
            FR
        """
        self._hasher.update(b"challenge")
        self._absorb(label, b"")
        digest = self._hasher.copy().digest()
        self._hasher.update(digest)
        return FR(int.from_bytes(digest, "big") % CURVE_ORDER)

    def challenge_powers(self, label, count):
        """챌린지 r 하나를 뽑아 [1, r, r², ..., r^(count-1)]을 돌려준다.

        선형결합 계수로 r의 거듭제곱을 쓰면 건전성 오차는 count/|FR| 이하이다.
        """
        r = self.challenge_scalar(label)
        powers = []
        current = FR(1)
        for _ in range(count):
            powers.append(current)
            current = current * r
        return powers
