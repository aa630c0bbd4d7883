"""
ILV 다항식 인코딩
=================

벡터를 한 변수 다항식으로 인코딩한다.

**비밀 벡터 a**:
  A(x) = a₀ + a₁·x + ... + a_{n-1}·x^(n-1)

**공개 벡터 b** (역순, 2칸 이동):
  B̂(x) = Σ bᵢ · x^(n+1-i)   (차수 2..n+1)

  그러면 A(x)·B̂(x)의 x^(n+1) 계수가 정확히 ⟨a, b⟩이다:
    aᵢ·x^i · bⱼ·x^(n+1-j) 의 차수가 n+1 ⟺ i = j

사용 예시:
    >>> A = Polynomial.from_vector([FR(1), FR(2)])          # 1 + 2x
    >>> B = Polynomial.from_public_vector([FR(3), FR(4)], 2)  # 3x³ + 4x²
    >>> (A * B).coeff(3)  # 1·3 + 2·4 = FR(11)
"""

from zkp.ilv.field import FR


class Polynomial:
    """유한체 FR 위의 다항식.

    계수 리스트로 표현: coeffs = [c₀, c₁, c₂, ...] → c₀ + c₁x + c₂x² + ...

    예시:
        >>> p = Polynomial([FR(1), FR(2)])  # 1 + 2x
        >>> q = Polynomial([FR(3), FR(4)])  # 3 + 4x
        >>> (p * q).coeffs                   # [3, 10, 8]
    """

    def __init__(self, coeffs=None):
        if coeffs is None:
            self.coeffs = [FR(0)]
        else:
            self.coeffs = [c if isinstance(c, FR) else FR(c) for c in coeffs]
            if not self.coeffs:
                self.coeffs = [FR(0)]
        self._trim()

    def _trim(self):
        """최고차 계수가 0인 항을 제거하여 정규화한다."""
        while len(self.coeffs) > 1 and self.coeffs[-1] == FR(0):
            self.coeffs.pop()

    def coeff(self, k):
        """x^k 의 계수 (범위 밖이면 0)."""
        if 0 <= k < len(self.coeffs):
            return self.coeffs[k]
        return FR(0)

    def __mul__(self, other):
        """다항식 곱셈: O(n²) 나이브 곱셈.

        0인 계수는 건너뛴다 (B̂의 하위 두 계수, 희소한 벡터).
        """
        zero = FR(0)
        result = [zero] * (len(self.coeffs) + len(other.coeffs) - 1)
        for i, a in enumerate(self.coeffs):
            if a == zero:
                continue
            for j, b in enumerate(other.coeffs):
                if b == zero:
                    continue
                result[i + j] = result[i + j] + a * b
        return Polynomial(result)

    # ─── ILV 인코딩 ───

    @classmethod
    def from_vector(cls, a):
        """비밀 벡터 a → A(x) = Σ aᵢ·x^i."""
        return cls(list(a))

    @classmethod
    def from_public_vector(cls, b, dim):
        """공개 벡터 b → B̂(x) = Σ bᵢ·x^(dim+1-i).

        Args:
            b: 길이 ≤ dim 인 FR 리스트
            dim: 키가 선언한 최대 벡터 길이

        Returns:
            Polynomial: 차수 2..dim+1 범위의 항만 가지는 다항식
        """
        coeffs = [FR(0)] * (dim + 2)
        for i, b_i in enumerate(b):
            coeffs[dim + 1 - i] = b_i if isinstance(b_i, FR) else FR(b_i)
        return cls(coeffs)
