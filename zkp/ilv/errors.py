"""
ILV 오류 타입
=============

- SrsError: SRS 구조 오류 (길이 불일치, 거듭제곱 불일치)
- SchemeError: 프로토콜 입력 오류 (벡터 차원 초과)
- AttackFailed: 알려진 공격의 재현 실패

SrsError / SchemeError는 ValueError의 하위 클래스이다. 호출자는 거부(reject)
결과를 받고 새 SRS를 요청하거나 중단할 수 있다.
"""


class SrsError(ValueError):
    """SRS가 선언된 차원에 대해 올바르지 않다."""


class WrongLength(SrsError):
    """SRS 세그먼트의 원소 개수가 선언된 차원과 맞지 않는다.

    속성:
        segment: 세그먼트 이름 (예: "powers_g1")
        expected: 기대한 원소 개수
        actual: 실제 원소 개수
    """

    def __init__(self, segment, expected, actual):
        self.segment = segment
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"SRS 세그먼트 {segment}의 길이가 {actual}입니다 (기대값 {expected})"
        )


class InconsistentPowers(SrsError):
    """인접한 SRS 원소 사이의 페어링 관계가 성립하지 않는다.

    속성:
        segment: 세그먼트 이름
        index: 관계가 깨진 첫 인덱스 i (원소 i와 i+1 사이)
    """

    def __init__(self, segment, index, detail=None):
        self.segment = segment
        self.index = index
        message = f"SRS 세그먼트 {segment}의 인덱스 {index}에서 거듭제곱 관계가 깨졌습니다"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class SchemeError(ValueError):
    """커밋먼트 스킴 입력 오류."""


class DimensionExceeded(SchemeError):
    """입력 벡터가 키가 지원하는 차원보다 길다."""

    def __init__(self, name, length, dim):
        self.name = name
        self.length = length
        self.dim = dim
        super().__init__(
            f"벡터 {name}의 길이 {length}가 지원 차원 {dim}을 초과합니다"
        )


class AttackFailed(AssertionError):
    """위조 공격이 재현되지 않았다."""
