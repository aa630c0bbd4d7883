import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from zkp.ilv.srs import CommitmentKey


# ── 테스트 상수 ──
TEST_DIM = 4
TEST_SEED = 42


@pytest.fixture(scope="session")
def dim():
    return TEST_DIM


@pytest.fixture(scope="session")
def honest_key():
    """올바른 SRS (powers_g1 = dim+1개)."""
    return CommitmentKey.generate(TEST_DIM, seed=TEST_SEED)


@pytest.fixture(scope="session")
def leaked_key():
    """off-by-one 세레모니로 만든 SRS (powers_g1 = dim+2개)."""
    return CommitmentKey.generate(TEST_DIM, seed=TEST_SEED, off_by_one=True)


def _replace_point(key, segment, index, point):
    """세그먼트 하나의 원소 하나를 바꾼 새 키를 만든다."""
    segments = {
        name: list(getattr(key, name))
        for name in ("powers_g1", "powers_g1_high", "powers_g2", "powers_g2_high")
    }
    segments[segment][index] = point
    return CommitmentKey(
        segments["powers_g1"],
        segments["powers_g1_high"],
        segments["powers_g2"],
        segments["powers_g2_high"],
        key.dim,
    )


@pytest.fixture
def replace_point():
    return _replace_point
