"""
ILV 퍼즐 데모: 한 칸 더 긴 SRS로 내적 증명 위조하기
=====================================================

실행:
    python -m zkp.ilv.example              # 결함 있는 SRS를 생성하여 공격
    python -m zkp.ilv.example ck.srs       # 파일에서 SRS를 읽어 공격

흐름:
    1. SRS 로드 (또는 off-by-one 세레모니로 생성)
    2. 감사: powers_g1 길이 확인, 남는 원소가 β^(dim+1)·g 인지 페어링으로 확인
    3. 위조: 영 벡터 커밋 + W = -m·L
    4. 정직한 verify로 위조 확인
"""

import logging
import os
import sys

from zkp.ilv.srs import CommitmentKey, SUPPORTED_DIM
from zkp.ilv.encoding import load_key
from zkp.ilv.attack import audit, attack

PUZZLE_DESCRIPTION = r"""
Bob was catching up on the latest in zkSNARK research, and came across the
Vampire paper [1]. In that paper, he found a reference to an inner-product
commitment scheme [2], which allows committing to a vector and later proving
that its inner-product with another (public) vector is equal to a claimed value.
Bob was intrigued by this scheme, and decided to implement it.

Bob was delighted with the performance of the resulting implementation, and so
decided to deploy it. The scheme requires a universal Powers-of-Tau-type trusted setup,
and so Bob generated a SRS using an MPC ceremony.

Things were going smoothly for a while, but then Bob received an anonymous email that
contained a full break of the scheme! Unfortunately for Bob, the email didn't contain
any details about the break. Can you help Bob figure out the issue, and fix his scheme?

[1]: https://ia.cr/2022/406
[2]: http://www.lsv.fr/Publis/PAPERS/PDF/ILV-imacc11-long.pdf
"""

# 파일 없이 실행할 때 세레모니를 재현하는 시드
DEMO_SEED = 2022

logger = logging.getLogger(__name__)


def setup_logging():
    """LOG_LEVEL 환경 변수로 루트 로거를 설정한다 (잘못된 값이면 WARNING)."""
    log_level_name = os.environ.get("LOG_LEVEL", "WARNING").upper()
    log_level = getattr(logging, log_level_name, None)
    valid = isinstance(log_level, int)
    logging.basicConfig(
        level=log_level if valid else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not valid:
        logger.warning(f"Invalid LOG_LEVEL '{log_level_name}'. Defaulting to WARNING.")
    return log_level if valid else logging.WARNING


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    setup_logging()
    dim = SUPPORTED_DIM

    print("=" * 60)
    print("  ILV Inner-Product Commitment Puzzle")
    print("=" * 60)
    print(PUZZLE_DESCRIPTION)

    # ── 1. SRS ──
    if argv:
        print(f"[1] SRS 로드: {argv[0]}")
        key = load_key(argv[0], dim)
    else:
        print("[1] SRS 생성 (off-by-one 세레모니 재현)...")
        key = CommitmentKey.generate(dim, seed=DEMO_SEED, off_by_one=True)
    print(f"    지원 차원: {dim}")
    print(f"    powers_g1 수: {len(key.powers_g1)} (기대값 {dim + 1})")

    # ── 2. 감사 ──
    print("\n[2] SRS 감사...")
    result = audit(key, dim)
    if not result.leaks:
        print("    노출 없음: 공격할 수 없습니다")
        return 1
    print(f"    β^{result.leaked_index}·g 노출 확인 (페어링 검사 통과)")

    # ── 3. 위조 ──
    print("\n[3] 증명 위조...")
    forged = attack(key, dim)
    print("    커밋먼트: 항등원 (영 벡터)")
    print(f"    주장 값 m = {int(forged.claimed)}")

    # ── 4. 검증 ──
    print("\n[4] 정직한 verify로 확인 (b = 1 벡터)...")
    forged.assert_attack_works(key, dim)
    print("    검증 결과: 성공 ✓ (거짓 내적이 통과함)")

    print("\n" + "=" * 60)
    print("  수정: powers_g1을 β^0..β^dim 까지만 생성하고")
    print("        validate_dimension으로 길이를 확인할 것")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
