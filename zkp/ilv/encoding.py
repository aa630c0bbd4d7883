"""
CommitmentKey 바이너리 인코딩
=============================

세레모니가 내보낸 SRS 파일(ck.srs)을 읽고 쓴다.

**레이아웃** (모든 정수는 빅엔디안):
  헤더: u32 × 4 = len(powers_g1), len(powers_g1_high),
                  len(powers_g2), len(powers_g2_high)
  G1 점: 64바이트 = x (32) ‖ y (32)
  G2 점: 128바이트 = x.c0 ‖ x.c1 ‖ y.c0 ‖ y.c1
  항등원은 모든 바이트가 0인 점으로 표현한다.

  세그먼트 순서: powers_g1, powers_g1_high, powers_g2, powers_g2_high

선언된 차원 dim은 파일에 들어 있지 않다. 호출자가 직접 넘긴다.
세그먼트 길이가 dim과 맞는지는 디코딩이 아니라 validate_dimension이 판단한다.

기본 디코딩은 검사하지 않는다 (unchecked): 좌표를 그대로 점으로 받아들인다.
checked=True이면 곡선 위의 점인지도 확인한다.
"""

import logging
import struct

from py_ecc import bn128
from py_ecc.fields import bn128_FQ as FQ

from zkp.ilv.field import is_on_curve_g1, is_on_curve_g2
from zkp.ilv.srs import CommitmentKey

logger = logging.getLogger(__name__)

G1_SIZE = 64
G2_SIZE = 128
HEADER = struct.Struct(">IIII")
SEGMENTS = ("powers_g1", "powers_g1_high", "powers_g2", "powers_g2_high")


# ─── 점 단위 ───

def encode_g1(point):
    if point is None:
        return b"\x00" * G1_SIZE
    return int(point[0]).to_bytes(32, "big") + int(point[1]).to_bytes(32, "big")


def decode_g1(data):
    if data == b"\x00" * G1_SIZE:
        return None
    x = int.from_bytes(data[:32], "big")
    y = int.from_bytes(data[32:64], "big")
    return (FQ(x), FQ(y))


def encode_g2(point):
    if point is None:
        return b"\x00" * G2_SIZE
    out = b""
    for coord in point:
        for c in coord.coeffs:
            out += int(c).to_bytes(32, "big")
    return out


def decode_g2(data):
    if data == b"\x00" * G2_SIZE:
        return None
    words = [int.from_bytes(data[i:i + 32], "big") for i in range(0, G2_SIZE, 32)]
    return (bn128.FQ2(words[0:2]), bn128.FQ2(words[2:4]))


# ─── 키 단위 ───

def encode_key(key):
    """CommitmentKey → bytes."""
    out = bytearray(HEADER.pack(*(len(getattr(key, name)) for name in SEGMENTS)))
    for point in key.powers_g1 + key.powers_g1_high:
        out += encode_g1(point)
    for point in key.powers_g2 + key.powers_g2_high:
        out += encode_g2(point)
    return bytes(out)


def decode_key(blob, dim, checked=False):
    """bytes → CommitmentKey.

    Args:
        blob: encode_key가 만든 바이트열
        dim: 호출자가 선언한 차원
        checked: True이면 곡선 위의 점인지 확인한다

    Raises:
        ValueError: 길이가 맞지 않거나 (checked일 때) 곡선 밖의 점이 있을 때
    """
    if len(blob) < HEADER.size:
        raise ValueError("SRS 헤더가 잘렸습니다")
    counts = HEADER.unpack_from(blob, 0)
    expected_size = (
        HEADER.size
        + G1_SIZE * (counts[0] + counts[1])
        + G2_SIZE * (counts[2] + counts[3])
    )
    if len(blob) != expected_size:
        raise ValueError(f"SRS 크기가 {len(blob)}바이트입니다 (헤더 기준 {expected_size})")

    offset = HEADER.size
    segments = []
    for name, count in zip(SEGMENTS, counts):
        size, decode, on_curve = (
            (G1_SIZE, decode_g1, is_on_curve_g1) if name.startswith("powers_g1")
            else (G2_SIZE, decode_g2, is_on_curve_g2)
        )
        points = []
        for _ in range(count):
            point = decode(blob[offset:offset + size])
            if checked and not on_curve(point):
                raise ValueError(f"{name}[{len(points)}]가 곡선 위의 점이 아닙니다")
            points.append(point)
            offset += size
        segments.append(points)

    logger.debug("SRS 디코딩: dim=%d, 세그먼트 길이 %s", dim, counts)
    return CommitmentKey(*segments, dim=dim)


def save_key(key, path):
    with open(path, "wb") as f:
        f.write(encode_key(key))


def load_key(path, dim, checked=False):
    """파일에서 CommitmentKey를 읽는다."""
    with open(path, "rb") as f:
        blob = f.read()
    logger.info("SRS 로드: %s (%d바이트)", path, len(blob))
    return decode_key(blob, dim, checked=checked)
