"""
ILV 데이터 직렬화/역직렬화 헬퍼
================================

TinyDB와 JSON 응답에 담을 수 있는 형태로 ILV 객체를 변환한다.
FR, G1, G2, CommitmentKey, AuditResult, Attack.
"""

from py_ecc import bn128
from py_ecc.fields import bn128_FQ as FQ

from zkp.ilv.field import FR, CURVE_ORDER
from zkp.ilv.srs import CommitmentKey


# ─── 입력 형태 검사 ───

def parse_int(value, name="값"):
    """JSON 정수 또는 10진수 문자열 → int. 그 외는 ValueError."""
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"{name}은(는) 정수 또는 10진수 문자열이어야 합니다: {value!r}")
    return int(value)


def _check_pair(data, name):
    if not isinstance(data, (list, tuple)) or len(data) != 2:
        raise ValueError(f"{name}은(는) 원소 2개짜리 리스트여야 합니다: {data!r}")


# ─── FR ───

def serialize_fr(val):
    """FR → str(int)"""
    return str(int(val))


def deserialize_fr(s):
    """str(int) 또는 int → FR"""
    return FR(parse_int(s, "스칼라") % CURVE_ORDER)


def deserialize_fr_list(data):
    """list[str|int] → list[FR]"""
    if not isinstance(data, list):
        raise ValueError(f"벡터는 리스트여야 합니다: {data!r}")
    return [deserialize_fr(s) for s in data]


# ─── G1 point ───

def serialize_g1(point):
    """G1 point → [str, str] or None"""
    if point is None:
        return None
    return [str(int(point[0])), str(int(point[1]))]


def deserialize_g1(data):
    """[str, str] or None → G1 point"""
    if data is None:
        return None
    _check_pair(data, "G1 점")
    return (FQ(parse_int(data[0], "좌표")), FQ(parse_int(data[1], "좌표")))


# ─── G2 point ───

def serialize_g2(point):
    """G2 point → [[str,str],[str,str]] or None"""
    if point is None:
        return None
    return [
        [str(int(point[0].coeffs[0])), str(int(point[0].coeffs[1]))],
        [str(int(point[1].coeffs[0])), str(int(point[1].coeffs[1]))]
    ]


def deserialize_g2(data):
    """[[str,str],[str,str]] or None → G2 point"""
    if data is None:
        return None
    _check_pair(data, "G2 점")
    coords = []
    for coord in data:
        _check_pair(coord, "G2 좌표")
        coords.append(bn128.FQ2([parse_int(c, "좌표") for c in coord]))
    return tuple(coords)


# ─── CommitmentKey ───

def serialize_key(key):
    """CommitmentKey → dict"""
    return {
        "dim": key.dim,
        "powers_g1": [serialize_g1(p) for p in key.powers_g1],
        "powers_g1_high": [serialize_g1(p) for p in key.powers_g1_high],
        "powers_g2": [serialize_g2(p) for p in key.powers_g2],
        "powers_g2_high": [serialize_g2(p) for p in key.powers_g2_high],
    }


def deserialize_key(data):
    """dict → CommitmentKey"""
    return CommitmentKey(
        [deserialize_g1(p) for p in data["powers_g1"]],
        [deserialize_g1(p) for p in data["powers_g1_high"]],
        [deserialize_g2(p) for p in data["powers_g2"]],
        [deserialize_g2(p) for p in data["powers_g2_high"]],
        data["dim"],
    )


def key_summary(key):
    """CommitmentKey → 표시용 요약"""
    return {
        "dim": key.dim,
        "g1_count": len(key.powers_g1),
        "g1_high_count": len(key.powers_g1_high),
        "g2_count": len(key.powers_g2),
        "g2_high_count": len(key.powers_g2_high),
        "g1_samples": [g1_short(p) for p in key.powers_g1[:3]],
        "g2_0": g2_short(key.powers_g2[0]) if key.powers_g2 else None,
        "g2_1": g2_short(key.powers_g2[1]) if len(key.powers_g2) > 1 else None,
    }


# ─── 감사 / 공격 ───

def serialize_audit(result):
    """AuditResult → dict"""
    return {
        "dim": result.dim,
        "g1_length": result.g1_length,
        "leaks": result.leaks,
        "leaked_index": result.leaked_index,
        "leaked_power": serialize_g1(result.leaked_power),
    }


def serialize_attack(forged):
    """Attack → dict (벡터 a는 영 벡터이므로 길이만 담는다)"""
    return {
        "a_len": len(forged.a),
        "commitment": serialize_g1(forged.commitment),
        "claimed": serialize_fr(forged.claimed),
        "proof": serialize_g1(forged.proof),
    }


# ─── display helpers ───

def _shorten(s):
    if len(s) <= 8:
        return s
    return s[:4] + "..." + s[-4:]


def g1_short(point):
    """G1 point → 축약 문자열 (UI 표시용)"""
    if point is None:
        return "∞"
    return f"({_shorten(str(int(point[0])))}, {_shorten(str(int(point[1])))})"


def g2_short(point):
    """G2 point → 축약 문자열 (UI 표시용)"""
    if point is None:
        return "∞"
    x0 = str(int(point[0].coeffs[0]))
    x1 = str(int(point[0].coeffs[1]))
    return f"({_shorten(x0)}+{_shorten(x1)}i, ...)"
