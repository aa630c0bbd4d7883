"""
ILV Flask Blueprint: 커밋/증명/검증/감사/공격 엔드포인트
==========================================================

모든 엔드포인트는 JSON을 받고 JSON을 돌려준다.
현재 CommitmentKey는 TinyDB에 직렬화하여 보관한다 (DB는 app.py에서 주입).
스칼라는 10진수 문자열, 점은 serialize_g1/serialize_g2 형식이다.
"""

import logging

from flask import Blueprint, jsonify, request
from tinydb import Query

from zkp.ilv.srs import CommitmentKey, validate_dimension, validate_consistency
from zkp.ilv.scheme import commit, prove, verify
from zkp.ilv.attack import audit, forge
from zkp.ilv.errors import SrsError, SchemeError, AttackFailed

from ilv_serializers import (
    serialize_fr, deserialize_fr,
    serialize_g1, deserialize_g1,
    deserialize_fr_list, parse_int,
    serialize_key, deserialize_key, key_summary,
    serialize_audit, serialize_attack,
)

logger = logging.getLogger(__name__)

ilv_bp = Blueprint('ilv', __name__, url_prefix='/ilv')

DATA = Query()

# DB는 app.py에서 주입
DB = None

# setup 요청에서 허용하는 최대 차원
MAX_SETUP_DIM = 512


def init_ilv_bp(db):
    """app.py에서 DB를 주입받는다."""
    global DB
    DB = db


class KeyMissing(Exception):
    """저장된 CommitmentKey가 없다."""


# ─── DB 헬퍼 ───

def db_get(key):
    """DB에서 키로 데이터를 조회한다."""
    result = DB.search(DATA.type == key)
    if not result:
        return None
    return result[0].get("data")


def db_set(key, data):
    """DB에 키로 데이터를 저장한다."""
    DB.upsert({"type": key, "data": data}, DATA.type == key)


def db_remove_prefix(prefix):
    """prefix로 시작하는 모든 키를 삭제한다."""
    DB.remove(DATA.type.test(lambda t: t.startswith(prefix)))


def load_current_key():
    raw = db_get("ilv.key.raw")
    if raw is None:
        raise KeyMissing("먼저 /ilv/setup 으로 키를 생성하세요")
    return deserialize_key(raw)


def _payload():
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValueError("요청 본문은 JSON 객체여야 합니다")
    return payload


def _dim_param(payload, default):
    return parse_int(payload.get("dim", default), "dim")


# ─── 오류 처리 ───

@ilv_bp.errorhandler(SrsError)
@ilv_bp.errorhandler(SchemeError)
@ilv_bp.errorhandler(AttackFailed)
def handle_protocol_error(err):
    logger.warning("%s: %s", type(err).__name__, err)
    return jsonify({"error": type(err).__name__, "message": str(err)}), 400


@ilv_bp.errorhandler(KeyMissing)
def handle_key_missing(err):
    return jsonify({"error": "KeyMissing", "message": str(err)}), 409


@ilv_bp.errorhandler(KeyError)
@ilv_bp.errorhandler(ValueError)
def handle_bad_request(err):
    return jsonify({"error": "BadRequest", "message": f"잘못된 요청: {err}"}), 400


# ──────────────────────────────────────────────────────────────
# Setup
# ──────────────────────────────────────────────────────────────

@ilv_bp.route("/setup", methods=["POST"])
def setup_key():
    """CommitmentKey를 생성하고 저장한다.

    본문: {"dim": int, "seed": int|null, "off_by_one": bool}
    """
    payload = _payload()
    dim = _dim_param(payload, 4)
    if not 1 <= dim <= MAX_SETUP_DIM:
        return jsonify({"error": "BadRequest",
                        "message": f"dim은 1..{MAX_SETUP_DIM} 범위여야 합니다"}), 400
    seed = payload.get("seed", 12345)
    off_by_one = bool(payload.get("off_by_one", False))

    key = CommitmentKey.generate(dim, seed=seed, off_by_one=off_by_one)
    db_set("ilv.key.raw", serialize_key(key))
    db_set("ilv.key.info", {**key_summary(key), "seed": seed, "off_by_one": off_by_one})

    # 키 변경 시 하위 데이터 클리어
    db_remove_prefix("ilv.prover.")
    db_remove_prefix("ilv.attack.")

    logger.info("ILV 키 생성: dim=%d off_by_one=%s", dim, off_by_one)
    return jsonify(db_get("ilv.key.info"))


@ilv_bp.route("/key", methods=["GET"])
def key_info():
    """저장된 키의 요약을 돌려준다."""
    load_current_key()
    return jsonify(db_get("ilv.key.info"))


@ilv_bp.route("/key/validate", methods=["POST"])
def key_validate():
    """저장된 키에 길이 검사와 일관성 검사를 수행한다."""
    key = load_current_key()
    dim = _dim_param(_payload(), key.dim)
    validate_consistency(key)
    validate_dimension(key, dim)
    return jsonify({"valid": True, "dim": dim})


# ──────────────────────────────────────────────────────────────
# Commit / Prove / Verify
# ──────────────────────────────────────────────────────────────

@ilv_bp.route("/commit", methods=["POST"])
def commit_vector():
    """본문: {"a": [..]} → {"commitment": G1}"""
    key = load_current_key()
    a = deserialize_fr_list(_payload()["a"])
    commitment = commit(key, a)
    data = {"commitment": serialize_g1(commitment)}
    db_set("ilv.prover.commitment", data)
    return jsonify(data)


@ilv_bp.route("/prove", methods=["POST"])
def prove_inner_product():
    """본문: {"a": [..], "b": [..]} → {"claimed": str, "proof": G1}"""
    key = load_current_key()
    payload = _payload()
    a = deserialize_fr_list(payload["a"])
    b = deserialize_fr_list(payload["b"])
    claimed, proof = prove(key, a, b)
    data = {"claimed": serialize_fr(claimed), "proof": serialize_g1(proof)}
    db_set("ilv.prover.opening", data)
    return jsonify(data)


@ilv_bp.route("/verify", methods=["POST"])
def verify_opening():
    """본문: {"commitment": G1, "b": [..], "claimed": str, "proof": G1} → {"valid": bool}"""
    key = load_current_key()
    payload = _payload()
    valid = verify(
        key,
        deserialize_g1(payload["commitment"]),
        deserialize_fr_list(payload["b"]),
        deserialize_fr(payload["claimed"]),
        deserialize_g1(payload["proof"]),
    )
    return jsonify({"valid": valid})


# ──────────────────────────────────────────────────────────────
# Audit / Attack
# ──────────────────────────────────────────────────────────────

@ilv_bp.route("/audit", methods=["POST"])
def audit_key():
    """본문: {"dim": int?} → AuditResult"""
    key = load_current_key()
    dim = _dim_param(_payload(), key.dim)
    return jsonify(serialize_audit(audit(key, dim)))


@ilv_bp.route("/attack", methods=["POST"])
def run_attack():
    """위조를 만들고 verify로 확인한다.

    본문: {"dim": int?, "claimed": str?, "b": [..]?}
    """
    key = load_current_key()
    payload = _payload()
    dim = _dim_param(payload, key.dim)
    claimed = payload.get("claimed")
    claimed = deserialize_fr(claimed) if claimed is not None else None
    b = payload.get("b")
    b = deserialize_fr_list(b) if b is not None else None

    forged = forge(key, dim, claimed=claimed)
    forged.assert_attack_works(key, dim, b=b)

    data = {**serialize_attack(forged), "works": True}
    db_set("ilv.attack.result", data)
    return jsonify(data)


@ilv_bp.route("/clear", methods=["POST"])
def clear_all():
    """모든 ILV 데이터를 클리어한다."""
    db_remove_prefix("ilv.")
    return jsonify({"cleared": True})
