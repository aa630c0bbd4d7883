"""
ILV 웹 애플리케이션
===================

ILV 블루프린트를 등록하고 TinyDB 저장소와 로깅을 설정한다.

환경 변수:
    ILV_DB_PATH: TinyDB 파일 경로 (기본값 db.json, ":memory:"이면 메모리 DB)
    LOG_LEVEL:   로그 레벨 (기본값 INFO)

실행:
    flask --app app run
"""

import logging
import os

from flask import Flask, jsonify
from tinydb import TinyDB
from tinydb.storages import MemoryStorage

from ilv_routes import ilv_bp, init_ilv_bp


def open_db(path):
    """경로에 맞는 TinyDB를 연다."""
    if path == ":memory:":
        return TinyDB(storage=MemoryStorage)  # Memory DB
    return TinyDB(path)                       # Storage DB


def setup_logger(app):
    """LOG_LEVEL에 맞춰 zkp.ilv / 라우트 / 앱 로거를 설정한다."""
    log_level_name = os.environ.get('LOG_LEVEL', 'INFO').upper()
    log_level = getattr(logging, log_level_name, None)
    if not isinstance(log_level, int):
        app.logger.warning(f"Invalid LOG_LEVEL '{log_level_name}'. Defaulting to INFO.")
        log_level = logging.INFO

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s'))
    for name in ('zkp.ilv', 'ilv_routes'):
        logger = logging.getLogger(name)
        if not logger.handlers:
            logger.addHandler(handler)
        logger.setLevel(log_level)
    app.logger.setLevel(log_level)


def create_app(db=None):
    """Flask 앱을 만든다.

    Args:
        db: 주입할 TinyDB (테스트용). None이면 ILV_DB_PATH로 연다.
    """
    app = Flask(__name__)
    app.secret_key = os.environ.get('ILV_SECRET_KEY', 'key')
    setup_logger(app)

    if db is None:
        db = open_db(os.environ.get('ILV_DB_PATH', 'db.json'))
    app.config['DB'] = db
    init_ilv_bp(db.table('ilv'))
    app.register_blueprint(ilv_bp)

    @app.route("/")
    def index():
        return jsonify({
            "name": "ilv",
            "endpoints": sorted(
                str(rule) for rule in app.url_map.iter_rules()
                if str(rule).startswith("/ilv")
            ),
        })

    @app.errorhandler(404)
    def page_not_found(e):
        return jsonify({"error": "NotFound", "message": str(e)}), 404

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
