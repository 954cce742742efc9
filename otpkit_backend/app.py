"""
FLASK APP - OTP BACKEND SERVER
==============================

Thiết lập Flask app, cấu hình CORS, và đăng ký API routes.

CÁC TÍNH NĂNG CHÍNH
- App factory create_app(), cấu hình từ otpkit_backend.config.Config
- CORS cho frontend chạy ở domain/port khác
- Lỗi validate (OTPError) -> HTTP 400 {"error": ...}
"""
import logging

from flask import Flask, jsonify
from flask_cors import CORS

from otpkit import OTPError, __version__

from .config import Config
from .routes import otp_bp


def create_app(overrides=None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    # Cho phép frontend (domain/port khác) gọi API
    CORS(app, origins=app.config["CORS_ORIGINS"])

    app.register_blueprint(otp_bp)

    @app.errorhandler(OTPError)
    def handle_otp_error(e):
        app.logger.info("Rejected request: %s: %s", type(e).__name__, e)
        return jsonify({"error": str(e)}), 400

    @app.route('/', methods=['GET'])
    def index():
        """Thông tin cơ bản và danh sách endpoints."""
        endpoints = sorted(
            rule.rule for rule in app.url_map.iter_rules() if rule.endpoint.startswith(otp_bp.name + ".")
        )
        return jsonify({"service": "otpkit", "version": __version__, "endpoints": endpoints})

    return app


def main():
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(name)s: %(message)s")
    app = create_app()
    app.run(debug=app.config["DEBUG"], host=app.config["HOST"], port=app.config["PORT"])


if __name__ == '__main__':
    main()
