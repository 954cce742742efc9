"""
OTP BACKEND API ROUTES - FLASK BLUEPRINT

Tất cả endpoint nhận JSON body và tự mang theo `secret` (Base32);
server không lưu secret hay counter.

VÍ DỤ:
curl -X POST http://localhost:5000/secret
curl -X POST http://localhost:5000/hotp -H "Content-Type: application/json" -d '{"secret": "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ", "counter": 0}'
curl -X POST http://localhost:5000/verify_totp -H "Content-Type: application/json" -d '{"secret": "...", "code": "123456", "grace_period": 30}'
"""
import logging

from flask import Blueprint, current_app, jsonify, request

from otpkit import keyuri, otp_core

log = logging.getLogger(__name__)

otp_bp = Blueprint('otp', __name__)


class _BadRequest(Exception):
    def __init__(self, message):
        super().__init__(message)
        self.message = message


@otp_bp.errorhandler(_BadRequest)
def _handle_bad_request(e):
    return jsonify({"error": e.message}), 400


def _body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise _BadRequest("JSON body must be an object")
    return data


def _require(data: dict, *fields):
    missing = [f for f in fields if f not in data]
    if missing:
        raise _BadRequest(f"Missing required field(s): {', '.join(missing)}")


def _int_field(data: dict, name: str, default=None) -> int:
    # chỉ nhận JSON integer thật: 1.9 hay "1" không được cắt/ép kiểu ngầm
    value = data.get(name, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise _BadRequest(f"'{name}' must be an integer")
    return value


def _str_field(data: dict, name: str, default=None) -> str:
    value = data.get(name, default)
    if not isinstance(value, str):
        raise _BadRequest(f"'{name}' must be a string")
    return value


def _optional_timestamp(data: dict):
    if data.get("timestamp_ms") is None:
        return None
    return _int_field(data, "timestamp_ms")


def _key(data: dict) -> bytes:
    _require(data, "secret")
    return keyuri.decode_base32(_str_field(data, "secret"))


@otp_bp.route('/secret', methods=['POST'])
def generate_secret():
    """
    TẠO SECRET KEY

      curl -X POST http://localhost:5000/secret -H "Content-Type: application/json" -d '{"bytes": 32}'
    """
    data = _body()
    num_bytes = _int_field(data, "bytes", otp_core.SECRET_BYTES)
    return jsonify({"secret": keyuri.encode_base32(keyuri.generate_secret(num_bytes))})


@otp_bp.route('/hotp', methods=['POST'])
def get_hotp():
    """
    MÃ HOTP cho một counter.

    Input: {"secret": "...", "counter": 5, "digits": 6}
    Output: {"code": "254676"}
    """
    data = _body()
    key = _key(data)
    _require(data, "counter")
    counter = _int_field(data, "counter")
    digits = _int_field(data, "digits", otp_core.DEFAULT_DIGITS)
    return jsonify({"code": otp_core.generate_hotp(key, counter, digits)})


@otp_bp.route('/totp', methods=['POST'])
def get_totp():
    """
    MÃ TOTP hiện tại.

    Input: {"secret": "...", "period": 30, "digits": 6, "timestamp_ms": null}
    Output: {"code": "...", "remaining": 17}
    """
    data = _body()
    key = _key(data)
    period = _int_field(data, "period", otp_core.DEFAULT_TIME_STEP)
    digits = _int_field(data, "digits", otp_core.DEFAULT_DIGITS)
    timestamp_ms = _optional_timestamp(data)
    if timestamp_ms is None:
        timestamp_ms = otp_core.current_time_ms()
    code = otp_core.generate_totp(key, period, digits, timestamp_ms=timestamp_ms)
    remaining = otp_core.seconds_remaining(period, timestamp_ms)
    return jsonify({"code": code, "remaining": remaining})


@otp_bp.route('/verify_hotp', methods=['POST'])
def verify_hotp_route():
    """
    XÁC MINH MÃ HOTP

    Input: {"secret": "...", "counter": 1, "code": "287082", "digits": 6}
    Output: {"valid": true}
    """
    data = _body()
    key = _key(data)
    _require(data, "counter", "code")
    counter = _int_field(data, "counter")
    digits = _int_field(data, "digits", otp_core.DEFAULT_DIGITS)
    valid = otp_core.verify_hotp(key, counter, digits, _str_field(data, "code"))
    log.info("HOTP verification at counter %d: %s", counter, "ok" if valid else "failed")
    return jsonify({"valid": valid})


@otp_bp.route('/verify_totp', methods=['POST'])
def verify_totp_route():
    """
    XÁC MINH MÃ TOTP

    Input:
      {
        "secret": "...",
        "code": "123456",
        "period": 30,
        "digits": 6,
        "grace_period": 30    # giây, 0..period; 0 = chỉ time step hiện tại
      }
    Output: {"valid": true}
    """
    data = _body()
    key = _key(data)
    _require(data, "code")
    period = _int_field(data, "period", otp_core.DEFAULT_TIME_STEP)
    digits = _int_field(data, "digits", otp_core.DEFAULT_DIGITS)
    grace_period = _int_field(data, "grace_period", 0)
    valid = otp_core.verify_totp_with_grace_period(
        key,
        period,
        digits,
        _str_field(data, "code"),
        grace_period,
        timestamp_ms=_optional_timestamp(data),
    )
    log.info("TOTP verification (grace=%ds): %s", grace_period, "ok" if valid else "failed")
    return jsonify({"valid": valid})


@otp_bp.route('/otpauth_uri', methods=['POST'])
def get_otpauth_uri():
    """
    URI ĐỂ TẠO QR CODE CHO AUTHENTICATOR APPS

    Input: {"secret": "...", "account": "alice@example.com", "type": "totp",
            "issuer": "MyApp", "digits": 6, "period": 30, "counter": 0}
    Output: {"uri": "otpauth://totp/MyApp:alice%40example.com?..."}
    """
    data = _body()
    key = _key(data)
    _require(data, "account")
    account = _str_field(data, "account")
    issuer = _str_field(data, "issuer") if "issuer" in data else current_app.config["OTP_ISSUER"]
    otp_type = _str_field(data, "type", "totp")
    digits = _int_field(data, "digits", otp_core.DEFAULT_DIGITS)

    if otp_type == "totp":
        period = _int_field(data, "period", otp_core.DEFAULT_TIME_STEP)
        uri = keyuri.create_totp_key_uri(issuer, account, key, period, digits)
    elif otp_type == "hotp":
        counter = _int_field(data, "counter", 0)
        uri = keyuri.create_hotp_key_uri(issuer, account, key, counter, digits)
    else:
        raise _BadRequest("'type' must be 'totp' or 'hotp'")
    return jsonify({"uri": uri})
