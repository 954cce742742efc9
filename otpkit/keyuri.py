"""
keyuri.py — Base32 secret helpers + otpauth:// provisioning URIs.

URI format (Google Authenticator Key Uri Format):
  otpauth://hotp/{issuer}:{account}?issuer=...&algorithm=SHA1&secret=...&counter=...&digits=...
  otpauth://totp/{issuer}:{account}?issuer=...&algorithm=SHA1&secret=...&period=...&digits=...

issuer / account trong path được percent-encode; tham số `issuer` trong
query là giá trị gốc (urlencode tự encode một lần).
"""

import base64
import os
from urllib.parse import quote, urlencode

from .exceptions import InvalidSecret
from .otp_core import (
    DEFAULT_DIGITS,
    DEFAULT_TIME_STEP,
    SECRET_BYTES,
    check_digits,
    check_counter,
    check_period,
)

# giống encodeURIComponent: giữ nguyên các ký tự unreserved
_LABEL_SAFE = "-_.!~*'()"

MIN_SECRET_BYTES = 16
MAX_SECRET_BYTES = 1024


def generate_secret(num_bytes: int = SECRET_BYTES) -> bytes:
    """Sinh secret ngẫu nhiên từ os.urandom (CSPRNG)."""
    if num_bytes < MIN_SECRET_BYTES:
        raise InvalidSecret("Secrets should be at least 128 bits")
    if num_bytes > MAX_SECRET_BYTES:
        raise InvalidSecret(f"Secrets are limited to {MAX_SECRET_BYTES} bytes")
    return os.urandom(num_bytes)


def encode_base32(key: bytes) -> str:
    """Base32 không padding, chữ in hoa (dạng Authenticator app mong đợi)."""
    return base64.b32encode(key).decode("ascii").rstrip("=")


def decode_base32(secret_b32: str) -> bytes:
    """
    Decode Base32 secret (case-insensitive, thiếu padding cũng được,
    bỏ qua khoảng trắng như "JBSW Y3DP EHPK 3PXP").

    Raises:
        InvalidSecret: nếu chuỗi không phải Base32 hợp lệ hoặc rỗng
    """
    cleaned = "".join(secret_b32.split())
    if not cleaned:
        raise InvalidSecret("Secret must not be empty")
    missing_padding = len(cleaned) % 8
    if missing_padding:
        cleaned += "=" * (8 - missing_padding)
    try:
        return base64.b32decode(cleaned, casefold=True)
    # non-ASCII input raises a plain ValueError, not binascii.Error
    except ValueError as e:
        raise InvalidSecret("Invalid Base32 secret") from e


def _label(issuer: str, account_name: str) -> str:
    return f"{quote(issuer, safe=_LABEL_SAFE)}:{quote(account_name, safe=_LABEL_SAFE)}"


def create_hotp_key_uri(
    issuer: str,
    account_name: str,
    key: bytes,
    counter: int = 0,
    digits: int = DEFAULT_DIGITS,
) -> str:
    """
    Tạo otpauth://hotp URI để import vào Authenticator app (thường qua QR code).

    Arguments:
        issuer: tên dịch vụ (ví dụ 'GitHub')
        account_name: label account (ví dụ 'alice@example.com')
        key: raw secret bytes
        counter: counter khởi đầu
        digits: số chữ số
    """
    check_digits(digits)
    check_counter(counter)
    params = [
        ("issuer", issuer),
        ("algorithm", "SHA1"),
        ("secret", encode_base32(key)),
        ("counter", str(counter)),
        ("digits", str(digits)),
    ]
    return f"otpauth://hotp/{_label(issuer, account_name)}?{urlencode(params)}"


def create_totp_key_uri(
    issuer: str,
    account_name: str,
    key: bytes,
    period: int = DEFAULT_TIME_STEP,
    digits: int = DEFAULT_DIGITS,
) -> str:
    """Giống create_hotp_key_uri nhưng type là totp, `period` thay cho `counter`."""
    check_digits(digits)
    check_period(period)
    params = [
        ("issuer", issuer),
        ("algorithm", "SHA1"),
        ("secret", encode_base32(key)),
        ("period", str(period)),
        ("digits", str(digits)),
    ]
    return f"otpauth://totp/{_label(issuer, account_name)}?{urlencode(params)}"
