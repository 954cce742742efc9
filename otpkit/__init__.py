"""
otpkit package
==============

Tạo và xác minh OTP (HOTP/TOTP) theo chuẩn RFC 4226 & RFC 6238.

──────────────────────────────────────────────
Giải thuật cốt lõi
──────────────────────────────────────────────
- HOTP (HMAC-based One-Time Password):
  code = Truncate(HMAC-SHA1(key=secret, msg=counter)) mod 10^digits
  → Counter do caller tự quản lý (event-based token).

- TOTP (Time-based One-Time Password):
  HOTP với counter = floor(timestamp_ms / (period * 1000))
  → Mặc định period = 30 giây, 6 chữ số, SHA-1.

- Grace period:
  Chấp nhận mã của time step liền trước / liền sau nếu nằm trong
  khoảng grace_period giây quanh "now" (grace_period <= period).

──────────────────────────────────────────────
Ví dụ sử dụng nhanh
──────────────────────────────────────────────
>>> from otpkit import generate_hotp, verify_hotp
>>> key = b"12345678901234567890"
>>> generate_hotp(key, 0, 6)
'755224'
>>> verify_hotp(key, 1, 6, "287082")
True
"""
from .exceptions import (
    InvalidCounter,
    InvalidDigitCount,
    InvalidGracePeriod,
    InvalidPeriod,
    InvalidSecret,
    OTPError,
)
from .keyuri import (
    create_hotp_key_uri,
    create_totp_key_uri,
    decode_base32,
    encode_base32,
    generate_secret,
)
from .otp_core import (
    DEFAULT_DIGITS,
    DEFAULT_TIME_STEP,
    counter_for,
    generate_hotp,
    generate_totp,
    seconds_remaining,
    verify_hotp,
    verify_totp,
    verify_totp_with_grace_period,
)

__version__ = "1.0.0"

__all__ = [
    "OTPError",
    "InvalidCounter",
    "InvalidDigitCount",
    "InvalidGracePeriod",
    "InvalidPeriod",
    "InvalidSecret",
    "DEFAULT_DIGITS",
    "DEFAULT_TIME_STEP",
    "counter_for",
    "generate_hotp",
    "verify_hotp",
    "generate_totp",
    "verify_totp",
    "verify_totp_with_grace_period",
    "seconds_remaining",
    "generate_secret",
    "encode_base32",
    "decode_base32",
    "create_hotp_key_uri",
    "create_totp_key_uri",
]
