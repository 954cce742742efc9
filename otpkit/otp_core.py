#!/usr/bin/env python3
"""
otp_core.py — Core library cho HOTP (RFC 4226) / TOTP (RFC 6238).

Mục tiêu:
- Chỉ chứa pure functions: không đọc/ghi file, không giữ state giữa các lần gọi.
- Key luôn là raw bytes; Base32 / otpauth URI nằm ở keyuri.py.
- Thời gian có thể truyền vào (timestamp_ms) để test deterministic;
  mặc định đọc wall clock.

Lưu ý bảo mật:
- So sánh mã OTP bằng hmac.compare_digest (constant-time).
- Mọi validate tham số (digits, period, grace period, counter) chạy TRƯỚC khi
  tính HMAC.
- Không log key hay mã OTP, chỉ log counter / digits / kết quả.
"""

import hashlib
import hmac
import logging
import struct
import time
from typing import Optional

from .exceptions import (
    InvalidCounter,
    InvalidDigitCount,
    InvalidGracePeriod,
    InvalidPeriod,
)

log = logging.getLogger(__name__)

# --- Config / constants ----------------------------------------------------
DEFAULT_DIGITS = 6          # chuẩn: 6 chữ số
MIN_DIGITS = 6
MAX_DIGITS = 8
DEFAULT_TIME_STEP = 30      # TOTP step (giây)
SECRET_BYTES = 20           # 160-bit secret (common practice)
MAX_COUNTER = 2 ** 64 - 1


# --- Validation --------------------------------------------------------------
def check_digits(digits: int) -> None:
    if isinstance(digits, bool) or not isinstance(digits, int) or not MIN_DIGITS <= digits <= MAX_DIGITS:
        raise InvalidDigitCount(f"Digits must be between {MIN_DIGITS} and {MAX_DIGITS}, got {digits!r}")


def check_period(period: int) -> None:
    if isinstance(period, bool) or not isinstance(period, int) or period <= 0:
        raise InvalidPeriod(f"Period must be a positive number of seconds, got {period!r}")


def check_grace_period(grace_period: int, period: int) -> None:
    if isinstance(grace_period, bool) or not isinstance(grace_period, int) or grace_period < 0:
        raise InvalidGracePeriod(f"Grace period must be a non-negative number of seconds, got {grace_period!r}")
    if grace_period > period:
        raise InvalidGracePeriod(
            f"Grace period ({grace_period}s) must not exceed the period ({period}s)"
        )


def check_counter(counter: int) -> None:
    if isinstance(counter, bool) or not isinstance(counter, int) or not 0 <= counter <= MAX_COUNTER:
        raise InvalidCounter(f"Counter must be an integer in [0, 2**64 - 1], got {counter!r}")


def _counter_in_range(counter: int) -> bool:
    return 0 <= counter <= MAX_COUNTER


def current_time_ms() -> int:
    # time_ns() là số nguyên, tránh sai số float khi chia
    return time.time_ns() // 1_000_000


# --- RFC helpers -----------------------------------------------------------
def int_to_bytes(counter: int) -> bytes:
    """
    Chuyển counter sang 8-byte big-endian như RFC4226 yêu cầu.

    Ví dụ: int_to_bytes(1) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'

    Raises:
        InvalidCounter: nếu counter âm hoặc vượt quá 2**64 - 1
    """
    check_counter(counter)
    return struct.pack(">Q", counter)


def dynamic_truncate(hmac_digest: bytes) -> int:
    """
    Áp dụng dynamic truncation theo RFC4226.

    - Lấy offset = last_byte & 0x0F
    - Lấy 4 bytes từ offset, clear MSB (0x7F) cho byte đầu
    - Trả về integer 31-bit (unsigned), luôn nằm trong [0, 2**31 - 1]

    Arguments:
        hmac_digest: digest của HMAC (SHA1 -> 20 bytes)
    """
    # offset in range 0..15; SHA1 digest dài 20 nên offset + 4 <= 19
    offset = hmac_digest[-1] & 0x0F
    (code,) = struct.unpack(">I", hmac_digest[offset:offset + 4])
    return code & 0x7FFFFFFF


def format_digits(value: int, digits: int) -> str:
    """value mod 10^digits, zero-pad đủ `digits` ký tự."""
    return str(value % (10 ** digits)).zfill(digits)


# --- HOTP --------------------------------------------------------------------
def generate_hotp(key: bytes, counter: int, digits: int = DEFAULT_DIGITS) -> str:
    """
    Sinh mã HOTP theo RFC4226.

    Steps:
    1. Message = 8-byte counter (big-endian)
    2. HMAC-SHA1(key, message)
    3. Dynamic truncate -> dbc
    4. otp = dbc % 10^digits, zero-pad để có đúng "digits" chữ số

    Arguments:
        key: raw secret bytes (bất kỳ độ dài nào, không validate)
        counter: integer counter, 0 <= counter <= 2**64 - 1
        digits: số chữ số OTP (6..8)

    Trả về:
        str: mã HOTP dạng zero-padded

    Raises:
        InvalidDigitCount: digits ngoài [6, 8]
        InvalidCounter: counter không phải 64-bit unsigned
    """
    check_digits(digits)
    msg = int_to_bytes(counter)
    digest = hmac.new(key, msg, hashlib.sha1).digest()
    return format_digits(dynamic_truncate(digest), digits)


def verify_hotp(key: bytes, counter: int, digits: int, otp: str) -> bool:
    """
    Xác minh mã HOTP do user nhập.

    - Độ dài sai -> False ngay (độ dài không phải thông tin bí mật).
    - Ngược lại so sánh với mã mong đợi bằng hmac.compare_digest, không bao
      giờ dùng `==` trên giá trị sinh từ secret.

    Raises:
        InvalidDigitCount: digits ngoài [6, 8] (kể cả khi otp sai độ dài)
    """
    check_digits(digits)
    if len(otp) != digits:
        log.debug("HOTP candidate rejected: length %d != %d digits", len(otp), digits)
        return False
    expected = generate_hotp(key, counter, digits)
    return hmac.compare_digest(otp.encode("utf-8"), expected.encode("ascii"))


# --- TOTP --------------------------------------------------------------------
def counter_for(timestamp_ms: int, period: int = DEFAULT_TIME_STEP) -> int:
    """
    Tính TOTP counter = floor(timestamp_ms / (period * 1000)).

    Dùng phép chia nguyên (//) để không mất độ chính xác với timestamp lớn.

    Raises:
        InvalidPeriod: period <= 0
    """
    check_period(period)
    return timestamp_ms // (period * 1000)


def seconds_remaining(period: int = DEFAULT_TIME_STEP, timestamp_ms: Optional[int] = None) -> int:
    """Số giây (làm tròn lên) còn lại cho mã TOTP hiện tại."""
    check_period(period)
    if timestamp_ms is None:
        timestamp_ms = current_time_ms()
    elapsed_ms = timestamp_ms % (period * 1000)
    return -(-(period * 1000 - elapsed_ms) // 1000)


def generate_totp(
    key: bytes,
    period: int = DEFAULT_TIME_STEP,
    digits: int = DEFAULT_DIGITS,
    timestamp_ms: Optional[int] = None,
) -> str:
    """
    Sinh mã TOTP theo RFC6238: HOTP(counter = floor(now / period)).

    Arguments:
        key: raw secret bytes
        period: X (giây), mặc định 30
        digits: số chữ số OTP
        timestamp_ms: epoch milliseconds (nếu None -> wall clock)
    """
    check_digits(digits)
    check_period(period)
    if timestamp_ms is None:
        timestamp_ms = current_time_ms()
    return generate_hotp(key, counter_for(timestamp_ms, period), digits)


def verify_totp(
    key: bytes,
    period: int,
    digits: int,
    otp: str,
    timestamp_ms: Optional[int] = None,
) -> bool:
    """
    Xác minh mã TOTP chỉ trong time step hiện tại (không có tolerance).
    Cần chấp nhận lệch đồng hồ thì dùng verify_totp_with_grace_period.

    Timestamp cho ra counter ngoài [0, 2**64 - 1] (ví dụ trước epoch) -> False.
    """
    check_digits(digits)
    check_period(period)
    if timestamp_ms is None:
        timestamp_ms = current_time_ms()
    counter = counter_for(timestamp_ms, period)
    if not _counter_in_range(counter):
        return False
    return verify_hotp(key, counter, digits, otp)


def verify_totp_with_grace_period(
    key: bytes,
    period: int,
    digits: int,
    otp: str,
    grace_period: int,
    timestamp_ms: Optional[int] = None,
) -> bool:
    """
    Xác minh mã TOTP với grace period đối xứng quanh thời điểm hiện tại.

    Kiểm tra tối đa 3 counter, theo thứ tự:
    1. counter hiện tại (trường hợp phổ biến)
    2. counter của (now - grace_period), nếu khác counter hiện tại
    3. counter của (now + grace_period), nếu khác counter hiện tại

    grace_period phải nằm trong [0, period]; trong khoảng đó 3 điểm trên phủ
    hết mọi time step mà cửa sổ tolerance chạm tới. grace_period = 0 tương
    đương verify_totp. Counter ngoài [0, 2**64 - 1] bị bỏ qua, không raise.

    Raises:
        InvalidGracePeriod: grace_period < 0 hoặc > period
        InvalidPeriod, InvalidDigitCount: như verify_totp
    """
    check_digits(digits)
    check_period(period)
    check_grace_period(grace_period, period)
    if timestamp_ms is None:
        timestamp_ms = current_time_ms()

    grace_ms = grace_period * 1000
    counter_now = counter_for(timestamp_ms, period)
    if _counter_in_range(counter_now) and verify_hotp(key, counter_now, digits, otp):
        return True

    for edge_ms in (timestamp_ms - grace_ms, timestamp_ms + grace_ms):
        counter = counter_for(edge_ms, period)
        if counter == counter_now or not _counter_in_range(counter):
            continue
        if verify_hotp(key, counter, digits, otp):
            log.debug("TOTP accepted at adjacent step (offset %+d)", counter - counter_now)
            return True
    return False
