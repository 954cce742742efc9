"""
exceptions.py — Lỗi đầu vào của otpkit.

Tất cả đều là ValueError: caller truyền tham số sai (digits, period,
grace period, counter, secret). Chúng được raise trước khi chạm tới HMAC,
nên không bao giờ phụ thuộc vào key hay mã OTP.

Mã OTP sai KHÔNG phải lỗi: các hàm verify_* trả về False.
"""


class OTPError(ValueError):
    """Base class cho mọi lỗi validate đầu vào của otpkit."""


class InvalidDigitCount(OTPError):
    """digits nằm ngoài khoảng [6, 8]."""


class InvalidPeriod(OTPError):
    """TOTP period (giây) phải là số nguyên > 0."""


class InvalidGracePeriod(OTPError):
    """Grace period âm, hoặc lớn hơn period."""


class InvalidCounter(OTPError):
    """Counter không biểu diễn được bằng 64-bit unsigned."""


class InvalidSecret(OTPError):
    """Secret Base32 không decode được."""
