"""
Cấu hình cho OTP backend, đọc từ biến môi trường (hoặc file .env).

  OTPKIT_HOST          địa chỉ lắng nghe (mặc định 127.0.0.1)
  OTPKIT_PORT          port (mặc định 5000)
  OTPKIT_DEBUG         "1"/"true" để bật debug mode
  OTPKIT_ISSUER        issuer mặc định cho otpauth URI
  OTPKIT_CORS_ORIGINS  danh sách origin, phân cách bằng dấu phẩy ("*" = tất cả)
"""
import os

from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    HOST = os.getenv("OTPKIT_HOST", "127.0.0.1")
    PORT = int(os.getenv("OTPKIT_PORT", "5000"))
    DEBUG = _as_bool(os.getenv("OTPKIT_DEBUG", "0"))
    OTP_ISSUER = os.getenv("OTPKIT_ISSUER", "otpkit")
    CORS_ORIGINS = [o.strip() for o in os.getenv("OTPKIT_CORS_ORIGINS", "*").split(",") if o.strip()]
