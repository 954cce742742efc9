"""
Backend package: REST API (Flask) bọc quanh otpkit.

Stateless: mỗi request tự mang theo secret Base32, server không lưu gì.
"""

from .app import create_app

__all__ = ['create_app']
