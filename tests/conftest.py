import pytest

from otpkit_backend import create_app

# RFC 4226 Appendix D / RFC 6238 Appendix B (SHA-1) test secret
RFC_KEY = b"12345678901234567890"
RFC_KEY_B32 = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


@pytest.fixture
def key():
    return RFC_KEY


@pytest.fixture
def app():
    return create_app({"TESTING": True, "OTP_ISSUER": "TestIssuer"})


@pytest.fixture
def client(app):
    return app.test_client()
