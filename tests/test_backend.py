"""Tests for the Flask REST API."""

import pytest

from .conftest import RFC_KEY_B32


def test_index(client):
    data = client.get("/").get_json()
    assert data["service"] == "otpkit"
    assert "/verify_totp" in data["endpoints"]


def test_secret(client):
    res = client.post("/secret", json={"bytes": 32})
    assert res.status_code == 200
    assert len(res.get_json()["secret"]) == 52


def test_secret_without_body(client):
    res = client.post("/secret")
    assert res.status_code == 200
    assert len(res.get_json()["secret"]) == 32


def test_hotp(client):
    res = client.post("/hotp", json={"secret": RFC_KEY_B32, "counter": 5})
    assert res.status_code == 200
    assert res.get_json() == {"code": "254676"}


def test_hotp_missing_counter(client):
    res = client.post("/hotp", json={"secret": RFC_KEY_B32})
    assert res.status_code == 400
    assert "counter" in res.get_json()["error"]


def test_hotp_invalid_digits(client):
    res = client.post("/hotp", json={"secret": RFC_KEY_B32, "counter": 0, "digits": 9})
    assert res.status_code == 400
    assert "Digits" in res.get_json()["error"]


def test_invalid_secret(client):
    res = client.post("/hotp", json={"secret": "!!!", "counter": 0})
    assert res.status_code == 400


def test_totp(client):
    res = client.post("/totp", json={"secret": RFC_KEY_B32, "digits": 8, "timestamp_ms": 59000})
    assert res.get_json() == {"code": "94287082", "remaining": 1}


@pytest.mark.parametrize("code,valid", [("287082", True), ("000000", False), ("28708", False)])
def test_verify_hotp(client, code, valid):
    res = client.post("/verify_hotp", json={"secret": RFC_KEY_B32, "counter": 1, "code": code})
    assert res.status_code == 200
    assert res.get_json() == {"valid": valid}


def test_verify_hotp_code_must_be_string(client):
    res = client.post("/verify_hotp", json={"secret": RFC_KEY_B32, "counter": 1, "code": 287082})
    assert res.status_code == 400


@pytest.mark.parametrize("grace,valid", [(0, False), (30, True)])
def test_verify_totp_grace(client, grace, valid):
    res = client.post("/verify_totp", json={
        "secret": RFC_KEY_B32,
        "code": "07081804",
        "digits": 8,
        "grace_period": grace,
        "timestamp_ms": 1111111110000,
    })
    assert res.get_json() == {"valid": valid}


def test_verify_totp_grace_too_large(client):
    res = client.post("/verify_totp", json={"secret": RFC_KEY_B32, "code": "000000", "grace_period": 60})
    assert res.status_code == 400
    assert "Grace period" in res.get_json()["error"]


def test_otpauth_uri_default_issuer(client):
    res = client.post("/otpauth_uri", json={"secret": RFC_KEY_B32, "account": "alice"})
    assert res.get_json()["uri"].startswith("otpauth://totp/TestIssuer:alice?issuer=TestIssuer")


def test_otpauth_uri_hotp(client):
    res = client.post("/otpauth_uri", json={
        "secret": RFC_KEY_B32, "account": "alice", "type": "hotp", "issuer": "ACME", "counter": 3,
    })
    assert "&counter=3&" in res.get_json()["uri"]


def test_otpauth_uri_bad_type(client):
    res = client.post("/otpauth_uri", json={"secret": RFC_KEY_B32, "account": "alice", "type": "sms"})
    assert res.status_code == 400


def test_non_object_body(client):
    res = client.post("/hotp", json=[1, 2, 3])
    assert res.status_code == 400


@pytest.mark.parametrize("field,value", [
    ("counter", 1.9),
    ("counter", 1.0),
    ("counter", "1"),
    ("digits", 6.7),
    ("digits", 6.0),
])
def test_hotp_rejects_non_integer_fields(client, field, value):
    body = {"secret": RFC_KEY_B32, "counter": 1, "digits": 6}
    body[field] = value
    res = client.post("/hotp", json=body)
    assert res.status_code == 400
    assert field in res.get_json()["error"]


def test_verify_totp_rejects_float_timestamp(client):
    res = client.post("/verify_totp", json={
        "secret": RFC_KEY_B32, "code": "000000", "timestamp_ms": 1111111110000.5,
    })
    assert res.status_code == 400


def test_non_ascii_secret(client):
    res = client.post("/hotp", json={"secret": "GEZDGNBVé", "counter": 0})
    assert res.status_code == 400
    assert "Base32" in res.get_json()["error"]


def test_secret_size_limit(client):
    res = client.post("/secret", json={"bytes": 10_000_000_000})
    assert res.status_code == 400
    assert "limited" in res.get_json()["error"]


def test_otpauth_uri_type_must_be_string(client):
    res = client.post("/otpauth_uri", json={"secret": RFC_KEY_B32, "account": "alice", "type": ["totp"]})
    assert res.status_code == 400
    assert "'type' must be a string" in res.get_json()["error"]
