import pytest
from datetime import timedelta, datetime, timezone

import enquiry_tracker_svc.utils.security as security


def test_get_password_hash_and_verify_password_success():
    pw = "secret-password-123"
    hashed = security.get_password_hash(pw)
    assert hashed != pw
    assert security.verify_password(pw, hashed) is True
    assert security.verify_password("wrong-password", hashed) is False


def test_password_hash_is_salted():
    assert security.get_password_hash("same-password") != security.get_password_hash("same-password")


def test_verify_password_invalid_hash_returns_false():
    # malformed hash should not raise, should return False
    assert security.verify_password("pw", "not-a-real-hash") is False


def test_get_password_hash_invalid_input():
    with pytest.raises(ValueError):
        security.get_password_hash("")
    with pytest.raises(ValueError):
        security.get_password_hash(None)  # type: ignore


def test_verify_password_invalid_input():
    with pytest.raises(ValueError):
        security.verify_password("", "hash")
    with pytest.raises(ValueError):
        security.verify_password("pw", "")


def test_create_and_decode_access_token_valid():
    token = security.create_access_token({"id": 7, "role": "staff"}, expires_delta=timedelta(minutes=5))
    payload = security.decode_access_token(token)
    assert payload is not None
    assert payload.get("id") == 7
    assert payload.get("role") == "staff"
    assert "exp" in payload


def test_decode_access_token_expired_returns_none():
    token = security.create_access_token({"id": 1}, expires_delta=timedelta(seconds=-1))
    assert security.decode_access_token(token) is None


def test_decode_access_token_wrong_secret_returns_none(monkeypatch):
    token = security.create_access_token({"id": 1})
    monkeypatch.setattr(security.config, "SECRET_KEY", "another-secret")
    assert security.decode_access_token(token) is None


def test_decode_access_token_invalid_returns_none():
    assert security.decode_access_token("this-is-not-a-token") is None
    assert security.decode_access_token("") is None


def test_create_access_token_rejects_empty_data():
    with pytest.raises(ValueError):
        security.create_access_token({})


def test_create_access_token_uses_default_expiration(monkeypatch):
    monkeypatch.setattr(security.config, "ACCESS_TOKEN_EXPIRE_MINUTES", 1440)

    token = security.create_access_token({"id": 1, "role": "admin"})
    payload = security.decode_access_token(token)
    assert payload is not None
    exp = int(payload["exp"])
    now = int(datetime.now(timezone.utc).timestamp())
    # allow small timing drift
    assert (now + 24 * 60 * 60 - 5) <= exp <= (now + 24 * 60 * 60 + 5)


def test_using_default_secret(monkeypatch):
    assert security.using_default_secret() is False
    monkeypatch.setattr(security.config, "SECRET_KEY", security.config.DEFAULT_SECRET_KEY)
    assert security.using_default_secret() is True
