import time

import jwt

from clubhouse.utils import config
from clubhouse.utils.token_crypto import (
    TOKEN_TTL_SECONDS,
    TokenUser,
    hash_password,
    issue_token,
    verify_password,
    verify_token,
)

USER = TokenUser(id="1", username="admin", name="Club Administrator", role="admin")


def test_hash_and_verify_password():
    h = hash_password("yacht123")
    assert h.startswith("$argon2id$")
    assert verify_password("yacht123", h) is True
    assert verify_password("wrong-password", h) is False


def test_verify_password_handles_garbage_hash():
    assert verify_password("yacht123", "not-a-hash") is False
    assert verify_password("", "not-a-hash") is False


def test_issue_and_verify_token():
    token = issue_token(USER)
    assert verify_token(token) == USER


def test_token_expires_after_24_hours():
    assert TOKEN_TTL_SECONDS == 24 * 60 * 60
    now = int(time.time())
    payload = jwt.decode(issue_token(USER, now=now), config.jwt_secret(), algorithms=["HS256"])
    assert payload["exp"] - payload["iat"] == TOKEN_TTL_SECONDS


def test_expired_token_is_rejected():
    stale = issue_token(USER, now=int(time.time()) - TOKEN_TTL_SECONDS - 60)
    assert verify_token(stale) is None


def test_tampered_token_is_rejected():
    token = issue_token(USER)
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[:-2] + ("AA" if not signature.endswith("AA") else "BB")])
    assert verify_token(tampered) is None


def test_token_signed_with_other_secret_is_rejected():
    forged = jwt.encode({**USER.to_dict(), "exp": int(time.time()) + 60}, "another-secret-that-is-long-enough-32b", algorithm="HS256")
    assert verify_token(forged) is None


def test_garbage_and_empty_tokens_are_rejected():
    assert verify_token("garbage") is None
    assert verify_token("") is None
    assert verify_token(None) is None


def test_token_missing_profile_claims_is_rejected():
    token = jwt.encode({"id": "1", "exp": int(time.time()) + 60}, config.jwt_secret(), algorithm="HS256")
    assert verify_token(token) is None


def test_secret_comes_from_environment(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "rotated-secret-for-tests-0123456789abcdef")
    token = issue_token(USER)
    assert verify_token(token) == USER
    monkeypatch.setenv("JWT_SECRET", "another-rotated-secret-0123456789abcdefgh")
    assert verify_token(token) is None
