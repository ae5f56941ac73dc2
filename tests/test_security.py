from datetime import timedelta

import pytest
from jose import jwt

from app.config import settings
from app.core.errors import TokenExpired, TokenInvalid
from app.core.security import create_access_token, decode_access_token
from app.utils.password import hash_password, verify_password


def test_hash_is_salted_and_verifiable():
    first = hash_password("secret-pass")
    second = hash_password("secret-pass")

    assert first != "secret-pass"
    assert first != second
    assert verify_password("secret-pass", first)
    assert not verify_password("wrong-pass", first)


def test_hash_rejects_passwords_over_72_bytes():
    with pytest.raises(ValueError):
        hash_password("x" * 73)


def test_token_round_trip_returns_user_id():
    token = create_access_token(42)
    assert decode_access_token(token) == 42


def test_token_carries_no_role_claim():
    token = create_access_token(7)
    claims = jwt.get_unverified_claims(token)
    assert claims["sub"] == "7"
    assert "role" not in claims
    assert "exp" in claims


def test_default_lifetime_is_thirty_days():
    token = create_access_token(7)
    claims = jwt.get_unverified_claims(token)
    assert claims["exp"] - claims["iat"] == int(timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS).total_seconds())


def test_expired_token_is_reported_as_expired():
    token = create_access_token(1, expires_delta=timedelta(seconds=-30))
    with pytest.raises(TokenExpired):
        decode_access_token(token)


def test_forged_token_is_invalid():
    forged = jwt.encode({"sub": "1"}, "not-the-server-secret", algorithm=settings.ALGORITHM)
    with pytest.raises(TokenInvalid):
        decode_access_token(forged)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_token_is_invalid(token):
    with pytest.raises(TokenInvalid):
        decode_access_token(token)


def test_token_without_numeric_subject_is_invalid():
    token = jwt.encode({"sub": "abc"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    with pytest.raises(TokenInvalid):
        decode_access_token(token)
