"""Tests for the bearer token service."""
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from app.auth.tokens import InvalidToken, TokenService


@pytest.fixture
def tokens():
    return TokenService("unit-test-key")


def test_issue_then_verify_returns_subject(tokens):
    token = tokens.issue("0c6a3f8e-2f39-4a4e-9d0b-3b1f6a1f2b10")
    assert tokens.verify(token) == "0c6a3f8e-2f39-4a4e-9d0b-3b1f6a1f2b10"


def test_token_expires_after_thirty_days(tokens):
    now = datetime.now(timezone.utc)
    payload = jwt.decode(tokens.issue("user-1", now=now), "unit-test-key", algorithms=["HS256"])
    assert payload["exp"] - payload["iat"] == int(timedelta(days=30).total_seconds())


def test_expired_token_is_rejected(tokens):
    issued = datetime.now(timezone.utc) - timedelta(days=31)
    with pytest.raises(InvalidToken):
        tokens.verify(tokens.issue("user-1", now=issued))


def test_token_signed_with_other_key_is_rejected(tokens):
    forged = TokenService("another-key").issue("user-1")
    with pytest.raises(InvalidToken):
        tokens.verify(forged)


def test_tampered_token_is_rejected(tokens):
    header, payload, signature = tokens.issue("user-1").split(".")
    tampered = ".".join([header, payload, signature[:-2] + ("AA" if signature[-2:] != "AA" else "BB")])
    with pytest.raises(InvalidToken):
        tokens.verify(tampered)


@pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c"])
def test_malformed_token_is_rejected(tokens, token):
    with pytest.raises(InvalidToken):
        tokens.verify(token)


def test_token_without_subject_is_rejected(tokens):
    exp = int((datetime.now(timezone.utc) + timedelta(hours=1)).timestamp())
    token = jwt.encode({"exp": exp}, "unit-test-key", algorithm="HS256")
    with pytest.raises(InvalidToken):
        tokens.verify(token)


def test_missing_signing_key_is_fatal():
    with pytest.raises(ValueError):
        TokenService("")
