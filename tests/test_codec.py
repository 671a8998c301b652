import asyncio
import time

import jwt
import pytest

from auth import codec
from auth.config import TokenOptions
from auth.errors import SigningError, TokenExpiredError, TokenInvalidError


def test_build_claims_adds_registered_claims():
    opts = TokenOptions(expires_in=60, not_before=5, issuer="authentik", audience="api")
    claims = codec.build_claims({"username": "alice"}, opts, issued_at=1000)
    assert claims == {
        "username": "alice",
        "iat": 1000,
        "exp": 1060,
        "nbf": 1005,
        "iss": "authentik",
        "aud": "api",
    }


def test_build_claims_without_expiry():
    claims = codec.build_claims({"username": "alice"}, TokenOptions(expires_in=None), issued_at=1000)
    assert "exp" not in claims
    assert claims["iat"] == 1000


def test_build_claims_does_not_mutate_payload():
    payload = {"username": "alice"}
    codec.build_claims(payload, TokenOptions())
    assert payload == {"username": "alice"}


def test_sign_then_verify(secret):
    opts = TokenOptions(expires_in=600)
    token = asyncio.run(codec.sign({"username": "alice"}, secret, opts))
    claims = asyncio.run(codec.verify(token, secret, opts))
    assert claims["username"] == "alice"
    assert claims["exp"] > int(time.time())


def test_verify_expired(secret):
    now = int(time.time())
    expired = jwt.encode({"username": "u", "iat": now - 100, "exp": now - 10}, secret, algorithm="HS256")
    with pytest.raises(TokenExpiredError):
        asyncio.run(codec.verify(expired, secret, TokenOptions()))


def test_verify_expired_within_leeway(secret):
    now = int(time.time())
    token = jwt.encode({"username": "u", "exp": now - 10}, secret, algorithm="HS256")
    claims = asyncio.run(codec.verify(token, secret, TokenOptions(leeway=60)))
    assert claims["username"] == "u"


def test_verify_wrong_secret(secret):
    token = jwt.encode({"username": "mallory"}, "another-secret-0123456789abcdef0123456789", algorithm="HS256")
    with pytest.raises(TokenInvalidError):
        asyncio.run(codec.verify(token, secret, TokenOptions()))


def test_verify_garbage(secret):
    with pytest.raises(TokenInvalidError):
        asyncio.run(codec.verify("not-a-jwt", secret, TokenOptions()))


def test_verify_rejects_other_algorithm(secret):
    token = jwt.encode({"username": "u"}, secret, algorithm="HS512")
    with pytest.raises(TokenInvalidError):
        asyncio.run(codec.verify(token, secret, TokenOptions(algorithm="HS256")))


def test_verify_enforces_issuer_and_audience(secret):
    signed = TokenOptions(issuer="someone-else", audience="api")
    token = asyncio.run(codec.sign({"username": "u"}, secret, signed))
    with pytest.raises(TokenInvalidError):
        asyncio.run(codec.verify(token, secret, TokenOptions(issuer="authentik", audience="api")))
    claims = asyncio.run(codec.verify(token, secret, signed))
    assert claims["iss"] == "someone-else"


def test_expired_error_is_a_token_error():
    from auth.errors import TokenError
    assert issubclass(TokenExpiredError, TokenError)
    assert issubclass(SigningError, TokenError)


def test_sign_unknown_algorithm(secret):
    with pytest.raises(SigningError):
        asyncio.run(codec.sign({"username": "u"}, secret, TokenOptions(algorithm="NOPE")))


def test_sign_unserialisable_payload(secret):
    with pytest.raises(SigningError):
        asyncio.run(codec.sign({"username": object()}, secret, TokenOptions()))
