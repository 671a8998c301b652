"""
Token codec: async JWT sign/verify over PyJWT.

PyJWT is synchronous, so both operations run in Starlette's threadpool.
Every library or serialisation failure is normalised into the TokenError
family from auth.errors so callers never see raw PyJWT exceptions.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import jwt
from starlette.concurrency import run_in_threadpool

from auth.config import TokenOptions
from auth.errors import SigningError, TokenExpiredError, TokenInvalidError

logger = logging.getLogger(__name__)


def now_ts() -> int:
    """Return current UNIX timestamp (seconds)."""
    return int(time.time())


def build_claims(payload: Dict[str, Any], options: TokenOptions, issued_at: Optional[int] = None) -> Dict[str, Any]:
    """Copy payload and add iat/exp/nbf/iss/aud according to options."""
    iat = now_ts() if issued_at is None else issued_at
    claims = dict(payload)
    claims["iat"] = iat
    if options.expires_in is not None:
        claims["exp"] = iat + options.expires_in
    if options.not_before is not None:
        claims["nbf"] = iat + options.not_before
    if options.issuer is not None:
        claims["iss"] = options.issuer
    if options.audience is not None:
        claims["aud"] = options.audience
    return claims


def encode(payload: Dict[str, Any], secret: str, options: TokenOptions) -> str:
    try:
        return jwt.encode(build_claims(payload, options), secret, algorithm=options.algorithm)
    except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as e:
        raise SigningError(f"JWT encode failed: {e}") from e


def decode(token: str, secret: str, options: TokenOptions) -> Dict[str, Any]:
    """
    Verify signature and registered claims, return the payload.
    Raises TokenExpiredError when 'exp' has passed, TokenInvalidError otherwise.
    """
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=[options.algorithm],
            issuer=options.issuer,
            audience=options.audience,
            leeway=options.leeway,
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError(str(e)) from e
    except jwt.PyJWTError as e:
        raise TokenInvalidError(str(e)) from e


async def sign(payload: Dict[str, Any], secret: str, options: TokenOptions) -> str:
    logger.debug("creating jwt")
    try:
        token = await run_in_threadpool(encode, payload, secret, options)
    except SigningError as e:
        logger.debug(str(e))
        raise
    logger.debug("returning token")
    return token


async def verify(token: str, secret: str, options: TokenOptions) -> Dict[str, Any]:
    return await run_in_threadpool(decode, token, secret, options)
