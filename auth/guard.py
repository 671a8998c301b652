"""
Access guard: Bearer token gate for inbound requests.

AccessGuard.authorize() turns an Authorization header into a GuardDecision.
AccessGuardMiddleware applies that decision to every non-public route,
attaching the decoded token to request.state or answering 401.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Awaitable, Callable, Dict, Iterable, Optional

from fastapi import HTTPException, Request, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from auth import codec
from auth.config import AuthConfig
from auth.errors import ErrorKind, TokenExpiredError, TokenInvalidError, message_for
from auth.models import GuardDecision

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"
STATE_ATTR = "decoded_token"

DEFAULT_PUBLIC_PATHS = (
    r"^/api/v1/auth/login/?$",
    r"^/api/v1/health(/.*)?$",
)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token of a 'Bearer <token>' header, None for anything else."""
    if not authorization:
        return None
    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0] != BEARER_SCHEME:
        return None
    token = parts[1].strip()
    return token or None


class AccessGuard:
    def __init__(self, config: AuthConfig):
        self.config = config

    async def authorize(self, authorization: Optional[str]) -> GuardDecision:
        logger.debug("verifying token")
        if authorization is None:
            logger.debug("authorization header does not exist")
            return GuardDecision(kind=ErrorKind.GENERIC_AUTH_FAILURE)

        token = extract_bearer_token(authorization)
        if token is None:
            logger.debug("authorization header is not a Bearer token")
            return GuardDecision(kind=ErrorKind.GENERIC_AUTH_FAILURE)

        try:
            decoded = await codec.verify(token, self.config.secret, self.config.token_options)
        except TokenExpiredError:
            logger.debug("token is expired")
            return GuardDecision(kind=ErrorKind.EXPIRED_TOKEN)
        except TokenInvalidError as e:
            logger.debug("token rejected: %s", e)
            return GuardDecision(kind=ErrorKind.GENERIC_AUTH_FAILURE)

        logger.debug("authorization succeeded")
        return GuardDecision(decoded_token=decoded)


def unauthorized_response(kind: ErrorKind) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"message": message_for(kind)},
        headers={"WWW-Authenticate": BEARER_SCHEME},
    )


class AccessGuardMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, guard: AccessGuard, public_paths: Iterable[str] = DEFAULT_PUBLIC_PATHS):
        super().__init__(app)
        self.guard = guard
        self.public_paths = [re.compile(p) for p in public_paths]

    def is_public(self, path: str) -> bool:
        return any(p.fullmatch(path) for p in self.public_paths)

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Any]]):
        path = request.url.path
        if self.is_public(path):
            logger.debug("AccessGuard: public route %s %s", request.method, path)
            return await call_next(request)

        decision = await self.guard.authorize(request.headers.get("Authorization"))
        if not decision.allowed:
            logger.warning("AccessGuard: rejected %s %s (%s)", request.method, path, decision.kind.value)
            return unauthorized_response(decision.kind)

        setattr(request.state, STATE_ATTR, decision.decoded_token)
        return await call_next(request)


def get_decoded_token(request: Request) -> Dict[str, Any]:
    """Dependency returning the claims attached by AccessGuardMiddleware."""
    decoded = getattr(request.state, STATE_ATTR, None)
    if decoded is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=message_for(ErrorKind.GENERIC_AUTH_FAILURE),
            headers={"WWW-Authenticate": BEARER_SCHEME},
        )
    return decoded
