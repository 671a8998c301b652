"""
Auth routes
- POST /login: username + password, returns {token, error}
- GET /me: decoded claims of the Bearer token attached by the access guard
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from auth.errors import ErrorKind
from auth.guard import get_decoded_token
from auth.service import Authentik

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


class LoginRequest(BaseModel):
    username: str = Field(..., description="Username")
    password: str = Field(..., description="Plain text password")


class LoginResponse(BaseModel):
    token: Optional[str] = None
    error: Optional[str] = None


_STATUS_BY_KIND = {
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.CONFIGURATION_MISSING: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.SIGNING_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    # verifier raised instead of returning a result
    ErrorKind.GENERIC_AUTH_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_authentik(request: Request) -> Authentik:
    return request.app.state.authentik


@router.post("/login", response_model=LoginResponse)
async def password_login(body: LoginRequest, authentik: Authentik = Depends(get_authentik)):
    logger.info(f"user {body.username} attempting login")
    result = await authentik.login(body.username, body.password)
    if result.ok:
        return LoginResponse(token=result.token)

    code = _STATUS_BY_KIND.get(result.kind, status.HTTP_401_UNAUTHORIZED)
    logger.warning(f"login failed for {body.username}: {result.error}")
    headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=code,
        content=LoginResponse(error=result.error).model_dump(),
        headers=headers,
    )


@router.get("/me")
async def get_me(decoded_token: Dict[str, Any] = Depends(get_decoded_token)) -> Dict[str, Any]:
    """Return the claims of the current token (username, iat, exp, ...)."""
    return decoded_token
