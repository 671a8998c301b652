"""
Authentik facade: one object wiring verifier, session issuer and access guard
around a single AuthConfig.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from auth.config import AuthConfig
from auth.guard import DEFAULT_PUBLIC_PATHS, AccessGuard, AccessGuardMiddleware
from auth.models import AuthResult, GuardDecision, LoginResult
from auth.session import SessionIssuer
from auth.verifier import CredentialVerifier, build_verifier

logger = logging.getLogger(__name__)


class Authentik:
    def __init__(self, config: AuthConfig, verifier: Optional[CredentialVerifier] = None):
        logger.debug("created instance of Authentik")
        self.config = config
        self.verifier = verifier if verifier is not None else build_verifier(config)
        self.issuer = SessionIssuer(config, self.verifier)
        self.guard = AccessGuard(config)

    async def authenticate(self, username: str, password: str) -> AuthResult:
        return await self.verifier.verify(username, password)

    async def login(self, username: str, password: str) -> LoginResult:
        return await self.issuer.login(username, password)

    async def authorize(self, authorization: Optional[str]) -> GuardDecision:
        return await self.guard.authorize(authorization)

    def install(self, app, public_paths: Iterable[str] = DEFAULT_PUBLIC_PATHS):
        """Register the access guard middleware on a Starlette/FastAPI app."""
        app.add_middleware(AccessGuardMiddleware, guard=self.guard, public_paths=tuple(public_paths))
        return app
