"""
Session issuer: credential check followed by token signing.
"""

from __future__ import annotations

import logging
from typing import Optional

from auth import codec
from auth.config import AuthConfig
from auth.errors import ErrorKind, SigningError, message_for
from auth.models import LoginResult
from auth.verifier import CredentialVerifier, build_verifier

logger = logging.getLogger(__name__)


class SessionIssuer:
    def __init__(self, config: AuthConfig, verifier: Optional[CredentialVerifier] = None):
        self.config = config
        self.verifier = verifier if verifier is not None else build_verifier(config)

    async def login(self, username: str, password: str) -> LoginResult:
        """
        Authenticate and, only on success, sign the identity.
        Errors are returned in the result, never raised.
        """
        logger.debug("login method called")
        try:
            result = await self.verifier.verify(username, password)
        except Exception:
            logger.exception("credential verifier failed for '%s'", username)
            kind = ErrorKind.GENERIC_AUTH_FAILURE
            return LoginResult(token=None, kind=kind, error=message_for(kind))

        if not result.authenticated:
            logger.info("user '%s' is not authenticated: %s", username, result.kind)
            return LoginResult(token=None, kind=result.kind, error=result.error)

        try:
            token = await codec.sign(result.identity, self.config.secret, self.config.token_options)
        except SigningError as e:
            logger.error("signing failed for '%s': %s", username, e)
            kind = ErrorKind.SIGNING_FAILURE
            return LoginResult(token=None, kind=kind, error=message_for(kind))

        logger.info("user '%s' logged in", username)
        return LoginResult(token=token)
