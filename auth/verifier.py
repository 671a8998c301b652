"""
Credential verifiers.

A verifier exposes a single coroutine, verify(username, password) -> AuthResult.
BasicCredentialVerifier compares against the reference pair in AuthConfig;
FunctionVerifier adapts a user-supplied callable (sync or async).
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Protocol, runtime_checkable

from auth.config import AuthConfig
from auth.errors import ErrorKind
from auth.models import AuthResult

logger = logging.getLogger(__name__)


@runtime_checkable
class CredentialVerifier(Protocol):
    async def verify(self, username: str, password: str) -> AuthResult:
        ...


class BasicCredentialVerifier:
    def __init__(self, config: AuthConfig):
        self.config = config

    async def verify(self, username: str, password: str) -> AuthResult:
        logger.debug("authenticating '%s'", username)

        if not self.config.basic_auth_configured:
            logger.debug("basic authentication is not configured")
            return AuthResult.failure(ErrorKind.CONFIGURATION_MISSING)

        if username == self.config.username and password == self.config.password:
            logger.debug("user '%s' is authenticated", username)
            return AuthResult.success(username)

        logger.debug("credentials rejected for '%s'", username)
        return AuthResult.failure(ErrorKind.INVALID_CREDENTIALS)


class FunctionVerifier:
    """Wraps a callable(username, password) returning an AuthResult or an awaitable of one."""

    def __init__(self, func: Callable[[str, str], Any]):
        self.func = func

    async def verify(self, username: str, password: str) -> AuthResult:
        logger.debug("authenticating '%s' with custom verifier", username)
        result = self.func(username, password)
        if inspect.isawaitable(result):
            result = await result
        if not isinstance(result, AuthResult):
            raise TypeError(f"custom verifier must return AuthResult, got {type(result).__name__}")
        return result


def build_verifier(config: AuthConfig) -> CredentialVerifier:
    """Pick the custom verifier when configured, the basic comparator otherwise."""
    custom = config.custom_verifier
    if custom is None:
        return BasicCredentialVerifier(config)
    if isinstance(custom, CredentialVerifier):
        return custom
    if callable(custom):
        return FunctionVerifier(custom)
    raise TypeError(f"custom_verifier must be callable or define verify(), got {type(custom).__name__}")
