"""
Error kinds and codec exceptions.

Verifier and session results carry an ErrorKind plus a human-readable
message. The token codec raises the TokenError family instead.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    CONFIGURATION_MISSING = "ConfigurationMissing"
    INVALID_CREDENTIALS = "InvalidCredentials"
    SIGNING_FAILURE = "SigningFailure"
    EXPIRED_TOKEN = "ExpiredToken"
    GENERIC_AUTH_FAILURE = "GenericAuthFailure"


MESSAGES = {
    ErrorKind.CONFIGURATION_MISSING: "Basic authentication not configured!",
    ErrorKind.INVALID_CREDENTIALS: "Username and/or password invalid!",
    ErrorKind.SIGNING_FAILURE: "Token signing failed",
    ErrorKind.EXPIRED_TOKEN: "Token is expired",
    ErrorKind.GENERIC_AUTH_FAILURE: "Authorization failed",
}


def message_for(kind: ErrorKind) -> str:
    return MESSAGES[kind]


class TokenError(Exception):
    """Base class for every failure raised by auth.jwt."""


class SigningError(TokenError):
    pass


class TokenExpiredError(TokenError):
    pass


class TokenInvalidError(TokenError):
    pass
