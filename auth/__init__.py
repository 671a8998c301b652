"""
Auth package: credential verification, JWT issuance and Bearer token gating.
"""
from . import codec, config
from .config import AuthConfig, TokenOptions, load_config
from .errors import ErrorKind
from .guard import AccessGuard, AccessGuardMiddleware, get_decoded_token
from .models import AuthResult, GuardDecision, LoginResult
from .service import Authentik
from .session import SessionIssuer
from .verifier import BasicCredentialVerifier, CredentialVerifier, FunctionVerifier

__all__ = [
    "codec",
    "config",
    "AuthConfig",
    "TokenOptions",
    "load_config",
    "ErrorKind",
    "AccessGuard",
    "AccessGuardMiddleware",
    "get_decoded_token",
    "AuthResult",
    "GuardDecision",
    "LoginResult",
    "Authentik",
    "SessionIssuer",
    "BasicCredentialVerifier",
    "CredentialVerifier",
    "FunctionVerifier",
]
