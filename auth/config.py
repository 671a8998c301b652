"""
Auth configuration model and loader.

- AuthConfig is immutable and built once at startup, then handed to the
  verifier, session issuer and access guard explicitly.
- load_config() reads JSON from the given path, ENV AUTH_CONFIG_PATH or
  './auth.json'.
- JWT secret priority: ENV JWT_SECRET > config.jwt_secret > default 'change-me'
- Reference credentials: ENV AUTH_USERNAME / AUTH_PASSWORD > config.basic_auth
- On missing/invalid config file: log WARNING and fall back to defaults.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

_DEFAULT_SECRET = "change-me"
_DEFAULT_CONFIG_FILE = "auth.json"
_DEFAULT_EXPIRES_SECONDS = 3600

_ENV_CONFIG_PATH = "AUTH_CONFIG_PATH"
_ENV_JWT_SECRET = "JWT_SECRET"
_ENV_USERNAME = "AUTH_USERNAME"
_ENV_PASSWORD = "AUTH_PASSWORD"


class TokenOptions(BaseModel):
    """Signing/verification options passed to the token codec."""

    model_config = ConfigDict(frozen=True)

    algorithm: str = Field("HS256", description="HMAC algorithm for the shared secret")
    expires_in: Optional[int] = Field(_DEFAULT_EXPIRES_SECONDS, ge=1, description="Lifetime in seconds; None omits 'exp'")
    not_before: Optional[int] = Field(None, ge=0, description="Seconds after issue before the token is valid")
    issuer: Optional[str] = None
    audience: Optional[str] = None
    leeway: int = Field(0, ge=0, description="Clock skew tolerated on verification")


class AuthConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    secret: str = _DEFAULT_SECRET
    username: Optional[str] = None
    password: Optional[str] = None
    token_options: TokenOptions = Field(default_factory=TokenOptions)
    # Callable (username, password) -> AuthResult, or a CredentialVerifier instance
    custom_verifier: Optional[Any] = None

    @property
    def basic_auth_configured(self) -> bool:
        return self.username is not None and self.password is not None

    def snapshot(self) -> Dict[str, Any]:
        """Redacted view for diagnostics; never includes the secret or password."""
        return {
            "username": self.username,
            "password_set": self.password is not None,
            "secret_is_default": self.secret == _DEFAULT_SECRET,
            "token_options": self.token_options.model_dump(),
            "custom_verifier": self.custom_verifier is not None,
        }


def _effective_config_path(path: Optional[str]) -> str:
    if path:
        return str(path)
    env_path = os.environ.get(_ENV_CONFIG_PATH)
    if env_path and env_path.strip():
        return env_path
    return _DEFAULT_CONFIG_FILE


def _read_json(path: str) -> Dict[str, Any]:
    if not os.path.isfile(path):
        logger.warning("Auth config file %s not found; using defaults", path)
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Failed to read auth config %s: %s; using defaults", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Auth config %s is not a JSON object; using defaults", path)
        return {}
    return data


def load_config(path: Optional[str] = None, custom_verifier: Optional[Any] = None) -> AuthConfig:
    """
    Build the process AuthConfig from JSON + environment.
    Invalid option values raise pydantic.ValidationError.
    """
    cfg_path = _effective_config_path(path)
    raw = _read_json(cfg_path)

    basic = raw.get("basic_auth")
    if not isinstance(basic, dict):
        basic = {}
    options = raw.get("jwt_options")
    if not isinstance(options, dict):
        options = {}

    secret = os.environ.get(_ENV_JWT_SECRET) or raw.get("jwt_secret") or _DEFAULT_SECRET
    if secret == _DEFAULT_SECRET:
        logger.warning("JWT secret not configured; using the insecure default")

    config = AuthConfig(
        secret=secret,
        username=os.environ.get(_ENV_USERNAME) or basic.get("username"),
        password=os.environ.get(_ENV_PASSWORD) or basic.get("password"),
        token_options=TokenOptions(**options),
        custom_verifier=custom_verifier,
    )
    logger.debug(
        "Auth config loaded from %s. basic_auth=%s, algorithm=%s, expires_in=%s",
        cfg_path,
        config.basic_auth_configured,
        config.token_options.algorithm,
        config.token_options.expires_in,
    )
    return config
