"""
Result models shared by the verifier, session issuer and access guard.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from auth.errors import ErrorKind, message_for


class AuthResult(BaseModel):
    """
    Outcome of one credential check.
    A failure always carries a kind and a message; a success carries an
    identity and neither.
    """

    model_config = ConfigDict(frozen=True)

    authenticated: bool
    identity: Optional[Dict[str, Any]] = None
    kind: Optional[ErrorKind] = None
    error: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _fill_failure(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("authenticated"):
            return data
        data = dict(data)
        kind = ErrorKind(data.get("kind") or ErrorKind.INVALID_CREDENTIALS)
        data["kind"] = kind
        data["error"] = data.get("error") or message_for(kind)
        return data

    @model_validator(mode="after")
    def _check_success(self) -> "AuthResult":
        if self.authenticated:
            if self.kind is not None or self.error is not None:
                raise ValueError("a successful AuthResult cannot carry an error")
            if not self.identity:
                raise ValueError("a successful AuthResult requires an identity")
        return self

    @classmethod
    def success(cls, username: str) -> "AuthResult":
        return cls(authenticated=True, identity={"username": username})

    @classmethod
    def failure(cls, kind: ErrorKind, error: Optional[str] = None) -> "AuthResult":
        return cls(authenticated=False, kind=kind, error=error or message_for(kind))


class LoginResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    token: Optional[str] = None
    kind: Optional[ErrorKind] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.token is not None


class GuardDecision(BaseModel):
    """Outcome of checking one Authorization header."""

    model_config = ConfigDict(frozen=True)

    decoded_token: Optional[Dict[str, Any]] = None
    kind: Optional[ErrorKind] = None

    @property
    def allowed(self) -> bool:
        return self.kind is None and self.decoded_token is not None

    @property
    def message(self) -> Optional[str]:
        return message_for(self.kind) if self.kind is not None else None
