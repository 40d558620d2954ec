# src/gist_todo/auth/auth_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TokenErrorKind(StrEnum):
    """Why a token failed validation against GitHub."""

    INVALID_TOKEN = "invalid_token"
    INSUFFICIENT_PERMISSIONS = "insufficient_permissions"
    RATE_LIMITED = "rate_limited"
    NETWORK_ERROR = "network_error"
    SERVER_ERROR = "server_error"


@dataclass(frozen=True, slots=True)
class TokenValidation:
    is_valid: bool
    error_kind: TokenErrorKind | None = None
    message: str = ""

    @classmethod
    def ok(cls) -> TokenValidation:
        return cls(is_valid=True)

    @classmethod
    def failed(cls, kind: TokenErrorKind, message: str) -> TokenValidation:
        return cls(is_valid=False, error_kind=kind, message=message)


@dataclass(frozen=True, slots=True)
class AuthResult:
    success: bool
    message: str
