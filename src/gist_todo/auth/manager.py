# src/gist_todo/auth/manager.py

"""
Credential provider.

Two separate capabilities:
- is_authenticated() / get_credential(): synchronous, cache lookup only, never
  touches the network;
- ensure_authenticated() / authenticate(): coroutines that talk to GitHub and
  refresh the validation cache.
"""

from __future__ import annotations

import logging

from ..errors import InvalidArgumentError
from .auth_models import AuthResult, TokenErrorKind, TokenValidation
from .github_client import GitHubAuthClient
from .token_storage import FileTokenStorage
from .validation_cache import ValidationCache

logger = logging.getLogger(__name__)


def _failure_message(validation: TokenValidation) -> str:
    match validation.error_kind:
        case TokenErrorKind.NETWORK_ERROR:
            return "Network connection failed. Please check your internet connection."
        case TokenErrorKind.INSUFFICIENT_PERMISSIONS:
            return "Token lacks required permissions. Ensure 'gist' scope is enabled."
        case TokenErrorKind.INVALID_TOKEN:
            return "Invalid token. Please check your GitHub token."
        case TokenErrorKind.RATE_LIMITED | TokenErrorKind.SERVER_ERROR | None:
            return validation.message or "Token validation failed."


class AuthManager:
    def __init__(
        self,
        storage: FileTokenStorage,
        github: GitHubAuthClient,
        cache: ValidationCache,
    ) -> None:
        self._storage = storage
        self._github = github
        self._cache = cache

    def is_authenticated(self) -> bool:
        return self.get_credential() is not None

    def get_credential(self) -> str | None:
        token = self._storage.get_token()
        if token and self._cache.get(token):
            return token
        return None

    def has_token(self) -> bool:
        return self._storage.get_token() is not None

    def stored_token(self) -> str | None:
        return self._storage.get_token()

    async def ensure_authenticated(self) -> TokenValidation:
        """
        Cache hit, or validate the stored token against GitHub now.

        A definitive rejection (invalid token / missing scope) invalidates the cache;
        network trouble leaves it as is and is reported with its own kind.
        """
        token = self._storage.get_token()
        if not token:
            return TokenValidation.failed(TokenErrorKind.INVALID_TOKEN, "No GitHub token stored.")
        if self._cache.get(token):
            return TokenValidation.ok()

        validation = await self._github.validate_token(token)
        if validation.is_valid:
            self._cache.put(token)
            logger.info("Stored token re-validated.")
            return validation

        logger.warning("Stored token failed validation kind=%s: %s", validation.error_kind, validation.message)
        if validation.error_kind in (TokenErrorKind.INVALID_TOKEN, TokenErrorKind.INSUFFICIENT_PERMISSIONS):
            self._cache.invalidate()
        return validation

    async def authenticate(self, token: str) -> AuthResult:
        if not token or not token.strip():
            raise InvalidArgumentError("Token cannot be empty.")
        token = token.strip()

        validation = await self._github.validate_token(token)
        if not validation.is_valid:
            logger.info("Authentication failed kind=%s", validation.error_kind)
            return AuthResult(success=False, message=_failure_message(validation))

        self._storage.store_token(token)
        self._cache.put(token)
        return AuthResult(success=True, message="Authentication successful.")

    def clear_authentication(self) -> None:
        self._storage.clear_token()
        self._cache.invalidate()
