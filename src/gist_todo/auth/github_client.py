# src/gist_todo/auth/github_client.py

from __future__ import annotations

import logging
from typing import Any

import httpx

from .. import __version__
from ..remote.gist_client import make_timeout
from .auth_models import TokenErrorKind, TokenValidation

logger = logging.getLogger(__name__)


def _is_rate_limited(response: httpx.Response) -> bool:
    if response.status_code == 429:
        return True
    return response.status_code == 403 and response.headers.get("x-ratelimit-remaining") == "0"


class GitHubAuthClient:
    """Validates a personal access token against the GitHub API."""

    def __init__(
        self,
        *,
        api_url: str = "https://api.github.com",
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = make_timeout(timeout_seconds)
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Any) -> GitHubAuthClient:
        return cls(api_url=settings.github_api_url, timeout_seconds=settings.http_timeout_seconds)

    async def validate_token(self, token: str) -> TokenValidation:
        """
        Check the token in two steps:
        1) GET /user   -> is the token accepted at all?
        2) GET /gists  -> does it carry the gist scope?
        """
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "User-Agent": f"gist-todo/{__version__}",
        }
        try:
            async with httpx.AsyncClient(
                base_url=self._api_url,
                timeout=self._timeout,
                transport=self._transport,
                headers=headers,
            ) as client:
                user = await client.get("/user")
                if user.status_code == 401:
                    return TokenValidation.failed(
                        TokenErrorKind.INVALID_TOKEN,
                        "Invalid GitHub token. Please check your personal access token.",
                    )
                if _is_rate_limited(user):
                    return TokenValidation.failed(
                        TokenErrorKind.RATE_LIMITED, "GitHub API rate limit reached. Try again later."
                    )
                if user.is_error:
                    return TokenValidation.failed(
                        TokenErrorKind.SERVER_ERROR, f"GitHub API error: {user.status_code}"
                    )

                gists = await client.get("/gists", params={"per_page": 1})
                if _is_rate_limited(gists):
                    return TokenValidation.failed(
                        TokenErrorKind.RATE_LIMITED, "GitHub API rate limit reached. Try again later."
                    )
                if gists.is_error:
                    return TokenValidation.failed(
                        TokenErrorKind.INSUFFICIENT_PERMISSIONS,
                        "Token does not have gist permissions. "
                        "Please ensure your personal access token includes 'gist' scope.",
                    )
        except httpx.TimeoutException:
            logger.info("Token validation timed out")
            return TokenValidation.failed(TokenErrorKind.NETWORK_ERROR, "Timed out talking to GitHub.")
        except httpx.TransportError as e:
            logger.info("Token validation network error: %s", e)
            return TokenValidation.failed(TokenErrorKind.NETWORK_ERROR, f"Network error: {e}")

        logger.debug("Token validated against %s", self._api_url)
        return TokenValidation.ok()
