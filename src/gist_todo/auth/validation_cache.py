# src/gist_todo/auth/validation_cache.py

"""
Token validation cache.

Remembers that a token was validated against GitHub recently, so the CLI can
answer "am I authenticated?" without a network round trip. Only a SHA-256
fingerprint of the token is written to disk.
"""

from __future__ import annotations

import contextlib
import hashlib
import json
import logging
import os
import time
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def token_fingerprint(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class ValidationCache:
    def __init__(
        self,
        path: str | Path,
        *,
        clock: Clock = time.time,
        ttl_seconds: float = 3600.0,
    ) -> None:
        self._path = Path(path)
        self._clock = clock
        self._ttl = float(ttl_seconds)

    def _load(self) -> dict[str, object]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.debug("Validation cache unreadable at %s; ignoring it.", self._path, exc_info=True)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, token: str) -> bool:
        """True if `token` was validated less than ttl seconds ago."""
        if not token:
            return False
        data = self._load()
        if data.get("fingerprint") != token_fingerprint(token):
            return False
        validated_at = data.get("validated_at")
        if not isinstance(validated_at, (int, float)):
            return False
        age = self._clock() - float(validated_at)
        return 0.0 <= age < self._ttl

    def put(self, token: str) -> None:
        payload = {"fingerprint": token_fingerprint(token), "validated_at": self._clock()}
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(json.dumps(payload), "utf-8")
        os.replace(tmp, self._path)
        with contextlib.suppress(OSError):
            os.chmod(self._path, 0o600)

    def invalidate(self) -> None:
        with contextlib.suppress(FileNotFoundError):
            self._path.unlink()
