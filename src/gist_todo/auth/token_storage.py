# src/gist_todo/auth/token_storage.py

from __future__ import annotations

import contextlib
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class FileTokenStorage:
    """
    GitHub token kept in a single private file under the data dir.

    Writes go through a temp file + os.replace so a crash never leaves half a token.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get_token(self) -> str | None:
        if not self._path.exists():
            return None
        try:
            token = self._path.read_text("utf-8").strip()
        except OSError:
            logger.warning("Failed to read token file %s", self._path, exc_info=True)
            return None
        return token or None

    def store_token(self, token: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(token.strip(), "utf-8")
        with contextlib.suppress(OSError):
            os.chmod(tmp, 0o600)
        os.replace(tmp, self._path)
        logger.info("Stored GitHub token at %s", self._path)

    def clear_token(self) -> None:
        with contextlib.suppress(FileNotFoundError):
            self._path.unlink()
            logger.info("Removed GitHub token at %s", self._path)
