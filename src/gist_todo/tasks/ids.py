# src/gist_todo/tasks/ids.py

"""
Task identifiers.

Ids are 12 lowercase hex characters (48 bits from uuid4). Users refer to tasks
by a prefix of at least MIN_PREFIX_LENGTH characters.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable

from ..errors import AmbiguousPrefixError, InvalidArgumentError, TaskNotFoundError

ID_LENGTH = 12
MIN_PREFIX_LENGTH = 3


def generate_id() -> str:
    return uuid.uuid4().hex[:ID_LENGTH]


def resolve_prefix(prefix: str, known_ids: Iterable[str]) -> str:
    """
    Resolve a user-typed prefix to the one full id it identifies.

    Raises:
    - InvalidArgumentError: prefix empty or shorter than MIN_PREFIX_LENGTH
    - TaskNotFoundError: nothing matches
    - AmbiguousPrefixError: more than one id matches
    """
    prefix = (prefix or "").strip()
    if not prefix:
        raise InvalidArgumentError("Prefix cannot be empty.")
    if len(prefix) < MIN_PREFIX_LENGTH:
        raise InvalidArgumentError(
            f"Prefix must be at least {MIN_PREFIX_LENGTH} characters long."
        )

    needle = prefix.lower()
    matches = [i for i in known_ids if i.lower().startswith(needle)]

    if not matches:
        raise TaskNotFoundError(f"No task found with id prefix '{prefix}'.")
    if len(matches) > 1:
        raise AmbiguousPrefixError(
            f"Id prefix '{prefix}' matches {len(matches)} tasks. Please use more characters."
        )
    return matches[0]
