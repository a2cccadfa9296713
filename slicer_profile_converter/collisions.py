"""Handling of conversions that resolve to the same output name in one batch."""

import logging
from typing import Any, Iterator

from .models import CollisionPolicy

logger = logging.getLogger(__name__)


def resolve_collision(
    name: str,
    new: dict[str, Any],
    store: dict[str, dict[str, Any]],
    policy: CollisionPolicy = CollisionPolicy.SKIP,
) -> dict[str, Any]:
    """
    Decide what to store under ``name`` given the existing store contents.

    - first insertion: the new profile, whatever the policy
    - ``skip``: the existing profile is kept
    - ``overwrite``: the new profile replaces it
    - ``merge``: new keys on top of existing ones
    """
    existing = store.get(name)
    if existing is None:
        return new
    logger.debug("Output name collision on %r, policy=%s", name, policy.value)
    if policy == CollisionPolicy.SKIP:
        return existing
    if policy == CollisionPolicy.MERGE:
        return {**existing, **new}
    return new


class OutputStore:
    """Batch-scoped mapping of output name -> converted profile."""

    def __init__(self, policy: CollisionPolicy = CollisionPolicy.SKIP) -> None:
        self.policy = policy
        self._profiles: dict[str, dict[str, Any]] = {}

    def put(self, name: str, profile: dict[str, Any]) -> dict[str, Any]:
        """Store ``profile`` under ``name`` through the collision policy."""
        stored = resolve_collision(name, profile, self._profiles, self.policy)
        self._profiles[name] = stored
        return stored

    def get(self, name: str) -> dict[str, Any] | None:
        return self._profiles.get(name)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return dict(self._profiles)

    def __contains__(self, name: object) -> bool:
        return name in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def __iter__(self) -> Iterator[str]:
        return iter(self._profiles)
