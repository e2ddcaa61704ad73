"""Per-status display and cache expiration policy.

A StatusPolicy is built once (defaults plus any configured TTL overrides) and
handed to both the cache validity check and the glyph renderer.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Mapping, Optional

from statusmark_store.models import (
    STATUS_FAILURE,
    STATUS_PENDING,
    STATUS_SUCCESS,
    STATUS_UNKNOWN,
    RevisionEntry,
)

FOREVER = None


@dataclass(frozen=True)
class StatusStyle:
    glyph: str
    color: Optional[str]  # rich color name, None for the terminal default
    ttl: Optional[int]  # seconds, FOREVER for outcomes that never change


class StatusPolicy:
    """Immutable status -> StatusStyle table with an explicit unknown fallback."""

    def __init__(self, styles: Mapping[str, StatusStyle]):
        if STATUS_UNKNOWN not in styles:
            raise ValueError("A status policy must define the unknown status.")
        self._styles = MappingProxyType(dict(styles))

    def lookup(self, status: str) -> StatusStyle:
        if status in self._styles:
            return self._styles[status]
        # Statuses the policy has no style for (e.g. the API's "error") render as unknown.
        return self._styles[STATUS_UNKNOWN]

    def ttl(self, status: str) -> Optional[int]:
        return self.lookup(status).ttl

    def with_ttls(self, overrides: Mapping[str, Optional[int]]) -> StatusPolicy:
        """Return a copy of this policy with the given TTLs replaced."""
        styles = dict(self._styles)
        for status, ttl in overrides.items():
            if status not in styles:
                raise ValueError(f"Unknown status in TTL overrides: {status!r}")
            styles[status] = replace(styles[status], ttl=ttl)
        return StatusPolicy(styles)

    def __eq__(self, other) -> bool:
        if not isinstance(other, StatusPolicy):
            return NotImplemented
        return dict(self._styles) == dict(other._styles)

    def __repr__(self) -> str:
        return f"StatusPolicy({dict(self._styles)!r})"


DEFAULT_POLICY = StatusPolicy(
    {
        STATUS_UNKNOWN: StatusStyle(glyph="?", color=None, ttl=30),
        STATUS_FAILURE: StatusStyle(glyph="✗", color="red", ttl=FOREVER),
        STATUS_PENDING: StatusStyle(glyph="●", color="yellow", ttl=10),
        STATUS_SUCCESS: StatusStyle(glyph="✓", color="green", ttl=FOREVER),
    }
)


def is_valid(entry: RevisionEntry, now: int, policy: StatusPolicy = DEFAULT_POLICY) -> bool:
    """Return True if a cached entry can be used without asking the remote again."""
    ttl = policy.ttl(entry.status)
    if ttl is FOREVER:
        return True
    return now < entry.last_modified + ttl
