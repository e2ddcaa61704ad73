"""Abstract store interface.

The CLI depends on BaseStore, not on a concrete backend, so the cache file
format can change without touching the lookup orchestration.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from statusmark_store.models import CacheState


class BaseStore(ABC):
    """Persistence layer for the revision status cache."""

    @abstractmethod
    def load(self) -> CacheState:
        """Return the persisted state, or an empty state if there is none."""

    @abstractmethod
    def save(self, state: CacheState) -> None:
        """Replace the persisted state with ``state``."""
