"""JSONFileStore: the on-disk revision status cache.

The cache lives at ``<repo-root>/.github-commit-status/cache`` and holds a
single JSON document::

    {"Revisions": {"<full-hash>": {"Status": "success", "LastModified": 1700000000}}}

There is no locking between concurrent invocations. The last writer wins, and
a document that cannot be decoded is treated as an empty cache.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from statusmark_core.errors import PersistenceError
from statusmark_store.base import BaseStore
from statusmark_store.models import CacheState

logger = logging.getLogger(__name__)

CACHE_DIR_NAME = ".github-commit-status"
CACHE_FILE_NAME = "cache"


def cache_path_for(repo_root: str | Path) -> Path:
    return Path(repo_root) / CACHE_DIR_NAME / CACHE_FILE_NAME


class JSONFileStore(BaseStore):
    """Reads and writes the cache document at a fixed path."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> CacheState:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No status cache at %s, starting empty.", self.path)
            return CacheState()
        except OSError as e:
            raise PersistenceError(f"Could not read status cache {self.path}: {e}") from e
        except UnicodeDecodeError as e:
            logger.warning("Ignoring unreadable status cache %s: %s", self.path, e)
            return CacheState()

        if not text.strip():
            return CacheState()
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            # A concurrent writer may have left a torn document behind.
            logger.warning("Ignoring unreadable status cache %s: %s", self.path, e)
            return CacheState()
        return CacheState.from_dict(data)

    def save(self, state: CacheState) -> None:
        """Write the whole document via a temp file and os.replace."""
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                json.dump(state.to_dict(), tmp)
                tmp.write("\n")
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(f"Could not write status cache {self.path}: {e}") from e
        logger.debug("Saved %d revision(s) to %s", len(state.revisions), self.path)
