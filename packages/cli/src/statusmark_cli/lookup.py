"""Revision status lookup: cache first, GitHub when the cache is stale."""

from __future__ import annotations

import logging
import time
from typing import Optional

from statusmark_cli.auth import resolve_github_token
from statusmark_core import git
from statusmark_core.gh.statuses import get_client, get_latest_state
from statusmark_core.remote import normalize_remote_url
from statusmark_store.base import BaseStore
from statusmark_store.json_file import JSONFileStore, cache_path_for
from statusmark_store.models import RevisionEntry, normalize_status
from statusmark_store.policy import DEFAULT_POLICY, StatusPolicy, is_valid

logger = logging.getLogger(__name__)


def fetch_status(sha: str, config: dict, cwd: Optional[str] = None) -> str:
    """Ask the remote for the current status of ``sha``."""
    identity = normalize_remote_url(git.remote_url(config["remote"], cwd=cwd))
    token = resolve_github_token(identity, cwd=cwd)
    client = get_client(
        identity,
        token=token,
        timeout=config["timeout"],
        verify_ssl=config["verify_ssl"],
    )
    return normalize_status(get_latest_state(client, identity, sha))


def lookup_status(
    revision: str = "HEAD",
    *,
    config: dict,
    policy: StatusPolicy = DEFAULT_POLICY,
    cached: bool = False,
    update: bool = False,
    store: Optional[BaseStore] = None,
    now: Optional[int] = None,
    cwd: Optional[str] = None,
) -> str:
    """Return the status of ``revision``, refreshing the cache when needed.

    ``update`` always performs a live lookup. Otherwise ``cached`` accepts
    whatever the cache holds, and without either flag the entry is used only
    while the policy considers it fresh. The cache is written only after a
    live lookup.
    """
    sha = git.rev_parse(revision, cwd=cwd)
    if store is None:
        store = JSONFileStore(cache_path_for(git.show_toplevel(cwd=cwd)))

    state = store.load()
    entry = state.get(sha)
    if now is None:
        now = int(time.time())

    if update:
        use_cache = False
    elif cached:
        use_cache = True
    else:
        use_cache = is_valid(entry, now, policy)

    if use_cache:
        logger.debug("Cache hit for %s: %r", sha, entry.status)
        return entry.status

    logger.debug("Cache miss for %s, querying remote.", sha)
    status = fetch_status(sha, config, cwd=cwd)
    state.put(sha, RevisionEntry(status=status, last_modified=now))
    store.save(state)
    return status
