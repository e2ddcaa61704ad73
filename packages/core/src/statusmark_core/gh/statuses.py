from __future__ import annotations

import logging
import warnings

import requests
from github import Auth, Github, GithubException
from urllib3.exceptions import InsecureRequestWarning

from statusmark_core.errors import RemoteAPIError
from statusmark_core.remote import RemoteIdentity

logger = logging.getLogger(__name__)


def get_client(identity: RemoteIdentity, token: str = "", timeout: float = 15, verify_ssl: bool | None = None) -> Github:
    """Build a PyGithub client addressed at the identity's API endpoint.

    Enterprise hosts are reached through ``https://<host>/api/v3`` and, unless
    ``verify_ssl`` says otherwise, without certificate verification since they
    commonly sit behind self-signed or internal CAs.
    """
    if verify_ssl is None:
        verify_ssl = not identity.is_enterprise

    # Lazy objects: only the statuses endpoint may be requested, since
    # /commits/{sha} answers 422 for commits that were never pushed.
    kwargs = {"base_url": identity.api_base_url, "timeout": timeout, "verify": verify_ssl, "lazy": True}
    if token:
        kwargs["auth"] = Auth.Token(token)

    logger.debug(
        "GitHub client for %s (authenticated=%s, verify_ssl=%s)", identity.api_base_url, bool(token), verify_ssl
    )
    return Github(**kwargs)


def get_latest_state(client: Github, identity: RemoteIdentity, sha: str) -> str | None:
    """Return the state of the most recent status on ``sha``, or None if it has none."""
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", InsecureRequestWarning)
            repo = client.get_repo(identity.full_name)
            statuses = repo.get_commit(sha).get_statuses()
            latest = next(iter(statuses), None)
    except GithubException as e:
        raise RemoteAPIError(f"Error while fetching status for {identity.full_name}@{sha}: {e}") from e
    except requests.RequestException as e:
        raise RemoteAPIError(f"Error while fetching status for {identity.full_name}@{sha}: {e}") from e

    if latest is None:
        logger.debug("No statuses reported for %s", sha)
        return None
    return latest.state
