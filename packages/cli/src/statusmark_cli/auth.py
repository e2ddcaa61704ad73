"""GitHub token resolution for the commit status API.

Resolution order (stops at first success):
  1. GITHUB_COMMIT_STATUS_MARK_TOKEN environment variable
  2. The netrc entry for the API host (github.com is looked up as api.github.com)
  3. `git config --get-urlmatch github.token <remote-url>`

An empty string means no token was found; the API is then called anonymously.
"""

from __future__ import annotations

import logging
import netrc
import os
from pathlib import Path

from statusmark_core import git
from statusmark_core.remote import PUBLIC_HOST, RemoteIdentity

logger = logging.getLogger(__name__)

TOKEN_ENV_VAR = "GITHUB_COMMIT_STATUS_MARK_TOKEN"
GIT_CONFIG_KEY = "github.token"

# The web host and the API host differ for the public service only.
_NETRC_HOST_ALIASES = {PUBLIC_HOST: "api.github.com"}


def _netrc_path() -> Path:
    override = os.environ.get("NETRC")
    if override:
        return Path(override)
    return Path.home() / ".netrc"


def token_from_netrc(host: str, path: str | Path | None = None) -> str | None:
    """Return the password of the netrc ``machine`` entry for host.

    Only an exact machine match counts; the ``default`` entry is ignored. A
    missing or unparseable netrc file yields None.
    """
    path = Path(path) if path is not None else _netrc_path()
    machine = _NETRC_HOST_ALIASES.get(host, host)
    try:
        entries = netrc.netrc(str(path))
    except FileNotFoundError:
        return None
    except (netrc.NetrcParseError, OSError) as e:
        logger.warning("Ignoring unreadable netrc file %s: %s", path, e)
        return None

    # authenticators() would fall back to the default entry; hosts holds exact matches only.
    entry = entries.hosts.get(machine)
    if entry is None:
        return None
    _login, _account, password = entry
    return password or None


def resolve_github_token(identity: RemoteIdentity, cwd: str | None = None) -> str:
    """Return an API token for identity, or an empty string for anonymous access."""
    token = os.environ.get(TOKEN_ENV_VAR)
    if token:
        logger.debug("Using token from %s.", TOKEN_ENV_VAR)
        return token

    token = token_from_netrc(identity.host)
    if token:
        logger.debug("Using token from netrc for %s.", identity.host)
        return token

    token = git.config_get_urlmatch(GIT_CONFIG_KEY, identity.url, cwd=cwd)
    if token:
        logger.debug("Using token from git config %s.", GIT_CONFIG_KEY)
        return token

    logger.debug("No token found for %s; requests will be anonymous.", identity.host)
    return ""
