"""Remote URL normalization.

Turns whatever is configured as a git remote (https, ssh://, git://, or the
scp-like ``git@host:owner/repo.git`` form) into a RemoteIdentity that knows
which API endpoint to talk to.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from statusmark_core.errors import MalformedRemoteURLError

PUBLIC_HOST = "github.com"
PUBLIC_API_BASE_URL = "https://api.github.com"

_SCHEME_RE = re.compile(r"^[\w+]+://")


@dataclass(frozen=True)
class RemoteIdentity:
    host: str
    owner: str
    repo: str
    url: str  # normalized https URL, used for URL-scoped git config lookups

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def is_enterprise(self) -> bool:
        return self.host != PUBLIC_HOST

    @property
    def api_base_url(self) -> str:
        if self.is_enterprise:
            return f"https://{self.host}/api/v3"
        return PUBLIC_API_BASE_URL


def normalize_remote_url(raw_url: str) -> RemoteIdentity:
    """Parse a git remote URL into a RemoteIdentity.

    Raises MalformedRemoteURLError if the URL has no host or fewer than two
    path segments.
    """
    url = _SCHEME_RE.sub("https://", raw_url.strip(), count=1)
    if not url.startswith("https://"):
        url = "https://" + url.replace(":", "/", 1)
    url = url.removesuffix(".git")

    try:
        parts = urlsplit(url)
        host = parts.hostname
    except ValueError as e:
        raise MalformedRemoteURLError(raw_url, str(e)) from e
    if not host:
        raise MalformedRemoteURLError(raw_url, "no host")

    segments = [s for s in parts.path.split("/") if s]
    if len(segments) < 2:
        raise MalformedRemoteURLError(raw_url, "expected an owner and a repository in the path")

    return RemoteIdentity(host=host, owner=segments[0], repo=segments[1], url=url)
