"""Exception hierarchy for statusmark.

Every failure that should stop the command derives from StatusMarkError. The
click entry point in statusmark_cli.cli catches StatusMarkError, prints the
message to stderr and exits with status 1; nothing below it calls sys.exit.

    StatusMarkError
    +-- GitCommandError
    +-- MalformedRemoteURLError
    +-- PersistenceError
    +-- RemoteAPIError
    +-- ConfigError
"""

from __future__ import annotations


class StatusMarkError(Exception):
    """Base exception for all statusmark errors."""


class GitCommandError(StatusMarkError):
    """A git invocation exited non-zero or git could not be run at all."""

    def __init__(self, args: list[str] | tuple[str, ...], detail: str):
        self.command = ["git", *args]
        self.detail = detail
        super().__init__(f"'{' '.join(self.command)}' failed: {detail}")


class MalformedRemoteURLError(StatusMarkError):
    """The remote URL could not be turned into a host/owner/repo triple."""

    def __init__(self, url: str, reason: str = "could not parse"):
        self.url = url
        super().__init__(f"Malformed remote URL {url!r}: {reason}")


class PersistenceError(StatusMarkError):
    """The status cache file could not be read or written."""


class RemoteAPIError(StatusMarkError):
    """The commit status API call failed."""


class ConfigError(StatusMarkError):
    """The configuration file or one of its values is invalid."""
