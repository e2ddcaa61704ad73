"""Thin wrapper around the git command line.

Only the handful of plumbing commands the status lookup needs: resolving a
revision, finding the repository root and reading config values.
"""

from __future__ import annotations

import logging
import subprocess

from statusmark_core.errors import GitCommandError

logger = logging.getLogger(__name__)

# `git config` exits 1 when the requested key is not set.
_CONFIG_KEY_NOT_FOUND = 1


def _run(args: list[str], cwd: str | None = None) -> subprocess.CompletedProcess:
    logger.debug("Running git %s", " ".join(args))
    try:
        return subprocess.run(
            ["git", *args],
            capture_output=True,
            text=True,
            cwd=cwd,
        )
    except OSError as e:
        raise GitCommandError(args, str(e)) from e


def run_git(*args: str, cwd: str | None = None) -> str:
    """Run git and return stdout without trailing newlines.

    Raises GitCommandError on a non-zero exit status.
    """
    result = _run(list(args), cwd=cwd)
    if result.returncode != 0:
        detail = result.stderr.strip() or f"exit status {result.returncode}"
        raise GitCommandError(args, detail)
    return result.stdout.rstrip("\n")


def rev_parse(revision: str = "HEAD", cwd: str | None = None) -> str:
    return run_git("rev-parse", revision, cwd=cwd)


def show_toplevel(cwd: str | None = None) -> str:
    return run_git("rev-parse", "--show-toplevel", cwd=cwd)


def remote_url(remote: str = "origin", cwd: str | None = None) -> str:
    return run_git("config", f"remote.{remote}.url", cwd=cwd)


def config_get_urlmatch(key: str, url: str, cwd: str | None = None) -> str | None:
    """Return the value of ``key`` scoped to ``url``, or None when it is unset."""
    args = ["config", "--get-urlmatch", key, url]
    result = _run(args, cwd=cwd)
    if result.returncode == _CONFIG_KEY_NOT_FOUND:
        return None
    if result.returncode != 0:
        detail = result.stderr.strip() or f"exit status {result.returncode}"
        raise GitCommandError(args, detail)
    return result.stdout.strip() or None
