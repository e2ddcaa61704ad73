"""CLI entry point for statusmark.

Prints a single glyph for the CI commit status of a revision:

  ?  unknown (no status reported yet)
  ●  pending
  ✗  failure
  ✓  success
"""

from __future__ import annotations

import importlib.metadata
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.text import Text

from statusmark_core.errors import StatusMarkError
from statusmark_store.policy import StatusPolicy


def render_status(status: str, policy: StatusPolicy, color: bool = True) -> None:
    """Write the glyph for ``status`` to stdout, without a trailing newline."""
    style = policy.lookup(status)
    # force_terminal keeps the colors when stdout is captured by a shell prompt.
    console = Console(force_terminal=color, no_color=not color, highlight=False)
    console.print(Text(style.glyph, style=style.color or ""), end="")


@click.command()
@click.version_option(
    version=importlib.metadata.version("statusmark"),
    prog_name="statusmark",
)
@click.argument("revision", default="HEAD")
@click.option("--cached", is_flag=True, help="Output the cached status without checking freshness.")
@click.option("--update", is_flag=True, help="Fetch the status from GitHub even if the cache is fresh.")
@click.option(
    "--config",
    "config_path",
    default=None,
    help="Path to the configuration file. [default: <repo-root>/.statusmark.yml]",
    envvar="STATUSMARK_CONFIG",
)
@click.option("--color/--no-color", default=None, help="Wrap the glyph in ANSI colors. Overrides config file.")
@click.option("--verbose", "-v", is_flag=True, help="Log cache and API decisions to stderr.")
def main(revision: str, cached: bool, update: bool, config_path: str | None, color: bool | None, verbose: bool):
    """Show the GitHub commit status of REVISION (default: HEAD) as a glyph."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    from statusmark_cli.lookup import lookup_status
    from statusmark_core import git
    from statusmark_core.config import CONFIG_FILE_NAME, load_config, ttl_overrides
    from statusmark_store.json_file import JSONFileStore, cache_path_for
    from statusmark_store.policy import DEFAULT_POLICY

    try:
        repo_root = git.show_toplevel()
        config = load_config(
            config_path or Path(repo_root) / CONFIG_FILE_NAME,
            cli_overrides={"color": color},
            required=config_path is not None,
        )
        policy = DEFAULT_POLICY.with_ttls(ttl_overrides(config))
        status = lookup_status(
            revision,
            config=config,
            policy=policy,
            cached=cached,
            update=update,
            store=JSONFileStore(cache_path_for(repo_root)),
        )
    except StatusMarkError as e:
        raise click.ClickException(str(e)) from e

    render_status(status, policy, color=config["color"])
