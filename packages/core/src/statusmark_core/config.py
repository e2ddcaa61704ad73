from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml

from statusmark_core.errors import ConfigError

CONFIG_FILE_NAME = ".statusmark.yml"

DEFAULT_CONFIG: dict = {
    "remote": "origin",
    "timeout": 15,  # seconds, per API request
    "verify_ssl": None,  # None = verify github.com, skip verification for enterprise hosts
    "color": True,
    "ttl": {},  # status name -> seconds or "forever"; "unknown" names the empty status
}

TTL_STATUS_NAMES = ("unknown", "pending", "failure", "success")
FOREVER_VALUES = ("forever", None)


def load_config(
    config_path: str | Path = CONFIG_FILE_NAME,
    cli_overrides: Optional[dict] = None,
    required: bool = False,
) -> dict:
    """Return the statusmark settings for one invocation.

    Values in the YAML file at ``config_path`` replace DEFAULT_CONFIG entries,
    and non-None ``cli_overrides`` (currently only ``color``) replace both.
    A missing file means defaults, unless ``required`` is set because the user
    named the path explicitly. The merged result is validated before it is
    returned; any problem raises ConfigError.
    """
    config = {**DEFAULT_CONFIG, "ttl": dict(DEFAULT_CONFIG["ttl"])}

    path = Path(config_path)
    if required and not path.exists():
        raise ConfigError(f"Config file {path} does not exist.")
    if path.exists():
        try:
            with open(path) as f:
                file_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Could not load config file {path}: {e}") from e
        if not isinstance(file_config, dict):
            raise ConfigError(f"Config file {path} must contain a mapping.")
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    _validate(config)
    return config


def ttl_overrides(config: dict) -> dict[str, Optional[int]]:
    """Return configured TTLs keyed by status name, None meaning forever.

    The "unknown" name is translated to the empty status string used in the
    cache file.
    """
    overrides = {}
    for name, value in (config.get("ttl") or {}).items():
        status = "" if name == "unknown" else name
        overrides[status] = None if value in FOREVER_VALUES else value
    return overrides


def _validate(config: dict) -> None:
    if not isinstance(config["remote"], str) or not config["remote"]:
        raise ConfigError("'remote' must be a non-empty string.")

    timeout = config["timeout"]
    if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0):
        raise ConfigError(f"'timeout' must be a positive number, got {timeout!r}.")

    if config["verify_ssl"] not in (None, True, False):
        raise ConfigError(f"'verify_ssl' must be true, false or null, got {config['verify_ssl']!r}.")

    if not isinstance(config["color"], bool):
        raise ConfigError(f"'color' must be true or false, got {config['color']!r}.")

    ttl = config["ttl"] or {}
    if not isinstance(ttl, dict):
        raise ConfigError("'ttl' must be a mapping of status name to seconds.")
    for name, value in ttl.items():
        if name not in TTL_STATUS_NAMES:
            raise ConfigError(f"Unknown status {name!r} in 'ttl'. Choose from: {', '.join(TTL_STATUS_NAMES)}.")
        if value in FOREVER_VALUES:
            continue
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigError(f"TTL for {name!r} must be a non-negative integer or 'forever', got {value!r}.")
