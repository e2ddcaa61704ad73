"""Tests for configuration loading."""

import pytest

from statusmark_core.config import load_config, ttl_overrides
from statusmark_core.errors import ConfigError


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["remote"] == "origin"
    assert config["timeout"] == 15
    assert config["verify_ssl"] is None
    assert config["color"] is True
    assert config["ttl"] == {}


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".statusmark.yml"
    cfg.write_text("remote: upstream\ntimeout: 3\nverify_ssl: true\n")
    config = load_config(config_path=str(cfg))
    assert config["remote"] == "upstream"
    assert config["timeout"] == 3
    assert config["verify_ssl"] is True


def test_empty_config_file_uses_defaults(tmp_path):
    cfg = tmp_path / ".statusmark.yml"
    cfg.write_text("")
    assert load_config(config_path=str(cfg))["remote"] == "origin"


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / ".statusmark.yml"
    cfg.write_text("color: true\n")
    config = load_config(config_path=str(cfg), cli_overrides={"color": False})
    assert config["color"] is False


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / ".statusmark.yml"
    cfg.write_text("color: false\n")
    config = load_config(config_path=str(cfg), cli_overrides={"color": None})
    assert config["color"] is False


def test_ttl_overrides_translate_unknown_and_forever(tmp_path):
    cfg = tmp_path / ".statusmark.yml"
    cfg.write_text("ttl:\n  unknown: 60\n  pending: forever\n  success: 3600\n")
    config = load_config(config_path=str(cfg))
    assert ttl_overrides(config) == {"": 60, "pending": None, "success": 3600}


def test_ttl_list_is_not_shared_reference(tmp_path):
    config_a = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_b = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_a["ttl"]["pending"] = 1
    assert config_b["ttl"] == {}


@pytest.mark.parametrize(
    "content",
    [
        "- just\n- a list\n",
        "timeout: -1\n",
        "timeout: fast\n",
        "verify_ssl: maybe\n",
        "color: 1\n",
        "remote: ''\n",
        "ttl: 5\n",
        "ttl:\n  error: 5\n",
        "ttl:\n  pending: -5\n",
        "ttl:\n  pending: soon\n",
        "ttl: [unclosed\n",
    ],
)
def test_invalid_config_raises(tmp_path, content):
    cfg = tmp_path / ".statusmark.yml"
    cfg.write_text(content)
    with pytest.raises(ConfigError):
        load_config(config_path=str(cfg))


def test_required_config_file_must_exist(tmp_path):
    with pytest.raises(ConfigError) as exc_info:
        load_config(config_path=str(tmp_path / "missing.yml"), required=True)
    assert "missing.yml" in str(exc_info.value)


def test_required_config_file_is_loaded_when_present(tmp_path):
    cfg = tmp_path / "custom.yml"
    cfg.write_text("remote: upstream\n")
    assert load_config(config_path=str(cfg), required=True)["remote"] == "upstream"
