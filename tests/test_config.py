"""
Tests for YAML config loading and context construction.
"""

import re
import sys

import pytest

from fedora_setup.config import SetupConfig, load_setup_config
from fedora_setup.context import Profile, build_context, new_run_id
from fedora_setup.errors import ConfigurationError


def test_missing_default_config_is_empty(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    cfg = load_setup_config()
    assert cfg.raw == {}
    assert cfg.state_file is None
    assert cfg.skip_network_check is False


def test_missing_explicit_config_is_error(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        load_setup_config(str(tmp_path / "nope.yaml"))


def test_config_must_be_yaml(tmp_path):
    p = tmp_path / "config.json"
    p.write_text("{}")
    with pytest.raises(ConfigurationError, match="YAML"):
        load_setup_config(str(p))


def test_invalid_yaml_is_error(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("paths: [unclosed\n")
    with pytest.raises(ConfigurationError):
        load_setup_config(str(p))


def test_config_must_be_mapping(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("- a\n- b\n")
    with pytest.raises(ConfigurationError, match="mapping"):
        load_setup_config(str(p))


def test_paths_are_read(tmp_path):
    p = tmp_path / "config.yml"
    p.write_text(
        "paths:\n"
        "  state_file: /srv/state.txt\n"
        "  backup_root: /srv/backups\n"
        "  log_dir: /srv/logs\n"
        "skip_network_check: true\n"
    )
    cfg = load_setup_config(str(p))
    assert cfg.state_file == "/srv/state.txt"
    assert cfg.backup_root == "/srv/backups"
    assert cfg.log_dir == "/srv/logs"
    assert cfg.skip_network_check is True


class TestBuildContext:
    def test_profile_names_are_case_insensitive(self):
        assert Profile.parse(" Gaming ") is Profile.GAMING

    def test_unknown_profile_lists_choices(self):
        with pytest.raises(ConfigurationError) as exc:
            build_context(profile="server")
        assert "server" in str(exc.value)
        assert "minimal, dev, gaming, full" in str(exc.value)

    def test_cli_values_override_config(self, tmp_path):
        cfg = SetupConfig(raw={"paths": {"state_file": "/cfg/state.txt", "backup_root": "/cfg/backups", "log_dir": "/cfg/logs"}})
        ctx = build_context(
            profile="dev",
            config=cfg,
            state_file=str(tmp_path / "state.txt"),
            run_id="20260101_000000",
            home=str(tmp_path),
        )
        assert ctx.state_file == tmp_path / "state.txt"
        assert str(ctx.backup_root) == "/cfg/backups"
        assert str(ctx.log_file) == "/cfg/logs/fedora-setup-20260101_000000.log"

    def test_defaults_follow_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        ctx = build_context(profile="full", run_id="20260101_000000", home=str(tmp_path))
        assert ctx.state_file == tmp_path / ".config/fedora-setup/state.txt"
        assert ctx.backup_dir == tmp_path / ".config/fedora-setup-backups/20260101_000000"
        assert str(ctx.log_file) == "/tmp/fedora-setup-20260101_000000.log"
        assert ctx.zshrc == tmp_path / ".zshrc"
        assert not ctx.dry_run and not ctx.force

    def test_run_id_is_timestamp(self):
        assert re.fullmatch(r"\d{8}_\d{6}", new_run_id())


@pytest.mark.parametrize("body", ["paths: /srv\n", "paths:\n  - /srv\n"])
def test_paths_must_be_mapping(tmp_path, body):
    p = tmp_path / "config.yaml"
    p.write_text(body)
    with pytest.raises(ConfigurationError, match="paths"):
        load_setup_config(str(p))


def test_missing_pyyaml_is_configuration_error(tmp_path, monkeypatch):
    p = tmp_path / "config.yaml"
    p.write_text("skip_network_check: true\n")
    monkeypatch.setitem(sys.modules, "yaml", None)
    with pytest.raises(ConfigurationError, match="PyYAML"):
        load_setup_config(str(p))
