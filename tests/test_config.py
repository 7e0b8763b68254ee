"""
Tests for configuration loading — config.yml parsing and env overrides.
"""

import textwrap
from pathlib import Path

import pytest

from hone.core.config.loader import ConfigError, default_config_path, find_config_file, load_config
from hone.core.models.config import HoneConfig


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("HONE_CONFIG", raising=False)
    monkeypatch.delenv("HONE_CACHE_DIR", raising=False)


class TestDefaults:
    def test_no_file_gives_defaults(self):
        config = load_config()
        assert config.registry_url == "https://aur.archlinux.org/rpc/"
        assert config.debug_suffixes == ["-debug"]
        assert config.makepkg_flags == ["-risc"]

    def test_paths(self, tmp_path: Path):
        config = HoneConfig(cache_root=tmp_path)
        assert config.manifest_path == tmp_path / "Installed" / "package_list.txt"
        assert config.workspace_for("yay") == tmp_path / "yay"
        assert config.clone_url_for("yay") == "https://aur.archlinux.org/yay.git"

    def test_default_path_follows_xdg(self, tmp_path: Path):
        assert default_config_path() == tmp_path / "xdg" / "hone" / "config.yml"


class TestLoadFile:
    def test_explicit_file(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text(textwrap.dedent("""\
            cache_root: /var/tmp/hone
            debug_suffixes: ["-debug", "-dbg"]
            makepkg_flags: ["-si"]
        """))
        config = load_config(path)
        assert config.cache_root == Path("/var/tmp/hone")
        assert config.debug_suffixes == ["-debug", "-dbg"]
        assert config.makepkg_flags == ["-si"]

    def test_wrapped_under_hone_key(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("hone:\n  request_timeout: 5\n")
        assert load_config(path).request_timeout == 5

    def test_default_location_is_used(self, tmp_path: Path):
        path = tmp_path / "xdg" / "hone" / "config.yml"
        path.parent.mkdir(parents=True)
        path.write_text("user_agent: custom/1.0\n")
        assert find_config_file() == path
        assert load_config().user_agent == "custom/1.0"

    def test_env_config_path(self, tmp_path: Path, monkeypatch):
        path = tmp_path / "elsewhere.yml"
        path.write_text("pacman: /usr/bin/pacman\n")
        monkeypatch.setenv("HONE_CONFIG", str(path))
        assert load_config().pacman == "/usr/bin/pacman"

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("")
        assert load_config(path).sudo == "sudo"

    def test_cache_dir_env_override(self, tmp_path: Path, monkeypatch):
        path = tmp_path / "config.yml"
        path.write_text("cache_root: /from/file\n")
        monkeypatch.setenv("HONE_CACHE_DIR", str(tmp_path / "env-cache"))
        assert load_config(path).cache_root == tmp_path / "env-cache"

    def test_tilde_expanded(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("cache_root: ~/somewhere\n")
        assert load_config(path).cache_root == Path.home() / "somewhere"


class TestErrors:
    def test_missing_explicit_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("cache_root: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_bad_value(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("request_timeout: soon\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)
