"""Config 测试"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

import repoget.core.config as cfgmod
from repoget.core.config import Config, get_config, init_config
from repoget.core.exceptions import ConfigError


class TestConfig:
    def test_defaults_when_file_missing(self, tmp_path: Path) -> None:
        cfg = Config.from_file(str(tmp_path / "nope.yml"))
        assert cfg.roots == [cfgmod.DEFAULT_ROOT]
        assert cfg.user == ""
        assert cfg.parallel == 1

    def test_load_yaml(self, tmp_path: Path) -> None:
        f = tmp_path / "config.yml"
        f.write_text(
            "roots:\n  - /srv/repos\n  - /mnt/repos\nuser: octocat\nshallow: true\ncolor: auto\n",
            encoding="utf-8",
        )
        cfg = Config.from_file(str(f))
        assert cfg.roots == ["/srv/repos", "/mnt/repos"]
        assert cfg.user == "octocat"
        assert cfg.shallow is True
        assert cfg.extra == {"color": "auto"}

    def test_single_root_string(self, tmp_path: Path) -> None:
        f = tmp_path / "config.yml"
        f.write_text("roots: /srv/repos\n", encoding="utf-8")
        assert Config.from_file(str(f)).roots == ["/srv/repos"]

    def test_invalid_roots_type(self, tmp_path: Path) -> None:
        f = tmp_path / "config.yml"
        f.write_text("roots: 42\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="roots"):
            Config.from_file(str(f))

    def test_empty_values_use_defaults(self, tmp_path: Path) -> None:
        f = tmp_path / "config.yml"
        f.write_text("roots:\nuser:\n", encoding="utf-8")
        cfg = Config.from_file(str(f))
        assert cfg.roots == [cfgmod.DEFAULT_ROOT]
        assert cfg.user == ""
        assert cfg.local_roots()

    def test_broken_yaml(self, tmp_path: Path) -> None:
        f = tmp_path / "config.yml"
        f.write_text("roots: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            Config.from_file(str(f))

    def test_env_overrides(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(cfgmod.ENV_ROOT, os.pathsep.join(["/x", "/y"]))
        monkeypatch.setenv(cfgmod.ENV_USER, "someone")
        cfg = Config.from_file(str(tmp_path / "nope.yml"))
        assert cfg.roots == ["/x", "/y"]
        assert cfg.user == "someone"

    def test_env_config_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        f = tmp_path / "custom.yml"
        f.write_text("user: fromenv\n", encoding="utf-8")
        monkeypatch.setenv(cfgmod.ENV_CONFIG, str(f))
        assert Config.from_file().user == "fromenv"

    def test_local_roots_normalized(self, tmp_path: Path) -> None:
        real = tmp_path / "real"
        real.mkdir()
        link = tmp_path / "link"
        link.symlink_to(real)
        cfg = Config(roots=[str(link), str(real), ""])
        assert cfg.local_roots() == [str(real.resolve())]
        assert cfg.primary_root() == str(real.resolve())

    def test_local_roots_expanduser(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        cfg = Config(roots=["~/repos"])
        assert cfg.local_roots() == [os.path.realpath(str(tmp_path / "repos"))]

    def test_no_roots_raises(self) -> None:
        with pytest.raises(ConfigError):
            Config(roots=[]).local_roots()


class TestGlobalConfig:
    def test_get_config_default(self) -> None:
        assert get_config() is get_config()

    def test_init_config(self, tmp_path: Path) -> None:
        f = tmp_path / "config.yml"
        f.write_text("user: octocat\n", encoding="utf-8")
        cfg = init_config(str(f))
        assert get_config() is cfg
        assert cfg.user == "octocat"
