"""测试共享 fixture: fake 执行器 + 隔离配置"""

from __future__ import annotations

import os
import threading
from pathlib import Path

import pytest

import repoget.core.config as cfgmod
from repoget.services.container import reset_container
from repoget.utils.shell import CommandResult


class FakeExecutor:
    """记录所有命令的执行器

    fail 中的命令前缀（如 "git clone"）返回 rc=1；
    成功的 clone 命令会在目标路径创建对应的元数据目录，模拟真实效果。
    """

    _CLONE_MARKERS = {
        ("git", "clone"): ".git",
        ("hg", "clone"): ".hg",
        ("svn", "checkout"): ".svn",
        ("bzr", "branch"): ".bzr",
        ("darcs", "get"): "_darcs",
    }

    def __init__(self, fail: tuple[str, ...] = ()) -> None:
        self.fail = set(fail)
        self.calls: list[tuple[list[str], str | None, bool]] = []
        self._lock = threading.Lock()

    def execute(
        self, cmd: list[str], *, cwd: str | None = None, capture: bool = True,
    ) -> CommandResult:
        with self._lock:
            self.calls.append((list(cmd), cwd, capture))
        if " ".join(cmd[:2]) in self.fail:
            return CommandResult(returncode=1, stderr="fatal: boom")
        marker = self._CLONE_MARKERS.get(tuple(cmd[:2]))
        if marker:
            os.makedirs(os.path.join(cmd[-1], marker), exist_ok=True)
        return CommandResult(returncode=0)

    def commands(self) -> list[list[str]]:
        return [c[0] for c in self.calls]


@pytest.fixture()
def fake_executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture()
def make_executor():
    """按需构造带失败规则的 FakeExecutor"""
    return FakeExecutor


@pytest.fixture()
def root(tmp_path: Path) -> str:
    """已解析符号链接的本地根目录"""
    r = tmp_path.resolve() / "repos"
    r.mkdir()
    return str(r)


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """每个测试使用独立配置，屏蔽用户环境变量"""
    for var in (cfgmod.ENV_CONFIG, cfgmod.ENV_ROOT, cfgmod.ENV_USER):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(cfgmod, "_current", None)
    reset_container()
    yield
    reset_container()
