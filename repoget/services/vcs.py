"""VCS 后端: git / hg / svn / git-svn / bzr / darcs

每种 VCS 对应一个后端类（由 VCSKind 标识），实现 clone / update 两个操作，
具体工作交给对应命令行工具，经 CommandExecutor 执行。

后端通过标识符（--vcs / Config.vcs）或本地元数据目录选择，不存在时返回 None。
"""

from __future__ import annotations

import logging
import os
from enum import Enum

from repoget.core.url import RepoURL
from repoget.utils.shell import CommandExecutor, run_cmd

logger = logging.getLogger(__name__)


class VCSKind(Enum):
    GIT = "git"
    MERCURIAL = "hg"
    SUBVERSION = "svn"
    GIT_SVN = "git-svn"
    BAZAAR = "bzr"
    DARCS = "darcs"


class Backend:
    """后端公共部分：持有执行器，提供 _run"""

    kind: VCSKind

    def __init__(self, executor: CommandExecutor | None = None) -> None:
        self._executor = executor

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.kind.value}>"

    def _run(self, cmd: list[str], *, cwd: str | None = None, silent: bool = False) -> None:
        run_cmd(cmd, cwd=cwd, silent=silent, executor=self._executor)

    @staticmethod
    def _ensure_parent(path: str) -> None:
        os.makedirs(os.path.dirname(path), exist_ok=True)

    def clone(self, url: RepoURL, path: str, *, shallow: bool = False, silent: bool = False) -> None:
        raise NotImplementedError

    def update(self, path: str, *, silent: bool = False) -> None:
        raise NotImplementedError


class GitBackend(Backend):
    kind = VCSKind.GIT

    def clone(self, url: RepoURL, path: str, *, shallow: bool = False, silent: bool = False) -> None:
        self._ensure_parent(path)
        cmd = ["git", "clone"]
        if shallow:
            cmd += ["--depth", "1"]
        if silent:
            cmd.append("--quiet")
        self._run(cmd + [str(url), path], silent=silent)

    def update(self, path: str, *, silent: bool = False) -> None:
        cmd = ["git", "pull", "--ff-only"]
        if silent:
            cmd.append("--quiet")
        self._run(cmd, cwd=path, silent=silent)


class MercurialBackend(Backend):
    """shallow 对 hg 无效"""

    kind = VCSKind.MERCURIAL

    def clone(self, url: RepoURL, path: str, *, shallow: bool = False, silent: bool = False) -> None:
        self._ensure_parent(path)
        cmd = ["hg", "clone"]
        if silent:
            cmd.append("--quiet")
        self._run(cmd + [str(url), path], silent=silent)

    def update(self, path: str, *, silent: bool = False) -> None:
        cmd = ["hg", "pull", "--update"]
        if silent:
            cmd.append("--quiet")
        self._run(cmd, cwd=path, silent=silent)


class SubversionBackend(Backend):
    kind = VCSKind.SUBVERSION

    def clone(self, url: RepoURL, path: str, *, shallow: bool = False, silent: bool = False) -> None:
        self._ensure_parent(path)
        cmd = ["svn", "checkout"]
        if shallow:
            cmd += ["--depth", "immediates"]
        if silent:
            cmd.append("--quiet")
        self._run(cmd + [str(url), path], silent=silent)

    def update(self, path: str, *, silent: bool = False) -> None:
        cmd = ["svn", "update"]
        if silent:
            cmd.append("--quiet")
        self._run(cmd, cwd=path, silent=silent)


class GitSvnBackend(Backend):
    """shallow 对 git-svn 无效"""

    kind = VCSKind.GIT_SVN

    def clone(self, url: RepoURL, path: str, *, shallow: bool = False, silent: bool = False) -> None:
        self._ensure_parent(path)
        cmd = ["git", "svn", "clone"]
        if silent:
            cmd.append("--quiet")
        self._run(cmd + [str(url), path], silent=silent)

    def update(self, path: str, *, silent: bool = False) -> None:
        cmd = ["git", "svn", "rebase"]
        if silent:
            cmd.append("--quiet")
        self._run(cmd, cwd=path, silent=silent)


class BazaarBackend(Backend):
    kind = VCSKind.BAZAAR

    def clone(self, url: RepoURL, path: str, *, shallow: bool = False, silent: bool = False) -> None:
        self._ensure_parent(path)
        cmd = ["bzr", "branch"]
        if silent:
            cmd.append("--quiet")
        self._run(cmd + [str(url), path], silent=silent)

    def update(self, path: str, *, silent: bool = False) -> None:
        cmd = ["bzr", "pull", "--overwrite"]
        if silent:
            cmd.append("--quiet")
        self._run(cmd, cwd=path, silent=silent)


class DarcsBackend(Backend):
    kind = VCSKind.DARCS

    def clone(self, url: RepoURL, path: str, *, shallow: bool = False, silent: bool = False) -> None:
        self._ensure_parent(path)
        cmd = ["darcs", "get"]
        if shallow:
            cmd.append("--lazy")
        if silent:
            cmd.append("--quiet")
        self._run(cmd + [str(url), path], silent=silent)

    def update(self, path: str, *, silent: bool = False) -> None:
        cmd = ["darcs", "pull", "--all"]
        if silent:
            cmd.append("--quiet")
        self._run(cmd, cwd=path, silent=silent)


_BACKEND_CLASSES: dict[VCSKind, type[Backend]] = {
    VCSKind.GIT: GitBackend,
    VCSKind.MERCURIAL: MercurialBackend,
    VCSKind.SUBVERSION: SubversionBackend,
    VCSKind.GIT_SVN: GitSvnBackend,
    VCSKind.BAZAAR: BazaarBackend,
    VCSKind.DARCS: DarcsBackend,
}

# --vcs 接受的标识符
VCS_REGISTRY: dict[str, VCSKind] = {
    "git": VCSKind.GIT,
    "github": VCSKind.GIT,
    "hg": VCSKind.MERCURIAL,
    "mercurial": VCSKind.MERCURIAL,
    "svn": VCSKind.SUBVERSION,
    "subversion": VCSKind.SUBVERSION,
    "git-svn": VCSKind.GIT_SVN,
    "bzr": VCSKind.BAZAAR,
    "bazaar": VCSKind.BAZAAR,
    "darcs": VCSKind.DARCS,
}

# 本地元数据目录 -> VCS，按顺序匹配（.git/svn 必须排在 .git 之前）
_METADATA_MARKERS: list[tuple[str, VCSKind]] = [
    (os.path.join(".git", "svn"), VCSKind.GIT_SVN),
    (".git", VCSKind.GIT),
    (".hg", VCSKind.MERCURIAL),
    (".svn", VCSKind.SUBVERSION),
    (".bzr", VCSKind.BAZAAR),
    ("_darcs", VCSKind.DARCS),
]


def new_backend(kind: VCSKind, executor: CommandExecutor | None = None) -> Backend:
    return _BACKEND_CLASSES[kind](executor)


def backend_for(name: str, executor: CommandExecutor | None = None) -> Backend | None:
    """按标识符查找后端，未知标识符返回 None"""
    kind = VCS_REGISTRY.get(name.strip().lower())
    if kind is None:
        return None
    return new_backend(kind, executor)


def detect_backend(directory: str, executor: CommandExecutor | None = None) -> Backend | None:
    """根据目录下的元数据识别后端"""
    for marker, kind in _METADATA_MARKERS:
        if os.path.exists(os.path.join(directory, marker)):
            return new_backend(kind, executor)
    return None
