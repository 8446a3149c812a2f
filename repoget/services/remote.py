"""远程仓库适配: 校验地址并确定 VCS 后端

  - github.com:    /owner/name 以下的子路径（tree/blob 等）回落到仓库根
  - bitbucket.org: git
  - 其他主机:      按 scheme / 后缀判断，最后依次用 git/hg/svn 探测
"""

from __future__ import annotations

import logging

from repoget.core.protocols import RemoteRepository
from repoget.core.url import RepoURL
from repoget.services.vcs import Backend, VCSKind, new_backend
from repoget.utils.shell import CommandExecutor, get_executor

logger = logging.getLogger(__name__)

# 不能作为 owner 的 GitHub 站点路径
_GITHUB_RESERVED = frozenset((
    "about", "blog", "explore", "features", "login", "join", "marketplace",
    "notifications", "orgs", "pricing", "pulls", "search", "settings",
    "sponsors", "topics", "trending",
))

# 按顺序尝试的探测命令
_PROBES: list[tuple[VCSKind, list[str]]] = [
    (VCSKind.GIT, ["git", "ls-remote"]),
    (VCSKind.MERCURIAL, ["hg", "identify"]),
    (VCSKind.SUBVERSION, ["svn", "info"]),
]


class GitHubRepository:
    """GitHub 仓库"""

    def __init__(self, url: RepoURL, executor: CommandExecutor | None = None) -> None:
        self._url = url
        self._executor = executor

    def url(self) -> RepoURL:
        return self._url

    def is_valid(self) -> bool:
        segments = self._url.segments
        if len(segments) < 2:
            return False
        return segments[0].lower() not in _GITHUB_RESERVED

    def vcs(self) -> tuple[Backend | None, RepoURL]:
        owner, name = self._url.segments[:2]
        return new_backend(VCSKind.GIT, self._executor), self._url.with_path(f"/{owner}/{name}")


class BitbucketRepository:
    """Bitbucket 仓库"""

    def __init__(self, url: RepoURL, executor: CommandExecutor | None = None) -> None:
        self._url = url
        self._executor = executor

    def url(self) -> RepoURL:
        return self._url

    def is_valid(self) -> bool:
        return len(self._url.segments) >= 2

    def vcs(self) -> tuple[Backend | None, RepoURL]:
        return new_backend(VCSKind.GIT, self._executor), self._url


class OtherRepository:
    """任意主机上的仓库，VCS 需要推断或探测"""

    def __init__(self, url: RepoURL, executor: CommandExecutor | None = None) -> None:
        self._url = url
        self._executor = executor

    def url(self) -> RepoURL:
        return self._url

    def is_valid(self) -> bool:
        return True

    def vcs(self) -> tuple[Backend | None, RepoURL]:
        kind = self._guess_kind() or self._probe_kind()
        if kind is None:
            return None, self._url
        return new_backend(kind, self._executor), self._url

    def _guess_kind(self) -> VCSKind | None:
        scheme = self._url.scheme
        if scheme in ("svn", "svn+ssh"):
            return VCSKind.SUBVERSION
        if scheme == "git":
            return VCSKind.GIT
        if self._url.path.endswith(".git"):
            return VCSKind.GIT
        if self._url.path.endswith(".hg"):
            return VCSKind.MERCURIAL
        return None

    def _probe_kind(self) -> VCSKind | None:
        executor = self._executor or get_executor()
        for kind, cmd in _PROBES:
            r = executor.execute(cmd + [str(self._url)], capture=True)
            if r.success:
                logger.debug("探测到 %s: %s", kind.value, self._url)
                return kind
        logger.debug("探测失败: %s", self._url)
        return None


def new_remote_repository(url: RepoURL, executor: CommandExecutor | None = None) -> RemoteRepository:
    """按主机名选择远程仓库实现"""
    host = url.hostname
    if host in ("github.com", "www.github.com"):
        return GitHubRepository(url, executor)
    if host == "bitbucket.org":
        return BitbucketRepository(url, executor)
    return OtherRepository(url, executor)
