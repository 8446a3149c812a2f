"""代码仓获取编排

get(argument) 的完整流程:

  ReferenceResolver.resolve      参数 -> RepoURL
  new_remote_repository          校验地址
  find_local + stat              判断本地是否已存在
    不存在: 选择后端（--vcs 强制 或 远程推断）-> 准入 -> clone
    已存在 + update: 识别本地后端 -> 准入 -> update
    已存在: 什么都不做

准入由 RepoLockRegistry 保证：同一本地路径在进程内只会被 clone/update 一次，
重复请求立即以 SKIPPED 返回，不等待正在进行的操作。
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from repoget.core.exceptions import ExecutionError, GetError, GetErrorKind, RepoGetError
from repoget.core.local import LocalRepository, find_local, relative_path
from repoget.core.lock import RepoLockRegistry
from repoget.core.protocols import RemoteRepository, VCSBackend
from repoget.core.resolver import ReferenceResolver
from repoget.core.url import RepoURL
from repoget.services.remote import new_remote_repository
from repoget.services.vcs import backend_for
from repoget.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)

RemoteFactory = Callable[[RepoURL], RemoteRepository]


@dataclass
class GetOptions:
    """get 选项"""

    update: bool = False
    shallow: bool = False
    ssh: bool = False
    silent: bool = False
    vcs: str = ""  # 强制使用的 VCS 标识符，空表示自动推断


class GetOutcome(Enum):
    CLONED = "cloned"
    UPDATED = "updated"
    EXISTS = "exists"
    SKIPPED = "skipped"  # 同一路径已被其他请求占用


@dataclass
class GetResult:
    """批量获取中单个引用的结果"""

    argument: str
    outcome: GetOutcome | None = None
    error: RepoGetError | None = None

    @property
    def success(self) -> bool:
        return self.error is None


class Getter:
    """代码仓获取器

    lock_registry 由调用方创建并在整个进程内共享，
    同一个 Getter 可被多个线程并发调用。
    """

    def __init__(
        self,
        roots: list[str],
        lock_registry: RepoLockRegistry,
        options: GetOptions | None = None,
        *,
        default_user: str = "",
        remote_factory: RemoteFactory | None = None,
        executor: CommandExecutor | None = None,
        getcwd: Callable[[], str] = os.getcwd,
    ) -> None:
        self.roots = roots
        self.lock_registry = lock_registry
        self.options = options or GetOptions()
        self._executor = executor
        self._remote_factory = remote_factory or (
            lambda url: new_remote_repository(url, self._executor)
        )
        self.resolver = ReferenceResolver(
            roots, default_user=default_user, ssh=self.options.ssh, getcwd=getcwd,
        )

    def get(self, argument: str) -> GetOutcome:
        """解析参数并 clone 或 update

        Raises:
            GetError: 任一步骤失败
        """
        url = self.resolver.resolve(argument)
        remote = self._remote_factory(url)
        if not remote.is_valid():
            raise GetError(GetErrorKind.INVALID_REMOTE, str(url))
        return self.get_remote_repository(remote)

    def get_remote_repository(self, remote: RemoteRepository) -> GetOutcome:
        """本地不存在则 clone；已存在且要求 update 则 update；否则什么都不做"""
        local = find_local(remote.url(), self.roots)
        try:
            os.stat(local.full_path)
        except FileNotFoundError:
            return self._clone(remote, local)
        except OSError as e:
            raise GetError(GetErrorKind.STAT, local.full_path, e) from e

        if self.options.update:
            return self._update(local)

        logger.info("exists %s", local.full_path, extra={"event": "exists"})
        return GetOutcome.EXISTS

    def _select_backend(
        self, remote: RemoteRepository, local: LocalRepository,
    ) -> tuple[VCSBackend, RepoURL, str]:
        """返回 (后端, 拉取地址, 本地路径)"""
        remote_url = remote.url()
        if self.options.vcs:
            forced = backend_for(self.options.vcs, self._executor)
            if forced is None:
                raise GetError(GetErrorKind.VCS_NOT_FOUND, self.options.vcs)
            return forced, remote_url, local.full_path

        backend, repo_url = remote.vcs()
        if backend is None:
            raise GetError(GetErrorKind.VCS_NOT_FOUND, str(remote_url))

        repo_path = local.full_path
        # 拉取地址是原地址的前缀时（如 GitHub 的 tree/... 子路径），按拉取地址重算路径。
        # golang.org/x/net 这类托管在其他主机上的仓库保持原路径。
        if str(remote_url).startswith(str(repo_url).removesuffix(".git")):
            repo_path = os.path.join(local.root_path, relative_path(repo_url))
        return backend, repo_url, repo_path

    def _clone(self, remote: RemoteRepository, local: LocalRepository) -> GetOutcome:
        backend, repo_url, repo_path = self._select_backend(remote, local)

        if not self.lock_registry.admit(repo_path):
            logger.info("skip %s (already claimed)", repo_path, extra={"event": "skip"})
            return GetOutcome.SKIPPED

        logger.info("clone %s -> %s", repo_url, repo_path, extra={"event": "clone"})
        try:
            backend.clone(
                repo_url, repo_path,
                shallow=self.options.shallow, silent=self.options.silent,
            )
        except (ExecutionError, OSError) as e:
            raise GetError(GetErrorKind.BACKEND, str(repo_url), e) from e
        return GetOutcome.CLONED

    def _update(self, local: LocalRepository) -> GetOutcome:
        backend, repo_path = local.vcs(self._executor)
        if backend is None:
            raise GetError(GetErrorKind.DETECT, local.full_path)

        if not self.lock_registry.admit(repo_path):
            logger.info("skip %s (already claimed)", repo_path, extra={"event": "skip"})
            return GetOutcome.SKIPPED

        logger.info("update %s", repo_path, extra={"event": "update"})
        try:
            backend.update(repo_path, silent=self.options.silent)
        except (ExecutionError, OSError) as e:
            raise GetError(GetErrorKind.BACKEND, repo_path, e) from e
        return GetOutcome.UPDATED

    def get_all(self, arguments: list[str], parallel: int = 1) -> list[GetResult]:
        """批量获取，每个引用一个独立任务；结果顺序与 arguments 一致"""

        def _one(argument: str) -> GetResult:
            try:
                return GetResult(argument, outcome=self.get(argument))
            except RepoGetError as e:
                logger.error("%s", e)
                return GetResult(argument, error=e)

        workers = max(1, parallel)
        if workers == 1 or len(arguments) <= 1:
            return [_one(a) for a in arguments]
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(_one, arguments))
