"""服务容器: 进程级共享对象的统一入口

RepoLockRegistry 必须在进程内唯一，由容器创建一次并注入到每个 Getter，
CLI 的一次调用内所有并发任务因此共享同一份准入状态。

用法:
    container = ServiceContainer()
    getter = container.getter(GetOptions(update=True))
    getter.get("github.com/example/repo")
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from repoget.core.lock import RepoLockRegistry

if TYPE_CHECKING:
    from repoget.core.config import Config
    from repoget.services.getter import GetOptions, Getter
    from repoget.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)


class ServiceContainer:
    """持有配置、准入登记表和命令执行器"""

    def __init__(
        self,
        config: Config | None = None,
        executor: CommandExecutor | None = None,
    ) -> None:
        if config is None:
            from repoget.core.config import get_config
            config = get_config()
        self._config = config
        self._executor = executor
        self._lock_registry = RepoLockRegistry()

    @property
    def config(self) -> Config:
        return self._config

    @property
    def lock_registry(self) -> RepoLockRegistry:
        return self._lock_registry

    def getter(self, options: GetOptions | None = None) -> Getter:
        """创建 Getter，未指定的选项取配置中的默认值"""
        from repoget.services.getter import GetOptions, Getter

        if options is None:
            options = GetOptions(
                shallow=self._config.shallow,
                ssh=self._config.ssh,
                vcs=self._config.vcs,
            )
        return Getter(
            self._config.local_roots(),
            self._lock_registry,
            options,
            default_user=self._config.user,
            executor=self._executor,
        )


# ---- 全局单例 ----

_global: ServiceContainer | None = None
_global_lock = threading.Lock()


def get_container() -> ServiceContainer:
    """获取全局 ServiceContainer 单例（线程安全）"""
    global _global  # noqa: PLW0603
    if _global is not None:
        return _global
    with _global_lock:
        if _global is None:
            _global = ServiceContainer()
        return _global


def reset_container() -> None:
    """重置全局容器（仅用于测试）"""
    global _global  # noqa: PLW0603
    with _global_lock:
        _global = None
