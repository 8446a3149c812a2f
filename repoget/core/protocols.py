"""领域协议定义

Getter 只依赖这里的接口契约，具体的 VCS 后端和远程仓库实现在 services 层。
使用 typing.Protocol 而非 ABC，测试中的 fake 无需继承即可满足协议。
"""

from __future__ import annotations

from typing import Protocol

from repoget.core.url import RepoURL


# =========================================================================
# VCS 后端协议
# =========================================================================

class VCSBackend(Protocol):
    """VCS 后端协议

    clone/update 失败时抛 ExecutionError。
    """

    def clone(self, url: RepoURL, path: str, *, shallow: bool = False, silent: bool = False) -> None:
        ...

    def update(self, path: str, *, silent: bool = False) -> None:
        ...


# =========================================================================
# 远程仓库协议
# =========================================================================

class RemoteRepository(Protocol):
    """远程仓库协议"""

    def url(self) -> RepoURL:
        """规范地址"""
        ...

    def is_valid(self) -> bool:
        """地址在该托管站点上是否构成合法仓库"""
        ...

    def vcs(self) -> tuple[VCSBackend | None, RepoURL]:
        """返回 (后端或 None, 实际拉取地址)

        拉取地址可能与 url() 不同（如 GitHub 的 /owner/name/tree/... 子路径）。
        """
        ...
