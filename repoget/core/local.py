"""本地路径映射

正向: RepoURL -> <root>/<host>/<path>（map_to_local，纯函数，只用主根目录）
反向: 绝对路径 -> (root, 相对部分)（strip_root，供相对路径猜测使用）
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from repoget.core.url import RepoURL

if TYPE_CHECKING:
    from repoget.services.vcs import Backend
    from repoget.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocalRepository:
    """本地代码仓位置"""

    full_path: str
    root_path: str

    @property
    def rel_path(self) -> str:
        return os.path.relpath(self.full_path, self.root_path)

    def candidates(self) -> list[str]:
        """从 <root>/<host>/<首段> 开始逐级向下到 full_path 的候选仓库根目录

        主机目录本身不是仓库根目录，即使其下存在元数据目录。
        """
        parts = self.rel_path.split(os.sep)
        start = 1 if len(parts) > 1 else 0
        return [
            os.path.join(self.root_path, *parts[: i + 1])
            for i in range(start, len(parts))
        ]

    def vcs(self, executor: CommandExecutor | None = None) -> tuple[Backend | None, str]:
        """根据磁盘上的元数据目录识别 VCS

        返回 (后端, 仓库根目录)；识别失败返回 (None, "")。
        浅层优先，因此可能返回 full_path 的某个上级目录。
        """
        from repoget.services.vcs import detect_backend

        for d in self.candidates():
            backend = detect_backend(d, executor)
            if backend is not None:
                logger.debug("识别 VCS: %s -> %s", d, backend.kind.value)
                return backend, d
        return None, ""


def relative_path(url: RepoURL) -> str:
    """<hostname>/<path>，末段去掉 .git 后缀

    主机名不含端口，同一仓库经 https 与 ssh 获取时落在同一目录。
    """
    rel = os.path.join(url.hostname, *url.segments)
    return rel.removesuffix(".git")


def map_to_local(url: RepoURL, roots: list[str]) -> LocalRepository:
    """把 URL 映射到主根目录下的本地路径（不访问文件系统）"""
    root = roots[0]
    return LocalRepository(os.path.join(root, relative_path(url)), root)


def find_local(url: RepoURL, roots: list[str]) -> LocalRepository:
    """优先返回任一根目录下已识别为代码仓的副本，否则回落到 map_to_local

    只有带 VCS 元数据的目录才算已有副本；多个根目录都有时取靠前的根目录。
    """
    rel = relative_path(url)
    for root in roots:
        candidate = LocalRepository(os.path.join(root, rel), root)
        if os.path.isdir(candidate.full_path) and candidate.vcs()[0] is not None:
            return candidate
    return map_to_local(url, roots)


def strip_root(path: str, roots: list[str]) -> tuple[str, str] | None:
    """从绝对路径中去掉根目录前缀

    多个根目录都匹配时取剩余部分最短的（即最近的根目录）。
    都不匹配返回 None。
    """
    best: tuple[str, str] | None = None
    for root in roots:
        prefix = root.rstrip(os.sep) + os.sep
        if not path.startswith(prefix):
            continue
        rest = path[len(prefix):]
        if rest and (best is None or len(rest) < len(best[1])):
            best = (root, rest)
    return best
