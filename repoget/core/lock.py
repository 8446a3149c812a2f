"""本地路径准入登记表

同一进程内，一个本地路径只允许被 clone/update 一次，先到者获胜。
后到者立即得到 False 并直接返回，不等待先到者的操作完成。
"""

from __future__ import annotations

import threading


class RepoLockRegistry:
    """线程安全的已占用路径集合

    由服务容器在进程启动时创建一次，显式传给每个 Getter。
    只增不减，没有释放接口。
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._claimed: set[str] = set()

    def admit(self, path: str) -> bool:
        """尝试占用 path，首次调用返回 True，之后均返回 False"""
        with self._lock:
            if path in self._claimed:
                return False
            self._claimed.add(path)
            return True

    def claimed(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._claimed)

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._claimed

    def __len__(self) -> int:
        with self._lock:
            return len(self._claimed)
