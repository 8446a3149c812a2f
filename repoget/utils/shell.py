"""外部命令执行工具: 统一子进程调用

通过 CommandExecutor 协议抽象子进程执行，VCS 后端和远程探测均经由此处。
测试时可注入 fake 实现，无需 patch subprocess。
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import Protocol

from repoget.core.exceptions import ExecutionError

logger = logging.getLogger(__name__)


# =========================================================================
# 命令执行结果
# =========================================================================

@dataclass
class CommandResult:
    """命令执行结果（与 subprocess 解耦）"""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0


# =========================================================================
# 命令执行器协议
# =========================================================================

class CommandExecutor(Protocol):
    """命令执行器协议

    capture=False 时命令输出直接透传到终端（非 silent 的 clone/update），
    此时 CommandResult 的 stdout/stderr 为空。
    """

    def execute(
        self,
        cmd: list[str],
        *,
        cwd: str | None = None,
        capture: bool = True,
    ) -> CommandResult:
        ...


# =========================================================================
# 默认实现: 本地子进程执行器
# =========================================================================

class LocalExecutor:
    """本地子进程执行器（默认实现）"""

    def execute(
        self,
        cmd: list[str],
        *,
        cwd: str | None = None,
        capture: bool = True,
    ) -> CommandResult:
        try:
            r = subprocess.run(
                cmd, capture_output=capture, text=True,
                cwd=cwd, check=False, stdin=subprocess.DEVNULL,
            )
        except FileNotFoundError as e:
            # 命令本身不存在（如未安装 hg）
            return CommandResult(returncode=127, stderr=str(e))
        except OSError as e:
            # 存在但无法执行（权限不足等）
            return CommandResult(returncode=126, stderr=str(e))
        return CommandResult(
            returncode=r.returncode,
            stdout=r.stdout or "",
            stderr=r.stderr or "",
        )


# =========================================================================
# 全局默认执行器（可替换）
# =========================================================================

_default_executor: CommandExecutor = LocalExecutor()


def get_executor() -> CommandExecutor:
    """获取全局默认命令执行器"""
    return _default_executor


def set_executor(executor: CommandExecutor) -> None:
    """替换全局默认命令执行器（用于测试）"""
    global _default_executor  # noqa: PLW0603
    _default_executor = executor


def run_cmd(
    cmd: list[str], *,
    cwd: str | None = None,
    silent: bool = False,
    executor: CommandExecutor | None = None,
) -> CommandResult:
    """执行命令，失败抛 ExecutionError

    Args:
        cmd: 命令参数列表
        cwd: 工作目录
        silent: True 时捕获输出，False 时透传到终端
        executor: 指定执行器，默认使用全局执行器
    """
    executor = executor or get_executor()
    logger.debug("  exec: %s (cwd=%s)", shlex.join(cmd), cwd or ".")
    r = executor.execute(cmd, cwd=cwd, capture=silent)
    if not r.success:
        detail = f": {r.stderr.strip()[:500]}" if r.stderr.strip() else ""
        raise ExecutionError(f"{shlex.join(cmd)} 失败 (rc={r.returncode}){detail}")
    return r
