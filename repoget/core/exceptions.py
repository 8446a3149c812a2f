"""统一异常体系

所有业务异常继承 RepoGetError，替代散落的 ValueError / RuntimeError。
CLI 层据此输出友好提示并返回非零退出码。
"""

from __future__ import annotations

from enum import Enum


class RepoGetError(Exception):
    """基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(RepoGetError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class ValidationError(RepoGetError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"


class ExecutionError(RepoGetError):
    """外部命令（git/hg/svn 等）执行失败"""

    code = "EXECUTION_ERROR"


class GetErrorKind(Enum):
    """get 流程的失败类别"""

    PARSE = "parse"                  # 引用无法解析为 URL
    SSH_CONVERT = "ssh_convert"      # http(s) -> ssh 转换失败
    INVALID_REMOTE = "invalid_remote"
    VCS_NOT_FOUND = "vcs_not_found"  # 既未强制指定也无法探测
    DETECT = "detect"                # 本地已存在目录无法识别 VCS
    STAT = "stat"                    # 本地路径 stat 失败（不存在除外）
    BACKEND = "backend"              # clone / update 命令失败


_MESSAGES: dict[GetErrorKind, str] = {
    GetErrorKind.PARSE: "Could not parse URL",
    GetErrorKind.SSH_CONVERT: "Could not convert URL",
    GetErrorKind.INVALID_REMOTE: "Not a valid repository",
    GetErrorKind.VCS_NOT_FOUND: "Could not find version control system",
    GetErrorKind.DETECT: "Failed to detect VCS",
    GetErrorKind.STAT: "Could not stat local path",
    GetErrorKind.BACKEND: "VCS command failed",
}


class GetError(RepoGetError):
    """单次 get 调用的致命错误

    携带失败类别 kind、出错的目标（参数 / URL / 路径）和原始异常 cause，
    仅在 str() 时渲染为文本。
    """

    def __init__(
        self, kind: GetErrorKind, target: str, cause: BaseException | None = None,
    ) -> None:
        self.kind = kind
        self.target = target
        self.cause = cause
        super().__init__(self._render())

    @property
    def code(self) -> str:  # type: ignore[override]
        return self.kind.name

    def _render(self) -> str:
        msg = f"{_MESSAGES[self.kind]}: {self.target!r}"
        if self.cause is not None:
            msg += f": {self.cause}"
        return msg
