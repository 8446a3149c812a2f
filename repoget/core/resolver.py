"""引用解析: 把命令行参数转为规范 RepoURL

"./foo"、"../bar" 形式会先按当前目录展开，再尝试去掉本地根目录前缀，
猜测出 https://<host>/<path>；猜不出时按普通引用解析（通常会失败）。
"""

from __future__ import annotations

import logging
import os
from typing import Callable

from repoget.core.exceptions import GetError, GetErrorKind, ValidationError
from repoget.core.local import strip_root
from repoget.core.url import RepoURL, convert_http_to_ssh, parse_repo_url

logger = logging.getLogger(__name__)


class ReferenceResolver:
    """参数 -> RepoURL"""

    def __init__(
        self,
        roots: list[str],
        *,
        default_user: str = "",
        ssh: bool = False,
        getcwd: Callable[[], str] = os.getcwd,
    ) -> None:
        self.roots = roots
        self.default_user = default_user
        self.ssh = ssh
        self._getcwd = getcwd

    def guess_relative(self, argument: str) -> str | None:
        """相对路径参数 -> https:// 地址，无法猜测返回 None"""
        parts = argument.split(os.sep)
        if parts[0] not in (".", ".."):
            return None
        try:
            wd = self._getcwd()
        except OSError:
            return None

        path = os.path.normpath(os.path.join(wd, *parts))
        matched = strip_root(path, self.roots)
        if matched is None:
            return None
        _, rest = matched
        guessed = "https://" + rest.replace(os.sep, "/")
        logger.info("resolved relative %r to %r", argument, guessed, extra={"event": "resolved"})
        return guessed

    def resolve(self, argument: str) -> RepoURL:
        """解析参数

        Raises:
            GetError: kind 为 PARSE 或 SSH_CONVERT
        """
        ref = self.guess_relative(argument) or argument
        try:
            url = parse_repo_url(ref, default_user=self.default_user)
        except ValidationError as e:
            raise GetError(GetErrorKind.PARSE, argument, e) from e

        if self.ssh:
            try:
                url = convert_http_to_ssh(url)
            except ValidationError as e:
                raise GetError(GetErrorKind.SSH_CONVERT, str(url), e) from e
        return url
