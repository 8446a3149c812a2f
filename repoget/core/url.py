"""代码仓地址解析

支持的引用写法:
  - https://github.com/owner/name      完整 URL
  - git@github.com:owner/name.git       SCP 风格，转为 ssh://
  - example.org/group/name              无 scheme，首段带点视为主机名
  - owner/name                          GitHub 简写
  - name                                GitHub 简写，归属 Config.user
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from urllib.parse import urlsplit

from repoget.core.exceptions import ValidationError

GITHUB_HOST = "github.com"

_SCP_LIKE_RE = re.compile(r"^(?:(?P<user>[^@/]+)@)?(?P<host>[^:/]+):(?P<path>.+)$")


@dataclass(frozen=True)
class RepoURL:
    """规范化后的代码仓地址，path 总是以 / 开头"""

    scheme: str
    host: str
    path: str
    user: str = ""

    def __str__(self) -> str:
        userinfo = f"{self.user}@" if self.user else ""
        return f"{self.scheme}://{userinfo}{self.host}{self.path}"

    @property
    def hostname(self) -> str:
        """去掉端口的主机名"""
        return self.host.split(":", 1)[0]

    @property
    def segments(self) -> list[str]:
        return [p for p in self.path.split("/") if p]

    def with_path(self, path: str) -> RepoURL:
        return replace(self, path=_normalize_path(path))


def _normalize_path(path: str) -> str:
    if any(seg in (".", "..") for seg in path.split("/")):
        # 映射到本地路径时不能跳出根目录
        raise ValidationError(f"路径包含 . 或 .. 段: {path}")
    path = path.rstrip("/")
    if not path.startswith("/"):
        path = "/" + path
    return path


def _parse_absolute(ref: str) -> RepoURL:
    parts = urlsplit(ref)
    scheme = parts.scheme.lower()
    hostname = (parts.hostname or "").lower()
    if not hostname:
        raise ValidationError(f"缺少主机名: {ref}")
    try:
        port = parts.port
    except ValueError as e:
        raise ValidationError(f"端口无效: {ref}") from e
    host = f"{hostname}:{port}" if port else hostname

    if parts.path.strip("/") == "":
        raise ValidationError(f"缺少仓库路径: {ref}")
    return RepoURL(scheme, host, _normalize_path(parts.path), parts.username or "")


def parse_repo_url(ref: str, *, default_user: str = "") -> RepoURL:
    """把用户输入的引用解析为 RepoURL

    Raises:
        ValidationError: 无法解析
    """
    ref = ref.strip()
    if not ref:
        raise ValidationError("引用为空")

    if "://" in ref:
        return _parse_absolute(ref)

    m = _SCP_LIKE_RE.match(ref)
    if m:
        path = m.group("path")
        if path.strip("/") == "":
            raise ValidationError(f"缺少仓库路径: {ref}")
        return RepoURL("ssh", m.group("host").lower(), _normalize_path(path), m.group("user") or "")

    segments = ref.split("/")
    first = segments[0]
    if first in ("", ".", ".."):
        # 相对路径未能匹配任何根目录，或是绝对路径
        raise ValidationError(f"不是代码仓地址: {ref}")

    if len(segments) == 1:
        if not default_user:
            raise ValidationError(f"裸仓库名需要配置默认用户 (user / REPOGET_USER): {ref}")
        return RepoURL("https", GITHUB_HOST, _normalize_path(f"{default_user}/{ref}"))

    if "." in first:
        rest = "/".join(segments[1:])
        if not rest.strip("/"):
            raise ValidationError(f"缺少仓库路径: {ref}")
        return RepoURL("https", first.lower(), _normalize_path(rest))

    return RepoURL("https", GITHUB_HOST, _normalize_path(ref))


def convert_http_to_ssh(url: RepoURL) -> RepoURL:
    """http(s) 地址转为 ssh://git@host/path，ssh 地址原样返回

    Raises:
        ValidationError: 其他 scheme 无法转换
    """
    if url.scheme == "ssh":
        return url
    if url.scheme not in ("http", "https"):
        raise ValidationError(f"不支持转换为 ssh 的协议 '{url.scheme}': {url}")
    return RepoURL("ssh", url.hostname, url.path, url.user or "git")
