"""集中配置管理

支持从 YAML 文件加载 + 环境变量覆盖 + 编程式覆盖。

配置文件示例 (~/.config/repoget/config.yml):

    roots:
      - ~/repos
      - /mnt/archive/repos
    user: octocat
    shallow: false
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

import yaml

from repoget.core.exceptions import ConfigError
from repoget.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "~/.config/repoget/config.yml"
DEFAULT_ROOT = "~/repos"

ENV_CONFIG = "REPOGET_CONFIG"
ENV_ROOT = "REPOGET_ROOT"
ENV_USER = "REPOGET_USER"


@dataclass
class Config:
    """全局配置"""

    # 本地根目录，第一个为主根目录（新 clone 的落点）
    roots: list[str] = field(default_factory=lambda: [DEFAULT_ROOT])
    # 裸仓库名 (如 "dotfiles") 默认归属的 GitHub 用户
    user: str = ""

    # get 默认选项，可被命令行覆盖
    vcs: str = ""
    ssh: bool = False
    shallow: bool = False
    parallel: int = 1

    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = "") -> Config:
        """从 YAML 文件加载配置，不存在则返回默认值，再叠加环境变量"""
        path = path or os.getenv(ENV_CONFIG, "") or DEFAULT_CONFIG_PATH
        try:
            data = load_yaml(path)
        except (yaml.YAMLError, OSError, ValueError) as e:
            raise ConfigError(f"配置文件无效: {path}: {e}") from e

        known = {f.name for f in cls.__dataclass_fields__.values()} - {"extra"}
        # "roots:" 这类空值按未配置处理，沿用默认值
        matched = {k: v for k, v in data.items() if k in known and v is not None}
        extra = {k: v for k, v in data.items() if k not in known}

        roots = matched.get("roots")
        if isinstance(roots, str):
            matched["roots"] = [roots]
        elif roots is not None and not isinstance(roots, list):
            raise ConfigError(f"roots 必须是字符串或列表: {roots!r}")

        cfg = cls(**matched)
        cfg.extra = extra
        cfg.apply_env()
        return cfg

    def apply_env(self) -> None:
        """用环境变量覆盖根目录和默认用户"""
        env_root = os.getenv(ENV_ROOT, "")
        if env_root:
            self.roots = [r for r in env_root.split(os.pathsep) if r]
        env_user = os.getenv(ENV_USER, "")
        if env_user:
            self.user = env_user

    def local_roots(self) -> list[str]:
        """展开后的绝对根目录列表（去重、保持顺序）

        根目录会解析符号链接，使其与 os.getcwd() 的结果可比较。
        """
        result: list[str] = []
        for r in self.roots:
            if not r:
                continue
            p = os.path.realpath(os.path.expanduser(str(r)))
            if p not in result:
                result.append(p)
        if not result:
            raise ConfigError("至少需要配置一个本地根目录")
        return result

    def primary_root(self) -> str:
        return self.local_roots()[0]


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
        _current.apply_env()
    return _current


def init_config(path: str = "") -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.debug("配置已加载: %s", path or DEFAULT_CONFIG_PATH)
    return _current
