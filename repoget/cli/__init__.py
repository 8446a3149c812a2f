"""repoget 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

import os

import click

from repoget import __version__
from repoget.core.config import init_config
from repoget.core.exceptions import ConfigError
from repoget.services.container import reset_container
from repoget.utils.logger import setup_logging


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config", "-c", "config_path", default="",
    help="配置文件路径（默认 $REPOGET_CONFIG 或 ~/.config/repoget/config.yml）",
)
def main(config_path: str) -> None:
    """repoget - 按 <root>/<host>/<path> 管理本地代码仓"""
    setup_logging(
        level=os.getenv("REPOGET_LOG_LEVEL", "INFO"),
        json_output=os.getenv("REPOGET_LOG_JSON", "") == "1",
    )
    try:
        init_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    reset_container()


# 注册各领域子命令
from repoget.cli.cmd_get import register as _reg_get  # noqa: E402
from repoget.cli.cmd_root import register as _reg_root  # noqa: E402

_reg_get(main)
_reg_root(main)
