"""根目录命令"""

import click

from repoget.core.exceptions import ConfigError
from repoget.services.container import get_container


def register(main: click.Group) -> None:
    main.add_command(root)


@click.command()
@click.option("--all", "show_all", is_flag=True, help="列出所有根目录")
def root(show_all: bool) -> None:
    """显示本地根目录（默认只显示主根目录）"""
    try:
        roots = get_container().config.local_roots()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    for r in roots if show_all else roots[:1]:
        click.echo(r)
