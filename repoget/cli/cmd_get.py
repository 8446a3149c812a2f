"""获取命令：get, import"""

from __future__ import annotations

import sys
from typing import Any, Callable

import click

from repoget.core.exceptions import ConfigError
from repoget.services.container import get_container
from repoget.services.getter import GetOptions, GetResult


def register(main: click.Group) -> None:
    """注册获取相关命令"""
    main.add_command(get)
    main.add_command(import_refs)


def _get_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """get / import 共用的选项"""
    options = [
        click.option("--update", "-u", is_flag=True, help="已存在时执行 update"),
        click.option("--shallow", is_flag=True, help="浅克隆（对 hg / git-svn 无效）"),
        click.option("--ssh", "-p", "ssh", is_flag=True, help="http(s) 地址改用 ssh 克隆"),
        click.option("--vcs", default="", help="强制使用指定 VCS（git/hg/svn/git-svn/bzr/darcs）"),
        click.option("--silent", "-s", is_flag=True, help="不输出 VCS 命令的输出"),
        click.option("--parallel", "-P", type=int, default=None, help="并行任务数"),
    ]
    for opt in reversed(options):
        func = opt(func)
    return func


def _run(refs: list[str], opts: dict[str, Any]) -> None:
    container = get_container()
    cfg = container.config
    options = GetOptions(
        update=opts["update"],
        shallow=opts["shallow"] or cfg.shallow,
        ssh=opts["ssh"] or cfg.ssh,
        silent=opts["silent"],
        vcs=opts["vcs"] or cfg.vcs,
    )
    parallel = opts["parallel"] if opts["parallel"] is not None else cfg.parallel

    try:
        getter = container.getter(options)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    results = getter.get_all(refs, parallel=parallel)
    _report(results)


def _report(results: list[GetResult]) -> None:
    failed = [r for r in results if not r.success]
    for r in failed:
        click.echo(f"失败: {r.argument}: {r.error}", err=True)
    if len(results) > 1:
        click.echo(f"完成: {len(results) - len(failed)}/{len(results)}", err=True)
    if failed:
        sys.exit(1)


@click.command()
@click.argument("refs", nargs=-1, required=True)
@_get_options
def get(refs: tuple[str, ...], **opts: Any) -> None:
    """clone 代码仓到本地根目录，已存在时可选 update

    REFS 可以是完整 URL、git@host:path、host/path、owner/name，
    或本地根目录下的相对路径（./foo、../bar）。
    """
    _run(list(refs), opts)


@click.command(name="import")
@_get_options
def import_refs(**opts: Any) -> None:
    """从标准输入批量获取，每行一个引用（忽略空行和 # 注释）"""
    refs = []
    for line in click.get_text_stream("stdin"):
        line = line.strip()
        if line and not line.startswith("#"):
            refs.append(line)
    if not refs:
        click.echo("标准输入中没有引用。", err=True)
        return
    _run(refs, opts)
