"""CLI — 安装与清理命令"""

from __future__ import annotations

from dataclasses import replace

import click
import yaml

from frontdeps.core.config import get_config
from frontdeps.core.exceptions import FrontDepsError
from frontdeps.core.installer import clean as clean_temp
from frontdeps.core.installer import install as install_dependencies
from frontdeps.utils.terminal import ConsoleTerminal
from frontdeps.utils.yaml_io import load_yaml


def register(group: click.Group) -> None:
    group.add_command(install)
    group.add_command(clean)


@click.command()
@click.option("--file", "-c", "deps_file", default=None, help="依赖声明文件（默认 frontdeps.yml）")
@click.option("--temp", default=None, help="临时目录（覆盖配置）")
@click.option("--verbose", "-v", is_flag=True, help="输出调试信息")
def install(deps_file: str | None, temp: str | None, verbose: bool) -> None:
    """安装依赖声明文件中的全部依赖"""
    cfg = get_config()
    if temp:
        cfg = replace(cfg, temp_dir=temp)
    path = deps_file or cfg.dependencies_file
    try:
        data = load_yaml(path)
    except (yaml.YAMLError, ValueError, OSError) as e:
        raise click.ClickException(f"读取依赖声明失败: {path} - {e}") from e
    configuration = data.get("dependencies", data)
    if not configuration:
        click.echo(f"未找到依赖声明: {path}")
        return

    try:
        files = install_dependencies(
            configuration, ConsoleTerminal(verbose=verbose), config=cfg,
        )
    except FrontDepsError as e:
        raise click.ClickException(str(e)) from e
    except OSError as e:
        raise click.ClickException(f"安装失败: {e}") from e

    if not files:
        click.echo("没有生成任何文件。")
        return
    click.echo(f"已生成 {len(files)} 个文件:")
    for f in files:
        click.echo(f"  {f}")


@click.command()
@click.option("--temp", default=None, help="临时目录（默认取配置 temp_dir）")
def clean(temp: str | None) -> None:
    """强制清理临时目录"""
    clean_temp(temp)
    click.echo("临时目录已清理。")
