"""CLI — 注册表与版本查询命令"""

from __future__ import annotations

import click

from frontdeps.core.config import get_config
from frontdeps.core.dep.locator import archive_url
from frontdeps.core.dep.registry import PackageRegistry
from frontdeps.core.dep.versions import VersionResolver, select_tag, sort_tags
from frontdeps.core.exceptions import DependencyError


def register(group: click.Group) -> None:
    group.add_command(lookup)
    group.add_command(versions)


@click.command()
@click.argument("name")
@click.option("--version", default="master", help="归档版本（默认 master）")
def lookup(name: str, version: str) -> None:
    """查询包对应的 GitHub 仓库与归档地址"""
    cfg = get_config()
    try:
        repo = PackageRegistry(cfg).find_repository(name)
    except DependencyError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"{name} -> {repo}")
    click.echo(f"  {archive_url(repo, version, cfg.github_archive_url)}")


@click.command()
@click.argument("repo")
@click.option("--range", "spec", default=None, help="版本范围，如 ~1.3.2 / 1.x / latest")
def versions(repo: str, spec: str | None) -> None:
    """列出 GitHub 仓库（owner/repo）的 tag，或解析版本范围"""
    try:
        tags = VersionResolver(get_config()).fetch_tags(repo)
    except DependencyError as e:
        raise click.ClickException(str(e)) from e

    if spec:
        try:
            tag = select_tag(tags, spec)
        except ValueError as e:
            raise click.ClickException(f"无法解析版本范围: {spec} - {e}") from e
        if tag is None:
            raise click.ClickException(f"没有满足 {spec} 的版本: {repo}")
        click.echo(tag["name"])
        return

    ordered = sort_tags(tags)
    if not ordered:
        click.echo(f"没有可用的语义化版本 tag: {repo}")
        return
    for version, tag in ordered:
        click.echo(f"  {tag['name']:16s} {version}")
