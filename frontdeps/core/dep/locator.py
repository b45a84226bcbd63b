"""依赖描述符解析

描述符语法: <name-or-path>[@<version-or-range>][#<res1>|<res2>|...]

  jquery                       注册表中的包名，待查询 GitHub 地址
  documentcloud/underscore@1.x GitHub user/repo + 版本范围
  popeindustries/lib#a.js|b    只安装指定资源
  ./vendor/lib                 本地路径（存在或以 . 开头）
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from frontdeps.core.dep.models import DEFAULT_VERSION, Dependency

logger = logging.getLogger(__name__)

RE_GITHUB_PROJECT = re.compile(r"^[\w.-]+/[\w.-]+$")

GITHUB_ARCHIVE_URL = "https://github.com"


def archive_url(name: str, version: str, base: str = GITHUB_ARCHIVE_URL) -> str:
    """GitHub 归档下载地址"""
    return f"{base.rstrip('/')}/{name}/archive/{version}.zip"


def is_within(path: Path, directory: Path) -> bool:
    """path 是否为 directory 本身或其子路径"""
    return path == directory or directory in path.parents


def split_source(source: str) -> tuple[str, list[str]]:
    """拆分出 '#' 之后以 '|' 分隔的资源列表"""
    head, _, spec = source.partition("#")
    resources = [r.strip() for r in spec.split("|") if r.strip()]
    return head.strip(), resources


def locate(
    source: str,
    destination: str | Path,
    output: str | Path | None = None,
    temp: str | Path | None = None,
    *,
    github_archive_url: str = GITHUB_ARCHIVE_URL,
) -> Dependency:
    """把描述符解析为 Dependency"""
    head, requested = split_source(source)
    dest = Path(destination).resolve()
    dep = Dependency(
        source=source,
        id=head,
        name=head,
        destination=dest,
        output=Path(output).resolve() if output else None,
        temp=Path(temp).resolve() if temp else None,
    )

    candidate = Path(head)
    if head.startswith(".") or candidate.exists():
        _locate_local(dep, candidate.resolve(), requested)
    else:
        _locate_remote(dep, head, requested, github_archive_url)

    logger.debug("已解析描述符: %s -> %s (local=%s)", source, dep, dep.is_local)
    return dep


def _locate_local(dep: Dependency, location: Path, requested: list[str]) -> None:
    dep.is_local = True
    dep.location = location
    if requested:
        resolved = (location / r for r in requested)
        dep.resources = [p.resolve() for p in resolved if p.exists()]
    else:
        dep.resources = [location]
    dep.keep = is_within(location, dep.destination)


def _locate_remote(
    dep: Dependency, head: str, requested: list[str], base_url: str,
) -> None:
    # @scope/pkg 的前导 @ 属于包名
    at = head.find("@", 1)
    name, version = (head[:at], head[at + 1:]) if at > 0 else (head, "")
    dep.id = dep.name = name
    dep.version = version or DEFAULT_VERSION
    if requested:
        dep.resources = [Path(r) for r in requested]
    if RE_GITHUB_PROJECT.match(name):
        dep.url = archive_url(name, dep.version, base_url)
        dep.id = name.split("/")[1]
