"""版本解析

非精确版本（范围、通配、latest）通过 GitHub tags API 解析为
满足条件的最高 tag，并把下载地址替换为该 tag 的 zipball。
"""

from __future__ import annotations

import http.client
import logging
import re
import urllib.error
from typing import Any

from semantic_version import NpmSpec, Version

from frontdeps.core.config import Config, get_config
from frontdeps.core.dep.models import Dependency
from frontdeps.core.exceptions import (
    TagFetchError,
    ValidationError,
    VersionNotFoundError,
)
from frontdeps.utils.net import get_json

logger = logging.getLogger(__name__)

RE_VALID_VERSION = re.compile(r"^\d+\.\d+\.\d+$|^master$")

LATEST = frozenset(("*", "latest"))

_PER_PAGE = 100
_MAX_PAGES = 10


def needs_lookup(version: str) -> bool:
    """精确的三段版本号和 master 不需要查询 tag"""
    return not RE_VALID_VERSION.match(version)


def parse_tag(name: str) -> Version | None:
    """解析 tag 名，允许 v 前缀；非语义化版本返回 None"""
    text = name[1:] if name[:1] in ("v", "V") else name
    try:
        return Version(text)
    except ValueError:
        return None


def sort_tags(tags: list[dict[str, Any]]) -> list[tuple[Version, dict[str, Any]]]:
    """按语义化版本降序排列，忽略无法解析的 tag"""
    parsed = []
    for tag in tags:
        version = parse_tag(str(tag.get("name", "")))
        if version is not None:
            parsed.append((version, tag))
    parsed.sort(key=lambda item: item[0], reverse=True)
    return parsed


def select_tag(tags: list[dict[str, Any]], spec: str) -> dict[str, Any] | None:
    """选出满足 spec 的最高 tag

    Raises:
        ValueError: spec 不是合法的 npm 版本范围
    """
    ordered = sort_tags(tags)
    if not ordered:
        return None
    if spec in LATEST:
        return ordered[0][1]
    npm_spec = NpmSpec(spec)
    for version, tag in ordered:
        if npm_spec.match(version):
            return tag
    return None


class VersionResolver:
    """把版本范围解析为具体 tag"""

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or get_config()

    def validate(self, dep: Dependency) -> Dependency:
        if not needs_lookup(dep.version):
            return dep
        logger.info("解析版本: %s@%s", dep.name, dep.version)
        tags = self.fetch_tags(dep.name)
        try:
            tag = select_tag(tags, dep.version)
        except ValueError as e:
            raise VersionNotFoundError(
                f"无法解析版本范围: {dep.name}@{dep.version} - {e}",
            ) from e
        if tag is None:
            raise VersionNotFoundError(
                f"没有满足 {dep.version} 的版本: {dep.name} "
                f"(共 {len(tags)} 个 tag)",
            )
        dep.version = str(tag["name"])
        dep.url = tag.get("zipball_url") or dep.url
        logger.info("  %s -> %s", dep.name, dep.version)
        return dep

    def fetch_tags(self, name: str) -> list[dict[str, Any]]:
        """分页获取仓库全部 tag

        Raises:
            TagFetchError: 请求失败或响应不是 tag 列表
        """
        base = f"{self.config.github_api_url.rstrip('/')}/repos/{name}/tags"
        tags: list[dict[str, Any]] = []
        for page in range(1, _MAX_PAGES + 1):
            url = f"{base}?per_page={_PER_PAGE}&page={page}"
            try:
                body = get_json(
                    url, headers=self._headers(),
                    timeout=self.config.http_timeout,
                )
            except urllib.error.HTTPError as e:
                raise TagFetchError(
                    f"获取 tag 失败: {name} (HTTP {e.code} {e.reason})",
                    status_code=e.code,
                ) from e
            except (
                urllib.error.URLError, http.client.HTTPException,
                OSError, ValueError, ValidationError,
            ) as e:
                raise TagFetchError(f"获取 tag 失败: {name} - {e}") from e
            if not isinstance(body, list):
                raise TagFetchError(f"tag 列表格式错误: {name}")
            tags.extend(t for t in body if isinstance(t, dict))
            if len(body) < _PER_PAGE:
                break
        logger.debug("获取到 %d 个 tag: %s", len(tags), name)
        return tags

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.config.github_token:
            headers["Authorization"] = f"token {self.config.github_token}"
        return headers
