"""包注册表查询

职责:
- 按包名查询注册表，得到 GitHub 仓库地址
- 为命名依赖生成归档下载地址
"""

from __future__ import annotations

import http.client
import logging
import re
import urllib.error
from urllib.parse import quote

from frontdeps.core.config import Config, get_config
from frontdeps.core.dep.locator import archive_url
from frontdeps.core.dep.models import Dependency
from frontdeps.core.exceptions import PackageNotFoundError, ValidationError
from frontdeps.utils.net import get_json

logger = logging.getLogger(__name__)

# git://github.com/a/b.git, https://github.com/a/b, git@github.com:a/b.git
RE_GITHUB_URL = re.compile(r"github\.com[:/]([\w.-]+/[\w.-]+?)(?:\.git)?/?$")


class PackageRegistry:
    """包名 -> GitHub owner/repo 查询"""

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or get_config()

    def lookup(self, dep: Dependency) -> Dependency:
        """为没有 url 的依赖查询注册表，已有 url 时直接返回"""
        if dep.url:
            return dep
        logger.info("查询注册表: %s", dep.id)
        dep.name = self.find_repository(dep.id)
        dep.url = archive_url(
            dep.name, dep.version, self.config.github_archive_url,
        )
        logger.info("  %s -> %s", dep.id, dep.url)
        return dep

    def find_repository(self, package_id: str) -> str:
        """返回包对应的 GitHub owner/repo

        Raises:
            PackageNotFoundError: 包不存在、注册表不可达或返回非 GitHub 地址
        """
        url = f"{self.config.registry_url.rstrip('/')}/{quote(package_id)}"
        try:
            data = get_json(url, timeout=self.config.http_timeout)
        except urllib.error.HTTPError as e:
            raise PackageNotFoundError(
                f"注册表中找不到包: {package_id} (HTTP {e.code})",
            ) from e
        except (
            urllib.error.URLError, http.client.HTTPException,
            OSError, ValueError, ValidationError,
        ) as e:
            raise PackageNotFoundError(
                f"查询注册表失败: {package_id} - {e}",
            ) from e

        repo_url = data.get("url", "") if isinstance(data, dict) else ""
        match = RE_GITHUB_URL.search(repo_url or "")
        if not match:
            raise PackageNotFoundError(
                f"包 {package_id} 没有可用的 GitHub 地址: {repo_url or '(空)'}",
            )
        return match.group(1)
