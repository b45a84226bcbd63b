"""资源解析器

职责:
- 按清单文件（package.json / component.json / bower.json）解析入口文件
- 收集清单中声明的子依赖
- 把 index / index.js 入口重命名为 {id}.js
"""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any

from frontdeps.core.config import DEFAULT_MANIFEST_FILES
from frontdeps.core.dep.locator import is_within
from frontdeps.core.dep.models import Dependency
from frontdeps.core.exceptions import (
    ManifestParseError,
    ManifestReadError,
    ResourcesUnresolvedError,
)

logger = logging.getLogger(__name__)

RE_INDEX = re.compile(r"^index(?:\.js)?$")


def main_entries(manifest: dict[str, Any]) -> list[str]:
    """清单中的入口文件列表

    main 可以是字符串或数组；component.json 用 scripts 数组声明。
    """
    main = manifest.get("main")
    if isinstance(main, str) and main:
        return [main]
    if isinstance(main, list):
        return [m for m in main if isinstance(m, str) and m]
    scripts = manifest.get("scripts")
    if isinstance(scripts, list):
        return [s for s in scripts if isinstance(s, str) and s]
    return []


def child_descriptors(manifest: dict[str, Any]) -> list[str]:
    """清单 dependencies 映射 -> name@range 描述符"""
    deps = manifest.get("dependencies")
    if not isinstance(deps, dict):
        return []
    return [f"{name}@{version}" for name, version in deps.items()]


class ResourceResolver:
    """确定依赖需要安装的资源文件"""

    def __init__(self, manifest_files: list[str] | None = None) -> None:
        self.manifest_files = list(manifest_files or DEFAULT_MANIFEST_FILES)

    def resolve(self, dep: Dependency) -> Dependency:
        if dep.location is None:
            raise ResourcesUnresolvedError(f"依赖尚未拉取: {dep.id}")

        # 描述符中已指定资源
        if dep.resources is not None:
            requested = list(dep.resources)
            dep.resources = []
            for entry in requested:
                self._add(dep, str(entry))
            return dep

        dep.resources = []
        for filename in self.manifest_files:
            manifest = self.read_manifest(dep, filename)
            if manifest is None:
                continue
            entries = main_entries(manifest)
            if not entries:
                logger.debug("%s 中没有 main: %s", filename, dep.id)
                continue
            for entry in entries:
                self._add(dep, entry)
            dep.dependencies.extend(child_descriptors(manifest))
            logger.info(
                "资源解析完成: %s (%s, %d 个资源, %d 个子依赖)",
                dep.id, filename, len(dep.resources), len(dep.dependencies),
            )
            return dep

        raise ResourcesUnresolvedError(
            f"无法解析资源: {dep.id} (已尝试 {', '.join(self.manifest_files)})",
        )

    def read_manifest(self, dep: Dependency, filename: str) -> dict[str, Any] | None:
        """读取清单，文件不存在返回 None

        Raises:
            ManifestReadError: 文件存在但无法读取
            ManifestParseError: JSON 格式错误
        """
        path = dep.location / filename
        if not path.is_file():
            return None
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestReadError(f"读取失败: {dep.id} {filename} - {e}") from e
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ManifestParseError(f"解析失败: {dep.id} {filename} - {e}") from e
        if not isinstance(data, dict):
            raise ManifestParseError(f"清单顶层不是对象: {dep.id} {filename}")
        return data

    def _add(self, dep: Dependency, entry: str) -> None:
        location = dep.location
        entry = os.path.normpath(entry)
        if RE_INDEX.match(entry):
            entry = self._rename_index(dep, entry)

        path = (location / entry).resolve()
        if not is_within(path, location.resolve()):
            logger.warning("忽略越界资源: %s (%s)", entry, dep.id)
            return
        if not path.exists():
            logger.debug("资源不存在，已忽略: %s (%s)", entry, dep.id)
            return
        dep.resources.append(path)
        logger.debug("添加资源: %s", path.name)

    @staticmethod
    def _rename_index(dep: Dependency, entry: str) -> str:
        if not os.path.splitext(entry)[1]:
            entry += ".js"
        newname = f"{dep.id}.js"
        src = dep.location / entry
        if src.exists():
            src.rename(dep.location / newname)
            logger.debug("重命名入口: %s -> %s", entry, newname)
        return newname
