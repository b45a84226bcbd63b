"""资源放置

本地依赖复制（保留原文件），远程依赖从临时目录移动。
按列表顺序逐个放置，第一次失败即中止。
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from frontdeps.core.dep.locator import is_within
from frontdeps.core.dep.models import Dependency
from frontdeps.core.exceptions import PlacementError

logger = logging.getLogger(__name__)


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def place(resource: Path, destination: Path, *, copy: bool) -> Path:
    """把单个文件或目录放到 destination 下，已存在的同名目标会被替换"""
    target = destination / resource.name
    if target == resource:
        return target
    if resource.is_dir() and is_within(destination, resource):
        raise PlacementError(f"目标目录位于资源目录内: {resource} -> {destination}")
    if target.exists() or target.is_symlink():
        _remove(target)
    if not copy:
        shutil.move(str(resource), str(target))
    elif resource.is_dir():
        shutil.copytree(resource, target)
    else:
        shutil.copy2(resource, target)
    return target


class ResourceMover:
    """把解析出的资源放到目标目录并记录最终路径"""

    def move(self, dep: Dependency) -> Dependency:
        if dep.keep:
            logger.debug("本地源位于目标目录内，跳过放置: %s", dep.id)
            return dep
        if dep.resources is None:
            raise PlacementError(f"资源尚未解析: {dep.id}")

        try:
            dep.destination.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PlacementError(
                f"创建目标目录失败: {dep.destination} - {e}",
            ) from e

        placed: list[Path] = []
        for resource in dep.resources:
            try:
                target = place(resource, dep.destination, copy=dep.is_local)
            except (OSError, shutil.Error) as e:
                raise PlacementError(
                    f"放置资源失败: {resource.name} -> {dep.destination} - {e}",
                ) from e
            placed.append(target)
            dep.files.append(os.path.relpath(target))
            logger.debug(
                "%s %s -> %s", "复制" if dep.is_local else "移动",
                resource.name, dep.destination,
            )
        dep.resources = placed
        return dep
