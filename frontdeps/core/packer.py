"""输出打包

把声明了相同 output 的依赖资源按依赖顺序合并、压缩后写入 output。
无论成功与否，结束时都会清理批次临时目录。
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import rjsmin

from frontdeps.core.context import InstallContext, remove_temp
from frontdeps.core.dep.models import Dependency
from frontdeps.core.exceptions import PackError
from frontdeps.utils.terminal import GREEN
from frontdeps.utils.yaml_io import atomic_write

logger = logging.getLogger(__name__)


def group_outputs(dependencies: list[Dependency]) -> dict[Path, list[Path]]:
    """按 output 分组收集资源，保持依赖列表顺序"""
    outputs: dict[Path, list[Path]] = {}
    for dep in dependencies:
        if dep.output is None:
            continue
        outputs.setdefault(dep.output, []).extend(dep.resources or [])
    return outputs


def _expand(resource: Path) -> list[Path]:
    # 目录资源展开为其中的 .js 文件
    if resource.is_dir():
        return sorted(p for p in resource.rglob("*.js") if p.is_file())
    return [resource]


def concat_resources(resources: list[Path]) -> str:
    """读取并以换行拼接资源内容"""
    contents = []
    for resource in resources:
        for path in _expand(resource):
            try:
                contents.append(path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError) as e:
                raise PackError(f"读取资源失败: {path} - {e}") from e
    return "\n".join(contents)


def minify(source: str) -> str:
    try:
        return rjsmin.jsmin(source)
    except (TypeError, ValueError) as e:
        raise PackError(f"压缩失败: {e}") from e


def pack(ctx: InstallContext) -> list[str]:
    """写出所有 output 文件，返回写出的路径（相对当前目录）"""
    written: list[str] = []
    term = ctx.terminal
    try:
        for output, resources in group_outputs(ctx.dependencies).items():
            content = minify(concat_resources(resources))
            try:
                atomic_write(output, content)
            except OSError as e:
                raise PackError(f"写入输出文件失败: {output} - {e}") from e
            relative = os.path.relpath(output)
            term.print(
                f"{term.colour('已压缩', GREEN)} {term.strong(relative)}", 1,
            )
            logger.info("已打包 %d 个资源 -> %s", len(resources), relative)
            written.append(relative)
            ctx.files.append(relative)
    finally:
        remove_temp(ctx.temp)
    return written
