"""依赖安装器

用法:
    from frontdeps.core.installer import install

    files = install({
        "libs/vendor": {
            "sources": ["jquery@1.x", "popeindustries/lib#lib/pi/dom"],
            "output": "libs/js/vendor.js",
        },
    })

流程（每个依赖）:
  本地: 放置
  远程: 注册表查询 -> 版本解析 -> 下载解压 -> 资源解析 -> 放置

所有依赖并行安装；单个依赖失败只输出警告并从批次中移除。
清单中发现的子依赖在下一轮并行安装，并排在父依赖之前，
轮数由 Config.max_child_depth 限制。全部安装完成后执行打包。
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from frontdeps.core.config import Config, get_config
from frontdeps.core.context import InstallContext, remove_temp
from frontdeps.core.dep import (
    ArchiveFetcher,
    Dependency,
    PackageRegistry,
    ResourceMover,
    ResourceResolver,
    VersionResolver,
    locate,
)
from frontdeps.core.exceptions import (
    ConfigError,
    DependencyError,
    PackError,
)
from frontdeps.core.packer import pack
from frontdeps.utils.terminal import GREEN, NullTerminal, Terminal

logger = logging.getLogger(__name__)

Step = Callable[[Dependency], Dependency]
InstallCallback = Callable[[Optional[Exception], list[str]], None]


class DependencyInstaller:
    """单个依赖的顺序安装流水线"""

    def __init__(self, config: Config) -> None:
        self.registry = PackageRegistry(config)
        self.versions = VersionResolver(config)
        self.fetcher = ArchiveFetcher(config)
        self.resources = ResourceResolver(config.manifest_files)
        self.mover = ResourceMover()

    def steps(self, dep: Dependency) -> list[Step]:
        if dep.is_local:
            return [self.mover.move]
        return [
            self.registry.lookup,
            self.versions.validate,
            self.fetcher.fetch,
            self.resources.resolve,
            self.mover.move,
        ]

    def install(self, dep: Dependency) -> list[str]:
        """执行全部步骤，返回发现的子依赖描述符"""
        for step in self.steps(dep):
            step(dep)
        return list(dep.dependencies)


def build_dependencies(
    configuration: Mapping[str, Any], ctx: InstallContext,
) -> list[Dependency]:
    """从 {destination: {sources, output}} 构建依赖列表"""
    deps: list[Dependency] = []
    for destination, data in configuration.items():
        if not isinstance(data, Mapping):
            raise ConfigError(f"目标 {destination} 的配置必须是映射")
        sources = data.get("sources") or []
        if isinstance(sources, str) or not isinstance(sources, list):
            raise ConfigError(f"目标 {destination} 的 sources 必须是列表")
        for source in sources:
            deps.append(locate(
                str(source), destination, data.get("output"), ctx.temp,
                github_archive_url=ctx.config.github_archive_url,
            ))
    return deps


def _install_pass(
    ctx: InstallContext,
    installer: DependencyInstaller,
    deps: list[Dependency],
) -> tuple[list[Dependency], list[tuple[Dependency, str]]]:
    """并行安装一轮依赖，返回 (成功的依赖, [(父依赖, 子描述符)])"""
    if not deps:
        return [], []
    limit = ctx.config.max_workers
    workers = min(limit, len(deps)) if limit else len(deps)
    term = ctx.terminal

    installed: list[Dependency] = []
    children: list[tuple[Dependency, str]] = []
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [(dep, pool.submit(installer.install, dep)) for dep in deps]
        for dep, future in futures:
            try:
                discovered = future.result()
            except (DependencyError, OSError) as e:
                logger.warning("安装失败，已跳过: %s - %s", dep.source, e)
                term.warn(f"{dep.source}: {e}")
                continue
            installed.append(dep)
            ctx.files.extend(dep.files)
            children.extend((dep, source) for source in discovered)
            term.print(
                f"{term.colour('已安装', GREEN)} {term.strong(dep.id)} "
                f"-> {term.strong(os.path.relpath(dep.destination))}",
                1,
            )
    return installed, children


def _spawn_children(
    ctx: InstallContext, pending: list[tuple[Dependency, str]],
) -> list[Dependency]:
    """为子描述符创建依赖，跳过同一目标目录下已安装的同名包"""
    seen = {(dep.destination, dep.id) for dep in ctx.dependencies}
    spawned: list[Dependency] = []
    for parent, source in pending:
        child = locate(
            source, parent.destination, parent.output, ctx.temp,
            github_archive_url=ctx.config.github_archive_url,
        )
        key = (child.destination, child.id)
        if key in seen:
            logger.debug("子依赖已存在，跳过: %s (来自 %s)", source, parent.id)
            continue
        seen.add(key)
        spawned.append(child)
    return spawned


def install_all(ctx: InstallContext) -> None:
    """安装上下文中的全部依赖及子依赖"""
    installer = DependencyInstaller(ctx.config)
    ctx.dependencies, pending = _install_pass(ctx, installer, ctx.dependencies)

    depth = 0
    while pending and depth < ctx.config.max_child_depth:
        depth += 1
        children = _spawn_children(ctx, pending)
        ctx.terminal.debug(f"安装第 {depth} 层子依赖: {len(children)} 个", 1)
        installed, pending = _install_pass(ctx, installer, children)
        # 子依赖排在父依赖之前，打包时先输出
        ctx.dependencies = installed + ctx.dependencies

    if pending:
        logger.warning(
            "子依赖层级超过 max_child_depth=%d，未安装: %s",
            ctx.config.max_child_depth,
            ", ".join(source for _, source in pending),
        )


def install(
    configuration: Mapping[str, Any],
    terminal: Terminal | None = None,
    callback: InstallCallback | None = None,
    *,
    config: Config | None = None,
) -> list[str]:
    """安装依赖并打包，返回生成的全部文件路径

    单个依赖失败不影响批次；打包失败时抛出 PackError。
    若提供 callback，则以 callback(error, files) 通知结果而不抛出异常。
    """
    cfg = config or get_config()
    ctx = InstallContext(
        config=cfg,
        temp=Path(cfg.temp_dir).resolve(),
        terminal=terminal or NullTerminal(),
    )
    try:
        ctx.dependencies = build_dependencies(configuration, ctx)
        ctx.temp.mkdir(parents=True, exist_ok=True)
        ctx.terminal.debug(
            f"已创建临时目录: "
            f"{ctx.terminal.strong(os.path.relpath(ctx.temp))}",
            1,
        )
        install_all(ctx)
        pack(ctx)
    except (ConfigError, PackError, OSError) as e:
        logger.error("安装批次失败: %s", e)
        if callback is None:
            raise
        remove_temp(ctx.temp)
        callback(e, list(ctx.files))
        return ctx.files
    finally:
        remove_temp(ctx.temp)

    logger.info("安装完成: %d 个依赖, %d 个文件", len(ctx.dependencies), len(ctx.files))
    if callback is not None:
        callback(None, list(ctx.files))
    return ctx.files


def clean(temp: str | Path | None = None) -> None:
    """强制清理临时目录"""
    path = Path(temp or get_config().temp_dir).resolve()
    remove_temp(path)
