"""集中配置管理

提供统一的配置入口，支持从 YAML 文件加载 + 编程式覆盖。
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from frontdeps.core.exceptions import ConfigError
from frontdeps.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_FILES = ["package.json", "component.json", "bower.json"]


@dataclass
class Config:
    """全局配置"""

    # 目录 / 文件
    temp_dir: str = ".tmp"
    dependencies_file: str = "frontdeps.yml"

    # 远程服务
    registry_url: str = "https://registry.bower.io/packages"
    github_api_url: str = "https://api.github.com"
    github_archive_url: str = "https://github.com"
    github_token: str = field(
        default_factory=lambda: os.environ.get("GITHUB_TOKEN", ""),
    )
    http_timeout: float = 30.0

    # 资源解析：按顺序尝试的清单文件名
    manifest_files: list[str] = field(
        default_factory=lambda: list(DEFAULT_MANIFEST_FILES),
    )

    # 执行
    max_workers: int = 0        # 0 = 每个依赖一个线程
    max_child_depth: int = 1    # 子依赖解析轮数，0 = 不安装子依赖

    # 自定义扩展 (放不到字段里的配置项)
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = "configs/frontdeps.yml") -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        data = load_yaml(path)
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()}
        matched = {k: v for k, v in data.items() if k in known and k != "extra"}
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        cfg.validate()
        return cfg

    def validate(self) -> None:
        if not isinstance(self.manifest_files, list) or not self.manifest_files:
            raise ConfigError("manifest_files 必须是非空列表")
        if self.max_workers < 0:
            raise ConfigError(f"max_workers 不能为负数: {self.max_workers}")
        if self.max_child_depth < 0:
            raise ConfigError(
                f"max_child_depth 不能为负数: {self.max_child_depth}",
            )


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = "configs/frontdeps.yml") -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.info("配置已加载: %s", path)
    return _current
