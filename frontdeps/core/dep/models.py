"""依赖数据模型

数据类:
- Dependency: 单个依赖描述符的安装状态
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_VERSION = "master"


@dataclass
class Dependency:
    """单个依赖（用户声明的或从清单中发现的子依赖）

    本地/远程分支在构造时确定，之后不再改变。
    resources 在放置前必须已确定；location 在资源解析前必须已确定。
    """

    source: str
    id: str
    name: str
    destination: Path
    output: Path | None = None
    temp: Path | None = None
    is_local: bool = False
    keep: bool = False           # 本地源已位于目标目录内，不复制
    version: str = DEFAULT_VERSION
    url: str | None = None
    location: Path | None = None
    resources: list[Path] | None = None
    dependencies: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)

    @property
    def is_remote(self) -> bool:
        return not self.is_local

    def __str__(self) -> str:
        if self.is_local:
            return self.id
        return f"{self.name}@{self.version}"
