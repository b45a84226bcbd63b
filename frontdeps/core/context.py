"""安装批次上下文

每次 install() 调用持有独立的上下文，替代模块级全局状态。
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from frontdeps.core.config import Config
from frontdeps.core.dep.models import Dependency
from frontdeps.utils.terminal import NullTerminal, Terminal

logger = logging.getLogger(__name__)


@dataclass
class InstallContext:
    """单个安装批次的状态"""

    config: Config
    temp: Path
    terminal: Terminal = field(default_factory=NullTerminal)
    dependencies: list[Dependency] = field(default_factory=list)
    files: list[str] = field(default_factory=list)


def remove_temp(temp: Path) -> None:
    """删除临时目录（不存在时忽略）"""
    if temp.exists():
        shutil.rmtree(temp)
        logger.debug("已清理临时目录: %s", temp)
