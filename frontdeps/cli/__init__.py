"""frontdeps 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

import os

import click

from frontdeps import __version__
from frontdeps.core.config import init_config
from frontdeps.utils.logger import setup_logging


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", default="", help="框架配置文件路径（YAML）")
def main(config_path: str) -> None:
    """frontdeps - 前端第三方依赖安装工具"""
    setup_logging(
        level=os.getenv("FRONTDEPS_LOG_LEVEL", "WARNING"),
        json_output=os.getenv("FRONTDEPS_LOG_JSON", "") == "1",
    )
    if config_path:
        init_config(config_path)


# 注册各领域子命令
from frontdeps.cli.cmd_install import register as _reg_install  # noqa: E402
from frontdeps.cli.cmd_registry import register as _reg_registry  # noqa: E402

_reg_install(main)
_reg_registry(main)
