"""终端输出抽象

安装器通过 Terminal 协议输出面向用户的进度信息，与 logging 日志分离。
默认 NullTerminal 静默；CLI 使用基于 click 的 ConsoleTerminal。
"""

from __future__ import annotations

from typing import Protocol

import click


GREEN = "green"
YELLOW = "yellow"


class Terminal(Protocol):
    """终端输出协议，level 为缩进层级"""

    def debug(self, msg: str, level: int = 1) -> None:
        ...

    def warn(self, msg: str) -> None:
        ...

    def print(self, msg: str, level: int = 1) -> None:
        ...

    def strong(self, msg: str) -> str:
        ...

    def colour(self, msg: str, code: str) -> str:
        ...


class NullTerminal:
    """静默实现，所有输出丢弃"""

    def debug(self, msg: str, level: int = 1) -> None:
        pass

    def warn(self, msg: str) -> None:
        pass

    def print(self, msg: str, level: int = 1) -> None:
        pass

    def strong(self, msg: str) -> str:
        return msg

    def colour(self, msg: str, code: str) -> str:
        return msg


class ConsoleTerminal:
    """基于 click 的彩色终端输出

    warn 写 stderr；debug 仅在 verbose 时输出。
    """

    def __init__(self, verbose: bool = False, color: bool | None = None) -> None:
        self.verbose = verbose
        self.color = color

    def _indent(self, level: int) -> str:
        return "  " * max(0, level)

    def debug(self, msg: str, level: int = 1) -> None:
        if self.verbose:
            click.echo(
                f"{self._indent(level)}{click.style('debug', dim=True)} {msg}",
                color=self.color,
            )

    def warn(self, msg: str) -> None:
        click.echo(
            f"{click.style('warning', fg=YELLOW, bold=True)} {msg}",
            err=True, color=self.color,
        )

    def print(self, msg: str, level: int = 1) -> None:
        click.echo(f"{self._indent(level)}{msg}", color=self.color)

    def strong(self, msg: str) -> str:
        return click.style(msg, bold=True)

    def colour(self, msg: str, code: str) -> str:
        return click.style(msg, fg=code)
