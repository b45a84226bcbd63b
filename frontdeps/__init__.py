"""frontdeps - 前端第三方依赖安装工具"""

__version__ = "0.1.0"

from frontdeps.core.installer import clean, install  # noqa: E402

__all__ = ["__version__", "clean", "install"]
