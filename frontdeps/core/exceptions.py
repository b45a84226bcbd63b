"""统一异常体系

所有业务异常继承 FrontDepsError。
单个依赖安装失败统一为 DependencyError 子类，由安装器降级为警告；
打包阶段失败为 PackError，会中断整个批次。
"""

from __future__ import annotations


class FrontDepsError(Exception):
    """基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(FrontDepsError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class ValidationError(FrontDepsError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"


# =========================================================================
# 单个依赖失败（非致命）
# =========================================================================

class DependencyError(FrontDepsError):
    """依赖包解析、拉取或安装失败"""

    code = "DEPENDENCY_ERROR"


class PackageNotFoundError(DependencyError):
    """注册表中找不到该包"""

    code = "PACKAGE_NOT_FOUND"


class TagFetchError(DependencyError):
    """获取 GitHub tag 列表失败"""

    code = "TAG_FETCH_ERROR"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class VersionNotFoundError(DependencyError):
    """没有满足版本范围的 tag"""

    code = "VERSION_NOT_FOUND"


class FetchError(DependencyError):
    """归档下载失败"""

    code = "FETCH_ERROR"


class ExtractError(DependencyError):
    """归档解压失败"""

    code = "EXTRACT_ERROR"


class ManifestReadError(DependencyError):
    """清单文件存在但无法读取"""

    code = "MANIFEST_READ_ERROR"


class ManifestParseError(DependencyError):
    """清单文件 JSON 格式错误"""

    code = "MANIFEST_PARSE_ERROR"


class ResourcesUnresolvedError(DependencyError):
    """无法从任何清单中解析出资源"""

    code = "RESOURCES_UNRESOLVED"


class PlacementError(DependencyError):
    """资源复制/移动到目标目录失败"""

    code = "PLACEMENT_ERROR"


# =========================================================================
# 打包失败（致命）
# =========================================================================

class PackError(FrontDepsError):
    """合并、压缩或写入输出文件失败"""

    code = "PACK_ERROR"
