"""单个依赖的安装步骤

- locator.py: 描述符解析
- registry.py: 注册表查询
- versions.py: 版本范围解析
- fetcher.py: 归档下载与解压
- resources.py: 资源解析
- mover.py: 资源放置
"""

from frontdeps.core.dep.fetcher import ArchiveFetcher
from frontdeps.core.dep.locator import locate
from frontdeps.core.dep.models import Dependency
from frontdeps.core.dep.mover import ResourceMover
from frontdeps.core.dep.registry import PackageRegistry
from frontdeps.core.dep.resources import ResourceResolver
from frontdeps.core.dep.versions import VersionResolver

__all__ = [
    "ArchiveFetcher",
    "Dependency",
    "PackageRegistry",
    "ResourceMover",
    "ResourceResolver",
    "VersionResolver",
    "locate",
]
