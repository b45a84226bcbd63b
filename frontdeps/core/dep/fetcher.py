"""归档拉取器

职责:
- 下载 zip 归档到依赖独占的临时子目录（同名包可并行拉取）
- 解压并记录解压后的根目录
"""

from __future__ import annotations

import http.client
import logging
import re
import tempfile
import urllib.error
import zipfile
from pathlib import Path, PurePosixPath

from frontdeps.core.config import Config, get_config
from frontdeps.core.dep.locator import is_within
from frontdeps.core.dep.models import Dependency
from frontdeps.core.exceptions import ExtractError, FetchError, ValidationError
from frontdeps.utils.net import download

logger = logging.getLogger(__name__)

_UNSAFE_CHARS_RE = re.compile(r"[^\w.@-]")


def archive_filename(dep: Dependency) -> str:
    """临时目录中的归档文件名: {id}-{version}.zip"""
    return _UNSAFE_CHARS_RE.sub("_", f"{dep.id}-{dep.version}") + ".zip"


def extract_archive(archive: Path, target: Path) -> Path:
    """解压 zip 到 target，返回归档内的根目录

    根目录取第一个目录条目；归档没有目录条目时取第一个条目的顶层路径。

    Raises:
        ExtractError: 归档损坏、条目越界或缺少根目录
    """
    target = target.resolve()
    try:
        with zipfile.ZipFile(archive) as zf:
            entries = zf.infolist()
            if not entries:
                raise ExtractError(f"归档为空: {archive.name}")
            root: Path | None = None
            for entry in entries:
                dest = (target / entry.filename).resolve()
                if not is_within(dest, target):
                    raise ExtractError(
                        f"归档条目越界: {entry.filename} ({archive.name})",
                    )
                if root is None and entry.is_dir():
                    root = dest
            zf.extractall(target)
    except (
        zipfile.BadZipFile, zipfile.LargeZipFile,
        RuntimeError, NotImplementedError, ValueError, OSError,
    ) as e:
        # 加密条目 RuntimeError，不支持的压缩算法 NotImplementedError
        raise ExtractError(f"解压失败: {archive.name} - {e}") from e

    if root is None:
        top = PurePosixPath(entries[0].filename).parts[0]
        root = target / top
    if not root.is_dir():
        raise ExtractError(f"归档缺少根目录: {archive.name}")
    return root


class ArchiveFetcher:
    """下载并解压依赖归档"""

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or get_config()

    def fetch(self, dep: Dependency) -> Dependency:
        if not dep.url:
            raise FetchError(f"未解析出下载地址: {dep.id}")
        temp = dep.temp or Path(self.config.temp_dir).resolve()
        filename = archive_filename(dep)
        try:
            temp.mkdir(parents=True, exist_ok=True)
            scratch = Path(tempfile.mkdtemp(dir=temp, prefix=filename[:-4] + "-"))
        except OSError as e:
            raise FetchError(f"无法创建临时目录: {temp} - {e}") from e
        archive = scratch / filename

        logger.info("下载归档: %s", dep.url)
        try:
            download(dep.url, archive, timeout=self.config.http_timeout)
        except (
            urllib.error.URLError, http.client.HTTPException,
            OSError, ValidationError,
        ) as e:
            raise FetchError(f"下载失败: {dep.url} - {e}") from e

        root = extract_archive(archive, scratch)
        if dep.location is None:
            dep.location = root
        logger.info("  已解压: %s -> %s", archive.name, dep.location)
        return dep
