"""网络工具: URL 安全校验 + 基于 urllib 的 JSON 请求与流式下载

调用方负责把 urllib.error.HTTPError / URLError / OSError
包装为各自的业务异常。
"""

from __future__ import annotations

import json
import logging
import shutil
import urllib.request
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from frontdeps.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES = frozenset(("http", "https"))

USER_AGENT = "frontdeps"

_CHUNK_SIZE = 64 * 1024


def validate_url_scheme(url: str, *, context: str = "") -> None:
    """校验 URL 仅使用 http/https，防止 file:// 等非预期协议访问

    Raises:
        ValidationError: URL scheme 不在白名单内
    """
    parsed = urlparse(url)
    if parsed.scheme not in _ALLOWED_SCHEMES:
        label = f" ({context})" if context else ""
        raise ValidationError(
            f"不允许的 URL 协议 '{parsed.scheme}'{label}，"
            f"仅支持 http/https: {url}"
        )


def open_url(
    url: str,
    *,
    headers: dict[str, str] | None = None,
    timeout: float | None = None,
) -> Any:
    """发起 GET 请求并返回响应对象（调用方负责关闭）"""
    validate_url_scheme(url, context="GET")
    request = urllib.request.Request(
        url, headers={"User-Agent": USER_AGENT, **(headers or {})},
    )
    if timeout:
        return urllib.request.urlopen(request, timeout=timeout)  # nosec B310
    return urllib.request.urlopen(request)  # nosec B310


def get_json(
    url: str,
    *,
    headers: dict[str, str] | None = None,
    timeout: float | None = None,
) -> Any:
    """GET 并解析 JSON 响应体"""
    logger.debug("GET %s", url)
    with open_url(url, headers=headers, timeout=timeout) as resp:
        return json.loads(resp.read().decode("utf-8"))


def download(
    url: str,
    dest: Path,
    *,
    headers: dict[str, str] | None = None,
    timeout: float | None = None,
) -> Path:
    """流式下载到 dest，失败时删除不完整的文件"""
    dest.parent.mkdir(parents=True, exist_ok=True)
    logger.debug("下载: %s -> %s", url, dest)
    try:
        with open_url(url, headers=headers, timeout=timeout) as resp, \
                open(dest, "wb") as f:
            shutil.copyfileobj(resp, f, _CHUNK_SIZE)
    except Exception:
        dest.unlink(missing_ok=True)
        raise
    return dest
