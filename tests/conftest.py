"""共享 fixture: 模拟注册表 / GitHub tags API / 归档下载

FakeRemote 替换各步骤模块中引用的 get_json / download，
测试全程不访问网络。
"""

from __future__ import annotations

import io
import urllib.error
import zipfile
from pathlib import Path
from typing import Any

import pytest

from frontdeps.core.config import Config

REGISTRY_URL = "https://registry.test/packages"
GITHUB_API_URL = "https://api.github.test"


def make_zip(root: str, files: dict[str, str], *, with_dirs: bool = True) -> bytes:
    """构造 GitHub 风格的 zip 归档：所有文件位于 root/ 目录下"""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        if with_dirs:
            zf.writestr(f"{root}/", "")
        for name, content in files.items():
            zf.writestr(f"{root}/{name}", content)
    return buf.getvalue()


def _not_found(url: str) -> urllib.error.HTTPError:
    return urllib.error.HTTPError(url, 404, "Not Found", None, None)


class FakeRemote:
    """内存中的远程服务"""

    def __init__(self) -> None:
        self.packages: dict[str, str] = {}
        self.tags: dict[str, list[dict[str, str]]] = {}
        self.archives: dict[str, bytes] = {}
        self.requests: list[str] = []

    def add_tags(self, repo: str, names: list[str]) -> None:
        self.tags[repo] = [
            {
                "name": n,
                "zipball_url": f"{GITHUB_API_URL}/repos/{repo}/zipball/{n}",
            }
            for n in names
        ]

    def get_json(self, url: str, **_: Any) -> Any:
        self.requests.append(url)
        if url.startswith(REGISTRY_URL):
            package_id = url.rsplit("/", 1)[1]
            if package_id not in self.packages:
                raise _not_found(url)
            return {"name": package_id, "url": self.packages[package_id]}
        if "/tags" in url:
            repo = url.split("/repos/", 1)[1].split("/tags", 1)[0]
            if repo not in self.tags:
                raise _not_found(url)
            return list(self.tags[repo])
        raise _not_found(url)

    def download(self, url: str, dest: Path, **_: Any) -> Path:
        self.requests.append(url)
        if url not in self.archives:
            raise _not_found(url)
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(self.archives[url])
        return dest


@pytest.fixture
def remote(monkeypatch: pytest.MonkeyPatch) -> FakeRemote:
    fake = FakeRemote()
    monkeypatch.setattr("frontdeps.core.dep.registry.get_json", fake.get_json)
    monkeypatch.setattr("frontdeps.core.dep.versions.get_json", fake.get_json)
    monkeypatch.setattr("frontdeps.core.dep.fetcher.download", fake.download)
    return fake


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config(
        temp_dir=str(tmp_path / ".tmp"),
        registry_url=REGISTRY_URL,
        github_api_url=GITHUB_API_URL,
        github_token="",
    )


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """切换到 tmp_path，使相对路径输出可预测"""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def make_archive():
    """返回 make_zip，供测试构造归档"""
    return make_zip
