"""描述符解析测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from frontdeps.core.dep.locator import archive_url, locate, split_source


class TestLocal:
    def test_existing_path_is_local(self, workdir: Path) -> None:
        (workdir / "local" / "lib").mkdir(parents=True)
        dep = locate("local/lib", "libs")
        assert dep.is_local
        assert dep.url is None
        assert dep.location == (workdir / "local" / "lib").resolve()
        assert dep.resources == [dep.location]

    def test_dot_prefix_is_local_even_if_missing(self, workdir: Path) -> None:
        dep = locate("./nowhere", "libs")
        assert dep.is_local
        assert dep.url is None

    @pytest.mark.parametrize(
        ("destination", "keep"),
        [(".", True), ("local", True), ("libs", False)],
    )
    def test_keep_when_inside_destination(
        self, workdir: Path, destination: str, keep: bool,
    ) -> None:
        (workdir / "local" / "lib").mkdir(parents=True)
        assert locate("local/lib", destination).keep is keep

    def test_explicit_resources_resolved_against_location(self, workdir: Path) -> None:
        lib = workdir / "vendor"
        lib.mkdir()
        (lib / "a.js").write_text("a")
        (lib / "c.js").write_text("c")
        dep = locate("vendor#c.js|missing.js|a.js", "libs")
        assert dep.resources == [(lib / "c.js").resolve(), (lib / "a.js").resolve()]


class TestRemote:
    def test_github_project_defaults_to_master(self, workdir: Path) -> None:
        dep = locate("popeindustries/buddy", "libs")
        assert dep.is_remote
        assert dep.version == "master"
        assert dep.id == "buddy"
        assert dep.name == "popeindustries/buddy"
        assert dep.url == "https://github.com/popeindustries/buddy/archive/master.zip"

    def test_version_parsed(self, workdir: Path) -> None:
        dep = locate("popeindustries/buddy@0.4.0", "libs")
        assert dep.version == "0.4.0"
        assert dep.url.endswith("/archive/0.4.0.zip")

    def test_named_source_has_no_url(self, workdir: Path) -> None:
        dep = locate("jquery@1.x", "libs")
        assert dep.url is None
        assert dep.id == dep.name == "jquery"
        assert dep.version == "1.x"

    @pytest.mark.parametrize(
        ("source", "version"),
        [("@scope/pkg@^1.0", "^1.0"), ("@scope/pkg", "master")],
    )
    def test_scoped_name_keeps_leading_at(
        self, workdir: Path, source: str, version: str,
    ) -> None:
        dep = locate(source, "libs")
        assert dep.id == dep.name == "@scope/pkg"
        assert dep.version == version
        assert dep.url is None

    def test_explicit_resources_kept_in_order(self, workdir: Path) -> None:
        dep = locate("popeindustries/lib#lib/pi/dom|lib/pi/event.js|lib/pi/utils", "libs")
        assert dep.resources == [
            Path("lib/pi/dom"), Path("lib/pi/event.js"), Path("lib/pi/utils"),
        ]

    def test_output_and_destination_absolute(self, workdir: Path) -> None:
        dep = locate("jquery", "libs/vendor", "libs/js/libs.js", ".tmp")
        assert dep.destination == workdir.resolve() / "libs" / "vendor"
        assert dep.output == workdir.resolve() / "libs" / "js" / "libs.js"
        assert dep.temp == workdir.resolve() / ".tmp"


def test_split_source_strips_empty_entries() -> None:
    assert split_source("a/b#x.js||y.js|") == ("a/b", ["x.js", "y.js"])
    assert split_source("jquery") == ("jquery", [])


def test_archive_url_custom_base() -> None:
    assert archive_url("a/b", "1.0.0", "https://mirror.test/") == (
        "https://mirror.test/a/b/archive/1.0.0.zip"
    )
