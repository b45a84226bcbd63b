"""版本范围解析测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from frontdeps.core.config import Config
from frontdeps.core.dep.locator import locate
from frontdeps.core.dep.versions import (
    VersionResolver,
    needs_lookup,
    parse_tag,
    select_tag,
)
from frontdeps.core.exceptions import TagFetchError, VersionNotFoundError

TAGS = ["1.3.2", "1.2.3", "1.4.4", "1.3.3"]


@pytest.fixture
def underscore(workdir: Path, remote):
    remote.add_tags("documentcloud/underscore", TAGS)
    return locate("documentcloud/underscore", "libs")


class TestValidate:
    @pytest.mark.parametrize(
        ("spec", "expected"),
        [
            ("*", "1.4.4"),
            ("latest", "1.4.4"),
            (">=1.3.2", "1.4.4"),
            (">1.3.2", "1.4.4"),
            ("1.3.x", "1.3.3"),
            ("1.x", "1.4.4"),
            ("~1.3.2", "1.3.3"),
        ],
    )
    def test_highest_satisfying_version(
        self, underscore, config: Config, spec: str, expected: str,
    ) -> None:
        underscore.version = spec
        VersionResolver(config).validate(underscore)
        assert underscore.version == expected
        assert underscore.url.endswith(f"/zipball/{expected}")

    @pytest.mark.parametrize("version", ["1.2.3", "master"])
    def test_exact_version_skips_lookup(
        self, underscore, remote, config: Config, version: str,
    ) -> None:
        underscore.version = version
        url = underscore.url
        VersionResolver(config).validate(underscore)
        assert underscore.version == version
        assert underscore.url == url
        assert remote.requests == []

    def test_no_match_raises(self, underscore, config: Config) -> None:
        underscore.version = "2.x"
        with pytest.raises(VersionNotFoundError, match="2.x"):
            VersionResolver(config).validate(underscore)

    def test_invalid_range_raises(self, underscore, config: Config) -> None:
        underscore.version = "not a range!"
        with pytest.raises(VersionNotFoundError):
            VersionResolver(config).validate(underscore)

    def test_tag_fetch_error_carries_status(
        self, workdir: Path, remote, config: Config,
    ) -> None:
        dep = locate("nobody/nothing@1.x", "libs")
        with pytest.raises(TagFetchError) as exc_info:
            VersionResolver(config).validate(dep)
        assert exc_info.value.status_code == 404


class TestHelpers:
    @pytest.mark.parametrize(
        ("version", "expected"),
        [("1.2.3", False), ("master", False), ("1.x", True), ("~1.2.0", True), ("latest", True)],
    )
    def test_needs_lookup(self, version: str, expected: bool) -> None:
        assert needs_lookup(version) is expected

    def test_parse_tag_accepts_v_prefix(self) -> None:
        assert str(parse_tag("v1.2.3")) == "1.2.3"
        assert parse_tag("release-candidate") is None

    def test_select_tag_ignores_non_semver(self) -> None:
        tags = [{"name": "nightly"}, {"name": "v2.0.0"}, {"name": "1.9.0"}]
        assert select_tag(tags, "latest") == {"name": "v2.0.0"}
        assert select_tag(tags, "1.x") == {"name": "1.9.0"}

    def test_select_tag_empty(self) -> None:
        assert select_tag([], "*") is None
