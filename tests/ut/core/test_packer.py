"""输出打包测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from frontdeps.core.config import Config
from frontdeps.core.context import InstallContext
from frontdeps.core.dep.locator import locate
from frontdeps.core.exceptions import PackError
from frontdeps.core.packer import concat_resources, group_outputs, minify, pack


def _placed(workdir: Path, source: str, output: str | None, files: dict[str, str]):
    dep = locate(source, "libs", output)
    dep.resources = []
    for name, content in files.items():
        path = workdir / "libs" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        dep.resources.append(path)
    return dep


@pytest.fixture
def ctx(workdir: Path, config: Config) -> InstallContext:
    temp = Path(config.temp_dir)
    temp.mkdir(parents=True)
    (temp / "leftover.zip").write_bytes(b"x")
    return InstallContext(config=config, temp=temp)


def test_shared_output_concatenated_in_order(workdir: Path, ctx: InstallContext) -> None:
    ctx.dependencies = [
        _placed(workdir, "a/first", "libs/js/libs.js", {"first.js": "var first = 1;"}),
        _placed(workdir, "b/second", "libs/js/libs.js", {"second.js": "var second = 2;"}),
        _placed(workdir, "c/alone", None, {"alone.js": "var alone;"}),
    ]

    written = pack(ctx)

    assert written == [str(Path("libs/js/libs.js"))]
    assert ctx.files == written
    content = (workdir / "libs" / "js" / "libs.js").read_text()
    assert content.index("first") < content.index("second")
    assert "alone" not in content
    assert not ctx.temp.exists()


def test_content_is_minified(workdir: Path, ctx: InstallContext) -> None:
    ctx.dependencies = [
        _placed(workdir, "a/spaced", "out.js", {
            "spaced.js": "// comment\nvar   spaced   =   1 ;\n\n\n",
        }),
    ]
    pack(ctx)
    content = (workdir / "out.js").read_text()
    assert "comment" not in content
    assert "var spaced=1;" in content


def test_no_outputs_still_cleans_temp(ctx: InstallContext) -> None:
    assert pack(ctx) == []
    assert not ctx.temp.exists()


def test_read_failure_raises_and_cleans(workdir: Path, ctx: InstallContext) -> None:
    dep = locate("a/broken", "libs", "out.js")
    dep.resources = [workdir / "libs" / "gone.js"]
    ctx.dependencies = [dep]
    with pytest.raises(PackError, match="gone.js"):
        pack(ctx)
    assert not ctx.temp.exists()
    assert not (workdir / "out.js").exists()


def test_group_outputs_skips_unbundled(workdir: Path) -> None:
    a = _placed(workdir, "a/x", "one.js", {"x.js": "x"})
    b = _placed(workdir, "b/y", None, {"y.js": "y"})
    c = _placed(workdir, "c/z", "one.js", {"z.js": "z"})
    groups = group_outputs([a, b, c])
    assert list(groups) == [a.output]
    assert [p.name for p in groups[a.output]] == ["x.js", "z.js"]


def test_directory_resources_expanded(workdir: Path) -> None:
    d = workdir / "pkg"
    (d / "sub").mkdir(parents=True)
    (d / "b.js").write_text("b")
    (d / "sub" / "a.js").write_text("a")
    (d / "readme.md").write_text("ignored")
    assert concat_resources([d]) == "b\na"


def test_minify_passthrough_for_simple_code() -> None:
    assert minify("var a = 1;") == "var a=1;"
