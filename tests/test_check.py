import os
import sys
from pathlib import Path

import pytest

from rife_alpha.config import AppConfig, ToolSettings
from rife_alpha.core.exceptions import DependencyNotFoundError
from rife_alpha.tools.check import default_dependencies_dir, locate, resolve_toolchain

pytestmark = pytest.mark.skipif(os.name == "nt", reason="uses POSIX executable scripts")


def make_tool(directory: Path, name: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text("#!/bin/sh\nexit 0\n")
    path.chmod(0o755)
    return path


@pytest.fixture
def bin_dir(tmp_path: Path, monkeypatch) -> Path:
    d = tmp_path / "bin"
    d.mkdir()
    monkeypatch.setenv("PATH", str(d))
    return d


def test_locate_on_search_path(bin_dir: Path):
    tool = make_tool(bin_dir, "magick")
    assert locate(["magick"]) == tool.resolve()


def test_locate_prefers_earlier_names(bin_dir: Path):
    make_tool(bin_dir, "apngasm")
    assert locate(["apngasm64", "apngasm"]).name == "apngasm"

    make_tool(bin_dir, "apngasm64")
    assert locate(["apngasm64", "apngasm"]).name == "apngasm64"


def test_locate_falls_back_to_dependencies_dir(bin_dir: Path, tmp_path: Path):
    fallback = tmp_path / "Dependencies"
    tool = make_tool(fallback, "rife")
    assert locate(["rife"], fallback) == tool.resolve()


def test_locate_reports_every_candidate(bin_dir: Path, tmp_path: Path):
    with pytest.raises(DependencyNotFoundError) as info:
        locate(["apng2gif", "apng2gif64"], tmp_path / "Dependencies")
    assert info.value.names == ["apng2gif", "apng2gif64"]
    assert "dependency not found: apng2gif / apng2gif64" in str(info.value)
    assert "apng2gif64" in info.value.last_error


def test_gif_converter_only_required_for_gif_output(bin_dir: Path, tmp_path: Path):
    fallback = tmp_path / "Dependencies"
    for name in ("magick", "rife", "apngasm64"):
        make_tool(fallback, name)
    config = AppConfig(tools=ToolSettings(dependencies_dir=fallback))

    toolchain = resolve_toolchain(config, want_gif=False)
    assert toolchain.magick.name == "magick"
    assert toolchain.rife.name == "rife"
    assert toolchain.apngasm.name == "apngasm64"
    assert toolchain.apng2gif is None

    with pytest.raises(DependencyNotFoundError, match="apng2gif"):
        resolve_toolchain(config, want_gif=True)

    make_tool(bin_dir, "apng2gif")
    assert resolve_toolchain(config, want_gif=True).apng2gif.name == "apng2gif"


def test_default_dependencies_dir_is_beside_program(tmp_path: Path, monkeypatch):
    monkeypatch.setattr(sys, "argv", [str(tmp_path / "app" / "rife-alpha")])
    assert default_dependencies_dir(ToolSettings()) == (tmp_path / "app").resolve() / "Dependencies"

    explicit = tmp_path / "elsewhere"
    assert default_dependencies_dir(ToolSettings(dependencies_dir=explicit)) == explicit
