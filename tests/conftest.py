"""
Fake external toolchain for pipeline tests.

No real ImageMagick, RIFE or apngasm is needed: the command runner used by the
stages is replaced with FakeTools, which recognises each command built by the
pipeline and reproduces its effect on the filesystem.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from pathlib import Path

import pytest

from rife_alpha.config import AppConfig, WorkspaceSettings
from rife_alpha.core.exceptions import ToolError
from rife_alpha.core.types import Toolchain
from rife_alpha.output.logger import NULL_LOGGER
from rife_alpha.processing import context as context_module
from rife_alpha.processing.context import StageContext

TOOLCHAIN = Toolchain(
    magick=Path("/opt/tools/magick"),
    rife=Path("/opt/tools/rife"),
    apngasm=Path("/opt/tools/apngasm64"),
    apng2gif=Path("/opt/tools/apng2gif"),
)


def sequence_indices(directory: Path, suffix: str = ".png") -> set[int]:
    """Indices of the numerically named frame files in `directory`."""
    return {int(p.stem) for p in directory.iterdir() if p.suffix == suffix and p.stem.isdigit()}


class FakeTools:
    """Stand-in for the external programs, keyed by what each command does."""

    def __init__(self, frame_count: int = 10, frame_duration: int = 10) -> None:
        self.frame_count = frame_count
        self.frame_duration = frame_duration
        self.calls: list[list[str]] = []
        self.failures: dict[str, str] = {}
        self.delays: dict[str, float] = {}
        self.fail_when: Callable[[list[str]], bool] | None = None
        self.assembled_frames: list[str] = []
        self._lock = threading.Lock()

    # ---------------
    # Test controls
    # ---------------
    def fail(self, kind: str, message: str = "boom") -> None:
        self.failures[kind] = message

    def calls_of(self, kind: str) -> list[list[str]]:
        return [c for c in self.calls if self.classify(c) == kind]

    # ---------------
    # Runner
    # ---------------
    @staticmethod
    def classify(cmd: list[str]) -> str:
        program = Path(cmd[0]).name
        if program == "magick":
            if cmd[1] == "identify":
                return "identify"
            if cmd[1] == "convert":
                return "extract_alpha" if "Extract" in cmd else "extract_color"
            return "merge"
        if program == "rife":
            input_dir = Path(cmd[cmd.index("-i") + 1])
            return "interpolate_color" if input_dir.name == "Frames" else "interpolate_alpha"
        if program == "apngasm64":
            return "assemble"
        if program == "apng2gif":
            return "convert"
        raise AssertionError(f"unexpected command {cmd}")

    def __call__(self, cmd, *, logger=NULL_LOGGER) -> str:
        cmd = [str(c) for c in cmd]
        kind = self.classify(cmd)
        with self._lock:
            self.calls.append(cmd)

        if kind in self.delays:
            time.sleep(self.delays[kind])
        if kind in self.failures:
            raise ToolError(cmd, 1, f"{kind}: {self.failures[kind]}")
        if self.fail_when is not None and self.fail_when(cmd):
            raise ToolError(cmd, 1, "merge: boom")

        return getattr(self, f"_{kind}")(cmd)

    def _identify(self, cmd: list[str]) -> str:
        pair = f"{self.frame_count} {self.frame_duration} "
        return pair * max(1, self.frame_count)

    def _write_sequence(self, cmd: list[str], tag: bytes) -> str:
        target = Path(cmd[-1])
        for i in range(self.frame_count):
            (target.parent / (target.name % i)).write_bytes(tag + str(i).encode())
        return ""

    def _extract_color(self, cmd: list[str]) -> str:
        return self._write_sequence(cmd, b"color-")

    def _extract_alpha(self, cmd: list[str]) -> str:
        return self._write_sequence(cmd, b"alpha-")

    def _interpolate(self, cmd: list[str]) -> str:
        input_dir = Path(cmd[cmd.index("-i") + 1])
        output_dir = Path(cmd[cmd.index("-o") + 1])
        pattern = cmd[cmd.index("-f") + 1]
        inputs = len(list(input_dir.glob("*.png")))
        # RIFE doubles the input count and numbers its output from 1
        for i in range(1, inputs * 2 + 1):
            (output_dir / (pattern % i)).write_bytes(b"interpolated")
        return ""

    _interpolate_color = _interpolate
    _interpolate_alpha = _interpolate

    def _merge(self, cmd: list[str]) -> str:
        Path(cmd[-1]).write_bytes(Path(cmd[1]).read_bytes() + Path(cmd[2]).read_bytes())
        return ""

    def _assemble(self, cmd: list[str]) -> str:
        frame_glob = Path(cmd[2])
        self.assembled_frames = sorted(p.name for p in frame_glob.parent.glob(frame_glob.name))
        Path(cmd[1]).write_bytes(b"\x89PNG apng")
        return ""

    def _convert(self, cmd: list[str]) -> str:
        Path(cmd[2]).write_bytes(b"GIF89a")
        return ""


@pytest.fixture
def fake_tools(monkeypatch) -> FakeTools:
    tools = FakeTools()
    monkeypatch.setattr(context_module, "run_tool", tools)
    return tools


@pytest.fixture
def work_root(tmp_path: Path) -> Path:
    root = tmp_path / "work"
    root.mkdir()
    return root


@pytest.fixture
def stage_ctx(work_root: Path) -> StageContext:
    config = AppConfig(workspace=WorkspaceSettings(temp_dir=work_root))
    return StageContext(toolchain=TOOLCHAIN, config=config)
