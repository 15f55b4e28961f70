from pathlib import Path

import pytest
from pydantic import ValidationError

from rife_alpha.config import (
    DEFAULT_MATTE,
    AppConfig,
    AssemblySettings,
    OutputKind,
    RunRequest,
    create_config_from_env,
    default_destination,
)


def test_defaults():
    config = AppConfig()
    assert config.tools.apngasm == ["apngasm64", "apngasm"]
    assert config.interpolation.model == "rife-v4.6"
    assert config.assembly.delay_base == 200
    assert config.worker.max_workers is None
    assert config.workspace.prefix == "rife-interpolation-"
    assert not config.logging.verbose


def test_environment_overrides(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("RIFE_ALPHA_WORKER__MAX_WORKERS", "4")
    monkeypatch.setenv("RIFE_ALPHA_INTERPOLATION__MODEL", "rife-v4")
    monkeypatch.setenv("RIFE_ALPHA_LOGGING__LOG_FILE", str(tmp_path / "run.log"))

    config = create_config_from_env()
    assert config.worker.max_workers == 4
    assert config.interpolation.model == "rife-v4"
    assert config.logging.log_file == tmp_path / "run.log"


def test_default_delay_must_be_positive():
    with pytest.raises(ValidationError, match="positive fraction"):
        AssemblySettings(default_delay=(0, 10))


@pytest.mark.parametrize(
    "name, kind",
    [("out.gif", OutputKind.GIF), ("OUT.GIF", OutputKind.GIF), ("out.png", OutputKind.APNG), ("out", OutputKind.APNG)],
)
def test_output_kind_from_extension(name: str, kind: OutputKind):
    assert OutputKind.for_path(Path(name)) is kind


def test_default_destination_is_beside_source():
    assert default_destination(Path("/anim/walk.gif")) == Path("/anim/walk-2x-Interpolated.gif")


def test_run_request_makes_paths_absolute(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    request = RunRequest(source=Path("in.gif"), destination=Path("out.png"))

    assert request.source == tmp_path / "in.gif"
    assert request.destination == tmp_path / "out.png"
    assert request.matte == DEFAULT_MATTE
    assert request.output_kind is OutputKind.APNG
