"""
Consolidated configuration system for rife-alpha.

This module provides a centralized Pydantic-based configuration system: the
application settings (tool names, interpolation model, worker limits, logging)
with environment variable support, and the validated request for a single run.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MATTE = "#36393F"
DEFAULT_OUTPUT_SUFFIX = "-2x-Interpolated.gif"


# =============================================================================
# EXTERNAL TOOL SETTINGS
# =============================================================================

class ToolSettings(BaseModel):
    """Candidate program names for each external dependency, in preference order."""

    magick: Annotated[list[str], Field(
        min_length=1,
        description="Compositing engine (ImageMagick 7)"
    )] = ["magick"]

    rife: Annotated[list[str], Field(
        min_length=1,
        description="Frame interpolation model runner"
    )] = ["rife", "rife-ncnn-vulkan"]

    apngasm: Annotated[list[str], Field(
        min_length=1,
        description="Animated PNG assembler"
    )] = ["apngasm64", "apngasm"]

    apng2gif: Annotated[list[str], Field(
        min_length=1,
        description="APNG to GIF converter, only needed for GIF output"
    )] = ["apng2gif", "apng2gif64"]

    dependencies_dirname: Annotated[str, Field(
        min_length=1,
        description="Fallback directory name, looked up beside the running program"
    )] = "Dependencies"

    dependencies_dir: Annotated[Path | None, Field(
        description="Explicit fallback directory; overrides the one beside the program"
    )] = None


# =============================================================================
# INTERPOLATION SETTINGS
# =============================================================================

class InterpolationSettings(BaseModel):
    """Options passed to the interpolation model runner."""

    model: Annotated[str, Field(
        min_length=1,
        description="RIFE model directory name"
    )] = "rife-v4.6"

    tta_spatial: Annotated[bool, Field(
        description="Enable spatial test-time augmentation (-x)"
    )] = True

    tta_temporal: Annotated[bool, Field(
        description="Enable temporal test-time augmentation (-z)"
    )] = True


# =============================================================================
# ASSEMBLY SETTINGS
# =============================================================================

class AssemblySettings(BaseModel):
    """Options for the animated PNG assembler."""

    assembler_flags: Annotated[list[str], Field(
        description="Extra flags passed to the assembler before the frame delay"
    )] = ["-i30"]

    delay_base: Annotated[int, Field(
        gt=0,
        description="Delay denominator used when the source reports a frame duration"
    )] = 200

    default_delay: Annotated[tuple[int, int], Field(
        description="Frame delay used when the source reports no frame duration"
    )] = (1, 10)

    @field_validator("default_delay")
    @classmethod
    def validate_default_delay(cls, v):
        """Ensure the fallback delay is a positive fraction."""
        numerator, denominator = v
        if numerator <= 0 or denominator <= 0:
            raise ValueError(f"default_delay must be a positive fraction, got {numerator}/{denominator}")
        return v


# =============================================================================
# WORKER SETTINGS
# =============================================================================

class WorkerSettings(BaseModel):
    """Concurrency limits for fanned-out stages."""

    max_workers: Annotated[int | None, Field(
        ge=1,
        description="Maximum concurrent external processes per stage; unset means one per task"
    )] = None


# =============================================================================
# WORKSPACE SETTINGS
# =============================================================================

class WorkspaceSettings(BaseModel):
    """Location and naming of the temporary workspace."""

    temp_dir: Annotated[Path | None, Field(
        description="Parent directory for workspaces; system temp dir when unset"
    )] = None

    prefix: Annotated[str, Field(
        description="Name prefix of workspace directories"
    )] = "rife-interpolation-"


# =============================================================================
# LOGGING SETTINGS
# =============================================================================

class LoggingSettings(BaseModel):
    """Diagnostic stage logging; off by default."""

    verbose: bool = False
    log_file: Path | None = None


# =============================================================================
# OUTPUT KIND ENUM
# =============================================================================

class OutputKind(str, Enum):
    """Container written to the destination path."""

    APNG = "apng"
    GIF = "gif"

    @classmethod
    def for_path(cls, path: Path) -> OutputKind:
        """GIF when the destination ends in .gif, APNG for anything else."""
        return cls.GIF if path.suffix.lower() == ".gif" else cls.APNG


# =============================================================================
# RUN REQUEST
# =============================================================================

class RunRequest(BaseModel):
    """One interpolation job, as requested on the command line."""

    model_config = ConfigDict(frozen=True)

    source: Path
    destination: Path
    matte: Annotated[str, Field(min_length=1)] = DEFAULT_MATTE

    @field_validator("source", "destination")
    @classmethod
    def validate_paths(cls, v):
        """Convert relative paths to absolute."""
        if not v.is_absolute():
            v = v.absolute()
        return v

    @property
    def output_kind(self) -> OutputKind:
        return OutputKind.for_path(self.destination)


def default_destination(source: Path) -> Path:
    """`<stem>-2x-Interpolated.gif` beside the source."""
    return source.with_name(f"{source.stem}{DEFAULT_OUTPUT_SUFFIX}")


# =============================================================================
# MAIN APPLICATION CONFIGURATION
# =============================================================================

class AppConfig(BaseSettings):
    """
    Main application configuration with environment variable support.

    All settings can be overridden via environment variables with RIFE_ALPHA_ prefix.
    Example: RIFE_ALPHA_WORKER__MAX_WORKERS=8
    """

    model_config = SettingsConfigDict(
        env_prefix="RIFE_ALPHA_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    tools: ToolSettings = ToolSettings()
    interpolation: InterpolationSettings = InterpolationSettings()
    assembly: AssemblySettings = AssemblySettings()
    worker: WorkerSettings = WorkerSettings()
    workspace: WorkspaceSettings = WorkspaceSettings()
    logging: LoggingSettings = LoggingSettings()


def create_config_from_env() -> AppConfig:
    """Create a new configuration instance from environment variables."""
    return AppConfig()
