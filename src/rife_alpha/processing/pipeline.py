"""
Pipeline orchestrator for rife-alpha.

Runs the stages strictly in order inside one workspace:

    inspect -> split -> close loop -> interpolate -> composite -> assemble -> convert

Each stage fans out to concurrent external invocations and waits for all of
them before the next stage starts. The first error of a stage ends the run;
the workspace is removed whatever happens.
"""

from __future__ import annotations

from ..config import RunRequest
from ..core.types import PipelineResult
from .assemble import write_output
from .composite import composite_frames
from .context import StageContext
from .inspect import inspect_source
from .interpolate import interpolate_channels
from .split import close_loop, split_frames
from .workspace import create_workspace


def interpolate_animation(request: RunRequest, ctx: StageContext) -> PipelineResult:
    """Double the frame rate of the animation described by `request`.

    Args:
        request: Source, destination and matte color.
        ctx: Resolved toolchain, settings and logger.

    Returns:
        PipelineResult: Frame counts and delay of the written animation.

    Raises:
        RifeAlphaError: Any stage failure, already prefixed with its stage.
    """
    # Inspect first so an unusable source fails before anything is written
    info = inspect_source(ctx, request.source)
    delay = info.frame_delay(ctx.config.assembly.delay_base, ctx.config.assembly.default_delay)

    settings = ctx.config.workspace
    with create_workspace(settings.temp_dir, settings.prefix) as workspace:
        ctx.logger.info(f"workspace: {workspace.root}")
        split_frames(ctx, workspace, request.source, info, request.matte)
        close_loop(workspace, info)
        interpolate_channels(ctx, workspace, info)
        composite_frames(ctx, workspace, info)
        destination = write_output(ctx, workspace, request.destination, request.output_kind, delay)

    ctx.logger.info(f"wrote {destination} ({info.final_frame_count} frames at {delay} s)")
    return PipelineResult(
        source_frames=info.frame_count,
        final_frames=info.final_frame_count,
        frame_delay=delay,
        destination=destination,
    )
