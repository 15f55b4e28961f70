"""
Interpolation dispatch.

Runs the RIFE model over the raw color and raw alpha sequences at the same
time. Each run doubles its sequence and writes 1-based frames numbered to the
width of the final frame count, so both outputs line up index for index.
"""

from __future__ import annotations

from ..core.exceptions import StageError, ToolError
from ..core.types import Channel, FrameNumbering, SourceInfo
from .commands import RifeCommandBuilder
from .context import StageContext
from .workspace import Workspace


def interpolate_channels(ctx: StageContext, workspace: Workspace, info: SourceInfo) -> None:
    """Interpolate both channels concurrently.

    The produced frame count is not checked; a zero exit status is trusted.

    Raises:
        StageError: With the first failure, e.g. ``interpolation failed for alpha: ...``.
    """
    numbering = FrameNumbering.for_output(info.final_frame_count)
    settings = ctx.config.interpolation

    def unit(channel: Channel):
        def run() -> None:
            cmd = RifeCommandBuilder.build_interpolate_cmd(
                ctx.toolchain.rife,
                workspace.raw_dir(channel),
                workspace.interpolated_dir(channel),
                numbering,
                settings,
            )
            try:
                ctx.run(cmd)
            except ToolError as ex:
                raise StageError(f"interpolation failed for {channel.value}", ex) from ex

        return run

    ctx.fan_in("interpolate", [unit(channel) for channel in Channel])
