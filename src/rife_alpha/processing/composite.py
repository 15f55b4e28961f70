"""
Recompositing of interpolated color and alpha frames.

Every output index gets its own merge, all launched at once: the color frame
loses whatever alpha it had and the alpha frame at the same index becomes its
opacity mask.
"""

from __future__ import annotations

from pathlib import Path

from ..core.exceptions import PairedFrameMissingError, StageError, ToolError
from ..core.types import FrameNumbering, SourceInfo
from .commands import MagickCommandBuilder
from .context import StageContext
from .workspace import Workspace


def merge_frame(ctx: StageContext, workspace: Workspace, name: str) -> Path:
    """Merge the color/alpha pair called `name` into the merged sequence.

    Raises:
        PairedFrameMissingError: If either half of the pair does not exist.
        ToolError: If the compositing engine fails.
    """
    color = workspace.interpolated_frames / name
    alpha = workspace.interpolated_alpha / name
    missing = [str(p) for p in (color, alpha) if not p.is_file()]
    if missing:
        raise PairedFrameMissingError(name, missing)

    merged = workspace.merged / name
    ctx.run(MagickCommandBuilder.build_merge_cmd(ctx.toolchain.magick, color, alpha, merged))
    return merged


def composite_frames(ctx: StageContext, workspace: Workspace, info: SourceInfo) -> int:
    """Merge every output frame ``1 .. 2n+1`` concurrently.

    Returns:
        int: Number of merges run.

    Raises:
        StageError: With the first failing frame; frames merged by other units
            are left for workspace teardown.
    """
    numbering = FrameNumbering.for_output(info.final_frame_count)

    def unit(index: int):
        name = numbering.name(index)

        def run() -> None:
            try:
                merge_frame(ctx, workspace, name)
            except (ToolError, PairedFrameMissingError) as ex:
                raise StageError(f"compositing failed for frame {name}", ex) from ex

        return run

    units = [unit(index) for index in numbering.indices(info.final_frame_count)]
    return ctx.fan_in("composite", units)
