"""
Frame splitting and loop closing.

The source animation is split into two input-indexed sequences: opaque color
frames flattened onto the matte, and grayscale alpha frames. Both are then
extended by a copy of their first frame so the interpolator can blend the last
frame back into the first.
"""

from __future__ import annotations

from pathlib import Path

from ..core.exceptions import StageError, ToolError
from ..core.types import Channel, FrameNumbering, SourceInfo
from ..utils.path import link_or_copy
from .commands import MagickCommandBuilder
from .context import StageContext
from .workspace import Workspace


def split_frames(ctx: StageContext, workspace: Workspace, source: Path, info: SourceInfo, matte: str) -> None:
    """Extract color and alpha frames concurrently at indices ``0 .. n-1``.

    Raises:
        StageError: With the first failure of the two extractions.
    """
    numbering = FrameNumbering.for_input(info.frame_count)
    magick = ctx.toolchain.magick

    def extract_color() -> None:
        cmd = MagickCommandBuilder.build_color_extract_cmd(magick, source, matte, workspace.frames, numbering)
        try:
            ctx.run(cmd)
        except ToolError as ex:
            raise StageError("frame extraction failed", ex) from ex

    def extract_alpha() -> None:
        cmd = MagickCommandBuilder.build_alpha_extract_cmd(magick, source, workspace.alpha, numbering)
        try:
            ctx.run(cmd)
        except ToolError as ex:
            raise StageError("alpha extraction failed", ex) from ex

    ctx.fan_in("split", [extract_color, extract_alpha])


def close_loop(workspace: Workspace, info: SourceInfo) -> None:
    """Duplicate frame 0 of both raw sequences to index ``n``.

    Raises:
        StageError: If either duplicate cannot be created.
    """
    numbering = FrameNumbering.for_input(info.frame_count)
    first_name = numbering.name(0)
    loop_name = numbering.name(info.frame_count)

    for channel in Channel:
        directory = workspace.raw_dir(channel)
        try:
            link_or_copy(directory / first_name, directory / loop_name)
        except OSError as ex:
            raise StageError("cannot establish loop frame", f"{channel.value}: {ex}") from ex
