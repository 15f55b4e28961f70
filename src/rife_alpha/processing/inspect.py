"""
Source inspection for rife-alpha.

Asks the compositing engine how many frames the source animation has and how
long each one is displayed.
"""

from __future__ import annotations

from pathlib import Path

from ..core.exceptions import InsufficientFramesError, MetadataError, ToolError
from ..core.types import SourceInfo
from .commands import MagickCommandBuilder
from .context import StageContext


def parse_identify_output(text: str) -> SourceInfo:
    """Parse ``identify -format "%n %T "`` output.

    The engine repeats the ``<count> <delay>`` pair once per frame; only the
    first pair is used.

    Args:
        text: Standard output of the identify call.

    Returns:
        SourceInfo: Frame count and per-frame duration in 1/100 s.

    Raises:
        MetadataError: If the output does not start with two non-negative integers.
    """
    tokens = text.split()
    if len(tokens) < 2:
        raise MetadataError(f"metadata unreadable: expected frame count and duration, got {text.strip()!r}")
    try:
        frame_count, frame_duration = int(tokens[0]), int(tokens[1])
    except ValueError as ex:
        raise MetadataError(f"metadata unreadable: {ex}") from ex
    if frame_count < 0 or frame_duration < 0:
        raise MetadataError(f"metadata unreadable: negative values in {text.strip()!r}")
    return SourceInfo(frame_count=frame_count, frame_duration=frame_duration)


def inspect_source(ctx: StageContext, source: Path) -> SourceInfo:
    """Read the frame count and duration of `source`.

    Raises:
        MetadataError: If the engine fails or its output cannot be parsed.
        InsufficientFramesError: If the source has one frame or none.
    """
    cmd = MagickCommandBuilder.build_identify_cmd(ctx.toolchain.magick, source)
    try:
        output = ctx.run(cmd)
    except ToolError as ex:
        raise MetadataError(f"metadata unreadable: {ex}") from ex

    info = parse_identify_output(output)
    if info.frame_count <= 1:
        raise InsufficientFramesError(info.frame_count)
    ctx.logger.info(f"source: {info.frame_count} frames, {info.frame_duration}/100 s per frame")
    return info
