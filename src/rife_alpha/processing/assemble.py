"""
Animation assembly and GIF conversion.

The merged frames are assembled into an animated PNG once. For GIF output the
APNG is an intermediate file inside the workspace and is converted afterwards;
partial transparency does not survive that conversion.
"""

from __future__ import annotations

from pathlib import Path

from ..config import OutputKind
from ..core.exceptions import StageError, ToolError
from ..core.types import FRAME_EXT, FrameDelay
from .commands import AssemblyCommandBuilder
from .context import StageContext
from .workspace import Workspace


def assemble_apng(ctx: StageContext, workspace: Workspace, target: Path, delay: FrameDelay) -> Path:
    """Assemble all merged frames into an APNG at `target`.

    Raises:
        StageError: ``assembly failed: ...``
    """
    ctx.logger.stage("assemble", 1)
    frame_glob = str(workspace.merged / f"*{FRAME_EXT}")
    cmd = AssemblyCommandBuilder.build_apngasm_cmd(
        ctx.toolchain.apngasm, target, frame_glob, delay, list(ctx.config.assembly.assembler_flags)
    )
    try:
        ctx.run(cmd)
    except ToolError as ex:
        raise StageError("assembly failed", ex) from ex
    return target


def convert_to_gif(ctx: StageContext, source: Path, destination: Path) -> Path:
    """Convert the assembled APNG at `source` into a GIF at `destination`.

    Raises:
        StageError: ``GIF conversion failed: ...``
    """
    if ctx.toolchain.apng2gif is None:
        raise StageError("GIF conversion failed", "no GIF converter was resolved")

    ctx.logger.stage("convert", 1)
    cmd = AssemblyCommandBuilder.build_apng2gif_cmd(ctx.toolchain.apng2gif, source, destination)
    try:
        ctx.run(cmd)
    except ToolError as ex:
        raise StageError("GIF conversion failed", ex) from ex
    return destination


def write_output(
    ctx: StageContext,
    workspace: Workspace,
    destination: Path,
    kind: OutputKind,
    delay: FrameDelay,
) -> Path:
    """Assemble, and convert when GIF output was requested."""
    if kind is OutputKind.GIF:
        intermediate = assemble_apng(ctx, workspace, workspace.assembled, delay)
        return convert_to_gif(ctx, intermediate, destination)
    return assemble_apng(ctx, workspace, destination, delay)
