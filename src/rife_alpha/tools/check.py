"""
External tool validation utilities for rife-alpha.

This module resolves the external programs required by the pipeline. Each
dependency is known by one or more candidate names; the first one found on the
executable search path, or in the fallback ``Dependencies`` directory beside the
running program, wins. Resolution happens once, before any work starts.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path
from shutil import which

from ..config import AppConfig, ToolSettings
from ..core.exceptions import DependencyNotFoundError
from ..core.types import Toolchain


def default_dependencies_dir(settings: ToolSettings) -> Path:
    """Fallback directory for external programs.

    Args:
        settings: Tool settings; an explicit ``dependencies_dir`` wins.

    Returns:
        Path: The configured directory, or ``Dependencies`` next to the running program.
    """
    if settings.dependencies_dir is not None:
        return settings.dependencies_dir
    program = Path(sys.argv[0]).resolve() if sys.argv and sys.argv[0] else Path.cwd()
    return program.parent / settings.dependencies_dirname


def locate(names: Sequence[str], fallback_dir: Path | None = None) -> Path:
    """Resolve the first available program among `names`.

    Args:
        names: Acceptable program names in preference order.
        fallback_dir: Directory searched when a name is not on the search path.

    Returns:
        Path: Absolute path of the resolved program.

    Raises:
        DependencyNotFoundError: If no name resolves.
    """
    last_error = ""
    for name in names:
        found = which(name)
        if found is None and fallback_dir is not None and fallback_dir.is_dir():
            found = which(name, path=str(fallback_dir))
        if found is not None:
            return Path(found).resolve()
        last_error = f"{name!r} not found in PATH"
        if fallback_dir is not None:
            last_error += f" or in {fallback_dir}"

    searched = [str(fallback_dir)] if fallback_dir is not None else []
    raise DependencyNotFoundError(names, searched, last_error)


def resolve_toolchain(config: AppConfig, want_gif: bool) -> Toolchain:
    """Resolve every program the run will invoke.

    Args:
        config: Application settings with candidate names.
        want_gif: Also resolve the GIF converter.

    Raises:
        DependencyNotFoundError: For the first dependency that cannot be resolved.
    """
    tools = config.tools
    fallback = default_dependencies_dir(tools)
    return Toolchain(
        magick=locate(tools.magick, fallback),
        rife=locate(tools.rife, fallback),
        apngasm=locate(tools.apngasm, fallback),
        apng2gif=locate(tools.apng2gif, fallback) if want_gif else None,
    )