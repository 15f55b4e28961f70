"""Subprocess and external command utilities."""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Sequence

from ..core.exceptions import ToolError
from ..output.logger import NULL_LOGGER, SimpleLogger


def pretty_command(cmd: Sequence[str]) -> str:
    """Shell-quoted rendering of a command, for logs."""
    return " ".join(shlex.quote(str(c)) for c in cmd)


def run_tool(cmd: Sequence[str], *, logger: SimpleLogger = NULL_LOGGER) -> str:
    """Run an external program to completion.

    Args:
        cmd: Command and arguments list
        logger: Receives the command line before it is launched

    Returns:
        The program's standard output

    Raises:
        ToolError: If the program cannot be started or exits non-zero
    """
    args = [str(c) for c in cmd]
    logger.command(pretty_command(args))

    try:
        result = subprocess.run(args, capture_output=True, text=True, errors="replace", check=False)
    except OSError as ex:
        raise ToolError(args, None, str(ex)) from ex

    if result.returncode != 0:
        raise ToolError(args, result.returncode, result.stderr or "")
    return result.stdout
