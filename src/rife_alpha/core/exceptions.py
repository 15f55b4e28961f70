"""Custom exceptions for rife-alpha.

Every failure of a run is fatal. The classes below only tell the failures
apart by cause so callers can report them; nothing is retried.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class RifeAlphaError(Exception):
    """Base exception for all rife-alpha errors."""


class UsageError(RifeAlphaError):
    """Raised for a help request or a wrong number of arguments."""


class InvalidArgumentError(RifeAlphaError):
    """Raised when a positional argument has an unusable value, e.g. an empty matte."""


# Environment


class EnvironmentProblem(RifeAlphaError):
    """Raised when the host environment cannot support the run."""


class InputFileError(EnvironmentProblem):
    """Raised when the source animation cannot be opened."""


class DependencyNotFoundError(EnvironmentProblem):
    """Raised when no candidate name of an external program can be resolved.

    Attributes:
        names: Candidate program names, in preference order
        searched: Locations that were searched besides the executable search path
    """

    def __init__(self, names: Sequence[str], searched: Sequence[str] = (), last_error: str = "") -> None:
        self.names = list(names)
        self.searched = list(searched)
        self.last_error = last_error

        msg = f"dependency not found: {' / '.join(self.names)}"
        if last_error:
            msg += f": {last_error}"
        super().__init__(msg)


class WorkspaceError(EnvironmentProblem):
    """Raised when the temporary workspace cannot be created."""


class LogFileError(EnvironmentProblem):
    """Raised when the configured log file cannot be created."""


# Metadata


class MetadataError(RifeAlphaError):
    """Raised when the source animation's metadata cannot be read."""


class InsufficientFramesError(MetadataError):
    """Raised when the source has one frame or none; there is nothing to interpolate."""

    def __init__(self, frame_count: int) -> None:
        self.frame_count = frame_count
        super().__init__(f"insufficient frames: found {frame_count} frame(s) in source, nothing to interpolate")


# External tool failures


class ProcessingError(RifeAlphaError):
    """Base class for failures of external tools during a stage."""


class ToolError(ProcessingError):
    """Raised when an external program exits non-zero or cannot be launched.

    Attributes:
        command: The program and arguments that were run
        returncode: Exit status, or None when the program never started
        stderr: Captured standard error of the program
    """

    def __init__(self, command: Sequence[str], returncode: int | None, stderr: str = "") -> None:
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr

        program = Path(self.command[0]).name if self.command else "<empty command>"
        if returncode is None:
            msg = f"{program} could not be started"
        else:
            msg = f"{program} exited with status {returncode}"
        detail = _last_line(stderr)
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


class StageError(ProcessingError):
    """Wraps the failure of a pipeline stage with a short stage prefix.

    The message is ``"<prefix>: <cause>"`` so the underlying text is preserved.
    """

    def __init__(self, prefix: str, cause: BaseException | str) -> None:
        self.prefix = prefix
        self.cause = cause
        super().__init__(f"{prefix}: {cause}")


class PairedFrameMissingError(ProcessingError):
    """Raised when a color frame has no alpha frame at the same index, or vice versa."""

    def __init__(self, name: str, missing: Sequence[str]) -> None:
        self.name = name
        self.missing = list(missing)
        super().__init__(f"missing paired frame {name}: {', '.join(self.missing)}")


def _last_line(text: str) -> str:
    lines = [line.strip() for line in text.strip().splitlines() if line.strip()]
    return lines[-1] if lines else ""
