"""
Temporary workspace for one interpolation run.

The workspace is a throwaway directory tree with one subdirectory per frame
sequence. It exists for exactly one run and is removed on every exit path.
"""

from __future__ import annotations

import contextlib
import shutil
import tempfile
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from ..core.exceptions import WorkspaceError
from ..core.types import Channel

SUBDIR_NAMES = ("Frames", "Alpha", "IFrames", "IAlpha", "Merged")
ASSEMBLED_NAME = "assembled.png"


@dataclass(frozen=True)
class Workspace:
    """Paths of an existing workspace tree."""

    root: Path

    @property
    def frames(self) -> Path:
        return self.root / "Frames"

    @property
    def alpha(self) -> Path:
        return self.root / "Alpha"

    @property
    def interpolated_frames(self) -> Path:
        return self.root / "IFrames"

    @property
    def interpolated_alpha(self) -> Path:
        return self.root / "IAlpha"

    @property
    def merged(self) -> Path:
        return self.root / "Merged"

    @property
    def assembled(self) -> Path:
        """Intermediate APNG used when the requested output is a GIF."""
        return self.root / ASSEMBLED_NAME

    def raw_dir(self, channel: Channel) -> Path:
        return self.frames if channel is Channel.COLOR else self.alpha

    def interpolated_dir(self, channel: Channel) -> Path:
        return self.interpolated_frames if channel is Channel.COLOR else self.interpolated_alpha

    @property
    def subdirs(self) -> list[Path]:
        return [self.root / name for name in SUBDIR_NAMES]


@contextlib.contextmanager
def create_workspace(parent: Path | None = None, prefix: str = "rife-interpolation-") -> Iterator[Workspace]:
    """Create a workspace and remove it when the block exits.

    Args:
        parent: Directory to create the workspace in; the system temp dir when None.
        prefix: Name prefix of the workspace directory.

    Yields:
        Workspace: The created tree.

    Raises:
        WorkspaceError: If the directory or one of its subdirectories cannot be created.
    """
    try:
        root = Path(tempfile.mkdtemp(prefix=prefix, dir=parent))
    except OSError as ex:
        raise WorkspaceError(f"cannot create temporary directory: {ex}") from ex

    try:
        workspace = Workspace(root)
        for child in workspace.subdirs:
            try:
                child.mkdir()
            except OSError as ex:
                raise WorkspaceError(f"cannot create temporary subdirectory: {ex}") from ex
        yield workspace
    finally:
        shutil.rmtree(root, ignore_errors=True)
