"""
Path and file system utilities for rife-alpha.

This module handles the small filesystem operations the pipeline performs
itself; everything that touches pixels is left to the external tools.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path


def link_or_copy(src: Path, dst: Path) -> bool:
    """Make `dst` a duplicate of `src`, preferring a hard link.

    Falls back to a byte-for-byte copy when the filesystem does not support
    hard links.

    Args:
        src: Existing regular file.
        dst: Path to create; must not exist.

    Returns:
        bool: True if a hard link was created, False if the file was copied.

    Raises:
        OSError: If neither linking nor copying succeeds.
    """
    try:
        os.link(src, dst)
        return True
    except OSError:
        if not src.is_file():
            raise
    shutil.copyfile(src, dst)
    return False

