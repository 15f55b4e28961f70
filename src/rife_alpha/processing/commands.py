"""
External command building module for rife-alpha.

This module consolidates the argument lists handed to ImageMagick, the RIFE
runner, apngasm and apng2gif, separating them from stage orchestration.
"""

from __future__ import annotations

from pathlib import Path

from ..config import InterpolationSettings
from ..core.types import FrameDelay, FrameNumbering

IDENTIFY_FORMAT = "%n %T "


class MagickCommandBuilder:
    """Builder class for ImageMagick (``magick``) commands."""

    @staticmethod
    def build_identify_cmd(magick: Path, source: Path) -> list[str]:
        """Print ``<frame count> <delay>`` once per frame of the source."""
        return [str(magick), "identify", "-format", IDENTIFY_FORMAT, str(source)]

    @staticmethod
    def build_color_extract_cmd(
        magick: Path,
        source: Path,
        matte: str,
        frame_dir: Path,
        numbering: FrameNumbering,
    ) -> list[str]:
        """Flatten transparency onto `matte` and write opaque truecolor frames."""
        return [
            str(magick), "convert", str(source),
            "-background", matte,
            "-coalesce",
            "-alpha", "Background",
            "-alpha", "Off",
            "-strip",
            "-define", "png:color-type=2",
            str(frame_dir / numbering.pattern),
        ]

    @staticmethod
    def build_alpha_extract_cmd(
        magick: Path,
        source: Path,
        alpha_dir: Path,
        numbering: FrameNumbering,
    ) -> list[str]:
        """Write each frame's alpha channel as a grayscale frame."""
        return [
            str(magick), "convert", str(source),
            "-coalesce",
            "-alpha", "Extract",
            "-strip",
            "-define", "png:color-type=0",
            str(alpha_dir / numbering.pattern),
        ]

    @staticmethod
    def build_merge_cmd(magick: Path, color_frame: Path, alpha_frame: Path, merged_frame: Path) -> list[str]:
        """Apply `alpha_frame` as the opacity mask of `color_frame`."""
        return [
            str(magick), str(color_frame), str(alpha_frame),
            "-alpha", "Off",
            "-compose", "CopyOpacity",
            "-composite",
            str(merged_frame),
        ]


class RifeCommandBuilder:
    """Builder class for the RIFE model runner."""

    @staticmethod
    def build_interpolate_cmd(
        rife: Path,
        input_dir: Path,
        output_dir: Path,
        numbering: FrameNumbering,
        settings: InterpolationSettings,
    ) -> list[str]:
        """Interpolate a whole directory of frames, doubling the frame count."""
        cmd = [str(rife), "-m", settings.model, "-i", str(input_dir), "-o", str(output_dir)]
        if settings.tta_spatial:
            cmd.append("-x")
        if settings.tta_temporal:
            cmd.append("-z")
        cmd.extend(["-f", numbering.pattern])
        return cmd


class AssemblyCommandBuilder:
    """Builder class for apngasm and apng2gif."""

    @staticmethod
    def build_apngasm_cmd(
        apngasm: Path,
        target: Path,
        frame_glob: str,
        delay: FrameDelay,
        flags: list[str],
    ) -> list[str]:
        # apngasm expands the wildcard itself; fixed-width names sort numerically
        return [str(apngasm), str(target), frame_glob, *flags, str(delay.numerator), str(delay.denominator)]

    @staticmethod
    def build_apng2gif_cmd(apng2gif: Path, source: Path, target: Path) -> list[str]:
        return [str(apng2gif), str(source), str(target)]
