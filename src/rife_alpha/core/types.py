"""
Core data types for rife-alpha.

This module contains the value types shared by the pipeline stages: what the
source animation reports about itself, how frame files are numbered, and which
external programs were resolved for the run.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

FRAME_EXT = ".png"


@dataclass(frozen=True)
class FrameDelay:
    """Per-frame display time as the fraction numerator/denominator seconds."""

    numerator: int
    denominator: int

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"


@dataclass(frozen=True)
class SourceInfo:
    """Frame count and nominal per-frame duration (1/100 s) of a source animation."""

    frame_count: int
    frame_duration: int

    @property
    def final_frame_count(self) -> int:
        # Doubled, plus the transitional frame that blends back into frame 0
        return self.frame_count * 2 + 1

    def frame_delay(self, delay_base: int = 200, default: tuple[int, int] = (1, 10)) -> FrameDelay:
        """Delay for the doubled sequence that keeps total playback time.

        Args:
            delay_base: Denominator applied to the source duration. The source unit is
                1/100 s, so 200 halves every frame.
            default: Delay used when the source does not specify a duration.

        Returns:
            FrameDelay for the assembler.
        """
        if self.frame_duration > 0:
            return FrameDelay(self.frame_duration, delay_base)
        return FrameDelay(*default)


@dataclass(frozen=True)
class FrameNumbering:
    """Fixed-width, zero-padded numbering of a frame sequence."""

    start: int
    width: int

    @classmethod
    def for_input(cls, frame_count: int) -> FrameNumbering:
        """0-based numbering wide enough for the source frame count."""
        return cls(start=0, width=len(str(frame_count)))

    @classmethod
    def for_output(cls, final_frame_count: int) -> FrameNumbering:
        """1-based numbering wide enough for the final frame count."""
        return cls(start=1, width=len(str(final_frame_count)))

    @property
    def pattern(self) -> str:
        """printf-style file pattern, e.g. ``%02d.png``."""
        return f"%0{self.width}d{FRAME_EXT}"

    def name(self, index: int) -> str:
        return f"{index:0{self.width}d}{FRAME_EXT}"

    def indices(self, count: int) -> range:
        return range(self.start, self.start + count)


class Channel(Enum):
    """The two parallel frame streams that are interpolated separately."""

    COLOR = "color"
    ALPHA = "alpha"


@dataclass(frozen=True)
class Toolchain:
    """Resolved paths of the external programs used by the pipeline."""

    magick: Path
    rife: Path
    apngasm: Path
    apng2gif: Path | None = None


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of a successful run."""

    source_frames: int
    final_frames: int
    frame_delay: FrameDelay
    destination: Path
