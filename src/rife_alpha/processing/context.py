"""Shared state handed to every pipeline stage."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from ..config import AppConfig
from ..core.fanin import fan_in
from ..core.types import Toolchain
from ..output.logger import NULL_LOGGER, SimpleLogger
from ..utils.subprocess import run_tool


@dataclass(frozen=True)
class StageContext:
    """Resolved programs, settings and logger for one run."""

    toolchain: Toolchain
    config: AppConfig = field(default_factory=AppConfig)
    logger: SimpleLogger = NULL_LOGGER

    def run(self, cmd: Sequence[str]) -> str:
        """Run one external command; raises ToolError on failure."""
        return run_tool(cmd, logger=self.logger)

    def fan_in(self, stage: str, units: Sequence[Callable[[], object]]) -> int:
        """Run a stage's units concurrently and wait for all of them."""
        self.logger.stage(stage, len(units))
        return fan_in(units, max_workers=self.config.worker.max_workers)
