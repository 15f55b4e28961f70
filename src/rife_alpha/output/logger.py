"""
Simple stage logger for diagnostics.

Silent unless enabled: the tool's normal output is a single summary line, so
stage messages only go to stderr in verbose mode and to an optional log file.
"""

from __future__ import annotations

import sys
import threading
import time
from datetime import datetime
from pathlib import Path

from ..config import LoggingSettings
from ..core.exceptions import LogFileError


class SimpleLogger:
    """Simple logger that writes to stderr and/or a file."""

    def __init__(self, verbose: bool = False, log_file: Path | None = None):
        self.verbose = verbose
        self.log_file = log_file
        self.start_time = time.time()
        # Stage units log from worker threads
        self._lock = threading.Lock()

        if self.log_file:
            try:
                self.log_file.parent.mkdir(parents=True, exist_ok=True)
                with open(self.log_file, 'a', encoding='utf-8') as f:
                    f.write(f"\n{'='*60}\n")
                    f.write(f"Session started: {datetime.now().isoformat()}\n")
                    f.write(f"{'='*60}\n")
            except OSError as ex:
                raise LogFileError(f"cannot open log file: {self.log_file}: {ex}") from ex

    @classmethod
    def from_settings(cls, settings: LoggingSettings) -> SimpleLogger:
        return cls(verbose=settings.verbose, log_file=settings.log_file)

    @property
    def enabled(self) -> bool:
        return self.verbose or self.log_file is not None

    def log(self, message: str, prefix: str = "") -> None:
        """Log a message to stderr and file.

        Args:
            message: The message to log
            prefix: Optional prefix like [INFO], [ERROR], etc.
        """
        if not self.enabled:
            return

        timestamp = datetime.now().strftime("%H:%M:%S")
        if prefix:
            formatted = f"[{timestamp}] {prefix} {message}"
        else:
            formatted = f"[{timestamp}] {message}"

        with self._lock:
            if self.verbose:
                print(formatted, file=sys.stderr, flush=True)
            if self.log_file:
                try:
                    with open(self.log_file, 'a', encoding='utf-8') as f:
                        f.write(formatted + '\n')
                except OSError:
                    pass  # Don't fail the run on logging errors

    def stage(self, name: str, units: int) -> None:
        """Log the start of a stage and how many units it fans out to."""
        elapsed = time.time() - self.start_time
        self.log(f"{name}: {units} task(s) - {elapsed:.1f}s elapsed", prefix="[STAGE]")

    def command(self, pretty: str) -> None:
        self.log(pretty, prefix="[RUN]")

    def info(self, message: str) -> None:
        """Log an info message."""
        self.log(message, prefix="[INFO]")

    def error(self, message: str) -> None:
        """Log an error message."""
        self.log(message, prefix="[ERROR]")


NULL_LOGGER = SimpleLogger()
