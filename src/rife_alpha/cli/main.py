#!/usr/bin/env python3
"""
rife-alpha: Double the frame rate of a transparent animation with RIFE.

Color and alpha are interpolated as two separate sequences and recombined
frame by frame, then assembled into an animated PNG (or converted to GIF).
Settings beyond the positional arguments come from RIFE_ALPHA_* environment
variables, see ``rife_alpha.config``.
"""

from __future__ import annotations

# Standard library imports
import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

# Third-party imports
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

# Local application imports
from ..config import DEFAULT_MATTE, OutputKind, RunRequest, create_config_from_env, default_destination
from ..core.exceptions import InputFileError, InvalidArgumentError, RifeAlphaError, UsageError
from ..output.logger import NULL_LOGGER, SimpleLogger
from ..processing.context import StageContext
from ..processing.pipeline import interpolate_animation
from ..tools.check import resolve_toolchain

PROG = "rife-alpha"
USAGE = f"{PROG} input.gif [output.png|output.gif] [#matte]"
HELP_FLAGS = {"-h", "--help"}

console = Console(highlight=False, emoji=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)


def build_parser() -> argparse.ArgumentParser:
    """CLI argument parser; help is handled before parsing."""
    p = argparse.ArgumentParser(
        prog=PROG,
        usage=USAGE,
        description="Double the frame rate of a transparent animation by interpolating color and alpha separately.",
        add_help=False,
    )
    p.add_argument("input", type=Path, help="Source animation (GIF, animated WebP, ...)")
    p.add_argument(
        "output",
        type=Path,
        nargs="?",
        help="Destination; .gif is converted from APNG, anything else is written as APNG. "
        "Defaults to '<input>-2x-Interpolated.gif' beside the input",
    )
    p.add_argument("matte", nargs="?", default=DEFAULT_MATTE, help="Matte color for transparent pixels")
    return p


def print_usage() -> None:
    err_console.print(f"usage: {USAGE}", markup=False)


def parse_cli(args: Sequence[str]) -> argparse.Namespace:
    """Parse positional arguments.

    Raises:
        UsageError: For a help flag in any case, or a wrong number of arguments.
    """
    if any(a.lower() in HELP_FLAGS for a in args):
        raise UsageError("help requested")
    if not 1 <= len(args) <= 3:
        raise UsageError(f"expected 1 to 3 arguments, got {len(args)}")
    # Everything is positional; "--" keeps a dash-prefixed path from reading as an option
    return build_parser().parse_args(["--", *args])


def build_request(args: argparse.Namespace) -> RunRequest:
    """Validate the input path and derive the destination.

    Raises:
        InputFileError: If the input does not exist.
        InvalidArgumentError: If the output path or matte is unusable.
    """
    source = args.input.absolute()
    if not source.exists():
        raise InputFileError(f"cannot open input file: {source}: no such file or directory")
    destination = args.output if args.output is not None else default_destination(source)
    try:
        return RunRequest(source=source, destination=destination, matte=args.matte)
    except ValidationError as ex:
        raise InvalidArgumentError(f"invalid arguments: {describe_validation_error(ex)}") from ex


def describe_validation_error(ex: ValidationError) -> str:
    return "; ".join(f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in ex.errors())


def report_error(message: str) -> None:
    err_console.print(f"[bold red]error:[/] {escape(message)}")


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    raw_args = list(sys.argv[1:] if argv is None else argv)
    try:
        args = parse_cli(raw_args)
    except UsageError:
        print_usage()
        return 2

    try:
        config = create_config_from_env()
    except ValidationError as ex:
        report_error(f"invalid configuration: {describe_validation_error(ex)}")
        return 1

    logger = NULL_LOGGER
    try:
        logger = SimpleLogger.from_settings(config.logging)
        request = build_request(args)
        toolchain = resolve_toolchain(config, want_gif=request.output_kind is OutputKind.GIF)
        result = interpolate_animation(request, StageContext(toolchain=toolchain, config=config, logger=logger))
    except RifeAlphaError as ex:
        logger.error(str(ex))
        report_error(str(ex))
        return 1
    except KeyboardInterrupt:
        err_console.print("Interrupted.")
        return 130

    console.print(f"{raw_args[0]} : {result.source_frames} frames -> {result.final_frames} frames", markup=False)
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    sys.exit(main())
