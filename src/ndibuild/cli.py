"""
Command-line interface for ndibuild.

This module provides the `ndibuild` command run as a build step:

    ndibuild            # same as `ndibuild run`
    ndibuild run        # stage the NDI runtime and emit the link directive
    ndibuild locate     # report where the SDK and runtime were found

Values not given on the command line are read from the build environment
(CARGO_CFG_TARGET_OS, OUT_DIR, CARGO_MANIFEST_DIR, CARGO_FEATURE_*).
"""

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rich.console import Console

from ndibuild import __version__
from ndibuild.config import MANIFEST_DIR_VAR, TARGET_OS_VAR, BuildConfig, PlatformTarget
from ndibuild.errors import NdiBuildError
from ndibuild.output import init_timer, log_error, log_header, set_verbose
from ndibuild.pipeline import BuildPipeline, resolve
from ndibuild.summary import build_resolution_table, print_summary

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

_log_handler: Optional[logging.Handler] = None


def setup_logging(verbose: bool) -> None:
    """Route ndibuild debug records to stderr when verbose, and detach otherwise."""
    global _log_handler

    package_logger = logging.getLogger("ndibuild")
    if _log_handler is not None:
        package_logger.removeHandler(_log_handler)
        _log_handler = None

    if not verbose:
        package_logger.setLevel(logging.NOTSET)
        return

    _log_handler = logging.StreamHandler(sys.stderr)
    _log_handler.setLevel(logging.DEBUG)
    _log_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    package_logger.addHandler(_log_handler)
    package_logger.setLevel(logging.DEBUG)


@dataclass
class RunArgs:
    """Arguments for the run command."""

    target_os: Optional[str] = None
    out_dir: Optional[Path] = None
    manifest_dir: Optional[Path] = None
    bindings: Optional[bool] = None
    dynamic_link: Optional[bool] = None
    verbose: bool = False
    quiet: bool = False


@dataclass
class LocateArgs:
    """Arguments for the locate command."""

    target_os: Optional[str] = None
    manifest_dir: Optional[Path] = None
    verbose: bool = False


def run_command(args: RunArgs) -> int:
    """Run the pipeline.

    Returns:
        0 on success, 1 on any fatal build error
    """
    init_timer()
    set_verbose(args.verbose)
    setup_logging(args.verbose)
    if not args.quiet:
        log_header("ndibuild", __version__)

    try:
        config = BuildConfig.from_env(
            target_os=args.target_os,
            out_dir=args.out_dir,
            manifest_dir=args.manifest_dir,
            bindings=args.bindings,
            dynamic_link=args.dynamic_link,
            verbose=args.verbose,
        )
        result = BuildPipeline(config).run()
    except NdiBuildError as e:
        log_error(str(e))
        return 1

    if args.verbose:
        print_summary(result)
    return 0


def locate_command(args: LocateArgs) -> int:
    """Print where the SDK root and runtime directory resolve.

    Falls back to the host platform and the current directory when the build
    environment does not name them, so it can be run by hand.
    """
    init_timer()
    set_verbose(args.verbose)
    setup_logging(args.verbose)

    target_os = args.target_os or os.environ.get(TARGET_OS_VAR)
    manifest_dir = args.manifest_dir or (None if os.environ.get(MANIFEST_DIR_VAR) else Path.cwd())

    try:
        if target_os is None:
            target_os = PlatformTarget.host().value
        config = BuildConfig.from_env(target_os=target_os, manifest_dir=manifest_dir, verbose=args.verbose)
    except NdiBuildError as e:
        log_error(str(e))
        return 1

    Console().print(build_resolution_table(resolve(config)))
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--target-os",
        default=None,
        help=f"Target OS: windows, linux or macos (default: ${TARGET_OS_VAR})",
    )
    parser.add_argument(
        "--manifest-dir",
        type=Path,
        default=None,
        help=f"Project root (default: ${MANIFEST_DIR_VAR})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ndibuild",
        description="Locate, stage and link the NDI SDK runtime for a build",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Stage the NDI runtime and emit the link directive")
    _add_common_arguments(run_parser)
    run_parser.add_argument(
        "--out-dir",
        type=Path,
        default=None,
        help="Build output directory (default: $OUT_DIR)",
    )
    run_parser.add_argument(
        "--bindings",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Regenerate bindings (default: $CARGO_FEATURE_BINDINGS)",
    )
    run_parser.add_argument(
        "--dynamic-link",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Skip the link directive (default: $CARGO_FEATURE_DYNAMIC_LINK)",
    )
    run_parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not print the banner",
    )

    locate_parser = subparsers.add_parser("locate", help="Show where the SDK and runtime resolve")
    _add_common_arguments(locate_parser)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the ndibuild command."""
    parser = _build_parser()
    parsed_args = parser.parse_args(argv)

    if parsed_args.command == "locate":
        return locate_command(
            LocateArgs(
                target_os=parsed_args.target_os,
                manifest_dir=parsed_args.manifest_dir,
                verbose=parsed_args.verbose,
            )
        )

    if parsed_args.command is None:
        return run_command(RunArgs())

    return run_command(
        RunArgs(
            target_os=parsed_args.target_os,
            out_dir=parsed_args.out_dir,
            manifest_dir=parsed_args.manifest_dir,
            bindings=parsed_args.bindings,
            dynamic_link=parsed_args.dynamic_link,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
        )
    )


if __name__ == "__main__":
    sys.exit(main())
