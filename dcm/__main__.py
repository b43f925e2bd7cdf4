"""
Main CLI entry point for Daemon Config Manager.

Loads the tool settings, configures logging and starts the TUI.
"""

import argparse
import sys
from pathlib import Path

from dcm import __version__
from dcm.conf.roles import ROLE_NAMES
from dcm.config.models import LOG_LEVELS
from dcm.logging import configure_logging_from_args, format_exception_summary, get_logger


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="dcm",
        description="Daemon Config Manager - browse and edit bitcoin.conf and p2pool.conf files",
    )

    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="Config file to open straight away (parsed with --role, default: bitcoin)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to DCM settings file (default: ~/.config/dcm/config.yaml when present)",
    )
    parser.add_argument(
        "--role",
        choices=list(ROLE_NAMES),
        help="Start on this config screen instead of Home",
    )
    parser.add_argument(
        "--start-dir",
        type=Path,
        help="Directory the file explorer opens in when a role has no default location",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output (DEBUG level)",
    )
    parser.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        help="Set logging level (overrides --verbose)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Write logs to file (the TUI never logs to the terminal)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the DCM CLI.

    Args:
        argv: Command-line arguments (for testing)

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    # Settings errors are reported on the terminal before the TUI starts
    configure_logging_from_args(
        verbose=args.verbose,
        log_level=args.log_level,
        log_file=str(args.log_file) if args.log_file else None,
    )

    logger = get_logger(__name__)
    logger.debug("Parsed arguments: %s", args)

    from dcm.config import load_config

    if args.config is not None:
        cfg_path = Path(args.config).expanduser().resolve()
        if not cfg_path.exists():
            logger.error("Settings file not found: %s", cfg_path)
            print(f"Error: Settings file not found: {cfg_path}", file=sys.stderr)
            return 1
    else:
        cfg_path = None

    try:
        config = load_config(cfg_path)
    except (OSError, ValueError) as e:
        logger.error("Invalid settings: %s", format_exception_summary(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.start_dir is not None:
        config.start_dir = Path(args.start_dir).expanduser().resolve()

    log_file = args.log_file or config.log_file
    configure_logging_from_args(
        verbose=args.verbose,
        log_level=args.log_level or (None if args.verbose else config.log_level),
        log_file=str(log_file) if log_file else None,
        console=False,
    )

    role = args.role
    if args.path is not None and role is None:
        role = config.default_role

    try:
        logger.info("Starting TUI interface")
        from dcm.ui.tui.app import run_tui
        return run_tui(config, role=role, path=args.path)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        print("\nInterrupted by user.")
        return 130  # Standard exit code for SIGINT

    except Exception as e:
        logger.exception("Unhandled exception in main")
        print(f"\nError: {e}", file=sys.stderr)
        if args.verbose:
            raise
        return 1


if __name__ == "__main__":
    sys.exit(main())
