"""
Command-line interface for i18n-harvest.

Usage Examples:
    Extract strings and update every locale store:
        i18n-harvest extract

    Show what an extraction would change without writing:
        i18n-harvest extract --dry-run

    Fail (exit code 1) when locale files are out of date, e.g. in CI:
        i18n-harvest --ci-mode extract --check

    Fill target locales from the base locale only:
        i18n-harvest sync
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import logging.handlers
import sys
from collections.abc import Sequence
from pathlib import Path

from .config.manager import DEFAULT_CONFIG_FILENAME, ConfigManager
from .pipeline.runner import HarvestRunner, RunReport
from .utils.exceptions import HarvestError

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, ci_mode: bool = False, log_file: Path | None = None) -> None:
    """
    Configure logging for the command-line run.

    Args:
        verbose: Enable debug logging on the console
        ci_mode: Enable CI-friendly logging format
        log_file: Optional file receiving detailed, size-rotated logs
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    if ci_mode:
        console_format = "::%(levelname)s::%(message)s"
    else:
        console_format = "%(asctime)s - %(levelname)s - %(message)s"

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter(console_format, datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(console_handler)

    if log_file is not None:
        _ = log_file.parent.mkdir(parents=True, exist_ok=True)
        # File handler with rotation (5MB max, keep 3 backups)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
            )
        )
        root_logger.addHandler(file_handler)

    logging.getLogger("asyncio").setLevel(logging.WARNING)


def create_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser.

    Returns:
        argparse.ArgumentParser: Parser with ``extract`` and ``sync`` subcommands
    """
    parser = argparse.ArgumentParser(
        prog="i18n-harvest",
        description="Harvest translatable strings into keyed locale stores",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s extract                  # Extract strings and update locale files
  %(prog)s extract --dry-run        # Show what would change
  %(prog)s --ci-mode extract --check
  %(prog)s sync                     # Fill target locales from the base locale
        """,
    )

    _ = parser.add_argument(
        "--project-root",
        type=Path,
        default=Path("."),
        help="Project root that configured paths are relative to (default: .)",
    )
    _ = parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Configuration file (default: <project-root>/{DEFAULT_CONFIG_FILENAME})",
    )
    _ = parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    _ = parser.add_argument(
        "--ci-mode",
        action="store_true",
        help="Enable CI-friendly logging format",
    )
    _ = parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write detailed logs to this file",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    extract_parser = subparsers.add_parser(
        "extract", help="Extract strings, assign keys and synchronize locales"
    )
    _ = extract_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute changes without writing any file",
    )
    _ = extract_parser.add_argument(
        "--check",
        action="store_true",
        help="Exit with code 1 if any locale file would change",
    )
    extract_parser.set_defaults(handler=cmd_extract)

    sync_parser = subparsers.add_parser(
        "sync", help="Fill missing keys of target locales from the base locale"
    )
    _ = sync_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute changes without writing any file",
    )
    sync_parser.set_defaults(handler=cmd_sync)

    return parser


def build_runner(args: argparse.Namespace) -> HarvestRunner:
    """
    Load configuration and ignore patterns and create a runner.

    Raises:
        ConfigurationError: If the configuration or an ignore file is invalid
    """
    project_root: Path = args.project_root.resolve()  # pyright: ignore[reportAny]
    config_arg: Path | None = args.config  # pyright: ignore[reportAny]
    config_path = config_arg if config_arg is not None else project_root / DEFAULT_CONFIG_FILENAME

    config = ConfigManager.load_config(config_path)
    ignore_patterns = ConfigManager.load_ignore_patterns(
        [project_root / name for name in config.paths.ignore_pattern_files]
    )
    logger.debug(f"Project root: {project_root}, configuration: {config_path}")
    return HarvestRunner(project_root, config, ignore_patterns)


def _exit_code(report: RunReport, check: bool) -> int:
    if check and report.has_pending_changes:
        logger.error(f"{len(report.pending)} locale files are out of date")
        return 1
    return 0


def cmd_extract(args: argparse.Namespace) -> int:
    """
    Command handler for extraction.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    dry_run: bool = args.dry_run  # pyright: ignore[reportAny]
    check: bool = args.check  # pyright: ignore[reportAny]

    runner = build_runner(args)
    report = asyncio.run(runner.extract(dry_run=dry_run, check=check))
    return _exit_code(report, check)


def cmd_sync(args: argparse.Namespace) -> int:
    """
    Command handler for synchronization.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    dry_run: bool = args.dry_run  # pyright: ignore[reportAny]

    runner = build_runner(args)
    _ = asyncio.run(runner.sync(dry_run=dry_run))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success, 1 for a fatal error or pending changes in check mode)
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    verbose: bool = args.verbose  # pyright: ignore[reportAny]
    ci_mode: bool = args.ci_mode  # pyright: ignore[reportAny]
    log_file: Path | None = args.log_file  # pyright: ignore[reportAny]
    setup_logging(verbose, ci_mode, log_file)

    try:
        return args.handler(args)  # pyright: ignore[reportAny]
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        return 1
    except HarvestError as e:
        logger.error(f"{e} (category: {e.category.value}, severity: {e.severity.value})")
        return 1
    except OSError as e:
        logger.error(f"File system error: {e}")
        if verbose:
            logger.exception("Full traceback:")
        return 1


def cli() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
