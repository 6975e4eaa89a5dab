"""Command-line entry point for the game database index generator.

This module provides:
- Command-line argument parsing
- Logging setup and configuration loading
- Running the index build and mapping failures to exit codes
"""

import argparse
import asyncio
import sys
from pathlib import Path

import structlog

from src.models import IndexConfig
from src.services.config import ConfigurationService
from src.services.errors import ConfigurationError, get_error_service
from src.services.index_builder import IndexBuilderService
from src.services.logging import setup_logging

__version__ = "0.1.0"

log = structlog.stdlib.get_logger()


class ParsedArgs:
    """Type-safe container for parsed command-line arguments."""

    def __init__(
        self,
        source_dir: Path,
        templates: Path,
        config: Path | None,
        log_level: str | None,
        log_dir: Path | None,
    ) -> None:
        self.source_dir: Path = source_dir
        self.templates: Path = templates
        self.config: Path | None = config
        self.log_level: str | None = log_level
        self.log_dir: Path | None = log_dir


def parse_arguments(argv: list[str] | None = None) -> ParsedArgs:
    """Parse command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Parsed arguments container
    """
    parser = argparse.ArgumentParser(
        prog="db-index",
        description="Generate index.html and list.txt files for a game archive database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  db-index /srv/database                        Build using templates in the current directory
  db-index /srv/database --templates ./web      Use templates from ./web
  db-index /srv/database --log-level DEBUG      Show every file that is scanned
        """,
    )

    _ = parser.add_argument(
        "source_dir",
        type=Path,
        help="Root of the database tree (one subdirectory per category)",
    )

    _ = parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    _ = parser.add_argument(
        "--templates",
        type=Path,
        default=Path.cwd(),
        help="Directory with index.html.tpl, table.html.tpl, broadcast-table.html.tpl and style.css (default: current directory)",
    )

    _ = parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: ~/.config/db-index/config.json)",
    )

    _ = parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set the logging level (default: from configuration, INFO)",
    )

    _ = parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for app.log and error.log (default: console only)",
    )

    ns = parser.parse_args(argv)

    return ParsedArgs(
        source_dir=ns.source_dir,
        templates=ns.templates,
        config=ns.config,
        log_level=ns.log_level,
        log_dir=ns.log_dir,
    )


def load_config(args: ParsedArgs) -> IndexConfig:
    """Load the configuration named on the command line, or the default one.

    Raises:
        ConfigurationError: If --config names a file that does not exist
    """
    if args.config is not None and not args.config.exists():
        raise ConfigurationError(
            "The configuration file does not exist.",
            setting="--config",
            current_value=str(args.config),
            expected="an existing JSON file",
        )
    return ConfigurationService(config_path=args.config).load_config()


def run(args: ParsedArgs) -> int:
    """Build the index for the parsed arguments.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    try:
        config = load_config(args)
        if args.log_level is None and config.log_level != "INFO":
            _ = setup_logging(log_level=config.log_level, log_dir=args.log_dir)

        builder = IndexBuilderService(template_dir=args.templates, config=config)
        output = asyncio.run(builder.build(args.source_dir))

    except KeyboardInterrupt:
        log.info("Build interrupted by user")
        return 130

    except Exception as e:
        service = get_error_service()
        friendly = service.handle_error(
            e,
            operation="build_index",
            component="main",
            context={"path": str(args.source_dir)},
        )
        log.debug("Build failure traceback", exc_info=True)
        print(service.create_user_message(friendly), file=sys.stderr)
        return 1

    log.info("Index generated", output=str(output))
    return 0


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the application."""
    args = parse_arguments(argv)

    _ = setup_logging(log_level=args.log_level or "INFO", log_dir=args.log_dir)

    log.info(
        "Starting index generator",
        version=__version__,
        source_dir=str(args.source_dir),
        templates=str(args.templates),
        config_path=str(args.config) if args.config else "default",
    )

    exit_code = run(args)
    log.info("Generator exiting", exit_code=exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
