"""Command-line interface for the rss_mash application."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import AppConfig, parse_app_config
from .dates import resolve_threshold
from .runner import RunConfig, execute
from .sources import SourceListNotFound

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="rss-mash",
        description="Merge several RSS/Atom feeds into a single RSS 2.0 feed.",
        epilog="Example: rss-mash feeds.txt aggregated.xml yesterday",
    )
    parser.add_argument(
        "input_path",
        metavar="inputFilePath",
        help="Text file containing feed URLs, one per line.",
    )
    parser.add_argument(
        "output_path",
        metavar="outputFilePath",
        help="Where the aggregated RSS feed will be saved.",
    )
    parser.add_argument(
        "on_or_after",
        metavar="onOrAfterDate",
        nargs="?",
        default=None,
        help="Only keep items published on or after this day: "
        "'today', 'yesterday' or a date such as YYYY-MM-DD.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Optional path to a configuration XML file.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (e.g. DEBUG, INFO, WARNING). Overrides config.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Optional path to a log file. Overrides config.",
    )
    return parser


def configure_logging(level_name: str, log_file: Optional[str] = None) -> None:
    """Route log records to stdout and, when given, to ``log_file``."""
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unsupported log level: {level_name}")

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    # force=True closes whatever handlers an earlier call installed
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
    logger.debug(
        "Logging at %s to %s", level_name.upper(), log_file or "the console only"
    )


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        app_config = parse_app_config(args.config) if args.config else AppConfig()
        configure_logging(
            args.log_level or app_config.logging.level,
            args.log_file or app_config.logging.file,
        )
    except ValueError as exc:
        parser.error(str(exc))
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        return 1

    logger.info("RSS Feed Aggregator started.")

    exit_code = 0
    try:
        config = RunConfig(
            input_path=args.input_path,
            output_path=args.output_path,
            on_or_after=resolve_threshold(args.on_or_after),
            timeout=app_config.timeout,
            user_agent=app_config.user_agent,
            channel=app_config.channel,
        )
        result = execute(config)
    except SourceListNotFound as exc:
        logger.error("Error: Input file not found. %s", exc)
        logger.error("Please ensure '%s' exists.", args.input_path)
        exit_code = 1
    except OSError as exc:
        logger.error("Could not write '%s': %s", args.output_path, exc)
        exit_code = 1
    except Exception:  # noqa: BLE001
        logger.exception("An unexpected error occurred.")
        exit_code = 1
    else:
        if result.written:
            logger.info(
                "Successfully aggregated %d items into '%s'.",
                result.item_count,
                args.output_path,
            )

    logger.info("RSS Feed Aggregator finished.")
    return exit_code
