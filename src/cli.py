"""Command-line interface for the Moonwell liquidity monitor."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from .config import load_config
from .errors import ConfigurationError
from .logging_setup import configure_logging
from .services import LiquidityMonitor

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="moonwell-liquidity-monitor",
        description="Moonwell market and vault liquidity monitor",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("check", help="Single liquidity check, alerting on breach")
    sub.add_parser("test-alert", help="Send a liquidity alert with sample data")
    sub.add_parser("test-error-alert", help="Send a data fetch warning with sample errors")

    return parser


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected command."""
    config = load_config(args.config)
    monitor = LiquidityMonitor(config)

    if args.command == "check":
        outcome = await monitor.check_and_alert()
        logger.info("Run outcome: %s", outcome.value)
    elif args.command == "test-alert":
        await monitor.send_test_alert()
    elif args.command == "test-error-alert":
        await monitor.send_test_error_alert()


def main(argv: list[str] | None = None) -> None:
    """Entry point. Exits 1 on any fatal error."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(args.log_level)

    try:
        asyncio.run(_run(args))
    except ConfigurationError as e:
        logger.error("❌ Configuration error: %s", e)
        sys.exit(1)
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)
