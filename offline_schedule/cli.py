"""CLI interface for offline-schedule."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from offline_schedule.core.config import LoggingConfig, SchedulerConfig, load_config
from offline_schedule.providers.serverless import ServerlessFunctionProvider, ServerlessInvoker
from offline_schedule.runtime.scheduling import OfflineScheduler

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("offline-schedule.yaml")


def configure_logging(logging_config: LoggingConfig, verbose: bool = False) -> None:
    """Send log records to stdout with the configured level and format."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging_config.level.upper(),
        format=logging_config.format,
        stream=sys.stdout,
        force=True,
    )


def build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Collect config values given on the command line."""
    overrides: dict[str, Any] = {}
    if args.service:
        overrides["service_path"] = args.service
    if args.timezone:
        overrides["timezone"] = args.timezone
    return overrides


def build_scheduler(config: SchedulerConfig) -> OfflineScheduler:
    """Wire the serverless collaborators into an OfflineScheduler."""
    function_provider = ServerlessFunctionProvider(config.service_path)
    invoker = ServerlessInvoker(
        command=config.invoke.command,
        cwd=config.invoke.working_dir,
        timeout_seconds=config.invoke.timeout_seconds,
    )
    return OfflineScheduler(
        function_provider=function_provider,
        invoker=invoker,
        log=logging.getLogger("offline_schedule").info,
        timezone=config.timezone,
    )


async def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="offline-schedule - run serverless schedule events against local functions"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH} if present)",
    )
    parser.add_argument(
        "-s",
        "--service",
        type=Path,
        help="Path to the serverless service file (default: serverless.yml)",
    )
    parser.add_argument(
        "--timezone",
        type=str,
        help="IANA timezone for cron schedules (default: UTC)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    load_dotenv(Path(".env"))

    config_path = args.config
    if config_path is None and DEFAULT_CONFIG_PATH.exists():
        config_path = DEFAULT_CONFIG_PATH

    config = load_config(config_path, overrides=build_overrides(args))
    configure_logging(config.logging, verbose=args.verbose)

    scheduler = build_scheduler(config)
    await scheduler.schedule_events_standalone()


def run() -> None:
    """Entry point for the offline-schedule console script."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"Invalid YAML: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.debug("Startup failed", exc_info=True)
        print(f"Startup failed: {e} (run with -v for details)", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    run()
