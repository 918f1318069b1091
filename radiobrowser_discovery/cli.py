"""Argument parsing, configuration loading, and discovery bootstrap."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from .config import AppConfig, load_config
from .discovery.endpoint_discovery import EndpointDiscovery
from .exceptions import ConfigError, DiscoveryError
from .logging_config import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_FOUND = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="radiobrowser-discovery",
        description="Find the fastest reachable radio-browser API server",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to a YAML configuration file (defaults apply without one)",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--validate",
        action="store_true",
        help="Validate the configuration file and exit",
    )
    mode.add_argument(
        "--list",
        action="store_true",
        help="Print the resolved candidate URLs without probing them",
    )
    mode.add_argument(
        "--all",
        action="store_true",
        help="Print every reachable endpoint, fastest first",
    )
    parser.add_argument(
        "--fallback",
        action="store_true",
        help="Print the fallback URL instead of failing when nothing is found",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit JSON instead of plain text",
    )
    return parser


def _emit(args: argparse.Namespace, payload, lines: list[str]) -> None:
    if args.json:
        print(json.dumps(payload))
    else:
        for line in lines:
            print(line)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else AppConfig()
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    configure_logging(config.logging)

    if args.validate:
        logger.info("Configuration is valid")
        return EXIT_OK

    discovery = EndpointDiscovery(config)

    try:
        if args.list:
            urls = discovery.api_urls()
            _emit(args, urls, urls)
            return EXIT_OK

        if args.all:
            ranked = discovery.discover_ranked()
            _emit(
                args,
                [{"endpoint": r.endpoint, "duration_ms": r.duration} for r in ranked],
                [f"{r.endpoint}\t{r.duration} ms" for r in ranked],
            )
            return EXIT_OK if ranked else EXIT_NOT_FOUND

        if args.fallback:
            endpoint = discovery.discover_or_default()
        else:
            endpoint = discovery.discover()
    except DiscoveryError as exc:
        logger.error("Discovery failed: %s", exc)
        return EXIT_ERROR
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return EXIT_ERROR

    if endpoint is None:
        logger.error("No reachable endpoint found")
        return EXIT_NOT_FOUND

    _emit(args, {"endpoint": endpoint}, [endpoint])
    return EXIT_OK


def main_entry() -> None:
    sys.exit(main())
