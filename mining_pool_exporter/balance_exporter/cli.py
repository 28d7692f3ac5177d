#!/usr/bin/env python3
"""
Command line entry point of the balance exporter.
"""

import argparse
import logging
import sys
from typing import Tuple
from urllib.parse import urlparse

import uvicorn

from balance_exporter.api import create_app
from balance_exporter.config import EXPORTER_CONFIG, UPSTREAM_CONFIG, Settings
from balance_exporter.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Prometheus exporter for MiningPoolHub balances")
    parser.add_argument("--web.listen-address", dest="listen_address", default=EXPORTER_CONFIG["listen_address"],
                        help="Address to listen on for web interface and telemetry")
    parser.add_argument("--web.telemetry-path", dest="metrics_path", default=EXPORTER_CONFIG["metrics_path"],
                        help="Path under which to expose metrics")
    parser.add_argument("--url", dest="pool_url", default=UPSTREAM_CONFIG["pool_url"],
                        help="Overwrite base URL for MiningPoolHub")
    parser.add_argument("--price-url", default=UPSTREAM_CONFIG["price_url"],
                        help="Overwrite base URL for the CryptoCompare price API")
    parser.add_argument("--fiat", default=EXPORTER_CONFIG["default_fiat"],
                        help="Currency used when a scrape does not ask for one")
    parser.add_argument("--timeout", type=float, default=UPSTREAM_CONFIG["timeout"],
                        help="Timeout of each upstream request in seconds")
    parser.add_argument("--max-retries", type=int, default=UPSTREAM_CONFIG["max_retries"],
                        help="Retries of a failed upstream request")
    parser.add_argument("--log-level", default=EXPORTER_CONFIG["log_level"],
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level")
    parser.add_argument("--log-dir", help="Also write logs to a dated file in this directory")
    return parser.parse_args(argv)


def parse_listen_address(address: str) -> Tuple[str, int]:
    """
    Split a ``host:port`` listen address.

    An empty host (e.g. ``:9401``) listens on all interfaces.

    Raises:
        ValueError: If the address has no valid port
    """
    host, sep, port = address.rpartition(":")
    if not sep or not port.isdigit() or not 0 < int(port) < 65536:
        raise ValueError(f"{address} is not a valid listen address")
    host = host.strip("[]") or "0.0.0.0"
    return host, int(port)


def validate_url(url: str) -> str:
    """Return ``url`` if it is an absolute http(s) URL, raise ValueError otherwise."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"{url} is not a valid URL")
    return url


def main(argv=None):
    """Main function."""
    args = parse_args(argv)
    setup_logging(level=getattr(logging, args.log_level), log_dir=args.log_dir)

    try:
        host, port = parse_listen_address(args.listen_address)
        settings = Settings(
            metrics_path="/" + args.metrics_path.lstrip("/"),
            default_fiat=args.fiat.upper(),
            pool_url=validate_url(args.pool_url),
            price_url=validate_url(args.price_url),
            timeout=args.timeout,
            max_retries=args.max_retries
        )
    except ValueError as e:
        logger.error(f"Error: {str(e)}")
        sys.exit(1)

    logger.info(f"Starting HTTP server on {args.listen_address}")
    uvicorn.run(create_app(settings), host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
