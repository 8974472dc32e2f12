"""Configuration loading from command-line flags, environment and .env files."""

import argparse
import logging
import os
from collections.abc import Sequence

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

__all__ = ["Settings", "load_settings", "parse_listen_address", "build_parser"]

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_SERIAL_PORT = "/dev/ttyACM0"
DEFAULT_LISTEN_ADDRESS = ":3000"
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_listen_address(address: str) -> tuple[str | None, int]:
    """Split a ``host:port`` listen address.

    An empty host (``:3000``) means all interfaces. IPv6 hosts must be
    bracketed (``[::1]:3000``).

    Args:
        address: Address to split.

    Returns:
        Tuple of (host or None, port).

    Raises:
        ValueError: If the address has no port or the port is out of range.
    """
    host, sep, port_raw = address.rpartition(":")
    if not sep:
        raise ValueError(f"Listen address must be host:port (got: {address!r})")

    try:
        port = int(port_raw)
    except ValueError as e:
        raise ValueError(f"Invalid listen port {port_raw!r} in {address!r}") from e
    if not 0 <= port <= 65535:
        raise ValueError(f"Listen port out of range: {port}")

    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    return (host or None), port


class Settings(BaseModel):
    """Runtime configuration for the exporter.

    Attributes:
        serial_port: Serial device path of the meter.
        listen_address: host:port the metrics server binds to.
        log_level: Root logging level name.
    """

    serial_port: str = Field(DEFAULT_SERIAL_PORT, min_length=1, description="Serial device path.")
    listen_address: str = Field(
        DEFAULT_LISTEN_ADDRESS,
        description="host:port for the metrics endpoint; empty host binds all interfaces.",
    )
    log_level: str = Field(DEFAULT_LOG_LEVEL, description="Logging level name.")

    @field_validator("listen_address")
    @classmethod
    def validate_listen_address(cls, v: str) -> str:
        """Validate that the listen address splits into host and port.

        Args:
            v: Address to validate.

        Returns:
            The validated address.

        Raises:
            ValueError: If the address is malformed.
        """
        parse_listen_address(v)
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name.

        Args:
            v: Level name, case-insensitive.

        Returns:
            Upper-case level name.

        Raises:
            ValueError: If the level is unknown.
        """
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {v!r}; expected one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def listen_host(self) -> str | None:
        """Host part of the listen address (None for all interfaces)."""
        return parse_listen_address(self.listen_address)[0]

    @property
    def listen_port(self) -> int:
        """Port part of the listen address."""
        return parse_listen_address(self.listen_address)[1]


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Defaults are None so unset flags fall through to the environment.

    Returns:
        Argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="power-meter-exporter",
        description="Export power meter ticks read from a serial port as Prometheus metrics.",
    )
    parser.add_argument(
        "-s",
        "--serial-port",
        default=None,
        help=f"serial port to connect to (default: {DEFAULT_SERIAL_PORT})",
    )
    parser.add_argument(
        "-l",
        "--listen-address",
        default=None,
        help=f"address to serve /metrics on (default: {DEFAULT_LISTEN_ADDRESS})",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help=f"logging level (default: {DEFAULT_LOG_LEVEL})",
    )
    return parser


def load_settings(argv: Sequence[str] | None = None) -> Settings:
    """Load and validate settings.

    Precedence: command-line flag, then environment variable, then default.

    Environment variables:
    - SERIAL_PORT: Serial device path.
    - LISTEN_ADDRESS: host:port for the metrics endpoint.
    - LOG_LEVEL: Logging level name.

    Args:
        argv: Arguments without program name; None reads sys.argv.

    Returns:
        Validated Settings object.

    Raises:
        ValueError: If a value is invalid (pydantic ValidationError included).
    """
    args = build_parser().parse_args(argv)

    settings = Settings(
        serial_port=args.serial_port or os.getenv("SERIAL_PORT") or DEFAULT_SERIAL_PORT,
        listen_address=args.listen_address or os.getenv("LISTEN_ADDRESS") or DEFAULT_LISTEN_ADDRESS,
        log_level=args.log_level or os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL,
    )

    logger.info(
        f"Exporter configured: serial_port={settings.serial_port}, "
        f"listen_address={settings.listen_address}, "
        f"log_level={settings.log_level}"
    )

    return settings
