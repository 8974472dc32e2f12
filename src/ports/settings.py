"""Settings port definition (DTO)."""

from dataclasses import dataclass

__all__ = ["SettingsPort"]


@dataclass
class SettingsPort:
    """Runtime settings for the exporter.

    Decouples core and adapters from concrete configuration sources.

    Attributes:
        serial_port: Path of the serial device the meter is attached to.
        listen_host: Interface the metrics server binds to; None for all.
        listen_port: TCP port the metrics server listens on.
    """

    serial_port: str
    listen_host: str | None
    listen_port: int
