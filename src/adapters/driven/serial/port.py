"""Serial port adapter yielding decoded text lines."""

import logging
from collections.abc import Iterator
from types import TracebackType

import serial

__all__ = ["SerialLineSource", "BAUD_RATE"]

logger = logging.getLogger(__name__)

# Fixed meter framing: 57600 8-N-1
BAUD_RATE = 57600
BYTE_SIZE = serial.EIGHTBITS
PARITY = serial.PARITY_NONE
STOP_BITS = serial.STOPBITS_ONE


class SerialLineSource:
    """Line-oriented reader over a pyserial port.

    Reads block until at least one byte arrives (no timeout), so iteration
    only ends on a read error. Use as a context manager to close the port.
    """

    def __init__(self, port: str) -> None:
        """Initialize source.

        Args:
            port: Device path, e.g. /dev/ttyACM0.
        """
        self.port = port
        self._ser: serial.Serial | None = None

    def open(self) -> None:
        """Open the device with the meter framing.

        Raises:
            ConnectionError: If the device cannot be opened.
        """
        logger.info(f"Opening {self.port}")
        try:
            self._ser = serial.Serial(
                self.port,
                baudrate=BAUD_RATE,
                bytesize=BYTE_SIZE,
                parity=PARITY,
                stopbits=STOP_BITS,
                timeout=None,
            )
        except (serial.SerialException, ValueError) as e:
            raise ConnectionError(f"Cannot open {self.port}: {e}") from e

    def close(self) -> None:
        """Close the device if open."""
        if self._ser is not None:
            if self._ser.is_open:
                self._ser.close()
            self._ser = None

    def __enter__(self) -> "SerialLineSource":
        """Open the port.

        Returns:
            Self for use in with statement.
        """
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Close the port."""
        self.close()

    def __iter__(self) -> Iterator[str]:
        """Yield lines without their terminator.

        Yields:
            Decoded lines; undecodable bytes are replaced.

        Raises:
            RuntimeError: If the port is not open.
            serial.SerialException: On read errors (an OSError subclass).
        """
        if self._ser is None:
            raise RuntimeError("Port not open; use 'with' context manager")

        while True:
            raw = self._ser.readline()
            if not raw:
                # Only possible when the device reports EOF
                return
            yield raw.decode("utf-8", errors="replace").rstrip("\r\n")
