"""Tests for main application entrypoint."""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest
from prometheus_client import CollectorRegistry

from src.adapters.driven.config.settings import Settings
from src.main import main

__all__ = []


def make_stop_event_set() -> asyncio.Event:
    """Create a stop event that is already set so main returns at once."""
    stop = asyncio.Event()
    stop.set()
    return stop


@pytest.mark.asyncio
async def test_main_starts_reader_and_server() -> None:
    """Main should wire the reader and server to one shared state."""
    with (
        patch("src.main.configure_logs"),
        patch("src.main.load_settings") as mock_load_settings,
        patch("src.main.SerialReader") as mock_reader_class,
        patch("src.main.MetricsServer") as mock_server_class,
        patch("src.main.make_stop_event", side_effect=make_stop_event_set),
    ):
        mock_load_settings.return_value = Settings(
            serial_port="/dev/ttyTEST", listen_address="127.0.0.1:9100"
        )
        mock_server = AsyncMock()
        mock_server_class.return_value = mock_server

        await main([])

        mock_reader_class.return_value.start.assert_called_once()
        reader_kwargs = mock_reader_class.call_args.kwargs
        assert reader_kwargs["source"].port == "/dev/ttyTEST"

        server_kwargs = mock_server_class.call_args.kwargs
        assert server_kwargs == {"host": "127.0.0.1", "port": 9100}
        mock_server.__aenter__.assert_awaited_once()
        mock_server.__aexit__.assert_awaited_once()


@pytest.mark.asyncio
async def test_main_aborts_on_configuration_error() -> None:
    """Main should not start anything when configuration is invalid."""
    with (
        patch("src.main.configure_logs"),
        patch("src.main.load_settings", side_effect=ValueError("bad address")),
        patch("src.main.SerialReader") as mock_reader_class,
        patch("src.main.MetricsServer") as mock_server_class,
        patch("src.main.logger") as mock_logger,
    ):
        await main([])

        mock_reader_class.assert_not_called()
        mock_server_class.assert_not_called()
        mock_logger.error.assert_called()


@pytest.mark.asyncio
async def test_main_logs_server_failure() -> None:
    """A server that cannot bind should be logged, not raised."""
    with (
        patch("src.main.configure_logs"),
        patch("src.main.load_settings", return_value=Settings()),
        patch("src.main.SerialReader"),
        patch("src.main.MetricsServer") as mock_server_class,
        patch("src.main.make_stop_event", side_effect=make_stop_event_set),
        patch("src.main.logger") as mock_logger,
    ):
        mock_server = AsyncMock()
        mock_server.__aenter__.side_effect = OSError("address already in use")
        mock_server_class.return_value = mock_server

        try:
            await main([])
        except OSError:
            pytest.fail("main() should not raise; exceptions are caught internally")

        mock_logger.error.assert_called()


@pytest.mark.asyncio
async def test_main_keeps_serving_when_serial_open_fails() -> None:
    """Server should run even if the reader thread cannot open the port."""
    with (
        patch("src.main.configure_logs"),
        patch("src.main.load_settings", return_value=Settings(serial_port="/dev/does-not-exist")),
        patch("src.main.MetricsServer") as mock_server_class,
        patch("src.main.make_stop_event", side_effect=make_stop_event_set),
    ):
        mock_server = AsyncMock()
        mock_server_class.return_value = mock_server

        await main([])

        mock_server.__aenter__.assert_awaited_once()
        assert isinstance(mock_server_class.call_args.args[0], CollectorRegistry)
