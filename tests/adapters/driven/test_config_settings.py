"""Tests for configuration loading and validation."""

import pytest
from pydantic import ValidationError

from src.adapters.driven.config.settings import Settings, load_settings, parse_listen_address

__all__ = []


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove exporter variables that may leak from the environment."""
    for name in ("SERIAL_PORT", "LISTEN_ADDRESS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.mark.parametrize(
    ("address", "expected"),
    [
        (":3000", (None, 3000)),
        ("127.0.0.1:9100", ("127.0.0.1", 9100)),
        ("localhost:0", ("localhost", 0)),
        ("[::1]:3000", ("::1", 3000)),
    ],
)
def test_parse_listen_address(address: str, expected: tuple[str | None, int]) -> None:
    """Listen addresses should split into host and port."""
    assert parse_listen_address(address) == expected


@pytest.mark.parametrize("address", ["3000", "host:", "host:abc", ":70000"])
def test_parse_listen_address_rejects_invalid(address: str) -> None:
    """Malformed addresses should raise ValueError."""
    with pytest.raises(ValueError):
        parse_listen_address(address)


def test_settings_defaults() -> None:
    """Settings should default to the meter's usual device and port 3000."""
    settings = Settings()

    assert settings.serial_port == "/dev/ttyACM0"
    assert settings.listen_address == ":3000"
    assert settings.listen_host is None
    assert settings.listen_port == 3000
    assert settings.log_level == "INFO"


def test_settings_rejects_bad_listen_address() -> None:
    """Settings should reject a listen address without port."""
    with pytest.raises(ValidationError, match="host:port"):
        Settings(listen_address="localhost")


def test_settings_normalizes_log_level() -> None:
    """Log level should be upper-cased and validated."""
    assert Settings(log_level="debug").log_level == "DEBUG"
    with pytest.raises(ValidationError, match="Unknown log level"):
        Settings(log_level="chatty")


def test_load_settings_defaults() -> None:
    """Without flags or environment the defaults apply."""
    settings = load_settings([])

    assert settings.serial_port == "/dev/ttyACM0"
    assert settings.listen_address == ":3000"


def test_load_settings_short_flags() -> None:
    """Short flags -s and -l should be accepted."""
    settings = load_settings(["-s", "/dev/ttyUSB1", "-l", "127.0.0.1:9000"])

    assert settings.serial_port == "/dev/ttyUSB1"
    assert settings.listen_host == "127.0.0.1"
    assert settings.listen_port == 9000


def test_load_settings_long_flags() -> None:
    """Long flags should be accepted."""
    settings = load_settings(
        ["--serial-port", "/dev/ttyS0", "--listen-address", ":8080", "--log-level", "warning"]
    )

    assert settings.serial_port == "/dev/ttyS0"
    assert settings.listen_port == 8080
    assert settings.log_level == "WARNING"


def test_load_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment variables should be used when flags are absent."""
    monkeypatch.setenv("SERIAL_PORT", "/dev/ttyENV")
    monkeypatch.setenv("LISTEN_ADDRESS", ":9999")

    settings = load_settings([])

    assert settings.serial_port == "/dev/ttyENV"
    assert settings.listen_port == 9999


def test_load_settings_flags_override_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Flags should take precedence over environment variables."""
    monkeypatch.setenv("SERIAL_PORT", "/dev/ttyENV")

    settings = load_settings(["-s", "/dev/ttyFLAG"])

    assert settings.serial_port == "/dev/ttyFLAG"


def test_load_settings_failure() -> None:
    """Invalid values should raise ValueError."""
    with pytest.raises(ValueError, match="Invalid listen port"):
        load_settings(["-l", ":notaport"])
