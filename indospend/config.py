"""Configuration file management for indospend."""

import math
import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from indospend.domain.ledger import DEFAULT_CONVERSION_RATE
from indospend.domain.models import Currency, parse_currency

DEFAULT_CURRENCY = Currency.SGD


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "indospend" / "config.toml"


def default_config() -> dict[str, Any]:
    """Get the settings written by 'indospend init'."""
    return {
        "conversion_rate": DEFAULT_CONVERSION_RATE,
        "default_currency": DEFAULT_CURRENCY.value,
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)
    save_config(default_config(), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def load_settings(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration merged over the defaults.

    A missing config file is not an error; the defaults are returned.
    """
    settings = default_config()
    try:
        settings.update(load_config(config_path))
    except FileNotFoundError:
        pass
    return settings


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def _check_rate(rate: float) -> None:
    if not math.isfinite(rate) or rate <= 0:
        raise ValueError(f"Conversion rate must be a positive number, got {rate}")


def get_conversion_rate(config_path: Path | None = None) -> float:
    """Get the SGD to IDR conversion rate.

    Raises:
        ValueError: If the configured rate is not a positive number.
    """
    value = load_settings(config_path)["conversion_rate"]
    try:
        rate = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Conversion rate must be a number, got {value!r}") from e
    _check_rate(rate)
    return rate


def set_conversion_rate(rate: float, config_path: Path | None = None) -> None:
    """Persist a new SGD to IDR conversion rate.

    Args:
        rate: IDR per SGD.
        config_path: Path to config file. If None, uses default location.

    Raises:
        ValueError: If rate is not a positive finite number.
    """
    _check_rate(rate)

    if config_path is None:
        config_path = get_config_path()

    config = load_settings(config_path)
    config["conversion_rate"] = float(rate)

    config_path.parent.mkdir(parents=True, exist_ok=True)
    save_config(config, config_path)


def get_default_currency(config_path: Path | None = None) -> Currency:
    """Get the currency commands use when --currency is not given.

    Raises:
        ValueError: If the configured currency is unknown.
    """
    value = load_settings(config_path)["default_currency"]
    if not isinstance(value, str):
        raise ValueError(f"Default currency must be a currency code, got {value!r}")
    return parse_currency(value)
