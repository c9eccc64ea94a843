"""Configuration file management for spendlog."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from spendlog.store.schema import get_db_path

DEFAULT_CURRENCY = "₹"


@dataclass(frozen=True)
class Settings:
    """Effective settings after applying config file values over defaults."""

    currency: str
    db_path: Path


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
    return get_xdg_config_home() / "spendlog" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    default_config: dict[str, Any] = {
        "currency": DEFAULT_CURRENCY,
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(default_config, f)

    os.chmod(config_path, 0o600)


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


def get_settings(config_path: Path | None = None) -> Settings:
    """Resolve effective settings.

    A missing config file means defaults. A config file that is not valid
    TOML is an error.

    Raises:
        tomllib.TOMLDecodeError: If the config file cannot be parsed.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = {}

    currency = config.get("currency")
    db_path = config.get("db_path")

    return Settings(
        currency=currency if isinstance(currency, str) and currency else DEFAULT_CURRENCY,
        db_path=Path(db_path).expanduser() if isinstance(db_path, str) and db_path else get_db_path(),
    )
