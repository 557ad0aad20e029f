"""Configuration file management for budgetmgr."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from budgetmgr.domain.args import SpendCostPolicy
from budgetmgr.domain.errors import ValidationError
from budgetmgr.domain.money import currency_precision

LOG_LEVEL_ENV = "BUDGETMGR_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULTS: dict[str, Any] = {
    "currency": "GBP",
    "spend_cost_policy": SpendCostPolicy.ANY.value,
    "log_level": "WARNING",
}


@dataclass(frozen=True)
class Settings:
    """Validated application settings."""

    currency: str = DEFAULTS["currency"]
    spend_cost_policy: SpendCostPolicy = SpendCostPolicy.ANY
    log_level: str = DEFAULTS["log_level"]
    db_path: Path | None = None


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
    return get_xdg_config_home() / "budgetmgr" / "config.toml"


def create_default_config(config_path: Path | None = None, currency: str | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
        currency: Currency to write instead of the default one.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    default_config = dict(DEFAULTS)
    if currency:
        default_config["currency"] = currency.upper()

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


def load_settings(config_path: Path | None = None) -> Settings:
    """Load and validate settings.

    A missing config file means defaults. The BUDGETMGR_LOG_LEVEL environment
    variable overrides log_level from the file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Settings.

    Raises:
        ValidationError: If currency, spend_cost_policy or log_level is invalid.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = {}

    currency = str(config.get("currency", DEFAULTS["currency"])).upper()
    currency_precision(currency)

    policy = config.get("spend_cost_policy", DEFAULTS["spend_cost_policy"])
    try:
        spend_cost_policy = SpendCostPolicy(policy)
    except ValueError:
        raise ValidationError(f"invalid spend_cost_policy {policy!r}") from None

    log_level = str(os.environ.get(LOG_LEVEL_ENV) or config.get("log_level", DEFAULTS["log_level"])).upper()
    if log_level not in LOG_LEVELS:
        raise ValidationError(f"invalid log_level {log_level!r}")

    db_path = config.get("db_path")

    return Settings(
        currency=currency,
        spend_cost_policy=spend_cost_policy,
        log_level=log_level,
        db_path=Path(db_path).expanduser() if db_path else None,
    )
