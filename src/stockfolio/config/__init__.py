"""Configuration package."""

from stockfolio.config.settings import (
    ProviderConfig,
    Settings,
    get_settings,
    set_settings,
    reset_settings,
)

__all__ = [
    "ProviderConfig",
    "Settings",
    "get_settings",
    "set_settings",
    "reset_settings",
]
