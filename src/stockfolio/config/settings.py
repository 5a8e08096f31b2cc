"""Application settings and configuration."""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".stockfolio"


@dataclass(frozen=True)
class ProviderConfig:
    """
    Explicit provider configuration handed to the provider factory.

    A provider whose credential is missing is built in a disabled state
    instead of failing at startup.
    """

    credentials: Mapping[str, Optional[str]] = field(default_factory=lambda: MappingProxyType({}))
    endpoints: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    timeout_seconds: float = 10.0

    def credential(self, name: str) -> Optional[str]:
        value = self.credentials.get(name)
        return value or None

    def endpoint(self, name: str, default: str = "") -> str:
        return self.endpoints.get(name) or default


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Stockfolio"
    app_version: str = "0.1.0"

    # Data directory (all app data lives here)
    data_dir: Optional[Path] = None

    # Database URL (derived from data_dir if not set explicitly)
    database_url: Optional[str] = None

    log_level: str = "INFO"

    # Market data settings
    market_data_mode: str = "live"  # "live" or "stub"
    rapidapi_key: Optional[str] = None
    rapidapi_host: str = "yh-finance.p.rapidapi.com"
    google_finance_base_url: str = "https://www.google.com/finance"
    provider_timeout_seconds: float = 10.0

    # Throttling between outbound calls
    provider_min_interval_seconds: float = 0.4
    symbol_delay_seconds: float = 0.3
    not_found_delay_seconds: float = 0.1

    # Exchange assigned to stocks created without one
    default_exchange: str = "NSE"

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "stockfolio.db"
        return f"sqlite:///{db_path}"

    def provider_config(self) -> ProviderConfig:
        """Build the explicit provider configuration value."""
        return ProviderConfig(
            credentials=MappingProxyType({"rapidapi": self.rapidapi_key}),
            endpoints=MappingProxyType({
                "rapidapi": self.rapidapi_host,
                "google_finance": self.google_finance_base_url,
            }),
            timeout_seconds=self.provider_timeout_seconds,
        )


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
