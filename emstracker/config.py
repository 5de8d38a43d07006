"""
Configuration management for the EMS tracker.
Handles loading settings from environment variables and config files.
"""

import os
from pathlib import Path
from typing import Optional
from dataclasses import dataclass
from dotenv import load_dotenv


DEFAULT_EMS_URL = "http://www.emspost.ru/ru/tracking.aspx/getEmsInfo"

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass
class TrackerConfig:
    """Main configuration class for the tracker."""

    # === Carrier endpoints ===
    ems_url: str = DEFAULT_EMS_URL
    request_timeout: float = 30.0  # seconds
    default_carrier: str = "ems"

    # Logging
    log_level: str = "INFO"
    log_file: str = ""  # empty = console only

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "TrackerConfig":
        """Load configuration from environment variables."""

        # Try to load from .env file
        if env_file:
            load_dotenv(env_file)
        else:
            # Try common locations
            for env_path in ["config.env", ".env", "../config.env"]:
                if Path(env_path).exists():
                    load_dotenv(env_path)
                    break

        return cls(
            ems_url=os.getenv("EMS_URL", DEFAULT_EMS_URL),
            request_timeout=float(os.getenv("REQUEST_TIMEOUT", "30")),
            default_carrier=os.getenv("DEFAULT_CARRIER", "ems"),

            # Logging
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_file=os.getenv("LOG_FILE", ""),
        )

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.ems_url:
            errors.append("EMS_URL must not be empty")
        if self.request_timeout <= 0:
            errors.append("REQUEST_TIMEOUT must be positive")
        if self.log_level.upper() not in LOG_LEVELS:
            errors.append(f"Unknown LOG_LEVEL: {self.log_level}")

        return errors


# Global config instance
_config: Optional[TrackerConfig] = None


def get_config() -> TrackerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = TrackerConfig.from_env()
    return _config


def init_config(env_file: Optional[str] = None) -> TrackerConfig:
    """Initialize configuration from environment."""
    global _config
    _config = TrackerConfig.from_env(env_file)
    return _config
