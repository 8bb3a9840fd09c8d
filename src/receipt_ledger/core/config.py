#!/usr/bin/env python3
"""
Configuration Management for Receipt Ledger

Handles environment-based configuration with secure defaults and validation.
Supports multiple environments (development, test, production).
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_MAX_FILE_SIZE = 5 * 1024 * 1024


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


class StorageBackend(Enum):
    """Where uploaded receipt files are kept."""

    NONE = "none"
    LOCAL = "local"


@dataclass
class YNABConfig:
    """YNAB API configuration."""

    api_token: str | None = None
    budget_id: str | None = None
    base_url: str = "https://api.ynab.com/v1"
    timeout: int = 30
    # Category groups offered to the parser; empty means every category
    category_groups: list = field(default_factory=list)
    include_payees_in_prompt: bool = False


@dataclass
class StorageConfig:
    """Receipt file storage configuration."""

    backend: StorageBackend = StorageBackend.NONE
    local_directory: Path | None = None
    date_subdirectories: bool = True
    max_file_size: int = DEFAULT_MAX_FILE_SIZE


@dataclass
class Config:
    """
    Main configuration class for the receipt ledger application.

    Loads configuration from environment variables with secure defaults
    and validation for each environment type.
    """

    environment: Environment
    ynab: YNABConfig
    storage: StorageConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("RECEIPTS_ENV", "development"))

        ynab = YNABConfig(
            api_token=os.getenv("YNAB_API_KEY"),
            budget_id=os.getenv("YNAB_BUDGET_ID"),
            base_url=os.getenv("YNAB_BASE_URL", "https://api.ynab.com/v1"),
            timeout=int(os.getenv("YNAB_TIMEOUT", "30")),
            category_groups=_parse_list(os.getenv("YNAB_CATEGORY_GROUPS", "")),
            include_payees_in_prompt=_parse_bool(os.getenv("YNAB_INCLUDE_PAYEES_IN_PROMPT"), False),
        )

        local_directory = os.getenv("LOCAL_DIRECTORY")
        storage = StorageConfig(
            backend=StorageBackend(os.getenv("FILE_STORAGE") or "none"),
            local_directory=Path(local_directory).expanduser() if local_directory else None,
            # Anything but an explicit "false" keeps date subdirectories on
            date_subdirectories=_parse_bool(os.getenv("DATE_SUBDIRECTORIES"), True),
            max_file_size=int(os.getenv("MAX_FILE_SIZE") or DEFAULT_MAX_FILE_SIZE),
        )

        return cls(
            environment=env,
            ynab=ynab,
            storage=storage,
            debug=_parse_bool(os.getenv("DEBUG"), False),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if self.environment == Environment.PRODUCTION:
            if not self.ynab.api_token:
                errors.append("YNAB_API_KEY is required in production")
            if not self.ynab.budget_id:
                errors.append("YNAB_BUDGET_ID is required in production")

        if self.storage.backend == StorageBackend.LOCAL and not self.storage.local_directory:
            errors.append("LOCAL_DIRECTORY is required when FILE_STORAGE=local")

        if self.ynab.timeout <= 0:
            errors.append("YNAB timeout must be positive")
        if self.storage.max_file_size <= 0:
            errors.append("MAX_FILE_SIZE must be positive")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        # Reduce noise from the HTTP client in production
        if self.environment == Environment.PRODUCTION:
            logging.getLogger("httpx").setLevel(logging.WARNING)
            logging.getLogger("httpcore").setLevel(logging.WARNING)

    def get_sensitive_fields(self) -> list:
        """Get list of field names that contain sensitive data."""
        return ["ynab.api_token"]

    def to_dict(self, include_sensitive: bool = False) -> dict[str, Any]:
        """Convert configuration to dictionary, optionally excluding sensitive data."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, Enum):
                nested_dict: dict[str, Any] = {}
                for nested_name, nested_value in field_value.__dict__.items():
                    full_field_name = f"{field_name}.{nested_name}"

                    if not include_sensitive and full_field_name in self.get_sensitive_fields():
                        nested_dict[nested_name] = "***REDACTED***" if nested_value else None
                    else:
                        nested_dict[nested_name] = _plain_value(nested_value)

                result[field_name] = nested_dict
            else:
                result[field_name] = _plain_value(field_value)

        return result


def _plain_value(value: Any) -> Any:
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    return value


def _parse_list(value: str, delimiter: str = ",") -> list:
    """Parse comma-separated string into list, handling empty values."""
    if not value:
        return []
    return [item.strip() for item in value.split(delimiter) if item.strip()]


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None or value == "":
        return default
    if default:
        return value.strip().lower() != "false"
    return value.strip().lower() in ("true", "1", "yes")


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


def is_development() -> bool:
    """Check if running in development environment."""
    return get_config().environment == Environment.DEVELOPMENT


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST


def is_production() -> bool:
    """Check if running in production environment."""
    return get_config().environment == Environment.PRODUCTION
