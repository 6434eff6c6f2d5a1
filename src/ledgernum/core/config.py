#!/usr/bin/env python3
"""
Configuration Management for ledgernum

Handles environment-based configuration with defaults and validation.
Supports multiple environments (development, test, production), each with
its own logging format.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from babel import Locale, UnknownLocaleError
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Resolutions beyond this are almost certainly configuration mistakes.
MAX_DEFAULT_DECIMAL_PLACES = 20


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class FormattingConfig:
    """Locale and resolution defaults for parsing and formatting."""

    locale: str = "en_US"
    default_decimal_places: int = 2


@dataclass
class Config:
    """
    Main configuration class for ledgernum.

    Loads configuration from environment variables with defaults and
    validation for each environment type.
    """

    environment: Environment
    formatting: FormattingConfig = field(default_factory=FormattingConfig)

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("LEDGERNUM_ENV", "development"))

        formatting = FormattingConfig(
            locale=os.getenv("LEDGERNUM_LOCALE", "en_US").replace("-", "_"),
            default_decimal_places=int(os.getenv("LEDGERNUM_DECIMAL_PLACES", "2")),
        )

        return cls(
            environment=env,
            formatting=formatting,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def locale(self) -> str:
        return self.formatting.locale

    @property
    def default_decimal_places(self) -> int:
        return self.formatting.default_decimal_places

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        try:
            Locale.parse(self.formatting.locale)
        except (UnknownLocaleError, ValueError) as e:
            errors.append(f"Unknown locale {self.formatting.locale!r}: {e}")

        places = self.formatting.default_decimal_places
        if not -MAX_DEFAULT_DECIMAL_PLACES <= places <= MAX_DEFAULT_DECIMAL_PLACES:
            errors.append(
                f"Default decimal places must be between -{MAX_DEFAULT_DECIMAL_PLACES} "
                f"and {MAX_DEFAULT_DECIMAL_PLACES}, got {places}"
            )

        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Invalid LOG_LEVEL: {self.log_level}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)
        if self.debug:
            level = logging.DEBUG

        # Configure format based on environment
        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        # Babel's locale data loading is noisy at debug level
        logging.getLogger("babel").setLevel(logging.WARNING)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, Enum):
                # Nested dataclass
                result[field_name] = dict(field_value.__dict__)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        config = Config.from_environment()

        # Validate configuration
        errors = config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        # Setup logging
        config.setup_logging()
        _config = config

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


# Convenience functions
def get_locale() -> str:
    """Get the configured formatting locale."""
    return get_config().formatting.locale


def get_default_decimal_places() -> int:
    """Get the configured default resolution."""
    return get_config().formatting.default_decimal_places


def is_development() -> bool:
    """Check if running in development environment."""
    return get_config().environment == Environment.DEVELOPMENT


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST


def is_production() -> bool:
    """Check if running in production environment."""
    return get_config().environment == Environment.PRODUCTION
