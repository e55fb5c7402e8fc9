#!/usr/bin/env python3
"""
Configuration Management for Sourcing Reconciliation

Handles environment-based configuration with defaults and validation.
Supports multiple environments (development, test, production).
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class ReconciliationConfig:
    """Reconciliation pass settings."""

    unmatched_sample_size: int = 10
    snapshot_cache_ttl: float = 300.0  # Seconds a loaded snapshot stays fresh


@dataclass
class DeliveryConfig:
    """Delivery registry settings."""

    status_labels_file: Path | None = None


@dataclass
class Config:
    """
    Main configuration class for the sourcing toolkit.

    Loads configuration from environment variables with defaults
    and validation for each environment type.
    """

    environment: Environment

    # Core directories
    data_dir: Path
    output_dir: Path

    # Component configurations
    reconciliation: ReconciliationConfig
    delivery: DeliveryConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("SOURCING_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_sourcing"
            data_dir = Path(os.getenv("SOURCING_DATA_DIR", str(default_test_dir)))
        else:
            data_dir = Path(os.getenv("SOURCING_DATA_DIR", "./data")).expanduser().resolve()

        output_dir = data_dir / "reports"

        for directory in [data_dir, output_dir]:
            directory.mkdir(parents=True, exist_ok=True)

        reconciliation = ReconciliationConfig(
            unmatched_sample_size=int(os.getenv("RECON_UNMATCHED_SAMPLE_SIZE", "10")),
            snapshot_cache_ttl=float(os.getenv("SNAPSHOT_CACHE_TTL", "300")),
        )

        labels_file = os.getenv("DELIVERY_STATUS_LABELS_FILE")
        delivery = DeliveryConfig(
            status_labels_file=Path(labels_file).expanduser() if labels_file else None,
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            output_dir=output_dir,
            reconciliation=reconciliation,
            delivery=delivery,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        for name, path in [("data_dir", self.data_dir), ("output_dir", self.output_dir)]:
            if not path.exists():
                errors.append(f"{name} does not exist: {path}")

        if self.reconciliation.unmatched_sample_size < 0:
            errors.append("Unmatched sample size must be non-negative")
        if self.reconciliation.snapshot_cache_ttl <= 0:
            errors.append("Snapshot cache TTL must be positive")

        labels_file = self.delivery.status_labels_file
        if labels_file is not None and not labels_file.exists():
            errors.append(f"Delivery status labels file does not exist: {labels_file}")

        if not isinstance(getattr(logging, self.log_level, None), int):
            errors.append(f"Unknown log level: {self.log_level}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a JSON-friendly dictionary."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, (Path, Enum)):
                result[field_name] = {
                    nested_name: _plain(nested_value) for nested_name, nested_value in field_value.__dict__.items()
                }
            else:
                result[field_name] = _plain(field_value)

        return result


def _plain(value: Any) -> Any:
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    return value


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


def get_data_dir() -> Path:
    """Get the data directory path."""
    return get_config().data_dir


def get_output_dir() -> Path:
    """Get the report output directory path."""
    return get_config().output_dir


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST


def is_production() -> bool:
    """Check if running in production environment."""
    return get_config().environment == Environment.PRODUCTION
