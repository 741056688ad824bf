"""
Runtime Configuration

Central configuration for the distributor: where the allocation comes from,
which root it must reproduce, and how the claim path behaves.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


ENV_PREFIX = "DISTRIBUTOR_"

CONFIG_SEARCH_PATHS = (
    Path("distributor.json"),
    Path(".distributor.json"),
    Path("~/.config/distributor/config.json"),
)


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class DistributionConfig:
    """Where the entry list comes from and what root it must produce."""
    allocation_path: Optional[str] = None
    merkle_root: Optional[str] = None  # trusted root, 0x-hex
    token: str = "memory"


@dataclass
class ClaimsConfig:
    """Claim path behaviour."""
    rollback_on_transfer_failure: bool = False


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for the distributor.

    Can be loaded from:
    - Environment variables
    - JSON or YAML file
    - Programmatic construction
    """
    distribution: DistributionConfig = field(default_factory=DistributionConfig)
    claims: ClaimsConfig = field(default_factory=ClaimsConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - DISTRIBUTOR_ALLOCATION_PATH: allocation file (JSON or CSV)
        - DISTRIBUTOR_MERKLE_ROOT: trusted root the rebuilt tree must match
        - DISTRIBUTOR_TOKEN: label of the transferred asset
        - DISTRIBUTOR_ROLLBACK_ON_TRANSFER_FAILURE: clear the claim bit when a transfer fails
        - DISTRIBUTOR_LOG_LEVEL: log level
        - DISTRIBUTOR_LOG_FILE: optional log file
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}ALLOCATION_PATH"):
            overrides.setdefault("distribution", {})["allocation_path"] = os.getenv(f"{ENV_PREFIX}ALLOCATION_PATH")
        if os.getenv(f"{ENV_PREFIX}MERKLE_ROOT"):
            overrides.setdefault("distribution", {})["merkle_root"] = os.getenv(f"{ENV_PREFIX}MERKLE_ROOT")
        if os.getenv(f"{ENV_PREFIX}TOKEN"):
            overrides.setdefault("distribution", {})["token"] = os.getenv(f"{ENV_PREFIX}TOKEN")

        if os.getenv(f"{ENV_PREFIX}ROLLBACK_ON_TRANSFER_FAILURE"):
            overrides.setdefault("claims", {})["rollback_on_transfer_failure"] = _env_bool(
                os.getenv(f"{ENV_PREFIX}ROLLBACK_ON_TRANSFER_FAILURE", "false")
            )

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON or YAML file, chosen by suffix."""
        path = Path(path)
        if path.suffix.lower() in (".yaml", ".yml"):
            return cls.from_yaml(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            return cls.from_dict(json.load(f))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        distribution_data = data.get("distribution", {}) or {}
        claims_data = data.get("claims", {}) or {}

        return cls(
            distribution=DistributionConfig(**distribution_data),
            claims=ClaimsConfig(**claims_data),
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for key, value in overrides.get("distribution", {}).items():
            setattr(new_config.distribution, key, value)
        for key, value in overrides.get("claims", {}).items():
            setattr(new_config.claims, key, value)
        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]
        if "log_file" in overrides:
            new_config.log_file = overrides["log_file"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "distribution": {
                "allocation_path": self.distribution.allocation_path,
                "merkle_root": self.distribution.merkle_root,
                "token": self.distribution.token,
            },
            "claims": {
                "rollback_on_transfer_failure": self.claims.rollback_on_transfer_failure,
            },
            "log_level": self.log_level,
            "log_file": self.log_file,
            "extra": self.extra,
        }


def load_runtime_config(config_path: str | Path | None = None) -> RuntimeConfig:
    """
    Load RuntimeConfig from a config file, then overlay environment variables.

    Search order when no path is given:
      1. ./distributor.json
      2. ./.distributor.json
      3. ~/.config/distributor/config.json

    Environment variables ALWAYS override config file values.
    """
    config: RuntimeConfig | None = None

    if config_path is not None:
        config = RuntimeConfig.from_file(config_path)
    else:
        for candidate in CONFIG_SEARCH_PATHS:
            path = candidate.expanduser()
            if path.exists():
                config = RuntimeConfig.from_file(path)
                logger.info(f"Loaded config from {path}")
                break

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(RuntimeConfig().to_dict(), indent=2) + "\n"


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = load_runtime_config()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or clear, with None) the default runtime configuration."""
    global _default_config
    _default_config = config
