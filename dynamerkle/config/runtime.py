"""
Runtime Configuration

Central configuration for hashing, proof decoding limits and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from dynamerkle.crypto.hashing import SUPPORTED_ALGORITHMS
from dynamerkle.schemas.errors import ConfigException

load_dotenv()


ENV_PREFIX = "DYNAMERKLE_"

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass
class HashingConfig:
    """Hash algorithm used for new trees."""
    algorithm: str = "sha256"

    def __post_init__(self):
        self.algorithm = str(self.algorithm).lower().replace("-", "_")
        if self.algorithm not in SUPPORTED_ALGORITHMS:
            raise ConfigException(
                f"Unsupported hash algorithm: {self.algorithm}, "
                f"supported: {sorted(SUPPORTED_ALGORITHMS)}",
                key="hashing.algorithm",
            )


@dataclass
class ProofConfig:
    """Limits applied when decoding serialized proofs."""
    # 256 levels covers any tree that fits in memory
    max_proof_steps: int = 256

    def __post_init__(self):
        steps = self.max_proof_steps
        if isinstance(steps, bool) or not isinstance(steps, int) or steps < 0:
            raise ConfigException(
                f"max_proof_steps must be a non-negative integer, got {self.max_proof_steps!r}",
                key="proofs.max_proof_steps",
            )


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        self.level = str(self.level).upper()
        if self.level not in _LOG_LEVELS:
            raise ConfigException(
                f"Unknown log level: {self.level}",
                key="logging.level",
            )


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for dynamerkle.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    hashing: HashingConfig = field(default_factory=HashingConfig)
    proofs: ProofConfig = field(default_factory=ProofConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - DYNAMERKLE_HASH_ALGORITHM: hash algorithm for new trees
        - DYNAMERKLE_MAX_PROOF_STEPS: step limit for decoded proofs
        - DYNAMERKLE_LOG_LEVEL: log level
        - DYNAMERKLE_LOG_FILE: optional log file
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides.setdefault("hashing", {})["algorithm"] = os.getenv(
                f"{ENV_PREFIX}HASH_ALGORITHM"
            )

        raw_steps = os.getenv(f"{ENV_PREFIX}MAX_PROOF_STEPS")
        if raw_steps:
            try:
                overrides.setdefault("proofs", {})["max_proof_steps"] = int(raw_steps)
            except ValueError as e:
                raise ConfigException(
                    f"{ENV_PREFIX}MAX_PROOF_STEPS must be an integer, got {raw_steps!r}",
                    key="proofs.max_proof_steps",
                ) from e

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

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

        if not isinstance(data, dict):
            raise ConfigException(f"Config file must contain a mapping: {path}")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        hashing_data = data.get("hashing") or {}
        proofs_data = data.get("proofs") or {}
        logging_data = data.get("logging") or {}

        try:
            hashing = HashingConfig(**hashing_data)
            proofs = ProofConfig(**proofs_data)
            logging_conf = LoggingConfig(**logging_data)
        except TypeError as e:
            raise ConfigException(f"Invalid configuration: {e}") from e

        return cls(
            hashing=hashing,
            proofs=proofs,
            logging=logging_conf,
            extra=data.get("extra", {}) or {},
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        Allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        # Rebuilt through from_dict so section validation runs again
        data = copy.deepcopy(self.to_dict())
        for section, values in overrides.items():
            data[section].update(values)

        return self.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hashing": {
                "algorithm": self.hashing.algorithm,
            },
            "proofs": {
                "max_proof_steps": self.proofs.max_proof_steps,
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
