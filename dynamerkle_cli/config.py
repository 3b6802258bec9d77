"""
CLI Configuration

Locates and loads the YAML configuration file for the dynamerkle CLI.
Environment variables (DYNAMERKLE_* prefix) override file settings.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dynamerkle.config.runtime import RuntimeConfig


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_NAME = "dynamerkle.yaml"


def default_config_paths() -> list[Path]:
    """Config locations searched when --config is not given, in order."""
    return [
        Path.cwd() / DEFAULT_CONFIG_NAME,
        Path.cwd() / f".{DEFAULT_CONFIG_NAME}",
        Path.home() / ".config" / "dynamerkle" / "config.yaml",
    ]


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional explicit path; must exist when given

    Returns:
        Merged configuration
    """
    if config_path is not None:
        config = RuntimeConfig.from_yaml(config_path)
        logger.debug(f"Loaded config from {config_path}")
        return config.with_env_overrides()

    for path in default_config_paths():
        if path.exists():
            logger.debug(f"Loaded config from {path}")
            return RuntimeConfig.from_yaml(path).with_env_overrides()

    return RuntimeConfig.from_env()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """\
# dynamerkle configuration
hashing:
  # sha256, sha512, sha3_256, sha3_512, blake2b or blake2s
  algorithm: sha256

proofs:
  # Largest number of steps accepted when decoding a serialized proof
  max_proof_steps: 256

logging:
  level: INFO
  log_file: null
"""
