"""
Runtime Configuration

Defaults for tree construction (block size, hash algorithm) and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from hashtree.crypto.hashing import DEFAULT_ALGORITHM, HashStrategy, get_strategy, resolve_algorithm
from hashtree.schemas.errors import ConfigurationException
from hashtree.stream.chunker import validate_block_size

load_dotenv()


DEFAULT_BLOCK_SIZE = 4096
DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass
class TreeConfig:
    """Configuration for tree construction."""
    block_size: int = DEFAULT_BLOCK_SIZE
    algorithm: str = DEFAULT_ALGORITHM.value

    def __post_init__(self):
        validate_block_size(self.block_size)
        # Normalize "SHA-256" and friends to the canonical name
        self.algorithm = resolve_algorithm(self.algorithm).value

    def strategy(self) -> HashStrategy:
        return get_strategy(self.algorithm)


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (and a .env file)
    - YAML file
    - Programmatic construction
    """
    tree: TreeConfig = field(default_factory=TreeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - HASHTREE_BLOCK_SIZE: Block size in bytes
        - HASHTREE_ALGORITHM: Hash algorithm name (e.g. sha256, md5)
        - HASHTREE_LOG_LEVEL: Log level name
        """
        overrides: dict[str, Any] = {}

        raw_block_size = os.getenv("HASHTREE_BLOCK_SIZE")
        if raw_block_size:
            try:
                block_size = int(raw_block_size)
            except ValueError:
                raise ConfigurationException(
                    f"HASHTREE_BLOCK_SIZE must be an integer, got {raw_block_size!r}",
                    field_name="block_size",
                ) from None
            overrides.setdefault("tree", {})["block_size"] = block_size
        if os.getenv("HASHTREE_ALGORITHM"):
            overrides.setdefault("tree", {})["algorithm"] = os.getenv("HASHTREE_ALGORITHM")

        if os.getenv("HASHTREE_LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv("HASHTREE_LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        tree_data = data.get("tree", {})
        logging_data = data.get("logging", {})

        tree = TreeConfig(**tree_data) if tree_data else TreeConfig()
        log = LoggingConfig(**logging_data) if logging_data else LoggingConfig()

        return cls(
            tree=tree,
            logging=log,
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

        if "tree" in overrides:
            tree_data = {**asdict(new_config.tree), **overrides["tree"]}
            new_config.tree = TreeConfig(**tree_data)

        if "logging" in overrides:
            for key, value in overrides["logging"].items():
                setattr(new_config.logging, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
