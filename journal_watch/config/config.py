"""Configuration management for journal-watch."""

import copy
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from ..core.engine import EngineSettings, InvalidationStrategy
from ..io.directories import get_default_config_path
from ..io.logger import get_logger
from .schema import JournalWatchConfig

logger = get_logger("config")


class Config:
    """Configuration manager for journal-watch."""

    DEFAULT_CONFIG = JournalWatchConfig().model_dump()

    def __init__(self, config_path: Optional[Path] = None):
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        self.config_path = config_path

        # Only load from explicit path if provided
        if config_path:
            self.load_from_file(config_path)
        else:
            config_path = get_default_config_path()
            if config_path.exists():
                logger.debug(f"Loading config from: {config_path}")
                self.load_from_file(config_path)

    def load_from_file(self, path: Path):
        """Load configuration from YAML file."""
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            try:
                user_config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e

        if not user_config:
            return
        if not isinstance(user_config, dict):
            raise ValueError(f"Invalid configuration in {path}: expected a mapping")

        merged_config = self._deep_merge(self.config, user_config)

        try:
            validated_config = JournalWatchConfig(**merged_config)
        except ValidationError as e:
            logger.error(f"Configuration validation failed: {path}")
            for err in e.errors():
                field_path = " → ".join(str(loc) for loc in err["loc"])
                logger.error(f"  {field_path}: {err['msg']}")
            raise ValueError(f"Invalid configuration in {path}") from e

        self.config = validated_config.model_dump()
        self.config_path = path

    def _deep_merge(self, base: Dict, update: Dict) -> Dict:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in update.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get config value using dot notation (e.g., 'tail.history')."""
        keys = key_path.split(".")
        value = self.config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def set(self, key_path: str, value: Any):
        """Set config value using dot notation, validating the result."""
        test_config = copy.deepcopy(self.config)

        keys = key_path.split(".")
        config = test_config
        for key in keys[:-1]:
            config = config.setdefault(key, {})
        config[keys[-1]] = value

        try:
            validated_config = JournalWatchConfig(**test_config)
        except ValidationError as e:
            for err in e.errors():
                err_path = ".".join(str(loc) for loc in err["loc"])
                if err_path.startswith(key_path):
                    raise ValueError(
                        f"Invalid value for {key_path}: {err['msg']}"
                    ) from e
            raise ValueError(
                f"Configuration validation failed after setting {key_path}"
            ) from e

        self.config = validated_config.model_dump()

    def engine_settings(self) -> EngineSettings:
        """Build tail engine settings from the current configuration."""
        return EngineSettings(
            history=self.get("tail.history"),
            on_invalidate=InvalidationStrategy(self.get("tail.on_invalidate")),
            fallback_timeout=self.get("tail.fallback_timeout"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the full configuration as a dictionary."""
        return copy.deepcopy(self.config)
