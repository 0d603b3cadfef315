"""
config_manager.py: module for merging configuration from multiple sources
"""
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import dotenv_values

from .errors import ConfigError

ENV_PREFIX = "INFRAKIT_"

# Backend sections that environment overrides may fill in but never create
BACKEND_SECTIONS = ("vcenter", "ahv")

logger = logging.getLogger("infrakit.config")


class ConfigSource(Enum):
    """Enumeration of configuration sources"""
    DEFAULTS = "defaults"
    GLOBAL_CONFIG = "global_config"  # ~/.config/infrakit/config.yaml
    PROJECT_CONFIG = "project_config"  # ./infrakit.yaml or ./config.yaml
    CUSTOM_FILE = "custom_file"  # --config PATH
    DOTENV = "dotenv"  # .env file in current directory
    ENVIRONMENT = "environment"  # INFRAKIT_* environment variables


class ConfigManager:
    """
    ConfigManager: class that merges configuration sources with priority order.
    An explicit config file replaces the global and project file lookups.
    """

    def __init__(self, custom_path: Optional[Path] = None):
        self.custom_path = Path(custom_path) if custom_path else None
        self.config_data: Dict[str, Any] = {}
        if self.custom_path is not None:
            file_sources = [ConfigSource.CUSTOM_FILE]
        else:
            file_sources = [ConfigSource.GLOBAL_CONFIG, ConfigSource.PROJECT_CONFIG]
        self.priority_order = [
            ConfigSource.DEFAULTS,
            *file_sources,
            ConfigSource.DOTENV,
            ConfigSource.ENVIRONMENT,
        ]

    def load_config(self) -> Dict[str, Any]:
        """Load configuration following priority order"""
        self.config_data = {}
        for source in self.priority_order:
            source_config = self._load_single_source(source)
            if not source_config:
                continue
            logger.debug(f"Merging configuration from {source.value}")
            if source in (ConfigSource.DOTENV, ConfigSource.ENVIRONMENT):
                self._merge_overrides(self.config_data, source_config)
            else:
                self._merge_config(self.config_data, source_config)
        return self.config_data

    def _load_single_source(self, source: ConfigSource) -> Dict[str, Any]:
        """Load configuration from a single source"""
        if source == ConfigSource.DEFAULTS:
            return self._get_defaults()

        elif source == ConfigSource.GLOBAL_CONFIG:
            path = Path.home() / ".config" / "infrakit" / "config.yaml"
            return self._read_yaml(path) if path.exists() else {}

        elif source == ConfigSource.PROJECT_CONFIG:
            return self._load_project_config()

        elif source == ConfigSource.CUSTOM_FILE:
            if not self.custom_path.exists():
                raise ConfigError(f"Config file not found: {self.custom_path}")
            return self._read_yaml(self.custom_path)

        elif source == ConfigSource.DOTENV:
            dotenv_path = Path.cwd() / ".env"
            if dotenv_path.exists():
                return self._overrides_from(dotenv_values(dotenv_path))
            return {}

        elif source == ConfigSource.ENVIRONMENT:
            return self._overrides_from(os.environ)

        return {}

    def _get_defaults(self) -> Dict[str, Any]:
        """Get default configuration values"""
        return {
            "log_level": "WARNING",
        }

    def _load_project_config(self) -> Dict[str, Any]:
        """Load project-specific config from current directory"""
        project_config_paths = [
            Path.cwd() / "infrakit.yaml",
            Path.cwd() / "config.yaml",
            Path.cwd() / ".infrakit.yaml",
        ]

        for config_path in project_config_paths:
            if config_path.exists():
                return self._read_yaml(config_path)
        return {}

    def _read_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: top level must be a mapping")
        logger.info(f"Loaded configuration file {path}")
        return data

    def _overrides_from(self, variables: Mapping[str, Optional[str]]) -> Dict[str, Any]:
        """
        Convert INFRAKIT_* variables into a nested mapping:
        INFRAKIT_AHV_PASSWORD -> {"ahv": {"password": ...}},
        INFRAKIT_LOG_LEVEL -> {"log_level": ...}
        """
        overrides: Dict[str, Any] = {}
        for key, value in variables.items():
            if not key.startswith(ENV_PREFIX) or value is None:
                continue
            config_key = key[len(ENV_PREFIX):].lower()
            section, _, field = config_key.partition("_")
            if section in BACKEND_SECTIONS:
                if not field:
                    logger.debug(f"Ignoring {key}: a backend section cannot be overridden as a whole")
                    continue
                overrides.setdefault(section, {})[field] = value
            else:
                overrides[config_key] = value
        return overrides

    def _merge_overrides(self, base: Dict[str, Any], update: Dict[str, Any]):
        """Merge override values, skipping backend sections the files did not declare"""
        for key, value in update.items():
            if key in BACKEND_SECTIONS:
                if not isinstance(base.get(key), dict) or not base[key]:
                    logger.debug(f"Ignoring overrides for unconfigured section '{key}'")
                    continue
            self._merge_config(base, {key: value})

    def _merge_config(self, base: Dict[str, Any], update: Dict[str, Any]):
        """Merge update config into base config (nested merge)"""
        for key, value in update.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value
