#!/usr/bin/env python3
"""
Configuration management for the data source registry.

Settings come from defaults, then the first JSON config file found, then
DSREG_* environment variables.
"""

import os
import sys
import json
import logging
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field, fields, asdict
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_ENTRY_POINT_GROUP = "datasource_registry.data_sources"


def _package_root() -> str:
    # Directory holding the datasource_registry package, so the discovery
    # worker can import it from a bare interpreter.
    return str(Path(__file__).resolve().parent.parent.parent)


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _split_paths(value: str) -> List[str]:
    return [p for p in value.split(os.pathsep) if p]


def _valid_value(key: str, value: Any) -> bool:
    """Type check for values read from config files."""
    if key == 'testing':
        return isinstance(value, bool)
    if key == 'python_paths':
        return isinstance(value, list) and all(isinstance(p, str) for p in value)
    if key == 'discovery_timeout':
        if value is None:
            return True
        return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0
    return isinstance(value, str) and bool(value)


@dataclass
class RegistryConfig:
    """Data source registry configuration."""
    testing: bool = False
    python_exec: str = field(default_factory=lambda: sys.executable or "python3")
    python_paths: List[str] = field(default_factory=lambda: [_package_root()])
    entry_point_group: str = DEFAULT_ENTRY_POINT_GROUP
    discovery_timeout: Optional[float] = 60.0
    log_level: str = "INFO"
    load_files: bool = True

    def __post_init__(self):
        """Load configuration from config files and environment."""
        if self.load_files:
            self._load_from_config_files()
        self._load_from_environment()

    def _load_from_environment(self):
        """Load configuration from environment variables."""
        self.testing = _env_flag('DSREG_TESTING', self.testing)
        self.python_exec = os.getenv('DSREG_PYTHON', self.python_exec)

        paths = os.getenv('DSREG_PYTHON_PATHS')
        if paths:
            self.python_paths = _split_paths(paths)

        self.entry_point_group = os.getenv('DSREG_ENTRY_POINT_GROUP', self.entry_point_group)

        timeout = os.getenv('DSREG_DISCOVERY_TIMEOUT')
        if timeout is not None:
            if not timeout.strip():
                self.discovery_timeout = None
            else:
                try:
                    value = float(timeout)
                except ValueError:
                    value = None
                if value is None or not value > 0:
                    logger.warning(
                        f"Ignoring invalid DSREG_DISCOVERY_TIMEOUT={timeout!r}, "
                        f"keeping {self.discovery_timeout}"
                    )
                else:
                    self.discovery_timeout = value

        self.log_level = os.getenv('DSREG_LOG_LEVEL', self.log_level)

    def _load_from_config_files(self):
        """Load configuration from the first config file that exists."""
        config_paths = [
            Path.home() / '.datasource_registry' / 'config.json',
            Path.cwd() / 'datasource-registry.json',
        ]
        if os.getenv('DSREG_CONFIG_FILE'):
            config_paths.append(Path(os.environ['DSREG_CONFIG_FILE']))

        for config_path in config_paths:
            if config_path.is_file():
                try:
                    with open(config_path, 'r') as f:
                        config_data = json.load(f)
                    self._update_from_dict(config_data)
                    break
                except (OSError, ValueError) as e:
                    logger.warning(f"Failed to load config from {config_path}: {e}")

    def _update_from_dict(self, data: Dict[str, Any]):
        """Update configuration from dictionary, skipping values of the wrong type."""
        if not isinstance(data, dict):
            logger.warning(f"Ignoring config of type {type(data).__name__}, expected an object")
            return

        field_names = {f.name for f in fields(self)}
        for key, value in data.items():
            if key == 'load_files' or key not in field_names:
                continue

            if key == 'python_paths' and isinstance(value, str):
                value = _split_paths(value)

            if not _valid_value(key, value):
                logger.warning(f"Ignoring invalid config value {key}={value!r}")
                continue
            setattr(self, key, value)

    def save_to_file(self, path: Path):
        """Save configuration to file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        data = asdict(self)
        data.pop('load_files')
        return data


# Global configuration instance
_config: Optional[RegistryConfig] = None


def get_config() -> RegistryConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = RegistryConfig()
    return _config


def init_config(config_file: Optional[str] = None) -> RegistryConfig:
    """Initialize global configuration, optionally from an explicit file."""
    global _config
    _config = RegistryConfig()

    if config_file:
        config_path = Path(config_file)
        if config_path.exists():
            try:
                with open(config_path, 'r') as f:
                    config_data = json.load(f)
                _config._update_from_dict(config_data)
            except (OSError, ValueError) as e:
                logger.warning(f"Failed to load config from {config_file}: {e}")

    return _config


def set_config(config: Optional[RegistryConfig]) -> None:
    """Replace the global configuration (None resets to lazy defaults)."""
    global _config
    _config = config


def save_config(path: Path):
    """Save current configuration to file."""
    get_config().save_to_file(path)
