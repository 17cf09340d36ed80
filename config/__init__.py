"""
Configuration Module for the Energy Invoice Extraction System.

Settings are read from ``config/settings.yaml``. A site-specific file
passed with ``--config`` only needs the keys it changes: it is merged
over the bundled defaults section by section.

Usage:
    from config import get_config

    lang = get_config("ocr.tesseract.lang", "ron")

Author: ML Engineering Team
"""

import copy
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_SETTINGS = Path(__file__).parent / "settings.yaml"
PROJECT_ROOT = Path(__file__).parent.parent


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")
    return data


class ConfigurationManager:
    """
    Process-wide settings store.

    The first instantiation decides which files are loaded; later calls
    return the same instance until ``reset()`` is called.

    Attributes:
        config_path: Override file merged over the defaults, if any.

    Example:
        >>> config = ConfigurationManager("site.yaml")
        >>> config.get("processing.max_workers")
        8
    """

    _instance: Optional['ConfigurationManager'] = None

    def __new__(cls, config_path: Optional[str] = None) -> 'ConfigurationManager':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[str] = None) -> None:
        if self._initialized:
            return

        self.config_path = Path(config_path) if config_path else None
        self._config = self._load()
        self._initialized = True

    def _load(self) -> Dict[str, Any]:
        """
        Read the defaults, apply the override file and anchor paths.

        Raises:
            FileNotFoundError: If a configuration file doesn't exist.
            ValueError: If a file is not a YAML mapping.
        """
        config = _read_yaml(DEFAULT_SETTINGS)
        if self.config_path is not None:
            config = _merge(config, _read_yaml(self.config_path))

        # Relative output and log directories live under the project root
        for key, value in (config.get('paths') or {}).items():
            if value and not Path(value).is_absolute():
                config['paths'][key] = str(PROJECT_ROOT / value)

        return config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a value by dotted key.

        Example:
            >>> config.get("input.pdf.min_text_chars")
            100
            >>> config.get("input.pdf.missing", 0)
            0
        """
        value = self._config
        for part in key.split('.'):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded settings; the next instantiation reloads them."""
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    """Shortcut for ``ConfigurationManager().get(key, default)``."""
    return ConfigurationManager().get(key, default)


__all__ = ['ConfigurationManager', 'get_config']
