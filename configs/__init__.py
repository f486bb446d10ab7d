"""
marketseries configuration management

Loads the analysis configuration files shipped in this directory.
"""

import json
import logging
from typing import Dict, Any, Optional
from pathlib import Path
import jsonschema

logger = logging.getLogger(__name__)

CONFIG_FILES = {
    'patterns': 'patterns.json',
    'profile': 'profile.json',
    'calendar': 'calendar.json',
    'symbols': 'symbols.json'
}

SCHEMA_FILES = {
    'patterns': 'patterns.schema.json'
}


class ConfigLoader:
    """Loads and manages analysis configurations."""

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize configuration loader.

        Args:
            config_dir: Directory containing configuration files (default: this package)
        """
        self.config_dir = Path(config_dir) if config_dir else Path(__file__).parent
        self.configs = {}
        self._load_all_configs()

    def _load_all_configs(self) -> None:
        """Load all configuration files."""
        for config_name in CONFIG_FILES:
            self.configs[config_name] = self._load(config_name)

    def _load(self, config_name: str) -> Dict[str, Any]:
        """
        Load and validate one configuration file.

        A missing file yields an empty config. Unreadable JSON or a schema
        violation is raised to the caller.
        """
        config_path = self.config_dir / CONFIG_FILES[config_name]
        if not config_path.exists():
            logger.debug("config_file_missing", extra={"config": config_name, "path": str(config_path)})
            return {}

        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)

        schema_name = SCHEMA_FILES.get(config_name)
        if schema_name:
            schema_path = self.config_dir / schema_name
            if schema_path.exists():
                with open(schema_path, 'r', encoding='utf-8') as sf:
                    schema = json.load(sf)
                try:
                    jsonschema.validate(instance=config, schema=schema)
                except jsonschema.ValidationError as e:
                    logger.error("config_validation_failed", extra={
                        "config": config_name,
                        "error": e.message
                    })
                    raise

        return config

    def get_config(self, config_name: str) -> Dict[str, Any]:
        """
        Get configuration by name.

        Args:
            config_name: Name of configuration

        Returns:
            Configuration dictionary
        """
        return self.configs.get(config_name, {})

    def get_all_configs(self) -> Dict[str, Dict[str, Any]]:
        """
        Get all configurations.

        Returns:
            Dictionary of all configurations
        """
        return self.configs.copy()

    def reload_config(self, config_name: str) -> None:
        """
        Reload specific configuration.

        Args:
            config_name: Name of configuration to reload
        """
        if config_name not in CONFIG_FILES:
            raise KeyError(f"Unknown configuration: {config_name}")
        self.configs[config_name] = self._load(config_name)


# Global configuration loader instance
config_loader = ConfigLoader()
