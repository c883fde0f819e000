import copy
import codecs
import json
import os
import logging
import jsonschema
from typing import Dict, Any, Optional

from utils.exceptions import ConfigurationError
from utils import constants
from .schema import CONFIG_SCHEMA

class ConfigurationManager:
    """
    Manages tool settings loading, validation, and access.
    Settings are optional: without a config path the built-in defaults apply.
    """

    DEFAULT_CONFIG: Dict[str, Any] = {
        "signing": {
            "properties_file": constants.DEFAULT_PROPERTIES_PATH,
            "encoding": constants.DEFAULT_ENCODING,
            "base_dir": "android/app",
            "build_type": constants.BUILD_TYPE_RELEASE,
        },
        "logging": {
            "level": "INFO",
            "log_to_console": True,
            "log_to_file": False,
            "colorful_console": True,
            "log_dir": constants.DEFAULT_LOG_DIR,
        },
    }

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the ConfigurationManager.

        Args:
            config_path (str, optional): Path to the user settings JSON.
        """
        self.config_path = config_path
        self.config: Dict[str, Any] = {}
        self.logger = logging.getLogger("config_manager")

    def load_and_validate(self) -> Dict[str, Any]:
        """
        Main entry point. Loads settings, merges them over the defaults and
        validates schema and logic.

        Returns:
            Dict[str, Any]: The validated configuration.

        Raises:
            ConfigurationError: If any validation step fails.
        """
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        if self.config_path:
            self._merge(self.config, self._load_json(self.config_path))

        self._validate_schema()
        self._validate_logic()
        return self.config

    def _load_json(self, path: str) -> Dict[str, Any]:
        """Safely load a JSON file."""
        if not os.path.exists(path):
            raise ConfigurationError(f"File not found: {path}")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {path}: {str(e)}")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Cannot read {path}: {str(e)}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Top-level JSON value in {path} must be an object")
        return data

    @classmethod
    def _merge(cls, base: Dict[str, Any], override: Dict[str, Any]) -> None:
        """Recursively merge `override` into `base` in place."""
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                cls._merge(base[key], value)
            else:
                base[key] = value

    def _validate_schema(self) -> None:
        """Validate config structure against the JSON schema."""
        try:
            jsonschema.validate(instance=self.config, schema=CONFIG_SCHEMA)
        except jsonschema.ValidationError as e:
            raise ConfigurationError(f"Schema validation failed: {e.message}")

    def _validate_logic(self) -> None:
        """Checks that the schema cannot express."""
        signing = self.config['signing']
        try:
            codecs.lookup(signing['encoding'])
        except LookupError:
            raise ConfigurationError(f"Unknown signing.encoding: {signing['encoding']}")

        level = self.config['logging']['level'].upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigurationError(f"Unknown logging.level: {self.config['logging']['level']}")

        self.logger.debug(f"Configuration validated: {self.config}")
