"""Configuration: built-in defaults, merged with an optional YAML file, then env vars."""

import copy
import logging
import os

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "LOGANALYZE_CONFIG"


class Config:
    """Configuration manager that loads from YAML and merges with defaults."""

    DEFAULTS = {
        "logging": {
            "level": "WARNING",
            "format": "%(asctime)s [LOGANALYZE] %(levelname)s %(message)s",
        },
        "reader": {
            "encoding": "utf-8",
        },
        "report": {
            "format": "text",
        },
    }

    # environment variable -> (section, key)
    ENV_OVERRIDES = {
        "LOG_LEVEL": ("logging", "level"),
        "LOGANALYZE_ENCODING": ("reader", "encoding"),
    }

    def __init__(self, config_path=None, environ=None):
        self._config = copy.deepcopy(self.DEFAULTS)
        environ = os.environ if environ is None else environ

        if config_path is None:
            config_path = environ.get(CONFIG_ENV_VAR)

        if config_path:
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    user_config = yaml.safe_load(f)

                if user_config and isinstance(user_config, dict):
                    self._config = self._deep_merge(self._config, user_config)
                logger.info("Loaded YAML config from %s", config_path)
            except FileNotFoundError:
                logger.warning("Config file %s not found, using defaults", config_path)
            except yaml.YAMLError:
                logger.warning("Invalid YAML in %s, using defaults", config_path)

        for var, (section, key) in self.ENV_OVERRIDES.items():
            value = environ.get(var)
            if value:
                self._config.setdefault(section, {})[key] = value

    @staticmethod
    def _deep_merge(base, override):
        """Recursively merge override dict into base dict."""
        result = copy.deepcopy(base)
        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = Config._deep_merge(result[key], value)
            else:
                result[key] = copy.deepcopy(value)
        return result

    def get(self, key, default=None):
        """Get a top-level config key."""
        return self._config.get(key, default)

    def __getitem__(self, key):
        return self._config[key]

    def __contains__(self, key):
        return key in self._config
