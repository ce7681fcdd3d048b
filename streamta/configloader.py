"""YAML configuration and logging setup for indicator sets."""

import logging
import logging.config
from typing import Any, Dict, Optional

import yaml

from .exceptions import ConfigurationError
from .indicator_set import IndicatorSet

logger = logging.getLogger(__name__)


class ConfigLoader:
    """
    Load indicator configuration from a YAML file.

    Recognised top-level keys:
        logging: optional ``logging.config.dictConfig`` dictionary
        indicators: mapping of name -> {type: ..., **parameters}

    Example:
        >>> loader = ConfigLoader('indicators.yaml')
        >>> setup_logging(loader.get('logging'))
        >>> indicators = loader.build_indicator_set()
    """

    def __init__(self, config_path: str):
        """
        Args:
            config_path (str): Path to the YAML configuration file.
        """
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """
        Read and parse the YAML file.

        Raises:
            FileNotFoundError: If the configuration file cannot be found.
            yaml.YAMLError: If the configuration file is malformed.
            ConfigurationError: If the document is not a mapping.
        """
        try:
            with open(self.config_path, 'r') as f:
                config = yaml.safe_load(f)
        except FileNotFoundError:
            logger.error(f"Configuration file not found at '{self.config_path}'")
            raise
        except yaml.YAMLError as e:
            logger.error(f"Malformed YAML in configuration file: {e}")
            raise

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigurationError(self.config_path, "top level must be a mapping")
        return config

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.config[key]

    def build_indicator_set(self, key: str = 'indicators') -> IndicatorSet:
        """Build an IndicatorSet from the mapping stored under ``key``."""
        if key not in self.config:
            raise ConfigurationError(key, f"section not found in {self.config_path}")
        return IndicatorSet.from_config(self.config[key])


def setup_logging(config: Optional[Dict[str, Any]] = None) -> None:
    """
    Configure logging from a dictConfig dictionary.

    Falls back to ``logging.basicConfig`` when no configuration is given or
    the dictionary is malformed.
    """
    if not config:
        logging.basicConfig(level=logging.INFO,
                            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        return

    try:
        logging.config.dictConfig(config)
        logger.info("Logging configured successfully from config file.")
    except (ValueError, TypeError, AttributeError) as e:
        logging.basicConfig(level=logging.INFO,
                            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        logger.warning(f"Could not configure logging from dict: {e}. Using basic config.")
