"""Handles loading configuration from YAML files."""

import yaml
import os
import logging
from typing import Optional
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'log_dir': 'logs',
    'log_file': None,
    'tesseract_cmd': None,
    'max_workers': None,
    'image_extensions': ['jpg', 'jpeg', 'png'],
    'upscale_min_height': 64,
    'show_progress': False,
}

class ConfigLoader:
    """Loads configuration settings from a YAML file."""

    def load_config(self, config_path: Optional[str] = None) -> dict:
        """
        Loads configuration from the specified YAML file path on top of the defaults.

        Args:
            config_path: The path to the YAML configuration file. If None,
                         only the built-in defaults are returned.

        Returns:
            A dictionary containing the loaded configuration settings.

        Raises:
            FileNotFoundError: If the configuration file does not exist.
            ConfigurationError: If the file cannot be parsed as YAML or
                              if there are other reading errors.
        """
        config = dict(DEFAULT_CONFIG)
        if config_path is None:
            logger.debug("No configuration file given, using defaults.")
            return config

        logger.info(f"Attempting to load configuration from: {config_path}")
        if not os.path.exists(config_path):
            logger.error(f"Configuration file not found at path: {config_path}")
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        if not os.path.isfile(config_path):
             logger.error(f"Configuration path is not a file: {config_path}")
             raise ConfigurationError(f"Configuration path is not a file: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Error parsing YAML configuration file {config_path}: {e}", exc_info=True)
            raise ConfigurationError(f"Invalid YAML format in {config_path}: {e}") from e
        except IOError as e:
            logger.error(f"Error reading configuration file {config_path}: {e}", exc_info=True)
            raise ConfigurationError(f"Could not read configuration file {config_path}: {e}") from e

        if loaded is None:
            logger.warning(f"Configuration file {config_path} is empty, using defaults.")
            return config
        if not isinstance(loaded, dict):
            # Handle cases where YAML loads something other than a dictionary (e.g., just a string)
            logger.error(f"Configuration file {config_path} did not load as a dictionary (root object).")
            raise ConfigurationError(f"Invalid YAML structure in {config_path}. Root must be a mapping (dictionary).")

        unknown = set(loaded) - set(DEFAULT_CONFIG)
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(sorted(unknown))}")
        config.update({k: v for k, v in loaded.items() if k in DEFAULT_CONFIG})

        max_workers = config['max_workers']
        if max_workers is not None and (isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1):
            raise ConfigurationError(f"'max_workers' must be a positive integer or null, got {max_workers!r}")

        min_height = config['upscale_min_height']
        if isinstance(min_height, bool) or not isinstance(min_height, int) or min_height < 0:
            raise ConfigurationError(f"'upscale_min_height' must be a non-negative integer, got {min_height!r}")

        extensions = config['image_extensions']
        if not isinstance(extensions, list) or not extensions or not all(isinstance(e, str) and e for e in extensions):
            raise ConfigurationError(f"'image_extensions' must be a non-empty list of strings, got {extensions!r}")

        logger.info(f"Configuration loaded successfully from {config_path}")
        return config
