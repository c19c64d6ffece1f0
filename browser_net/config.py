"""
load the config from config.yaml and .env
"""

import os
import yaml
from dotenv import find_dotenv, load_dotenv
from pathlib import Path
from typing import Dict, Any


class Config:
    """Configuration loader that reads from config.yaml and environment variables."""

    def __init__(self, config_path: str = None, load_env_file: bool = True):
        """Initialize configuration loader.

        Args:
            config_path: Path to config.yaml file. If None, looks for config.yaml
                        in the same directory as this module.
            load_env_file: Read a .env file into the environment before
                        applying overrides.
        """
        if config_path is None:
            config_path = Path(__file__).parent / "config.yaml"

        self.config_path = Path(config_path)
        if load_env_file:
            load_dotenv(find_dotenv(usecwd=True))
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file and override with environment variables."""
        try:
            with open(self.config_path, 'r') as f:
                config = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")

        return self._apply_env_overrides(config)

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        env_mappings = {
            'BROWSER_NET_READ_CHUNK_SIZE': ('client', 'read_chunk_size'),
            'BROWSER_NET_ADDRESS_FAMILY': ('client', 'address_family'),
            'LOG_LEVEL': ('logging', 'level'),
            'LOG_JSON': ('logging', 'json'),
        }

        for env_var, config_path in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value is not None:
                current = config
                for key in config_path[:-1]:
                    if key not in current:
                        current[key] = {}
                    current = current[key]

                current[config_path[-1]] = self._convert_env_value(env_value)

        return config

    def _convert_env_value(self, value: str):
        """Convert environment variable string to appropriate Python type."""
        if value.lower() in ('true', 'false'):
            return value.lower() == 'true'

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def get(self, *keys, default=None):
        """Get configuration value by walking nested keys.

        Args:
            *keys: Configuration keys (e.g., 'client', 'read_chunk_size')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        current = self._config
        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default
        return current

    @property
    def client(self) -> Dict[str, Any]:
        """Get HTTP client configuration."""
        return self.get('client', default={})

    @property
    def logging(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self.get('logging', default={})

    def client_settings(self) -> Dict[str, Any]:
        """Client section with defaults filled in and values checked.

        Raises:
            ValueError: read_chunk_size is not a positive integer, or
                        address_family is not a string.
        """
        client = self.client
        chunk_size = client.get('read_chunk_size', 4096)
        if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0:
            raise ValueError(f"client.read_chunk_size must be a positive integer, got {chunk_size!r}")

        family = client.get('address_family', 'ipv4')
        if not isinstance(family, str):
            raise ValueError(f"client.address_family must be a string, got {family!r}")

        return {'read_chunk_size': chunk_size, 'address_family': family}
