# mc_auth/base/utils/environment.py
"""
Central environment detection and configuration.
Reads defaults from environment variables and an optional JSON config file.
"""

import os
import sys
import json
from typing import Dict, Any, Optional, Union
from pathlib import Path


DEFAULT_CONFIG = {
    'app_name': 'mc-auth',
    'app_version': '1.0.0',
    'log_level': 'INFO',
    'timeout': 30,
    'max_retries': 0,
    'proxy_url': None,
}

# Environment variable -> config key
ENV_VARIABLES = {
    'MC_AUTH_LOG_LEVEL': 'log_level',
    'MC_AUTH_TIMEOUT': 'timeout',
    'MC_AUTH_MAX_RETRIES': 'max_retries',
    'MC_AUTH_PROXY': 'proxy_url',
}

INT_KEYS = ('timeout', 'max_retries')


class EnvironmentManager:
    """
    Central manager for configuration lookup.
    """

    _instance: Optional['EnvironmentManager'] = None

    def __new__(cls) -> 'EnvironmentManager':
        if cls._instance is None:
            cls._instance = super(EnvironmentManager, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self) -> None:
        if self._initialized:
            return

        self._initialized = True
        self._config: Dict[str, Any] = dict(DEFAULT_CONFIG)

        config_home = os.environ.get('XDG_CONFIG_HOME') or os.path.join(str(Path.home()), '.config')
        self._config['config_dir'] = os.path.join(config_home, 'mc-auth')

        self._load_config_file()
        self._load_environment()

    def _load_config_file(self) -> None:
        """Load configuration from config.json if present"""
        config_file = os.path.join(self._config['config_dir'], 'config.json')
        if not os.path.exists(config_file):
            return

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                file_config = json.load(f)
            for key, value in file_config.items():
                if isinstance(value, (str, int, float, bool, type(None))):
                    self._config[key] = value
        except json.JSONDecodeError as json_error:
            print(f"Invalid JSON in config file: {json_error}", file=sys.stderr)
        except OSError as io_error:
            print(f"Failed to read config file: {io_error}", file=sys.stderr)

    def _load_environment(self) -> None:
        """Environment variables override the config file"""
        for env_name, key in ENV_VARIABLES.items():
            raw_value = os.environ.get(env_name)
            if raw_value is None or raw_value == '':
                continue

            if key in INT_KEYS:
                try:
                    self._config[key] = int(raw_value)
                except ValueError as value_error:
                    # Logger depends on this module, so report on stderr
                    print(f"Invalid value for {env_name}, keeping default: {value_error}", file=sys.stderr)
            else:
                self._config[key] = raw_value

    def get_config(self, key: str, default: Any = None) -> Any:
        """Get configuration value"""
        return self._config.get(key, default)

    def set_config(self, key: str, value: Union[str, int, float, bool, None]) -> None:
        """Set configuration value for the lifetime of the process"""
        self._config[key] = value

    def reload(self) -> None:
        """Re-read the config file and environment on top of the defaults"""
        config_dir = self._config['config_dir']
        self._config = dict(DEFAULT_CONFIG)
        self._config['config_dir'] = config_dir
        self._load_config_file()
        self._load_environment()

    def debug_info(self) -> Dict[str, Any]:
        """Get debug information about the environment"""
        safe_config: Dict[str, Any] = {}
        for key, value in self._config.items():
            if key == 'config_dir':
                continue
            # Proxy URLs may embed credentials
            if key == 'proxy_url' and value:
                safe_config[key] = 'configured'
            else:
                safe_config[key] = value

        return {
            'python_version': sys.version,
            'platform': sys.platform,
            'config_summary': safe_config,
        }


_env_manager: Optional[EnvironmentManager] = None


def get_environment_manager() -> EnvironmentManager:
    """Get the global environment manager instance"""
    global _env_manager
    if _env_manager is None:
        _env_manager = EnvironmentManager()
    return _env_manager
