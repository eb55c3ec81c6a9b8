# mc_auth/base/utils/logger.py
"""
Centralized logging module for mc-auth.
"""

import sys
import logging
from typing import Optional

from .environment import get_environment_manager

_env_manager_instance = get_environment_manager()


def mask_secret(value: Optional[str], visible: int = 6) -> str:
    """Shorten a token for log output"""
    if not value:
        return '<none>'
    if len(value) <= visible:
        return '***'
    return f"{value[:visible]}..."


class BaseLogger:
    """Base logger interface that all logger implementations must follow"""

    def __init__(self, logger_name: str, logger_version: str):
        self.logger_name = logger_name
        self.logger_version = logger_version
        self.prefix = f"[{logger_name} v{logger_version}]"

    def debug(self, message: str) -> None:
        """Log debug message"""
        raise NotImplementedError

    def info(self, message: str) -> None:
        """Log info message"""
        raise NotImplementedError

    def warning(self, message: str) -> None:
        """Log warning message"""
        raise NotImplementedError

    def error(self, message: str, exc_info: bool = False) -> None:
        """Log error message"""
        raise NotImplementedError

    def critical(self, message: str) -> None:
        """Log critical message"""
        raise NotImplementedError

    # Specialized methods
    def log_auth_event(self, provider: str, event: str, details: str = "") -> None:
        """Log authentication event"""
        log_message = f"AUTH [{provider}] {event}"
        if details:
            log_message += f" - {details}"
        self.info(log_message)

    def log_session_event(self, provider: str, event: str, details: str = "") -> None:
        """Log session event"""
        log_message = f"SESSION [{provider}] {event}"
        if details:
            log_message += f" - {details}"
        self.debug(log_message)


class StandardLogger(BaseLogger):
    """Standard Python logging"""

    def __init__(self, logger_name: str, logger_version: str, level: str = 'INFO'):
        super().__init__(logger_name, logger_version)

        self._logger = logging.getLogger(logger_name)

        # Only add handlers if none exist
        if not self._logger.handlers:
            console_handler = logging.StreamHandler(sys.stdout)
            formatter = logging.Formatter(
                f'%(asctime)s {self.prefix} %(levelname)s: %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(formatter)
            self._logger.addHandler(console_handler)

        self.set_level(level)

    def set_level(self, level: str) -> None:
        """Change the log level by name (DEBUG, INFO, ...)"""
        resolved = logging.getLevelName(str(level).upper())
        if not isinstance(resolved, int):
            print(f"Unknown log level '{level}', using INFO", file=sys.stderr)
            resolved = logging.INFO
        self._logger.setLevel(resolved)

    def debug(self, message: str) -> None:
        self._logger.debug(message)

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str, exc_info: bool = False) -> None:
        if exc_info:
            self._logger.error(message, exc_info=True)
        else:
            self._logger.error(message)

    def critical(self, message: str) -> None:
        self._logger.critical(message)


def create_logger() -> BaseLogger:
    """Create logger instance from the environment configuration"""
    app_name = _env_manager_instance.get_config('app_name', 'mc-auth')
    app_version = _env_manager_instance.get_config('app_version', '1.0.0')
    log_level = _env_manager_instance.get_config('log_level', 'INFO')

    return StandardLogger(str(app_name), str(app_version), str(log_level))


# Global logger instance
logger: BaseLogger = create_logger()

__all__ = ['BaseLogger', 'StandardLogger', 'logger', 'mask_secret']
