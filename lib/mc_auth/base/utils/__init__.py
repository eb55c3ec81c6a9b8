# mc_auth/base/utils/__init__.py

from .logger import logger, BaseLogger, mask_secret
from .environment import EnvironmentManager, get_environment_manager

__all__ = [
    'logger',
    'BaseLogger',
    'mask_secret',
    'EnvironmentManager',
    'get_environment_manager'
]
