# mc_auth/providers/mojang/__init__.py
from .auth import MojangAuthenticator
from .constants import MojangDefaults

__all__ = ['MojangAuthenticator', 'MojangDefaults']
