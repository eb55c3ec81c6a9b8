# mc_auth/base/models/__init__.py
from .profile import GameProfile, ProfileProperty
from .auth import AuthState, AuthStatus
from .proxy_models import ProxyType, ProxyAuth, ProxyScope, ProxyConfig, RequestConfig


__all__ = ['GameProfile', 'ProfileProperty', 'AuthState', 'AuthStatus',
           'ProxyType', 'ProxyAuth', 'ProxyScope', 'ProxyConfig', 'RequestConfig']
