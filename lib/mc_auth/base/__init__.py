# mc_auth/base/__init__.py
"""
Base module for the authenticators

Shared session record, error vocabulary, models and the HTTP layer.
"""

from .auth import SessionState
from .models import GameProfile, ProfileProperty, AuthState, AuthStatus
from .network import HTTPManager, HTTPManagerFactory

__all__ = [
    "SessionState",
    "GameProfile",
    "ProfileProperty",
    "AuthState",
    "AuthStatus",
    "HTTPManager",
    "HTTPManagerFactory",
]
