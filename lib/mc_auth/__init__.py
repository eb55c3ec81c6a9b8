# mc_auth/__init__.py
"""
Credential acquisition for Minecraft accounts.

Two providers, pick one per account:
- MojangAuthenticator: legacy Yggdrasil username/password and token refresh
- MsaAuthenticator: Microsoft account device-code flow via Xbox Live
"""
from typing import Dict, Type, Union

from .base.auth.exceptions import (
    AuthenticationError,
    InvalidCredentialsError,
    UnsupportedFlowError,
    InvalidArgumentError,
    IllegalStateError,
    RequestFailure
)
from .base.auth.session import SessionState
from .base.models import GameProfile, ProfileProperty, AuthState, AuthStatus, ProxyConfig
from .base.utils.logger import logger
from .providers.mojang import MojangAuthenticator
from .providers.msa import MsaAuthenticator, LoginStage, MsCodeResponse

AVAILABLE_PROVIDERS: Dict[str, Type] = {
    'mojang': MojangAuthenticator,
    'legacy': MojangAuthenticator,
    'msa': MsaAuthenticator,
    'microsoft': MsaAuthenticator,
}


def create_authenticator(provider: str, **kwargs) -> Union[MojangAuthenticator, MsaAuthenticator]:
    """
    Create an authenticator by provider name

    Args:
        provider: 'mojang' / 'legacy' or 'msa' / 'microsoft'
        **kwargs: Constructor arguments of the selected authenticator

    Returns:
        New authenticator instance
    """
    authenticator_class = AVAILABLE_PROVIDERS.get(str(provider).lower())
    if authenticator_class is None:
        raise ValueError(
            f"Unknown provider: {provider}. Must be one of: {sorted(AVAILABLE_PROVIDERS)}"
        )

    logger.debug(f"Creating {authenticator_class.__name__} for provider '{provider}'")
    return authenticator_class(**kwargs)


__all__ = [
    'AVAILABLE_PROVIDERS',
    'create_authenticator',
    'MojangAuthenticator',
    'MsaAuthenticator',
    'LoginStage',
    'MsCodeResponse',
    'SessionState',
    'GameProfile',
    'ProfileProperty',
    'AuthState',
    'AuthStatus',
    'ProxyConfig',
    'AuthenticationError',
    'InvalidCredentialsError',
    'UnsupportedFlowError',
    'InvalidArgumentError',
    'IllegalStateError',
    'RequestFailure',
]
