# mc_auth/base/auth/__init__.py
from .exceptions import (
    AuthenticationError,
    InvalidCredentialsError,
    UnsupportedFlowError,
    InvalidArgumentError,
    IllegalStateError,
    RequestFailure,
    is_blank,
    require_non_blank
)
from .session import SessionState

__all__ = [
    'AuthenticationError',
    'InvalidCredentialsError',
    'UnsupportedFlowError',
    'InvalidArgumentError',
    'IllegalStateError',
    'RequestFailure',
    'is_blank',
    'require_non_blank',
    'SessionState'
]
