# mc_auth/base/auth/exceptions.py
from typing import Any, Dict, Optional


class AuthenticationError(Exception):
    """Base class for all errors raised by the authenticators"""


class InvalidCredentialsError(AuthenticationError):
    """Required local input is missing or contradictory. Raised before any request is made."""


class UnsupportedFlowError(InvalidCredentialsError):
    """The requested login path has no implementation"""


class InvalidArgumentError(AuthenticationError, ValueError):
    """Caller passed a value outside the known set"""


class IllegalStateError(AuthenticationError, RuntimeError):
    """Operation invoked in the wrong session phase"""


class RequestFailure(AuthenticationError):
    """
    A request failed, returned no usable data, or returned data
    that failed a local integrity check.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None,
                 error: Optional[str] = None, error_description: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        self.error = error
        self.error_description = error_description

        full_message = message
        if error:
            full_message = f"{message} ({error}"
            if error_description:
                full_message += f": {error_description}"
            full_message += ")"
        super().__init__(full_message)

    @classmethod
    def from_error_payload(cls, message: str, payload: Optional[Dict[str, Any]],
                           status_code: Optional[int] = None, url: Optional[str] = None) -> 'RequestFailure':
        """
        Build from an error body.

        Handles both the OAuth2 shape ({"error", "error_description"})
        and the Yggdrasil shape ({"error", "errorMessage"}).
        """
        error = None
        description = None
        if isinstance(payload, dict):
            error = payload.get('error')
            description = payload.get('error_description') or payload.get('errorMessage')
            if error is not None:
                error = str(error)
        return cls(message, status_code=status_code, url=url, error=error, error_description=description)

    @property
    def is_authorization_pending(self) -> bool:
        """True when the device-code grant is still waiting for the user"""
        return self.error in ('authorization_pending', 'slow_down')


def is_blank(value: Optional[str]) -> bool:
    """None and empty strings are both unusable"""
    return value is None or value == ''


def require_non_blank(value: Optional[str], message: str) -> str:
    if is_blank(value):
        raise InvalidCredentialsError(message)
    return value
