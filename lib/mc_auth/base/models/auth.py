# mc_auth/base/models/auth.py
from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from enum import Enum
import time


class AuthState(Enum):
    """Standardized authentication states"""
    NOT_AUTHENTICATED = "not_authenticated"
    PENDING = "pending"
    AUTHENTICATED = "authenticated"


@dataclass
class AuthStatus:
    """Point-in-time authentication status of one authenticator"""
    provider_name: str
    auth_state: AuthState

    username: Optional[str] = None
    has_session_token: bool = False
    selected_profile: Optional[str] = None
    profile_count: int = 0

    # Metadata
    timestamp: float = field(default_factory=time.time)
    provider_specific: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_logged_in(self) -> bool:
        return self.auth_state == AuthState.AUTHENTICATED

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'provider_name': self.provider_name,
            'auth_state': self.auth_state.value,
            'username': self.username,
            'has_session_token': self.has_session_token,
            'selected_profile': self.selected_profile,
            'profile_count': self.profile_count,
            'timestamp': self.timestamp,
            'provider_specific': self.provider_specific
        }

        descriptions = {
            AuthState.NOT_AUTHENTICATED: "Not authenticated",
            AuthState.PENDING: "Authentication in progress",
            AuthState.AUTHENTICATED: "Successfully authenticated"
        }
        result['auth_state_description'] = descriptions.get(self.auth_state, "Unknown state")

        return result
