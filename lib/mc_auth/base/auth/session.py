# mc_auth/base/auth/session.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..models.profile import GameProfile, ProfileProperty


@dataclass
class SessionState:
    """
    Identity and credential record owned by a single authenticator.

    Only the owning authenticator mutates it, during login, logout
    and profile selection.
    """
    username: Optional[str] = None
    session_token: Optional[str] = None
    logged_in: bool = False
    selected_profile: Optional[GameProfile] = None
    profiles: List[GameProfile] = field(default_factory=list)
    properties: List[ProfileProperty] = field(default_factory=list)

    @property
    def has_session_token(self) -> bool:
        return bool(self.session_token)

    def reset(self) -> None:
        """Return to unauthenticated defaults. The username is kept."""
        self.session_token = None
        self.logged_in = False
        self.selected_profile = None
        self.profiles = []
        self.properties = []

    def to_dict(self) -> Dict[str, Any]:
        """Summary without the token itself"""
        return {
            'username': self.username,
            'has_session_token': self.has_session_token,
            'logged_in': self.logged_in,
            'selected_profile': self.selected_profile.to_dict() if self.selected_profile else None,
            'profiles': [profile.to_dict() for profile in self.profiles],
            'property_names': [prop.name for prop in self.properties]
        }
