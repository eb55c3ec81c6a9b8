# mc_auth/providers/mojang/models.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ...base.models.profile import GameProfile, ProfileProperty
from .constants import MojangDefaults


@dataclass
class Agent:
    name: str = MojangDefaults.AGENT_NAME
    version: int = MojangDefaults.AGENT_VERSION

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'version': self.version}


@dataclass
class AuthenticationRequest:
    """Password login payload"""
    username: str
    password: str
    client_token: str
    agent: Agent = field(default_factory=Agent)
    request_user: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            'agent': self.agent.to_dict(),
            'username': self.username,
            'password': self.password,
            'clientToken': self.client_token,
            'requestUser': self.request_user
        }


@dataclass
class RefreshRequest:
    """Token refresh payload, optionally binding a profile"""
    client_token: str
    access_token: str
    selected_profile: Optional[GameProfile] = None
    request_user: bool = True

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            'clientToken': self.client_token,
            'accessToken': self.access_token,
            'requestUser': self.request_user
        }
        if self.selected_profile is not None:
            payload['selectedProfile'] = self.selected_profile.to_dict()
        return payload


@dataclass
class InvalidateRequest:
    client_token: str
    access_token: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'clientToken': self.client_token,
            'accessToken': self.access_token
        }


@dataclass
class User:
    id: Optional[str] = None
    properties: List[ProfileProperty] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'User':
        return cls(
            id=data.get('id'),
            properties=[ProfileProperty.from_dict(p) for p in data.get('properties') or []]
        )


@dataclass
class AuthenticateRefreshResponse:
    """Shared response shape of the authenticate and refresh endpoints"""
    access_token: str
    client_token: Optional[str] = None
    selected_profile: Optional[GameProfile] = None
    available_profiles: Optional[List[GameProfile]] = None
    user: Optional[User] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AuthenticateRefreshResponse':
        selected = data.get('selectedProfile')
        available = data.get('availableProfiles')
        user = data.get('user')

        return cls(
            access_token=data['accessToken'],
            client_token=data.get('clientToken'),
            selected_profile=GameProfile.from_dict(selected) if selected else None,
            available_profiles=[GameProfile.from_dict(p) for p in available] if available is not None else None,
            user=User.from_dict(user) if user else None
        )
