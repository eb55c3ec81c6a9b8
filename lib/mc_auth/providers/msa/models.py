# mc_auth/providers/msa/models.py
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ...base.auth.exceptions import RequestFailure
from ...base.models.profile import GameProfile, parse_uuid
from .constants import (
    DEVICE_CODE_GRANT_TYPE,
    MS_OAUTH_SCOPE,
    TOKEN_TYPE_JWT,
    XBL_AUTH_METHOD,
    XBL_RELYING_PARTY,
    XBL_SITE_NAME,
    XSTS_RELYING_PARTY,
    XSTS_SANDBOX_ID
)


# ============================================================================
# Microsoft identity platform
# ============================================================================

@dataclass
class MsCodeRequest:
    client_id: str
    scope: str = MS_OAUTH_SCOPE

    def to_dict(self) -> Dict[str, str]:
        return {
            'client_id': self.client_id,
            'scope': self.scope
        }


@dataclass
class MsCodeResponse:
    """
    Device authorization response. user_code, verification_uri and message are
    meant for the end user; interval is the minimum polling delay in seconds.
    """
    user_code: str
    device_code: str
    verification_uri: str
    expires_in: int = 0
    interval: int = 5
    message: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MsCodeResponse':
        return cls(
            user_code=data['user_code'],
            device_code=data['device_code'],
            verification_uri=data['verification_uri'],
            expires_in=int(data.get('expires_in', 0)),
            interval=int(data.get('interval', 5)),
            message=data.get('message')
        )


@dataclass
class MsTokenRequest:
    client_id: str
    device_code: str
    grant_type: str = DEVICE_CODE_GRANT_TYPE

    def to_dict(self) -> Dict[str, str]:
        return {
            'grant_type': self.grant_type,
            'client_id': self.client_id,
            'device_code': self.device_code
        }


@dataclass
class MsTokenResponse:
    access_token: str
    token_type: str = 'Bearer'
    scope: Optional[str] = None
    expires_in: int = 0
    id_token: Optional[str] = None
    refresh_token: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MsTokenResponse':
        return cls(
            access_token=data['access_token'],
            token_type=data.get('token_type', 'Bearer'),
            scope=data.get('scope'),
            expires_in=int(data.get('expires_in', 0)),
            id_token=data.get('id_token'),
            refresh_token=data.get('refresh_token')
        )


# ============================================================================
# Xbox Live
# ============================================================================

@dataclass
class XblAuthRequest:
    access_token: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'RelyingParty': XBL_RELYING_PARTY,
            'TokenType': TOKEN_TYPE_JWT,
            'Properties': {
                'AuthMethod': XBL_AUTH_METHOD,
                'SiteName': XBL_SITE_NAME,
                'RpsTicket': f'd={self.access_token}'
            }
        }


@dataclass
class XstsAuthRequest:
    xbl_token: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'RelyingParty': XSTS_RELYING_PARTY,
            'TokenType': TOKEN_TYPE_JWT,
            'Properties': {
                'UserTokens': [self.xbl_token],
                'SandboxId': XSTS_SANDBOX_ID
            }
        }


@dataclass
class XblAuthResponse:
    """Response shape shared by the XBL and XSTS endpoints"""
    token: str
    user_hashes: List[str] = field(default_factory=list)
    issue_instant: Optional[str] = None
    not_after: Optional[str] = None

    @property
    def user_hash(self) -> str:
        """uhs claim of the first xui entry"""
        if not self.user_hashes or not self.user_hashes[0]:
            raise RequestFailure("Xbox Live response carried no user hash claim.")
        return self.user_hashes[0]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'XblAuthResponse':
        display_claims = data.get('DisplayClaims') or {}
        xui = display_claims.get('xui') or []
        return cls(
            token=data['Token'],
            user_hashes=[claim.get('uhs') for claim in xui if isinstance(claim, dict)],
            issue_instant=data.get('IssueInstant'),
            not_after=data.get('NotAfter')
        )


# ============================================================================
# Minecraft services
# ============================================================================

@dataclass
class McLoginRequest:
    user_hash: str
    xsts_token: str

    def to_dict(self) -> Dict[str, str]:
        return {
            'identityToken': f'XBL3.0 x={self.user_hash};{self.xsts_token}'
        }


@dataclass
class McLoginResponse:
    access_token: str
    username: Optional[str] = None
    roles: List[str] = field(default_factory=list)
    token_type: str = 'Bearer'
    expires_in: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'McLoginResponse':
        return cls(
            access_token=data['access_token'],
            username=data.get('username'),
            roles=list(data.get('roles') or []),
            token_type=data.get('token_type', 'Bearer'),
            expires_in=int(data.get('expires_in', 0))
        )


@dataclass
class Skin:
    id: str
    state: Optional[str] = None
    url: Optional[str] = None
    variant: Optional[str] = None
    alias: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Skin':
        return cls(
            id=data['id'],
            state=data.get('state'),
            url=data.get('url'),
            variant=data.get('variant'),
            alias=data.get('alias')
        )


@dataclass
class McProfileResponse:
    id: uuid.UUID
    name: str
    skins: List[Skin] = field(default_factory=list)

    def to_game_profile(self) -> GameProfile:
        return GameProfile(id=self.id, name=self.name)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'McProfileResponse':
        # A bad id fails here, while the response is still being decoded
        return cls(
            id=parse_uuid(data['id']),
            name=data['name'],
            skins=[Skin.from_dict(s) for s in data.get('skins') or []]
        )


@dataclass
class ProfileFetchResult:
    """
    Outcome of the profile lookup.

    An account without a purchased or linked profile is a valid end state,
    reported as found=False with a reason.
    """
    found: bool
    profile: Optional[McProfileResponse] = None
    reason: Optional[str] = None

    @classmethod
    def present(cls, profile: McProfileResponse) -> 'ProfileFetchResult':
        return cls(found=True, profile=profile)

    @classmethod
    def absent(cls, reason: str) -> 'ProfileFetchResult':
        return cls(found=False, reason=reason)
