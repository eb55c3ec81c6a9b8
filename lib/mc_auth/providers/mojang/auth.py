# mc_auth/providers/mojang/auth.py
import uuid
from typing import List, Optional
from urllib.parse import urljoin

from ...base.auth.exceptions import (
    IllegalStateError,
    InvalidArgumentError,
    InvalidCredentialsError,
    RequestFailure,
    is_blank
)
from ...base.auth.session import SessionState
from ...base.models.auth import AuthState, AuthStatus
from ...base.models.profile import GameProfile, ProfileProperty
from ...base.models.proxy_models import ProxyConfig
from ...base.network import HTTPManager, HTTPManagerFactory
from ...base.utils.logger import logger, mask_secret
from .constants import MojangDefaults
from .models import (
    AuthenticateRefreshResponse,
    AuthenticationRequest,
    InvalidateRequest,
    RefreshRequest
)


class MojangAuthenticator:
    """
    Authenticator for the legacy Mojang (Yggdrasil) authentication server

    Supports password login, session token refresh, invalidation and
    one-time game profile selection.
    """

    def __init__(self, client_token: Optional[str] = None,
                 base_url: str = MojangDefaults.BASE_URL,
                 http_manager: Optional[HTTPManager] = None,
                 proxy_config: Optional[ProxyConfig] = None):
        """
        Initialize authenticator

        Args:
            client_token: Stable identifier sent with every request. Generated when omitted;
                          pass a stored value to keep it across runs.
            base_url: Authentication server base URL
            http_manager: HTTP manager to use, created for the provider when omitted
            proxy_config: Proxy for a newly created HTTP manager
        """
        if client_token is None:
            client_token = str(uuid.uuid4())
        elif client_token == '':
            raise ValueError("client_token cannot be empty")

        self.provider_name = MojangDefaults.PROVIDER_NAME
        self.base_url = base_url if base_url.endswith('/') else f"{base_url}/"
        self._client_token = client_token
        self._id: Optional[str] = None
        self._password: Optional[str] = None
        self._session = SessionState()

        if http_manager is None:
            http_manager = HTTPManagerFactory.create_for_provider(self.provider_name, proxy_config)
        elif proxy_config is not None:
            http_manager.update_proxy(proxy_config)
        self.http_manager = http_manager

        logger.debug(f"Initialized {self.provider_name} authenticator with client token {mask_secret(client_token)}")

    # ------------------------------------------------------------------
    # Session accessors
    # ------------------------------------------------------------------

    @property
    def session(self) -> SessionState:
        return self._session

    @property
    def client_token(self) -> str:
        return self._client_token

    @property
    def id(self) -> Optional[str]:
        """Account identifier resolved at login, falls back to the username"""
        return self._id

    @property
    def logged_in(self) -> bool:
        return self._session.logged_in

    @property
    def selected_profile(self) -> Optional[GameProfile]:
        return self._session.selected_profile

    @property
    def profiles(self) -> List[GameProfile]:
        return list(self._session.profiles)

    @property
    def properties(self) -> List[ProfileProperty]:
        return list(self._session.properties)

    @property
    def username(self) -> Optional[str]:
        return self._session.username

    @username.setter
    def username(self, value: Optional[str]) -> None:
        self._check_credentials_mutable('username')
        self._session.username = value

    @property
    def password(self) -> Optional[str]:
        return self._password

    @password.setter
    def password(self, value: Optional[str]) -> None:
        self._check_credentials_mutable('password')
        self._password = value

    @property
    def session_token(self) -> Optional[str]:
        return self._session.session_token

    @session_token.setter
    def session_token(self, value: Optional[str]) -> None:
        self._check_credentials_mutable('session token')
        self._session.session_token = value

    @property
    def proxy_config(self) -> Optional[ProxyConfig]:
        return self.http_manager.config.proxy_config

    @proxy_config.setter
    def proxy_config(self, value: Optional[ProxyConfig]) -> None:
        self.http_manager.update_proxy(value)

    def _check_credentials_mutable(self, field_name: str) -> None:
        if self._session.logged_in and self._session.selected_profile is not None:
            raise IllegalStateError(
                f"Cannot change {field_name} while user is logged in and profile is selected."
            )

    def get_endpoint_url(self, name: str) -> str:
        """Resolve an endpoint name against the base URL"""
        return urljoin(self.base_url, MojangDefaults.ENDPOINTS[name])

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def login(self) -> None:
        """
        Log in with the stored session token, or with the password when there is none

        Raises:
            InvalidCredentialsError: Username missing, or neither token nor password present
            RequestFailure: Request failed or the response did not validate
        """
        if is_blank(self.username):
            raise InvalidCredentialsError("Invalid username.")

        has_token = not is_blank(self.session_token)
        has_password = not is_blank(self._password)
        if not has_token and not has_password:
            raise InvalidCredentialsError("Invalid password or access token.")

        if has_token:
            logger.log_auth_event(self.provider_name, "Refreshing session", f"user={self.username}")
            request = RefreshRequest(self._client_token, self.session_token)
            response = self._exchange('refresh', request)
        else:
            logger.log_auth_event(self.provider_name, "Authenticating with password", f"user={self.username}")
            request = AuthenticationRequest(self.username, self._password, self._client_token)
            response = self._exchange('authenticate', request)

        self._apply_login_response(response)
        logger.log_auth_event(
            self.provider_name, "Login successful",
            f"id={self._id}, profiles={len(self._session.profiles)}"
        )

    def _apply_login_response(self, response: AuthenticateRefreshResponse) -> None:
        session = self._session

        if response.user is not None and response.user.id is not None:
            self._id = response.user.id
        else:
            self._id = session.username

        session.session_token = response.access_token

        profiles = list(response.available_profiles) if response.available_profiles is not None else []
        if response.selected_profile is not None and response.selected_profile not in profiles:
            # Refresh responses carry the bound profile without the list
            logger.debug(f"{self.provider_name}: Selected profile missing from available profiles, adding it")
            profiles.append(response.selected_profile)
        session.profiles = profiles
        session.selected_profile = response.selected_profile

        session.properties = list(response.user.properties) if response.user is not None else []

        session.logged_in = True

    def logout(self) -> None:
        """
        Invalidate the session token on the server and clear local state.

        Without a session token nothing is sent and only local state is cleared.
        The invalidate response body is ignored; only the status counts.

        Raises:
            RequestFailure: The invalidate request failed; local state is kept
        """
        if is_blank(self.session_token):
            logger.debug(f"{self.provider_name}: No session token to invalidate")
        else:
            request = InvalidateRequest(self._client_token, self.session_token)
            self.http_manager.request(self.get_endpoint_url('invalidate'), request, decode=False)
            logger.log_auth_event(self.provider_name, "Session invalidated")

        self._session.reset()
        self._id = None
        logger.log_session_event(self.provider_name, "Local session cleared")

    def select_game_profile(self, profile: Optional[GameProfile]) -> None:
        """
        Bind one of the available profiles to the session. Allowed once per session token.

        Raises:
            IllegalStateError: Not logged in, or a profile is already selected
            InvalidArgumentError: Profile is None or not one of the available profiles
            RequestFailure: Request failed or the response did not validate
        """
        if not self.logged_in:
            raise IllegalStateError("Cannot change game profile while not logged in.")
        if self.selected_profile is not None:
            raise IllegalStateError("Cannot change game profile when it is already selected.")
        if profile is None or profile not in self._session.profiles:
            raise InvalidArgumentError(f"Invalid profile '{profile}'.")

        logger.log_auth_event(self.provider_name, "Selecting profile", profile.name)
        request = RefreshRequest(self._client_token, self.session_token, profile)
        response = self._exchange('refresh', request)

        self._session.session_token = response.access_token
        self._session.selected_profile = response.selected_profile

    def _exchange(self, endpoint: str, request) -> AuthenticateRefreshResponse:
        """Send an authenticate/refresh request and validate the echoed client token"""
        response = self.http_manager.request(
            self.get_endpoint_url(endpoint),
            request,
            AuthenticateRefreshResponse
        )

        if response is None:
            raise RequestFailure("Server returned invalid response.")
        if response.client_token != self._client_token:
            logger.warning(f"{self.provider_name}: Client token mismatch in {endpoint} response")
            raise RequestFailure("Server responded with incorrect client token.")

        return response

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def get_authentication_status(self) -> AuthStatus:
        session = self._session
        if session.logged_in:
            state = AuthState.AUTHENTICATED
        elif session.has_session_token:
            state = AuthState.PENDING
        else:
            state = AuthState.NOT_AUTHENTICATED

        return AuthStatus(
            provider_name=self.provider_name,
            auth_state=state,
            username=session.username,
            has_session_token=session.has_session_token,
            selected_profile=session.selected_profile.name if session.selected_profile else None,
            profile_count=len(session.profiles),
            provider_specific={
                'id': self._id,
                'base_url': self.base_url,
                'property_count': len(session.properties)
            }
        )

    def __repr__(self) -> str:
        session = self._session
        return (
            f"MojangAuthenticator(client_token={mask_secret(self._client_token)}, "
            f"username={session.username!r}, session_token={mask_secret(session.session_token)}, "
            f"logged_in={session.logged_in}, profiles={[p.name for p in session.profiles]}, "
            f"selected_profile={session.selected_profile.name if session.selected_profile else None})"
        )
