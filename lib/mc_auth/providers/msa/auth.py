# mc_auth/providers/msa/auth.py
from enum import Enum
from typing import List, Optional

from ...base.auth.exceptions import (
    InvalidCredentialsError,
    RequestFailure,
    UnsupportedFlowError,
    is_blank
)
from ...base.auth.session import SessionState
from ...base.models.auth import AuthState, AuthStatus
from ...base.models.profile import GameProfile
from ...base.models.proxy_models import ProxyConfig
from ...base.network import HTTPManager, HTTPManagerFactory
from ...base.utils.logger import logger, mask_secret
from . import steps
from .constants import PROVIDER_NAME
from .models import MsCodeResponse


class LoginStage(Enum):
    """Last stage the login chain reached"""
    NOT_STARTED = "not_started"
    DEVICE_CODE_REQUESTED = "device_code_requested"
    IDENTITY_TOKEN_OBTAINED = "identity_token_obtained"
    NETWORK_TOKEN_OBTAINED = "network_token_obtained"
    SECURITY_TOKEN_OBTAINED = "security_token_obtained"
    PLATFORM_SESSION_OBTAINED = "platform_session_obtained"
    DONE = "done"


class MsaAuthenticator:
    """
    Authenticator for Microsoft accounts

    Login chain:
    1. Device code (user approves in a browser)
    2. Microsoft access token
    3. Xbox Live user token
    4. XSTS token
    5. Minecraft services session token
    6. Minecraft profile (best-effort)

    Waiting for the user between steps 1 and 2 is up to the caller:
    call get_auth_code(), show the message, wait, then call login().
    """

    def __init__(self, client_id: str, device_code: Optional[str] = None,
                 http_manager: Optional[HTTPManager] = None,
                 proxy_config: Optional[ProxyConfig] = None):
        """
        Initialize authenticator

        Args:
            client_id: Azure application (client) id
            device_code: Device code from an earlier get_auth_code() call, skips that step
            http_manager: HTTP manager to use, created for the provider when omitted
            proxy_config: Proxy for a newly created HTTP manager
        """
        if client_id is None:
            raise ValueError("client_id cannot be None")

        self.provider_name = PROVIDER_NAME
        self._client_id: Optional[str] = client_id
        self._device_code = device_code
        self._password: Optional[str] = None
        self._session = SessionState()
        self._stage = LoginStage.NOT_STARTED

        if http_manager is None:
            http_manager = HTTPManagerFactory.create_for_provider(self.provider_name, proxy_config)
        elif proxy_config is not None:
            http_manager.update_proxy(proxy_config)
        self.http_manager = http_manager

    # ------------------------------------------------------------------
    # Session accessors
    # ------------------------------------------------------------------

    @property
    def session(self) -> SessionState:
        return self._session

    @property
    def client_id(self) -> Optional[str]:
        return self._client_id

    @client_id.setter
    def client_id(self, value: Optional[str]) -> None:
        self._client_id = value

    @property
    def device_code(self) -> Optional[str]:
        return self._device_code

    @device_code.setter
    def device_code(self, value: Optional[str]) -> None:
        self._device_code = value

    @property
    def username(self) -> Optional[str]:
        return self._session.username

    @username.setter
    def username(self, value: Optional[str]) -> None:
        self._session.username = value

    @property
    def password(self) -> Optional[str]:
        return self._password

    @password.setter
    def password(self, value: Optional[str]) -> None:
        self._password = value

    @property
    def session_token(self) -> Optional[str]:
        return self._session.session_token

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
    def stage(self) -> LoginStage:
        return self._stage

    @property
    def proxy_config(self) -> Optional[ProxyConfig]:
        return self.http_manager.config.proxy_config

    @proxy_config.setter
    def proxy_config(self, value: Optional[ProxyConfig]) -> None:
        self.http_manager.update_proxy(value)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def get_auth_code(self) -> MsCodeResponse:
        """
        Request a device code and keep it for the next login()

        Returns:
            Full device code response, including the user code and verification URI to show

        Raises:
            InvalidCredentialsError: No client id
            RequestFailure: Request failed
        """
        if is_blank(self._client_id):
            raise InvalidCredentialsError("Invalid client id.")

        response = steps.request_device_code(self.http_manager, self._client_id)
        self._device_code = response.device_code
        self._stage = LoginStage.DEVICE_CODE_REQUESTED

        logger.log_auth_event(
            self.provider_name, "Device code issued",
            f"verify at {response.verification_uri}, expires in {response.expires_in}s"
        )
        return response

    def login(self) -> None:
        """
        Run the login chain from the held device code (requesting one if needed)

        Raises:
            InvalidCredentialsError: Neither client id nor password, or password without username
            UnsupportedFlowError: Password login was requested
            RequestFailure: Any exchange failed; the device code is kept for a retry
        """
        has_client_id = not is_blank(self._client_id)
        has_device_code = not is_blank(self._device_code)
        has_password = not is_blank(self._password)

        if not has_client_id and not has_password:
            raise InvalidCredentialsError("Invalid password or access token.")

        if has_password:
            if is_blank(self.username):
                raise InvalidCredentialsError("Invalid username.")
            # TODO: implement once a password grant for Xbox Live sign-in is documented
            raise UnsupportedFlowError(
                "Password login is not supported for Microsoft accounts, use the device code flow."
            )

        if not has_device_code:
            self.get_auth_code()

        logger.log_auth_event(self.provider_name, "Starting login chain")

        ms_token = steps.exchange_device_code(self.http_manager, self._client_id, self._device_code)
        self._stage = LoginStage.IDENTITY_TOKEN_OBTAINED

        xbl = steps.authenticate_xbl(self.http_manager, ms_token.access_token)
        self._stage = LoginStage.NETWORK_TOKEN_OBTAINED

        xsts = steps.authorize_xsts(self.http_manager, xbl.token)
        self._stage = LoginStage.SECURITY_TOKEN_OBTAINED

        response = steps.login_with_xbox(self.http_manager, xsts.user_hash, xsts.token)
        if response is None:
            raise RequestFailure("Invalid response received.")

        self._session.session_token = response.access_token
        self._stage = LoginStage.PLATFORM_SESSION_OBTAINED
        logger.log_session_event(
            self.provider_name, "Session token obtained", mask_secret(response.access_token)
        )

        result = steps.fetch_profile(self.http_manager, response.access_token)
        if result.found:
            profile = result.profile.to_game_profile()
            self._session.selected_profile = profile
            self._session.profiles = [profile]
            self._session.username = profile.name
        else:
            logger.info(f"{self.provider_name}: No Minecraft profile on this account ({result.reason})")
            if is_blank(self.username):
                self._session.username = response.username

        self._session.logged_in = True
        self._stage = LoginStage.DONE
        logger.log_auth_event(self.provider_name, "Login successful", f"user={self.username}")

    def logout(self) -> None:
        """
        Clear local session state. Nothing is sent to the server.

        The client id and the device code are both dropped, so a new login
        needs a new client id and requests a fresh device code.
        """
        self._session.reset()
        self._client_id = None
        self._device_code = None
        self._stage = LoginStage.NOT_STARTED
        logger.log_session_event(self.provider_name, "Local session cleared")

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def get_authentication_status(self) -> AuthStatus:
        session = self._session
        if session.logged_in:
            state = AuthState.AUTHENTICATED
        elif self._stage != LoginStage.NOT_STARTED:
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
                'stage': self._stage.value,
                'has_client_id': not is_blank(self._client_id),
                'has_device_code': not is_blank(self._device_code)
            }
        )

    def __repr__(self) -> str:
        session = self._session
        return (
            f"MsaAuthenticator(client_id={self._client_id!r}, "
            f"device_code={mask_secret(self._device_code)}, "
            f"session_token={mask_secret(session.session_token)}, "
            f"logged_in={session.logged_in}, username={session.username!r}, "
            f"selected_profile={session.selected_profile.name if session.selected_profile else None})"
        )
