# mc_auth/providers/msa/steps.py
"""
Individual exchanges of the Microsoft -> Xbox Live -> Minecraft login chain.

Each step takes only the fields it needs and returns the typed response
of its endpoint, so the chain can be driven and tested one hop at a time:

    device code -> MS access token -> XBL token -> XSTS token -> Minecraft token -> profile
"""

from ...base.auth.exceptions import RequestFailure
from ...base.network import HTTPManager
from ...base.utils.logger import logger
from .constants import MC_ENDPOINTS, MS_ENDPOINTS, XBL_AUTH_URL, XSTS_AUTH_URL
from .models import (
    McLoginRequest,
    McLoginResponse,
    McProfileResponse,
    MsCodeRequest,
    MsCodeResponse,
    MsTokenRequest,
    MsTokenResponse,
    ProfileFetchResult,
    XblAuthRequest,
    XblAuthResponse,
    XstsAuthRequest
)


def _require_response(response, step: str):
    if response is None:
        raise RequestFailure(f"Empty response from {step} endpoint.")
    return response


def request_device_code(http_manager: HTTPManager, client_id: str) -> MsCodeResponse:
    """Start the device authorization grant"""
    response = http_manager.request(
        MS_ENDPOINTS['DEVICE_CODE'],
        MsCodeRequest(client_id),
        MsCodeResponse,
        form=True
    )
    return _require_response(response, 'device code')


def exchange_device_code(http_manager: HTTPManager, client_id: str, device_code: str) -> MsTokenResponse:
    """
    Redeem the device code for a Microsoft access token.

    Until the user finishes the browser step this fails with a
    RequestFailure whose is_authorization_pending is True.
    """
    response = http_manager.request(
        MS_ENDPOINTS['TOKEN'],
        MsTokenRequest(client_id, device_code),
        MsTokenResponse,
        form=True
    )
    return _require_response(response, 'token')


def authenticate_xbl(http_manager: HTTPManager, access_token: str) -> XblAuthResponse:
    response = http_manager.request(XBL_AUTH_URL, XblAuthRequest(access_token), XblAuthResponse)
    return _require_response(response, 'Xbox Live authenticate')


def authorize_xsts(http_manager: HTTPManager, xbl_token: str) -> XblAuthResponse:
    response = http_manager.request(XSTS_AUTH_URL, XstsAuthRequest(xbl_token), XblAuthResponse)
    return _require_response(response, 'XSTS authorize')


def login_with_xbox(http_manager: HTTPManager, user_hash: str, xsts_token: str):
    """
    Exchange the XSTS token for a Minecraft services token.

    Returns None when the server sent an empty body; the caller decides how to fail.
    """
    return http_manager.request(
        MC_ENDPOINTS['LOGIN_WITH_XBOX'],
        McLoginRequest(user_hash, xsts_token),
        McLoginResponse
    )


def fetch_profile(http_manager: HTTPManager, session_token: str) -> ProfileFetchResult:
    """Look up the Minecraft profile owned by the session"""
    try:
        response = http_manager.request(
            MC_ENDPOINTS['PROFILE'],
            headers={'Authorization': f'Bearer {session_token}'},
            response_type=McProfileResponse,
            operation='profile'
        )
    except RequestFailure as e:
        logger.debug(f"Profile lookup failed: {e}")
        return ProfileFetchResult.absent(str(e))

    if response is None:
        return ProfileFetchResult.absent("Empty profile response")

    return ProfileFetchResult.present(response)
