from __future__ import annotations

import json
import uuid
from unittest import mock

import pytest
import requests

from mc_auth import (
    InvalidCredentialsError,
    LoginStage,
    MsaAuthenticator,
    RequestFailure,
    UnsupportedFlowError,
)
from mc_auth.base.models.auth import AuthState
from mc_auth.base.models.proxy_models import RequestConfig
from mc_auth.base.network import HTTPManager
from mc_auth.providers.msa import steps
from mc_auth.providers.msa.constants import MC_ENDPOINTS, MS_ENDPOINTS, XBL_AUTH_URL, XSTS_AUTH_URL

DEVICE_CODE_URL = MS_ENDPOINTS["DEVICE_CODE"]
TOKEN_URL = MS_ENDPOINTS["TOKEN"]
LOGIN_URL = MC_ENDPOINTS["LOGIN_WITH_XBOX"]
PROFILE_URL = MC_ENDPOINTS["PROFILE"]

STEVE_ID = "069a79f444e94726a5befca90e38aaf5"


def _code_response(device_code: str = "ABC123") -> dict:
    return {
        "user_code": "XYZ-987",
        "device_code": device_code,
        "verification_uri": "https://microsoft.com/devicelogin",
        "expires_in": 900,
        "interval": 5,
        "message": "To sign in, use a web browser to open the page https://microsoft.com/devicelogin",
    }


def _xbl_response(token: str, uhs: str = "UHS1") -> dict:
    return {
        "IssueInstant": "2026-10-17T00:00:00Z",
        "NotAfter": "2026-10-31T00:00:00Z",
        "Token": token,
        "DisplayClaims": {"xui": [{"uhs": uhs}]},
    }


def _queue_chain(http, profile=None) -> None:
    http.add(TOKEN_URL, {"access_token": "AT", "token_type": "bearer", "expires_in": 3600, "refresh_token": "RT"})
    http.add(XBL_AUTH_URL, _xbl_response("X1"))
    http.add(XSTS_AUTH_URL, _xbl_response("X2"))
    http.add(LOGIN_URL, {"access_token": "PT", "username": "Steve", "roles": [], "expires_in": 86400})
    http.add(PROFILE_URL, profile if profile is not None else RequestFailure("HTTP 404", status_code=404))


def test_login_chain_without_profile(http) -> None:
    _queue_chain(http)
    auth = MsaAuthenticator("client-1", device_code="ABC123", http_manager=http)

    auth.login()

    assert auth.session_token == "PT"
    assert auth.username == "Steve"
    assert auth.logged_in is True
    assert auth.selected_profile is None
    assert auth.profiles == []
    assert auth.stage == LoginStage.DONE
    assert http.urls() == [TOKEN_URL, XBL_AUTH_URL, XSTS_AUTH_URL, LOGIN_URL, PROFILE_URL]


def test_login_chain_payloads(http) -> None:
    _queue_chain(http)
    auth = MsaAuthenticator("client-1", device_code="ABC123", http_manager=http)

    auth.login()

    token_call, xbl_call, xsts_call, login_call, profile_call = http.calls
    assert token_call["form"] is True
    assert token_call["payload"] == {
        "grant_type": "urn:ietf:params:oauth:grant-type:device_code",
        "client_id": "client-1",
        "device_code": "ABC123",
    }
    assert xbl_call["form"] is False
    assert xbl_call["payload"] == {
        "RelyingParty": "http://auth.xboxlive.com",
        "TokenType": "JWT",
        "Properties": {"AuthMethod": "RPS", "SiteName": "user.auth.xboxlive.com", "RpsTicket": "d=AT"},
    }
    assert xsts_call["payload"] == {
        "RelyingParty": "rp://api.minecraftservices.com/",
        "TokenType": "JWT",
        "Properties": {"UserTokens": ["X1"], "SandboxId": "RETAIL"},
    }
    assert login_call["payload"] == {"identityToken": "XBL3.0 x=UHS1;X2"}
    assert profile_call["payload"] is None
    assert profile_call["headers"] == {"Authorization": "Bearer PT"}


def test_login_with_profile(http) -> None:
    _queue_chain(http, profile={"id": STEVE_ID, "name": "Notch", "skins": [{"id": "s1", "state": "ACTIVE"}]})
    auth = MsaAuthenticator("client-1", device_code="ABC123", http_manager=http)
    auth.username = "someone"

    auth.login()

    assert auth.selected_profile.id == uuid.UUID(STEVE_ID)
    assert auth.profiles == [auth.selected_profile]
    assert auth.username == "Notch"
    assert auth.logged_in is True


def test_profile_failure_keeps_existing_username(http) -> None:
    _queue_chain(http)
    auth = MsaAuthenticator("client-1", device_code="ABC123", http_manager=http)
    auth.username = "already-known"

    auth.login()

    assert auth.username == "already-known"
    assert auth.logged_in is True


def test_login_requests_device_code_when_missing(http) -> None:
    http.add(DEVICE_CODE_URL, _code_response())
    _queue_chain(http)
    auth = MsaAuthenticator("client-1", http_manager=http)

    auth.login()

    assert http.calls[0]["payload"] == {"client_id": "client-1", "scope": "XboxLive.signin"}
    assert http.calls[0]["form"] is True
    assert http.calls[1]["payload"]["device_code"] == "ABC123"
    assert auth.logged_in is True


def test_get_auth_code_stores_device_code(http) -> None:
    http.add(DEVICE_CODE_URL, _code_response("DEV-1"))
    auth = MsaAuthenticator("client-1", http_manager=http)

    response = auth.get_auth_code()

    assert response.user_code == "XYZ-987"
    assert response.verification_uri == "https://microsoft.com/devicelogin"
    assert response.interval == 5
    assert auth.device_code == "DEV-1"
    assert auth.stage == LoginStage.DEVICE_CODE_REQUESTED
    assert auth.get_authentication_status().auth_state == AuthState.PENDING


def test_get_auth_code_requires_client_id(http) -> None:
    auth = MsaAuthenticator("", http_manager=http)

    with pytest.raises(InvalidCredentialsError):
        auth.get_auth_code()
    assert http.calls == []


def test_client_id_none_rejected(http) -> None:
    with pytest.raises(ValueError):
        MsaAuthenticator(None, http_manager=http)


def test_login_without_client_id_or_password_fails_offline(http) -> None:
    auth = MsaAuthenticator("client-1", device_code="ABC123", http_manager=http)
    auth.client_id = None

    with pytest.raises(InvalidCredentialsError):
        auth.login()
    assert http.calls == []


def test_password_login_requires_username(http) -> None:
    auth = MsaAuthenticator("client-1", http_manager=http)
    auth.password = "secret"

    with pytest.raises(InvalidCredentialsError) as exc_info:
        auth.login()
    assert not isinstance(exc_info.value, UnsupportedFlowError)
    assert http.calls == []


def test_password_login_is_unsupported(http) -> None:
    auth = MsaAuthenticator("client-1", device_code="ABC123", http_manager=http)
    auth.username = "steve@example.com"
    auth.password = "secret"

    with pytest.raises(UnsupportedFlowError):
        auth.login()
    assert http.calls == []
    assert auth.session_token is None


def test_authorization_pending_keeps_device_code(http) -> None:
    pending = RequestFailure("HTTP 400", status_code=400, error="authorization_pending")
    http.add(TOKEN_URL, pending)
    auth = MsaAuthenticator("client-1", device_code="ABC123", http_manager=http)

    with pytest.raises(RequestFailure) as exc_info:
        auth.login()

    assert exc_info.value.is_authorization_pending
    assert auth.device_code == "ABC123"
    assert auth.logged_in is False

    _queue_chain(http)
    auth.login()
    assert auth.logged_in is True


def test_empty_xsts_claims_fail(http) -> None:
    http.add(TOKEN_URL, {"access_token": "AT"})
    http.add(XBL_AUTH_URL, _xbl_response("X1"))
    http.add(XSTS_AUTH_URL, {"Token": "X2", "DisplayClaims": {"xui": []}})
    auth = MsaAuthenticator("client-1", device_code="ABC123", http_manager=http)

    with pytest.raises(RequestFailure, match="user hash"):
        auth.login()
    assert auth.stage == LoginStage.SECURITY_TOKEN_OBTAINED
    assert auth.logged_in is False


def test_empty_login_response_fails(http) -> None:
    http.add(TOKEN_URL, {"access_token": "AT"})
    http.add(XBL_AUTH_URL, _xbl_response("X1"))
    http.add(XSTS_AUTH_URL, _xbl_response("X2"))
    http.add(LOGIN_URL, None)
    auth = MsaAuthenticator("client-1", device_code="ABC123", http_manager=http)

    with pytest.raises(RequestFailure, match="Invalid response"):
        auth.login()
    assert auth.session_token is None
    assert auth.logged_in is False


def test_logout_clears_session_and_client_id(http) -> None:
    _queue_chain(http)
    auth = MsaAuthenticator("client-1", device_code="ABC123", http_manager=http)
    auth.login()

    auth.logout()

    assert auth.logged_in is False
    assert auth.session_token is None
    assert auth.client_id is None
    assert auth.device_code is None
    assert len(http.calls) == 5

    with pytest.raises(InvalidCredentialsError):
        auth.login()


def test_fetch_profile_absent_variant(http) -> None:
    http.add(PROFILE_URL, RequestFailure("HTTP 404", status_code=404, error="NOT_FOUND"))

    result = steps.fetch_profile(http, "PT")

    assert result.found is False
    assert result.profile is None
    assert "404" in result.reason


def test_fetch_profile_present_variant(http) -> None:
    http.add(PROFILE_URL, {"id": STEVE_ID, "name": "Notch"})

    result = steps.fetch_profile(http, "PT")

    assert result.found is True
    assert result.profile.to_game_profile().name == "Notch"
    assert http.calls[0]["operation"] == "profile"


def test_repr_masks_tokens(http) -> None:
    _queue_chain(http)
    auth = MsaAuthenticator("client-1", device_code="ABC123-LONG-CODE", http_manager=http)
    auth.login()

    text = repr(auth)
    assert "ABC123-LONG-CODE" not in text
    assert "logged_in=True" in text


def test_malformed_profile_id_is_not_fatal(http) -> None:
    _queue_chain(http, profile={"id": "not-a-uuid", "name": "Steve"})
    auth = MsaAuthenticator("client-1", device_code="ABC123", http_manager=http)

    auth.login()

    assert auth.logged_in is True
    assert auth.session_token == "PT"
    assert auth.selected_profile is None
    assert auth.username == "Steve"


def _json_reply(body) -> requests.Response:
    response = requests.Response()
    response.status_code = 200
    response._content = json.dumps(body).encode("utf-8")
    response.headers["Content-Type"] = "application/json"
    return response


@pytest.mark.parametrize("profile_body", [
    {"id": "not-a-uuid", "name": "Steve"},
    {"name": "Steve"},
    ["unexpected"],
])
def test_profile_decode_failure_over_http(profile_body) -> None:
    replies = {
        TOKEN_URL: {"access_token": "AT", "token_type": "bearer", "expires_in": 3600},
        XBL_AUTH_URL: _xbl_response("X1"),
        XSTS_AUTH_URL: _xbl_response("X2"),
        LOGIN_URL: {"access_token": "PT", "username": "Steve"},
        PROFILE_URL: profile_body,
    }

    def reply(method, url, **kwargs):
        return _json_reply(replies[url])

    auth = MsaAuthenticator("client-1", device_code="ABC123",
                            http_manager=HTTPManager(RequestConfig(provider="msa")))

    with mock.patch.object(requests.Session, "request", side_effect=reply):
        auth.login()

    assert auth.logged_in is True
    assert auth.selected_profile is None
    assert auth.profiles == []
    assert auth.username == "Steve"
    assert auth.stage == LoginStage.DONE


def test_profile_decoded_over_http() -> None:
    replies = {
        TOKEN_URL: {"access_token": "AT"},
        XBL_AUTH_URL: _xbl_response("X1"),
        XSTS_AUTH_URL: _xbl_response("X2"),
        LOGIN_URL: {"access_token": "PT", "username": "someone"},
        PROFILE_URL: {"id": STEVE_ID, "name": "Notch"},
    }

    def reply(method, url, **kwargs):
        return _json_reply(replies[url])

    auth = MsaAuthenticator("client-1", device_code="ABC123",
                            http_manager=HTTPManager(RequestConfig(provider="msa")))

    with mock.patch.object(requests.Session, "request", side_effect=reply) as send:
        auth.login()

    assert auth.selected_profile.id == uuid.UUID(STEVE_ID)
    assert auth.username == "Notch"
    assert send.call_args.args == ("GET", PROFILE_URL)
    assert send.call_args.kwargs["headers"]["Authorization"] == "Bearer PT"
