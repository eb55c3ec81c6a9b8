# mc_auth/providers/msa/constants.py
"""
Microsoft account / Xbox Live / Minecraft services constants
"""

PROVIDER_NAME = 'msa'

# ============================================================================
# Microsoft identity platform
# ============================================================================

MS_OAUTH_BASE_URL = 'https://login.microsoftonline.com/consumers/oauth2/v2.0'

MS_ENDPOINTS = {
    'DEVICE_CODE': f'{MS_OAUTH_BASE_URL}/devicecode',
    'TOKEN': f'{MS_OAUTH_BASE_URL}/token',
}

MS_OAUTH_SCOPE = 'XboxLive.signin'

DEVICE_CODE_GRANT_TYPE = 'urn:ietf:params:oauth:grant-type:device_code'

# ============================================================================
# Xbox Live
# ============================================================================

XBL_AUTH_URL = 'https://user.auth.xboxlive.com/user/authenticate'
XSTS_AUTH_URL = 'https://xsts.auth.xboxlive.com/xsts/authorize'

XBL_RELYING_PARTY = 'http://auth.xboxlive.com'
XBL_AUTH_METHOD = 'RPS'
XBL_SITE_NAME = 'user.auth.xboxlive.com'

XSTS_RELYING_PARTY = 'rp://api.minecraftservices.com/'
XSTS_SANDBOX_ID = 'RETAIL'

TOKEN_TYPE_JWT = 'JWT'

# ============================================================================
# Minecraft services
# ============================================================================

MC_SERVICES_BASE_URL = 'https://api.minecraftservices.com'

MC_ENDPOINTS = {
    'LOGIN_WITH_XBOX': f'{MC_SERVICES_BASE_URL}/authentication/login_with_xbox',
    'PROFILE': f'{MC_SERVICES_BASE_URL}/minecraft/profile',
}
