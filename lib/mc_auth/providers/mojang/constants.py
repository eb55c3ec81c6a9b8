# mc_auth/providers/mojang/constants.py
"""
Mojang (Yggdrasil) authentication server constants
"""


class MojangDefaults:
    """Default values for the Mojang provider"""

    PROVIDER_NAME = 'mojang'

    BASE_URL = 'https://authserver.mojang.com/'

    ENDPOINTS = {
        'authenticate': 'authenticate',
        'refresh': 'refresh',
        'invalidate': 'invalidate',
    }

    # Sent with every authenticate request
    AGENT_NAME = 'Minecraft'
    AGENT_VERSION = 1
