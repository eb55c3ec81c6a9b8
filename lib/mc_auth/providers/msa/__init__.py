# mc_auth/providers/msa/__init__.py
from .auth import MsaAuthenticator, LoginStage
from .models import MsCodeResponse, ProfileFetchResult

__all__ = ['MsaAuthenticator', 'LoginStage', 'MsCodeResponse', 'ProfileFetchResult']
