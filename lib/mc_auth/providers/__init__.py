# mc_auth/providers/__init__.py
from .mojang import MojangAuthenticator
from .msa import MsaAuthenticator

__all__ = ['MojangAuthenticator', 'MsaAuthenticator']
