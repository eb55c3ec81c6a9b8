# mc_auth/base/network/__init__.py
from .http_manager import HTTPManager, HTTPManagerFactory

__all__ = ["HTTPManager", "HTTPManagerFactory"]
