"""
API Layer
"""

from .account_endpoints import router

__all__ = [
    "router",
]
