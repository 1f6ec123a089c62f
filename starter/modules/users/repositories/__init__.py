"""
Data Access Layer (Repositories)
"""

from .user_repository import UserRepository

__all__ = [
    "UserRepository",
]
