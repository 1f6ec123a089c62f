"""
User Domain Model
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class Roles(str, Enum):
    ADMIN = "Admin"
    USER = "User"


@dataclass
class ApplicationUser:
    """User domain model."""
    id: str
    username: str
    email: str
    first_name: str
    last_name: str
    password_hash: str
    email_confirmed: bool = False
    roles: List[str] = field(default_factory=list)
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: dict, roles: Optional[List[str]] = None) -> "ApplicationUser":
        """Create ApplicationUser from a database row."""
        return cls(
            id=data["id"],
            username=data["username"],
            email=data["email"],
            first_name=data["first_name"],
            last_name=data["last_name"],
            password_hash=data["password_hash"],
            email_confirmed=bool(data.get("email_confirmed", False)),
            roles=list(roles or []),
            created_at=data.get("created_at"),
        )
