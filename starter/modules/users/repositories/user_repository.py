"""
User Repository

Handles all database operations for the users, roles and user_roles tables.
"""
import logging
import uuid
from typing import Any, Dict, List, Optional

from databases import Database

from starter.modules.database import database as default_database

logger = logging.getLogger("starter.users.repository")

USER_COLUMNS = "id, username, email, first_name, last_name, password_hash, email_confirmed, created_at"


class UserRepository:
    """Repository for user data access."""

    def __init__(self, database: Optional[Database] = None):
        self.database = database or default_database

    async def find_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        query = f"SELECT {USER_COLUMNS} FROM users WHERE id = :user_id"
        row = await self.database.fetch_one(query, {"user_id": user_id})
        return dict(row) if row else None

    async def find_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        query = f"SELECT {USER_COLUMNS} FROM users WHERE username = :username"
        row = await self.database.fetch_one(query, {"username": username})
        return dict(row) if row else None

    async def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        query = f"SELECT {USER_COLUMNS} FROM users WHERE email = :email"
        row = await self.database.fetch_one(query, {"email": email})
        return dict(row) if row else None

    async def create(
        self,
        username: str,
        email: str,
        first_name: str,
        last_name: str,
        password_hash: str,
    ) -> str:
        """Create a new user and return its id."""
        user_id = str(uuid.uuid4())
        query = """
            INSERT INTO users (id, username, email, first_name, last_name, password_hash)
            VALUES (:id, :username, :email, :first_name, :last_name, :password_hash)
        """
        await self.database.execute(query, {
            "id": user_id,
            "username": username,
            "email": email,
            "first_name": first_name,
            "last_name": last_name,
            "password_hash": password_hash,
        })
        return user_id

    async def confirm_email(self, user_id: str) -> None:
        query = "UPDATE users SET email_confirmed = TRUE WHERE id = :user_id"
        await self.database.execute(query, {"user_id": user_id})

    async def role_exists(self, role: str) -> bool:
        query = "SELECT name FROM roles WHERE name = :role"
        return await self.database.fetch_val(query, {"role": role}) is not None

    async def create_role(self, role: str) -> None:
        await self.database.execute("INSERT INTO roles (name) VALUES (:role)", {"role": role})

    async def add_to_role(self, user_id: str, role: str) -> None:
        query = "INSERT INTO user_roles (user_id, role_name) VALUES (:user_id, :role)"
        await self.database.execute(query, {"user_id": user_id, "role": role})

    async def get_roles(self, user_id: str) -> List[str]:
        query = "SELECT role_name FROM user_roles WHERE user_id = :user_id ORDER BY role_name"
        rows = await self.database.fetch_all(query, {"user_id": user_id})
        return [row["role_name"] for row in rows]
