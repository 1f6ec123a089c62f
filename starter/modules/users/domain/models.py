"""
Request / Response Models
"""
from typing import List

from pydantic import BaseModel, EmailStr


class SignUpRequest(BaseModel):
    username: str
    email: EmailStr
    first_name: str
    last_name: str
    password: str


class SignUpResponse(BaseModel):
    id: str
    email: str
    username: str


class UserResponse(BaseModel):
    id: str
    username: str
    email: str
    first_name: str
    last_name: str
    roles: List[str] = []
    is_verified: bool = False


class ConfirmEmailRequest(BaseModel):
    user_id: str
    verification_token: str
