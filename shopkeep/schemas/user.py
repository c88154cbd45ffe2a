"""
Schemas for users. Password hashes never leave the service layer.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from shopkeep.core.enums import UserRole
from .base import BaseSchema, id_field


class UserInsert(BaseSchema):
    username: str = Field(min_length=3, max_length=64, pattern=r'^[A-Za-z0-9_.-]+$')
    password: str = Field(min_length=8, max_length=128)
    role: UserRole = UserRole.USER


class UserUpdate(BaseSchema):
    password: Optional[str] = Field(default=None, min_length=8, max_length=128)
    role: Optional[UserRole] = None


class UserReadOnly(BaseSchema):
    user_id: int = id_field("userId", "user_id")
    username: str
    role: UserRole
    created_at: datetime
    updated_at: datetime
