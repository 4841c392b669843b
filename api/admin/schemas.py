from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from core.schemas import CamelModel

Role = Literal["guest", "user", "admin", "superAdmin"]
GrantableRole = Literal["admin", "superAdmin"]


class RoleResponse(CamelModel):
    role: Role
    is_admin: bool
    is_super_admin: bool


class BootstrapResponse(CamelModel):
    granted: bool
    user_id: int | None = None


class UserWithRole(CamelModel):
    id: int
    name: str | None = None
    email: str
    is_active: bool
    created_at: datetime
    role: Literal["user", "admin", "superAdmin"]
    is_admin: bool
    granted_at: int | None = None
    has_demographics: bool


class GrantRoleRequest(CamelModel):
    role: GrantableRole


class UserStats(CamelModel):
    total_users: int
    admin_users: int
    regular_users: int
    demographics_completed: int


class UpdateUserRequest(CamelModel):
    name: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")


class UserResponse(CamelModel):
    id: int
    name: str | None = None
    email: str
    is_active: bool
    created_at: datetime
