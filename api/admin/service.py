"""
Role lookup, first-admin bootstrap and super-admin user management.

Roles: anonymous callers are `guest`, authenticated callers without an
admin row are `user`, otherwise the stored `admin` / `superAdmin`.
"""

from __future__ import annotations

import logging

import asyncpg
from fastapi import HTTPException, status

from auth import repository as auth_repository
from core.schemas import now_ms

from . import repository, schemas

logger = logging.getLogger(__name__)


async def role_of(user_id: int | None) -> str:
    if user_id is None:
        return "guest"
    admin_row = await auth_repository.get_admin_by_user_id(user_id)
    return admin_row["role"] if admin_row else "user"


async def get_role(user_id: int | None) -> schemas.RoleResponse:
    role = await role_of(user_id)
    return schemas.RoleResponse(
        role=role,
        is_admin=role in ("admin", "superAdmin"),
        is_super_admin=role == "superAdmin",
    )


async def bootstrap_super_admin(user_id: int) -> schemas.BootstrapResponse:
    granted = await repository.bootstrap_super_admin(user_id, granted_at=now_ms())
    if granted:
        logger.info("super_admin_bootstrapped user_id=%s", user_id)
    return schemas.BootstrapResponse(granted=granted, user_id=user_id if granted else None)


async def list_users() -> list[schemas.UserWithRole]:
    rows = await repository.list_users_with_roles()
    return [schemas.UserWithRole.model_validate({**r, "is_admin": r["role"] != "user"}) for r in rows]


async def grant_role(target_user_id: int, role: str, *, granted_by: int) -> dict:
    if await auth_repository.get_user_by_id(target_user_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")

    await repository.upsert_role(user_id=target_user_id, role=role, granted_by=granted_by, granted_at=now_ms())
    logger.info("role_granted user_id=%s role=%s by=%s", target_user_id, role, granted_by)
    return {"ok": True, "user_id": target_user_id, "role": role}


async def revoke_role(target_user_id: int, *, revoked_by: int) -> dict:
    if target_user_id == revoked_by:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot revoke your own role.")

    removed = await repository.delete_role(target_user_id)
    if removed:
        logger.info("role_revoked user_id=%s by=%s", target_user_id, revoked_by)
    return {"ok": True, "user_id": target_user_id, "removed": removed}


async def user_stats() -> schemas.UserStats:
    counts = await repository.user_counts()
    total = counts.get("total_users", 0)
    admins = counts.get("admin_users", 0)
    return schemas.UserStats(
        total_users=total,
        admin_users=admins,
        regular_users=max(total - admins, 0),
        demographics_completed=counts.get("demographics_completed", 0),
    )


async def update_user(target_user_id: int, payload: schemas.UpdateUserRequest, *, updated_by: int) -> schemas.UserResponse:
    fields = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not fields:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update.")

    target = await auth_repository.get_user_by_id(target_user_id)
    if target is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")

    if "name" in fields:
        fields["name"] = fields["name"].strip()
    if "email" in fields:
        fields["email"] = auth_repository.normalize_email(fields["email"])
        if fields["email"] != auth_repository.normalize_email(target["email"]):
            existing = await auth_repository.get_user_by_email(fields["email"])
            if existing is not None and int(existing["id"]) != target_user_id:
                raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email is already registered.")

    try:
        row = await repository.update_user(target_user_id, fields)
    except asyncpg.UniqueViolationError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email is already registered.") from exc
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")

    logger.info("user_updated user_id=%s fields=%s by=%s", target_user_id, sorted(fields), updated_by)
    return schemas.UserResponse.model_validate(row)


async def delete_user(target_user_id: int, *, deleted_by: int) -> dict:
    if target_user_id == deleted_by:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot delete your own account.")

    if not await repository.delete_user(target_user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
    logger.info("user_deleted user_id=%s by=%s", target_user_id, deleted_by)
    return {"ok": True, "user_id": target_user_id}
