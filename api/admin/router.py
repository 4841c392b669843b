"""
Admin endpoints: role lookup, bootstrap and user management.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter(prefix="/admin")


@router.get("/role", response_model=schemas.RoleResponse)
async def get_role(
    user_id: int | None = Depends(auth_dependencies.get_optional_user_id),
) -> schemas.RoleResponse:
    return await service.get_role(user_id)


@router.post("/bootstrap", response_model=schemas.BootstrapResponse)
async def bootstrap_super_admin(
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> schemas.BootstrapResponse:
    return await service.bootstrap_super_admin(user_id)


@router.get("/users", response_model=list[schemas.UserWithRole])
async def list_users(_: dict = Depends(auth_dependencies.require_super_admin)) -> list[schemas.UserWithRole]:
    return await service.list_users()


@router.put("/users/{target_user_id}/role")
async def grant_role(
    target_user_id: int,
    payload: schemas.GrantRoleRequest,
    admin: dict = Depends(auth_dependencies.require_super_admin),
) -> dict:
    return await service.grant_role(target_user_id, payload.role, granted_by=int(admin["user_id"]))


@router.delete("/users/{target_user_id}/role")
async def revoke_role(
    target_user_id: int,
    admin: dict = Depends(auth_dependencies.require_super_admin),
) -> dict:
    return await service.revoke_role(target_user_id, revoked_by=int(admin["user_id"]))


@router.get("/stats", response_model=schemas.UserStats)
async def user_stats(_: dict = Depends(auth_dependencies.require_admin)) -> schemas.UserStats:
    return await service.user_stats()


@router.patch("/users/{target_user_id}", response_model=schemas.UserResponse)
async def update_user(
    target_user_id: int,
    payload: schemas.UpdateUserRequest,
    admin: dict = Depends(auth_dependencies.require_super_admin),
) -> schemas.UserResponse:
    return await service.update_user(target_user_id, payload, updated_by=int(admin["user_id"]))


@router.delete("/users/{target_user_id}")
async def delete_user(
    target_user_id: int,
    admin: dict = Depends(auth_dependencies.require_super_admin),
) -> dict:
    return await service.delete_user(target_user_id, deleted_by=int(admin["user_id"]))
