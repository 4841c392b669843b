"""
Council member endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from auth import dependencies as auth_dependencies
from core.storage import BlobStorage, get_storage

from . import schemas, service

router = APIRouter(prefix="/members")


@router.get("", response_model=list[schemas.Member])
async def list_members(
    active_only: bool = Query(default=False, alias="activeOnly"),
    storage: BlobStorage = Depends(get_storage),
) -> list[schemas.Member]:
    return await service.list_members(active_only=active_only, storage=storage)


@router.get("/rankings", response_model=schemas.MemberRankings)
async def member_rankings(storage: BlobStorage = Depends(get_storage)) -> schemas.MemberRankings:
    return await service.member_rankings(storage=storage)


@router.get("/party-rankings", response_model=list[schemas.PartyRanking])
async def party_rankings() -> list[schemas.PartyRanking]:
    return await service.party_rankings()


@router.get("/{member_id}", response_model=schemas.Member | None)
async def get_member(member_id: int, storage: BlobStorage = Depends(get_storage)) -> schemas.Member | None:
    return await service.get_member(member_id, storage=storage)


@router.get("/{member_id}/stats", response_model=schemas.MemberStats)
async def member_stats(member_id: int) -> schemas.MemberStats:
    return await service.member_stats(member_id)


@router.post("", response_model=schemas.Member)
async def create_member(
    payload: schemas.CreateMemberRequest,
    admin: dict = Depends(auth_dependencies.require_admin),
    storage: BlobStorage = Depends(get_storage),
) -> schemas.Member:
    return await service.create_member(payload, admin_user_id=int(admin["user_id"]), storage=storage)


@router.patch("/{member_id}", response_model=schemas.Member)
async def update_member(
    member_id: int,
    payload: schemas.UpdateMemberRequest,
    admin: dict = Depends(auth_dependencies.require_admin),
    storage: BlobStorage = Depends(get_storage),
) -> schemas.Member:
    return await service.update_member(member_id, payload, admin_user_id=int(admin["user_id"]), storage=storage)


@router.delete("/{member_id}")
async def delete_member(
    member_id: int,
    admin: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_member(member_id, admin_user_id=int(admin["user_id"]))
