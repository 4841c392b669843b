"""
Demographics endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter(prefix="/demographics")


@router.put("/me", response_model=schemas.Demographics)
async def save_demographics(
    payload: schemas.DemographicsRequest,
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> schemas.Demographics:
    return await service.save(user_id, payload)


@router.get("/me", response_model=schemas.Demographics | None)
async def get_demographics(
    user_id: int | None = Depends(auth_dependencies.get_optional_user_id),
) -> schemas.Demographics | None:
    return await service.get_own(user_id)


@router.get("/stats", response_model=schemas.DemographicsStats)
async def demographics_stats(_: dict = Depends(auth_dependencies.require_admin)) -> schemas.DemographicsStats:
    return await service.statistics()
