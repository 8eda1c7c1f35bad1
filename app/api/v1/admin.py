# app/api/v1/admin.py
"""
Служебные операции администратора.
"""
from __future__ import annotations

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_achievements_service, get_api_key
from app.schemas.achievements import CatalogSyncResponse
from app.services.achievements_service import AchievementsService

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(get_api_key)])
logger = logging.getLogger("api.admin")


@router.post(
    "/achievements/sync",
    response_model=CatalogSyncResponse,
    summary="Добавить в БД достижения каталога, которых там нет",
)
async def sync_achievements(
    admin_user_id: Optional[uuid.UUID] = Query(None, description="ID администратора (для журнала)"),
    service: AchievementsService = Depends(get_achievements_service),
) -> CatalogSyncResponse:
    inserted = await service.sync_catalog(admin_user_id)
    if inserted:
        logger.info("catalog sync by admin_user_id=%s inserted %d rows", admin_user_id, len(inserted))
    return CatalogSyncResponse(inserted=inserted)
