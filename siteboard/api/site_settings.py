"""
사이트 설정 API

- 공개: 사이트/푸터/스플래시 설정 조회
- 관리자: 각 그룹 수정, 홈 그리드 레이아웃 저장
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from siteboard.core.database import get_db
from siteboard.core.security import get_current_admin
from siteboard.models.user import User
from siteboard.schemas.site_settings import (
    SiteSettingsResponse,
    SiteSettingsUpdate,
    FooterSettingsResponse,
    FooterSettingsUpdate,
    SplashSettingsResponse,
    SplashSettingsUpdate,
    HomeGridLayoutUpdate,
)
from siteboard.services import site_settings_service

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter()


def _from_row(schema, settings_row):
    """설정 행 → 응답. 비어 있는 값은 스키마 기본값을 쓴다."""
    if settings_row is None:
        return schema()
    data = {
        field: getattr(settings_row, field)
        for field in schema.model_fields
        if getattr(settings_row, field, None) is not None
    }
    return schema(**data)


@router.get("", response_model=SiteSettingsResponse)
async def get_site_settings(db: AsyncSession = Depends(get_db)):
    """공개 사이트 설정"""
    return _from_row(SiteSettingsResponse, await site_settings_service.get_settings(db))


@router.get("/footer", response_model=FooterSettingsResponse)
async def get_footer_settings(db: AsyncSession = Depends(get_db)):
    """푸터 설정"""
    settings_row = await site_settings_service.get_settings(db)
    return site_settings_service.footer_snapshot(settings_row)


@router.get("/splash", response_model=SplashSettingsResponse)
async def get_splash_settings(db: AsyncSession = Depends(get_db)):
    """스플래시 설정"""
    settings_row = await site_settings_service.get_settings(db)
    return _from_row(SplashSettingsResponse, settings_row)


@admin_router.put("", response_model=SiteSettingsResponse)
async def update_site_settings(
    payload: SiteSettingsUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """사이트 설정 수정(관리자)"""
    try:
        settings_row = await site_settings_service.update_site_settings(db, payload.model_dump(exclude_unset=True))
        return _from_row(SiteSettingsResponse, settings_row)
    except Exception as e:
        await db.rollback()
        logger.exception(f"[site_settings] update failed: {e}")
        raise HTTPException(status_code=500, detail="사이트 설정 저장에 실패했습니다.")


@admin_router.put("/footer", response_model=FooterSettingsResponse)
async def update_footer_settings(
    payload: FooterSettingsUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """푸터 설정 수정(관리자)"""
    try:
        settings_row = await site_settings_service.update_footer_settings(db, payload.model_dump(exclude_unset=True))
        return site_settings_service.footer_snapshot(settings_row)
    except Exception as e:
        await db.rollback()
        logger.exception(f"[site_settings] footer update failed: {e}")
        raise HTTPException(status_code=500, detail="푸터 설정 저장에 실패했습니다.")


@admin_router.put("/splash", response_model=SplashSettingsResponse)
async def update_splash_settings(
    payload: SplashSettingsUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """스플래시 설정 수정(관리자)"""
    try:
        settings_row = await site_settings_service.update_site_settings(db, payload.model_dump(exclude_unset=True))
        return _from_row(SplashSettingsResponse, settings_row)
    except Exception as e:
        await db.rollback()
        logger.exception(f"[site_settings] splash update failed: {e}")
        raise HTTPException(status_code=500, detail="스플래시 설정 저장에 실패했습니다.")


@admin_router.put("/home-grid-layout", response_model=SiteSettingsResponse)
async def update_home_grid_layout(
    payload: HomeGridLayoutUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """홈 그리드 레이아웃 저장(관리자)"""
    try:
        settings_row = await site_settings_service.update_home_grid_layout(db, payload.layout)
        return _from_row(SiteSettingsResponse, settings_row)
    except Exception as e:
        await db.rollback()
        logger.exception(f"[site_settings] grid layout update failed: {e}")
        raise HTTPException(status_code=500, detail="홈 레이아웃 저장에 실패했습니다.")
