"""
카테고리 API

- 공개: 목록/슬러그 조회
- 관리자: CRUD, 태그 필터 토글, 보기 설정, 홈 노출 설정
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import uuid
import logging

from siteboard.core.database import get_db
from siteboard.core.security import get_current_admin, get_current_user_optional
from siteboard.models.user import User
from siteboard.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryViewSettings,
    CategoryHomeSettingsUpdate,
    CategoryResponse,
)
from siteboard.services import category_service

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter()


async def _get_category_or_404(db: AsyncSession, category_id: uuid.UUID):
    category = await category_service.get_category(db, category_id)
    if not category:
        raise HTTPException(status_code=404, detail="카테고리를 찾을 수 없습니다.")
    return category


@router.get("", response_model=List[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    """공개 카테고리 목록"""
    return await category_service.list_categories(db)


@router.get("/{slug}", response_model=CategoryResponse)
async def get_category_by_slug(
    slug: str,
    db: AsyncSession = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    """슬러그로 카테고리 조회 (숨김은 관리자만)"""
    category = await category_service.get_category_by_slug(db, slug)
    if not category or (not category.is_visible and not (current_user and current_user.is_admin)):
        raise HTTPException(status_code=404, detail="카테고리를 찾을 수 없습니다.")
    return category


@admin_router.get("", response_model=List[CategoryResponse])
async def list_categories_admin(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """전체 카테고리 (숨김 포함)"""
    return await category_service.list_categories(db, include_hidden=True)


@admin_router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: CategoryCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """카테고리 생성"""
    try:
        return await category_service.create_category(db, payload.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[categories] create failed: {e}")
        raise HTTPException(status_code=500, detail="카테고리 생성에 실패했습니다.")


# 경로 충돌 방지: /view-settings, /home-settings 를 /{category_id} 보다 먼저 등록
@admin_router.put("/view-settings")
async def update_view_settings(
    payload: CategoryViewSettings,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """목록/카드 보기 설정 (단일 또는 전체 적용)"""
    category = None
    if not payload.apply_to_all:
        if payload.category_id is None:
            raise HTTPException(status_code=400, detail="category_id 또는 apply_to_all 이 필요합니다.")
        category = await _get_category_or_404(db, payload.category_id)
    values = payload.model_dump(exclude={"category_id", "apply_to_all"})
    try:
        updated = await category_service.apply_view_settings(db, values, category)
        return {"updated": updated}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[categories] view settings failed: {e}")
        raise HTTPException(status_code=500, detail="보기 설정 저장에 실패했습니다.")


@admin_router.put("/home-settings", response_model=List[CategoryResponse])
async def update_home_settings(
    payload: CategoryHomeSettingsUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """홈 노출 설정 일괄 저장"""
    try:
        return await category_service.update_home_settings(db, [i.model_dump() for i in payload.items])
    except Exception as e:
        await db.rollback()
        logger.exception(f"[categories] home settings failed: {e}")
        raise HTTPException(status_code=500, detail="홈 노출 설정 저장에 실패했습니다.")


@admin_router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: uuid.UUID,
    payload: CategoryUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """카테고리 수정"""
    category = await _get_category_or_404(db, category_id)
    try:
        return await category_service.update_category(db, category, payload.model_dump(exclude_unset=True))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[categories] update failed: {e}")
        raise HTTPException(status_code=500, detail="카테고리 수정에 실패했습니다.")


@admin_router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """카테고리 삭제 (콘텐츠/상품이 있으면 거부)"""
    category = await _get_category_or_404(db, category_id)
    try:
        await category_service.delete_category(db, category)
        return None
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[categories] delete failed: {e}")
        raise HTTPException(status_code=500, detail="카테고리 삭제에 실패했습니다.")


@admin_router.put("/{category_id}/filter-toggle", response_model=CategoryResponse)
async def toggle_tag_filter(
    category_id: uuid.UUID,
    enabled: Optional[bool] = Query(None, description="지정하지 않으면 현재 값을 뒤집는다"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """태그 필터 사용 여부 토글"""
    category = await _get_category_or_404(db, category_id)
    try:
        return await category_service.toggle_tag_filter(db, category, enabled)
    except Exception as e:
        await db.rollback()
        logger.exception(f"[categories] filter toggle failed: {e}")
        raise HTTPException(status_code=500, detail="태그 필터 설정에 실패했습니다.")
