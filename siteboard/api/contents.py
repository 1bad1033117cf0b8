"""
콘텐츠 API

- 공개: 목록(카테고리/태그 필터)/검색/상세
- 관리자: 생성/수정/휴지통/복원/영구 삭제
"""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import uuid
import logging

from siteboard.core.config import settings
from siteboard.core.database import get_db
from siteboard.core.security import get_current_admin, get_current_user_optional
from siteboard.models.content import Content
from siteboard.models.user import User
from siteboard.schemas.content import (
    ContentCreate,
    ContentUpdate,
    ContentListItem,
    ContentListResponse,
    ContentResponse,
    TrashedContentResponse,
)
from siteboard.services import content_service, seo_service
from siteboard.services.content_service import AuthRequired
from siteboard.services.text_utils import extract_content_id

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter()

AUTH_REQUIRED_MESSAGE = "로그인이 필요합니다."


def _schedule_indexnow(background_tasks: BackgroundTasks, content: Content) -> None:
    """공개 콘텐츠 저장 시 IndexNow 제출 (백그라운드)"""
    if not settings.INDEXNOW_KEY or not content.is_visible or content.is_deleted:
        return
    background_tasks.add_task(seo_service.submit_urls, [content_service.content_url(content)])


async def _get_content_or_404(db: AsyncSession, content_id: uuid.UUID) -> Content:
    content = await content_service.get_content(db, content_id)
    if not content:
        raise HTTPException(status_code=404, detail="콘텐츠를 찾을 수 없습니다.")
    return content


@router.get("", response_model=ContentListResponse)
async def list_contents(
    category: Optional[str] = Query(None, description="카테고리 슬러그"),
    tag: Optional[str] = Query(None, description="태그 슬러그"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    """공개 콘텐츠 목록"""
    try:
        items, total = await content_service.list_public_contents(
            db, current_user, category_slug=category, tag_slug=tag, page=page, limit=limit
        )
    except AuthRequired:
        raise HTTPException(status_code=401, detail=AUTH_REQUIRED_MESSAGE)
    return ContentListResponse(
        items=[content_service.serialize_content(c) for c in items],
        total=total,
        page=page,
        limit=limit,
    )


@router.get("/search", response_model=List[ContentListItem])
async def search_contents(
    q: str = Query("", max_length=100),
    db: AsyncSession = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    """제목/본문 검색 (최대 30건)"""
    items = await content_service.search_contents(db, q, current_user)
    return [content_service.serialize_content(c) for c in items]


@router.get("/{id_param}", response_model=ContentResponse)
async def get_content(
    id_param: str,
    db: AsyncSession = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    """콘텐츠 상세 (id 또는 id-slug)"""
    content_id = extract_content_id(id_param)
    if content_id is None:
        raise HTTPException(status_code=404, detail="콘텐츠를 찾을 수 없습니다.")
    try:
        content = await content_service.get_public_content(db, content_id, current_user)
    except AuthRequired:
        raise HTTPException(status_code=401, detail=AUTH_REQUIRED_MESSAGE)
    if not content:
        raise HTTPException(status_code=404, detail="콘텐츠를 찾을 수 없습니다.")
    return content_service.serialize_content(content, detail=True)


@admin_router.get("", response_model=List[ContentListItem])
async def list_contents_admin(
    category_id: Optional[uuid.UUID] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """관리자 콘텐츠 목록 (휴지통 제외, 비공개 포함)"""
    items = await content_service.list_admin_contents(db, category_id)
    return [content_service.serialize_content(c) for c in items]


@admin_router.get("/trash", response_model=List[TrashedContentResponse])
async def list_trash(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """휴지통 목록"""
    items = await content_service.list_trashed_contents(db)
    return [content_service.serialize_content(c) for c in items]


@admin_router.post("", response_model=ContentResponse, status_code=status.HTTP_201_CREATED)
async def create_content(
    payload: ContentCreate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """콘텐츠 생성"""
    try:
        content = await content_service.create_content(db, payload.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[contents] create failed: {e}")
        raise HTTPException(status_code=500, detail="콘텐츠 생성에 실패했습니다.")
    _schedule_indexnow(background_tasks, content)
    return content_service.serialize_content(content, detail=True)


@admin_router.get("/{content_id}", response_model=ContentResponse)
async def get_content_admin(
    content_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """관리자 상세 (편집용)"""
    content = await _get_content_or_404(db, content_id)
    return content_service.serialize_content(content, detail=True)


@admin_router.put("/{content_id}", response_model=ContentResponse)
async def update_content(
    content_id: uuid.UUID,
    payload: ContentUpdate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """콘텐츠 수정 (tag_ids 가 오면 태그 전체 교체)"""
    content = await _get_content_or_404(db, content_id)
    try:
        content = await content_service.update_content(db, content, payload.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[contents] update failed: {e}")
        raise HTTPException(status_code=500, detail="콘텐츠 수정에 실패했습니다.")
    _schedule_indexnow(background_tasks, content)
    return content_service.serialize_content(content, detail=True)


@admin_router.delete("/{content_id}", response_model=TrashedContentResponse)
async def trash_content(
    content_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """휴지통으로 이동"""
    content = await _get_content_or_404(db, content_id)
    try:
        content = await content_service.trash_content(db, content)
        return content_service.serialize_content(content)
    except Exception as e:
        await db.rollback()
        logger.exception(f"[contents] trash failed: {e}")
        raise HTTPException(status_code=500, detail="콘텐츠 삭제에 실패했습니다.")


@admin_router.post("/{content_id}/restore", response_model=ContentResponse)
async def restore_content(
    content_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """휴지통에서 복원"""
    content = await _get_content_or_404(db, content_id)
    try:
        content = await content_service.restore_content(db, content)
        return content_service.serialize_content(content, detail=True)
    except Exception as e:
        await db.rollback()
        logger.exception(f"[contents] restore failed: {e}")
        raise HTTPException(status_code=500, detail="콘텐츠 복원에 실패했습니다.")


@admin_router.delete("/{content_id}/permanent", status_code=status.HTTP_204_NO_CONTENT)
async def delete_content_permanently(
    content_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """영구 삭제 (휴지통에 있는 것만)"""
    content = await _get_content_or_404(db, content_id)
    try:
        await content_service.delete_content_permanently(db, content)
        return None
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[contents] permanent delete failed: {e}")
        raise HTTPException(status_code=500, detail="콘텐츠 영구 삭제에 실패했습니다.")
