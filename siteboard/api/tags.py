"""
태그 API
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import uuid
import logging

from siteboard.core.database import get_db
from siteboard.core.security import get_current_admin
from siteboard.models.user import User
from siteboard.schemas.tag import TagCreate, TagUpdate, TagResponse
from siteboard.services import tag_service

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter()


@router.get("", response_model=List[TagResponse])
async def list_tags(
    category_id: Optional[uuid.UUID] = Query(None, description="지정 시 해당 카테고리 태그 포함"),
    db: AsyncSession = Depends(get_db),
):
    """전역 태그 (+ 카테고리 태그)"""
    return await tag_service.list_tags(db, category_id)


@admin_router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    payload: TagCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """태그 생성"""
    try:
        return await tag_service.create_tag(db, payload.name, payload.category_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[tags] create failed: {e}")
        raise HTTPException(status_code=500, detail="태그 생성에 실패했습니다.")


@admin_router.patch("/{tag_id}", response_model=TagResponse)
async def rename_tag(
    tag_id: uuid.UUID,
    payload: TagUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """태그 이름 변경"""
    tag = await tag_service.get_tag(db, tag_id)
    if not tag:
        raise HTTPException(status_code=404, detail="태그를 찾을 수 없습니다.")
    try:
        return await tag_service.rename_tag(db, tag, payload.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[tags] rename failed: {e}")
        raise HTTPException(status_code=500, detail="태그 수정에 실패했습니다.")


@admin_router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """태그 삭제"""
    tag = await tag_service.get_tag(db, tag_id)
    if not tag:
        raise HTTPException(status_code=404, detail="태그를 찾을 수 없습니다.")
    try:
        await tag_service.delete_tag(db, tag)
        return None
    except Exception as e:
        await db.rollback()
        logger.exception(f"[tags] delete failed: {e}")
        raise HTTPException(status_code=500, detail="태그 삭제에 실패했습니다.")
