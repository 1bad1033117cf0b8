"""
메뉴 API

- 공개: 메뉴 조회 (항목이 없으면 기본 메인 메뉴)
- 관리자: 항목 생성/수정/삭제/정렬
"""

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
import uuid
import logging

from siteboard.core.database import get_db
from siteboard.core.security import get_current_admin
from siteboard.models.user import User
from siteboard.schemas.menu import (
    MenuItemCreate,
    MenuItemUpdate,
    MenuItemResponse,
    MenuResponse,
    ReorderRequest,
)
from siteboard.services import menu_service

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter()

MENU_KEY_PATTERN = "^(main|footer)$"


@router.get("/{key}", response_model=MenuResponse)
async def get_menu(
    key: str = Path(..., pattern=MENU_KEY_PATTERN),
    db: AsyncSession = Depends(get_db),
):
    """공개 메뉴 (보이는 항목만)"""
    return await menu_service.get_menu(db, key)


@admin_router.get("/{key}", response_model=MenuResponse)
async def get_menu_admin(
    key: str = Path(..., pattern=MENU_KEY_PATTERN),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """관리자 메뉴 (숨김 포함)"""
    return await menu_service.get_menu(db, key, include_hidden=True)


@admin_router.post("/{key}/items", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
async def create_menu_item(
    payload: MenuItemCreate,
    key: str = Path(..., pattern=MENU_KEY_PATTERN),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """메뉴 항목 생성"""
    try:
        item = await menu_service.create_menu_item(db, key, payload.model_dump())
        return menu_service.serialize_item(item, include_hidden_boards=True)
    except Exception as e:
        await db.rollback()
        logger.exception(f"[menus] create item failed: {e}")
        raise HTTPException(status_code=500, detail="메뉴 항목 생성에 실패했습니다.")


@admin_router.patch("/items/{item_id}", response_model=MenuItemResponse)
async def update_menu_item(
    item_id: uuid.UUID,
    payload: MenuItemUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """메뉴 항목 수정"""
    item = await menu_service.get_menu_item(db, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="메뉴 항목을 찾을 수 없습니다.")
    try:
        item = await menu_service.update_menu_item(db, item, payload.model_dump(exclude_unset=True))
        return menu_service.serialize_item(item, include_hidden_boards=True)
    except Exception as e:
        await db.rollback()
        logger.exception(f"[menus] update item failed: {e}")
        raise HTTPException(status_code=500, detail="메뉴 항목 수정에 실패했습니다.")


@admin_router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_menu_item(
    item_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """메뉴 항목 삭제"""
    item = await menu_service.get_menu_item(db, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="메뉴 항목을 찾을 수 없습니다.")
    try:
        await menu_service.delete_menu_item(db, item)
        return None
    except Exception as e:
        await db.rollback()
        logger.exception(f"[menus] delete item failed: {e}")
        raise HTTPException(status_code=500, detail="메뉴 항목 삭제에 실패했습니다.")


@admin_router.put("/{key}/reorder", response_model=MenuResponse)
async def reorder_menu_items(
    payload: ReorderRequest,
    key: str = Path(..., pattern=MENU_KEY_PATTERN),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """메뉴 항목 정렬 (order = 인덱스+1)"""
    try:
        return await menu_service.reorder_menu_items(db, key, payload.ids)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[menus] reorder failed: {e}")
        raise HTTPException(status_code=500, detail="메뉴 정렬에 실패했습니다.")
