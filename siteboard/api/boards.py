"""
게시판 / 커뮤니티 그룹 API

- 공개: 보이는 그룹과 게시판
- 관리자: 그룹 생성, 게시판 CRUD/정렬/휴지통/홈 노출 설정
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import uuid
import logging

from siteboard.core.database import get_db
from siteboard.core.security import get_current_admin, get_current_user_optional
from siteboard.models.board import Board
from siteboard.models.user import User
from siteboard.schemas.board import (
    BoardCreate,
    BoardUpdate,
    BoardReorder,
    BoardHomeSettingsUpdate,
    BoardResponse,
    TrashedBoardResponse,
    CommunityGroupCreate,
    CommunityGroupResponse,
)
from siteboard.services import board_service
from siteboard.services.post_service import ensure_community_access

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter()


async def _get_board_or_404(db: AsyncSession, board_id: uuid.UUID) -> Board:
    board = await board_service.get_board(db, board_id)
    if not board:
        raise HTTPException(status_code=404, detail="게시판을 찾을 수 없습니다.")
    return board


@router.get("", response_model=List[CommunityGroupResponse])
async def list_boards(
    db: AsyncSession = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    """공개 커뮤니티 그룹/게시판"""
    try:
        await ensure_community_access(db, current_user)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    return await board_service.list_community_groups(db)


@admin_router.get("", response_model=List[CommunityGroupResponse])
async def list_boards_admin(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """전체 그룹/게시판 (숨김 포함). 그룹이 없으면 기본 그룹을 만든다."""
    groups = await board_service.list_community_groups(db, include_hidden_groups=True, include_hidden_boards=True)
    if groups:
        return groups
    try:
        await board_service.ensure_default_community_group(db)
    except Exception as e:
        await db.rollback()
        logger.exception(f"[boards] default group failed: {e}")
        raise HTTPException(status_code=500, detail="기본 커뮤니티 생성에 실패했습니다.")
    return await board_service.list_community_groups(db, include_hidden_groups=True, include_hidden_boards=True)


@admin_router.post("/groups", response_model=CommunityGroupResponse, status_code=status.HTTP_201_CREATED)
async def create_group(
    payload: CommunityGroupCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """커뮤니티 그룹 생성 (메인 메뉴 항목 + 기본 게시판)"""
    try:
        item = await board_service.create_community_group(db, payload.label, payload.slug)
        return board_service.serialize_group(item, include_hidden_boards=True)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[boards] create group failed: {e}")
        raise HTTPException(status_code=500, detail="커뮤니티 그룹 생성에 실패했습니다.")


@admin_router.post("", response_model=BoardResponse, status_code=status.HTTP_201_CREATED)
async def create_board(
    payload: BoardCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """게시판 생성"""
    item = await board_service.get_group_item(db, payload.menu_item_id)
    if not item:
        raise HTTPException(status_code=404, detail="커뮤니티 그룹을 찾을 수 없습니다.")
    try:
        return await board_service.create_board(db, item, payload.name, payload.description, payload.is_visible)
    except Exception as e:
        await db.rollback()
        logger.exception(f"[boards] create failed: {e}")
        raise HTTPException(status_code=500, detail="게시판 생성에 실패했습니다.")


@admin_router.put("/reorder", response_model=List[BoardResponse])
async def reorder_boards(
    payload: BoardReorder,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """게시판 정렬 (해당 그룹만)"""
    try:
        return await board_service.reorder_boards(db, payload.menu_item_id, payload.ids)
    except Exception as e:
        await db.rollback()
        logger.exception(f"[boards] reorder failed: {e}")
        raise HTTPException(status_code=500, detail="게시판 정렬에 실패했습니다.")


@admin_router.put("/home-settings", response_model=List[BoardResponse])
async def update_home_settings(
    payload: BoardHomeSettingsUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """홈 노출 설정 일괄 저장"""
    try:
        return await board_service.update_home_settings(db, [i.model_dump() for i in payload.items])
    except Exception as e:
        await db.rollback()
        logger.exception(f"[boards] home settings failed: {e}")
        raise HTTPException(status_code=500, detail="홈 노출 설정 저장에 실패했습니다.")


@admin_router.get("/trash", response_model=List[TrashedBoardResponse])
async def list_trash(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """휴지통 게시판"""
    return await board_service.list_trashed_boards(db)


@admin_router.patch("/{board_id}", response_model=BoardResponse)
async def update_board(
    board_id: uuid.UUID,
    payload: BoardUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """게시판 수정"""
    board = await _get_board_or_404(db, board_id)
    try:
        return await board_service.update_board(db, board, payload.model_dump(exclude_unset=True))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[boards] update failed: {e}")
        raise HTTPException(status_code=500, detail="게시판 수정에 실패했습니다.")


@admin_router.delete("/{board_id}", response_model=TrashedBoardResponse)
async def trash_board(
    board_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """게시판을 휴지통으로"""
    board = await _get_board_or_404(db, board_id)
    try:
        return await board_service.trash_board(db, board)
    except Exception as e:
        await db.rollback()
        logger.exception(f"[boards] trash failed: {e}")
        raise HTTPException(status_code=500, detail="게시판 삭제에 실패했습니다.")


@admin_router.post("/{board_id}/restore", response_model=BoardResponse)
async def restore_board(
    board_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """휴지통에서 복원"""
    board = await _get_board_or_404(db, board_id)
    try:
        return await board_service.restore_board(db, board)
    except Exception as e:
        await db.rollback()
        logger.exception(f"[boards] restore failed: {e}")
        raise HTTPException(status_code=500, detail="게시판 복원에 실패했습니다.")


@admin_router.delete("/{board_id}/permanent", status_code=status.HTTP_204_NO_CONTENT)
async def delete_board_permanently(
    board_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """영구 삭제 (휴지통에 있는 것만)"""
    board = await _get_board_or_404(db, board_id)
    try:
        await board_service.delete_board_permanently(db, board)
        return None
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[boards] permanent delete failed: {e}")
        raise HTTPException(status_code=500, detail="게시판 영구 삭제에 실패했습니다.")
