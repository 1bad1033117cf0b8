"""
댓글 API (수정/삭제)
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
import uuid
import logging

from siteboard.core.database import get_db
from siteboard.core.security import get_current_user
from siteboard.models.user import User
from siteboard.schemas.comment import CommentUpdate, CommentResponse
from siteboard.services import comment_service, post_service

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_comment_or_404(db: AsyncSession, comment_id: uuid.UUID, user: User):
    try:
        await post_service.ensure_community_access(db, user)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    comment = await comment_service.get_comment_by_id(db, comment_id)
    if not comment:
        raise HTTPException(status_code=404, detail="댓글을 찾을 수 없습니다.")
    return comment


@router.patch("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: uuid.UUID,
    payload: CommentUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """댓글 수정 (작성자/관리자)"""
    comment = await _get_comment_or_404(db, comment_id, current_user)
    try:
        return await comment_service.update_comment(db, comment, current_user, payload.content)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[comments] update failed: {e}")
        raise HTTPException(status_code=500, detail="댓글 수정에 실패했습니다.")


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """댓글 삭제 (작성자/관리자)"""
    comment = await _get_comment_or_404(db, comment_id, current_user)
    try:
        await comment_service.delete_comment(db, comment, current_user)
        return None
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[comments] delete failed: {e}")
        raise HTTPException(status_code=500, detail="댓글 삭제에 실패했습니다.")
