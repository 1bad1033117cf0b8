"""
게시글 API

- 목록/작성/상세/수정/삭제
- 좋아요/스크랩 토글, 내 스크랩
- 게시글 댓글 목록/작성
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import uuid
import logging

from siteboard.core.database import get_db
from siteboard.core.rate_limit import enforce_rate_limit
from siteboard.core.security import get_current_user, get_current_user_optional
from siteboard.models.post import Post
from siteboard.models.user import User
from siteboard.schemas.comment import CommentCreate, CommentResponse
from siteboard.schemas.post import (
    PostCreate,
    PostUpdate,
    PostListItem,
    PostListResponse,
    PostDetailResponse,
    LikeToggleResponse,
    ScrapToggleResponse,
)
from siteboard.services import comment_service, post_service

logger = logging.getLogger(__name__)

router = APIRouter()


async def _guard_community(db: AsyncSession, user: Optional[User]) -> None:
    try:
        await post_service.ensure_community_access(db, user)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))


async def _get_post_or_404(db: AsyncSession, post_id: uuid.UUID, viewer: Optional[User]) -> Post:
    """게시판이 숨김/휴지통이면 관리자 외에는 404"""
    post = await post_service.get_post(db, post_id)
    if not post:
        raise HTTPException(status_code=404, detail="게시글을 찾을 수 없습니다.")
    board = post.board
    hidden = board is None or board.is_deleted or not board.is_visible
    if hidden and not (viewer and viewer.is_admin):
        raise HTTPException(status_code=404, detail="게시글을 찾을 수 없습니다.")
    return post


@router.get("", response_model=PostListResponse)
async def list_posts(
    board: str = Query(..., min_length=1, description="게시판 key"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    """게시판 글 목록 (상단 고정 먼저, 최신순)"""
    await _guard_community(db, current_user)
    try:
        board_row = await post_service.resolve_board_for_read(db, board, current_user)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    posts, total = await post_service.list_posts(db, board_row, page=page, limit=limit)
    return PostListResponse(
        items=[post_service.serialize_post(p, current_user) for p in posts],
        total=total,
        page=page,
        limit=limit,
        board_key=board_row.key,
        board_name=board_row.name,
    )


@router.post("", response_model=PostListItem, status_code=status.HTTP_201_CREATED)
async def create_post(
    payload: PostCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """게시글 작성"""
    await _guard_community(db, current_user)
    await enforce_rate_limit(f"post:{current_user.id}", max_requests=10)
    try:
        post = await post_service.create_post(db, current_user, payload.model_dump())
        return post_service.serialize_post(post, current_user)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[posts] create failed: {e}")
        raise HTTPException(status_code=500, detail="게시글 작성에 실패했습니다.")


@router.get("/me/scraps", response_model=List[PostListItem])
async def list_my_scraps(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """내 스크랩 목록"""
    await _guard_community(db, current_user)
    posts = await post_service.list_scrapped_posts(db, current_user)
    return [post_service.serialize_post(p, current_user) for p in posts]


@router.get("/{post_id}", response_model=PostDetailResponse)
async def get_post(
    post_id: uuid.UUID,
    view: int = Query(0, description="1 이면 조회수 증가"),
    db: AsyncSession = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    """게시글 상세 (비밀글은 작성자/관리자만)"""
    await _guard_community(db, current_user)
    post = await _get_post_or_404(db, post_id, current_user)
    if not post_service.can_read_secret(post, current_user):
        raise HTTPException(status_code=403, detail="비밀글은 작성자와 관리자만 볼 수 있습니다.")

    if view == 1:
        try:
            await post_service.increment_view_count(db, post)
        except Exception as e:
            await db.rollback()
            logger.warning(f"[posts] view count failed: {e}")

    liked, scrapped = await post_service.viewer_flags(db, post, current_user)
    comments = await post_service.list_comments(db, post.id)
    data = post_service.serialize_post(post, current_user)
    data.update({
        "board_key": post.board.key,
        "board_name": post.board.name,
        "liked": liked,
        "scrapped": scrapped,
        "comments": comments,
    })
    return data


@router.put("/{post_id}", response_model=PostListItem)
async def update_post(
    post_id: uuid.UUID,
    payload: PostUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """게시글 수정 (작성자/관리자)"""
    await _guard_community(db, current_user)
    post = await _get_post_or_404(db, post_id, current_user)
    try:
        post = await post_service.update_post(db, post, current_user, payload.model_dump(exclude_unset=True))
        return post_service.serialize_post(post, current_user)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[posts] update failed: {e}")
        raise HTTPException(status_code=500, detail="게시글 수정에 실패했습니다.")


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """게시글 삭제 (작성자/관리자)"""
    await _guard_community(db, current_user)
    post = await _get_post_or_404(db, post_id, current_user)
    try:
        await post_service.delete_post(db, post, current_user)
        return None
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[posts] delete failed: {e}")
        raise HTTPException(status_code=500, detail="게시글 삭제에 실패했습니다.")


@router.post("/{post_id}/like", response_model=LikeToggleResponse)
async def toggle_like(
    post_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """좋아요 토글"""
    await _guard_community(db, current_user)
    post = await _get_post_or_404(db, post_id, current_user)
    try:
        liked, count = await post_service.toggle_like(db, post, current_user)
        return LikeToggleResponse(liked=liked, like_count=count)
    except Exception as e:
        await db.rollback()
        logger.exception(f"[posts] like failed: {e}")
        raise HTTPException(status_code=500, detail="좋아요 처리에 실패했습니다.")


@router.post("/{post_id}/scrap", response_model=ScrapToggleResponse)
async def toggle_scrap(
    post_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """스크랩 토글"""
    await _guard_community(db, current_user)
    post = await _get_post_or_404(db, post_id, current_user)
    try:
        scrapped, count = await post_service.toggle_scrap(db, post, current_user)
        return ScrapToggleResponse(scrapped=scrapped, scrap_count=count)
    except Exception as e:
        await db.rollback()
        logger.exception(f"[posts] scrap failed: {e}")
        raise HTTPException(status_code=500, detail="스크랩 처리에 실패했습니다.")


@router.get("/{post_id}/comments", response_model=List[CommentResponse])
async def list_comments(
    post_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    """댓글 목록 (오래된 순)"""
    await _guard_community(db, current_user)
    post = await _get_post_or_404(db, post_id, current_user)
    if not post_service.can_read_secret(post, current_user):
        raise HTTPException(status_code=403, detail="비밀글은 작성자와 관리자만 볼 수 있습니다.")
    return await post_service.list_comments(db, post.id)


@router.post("/{post_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    post_id: uuid.UUID,
    payload: CommentCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """댓글 작성"""
    await _guard_community(db, current_user)
    post = await _get_post_or_404(db, post_id, current_user)
    if not post_service.can_read_secret(post, current_user):
        raise HTTPException(status_code=403, detail="비밀글은 작성자와 관리자만 볼 수 있습니다.")
    await enforce_rate_limit(f"comment:{current_user.id}", max_requests=20)
    try:
        return await comment_service.create_comment(db, post, current_user, payload.content)
    except Exception as e:
        await db.rollback()
        logger.exception(f"[posts] create comment failed: {e}")
        raise HTTPException(status_code=500, detail="댓글 작성에 실패했습니다.")
