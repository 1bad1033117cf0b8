"""
게시글 서비스 (목록/작성/상세/수정/삭제, 좋아요/스크랩 토글)
"""

from sqlalchemy import select, update, func, desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List, Optional, Tuple
import logging
import uuid

from siteboard.models.board import Board
from siteboard.models.bookmark import PostScrap
from siteboard.models.comment import Comment
from siteboard.models.like import PostLike
from siteboard.models.post import Post, PostAttachment
from siteboard.models.user import User
from siteboard.services import board_service
from siteboard.services.site_settings_service import is_community_enabled

logger = logging.getLogger(__name__)


COMMUNITY_DISABLED_MESSAGE = "커뮤니티 기능이 비활성화되어 있습니다."


def _is_admin(viewer: Optional[User]) -> bool:
    return bool(viewer and viewer.is_admin)


async def ensure_community_access(db: AsyncSession, viewer: Optional[User]) -> None:
    """커뮤니티가 꺼져 있으면 관리자 외 접근 불가"""
    if _is_admin(viewer):
        return
    if not await is_community_enabled(db):
        raise PermissionError(COMMUNITY_DISABLED_MESSAGE)


def can_manage(post_or_comment, viewer: Optional[User]) -> bool:
    """작성자 또는 관리자"""
    if viewer is None:
        return False
    return viewer.is_admin or post_or_comment.author_id == viewer.id


def can_read_secret(post: Post, viewer: Optional[User]) -> bool:
    return (not post.is_secret) or can_manage(post, viewer)


def serialize_post(post: Post, viewer: Optional[User]) -> Dict[str, Any]:
    """비밀글 본문은 작성자/관리자 외에는 null"""
    return {
        "id": post.id,
        "title": post.title,
        "content": post.content if can_read_secret(post, viewer) else None,
        "board_id": post.board_id,
        "author": post.author,
        "is_pinned": post.is_pinned,
        "is_secret": post.is_secret,
        "view_count": post.view_count,
        "like_count": post.like_count,
        "scrap_count": post.scrap_count,
        "comment_count": post.comment_count,
        "attachments": list(post.attachments),
        "created_at": post.created_at,
        "updated_at": post.updated_at,
    }


async def resolve_board_for_read(db: AsyncSession, key: str, viewer: Optional[User]) -> Board:
    board = await board_service.get_board_by_key(db, key)
    if board is None or (not board.is_visible and not _is_admin(viewer)):
        raise LookupError("게시판을 찾을 수 없습니다.")
    return board


async def list_posts(
    db: AsyncSession,
    board: Board,
    page: int = 1,
    limit: int = 20,
) -> Tuple[List[Post], int]:
    """상단 고정 먼저, 최신순"""
    total = await db.execute(select(func.count(Post.id)).where(Post.board_id == board.id))
    stmt = (
        select(Post)
        .where(Post.board_id == board.id)
        .order_by(desc(Post.is_pinned), desc(Post.created_at))
        .offset((page - 1) * limit)
        .limit(limit)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all()), int(total.scalar() or 0)


async def latest_posts_for_board(db: AsyncSession, board: Board, limit: int) -> List[Post]:
    stmt = (
        select(Post)
        .where(Post.board_id == board.id)
        .order_by(desc(Post.created_at))
        .limit(limit)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_post(db: AsyncSession, post_id: uuid.UUID) -> Optional[Post]:
    result = await db.execute(select(Post).where(Post.id == post_id))
    return result.scalar_one_or_none()


def _attachment_rows(attachments: List[Dict[str, Any]]) -> List[PostAttachment]:
    return [
        PostAttachment(url=a["url"], name=a["name"], type=a["type"], size=int(a.get("size") or 0))
        for a in attachments
    ]


async def create_post(db: AsyncSession, author: User, data: Dict[str, Any]) -> Post:
    board = await board_service.get_board_by_key(db, data["board_key"])
    if board is None:
        raise LookupError("게시판을 찾을 수 없습니다.")
    if not board.is_visible and not author.is_admin:
        raise PermissionError("숨김 처리된 게시판에는 글을 쓸 수 없습니다.")

    post = Post(
        board_id=board.id,
        author_id=author.id,
        title=data["title"],
        content=data["content"],
        # 상단 고정은 관리자만
        is_pinned=bool(data.get("is_pinned")) and author.is_admin,
        is_secret=bool(data.get("is_secret")),
    )
    post.attachments = _attachment_rows(data.get("attachments") or [])
    db.add(post)
    await db.commit()
    await db.refresh(post)
    return post


async def update_post(db: AsyncSession, post: Post, editor: User, values: Dict[str, Any]) -> Post:
    if not can_manage(post, editor):
        raise PermissionError("수정 권한이 없습니다.")
    for field in ("title", "content", "is_secret"):
        if values.get(field) is not None:
            setattr(post, field, values[field])
    if values.get("is_pinned") is not None and editor.is_admin:
        post.is_pinned = bool(values["is_pinned"])
    if values.get("attachments") is not None:
        # 전체 교체
        post.attachments = _attachment_rows(values["attachments"])
    await db.commit()
    await db.refresh(post)
    return post


async def delete_post(db: AsyncSession, post: Post, actor: User) -> None:
    if not can_manage(post, actor):
        raise PermissionError("삭제 권한이 없습니다.")
    await db.delete(post)
    await db.commit()


async def increment_view_count(db: AsyncSession, post: Post) -> None:
    await db.execute(
        update(Post).where(Post.id == post.id).values(view_count=Post.view_count + 1)
    )
    await db.commit()
    await db.refresh(post)


async def _exists(db: AsyncSession, model, user_id: uuid.UUID, post_id: uuid.UUID):
    result = await db.execute(select(model).where(model.user_id == user_id, model.post_id == post_id))
    return result.scalar_one_or_none()


async def viewer_flags(db: AsyncSession, post: Post, viewer: Optional[User]) -> Tuple[bool, bool]:
    """(liked, scrapped)"""
    if viewer is None:
        return False, False
    liked = await _exists(db, PostLike, viewer.id, post.id) is not None
    scrapped = await _exists(db, PostScrap, viewer.id, post.id) is not None
    return liked, scrapped


async def list_comments(db: AsyncSession, post_id: uuid.UUID) -> List[Comment]:
    """오래된 순"""
    result = await db.execute(
        select(Comment).where(Comment.post_id == post_id).order_by(Comment.created_at.asc())
    )
    return list(result.scalars().all())


async def _toggle(db: AsyncSession, model, counter, post: Post, user: User) -> Tuple[bool, int]:
    """좋아요/스크랩 공통 토글. 한 트랜잭션 안에서 행과 카운터를 함께 바꾼다."""
    post_id = post.id
    existing = await _exists(db, model, user.id, post_id)
    try:
        if existing is not None:
            await db.delete(existing)
            await db.execute(
                update(Post)
                .where(Post.id == post_id, counter > 0)
                .values({counter: counter - 1})
            )
            active = False
        else:
            db.add(model(user_id=user.id, post_id=post_id))
            await db.execute(
                update(Post).where(Post.id == post_id).values({counter: counter + 1})
            )
            active = True
        await db.commit()
    except IntegrityError:
        # 동시 요청으로 이미 생성된 경우
        await db.rollback()
        active = True
    result = await db.execute(select(counter).where(Post.id == post_id))
    return active, int(result.scalar() or 0)


async def toggle_like(db: AsyncSession, post: Post, user: User) -> Tuple[bool, int]:
    return await _toggle(db, PostLike, Post.like_count, post, user)


async def toggle_scrap(db: AsyncSession, post: Post, user: User) -> Tuple[bool, int]:
    return await _toggle(db, PostScrap, Post.scrap_count, post, user)


async def list_scrapped_posts(db: AsyncSession, user: User) -> List[Post]:
    result = await db.execute(
        select(PostScrap).where(PostScrap.user_id == user.id).order_by(desc(PostScrap.created_at))
    )
    return [scrap.post for scrap in result.scalars().all()]
