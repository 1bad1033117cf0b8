"""
댓글 관련 서비스
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from typing import Optional
import uuid

from siteboard.models.comment import Comment
from siteboard.models.post import Post
from siteboard.models.user import User
from siteboard.services.post_service import can_manage


async def get_comment_by_id(db: AsyncSession, comment_id: uuid.UUID) -> Optional[Comment]:
    """댓글 ID로 조회"""
    result = await db.execute(select(Comment).where(Comment.id == comment_id))
    return result.scalar_one_or_none()


async def create_comment(db: AsyncSession, post: Post, author: User, content: str) -> Comment:
    """댓글 생성 (게시글 댓글 수 +1)"""
    comment = Comment(post_id=post.id, author_id=author.id, content=content)
    db.add(comment)
    await db.execute(
        update(Post).where(Post.id == post.id).values(comment_count=Post.comment_count + 1)
    )
    await db.commit()
    await db.refresh(comment)
    return comment


async def update_comment(db: AsyncSession, comment: Comment, editor: User, content: str) -> Comment:
    if not can_manage(comment, editor):
        raise PermissionError("수정 권한이 없습니다.")
    comment.content = content
    await db.commit()
    await db.refresh(comment)
    return comment


async def delete_comment(db: AsyncSession, comment: Comment, actor: User) -> None:
    """댓글 삭제 (게시글 댓글 수 -1, 0 미만 불가)"""
    if not can_manage(comment, actor):
        raise PermissionError("삭제 권한이 없습니다.")
    post_id = comment.post_id
    await db.delete(comment)
    await db.execute(
        update(Post)
        .where(Post.id == post_id, Post.comment_count > 0)
        .values(comment_count=Post.comment_count - 1)
    )
    await db.commit()
