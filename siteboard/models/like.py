"""
좋아요 모델
"""

from sqlalchemy import Column, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
import uuid

from siteboard.core.database import Base, UUID


class PostLike(Base):
    """게시글 좋아요 모델"""
    __tablename__ = "post_likes"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(UUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    post_id = Column(UUID(), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # 제약 조건 - 사용자는 게시글당 한 번만 좋아요 가능
    __table_args__ = (
        UniqueConstraint('user_id', 'post_id', name='uq_post_like_user_post'),
    )

    # 관계 설정
    user = relationship("User", back_populates="post_likes")
    post = relationship("Post", back_populates="likes")

    def __repr__(self):
        return f"<PostLike(user_id={self.user_id}, post_id={self.post_id})>"
