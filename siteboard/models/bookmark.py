"""
스크랩(북마크) 모델
"""

from sqlalchemy import Column, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
import uuid

from siteboard.core.database import Base, UUID


class PostScrap(Base):
    """게시글 스크랩 모델"""
    __tablename__ = "post_scraps"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(UUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    post_id = Column(UUID(), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # 제약 조건 - 사용자는 게시글당 한 번만 스크랩 가능
    __table_args__ = (
        UniqueConstraint('user_id', 'post_id', name='uq_post_scrap_user_post'),
    )

    user = relationship("User", back_populates="post_scraps")
    post = relationship("Post", back_populates="scraps", lazy="selectin")

    def __repr__(self):
        return f"<PostScrap(user_id={self.user_id}, post_id={self.post_id})>"
