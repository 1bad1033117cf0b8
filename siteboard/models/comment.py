"""
댓글 모델
"""

from sqlalchemy import Column, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
import uuid

from siteboard.core.database import Base, UUID


class Comment(Base):
    """게시글 댓글 모델"""
    __tablename__ = "comments"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4, index=True)
    post_id = Column(UUID(), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(UUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # 관계 설정
    post = relationship("Post", back_populates="comments")
    author = relationship("User", back_populates="comments", lazy="selectin")

    def __repr__(self):
        return f"<Comment(id={self.id}, post_id={self.post_id}, author_id={self.author_id})>"
