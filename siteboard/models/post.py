"""
게시글 / 첨부파일 모델
"""

from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
import uuid

from siteboard.core.database import Base, UUID


class Post(Base):
    """게시글 모델"""
    __tablename__ = "posts"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4, index=True)
    board_id = Column(UUID(), ForeignKey("boards.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(UUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    is_pinned = Column(Boolean, nullable=False, default=False, index=True)
    is_secret = Column(Boolean, nullable=False, default=False)

    # 통계
    view_count = Column(Integer, nullable=False, default=0)
    like_count = Column(Integer, nullable=False, default=0)
    scrap_count = Column(Integer, nullable=False, default=0)
    comment_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # 관계 설정
    board = relationship("Board", back_populates="posts", lazy="selectin")
    author = relationship("User", back_populates="posts", lazy="selectin")
    attachments = relationship(
        "PostAttachment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="PostAttachment.created_at",
        lazy="selectin",
    )
    comments = relationship("Comment", back_populates="post", cascade="all, delete-orphan", passive_deletes=True)
    likes = relationship("PostLike", back_populates="post", cascade="all, delete-orphan", passive_deletes=True)
    scraps = relationship("PostScrap", back_populates="post", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<Post(id={self.id}, title={self.title})>"


class PostAttachment(Base):
    """게시글 첨부파일"""
    __tablename__ = "post_attachments"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4, index=True)
    post_id = Column(UUID(), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String(500), nullable=False)
    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=False)
    size = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    post = relationship("Post", back_populates="attachments")

    def __repr__(self):
        return f"<PostAttachment(post_id={self.post_id}, name={self.name})>"
