"""
태그 모델 및 콘텐츠-태그 연결 테이블
"""

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, func, UniqueConstraint
from sqlalchemy.orm import relationship
import uuid

from siteboard.core.database import Base, UUID


class Tag(Base):
    """태그 (category_id 가 없으면 전역 태그)"""
    __tablename__ = "tags"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(50), nullable=False)
    slug = Column(String(50), nullable=False, index=True)
    order = Column(Integer, nullable=False, default=0)
    category_id = Column(UUID(), ForeignKey("categories.id", ondelete="CASCADE"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint('category_id', 'slug', name='uq_tag_category_slug'),
    )

    contents = relationship("Content", secondary="content_tags", back_populates="tags", passive_deletes=True)

    def __repr__(self):
        return f"<Tag(id={self.id}, slug={self.slug})>"


class ContentTag(Base):
    __tablename__ = "content_tags"

    content_id = Column(UUID(), ForeignKey("contents.id", ondelete="CASCADE"), primary_key=True)
    tag_id = Column(UUID(), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True)

    __table_args__ = (
        UniqueConstraint('content_id', 'tag_id', name='uq_content_tag'),
    )
