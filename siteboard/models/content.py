"""
콘텐츠 모델

- content: 리치텍스트 에디터(JSON 트리) 원본
- content_markdown / html_content: 마크다운 원본과 렌더링 결과
- 삭제는 휴지통(is_deleted)을 거친다.
"""

from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
import uuid

from siteboard.core.database import Base, UUID


class Content(Base):
    """콘텐츠 모델"""
    __tablename__ = "contents"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4, index=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False, default="")
    content_markdown = Column(Text)
    html_content = Column(Text)
    category_id = Column(UUID(), ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False, index=True)
    price = Column(String(100))
    image_url = Column(String(500))
    is_visible = Column(Boolean, nullable=False, default=True, index=True)
    is_deleted = Column(Boolean, nullable=False, default=False, index=True)
    deleted_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    category = relationship("Category", lazy="selectin")
    tags = relationship("Tag", secondary="content_tags", back_populates="contents", lazy="selectin", order_by="Tag.order")

    def __repr__(self):
        return f"<Content(id={self.id}, title={self.title})>"
