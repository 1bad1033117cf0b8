"""
카테고리 모델 (콘텐츠/상품 분류 + 목록/카드/홈 노출 설정)
"""

from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, func
import uuid

from siteboard.core.database import Base, UUID


class Category(Base):
    """카테고리"""
    __tablename__ = "categories"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4, index=True)
    slug = Column(String(100), nullable=False, unique=True, index=True)
    name = Column(String(100), nullable=False)
    order = Column(Integer, nullable=False, default=0)
    is_visible = Column(Boolean, nullable=False, default=True)
    requires_auth = Column(Boolean, nullable=False, default=False)
    thumbnail_url = Column(String(500))
    description = Column(Text)

    # 목록/카드 보기
    list_view_enabled = Column(Boolean, nullable=False, default=True)
    list_view_count = Column(Integer, nullable=False, default=10)
    list_view_label = Column(String(50))
    card_view_enabled = Column(Boolean, nullable=False, default=True)
    card_view_count = Column(Integer, nullable=False, default=6)
    card_view_label = Column(String(50))
    display_order = Column(String(10), nullable=False, default="card")
    show_date = Column(Boolean, nullable=False, default=True)
    tag_filter_enabled = Column(Boolean, nullable=False, default=False)

    # 홈 노출
    show_on_home = Column(Boolean, nullable=False, default=False)
    home_item_count = Column(Integer, nullable=False, default=3)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Category(slug={self.slug})>"
