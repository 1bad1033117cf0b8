"""
상품 모델
"""

from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
import uuid

from siteboard.core.database import Base, UUID


class Product(Base):
    """상품 모델"""
    __tablename__ = "products"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4, index=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    content_markdown = Column(Text)
    html_content = Column(Text)
    category_id = Column(UUID(), ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False, index=True)
    # "150000", "문의", "200~300만원" 등 자유 형식
    price = Column(String(100))
    image_url = Column(String(500))
    is_visible = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    category = relationship("Category", lazy="selectin")

    def __repr__(self):
        return f"<Product(id={self.id}, title={self.title})>"
