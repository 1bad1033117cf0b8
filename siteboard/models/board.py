"""
게시판 모델

커뮤니티 그룹(메인 메뉴의 community 항목) 아래에 속한다.
key 는 "{그룹 슬러그}__{게시판 슬러그}" 형식이다.
"""

from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
import uuid

from siteboard.core.database import Base, UUID


class Board(Base):
    """게시판 모델"""
    __tablename__ = "boards"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4, index=True)
    menu_item_id = Column(UUID(), ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False, index=True)
    key = Column(String(200), nullable=False, unique=True, index=True)
    slug = Column(String(100), nullable=False)
    name = Column(String(50), nullable=False)
    description = Column(Text)
    order = Column(Integer, nullable=False, default=0)
    is_visible = Column(Boolean, nullable=False, default=True)
    is_deleted = Column(Boolean, nullable=False, default=False, index=True)
    deleted_at = Column(DateTime(timezone=True))
    show_on_home = Column(Boolean, nullable=False, default=False)
    home_item_count = Column(Integer, nullable=False, default=5)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    menu_item = relationship("MenuItem", back_populates="boards", lazy="selectin")
    posts = relationship("Post", back_populates="board", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<Board(key={self.key})>"
