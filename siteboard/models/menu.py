"""
메뉴 / 메뉴 항목 모델
"""

from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
import uuid

from siteboard.core.database import Base, UUID


LINK_TYPES = ("category", "community", "external")


class Menu(Base):
    """메뉴 (main / footer)"""
    __tablename__ = "menus"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4, index=True)
    key = Column(String(20), nullable=False, unique=True, index=True)
    name = Column(String(50), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    items = relationship(
        "MenuItem",
        back_populates="menu",
        cascade="all, delete-orphan",
        order_by="MenuItem.order",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<Menu(key={self.key})>"


class MenuItem(Base):
    """메뉴 항목"""
    __tablename__ = "menu_items"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4, index=True)
    menu_id = Column(UUID(), ForeignKey("menus.id", ondelete="CASCADE"), nullable=False, index=True)
    label = Column(String(50), nullable=False)
    href = Column(String(500), nullable=False)
    order = Column(Integer, nullable=False, default=0)
    is_visible = Column(Boolean, nullable=False, default=True)
    is_external = Column(Boolean, nullable=False, default=False)
    open_in_new = Column(Boolean, nullable=False, default=False)
    requires_auth = Column(Boolean, nullable=False, default=False)
    badge_text = Column(String(20))
    thumbnail_url = Column(String(500))
    link_type = Column(String(20), nullable=False, default="category")
    linked_category_id = Column(UUID(), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    menu = relationship("Menu", back_populates="items")
    boards = relationship(
        "Board",
        back_populates="menu_item",
        cascade="all, delete-orphan",
        order_by="Board.order",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<MenuItem(label={self.label}, href={self.href})>"
