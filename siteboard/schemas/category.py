"""
카테고리 / 홈 노출 설정 스키마
"""

from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List, Literal, Optional
from datetime import datetime
import uuid

from siteboard.services.text_utils import to_slug


DisplayOrder = Literal["list", "card"]

HOME_ITEM_MIN = 1
HOME_ITEM_MAX = 10


def clamp_home_count(value: Optional[int], default: int) -> int:
    if value is None:
        return default
    return max(HOME_ITEM_MIN, min(HOME_ITEM_MAX, int(value)))


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    slug: Optional[str] = Field(None, max_length=100)
    order: Optional[int] = None
    is_visible: bool = True
    requires_auth: bool = False
    thumbnail_url: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = Field(None, max_length=2000)

    @field_validator("slug", mode="before")
    @classmethod
    def normalize_slug(cls, v):
        if v is None or not str(v).strip():
            return None
        return to_slug(v) or None


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    order: Optional[int] = None
    is_visible: Optional[bool] = None
    requires_auth: Optional[bool] = None
    thumbnail_url: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = Field(None, max_length=2000)


class CategoryViewSettings(BaseModel):
    """목록/카드 보기 설정. apply_to_all 이면 모든 카테고리에 적용"""
    category_id: Optional[uuid.UUID] = None
    apply_to_all: bool = False
    list_view_enabled: bool = True
    list_view_count: int = Field(10, ge=1, le=100)
    list_view_label: Optional[str] = Field(None, max_length=50)
    card_view_enabled: bool = True
    card_view_count: int = Field(6, ge=1, le=100)
    card_view_label: Optional[str] = Field(None, max_length=50)
    display_order: DisplayOrder = "card"
    show_date: bool = True


class CategoryHomeSetting(BaseModel):
    id: uuid.UUID
    show_on_home: bool
    home_item_count: Optional[int] = None


class CategoryHomeSettingsUpdate(BaseModel):
    items: List[CategoryHomeSetting]


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    slug: str
    name: str
    order: int
    is_visible: bool
    requires_auth: bool
    thumbnail_url: Optional[str] = None
    description: Optional[str] = None
    list_view_enabled: bool
    list_view_count: int
    list_view_label: Optional[str] = None
    card_view_enabled: bool
    card_view_count: int
    card_view_label: Optional[str] = None
    display_order: str
    show_date: bool
    tag_filter_enabled: bool
    show_on_home: bool
    home_item_count: int
    created_at: Optional[datetime] = None
