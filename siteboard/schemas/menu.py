"""
메뉴 관련 Pydantic 스키마
"""

from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List, Literal, Optional
import uuid

from siteboard.schemas.board import BoardResponse


LinkType = Literal["category", "community", "external"]
MenuKey = Literal["main", "footer"]


class MenuItemCreate(BaseModel):
    label: str = Field(..., min_length=1, max_length=50)
    href: str = Field(..., min_length=1, max_length=500)
    order: Optional[int] = None
    is_visible: bool = True
    is_external: Optional[bool] = None
    open_in_new: bool = False
    requires_auth: bool = False
    badge_text: Optional[str] = Field(None, max_length=20)
    thumbnail_url: Optional[str] = Field(None, max_length=500)
    link_type: Optional[LinkType] = None
    linked_category_id: Optional[uuid.UUID] = None

    @field_validator("label", "href", mode="before")
    @classmethod
    def strip_text(cls, v):
        return str(v).strip() if v is not None else v


class MenuItemUpdate(BaseModel):
    label: Optional[str] = Field(None, min_length=1, max_length=50)
    href: Optional[str] = Field(None, min_length=1, max_length=500)
    is_visible: Optional[bool] = None
    is_external: Optional[bool] = None
    open_in_new: Optional[bool] = None
    requires_auth: Optional[bool] = None
    badge_text: Optional[str] = Field(None, max_length=20)
    thumbnail_url: Optional[str] = Field(None, max_length=500)
    link_type: Optional[LinkType] = None
    linked_category_id: Optional[uuid.UUID] = None


class MenuItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    label: str
    href: str
    order: int = 0
    is_visible: bool = True
    is_external: bool = False
    open_in_new: bool = False
    requires_auth: bool = False
    badge_text: Optional[str] = None
    thumbnail_url: Optional[str] = None
    link_type: LinkType = "category"
    linked_category_id: Optional[uuid.UUID] = None
    boards: List[BoardResponse] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def id_to_str(cls, v):
        return str(v)


class MenuResponse(BaseModel):
    id: str
    key: str
    name: str
    items: List[MenuItemResponse]


class ReorderRequest(BaseModel):
    ids: List[uuid.UUID] = Field(..., min_length=1)
