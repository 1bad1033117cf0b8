"""
게시판 / 커뮤니티 그룹 스키마
"""

from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List, Optional
from datetime import datetime
import uuid


class BoardCreate(BaseModel):
    menu_item_id: uuid.UUID
    name: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=500)
    is_visible: bool = True

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return str(v).strip() if v is not None else v


class BoardUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=500)
    is_visible: Optional[bool] = None


class BoardReorder(BaseModel):
    menu_item_id: uuid.UUID
    ids: List[uuid.UUID] = Field(..., min_length=1)


class BoardHomeSetting(BaseModel):
    id: uuid.UUID
    show_on_home: bool
    home_item_count: Optional[int] = None


class BoardHomeSettingsUpdate(BaseModel):
    items: List[BoardHomeSetting]


class CommunityGroupCreate(BaseModel):
    label: str = Field(..., min_length=1, max_length=50)
    slug: Optional[str] = Field(None, max_length=100)


class BoardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    key: str
    slug: str
    menu_item_id: uuid.UUID
    name: str
    description: Optional[str] = None
    order: int
    is_visible: bool
    show_on_home: bool = False
    home_item_count: int = 5


class TrashedBoardResponse(BoardResponse):
    deleted_at: Optional[datetime] = None


class CommunityGroupResponse(BaseModel):
    menu_item_id: uuid.UUID
    label: str
    href: str
    slug: str
    order: int
    is_visible: bool
    boards: List[BoardResponse] = Field(default_factory=list)
