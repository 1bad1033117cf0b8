"""
콘텐츠 관련 Pydantic 스키마
"""

from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from datetime import datetime
import uuid

from siteboard.schemas.tag import TagResponse


class ContentCreate(BaseModel):
    """콘텐츠 생성 요청 (content: 에디터 JSON, content_markdown: 마크다운 원본)"""
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field("", max_length=500000)
    content_markdown: Optional[str] = Field(None, max_length=500000)
    category_id: uuid.UUID
    price: Optional[str] = Field(None, max_length=100)
    image_url: Optional[str] = Field(None, max_length=500)
    is_visible: bool = True
    tag_ids: List[uuid.UUID] = Field(default_factory=list)


class ContentUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, max_length=500000)
    content_markdown: Optional[str] = Field(None, max_length=500000)
    category_id: Optional[uuid.UUID] = None
    price: Optional[str] = Field(None, max_length=100)
    image_url: Optional[str] = Field(None, max_length=500)
    is_visible: Optional[bool] = None
    tag_ids: Optional[List[uuid.UUID]] = None


class ContentCategoryRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    slug: str
    name: str


class ContentListItem(BaseModel):
    """목록용 (본문 제외)"""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    id_param: str
    title: str
    excerpt: str = ""
    category: ContentCategoryRef
    price: Optional[str] = None
    formatted_price: str = ""
    image_url: Optional[str] = None
    is_visible: bool
    tags: List[TagResponse] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ContentResponse(ContentListItem):
    """상세 응답"""
    content: str
    content_markdown: Optional[str] = None
    html_content: Optional[str] = None


class TrashedContentResponse(ContentListItem):
    deleted_at: Optional[datetime] = None


class ContentListResponse(BaseModel):
    items: List[ContentListItem]
    total: int
    page: int
    limit: int
