"""
게시글 관련 Pydantic 스키마
"""

from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List, Optional
from datetime import datetime
import uuid

from siteboard.schemas.comment import CommentResponse


ALLOWED_ATTACHMENT_URL_PREFIXES = ("/", "http://", "https://")


class AttachmentIn(BaseModel):
    url: str = Field(..., min_length=1, max_length=500)
    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1, max_length=100)
    size: int = Field(0, ge=0)

    @field_validator("url")
    @classmethod
    def check_url(cls, v):
        if not v.startswith(ALLOWED_ATTACHMENT_URL_PREFIXES) or v.startswith("//"):
            raise ValueError("첨부파일 주소가 올바르지 않습니다.")
        return v


class AttachmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    url: str
    name: str
    type: str
    size: int


class PostCreate(BaseModel):
    """게시글 작성 (content: 에디터 JSON)"""
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=500000)
    board_key: str = Field(..., min_length=1, max_length=200)
    is_pinned: bool = False
    is_secret: bool = False
    attachments: List[AttachmentIn] = Field(default_factory=list, max_length=20)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return str(v).strip() if v is not None else v


class PostUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1, max_length=500000)
    is_pinned: Optional[bool] = None
    is_secret: Optional[bool] = None
    # 주어지면 전체 교체
    attachments: Optional[List[AttachmentIn]] = Field(None, max_length=20)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return str(v).strip() if v is not None else v


class PostAuthor(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str


class PostListItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    # 비밀글은 작성자/관리자 외에는 null
    content: Optional[str] = None
    board_id: uuid.UUID
    author: PostAuthor
    is_pinned: bool
    is_secret: bool
    view_count: int
    like_count: int
    scrap_count: int
    comment_count: int
    attachments: List[AttachmentResponse] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PostListResponse(BaseModel):
    items: List[PostListItem]
    total: int
    page: int
    limit: int
    board_key: str
    board_name: str


class PostDetailResponse(PostListItem):
    board_key: str
    board_name: str
    liked: bool = False
    scrapped: bool = False
    comments: List[CommentResponse] = Field(default_factory=list)


class LikeToggleResponse(BaseModel):
    liked: bool
    like_count: int


class ScrapToggleResponse(BaseModel):
    scrapped: bool
    scrap_count: int
