"""
상품 관련 Pydantic 스키마
"""

from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime
import uuid

from siteboard.schemas.content import ContentCategoryRef


class ProductCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=500000)
    content_markdown: Optional[str] = Field(None, max_length=500000)
    category_id: uuid.UUID
    price: Optional[str] = Field(None, max_length=100)
    image_url: Optional[str] = Field(None, max_length=500)
    is_visible: bool = True


class ProductUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1, max_length=500000)
    content_markdown: Optional[str] = Field(None, max_length=500000)
    category_id: Optional[uuid.UUID] = None
    price: Optional[str] = Field(None, max_length=100)
    image_url: Optional[str] = Field(None, max_length=500)
    is_visible: Optional[bool] = None


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    content: str
    content_markdown: Optional[str] = None
    html_content: Optional[str] = None
    category: ContentCategoryRef
    price: Optional[str] = None
    formatted_price: str = ""
    image_url: Optional[str] = None
    is_visible: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
