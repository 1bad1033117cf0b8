"""
홈 화면 구성 스키마
"""

from pydantic import BaseModel, Field
from typing import List

from siteboard.schemas.category import CategoryResponse
from siteboard.schemas.content import ContentListItem
from siteboard.schemas.board import BoardResponse
from siteboard.schemas.post import PostListItem


class HomeCategorySection(BaseModel):
    category: CategoryResponse
    items: List[ContentListItem] = Field(default_factory=list)


class HomeBoardSection(BaseModel):
    board: BoardResponse
    group_slug: str
    items: List[PostListItem] = Field(default_factory=list)


class HomeResponse(BaseModel):
    grid_layout: List[int] = Field(default_factory=list)
    categories: List[HomeCategorySection] = Field(default_factory=list)
    boards: List[HomeBoardSection] = Field(default_factory=list)
