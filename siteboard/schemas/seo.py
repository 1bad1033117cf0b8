from pydantic import BaseModel, Field
from typing import List, Optional


class IndexNowRequest(BaseModel):
    """비우면 사이트맵 전체를 제출"""
    urls: List[str] = Field(default_factory=list, max_length=10000)


class IndexNowResult(BaseModel):
    submitted: int
    status: str
    status_code: Optional[int] = None
