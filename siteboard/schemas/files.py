"""
업로드 / 고아 파일 스키마
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class UploadResponse(BaseModel):
    url: str


class RemoteImageRequest(BaseModel):
    image_url: str = Field(..., min_length=1, max_length=2000)
    scope: Optional[str] = None


class OrphanFileEntry(BaseModel):
    path: str
    name: str
    size: int
    created_at: datetime
    age_in_hours: int


class OrphanStats(BaseModel):
    total_files: int
    total_size: int
    referenced_files: int
    referenced_size: int
    orphan_files: int
    orphan_size: int


class OrphanScanResponse(BaseModel):
    stats: OrphanStats
    orphan_files: List[OrphanFileEntry]


class OrphanDeleteRequest(BaseModel):
    files: List[str] = Field(default_factory=list)


class OrphanDeleteResponse(BaseModel):
    deleted_count: int
    skipped_count: int
    errors: List[str] = Field(default_factory=list)
