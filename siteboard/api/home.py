"""
홈 화면 API
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from siteboard.core.database import get_db
from siteboard.core.security import get_current_user_optional
from siteboard.models.user import User
from siteboard.schemas.home import HomeResponse
from siteboard.services.home_service import build_home

router = APIRouter()


@router.get("/home", response_model=HomeResponse)
async def get_home(
    db: AsyncSession = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    """홈 그리드 + 카테고리별 최신 콘텐츠 + 게시판별 최신 글"""
    return await build_home(db, current_user)
