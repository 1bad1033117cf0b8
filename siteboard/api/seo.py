"""
SEO

- robots.txt: 공개 페이지 허용, 관리자/개인 영역 차단
- sitemap.xml: 공개 카테고리/콘텐츠/게시판
- IndexNow: 키 파일, 관리자 수동 제출
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from siteboard.core.config import settings
from siteboard.core.database import get_db
from siteboard.core.security import get_current_admin
from siteboard.models.user import User
from siteboard.schemas.seo import IndexNowRequest, IndexNowResult
from siteboard.services import seo_service


router = APIRouter(tags=["🔎 SEO"])
admin_router = APIRouter(tags=["🔎 SEO"])


@router.get("/robots.txt")
async def robots_txt():
    return Response(content=seo_service.robots_txt(), media_type="text/plain; charset=utf-8")


@router.get("/sitemap.xml")
async def sitemap_xml(db: AsyncSession = Depends(get_db)):
    entries = await seo_service.collect_sitemap_entries(db)
    return Response(content=seo_service.render_sitemap(entries), media_type="application/xml; charset=utf-8")


@router.get(seo_service.INDEXNOW_KEY_PATH, response_class=PlainTextResponse)
async def indexnow_key():
    key = (settings.INDEXNOW_KEY or "").strip()
    if not key:
        raise HTTPException(status_code=404, detail="IndexNow 키가 설정되지 않았습니다.")
    return key


@admin_router.post("/indexnow", response_model=IndexNowResult)
async def submit_indexnow(
    payload: IndexNowRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """URL 을 IndexNow 에 제출. 비우면 사이트맵 전체."""
    urls = [u.strip() for u in payload.urls if u and u.strip()]
    if not urls:
        urls = [loc for loc, _ in await seo_service.collect_sitemap_entries(db)]
    return await seo_service.submit_urls(urls)
