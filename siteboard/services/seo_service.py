"""
SEO 유틸

- robots.txt 본문
- sitemap.xml (정적 페이지 + 공개 카테고리/콘텐츠/게시판)
- IndexNow 제출
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlparse
import logging

import aiohttp
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from siteboard.core.config import settings
from siteboard.models.board import Board
from siteboard.models.category import Category
from siteboard.models.content import Content
from siteboard.models.menu import Menu, MenuItem
from siteboard.services.board_service import group_slug_of
from siteboard.services.site_settings_service import is_community_enabled
from siteboard.services.text_utils import build_content_id_param

logger = logging.getLogger(__name__)


INDEXNOW_MAX_URLS = 10000
INDEXNOW_KEY_PATH = "/indexnow-key.txt"
STATIC_PATHS = ("/", "/community", "/search")
ROBOTS_DISALLOW = ("/admin", "/api", "/profile", "/login", "/register", "/setup")


def base_url() -> str:
    return (settings.SITE_URL or "http://localhost:3000").rstrip("/")


def robots_txt() -> str:
    base = base_url()
    lines = ["User-agent: *", "Allow: /"]
    lines.extend(f"Disallow: {path}" for path in ROBOTS_DISALLOW)
    lines.extend(["", f"Sitemap: {base}/sitemap.xml", ""])
    return "\n".join(lines)


def _xml_escape(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def _fmt_lastmod(dt: Optional[datetime]) -> Optional[str]:
    if not dt:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _url_xml(loc: str, lastmod: Optional[str] = None) -> str:
    loc_esc = _xml_escape(loc)
    if lastmod:
        return f"<url><loc>{loc_esc}</loc><lastmod>{_xml_escape(lastmod)}</lastmod></url>"
    return f"<url><loc>{loc_esc}</loc></url>"


async def collect_sitemap_entries(db: AsyncSession) -> List[Tuple[str, Optional[datetime]]]:
    """(절대 URL, lastmod) 목록"""
    base = base_url()
    entries: List[Tuple[str, Optional[datetime]]] = [(f"{base}{path}", None) for path in STATIC_PATHS]

    result = await db.execute(
        select(Category)
        .where(Category.is_visible == True, Category.requires_auth == False)  # noqa: E712
        .order_by(Category.order.asc())
    )
    public_categories = list(result.scalars().all())
    for category in public_categories:
        entries.append((f"{base}/contents/{category.slug}", None))

    if public_categories:
        result = await db.execute(
            select(Content)
            .where(
                Content.is_visible == True,  # noqa: E712
                Content.is_deleted == False,  # noqa: E712
                Content.category_id.in_([c.id for c in public_categories]),
            )
            .order_by(Content.updated_at.desc())
        )
        for content in result.scalars().all():
            id_param = build_content_id_param(content.id, content.title)
            entries.append((f"{base}/contents/{content.category.slug}/{id_param}", content.updated_at))

    if not await is_community_enabled(db):
        return [entry for entry in entries if entry[0] != f"{base}/community"]

    # 숨김 그룹의 게시판은 공개 목록과 마찬가지로 제외
    result = await db.execute(
        select(Board)
        .join(MenuItem, MenuItem.id == Board.menu_item_id)
        .join(Menu, Menu.id == MenuItem.menu_id)
        .where(
            Menu.key == "main",
            MenuItem.link_type == "community",
            MenuItem.is_visible == True,  # noqa: E712
            Board.is_visible == True,  # noqa: E712
            Board.is_deleted == False,  # noqa: E712
        )
        .order_by(MenuItem.order.asc(), Board.order.asc())
    )
    for board in result.scalars().all():
        entries.append((f"{base}/community/{group_slug_of(board)}/{board.slug}", None))
    return entries


def render_sitemap(entries: List[Tuple[str, Optional[datetime]]]) -> str:
    urls = [_url_xml(loc, _fmt_lastmod(lastmod)) for loc, lastmod in entries]
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">'
        + "".join(urls)
        + "</urlset>"
    )


def build_indexnow_payload(host: str, key: str, urls: List[str]) -> Dict[str, Any]:
    return {
        "host": host,
        "key": key,
        "keyLocation": f"{base_url()}{INDEXNOW_KEY_PATH}",
        "urlList": list(urls)[:INDEXNOW_MAX_URLS],
    }


async def submit_urls(urls: List[str]) -> Dict[str, Any]:
    """IndexNow 제출. 키가 없거나 URL 이 없으면 skipped. 실패해도 예외를 던지지 않는다."""
    key = (settings.INDEXNOW_KEY or "").strip()
    urls = [u for u in urls if u][:INDEXNOW_MAX_URLS]
    if not key or not urls:
        return {"submitted": 0, "status": "skipped", "status_code": None}

    host = urlparse(base_url()).netloc
    payload = build_indexnow_payload(host, key, urls)
    try:
        async with aiohttp.ClientSession() as session:
            async with session.post(
                settings.INDEXNOW_ENDPOINT,
                json=payload,
                headers={"Content-Type": "application/json; charset=utf-8"},
                timeout=aiohttp.ClientTimeout(total=15),
            ) as resp:
                ok = resp.status in (200, 202)
                if not ok:
                    logger.warning(f"[indexnow] HTTP {resp.status} for {len(urls)} urls")
                return {
                    "submitted": len(urls) if ok else 0,
                    "status": "ok" if ok else "failed",
                    "status_code": resp.status,
                }
    except Exception as e:
        logger.warning(f"[indexnow] submit failed: {e}")
        return {"submitted": 0, "status": "failed", "status_code": None}
