"""
콘텐츠 서비스

- 공개 목록/검색/상세 (requires_auth 카테고리는 로그인 필요)
- 관리자 생성/수정/휴지통/복원/영구 삭제
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
import uuid

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from siteboard.core.config import settings
from siteboard.models.category import Category
from siteboard.models.content import Content
from siteboard.models.tag import Tag, ContentTag
from siteboard.models.user import User
from siteboard.services import richtext
from siteboard.services.markdown_service import render_markdown
from siteboard.services.tag_service import get_tags_by_ids
from siteboard.services.text_utils import (
    build_content_id_param,
    format_price,
    truncate_text,
)


SEARCH_LIMIT = 30


class AuthRequired(Exception):
    """로그인이 필요한 카테고리"""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def plain_text_of(content: Content) -> str:
    text = richtext.to_plain_text(content.content)
    if text:
        return text
    if content.content_markdown:
        return " ".join(content.content_markdown.split())
    return ""


def render_body(content_json: Optional[str], content_markdown: Optional[str]) -> str:
    """마크다운이 있으면 마크다운, 없으면 에디터 트리를 HTML 로"""
    if content_markdown and content_markdown.strip():
        return render_markdown(content_markdown)
    return richtext.render_html(content_json)


def content_path(content: Content) -> str:
    return f"/contents/{content.category.slug}/{build_content_id_param(content.id, content.title)}"


def content_url(content: Content) -> str:
    return f"{settings.SITE_URL.rstrip('/')}{content_path(content)}"


def serialize_content(content: Content, detail: bool = False) -> Dict[str, Any]:
    data = {
        "id": content.id,
        "id_param": build_content_id_param(content.id, content.title),
        "title": content.title,
        "excerpt": truncate_text(plain_text_of(content)),
        "category": content.category,
        "price": content.price,
        "formatted_price": format_price(content.price),
        "image_url": content.image_url,
        "is_visible": content.is_visible,
        "tags": list(content.tags),
        "created_at": content.created_at,
        "updated_at": content.updated_at,
        "deleted_at": content.deleted_at,
    }
    if detail:
        data.update({
            "content": content.content,
            "content_markdown": content.content_markdown,
            "html_content": content.html_content,
        })
    return data


def _public_filter(stmt, viewer: Optional[User]):
    stmt = stmt.where(Content.is_visible == True, Content.is_deleted == False)  # noqa: E712
    stmt = stmt.join(Category, Category.id == Content.category_id).where(Category.is_visible == True)  # noqa: E712
    if viewer is None:
        stmt = stmt.where(Category.requires_auth == False)  # noqa: E712
    return stmt


async def list_public_contents(
    db: AsyncSession,
    viewer: Optional[User],
    category_slug: Optional[str] = None,
    tag_slug: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
) -> Tuple[List[Content], int]:
    stmt = _public_filter(select(Content), viewer)
    if category_slug:
        result = await db.execute(select(Category).where(Category.slug == category_slug))
        category = result.scalar_one_or_none()
        if category is None:
            return [], 0
        if category.requires_auth and viewer is None:
            raise AuthRequired()
        stmt = stmt.where(Content.category_id == category.id)
    if tag_slug:
        stmt = stmt.where(
            Content.id.in_(
                select(ContentTag.content_id).join(Tag, Tag.id == ContentTag.tag_id).where(Tag.slug == tag_slug)
            )
        )

    total = await db.execute(select(func.count()).select_from(stmt.subquery()))
    stmt = stmt.order_by(Content.created_at.desc()).offset((page - 1) * limit).limit(limit)
    result = await db.execute(stmt)
    return list(result.scalars().unique().all()), int(total.scalar() or 0)


async def latest_contents_for_category(db: AsyncSession, category: Category, limit: int) -> List[Content]:
    stmt = (
        select(Content)
        .where(
            Content.category_id == category.id,
            Content.is_visible == True,  # noqa: E712
            Content.is_deleted == False,  # noqa: E712
        )
        .order_by(Content.created_at.desc())
        .limit(limit)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def search_contents(db: AsyncSession, query: str, viewer: Optional[User]) -> List[Content]:
    """제목/마크다운 대소문자 무시 검색 (공개, 최대 30건)"""
    q = (query or "").strip()
    if not q:
        return []
    escaped = q.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{escaped}%"
    stmt = _public_filter(select(Content), viewer).where(
        or_(
            func.lower(Content.title).like(pattern, escape="\\"),
            func.lower(func.coalesce(Content.content_markdown, "")).like(pattern, escape="\\"),
        )
    )
    stmt = stmt.order_by(Content.created_at.desc()).limit(SEARCH_LIMIT)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_content(db: AsyncSession, content_id: uuid.UUID) -> Optional[Content]:
    result = await db.execute(select(Content).where(Content.id == content_id))
    return result.scalar_one_or_none()


async def get_public_content(db: AsyncSession, content_id: uuid.UUID, viewer: Optional[User]) -> Optional[Content]:
    """공개 상세. 비공개/휴지통이면 None, 로그인 필요 카테고리는 AuthRequired."""
    content = await get_content(db, content_id)
    if content is None or content.is_deleted:
        return None
    is_admin = bool(viewer and viewer.is_admin)
    if not content.is_visible and not is_admin:
        return None
    if not content.category.is_visible and not is_admin:
        return None
    if content.category.requires_auth and viewer is None:
        raise AuthRequired()
    return content


async def list_admin_contents(db: AsyncSession, category_id: Optional[uuid.UUID] = None) -> List[Content]:
    stmt = select(Content).where(Content.is_deleted == False)  # noqa: E712
    if category_id is not None:
        stmt = stmt.where(Content.category_id == category_id)
    result = await db.execute(stmt.order_by(Content.created_at.desc()))
    return list(result.scalars().all())


async def _ensure_category(db: AsyncSession, category_id: uuid.UUID) -> Category:
    result = await db.execute(select(Category).where(Category.id == category_id))
    category = result.scalar_one_or_none()
    if category is None:
        raise ValueError("카테고리를 찾을 수 없습니다.")
    return category


def _ensure_body(content_json: Optional[str], content_markdown: Optional[str]) -> None:
    if richtext.has_content(content_json):
        return
    if content_markdown and content_markdown.strip():
        return
    raise ValueError("본문을 입력해주세요.")


async def create_content(db: AsyncSession, data: Dict[str, Any]) -> Content:
    _ensure_body(data.get("content"), data.get("content_markdown"))
    await _ensure_category(db, data["category_id"])
    content = Content(
        title=data["title"].strip(),
        content=data.get("content") or "",
        content_markdown=data.get("content_markdown") or None,
        html_content=render_body(data.get("content"), data.get("content_markdown")),
        category_id=data["category_id"],
        price=(data.get("price") or "").strip() or None,
        image_url=(data.get("image_url") or "").strip() or None,
        is_visible=data.get("is_visible", True),
    )
    content.tags = await get_tags_by_ids(db, data.get("tag_ids") or [])
    db.add(content)
    await db.commit()
    await db.refresh(content)
    return content


async def update_content(db: AsyncSession, content: Content, values: Dict[str, Any]) -> Content:
    new_json = values.get("content", content.content)
    new_markdown = values.get("content_markdown", content.content_markdown)
    if "content" in values or "content_markdown" in values:
        _ensure_body(new_json, new_markdown)
    if values.get("category_id") is not None:
        await _ensure_category(db, values["category_id"])

    for field in ("title", "category_id", "is_visible"):
        if values.get(field) is not None:
            setattr(content, field, values[field])
    for field in ("price", "image_url"):
        if field in values:
            setattr(content, field, (values[field] or "").strip() or None)
    if "content" in values or "content_markdown" in values:
        content.content = new_json or ""
        content.content_markdown = new_markdown or None
        content.html_content = render_body(content.content, content.content_markdown)
    if values.get("tag_ids") is not None:
        content.tags = await get_tags_by_ids(db, values["tag_ids"])

    await db.commit()
    await db.refresh(content)
    return content


async def trash_content(db: AsyncSession, content: Content) -> Content:
    """휴지통으로 이동 (숨김 처리)"""
    content.is_deleted = True
    content.deleted_at = _utcnow()
    content.is_visible = False
    await db.commit()
    await db.refresh(content)
    return content


async def list_trashed_contents(db: AsyncSession) -> List[Content]:
    result = await db.execute(
        select(Content).where(Content.is_deleted == True).order_by(Content.deleted_at.desc())  # noqa: E712
    )
    return list(result.scalars().all())


async def restore_content(db: AsyncSession, content: Content) -> Content:
    content.is_deleted = False
    content.deleted_at = None
    content.is_visible = True
    await db.commit()
    await db.refresh(content)
    return content


async def delete_content_permanently(db: AsyncSession, content: Content) -> None:
    if not content.is_deleted:
        raise ValueError("휴지통에 있는 콘텐츠만 영구 삭제할 수 있습니다.")
    await db.delete(content)
    await db.commit()


async def backfill_html_content(db: AsyncSession, batch_size: int = 100, dry_run: bool = False) -> Dict[str, int]:
    """html_content 가 비어 있고 마크다운이 있는 콘텐츠를 채운다."""
    scanned = 0
    updated = 0
    last_id: Optional[uuid.UUID] = None
    while True:
        stmt = select(Content).order_by(Content.id).limit(batch_size)
        if last_id is not None:
            stmt = stmt.where(Content.id > last_id)
        result = await db.execute(stmt)
        batch = list(result.scalars().all())
        if not batch:
            break
        for content in batch:
            scanned += 1
            if (content.html_content or "").strip():
                continue
            if not (content.content_markdown or "").strip():
                continue
            updated += 1
            if not dry_run:
                content.html_content = render_markdown(content.content_markdown)
        if not dry_run:
            await db.commit()
        last_id = batch[-1].id
    return {"scanned": scanned, "updated": updated}
