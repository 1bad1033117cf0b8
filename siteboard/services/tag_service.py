"""
태그 서비스 (카테고리별/전역 태그)
"""

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import uuid

from siteboard.models.tag import Tag
from siteboard.services.text_utils import to_slug


async def list_tags(db: AsyncSession, category_id: Optional[uuid.UUID] = None) -> List[Tag]:
    """전역 태그 + (지정 시) 해당 카테고리 태그"""
    stmt = select(Tag)
    if category_id is not None:
        stmt = stmt.where(or_(Tag.category_id.is_(None), Tag.category_id == category_id))
    else:
        stmt = stmt.where(Tag.category_id.is_(None))
    stmt = stmt.order_by(Tag.order.asc(), Tag.name.asc())
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_tag(db: AsyncSession, tag_id: uuid.UUID) -> Optional[Tag]:
    result = await db.execute(select(Tag).where(Tag.id == tag_id))
    return result.scalar_one_or_none()


async def _slug_taken(db: AsyncSession, category_id: Optional[uuid.UUID], slug: str, exclude_id: Optional[uuid.UUID] = None) -> bool:
    scope = Tag.category_id.is_(None) if category_id is None else Tag.category_id == category_id
    stmt = select(Tag.id).where(scope, Tag.slug == slug)
    if exclude_id is not None:
        stmt = stmt.where(Tag.id != exclude_id)
    result = await db.execute(stmt)
    return result.first() is not None


async def create_tag(db: AsyncSession, name: str, category_id: Optional[uuid.UUID] = None) -> Tag:
    slug = to_slug(name)
    if not slug:
        raise ValueError("태그 이름으로 슬러그를 만들 수 없습니다.")
    if await _slug_taken(db, category_id, slug):
        raise LookupError("이미 존재하는 태그입니다.")

    scope = Tag.category_id.is_(None) if category_id is None else Tag.category_id == category_id
    result = await db.execute(select(func.max(Tag.order)).where(scope))
    tag = Tag(
        name=name,
        slug=slug,
        category_id=category_id,
        order=int(result.scalar() or 0) + 1,
    )
    db.add(tag)
    await db.commit()
    await db.refresh(tag)
    return tag


async def rename_tag(db: AsyncSession, tag: Tag, name: str) -> Tag:
    """이름 변경 시 슬러그도 다시 만든다."""
    slug = to_slug(name)
    if not slug:
        raise ValueError("태그 이름으로 슬러그를 만들 수 없습니다.")
    if await _slug_taken(db, tag.category_id, slug, exclude_id=tag.id):
        raise LookupError("이미 존재하는 태그입니다.")
    tag.name = name
    tag.slug = slug
    await db.commit()
    await db.refresh(tag)
    return tag


async def delete_tag(db: AsyncSession, tag: Tag) -> None:
    await db.delete(tag)
    await db.commit()


async def get_tags_by_ids(db: AsyncSession, tag_ids: List[uuid.UUID]) -> List[Tag]:
    if not tag_ids:
        return []
    result = await db.execute(select(Tag).where(Tag.id.in_(tag_ids)))
    return list(result.scalars().all())
