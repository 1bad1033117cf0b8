"""
카테고리 서비스
"""

from sqlalchemy import select, func, update
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List, Optional
import uuid

from siteboard.models.category import Category
from siteboard.models.content import Content
from siteboard.models.product import Product
from siteboard.schemas.category import clamp_home_count
from siteboard.services.text_utils import to_slug


VIEW_SETTING_FIELDS = (
    "list_view_enabled", "list_view_count", "list_view_label",
    "card_view_enabled", "card_view_count", "card_view_label",
    "display_order", "show_date",
)

# null 로 지울 수 있는 필드
NULLABLE_FIELDS = ("thumbnail_url", "description")


async def get_category(db: AsyncSession, category_id: uuid.UUID) -> Optional[Category]:
    result = await db.execute(select(Category).where(Category.id == category_id))
    return result.scalar_one_or_none()


async def get_category_by_slug(db: AsyncSession, slug: str) -> Optional[Category]:
    result = await db.execute(select(Category).where(Category.slug == slug))
    return result.scalar_one_or_none()


async def list_categories(db: AsyncSession, include_hidden: bool = False) -> List[Category]:
    stmt = select(Category)
    if not include_hidden:
        stmt = stmt.where(Category.is_visible == True)  # noqa: E712
    stmt = stmt.order_by(Category.order.asc(), Category.name.asc())
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def _next_order(db: AsyncSession) -> int:
    result = await db.execute(select(func.max(Category.order)))
    return int(result.scalar() or 0) + 1


async def create_category(db: AsyncSession, data: Dict[str, Any], commit: bool = True) -> Category:
    slug = data.get("slug") or to_slug(data["name"])
    if not slug:
        raise ValueError("슬러그를 만들 수 없는 이름입니다.")
    if await get_category_by_slug(db, slug):
        raise LookupError("이미 존재하는 카테고리 슬러그입니다.")
    category = Category(
        slug=slug,
        name=data["name"],
        order=data.get("order") if data.get("order") is not None else await _next_order(db),
        is_visible=data.get("is_visible", True),
        requires_auth=data.get("requires_auth", False),
        thumbnail_url=data.get("thumbnail_url") or None,
        description=data.get("description"),
    )
    db.add(category)
    if commit:
        await db.commit()
        await db.refresh(category)
    else:
        await db.flush()
    return category


async def ensure_category(db: AsyncSession, slug: str, name: str) -> Category:
    """슬러그로 찾고 없으면 만든다 (커밋하지 않음)."""
    category = await get_category_by_slug(db, slug)
    if category is not None:
        return category
    return await create_category(db, {"slug": slug, "name": name}, commit=False)


async def update_category(db: AsyncSession, category: Category, values: Dict[str, Any]) -> Category:
    for field, value in values.items():
        if field == "thumbnail_url" and isinstance(value, str):
            value = value.strip() or None
        if value is None and field not in NULLABLE_FIELDS:
            continue
        setattr(category, field, value)
    await db.commit()
    await db.refresh(category)
    return category


async def delete_category(db: AsyncSession, category: Category) -> None:
    """소속 콘텐츠/상품이 있으면 삭제하지 않는다."""
    contents = await db.execute(select(func.count(Content.id)).where(Content.category_id == category.id))
    products = await db.execute(select(func.count(Product.id)).where(Product.category_id == category.id))
    if int(contents.scalar() or 0) or int(products.scalar() or 0):
        raise ValueError("콘텐츠나 상품이 있는 카테고리는 삭제할 수 없습니다.")
    await db.delete(category)
    await db.commit()


async def apply_view_settings(
    db: AsyncSession,
    values: Dict[str, Any],
    category: Optional[Category] = None,
) -> int:
    """목록/카드 보기 설정 저장. category 가 없으면 전체 적용. 적용된 개수를 반환한다."""
    if not values.get("list_view_enabled") and not values.get("card_view_enabled"):
        raise ValueError("목록 보기와 카드 보기를 모두 끌 수는 없습니다.")
    payload = {k: values[k] for k in VIEW_SETTING_FIELDS if k in values}
    if category is None:
        result = await db.execute(update(Category).values(**payload))
        await db.commit()
        return int(result.rowcount or 0)

    for field, value in payload.items():
        setattr(category, field, value)
    await db.commit()
    return 1


async def toggle_tag_filter(db: AsyncSession, category: Category, enabled: Optional[bool] = None) -> Category:
    category.tag_filter_enabled = (not category.tag_filter_enabled) if enabled is None else enabled
    await db.commit()
    await db.refresh(category)
    return category


async def update_home_settings(db: AsyncSession, items: List[Dict[str, Any]]) -> List[Category]:
    """홈 노출 여부/개수 일괄 저장 (개수는 1~10, 기본 3)"""
    ids = [item["id"] for item in items]
    if not ids:
        return []
    result = await db.execute(select(Category).where(Category.id.in_(ids)))
    by_id = {c.id: c for c in result.scalars().all()}
    for item in items:
        category = by_id.get(item["id"])
        if category is None:
            continue
        category.show_on_home = bool(item["show_on_home"])
        category.home_item_count = clamp_home_count(item.get("home_item_count"), 3)
    await db.commit()
    return await list_categories(db, include_hidden=True)
