"""
메뉴 서비스
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
import uuid

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from siteboard.models.menu import Menu, MenuItem, LINK_TYPES
from siteboard.services import board_service, category_service


DEFAULT_MAIN_MENU: List[Dict[str, Any]] = [
    {"label": "블로그", "href": "/contents/blog", "order": 1, "link_type": "category"},
    {"label": "뉴스", "href": "/contents/news", "order": 2, "link_type": "category"},
    {"label": "튜토리얼", "href": "/contents/tutorials", "order": 3, "link_type": "category"},
    {"label": "리소스", "href": "/contents/resources", "order": 4, "link_type": "category"},
    {"label": "쇼케이스", "href": "/contents/showcase", "order": 5, "link_type": "category"},
    {"label": "공지", "href": "/contents/notice", "order": 6, "link_type": "category"},
    {"label": "커뮤니티", "href": "/community/community-1", "order": 7, "link_type": "community"},
]

_CATEGORY_HREF_PREFIXES = ("/contents/", "/products/")

# null 로 지울 수 있는 항목 필드
NULLABLE_ITEM_FIELDS = ("badge_text", "thumbnail_url", "linked_category_id")


def infer_link_type(href: Optional[str], link_type: Optional[str] = None) -> str:
    """명시값이 없으면 href 로 추정: http → external, /community → community, 그 외 category"""
    if link_type in LINK_TYPES:
        return link_type
    href = href or ""
    if href.startswith("http"):
        return "external"
    if href.startswith("/community"):
        return "community"
    return "category"


def extract_category_slug(href: Optional[str]) -> Optional[str]:
    """"/contents/{slug}" 또는 "/products/{slug}" 의 slug"""
    for prefix in _CATEGORY_HREF_PREFIXES:
        if href and href.startswith(prefix):
            slug = href[len(prefix):].strip("/").split("/")[0].strip()
            return slug or None
    return None


def serialize_item(item: MenuItem, include_hidden_boards: bool = False) -> Dict[str, Any]:
    return {
        "id": str(item.id),
        "label": item.label,
        "href": item.href,
        "order": item.order,
        "is_visible": item.is_visible,
        "is_external": item.is_external,
        "open_in_new": item.open_in_new,
        "requires_auth": item.requires_auth,
        "badge_text": item.badge_text,
        "thumbnail_url": item.thumbnail_url,
        "link_type": infer_link_type(item.href, item.link_type),
        "linked_category_id": item.linked_category_id,
        "boards": [
            b for b in item.boards
            if not b.is_deleted and (include_hidden_boards or b.is_visible)
        ],
    }


async def get_menu_row(db: AsyncSession, key: str) -> Optional[Menu]:
    result = await db.execute(select(Menu).where(Menu.key == key))
    return result.scalar_one_or_none()


async def get_menu(db: AsyncSession, key: str, include_hidden: bool = False) -> Dict[str, Any]:
    """메뉴 조회. 항목이 하나도 없으면 기본 메인 메뉴를 돌려준다."""
    menu = await get_menu_row(db, key)
    if menu is None or not menu.items:
        return {
            "id": str(menu.id) if menu else "default",
            "key": key,
            "name": "Footer" if key == "footer" else "Main",
            "items": [
                {**item, "id": f"default-{key}-{index}"}
                for index, item in enumerate(sorted(DEFAULT_MAIN_MENU, key=lambda x: x["order"]))
            ],
        }

    items = [i for i in menu.items if include_hidden or i.is_visible]
    return {
        "id": str(menu.id),
        "key": menu.key,
        "name": menu.name,
        "items": [serialize_item(i, include_hidden) for i in sorted(items, key=lambda x: x.order)],
    }


async def get_menu_item(db: AsyncSession, item_id: uuid.UUID) -> Optional[MenuItem]:
    result = await db.execute(select(MenuItem).where(MenuItem.id == item_id))
    return result.scalar_one_or_none()


async def create_menu_item(db: AsyncSession, key: str, data: Dict[str, Any]) -> MenuItem:
    """메뉴 항목 생성.
    - category: /contents/{slug} 이면 해당 카테고리를 연결(없으면 생성)
    - community: 기본 게시판 생성
    """
    menu = await board_service.get_or_create_menu(db, key)
    link_type = infer_link_type(data.get("href"), data.get("link_type"))

    order = data.get("order")
    if order is None:
        result = await db.execute(select(func.max(MenuItem.order)).where(MenuItem.menu_id == menu.id))
        order = int(result.scalar() or 0) + 1

    linked_category_id = data.get("linked_category_id")
    if link_type == "category" and linked_category_id is None:
        slug = extract_category_slug(data.get("href"))
        if slug:
            category = await category_service.ensure_category(db, slug, data["label"])
            linked_category_id = category.id

    item = MenuItem(
        menu_id=menu.id,
        label=data["label"],
        href=data["href"],
        order=order,
        is_visible=data.get("is_visible", True),
        is_external=link_type == "external" if data.get("is_external") is None else data["is_external"],
        open_in_new=bool(data.get("open_in_new")),
        requires_auth=bool(data.get("requires_auth")),
        badge_text=data.get("badge_text") or None,
        thumbnail_url=data.get("thumbnail_url") or None,
        link_type=link_type,
        linked_category_id=linked_category_id,
    )
    db.add(item)
    await db.flush()
    if link_type == "community":
        await board_service.ensure_default_boards(db, item)
    await db.commit()
    await db.refresh(item)
    return item


async def update_menu_item(db: AsyncSession, item: MenuItem, values: Dict[str, Any]) -> MenuItem:
    for field, value in values.items():
        if field in ("badge_text", "thumbnail_url") and isinstance(value, str):
            value = value.strip() or None
        if value is None and field not in NULLABLE_ITEM_FIELDS:
            continue
        setattr(item, field, value)
    if values.get("href") is not None and values.get("link_type") is None:
        item.link_type = infer_link_type(item.href)
    await db.commit()
    await db.refresh(item)
    return item


async def delete_menu_item(db: AsyncSession, item: MenuItem) -> None:
    await db.delete(item)
    await db.commit()


async def reorder_menu_items(db: AsyncSession, key: str, ids: List[uuid.UUID]) -> Dict[str, Any]:
    menu = await get_menu_row(db, key)
    if menu is None:
        raise LookupError("메뉴를 찾을 수 없습니다.")
    by_id = {i.id: i for i in menu.items}
    position = 0
    for item_id in ids:
        item = by_id.get(item_id)
        if item is None:
            continue
        position += 1
        item.order = position
    await db.commit()
    return await get_menu(db, key, include_hidden=True)
