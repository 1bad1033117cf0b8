"""
게시판 / 커뮤니티 그룹 서비스

커뮤니티 그룹 = 메인 메뉴의 link_type="community" 항목.
그룹 슬러그는 href 의 /community/{slug} 에서 얻는다.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging
import re
import uuid

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from siteboard.models.board import Board
from siteboard.models.menu import Menu, MenuItem
from siteboard.schemas.category import clamp_home_count
from siteboard.services.text_utils import to_slug

logger = logging.getLogger(__name__)


DEFAULT_BOARDS = [
    {"name": "후기", "order": 1},
    {"name": "자유게시판", "order": 2},
]
DEFAULT_COMMUNITY_LABEL = "커뮤니티"
DEFAULT_COMMUNITY_HREF = "/community/community-1"
_BOARD_SLUG_RE = re.compile(r"^board-(\d+)$")


def build_board_key(group_slug: str, board_slug: str) -> str:
    return f"{group_slug}__{board_slug}"


def extract_community_slug(href: Optional[str], fallback_label: Optional[str] = None) -> str:
    """"/community/{slug}" 에서 slug. 없으면 라벨 슬러그, 그것도 없으면 "community"."""
    if href:
        parts = [p for p in href.split("/") if p]
        if "community" in parts:
            idx = parts.index("community")
            if idx + 1 < len(parts):
                return parts[idx + 1]
    if fallback_label:
        slug = to_slug(fallback_label)
        if slug:
            return slug
    return "community"


def build_community_href(slug: str) -> str:
    return f"/community/{slug}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def get_or_create_menu(db: AsyncSession, key: str) -> Menu:
    result = await db.execute(select(Menu).where(Menu.key == key))
    menu = result.scalar_one_or_none()
    if menu is None:
        menu = Menu(key=key, name="Footer" if key == "footer" else "Main")
        db.add(menu)
        await db.flush()
    return menu


async def get_board(db: AsyncSession, board_id: uuid.UUID) -> Optional[Board]:
    result = await db.execute(select(Board).where(Board.id == board_id))
    return result.scalar_one_or_none()


async def get_board_by_key(db: AsyncSession, key: str) -> Optional[Board]:
    """대소문자 무시 key 조회 (휴지통 제외)"""
    result = await db.execute(
        select(Board).where(func.lower(Board.key) == key.strip().lower(), Board.is_deleted == False)  # noqa: E712
    )
    return result.scalar_one_or_none()


async def get_group_item(db: AsyncSession, menu_item_id: uuid.UUID) -> Optional[MenuItem]:
    result = await db.execute(
        select(MenuItem).where(MenuItem.id == menu_item_id, MenuItem.link_type == "community")
    )
    return result.scalar_one_or_none()


def group_slug_of(board: Board) -> str:
    item = board.menu_item
    return extract_community_slug(item.href if item else None, item.label if item else None)


async def _next_board_number(db: AsyncSession, menu_item_id: uuid.UUID) -> int:
    result = await db.execute(select(Board.slug).where(Board.menu_item_id == menu_item_id))
    numbers = [int(m.group(1)) for slug in result.scalars().all() if (m := _BOARD_SLUG_RE.match(slug or ""))]
    return (max(numbers) if numbers else 0) + 1


async def _next_board_order(db: AsyncSession, menu_item_id: uuid.UUID) -> int:
    result = await db.execute(select(func.max(Board.order)).where(Board.menu_item_id == menu_item_id))
    return int(result.scalar() or 0) + 1


async def ensure_default_boards(db: AsyncSession, item: MenuItem) -> None:
    """그룹에 게시판이 하나도 없으면 기본 게시판(후기/자유게시판)을 만든다. 커밋하지 않는다."""
    result = await db.execute(select(func.count(Board.id)).where(Board.menu_item_id == item.id))
    if int(result.scalar() or 0) > 0:
        return
    group_slug = extract_community_slug(item.href, item.label)
    for index, preset in enumerate(DEFAULT_BOARDS):
        slug = f"board-{index + 1}"
        db.add(Board(
            menu_item_id=item.id,
            name=preset["name"],
            slug=slug,
            key=build_board_key(group_slug, slug),
            order=preset.get("order", index + 1),
            is_visible=True,
        ))
    await db.flush()


async def ensure_default_community_group(db: AsyncSession) -> MenuItem:
    """커뮤니티 그룹이 없으면 "커뮤니티" 항목과 기본 게시판을 만든다."""
    menu = await get_or_create_menu(db, "main")
    result = await db.execute(
        select(MenuItem).where(MenuItem.menu_id == menu.id, MenuItem.link_type == "community").order_by(MenuItem.order)
    )
    item = result.scalars().first()
    if item is None:
        order_result = await db.execute(select(func.max(MenuItem.order)).where(MenuItem.menu_id == menu.id))
        item = MenuItem(
            menu_id=menu.id,
            label=DEFAULT_COMMUNITY_LABEL,
            href=DEFAULT_COMMUNITY_HREF,
            order=int(order_result.scalar() or 0) + 1,
            link_type="community",
        )
        db.add(item)
        await db.flush()
    await ensure_default_boards(db, item)
    await db.commit()
    await db.refresh(item)
    return item


async def create_community_group(db: AsyncSession, label: str, slug: Optional[str] = None) -> MenuItem:
    menu = await get_or_create_menu(db, "main")
    group_slug = to_slug(slug or "") or to_slug(label)
    if not group_slug:
        raise ValueError("그룹 슬러그를 만들 수 없습니다.")
    href = build_community_href(group_slug)
    exists = await db.execute(select(MenuItem.id).where(MenuItem.menu_id == menu.id, MenuItem.href == href))
    if exists.first() is not None:
        raise LookupError("이미 존재하는 커뮤니티 주소입니다.")
    order_result = await db.execute(select(func.max(MenuItem.order)).where(MenuItem.menu_id == menu.id))
    item = MenuItem(
        menu_id=menu.id,
        label=label,
        href=href,
        order=int(order_result.scalar() or 0) + 1,
        link_type="community",
    )
    db.add(item)
    await db.flush()
    await ensure_default_boards(db, item)
    await db.commit()
    await db.refresh(item)
    return item


def _board_visible(board: Board, include_hidden: bool) -> bool:
    if board.is_deleted:
        return False
    return include_hidden or board.is_visible


def serialize_group(item: MenuItem, include_hidden_boards: bool = False) -> Dict[str, Any]:
    return {
        "menu_item_id": item.id,
        "label": item.label,
        "href": item.href,
        "slug": extract_community_slug(item.href, item.label),
        "order": item.order,
        "is_visible": item.is_visible,
        "boards": sorted(
            [b for b in item.boards if _board_visible(b, include_hidden_boards)],
            key=lambda b: b.order,
        ),
    }


async def list_community_groups(
    db: AsyncSession,
    include_hidden_groups: bool = False,
    include_hidden_boards: bool = False,
) -> List[Dict[str, Any]]:
    """메인 메뉴의 커뮤니티 그룹과 소속 게시판"""
    result = await db.execute(
        select(MenuItem)
        .join(Menu, Menu.id == MenuItem.menu_id)
        .where(Menu.key == "main", MenuItem.link_type == "community")
        .order_by(MenuItem.order.asc())
    )
    groups: List[Dict[str, Any]] = []
    for item in result.scalars().all():
        if not include_hidden_groups and not item.is_visible:
            continue
        groups.append(serialize_group(item, include_hidden_boards))
    return groups


async def create_board(db: AsyncSession, item: MenuItem, name: str, description: Optional[str] = None, is_visible: bool = True) -> Board:
    group_slug = extract_community_slug(item.href, item.label)
    slug = f"board-{await _next_board_number(db, item.id)}"
    board = Board(
        menu_item_id=item.id,
        name=name,
        description=description,
        slug=slug,
        key=build_board_key(group_slug, slug),
        order=await _next_board_order(db, item.id),
        is_visible=is_visible,
    )
    db.add(board)
    await db.commit()
    await db.refresh(board)
    return board


async def update_board(db: AsyncSession, board: Board, values: Dict[str, Any]) -> Board:
    for field, value in values.items():
        if value is None and field != "description":
            continue
        setattr(board, field, value)
    await db.commit()
    await db.refresh(board)
    return board


async def trash_board(db: AsyncSession, board: Board) -> Board:
    board.is_deleted = True
    board.deleted_at = _utcnow()
    await db.commit()
    await db.refresh(board)
    return board


async def restore_board(db: AsyncSession, board: Board) -> Board:
    board.is_deleted = False
    board.deleted_at = None
    await db.commit()
    await db.refresh(board)
    return board


async def delete_board_permanently(db: AsyncSession, board: Board) -> None:
    if not board.is_deleted:
        raise ValueError("휴지통에 있는 게시판만 영구 삭제할 수 있습니다.")
    await db.delete(board)
    await db.commit()


async def list_trashed_boards(db: AsyncSession) -> List[Board]:
    result = await db.execute(
        select(Board).where(Board.is_deleted == True).order_by(Board.deleted_at.desc())  # noqa: E712
    )
    return list(result.scalars().all())


async def reorder_boards(db: AsyncSession, menu_item_id: uuid.UUID, ids: List[uuid.UUID]) -> List[Board]:
    """해당 그룹 소속 게시판만 순서를 바꾼다 (order = 인덱스+1)."""
    result = await db.execute(select(Board).where(Board.menu_item_id == menu_item_id))
    by_id = {b.id: b for b in result.scalars().all()}
    position = 0
    for board_id in ids:
        board = by_id.get(board_id)
        if board is None:
            continue
        position += 1
        board.order = position
    await db.commit()
    result = await db.execute(
        select(Board).where(Board.menu_item_id == menu_item_id, Board.is_deleted == False).order_by(Board.order)  # noqa: E712
    )
    return list(result.scalars().all())


async def update_home_settings(db: AsyncSession, items: List[Dict[str, Any]]) -> List[Board]:
    """게시판 홈 노출 설정 (개수 1~10, 기본 5)"""
    ids = [item["id"] for item in items]
    if not ids:
        return []
    result = await db.execute(select(Board).where(Board.id.in_(ids)))
    by_id = {b.id: b for b in result.scalars().all()}
    for item in items:
        board = by_id.get(item["id"])
        if board is None:
            continue
        board.show_on_home = bool(item["show_on_home"])
        board.home_item_count = clamp_home_count(item.get("home_item_count"), 5)
    await db.commit()
    result = await db.execute(select(Board).where(Board.id.in_(ids)).order_by(Board.order))
    return list(result.scalars().all())
