"""
홈 화면 구성
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from siteboard.models.board import Board
from siteboard.models.category import Category
from siteboard.models.user import User
from siteboard.services import content_service, post_service
from siteboard.services.board_service import group_slug_of
from siteboard.services.site_settings_service import get_settings, is_community_enabled


async def build_home(db: AsyncSession, viewer: Optional[User]) -> Dict[str, Any]:
    settings_row = await get_settings(db)
    grid_layout = list(settings_row.home_grid_layout or []) if settings_row else []

    result = await db.execute(
        select(Category)
        .where(Category.show_on_home == True, Category.is_visible == True)  # noqa: E712
        .order_by(Category.order.asc())
    )
    categories: List[Dict[str, Any]] = []
    for category in result.scalars().all():
        # 로그인 필요 카테고리는 비로그인 사용자에게 숨김
        if category.requires_auth and viewer is None:
            continue
        items = await content_service.latest_contents_for_category(db, category, category.home_item_count)
        categories.append({
            "category": category,
            "items": [content_service.serialize_content(c) for c in items],
        })

    boards: List[Dict[str, Any]] = []
    if await is_community_enabled(db) or (viewer and viewer.is_admin):
        result = await db.execute(
            select(Board)
            .where(
                Board.show_on_home == True,  # noqa: E712
                Board.is_visible == True,  # noqa: E712
                Board.is_deleted == False,  # noqa: E712
            )
            .order_by(Board.order.asc())
        )
        for board in result.scalars().all():
            posts = await post_service.latest_posts_for_board(db, board, board.home_item_count)
            boards.append({
                "board": board,
                "group_slug": group_slug_of(board),
                "items": [post_service.serialize_post(p, viewer) for p in posts],
            })

    return {"grid_layout": grid_layout, "categories": categories, "boards": boards}
