"""
상품 서비스
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List, Optional
import uuid

from siteboard.models.category import Category
from siteboard.models.product import Product
from siteboard.models.user import User
from siteboard.services.content_service import AuthRequired, render_body
from siteboard.services.text_utils import format_price


def serialize_product(product: Product) -> Dict[str, Any]:
    return {
        "id": product.id,
        "title": product.title,
        "content": product.content,
        "content_markdown": product.content_markdown,
        "html_content": product.html_content,
        "category": product.category,
        "price": product.price,
        "formatted_price": format_price(product.price),
        "image_url": product.image_url,
        "is_visible": product.is_visible,
        "created_at": product.created_at,
        "updated_at": product.updated_at,
    }


async def list_products(db: AsyncSession, viewer: Optional[User], category_slug: Optional[str] = None) -> List[Product]:
    """상품 목록.
    - 카테고리 지정: 없는 카테고리면 빈 목록, 로그인 필요 카테고리는 AuthRequired
    - 비공개 상품은 관리자만
    """
    is_admin = bool(viewer and viewer.is_admin)
    stmt = select(Product)
    if category_slug:
        result = await db.execute(select(Category).where(Category.slug == category_slug))
        category = result.scalar_one_or_none()
        if category is None:
            return []
        if category.requires_auth and viewer is None:
            raise AuthRequired()
        stmt = stmt.where(Product.category_id == category.id)
    elif viewer is None:
        stmt = stmt.join(Category, Category.id == Product.category_id).where(Category.requires_auth == False)  # noqa: E712
    if not is_admin:
        stmt = stmt.where(Product.is_visible == True)  # noqa: E712
    result = await db.execute(stmt.order_by(Product.created_at.desc()))
    return list(result.scalars().all())


async def get_product(db: AsyncSession, product_id: uuid.UUID) -> Optional[Product]:
    result = await db.execute(select(Product).where(Product.id == product_id))
    return result.scalar_one_or_none()


async def get_public_product(db: AsyncSession, product_id: uuid.UUID, viewer: Optional[User]) -> Optional[Product]:
    product = await get_product(db, product_id)
    if product is None:
        return None
    if not product.is_visible and not (viewer and viewer.is_admin):
        return None
    if product.category.requires_auth and viewer is None:
        raise AuthRequired()
    return product


async def _ensure_category(db: AsyncSession, category_id: uuid.UUID) -> None:
    result = await db.execute(select(Category.id).where(Category.id == category_id))
    if result.first() is None:
        raise ValueError("카테고리를 찾을 수 없습니다.")


async def create_product(db: AsyncSession, data: Dict[str, Any]) -> Product:
    await _ensure_category(db, data["category_id"])
    product = Product(
        title=data["title"].strip(),
        content=data["content"],
        content_markdown=data.get("content_markdown") or None,
        html_content=render_body(data["content"], data.get("content_markdown")),
        category_id=data["category_id"],
        price=(data.get("price") or "").strip() or None,
        image_url=(data.get("image_url") or "").strip() or None,
        is_visible=data.get("is_visible", True),
    )
    db.add(product)
    await db.commit()
    await db.refresh(product)
    return product


async def update_product(db: AsyncSession, product: Product, values: Dict[str, Any]) -> Product:
    if values.get("category_id") is not None:
        await _ensure_category(db, values["category_id"])
    for field in ("title", "content", "category_id", "is_visible"):
        if values.get(field) is not None:
            setattr(product, field, values[field])
    for field in ("price", "image_url"):
        if field in values:
            setattr(product, field, (values[field] or "").strip() or None)
    if "content_markdown" in values:
        product.content_markdown = values["content_markdown"] or None
    if "content" in values or "content_markdown" in values:
        product.html_content = render_body(product.content, product.content_markdown)
    await db.commit()
    await db.refresh(product)
    return product


async def delete_product(db: AsyncSession, product: Product) -> None:
    await db.delete(product)
    await db.commit()
