"""
상품 API
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import uuid
import logging

from siteboard.core.database import get_db
from siteboard.core.security import get_current_admin, get_current_user_optional
from siteboard.models.user import User
from siteboard.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from siteboard.services import product_service
from siteboard.services.content_service import AuthRequired

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter()


@router.get("", response_model=List[ProductResponse])
async def list_products(
    category: Optional[str] = Query(None, description="카테고리 슬러그"),
    db: AsyncSession = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    """상품 목록"""
    try:
        products = await product_service.list_products(db, current_user, category)
    except AuthRequired:
        raise HTTPException(status_code=401, detail="로그인이 필요합니다.")
    return [product_service.serialize_product(p) for p in products]


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    """상품 상세"""
    try:
        product = await product_service.get_public_product(db, product_id, current_user)
    except AuthRequired:
        raise HTTPException(status_code=401, detail="로그인이 필요합니다.")
    if not product:
        raise HTTPException(status_code=404, detail="상품을 찾을 수 없습니다.")
    return product_service.serialize_product(product)


@admin_router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: ProductCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """상품 생성"""
    try:
        product = await product_service.create_product(db, payload.model_dump())
        return product_service.serialize_product(product)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[products] create failed: {e}")
        raise HTTPException(status_code=500, detail="상품 생성에 실패했습니다.")


@admin_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: uuid.UUID,
    payload: ProductUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """상품 수정"""
    product = await product_service.get_product(db, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="상품을 찾을 수 없습니다.")
    try:
        product = await product_service.update_product(db, product, payload.model_dump(exclude_unset=True))
        return product_service.serialize_product(product)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[products] update failed: {e}")
        raise HTTPException(status_code=500, detail="상품 수정에 실패했습니다.")


@admin_router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """상품 삭제"""
    product = await product_service.get_product(db, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="상품을 찾을 수 없습니다.")
    try:
        await product_service.delete_product(db, product)
        return None
    except Exception as e:
        await db.rollback()
        logger.exception(f"[products] delete failed: {e}")
        raise HTTPException(status_code=500, detail="상품 삭제에 실패했습니다.")
