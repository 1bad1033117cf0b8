"""
관리자 사용자 관리 API

- 목록(승인 대기 필터)/생성/수정/비밀번호 초기화/승인/삭제
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid
import logging

from siteboard.core.database import get_db
from siteboard.core.security import get_current_admin, get_password_hash
from siteboard.models.user import User
from siteboard.schemas.user import AdminUserCreate, AdminUserUpdate, PasswordReset, UserResponse
from siteboard.services import user_service

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_user_or_404(db: AsyncSession, user_id: uuid.UUID) -> User:
    user = await user_service.get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="사용자를 찾을 수 없습니다.")
    return user


@router.get("", response_model=List[UserResponse])
async def list_users(
    pending: bool = Query(False, description="승인 대기 사용자만"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """사용자 목록"""
    return await user_service.list_users(db, pending_only=pending)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: AdminUserCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """사용자 생성"""
    if await user_service.get_user_by_email(db, payload.email):
        raise HTTPException(status_code=409, detail="이미 등록된 이메일입니다.")
    try:
        return await user_service.create_user(
            db,
            email=payload.email,
            name=payload.name,
            password_hash=get_password_hash(payload.password),
            role=payload.role,
            is_approved=payload.is_approved,
        )
    except Exception as e:
        await db.rollback()
        logger.exception(f"[admin_users] create failed: {e}")
        raise HTTPException(status_code=500, detail="사용자 생성에 실패했습니다.")


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: uuid.UUID,
    payload: AdminUserUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """사용자 수정 (이름/권한/승인/활성)"""
    user = await _get_user_or_404(db, user_id)
    try:
        return await user_service.update_user(db, user, **payload.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[admin_users] update failed: {e}")
        raise HTTPException(status_code=500, detail="사용자 수정에 실패했습니다.")


@router.post("/{user_id}/reset-password", response_model=UserResponse)
async def reset_password(
    user_id: uuid.UUID,
    payload: PasswordReset,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """비밀번호 초기화"""
    user = await _get_user_or_404(db, user_id)
    try:
        return await user_service.update_user(db, user, password_hash=get_password_hash(payload.new_password))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[admin_users] reset password failed: {e}")
        raise HTTPException(status_code=500, detail="비밀번호 초기화에 실패했습니다.")


@router.post("/{user_id}/approve", response_model=UserResponse)
async def approve_user(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """가입 승인"""
    user = await _get_user_or_404(db, user_id)
    try:
        return await user_service.update_user(db, user, is_approved=True)
    except Exception as e:
        await db.rollback()
        logger.exception(f"[admin_users] approve failed: {e}")
        raise HTTPException(status_code=500, detail="가입 승인에 실패했습니다.")


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """사용자 삭제 (자기 자신/마지막 관리자 불가)"""
    user = await _get_user_or_404(db, user_id)
    try:
        await user_service.delete_user(db, user, acting_user=current_user)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[admin_users] delete failed: {e}")
        raise HTTPException(status_code=500, detail="사용자 삭제에 실패했습니다.")
    return None
