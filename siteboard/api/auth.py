"""
인증 관련 API 라우터
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from siteboard.core.database import get_db
from siteboard.core.rate_limit import enforce_rate_limit
from siteboard.core.security import (
    verify_password,
    get_password_hash,
    create_token_pair,
    verify_token,
    ensure_can_sign_in,
    get_current_user,
)
from siteboard.models.user import User
from siteboard.schemas.auth import Token, RefreshTokenRequest, SetupStatus
from siteboard.schemas.user import (
    UserCreate,
    UserLogin,
    UserResponse,
    RegisterResponse,
    NameUpdate,
    PasswordUpdate,
)
from siteboard.services.user_service import (
    get_user_by_email,
    get_user_by_id,
    needs_admin_setup,
    register_user,
    update_user,
    delete_user,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/setup", response_model=SetupStatus)
async def setup_status(db: AsyncSession = Depends(get_db)):
    """최초 관리자 설정 필요 여부"""
    return SetupStatus(needs_setup=await needs_admin_setup(db))


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db)
):
    """사용자 회원가입 (관리자가 없으면 첫 가입자가 관리자)"""
    existing_user = await get_user_by_email(db, user_data.email)
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="이미 등록된 이메일입니다."
        )

    try:
        user = await register_user(
            db,
            email=user_data.email,
            name=user_data.name,
            password_hash=get_password_hash(user_data.password),
        )
    except Exception as e:
        await db.rollback()
        logger.exception(f"[auth] register failed: {e}")
        raise HTTPException(status_code=500, detail="회원가입에 실패했습니다.")

    return RegisterResponse(
        user=UserResponse.model_validate(user),
        pending_approval=not user.is_approved,
    )


@router.post("/login", response_model=Token)
async def login(
    user_credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """사용자 로그인"""
    await enforce_rate_limit(f"login:{user_credentials.email.lower()}", max_requests=10)

    user = await get_user_by_email(db, user_credentials.email)
    if not user or not verify_password(user_credentials.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="이메일 또는 비밀번호가 올바르지 않습니다.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    ensure_can_sign_in(user)

    return Token(**create_token_pair(str(user.id)))


@router.post("/refresh", response_model=Token)
async def refresh_token(
    token_data: RefreshTokenRequest,
    db: AsyncSession = Depends(get_db)
):
    """토큰 갱신"""
    payload = verify_token(token_data.refresh_token, "refresh")
    if not payload or not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="유효하지 않은 리프레시 토큰입니다."
        )

    try:
        user = await get_user_by_id(db, payload["sub"])
    except ValueError:
        user = None
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="유효하지 않은 리프레시 토큰입니다."
        )
    ensure_can_sign_in(user, inactive_status=status.HTTP_403_FORBIDDEN)

    return Token(**create_token_pair(str(user.id)))


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """현재 사용자 정보 조회"""
    return current_user


@router.patch("/me/name", response_model=UserResponse)
async def update_my_name(
    payload: NameUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """이름 변경"""
    try:
        return await update_user(db, current_user, name=payload.name)
    except Exception as e:
        await db.rollback()
        logger.exception(f"[auth] update name failed: {e}")
        raise HTTPException(status_code=500, detail="이름 변경에 실패했습니다.")


@router.patch("/me/password")
async def update_my_password(
    payload: PasswordUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """비밀번호 변경 (현재 비밀번호 확인)"""
    if not verify_password(payload.current_password, current_user.hashed_password):
        raise HTTPException(status_code=400, detail="현재 비밀번호가 올바르지 않습니다.")
    try:
        await update_user(db, current_user, password_hash=get_password_hash(payload.new_password))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[auth] update password failed: {e}")
        raise HTTPException(status_code=500, detail="비밀번호 변경에 실패했습니다.")
    return {"message": "비밀번호가 변경되었습니다."}


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_my_account(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """회원 탈퇴 (마지막 관리자는 불가)"""
    try:
        await delete_user(db, current_user)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        await db.rollback()
        logger.exception(f"[auth] delete account failed: {e}")
        raise HTTPException(status_code=500, detail="회원 탈퇴에 실패했습니다.")
    return None
