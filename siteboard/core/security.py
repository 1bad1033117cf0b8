"""
보안 관련 유틸리티
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import HTTPException, status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from siteboard.core.config import settings
from siteboard.core.database import get_db
from siteboard.models.user import User


# 패스워드 해싱 컨텍스트
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# JWT 토큰 스키마
security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """패스워드 검증"""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """패스워드 해싱"""
    return pwd_context.hash(password)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """액세스 토큰 생성"""
    to_encode = data.copy()
    if expires_delta:
        expire = _utcnow() + expires_delta
    else:
        expire = _utcnow() + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_refresh_token(data: dict) -> str:
    """리프레시 토큰 생성"""
    to_encode = data.copy()
    expire = _utcnow() + timedelta(days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS)
    to_encode.update({"exp": expire, "type": "refresh"})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_token_pair(user_id: str) -> dict:
    """액세스/리프레시 토큰 쌍 생성"""
    return {
        "access_token": create_access_token(data={"sub": user_id}),
        "refresh_token": create_refresh_token(data={"sub": user_id}),
        "token_type": "bearer",
        "user_id": user_id,
    }


def verify_token(token: str, token_type: str = "access") -> Optional[dict]:
    """토큰 검증"""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        if payload.get("type") != token_type:
            return None
        return payload
    except JWTError:
        return None


def ensure_can_sign_in(user: User, inactive_status: int = status.HTTP_400_BAD_REQUEST) -> None:
    """로그인 가능한 상태인지 확인한다 (비활성/미승인 차단).
    로그인 요청은 비활성 계정에 400, 이미 발급된 토큰은 403 으로 거절한다.
    """
    if not user.is_active:
        raise HTTPException(
            status_code=inactive_status,
            detail="비활성화된 계정입니다."
        )
    if not user.is_approved:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="관리자 승인 대기 중입니다."
        )


async def _user_from_credentials(
    credentials: Optional[HTTPAuthorizationCredentials],
    db: AsyncSession,
) -> Optional[User]:
    if credentials is None:
        return None
    payload = verify_token(credentials.credentials, "access")
    if payload is None:
        return None
    user_id = payload.get("sub")
    if user_id is None:
        return None

    # 순환 참조 방지를 위해 함수 내에서 임포트
    from siteboard.services.user_service import get_user_by_id
    try:
        return await get_user_by_id(db, user_id)
    except ValueError:
        # sub 가 UUID 형식이 아닌 경우
        return None


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """현재 사용자 가져오기"""
    user = await _user_from_credentials(credentials, db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="인증 정보가 유효하지 않습니다.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    ensure_can_sign_in(user, inactive_status=status.HTTP_403_FORBIDDEN)
    return user


async def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    """관리자 사용자 가져오기"""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="관리자 권한이 필요합니다."
        )
    return current_user


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
    db: AsyncSession = Depends(get_db)
) -> Optional[User]:
    """
    현재 사용자를 가져오지만, 필수는 아닙니다.
    토큰이 없거나 유효하지 않으면 None을 반환합니다.
    """
    user = await _user_from_credentials(credentials, db)
    if user is None or not user.is_active or not user.is_approved:
        return None
    return user
