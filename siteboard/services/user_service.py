"""
사용자 관련 서비스
"""

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, Union, List
import uuid

from siteboard.models.user import User, ROLE_ADMIN, ROLE_USER


def _as_uuid(value: Union[str, uuid.UUID]) -> uuid.UUID:
    return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))


async def get_user_by_id(db: AsyncSession, user_id: Union[str, uuid.UUID]) -> Optional[User]:
    """ID로 사용자 조회"""
    result = await db.execute(select(User).where(User.id == _as_uuid(user_id)))
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    """이메일로 사용자 조회 (대소문자 무시)"""
    result = await db.execute(select(User).where(func.lower(User.email) == email.strip().lower()))
    return result.scalar_one_or_none()


async def count_admins(db: AsyncSession, active_only: bool = False) -> int:
    stmt = select(func.count(User.id)).where(User.role == ROLE_ADMIN)
    if active_only:
        stmt = stmt.where(User.is_active == True)  # noqa: E712
    result = await db.execute(stmt)
    return int(result.scalar() or 0)


async def needs_admin_setup(db: AsyncSession) -> bool:
    """관리자가 한 명도 없으면 최초 설정 필요"""
    return await count_admins(db) == 0


async def list_users(db: AsyncSession, pending_only: bool = False) -> List[User]:
    stmt = select(User)
    if pending_only:
        stmt = stmt.where(User.is_approved == False)  # noqa: E712
    stmt = stmt.order_by(User.created_at.desc())
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def create_user(
    db: AsyncSession,
    email: str,
    name: str,
    password_hash: str,
    role: str = ROLE_USER,
    is_approved: bool = False,
) -> User:
    """사용자 생성"""
    user = User(
        email=email.strip().lower(),
        name=name,
        hashed_password=password_hash,
        role=role,
        is_approved=is_approved,
        is_active=True,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def register_user(db: AsyncSession, email: str, name: str, password_hash: str) -> User:
    """회원가입. 관리자가 없으면 첫 가입자를 승인된 관리자로 만든다."""
    if await needs_admin_setup(db):
        return await create_user(db, email, name, password_hash, role=ROLE_ADMIN, is_approved=True)
    return await create_user(db, email, name, password_hash, role=ROLE_USER, is_approved=False)


async def is_last_admin(db: AsyncSession, user: User) -> bool:
    """이 사용자를 빼면 활성 관리자가 남지 않는지"""
    if not user.is_admin:
        return False
    others = await count_admins(db, active_only=True) - (1 if user.is_active else 0)
    return others <= 0


async def update_user(
    db: AsyncSession,
    user: User,
    name: Optional[str] = None,
    role: Optional[str] = None,
    is_approved: Optional[bool] = None,
    is_active: Optional[bool] = None,
    password_hash: Optional[str] = None,
) -> User:
    """사용자 정보 갱신. 마지막 관리자의 강등/비활성화는 거부한다."""
    demoting = role is not None and role != ROLE_ADMIN
    disabling = is_active is False
    if (demoting or disabling) and await is_last_admin(db, user):
        raise ValueError("마지막 관리자의 권한은 변경할 수 없습니다.")

    if name is not None:
        user.name = name
    if role is not None:
        user.role = role
    if is_approved is not None:
        user.is_approved = is_approved
    if is_active is not None:
        user.is_active = is_active
    if password_hash is not None:
        user.hashed_password = password_hash

    await db.commit()
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, user: User, acting_user: Optional[User] = None) -> None:
    """사용자 삭제. 자기 자신(관리자 화면) 또는 마지막 관리자는 삭제할 수 없다."""
    if acting_user is not None and acting_user.id == user.id:
        raise ValueError("자기 자신은 삭제할 수 없습니다.")
    if await is_last_admin(db, user):
        raise ValueError("마지막 관리자는 삭제할 수 없습니다.")
    await db.delete(user)
    await db.commit()
