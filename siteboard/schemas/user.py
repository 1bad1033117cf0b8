"""
사용자 관련 Pydantic 스키마
"""

from pydantic import BaseModel, EmailStr, Field, ConfigDict, field_validator, model_validator
from typing import Optional, Literal
from datetime import datetime
import uuid


Role = Literal["USER", "ADMIN"]


def _strip_name(value):
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        raise ValueError("이름을 입력해주세요.")
    return text


class UserBase(BaseModel):
    """사용자 기본 스키마"""
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=50)

    @field_validator("name", mode="before")
    @classmethod
    def clean_name(cls, v):
        return _strip_name(v)


class UserCreate(UserBase):
    """회원가입 스키마"""
    password: str = Field(..., min_length=6, max_length=100)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("비밀번호가 일치하지 않습니다.")
        return self


class UserLogin(BaseModel):
    """사용자 로그인 스키마"""
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(UserBase):
    """사용자 응답 스키마"""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    role: Role
    is_approved: bool
    is_active: bool
    created_at: Optional[datetime] = None


class RegisterResponse(BaseModel):
    """회원가입 결과"""
    user: UserResponse
    pending_approval: bool


class NameUpdate(BaseModel):
    """이름 변경"""
    name: str = Field(..., min_length=1, max_length=50)

    @field_validator("name", mode="before")
    @classmethod
    def clean_name(cls, v):
        return _strip_name(v)


class PasswordUpdate(BaseModel):
    """비밀번호 변경 (현재 비밀번호 확인)"""
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=100)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self):
        if self.new_password != self.confirm_password:
            raise ValueError("새 비밀번호가 일치하지 않습니다.")
        return self


class AdminUserCreate(UserBase):
    """관리자용 사용자 생성"""
    password: str = Field(..., min_length=6, max_length=100)
    role: Role = "USER"
    is_approved: bool = True


class AdminUserUpdate(BaseModel):
    """관리자용 사용자 수정"""
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    role: Optional[Role] = None
    is_approved: Optional[bool] = None
    is_active: Optional[bool] = None

    @field_validator("name", mode="before")
    @classmethod
    def clean_name(cls, v):
        return _strip_name(v)


class PasswordReset(BaseModel):
    """관리자 비밀번호 초기화"""
    new_password: str = Field(..., min_length=6, max_length=100)
