"""
인증 관련 Pydantic 스키마
"""

from pydantic import BaseModel


class Token(BaseModel):
    """토큰 응답 스키마"""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user_id: str


class RefreshTokenRequest(BaseModel):
    """리프레시 토큰 요청 스키마"""
    refresh_token: str


class SetupStatus(BaseModel):
    """최초 관리자 설정 필요 여부"""
    needs_setup: bool
