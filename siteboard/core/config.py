"""
애플리케이션 설정
"""

from pydantic_settings import BaseSettings
from typing import Optional, List
from pathlib import Path
from dotenv import load_dotenv


"""env 로딩 우선순위
1) OS 환경변수
2) 프로젝트 루트의 .env (repo/.env)
"""

# .env 사전 로드 (OS 환경변수 우선, override=False)
_here = Path(__file__).resolve()
_repo_root_env = _here.parents[2] / ".env"  # repo/.env
try:
    if _repo_root_env.exists():
        load_dotenv(dotenv_path=str(_repo_root_env), override=False)
except Exception:
    pass


DEFAULT_JWT_SECRET = "your-super-secret-jwt-key-change-this-in-production"


class Settings(BaseSettings):
    """애플리케이션 설정"""
    # 환경 설정
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    DATABASE_URL: str = "sqlite:///./data/siteboard.db"
    REDIS_URL: str = "redis://localhost:6379/0"
    RATE_LIMIT_ENABLED: bool = True

    # JWT
    JWT_SECRET_KEY: str = DEFAULT_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    JWT_REFRESH_TOKEN_EXPIRE_DAYS: int = 14

    # 공개 사이트 주소 (sitemap/IndexNow 기준)
    SITE_URL: str = "http://localhost:3000"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # 업로드
    UPLOADS_DIR: Optional[str] = None
    UPLOADS_URL_PREFIX: str = "/uploads"
    UPLOAD_MAX_BYTES: int = 5 * 1024 * 1024
    REMOTE_IMAGE_TIMEOUT_SECONDS: int = 15
    ORPHAN_MIN_AGE_HOURS: int = 24

    # IndexNow
    INDEXNOW_KEY: Optional[str] = None
    INDEXNOW_ENDPOINT: str = "https://api.indexnow.org/indexnow"

    class Config:
        env_file = ".env"
        env_file_encoding = 'utf-8'
        extra = 'ignore'

    @property
    def async_database_url(self) -> str:
        """드라이버가 명시된 비동기 DB URL"""
        url = self.DATABASE_URL
        if url.startswith("sqlite:///"):
            return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)
        return url

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


settings = Settings()


# 환경별 설정 검증
def validate_settings():
    """설정 검증"""
    if settings.ENVIRONMENT == "production":
        if settings.JWT_SECRET_KEY == DEFAULT_JWT_SECRET:
            raise ValueError("프로덕션 환경에서는 JWT_SECRET_KEY를 변경해야 합니다.")
        if not settings.SITE_URL.startswith("https://"):
            raise ValueError("프로덕션 환경에서는 SITE_URL이 https 주소여야 합니다.")

    return True


# 설정 검증 실행
validate_settings()
