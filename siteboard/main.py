"""
사이트보드 - FastAPI 메인 애플리케이션
콘텐츠 CMS + 커뮤니티 게시판
"""

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from siteboard.core.config import settings, validate_settings
from siteboard.core.database import engine, Base, check_db_connection
from siteboard.core.paths import ensure_sqlite_dir, get_upload_dir
import siteboard.models  # noqa: F401  (메타데이터에 모든 테이블 등록)

# API 라우터 임포트
from siteboard.api.auth import router as auth_router
from siteboard.api.admin_users import router as admin_users_router
from siteboard.api.site_settings import router as site_settings_router, admin_router as site_settings_admin_router
from siteboard.api.menus import router as menus_router, admin_router as menus_admin_router
from siteboard.api.categories import router as categories_router, admin_router as categories_admin_router
from siteboard.api.contents import router as contents_router, admin_router as contents_admin_router
from siteboard.api.products import router as products_router, admin_router as products_admin_router
from siteboard.api.tags import router as tags_router, admin_router as tags_admin_router
from siteboard.api.boards import router as boards_router, admin_router as boards_admin_router
from siteboard.api.posts import router as posts_router
from siteboard.api.comments import router as comments_router
from siteboard.api.files import router as files_router, admin_router as orphan_files_router
from siteboard.api.seo import router as seo_router, admin_router as seo_admin_router
from siteboard.api.home import router as home_router

# 로깅 설정
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 시작/종료 시 실행되는 이벤트"""
    # 시작 시
    logger.info("🚀 사이트보드 시작")
    validate_settings()
    ensure_sqlite_dir(settings.DATABASE_URL)

    # 데이터베이스 테이블 생성 (운영 외 환경)
    if settings.ENVIRONMENT != "production":
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("📊 데이터베이스 테이블 생성 완료")

    yield

    # 종료 시
    await engine.dispose()
    logger.info("👋 사이트보드 종료")


# FastAPI 앱 생성
app = FastAPI(
    title="사이트보드 API",
    description="콘텐츠 CMS와 커뮤니티 게시판을 함께 운영하는 사이트 백엔드",
    version="1.0.0",
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
    lifespan=lifespan
)
UPLOAD_DIR = get_upload_dir()
app.mount(settings.UPLOADS_URL_PREFIX, StaticFiles(directory=UPLOAD_DIR), name="uploads")

# CORS 미들웨어 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# 라우터 등록
# 🔐 계정
app.include_router(auth_router, prefix="/auth", tags=["🔐 인증"])
app.include_router(admin_users_router, prefix="/admin/users", tags=["🛠️ 관리자 - 회원"])

# ⚙️ 사이트 설정 / 메뉴
app.include_router(site_settings_router, prefix="/site-settings", tags=["⚙️ 사이트 설정"])
app.include_router(site_settings_admin_router, prefix="/admin/site-settings", tags=["🛠️ 관리자 - 사이트 설정"])
app.include_router(menus_router, prefix="/menus", tags=["🧭 메뉴"])
app.include_router(menus_admin_router, prefix="/admin/menus", tags=["🛠️ 관리자 - 메뉴"])

# 📚 콘텐츠
app.include_router(categories_router, prefix="/categories", tags=["📂 카테고리"])
app.include_router(categories_admin_router, prefix="/admin/categories", tags=["🛠️ 관리자 - 카테고리"])
app.include_router(contents_router, prefix="/contents", tags=["📚 콘텐츠"])
app.include_router(contents_admin_router, prefix="/admin/contents", tags=["🛠️ 관리자 - 콘텐츠"])
app.include_router(products_router, prefix="/products", tags=["🛒 상품"])
app.include_router(products_admin_router, prefix="/admin/products", tags=["🛠️ 관리자 - 상품"])
app.include_router(tags_router, prefix="/tags", tags=["🏷️ 태그"])
app.include_router(tags_admin_router, prefix="/admin/tags", tags=["🛠️ 관리자 - 태그"])

# 💬 커뮤니티
app.include_router(boards_router, prefix="/boards", tags=["💬 게시판"])
app.include_router(boards_admin_router, prefix="/admin/boards", tags=["🛠️ 관리자 - 게시판"])
app.include_router(posts_router, prefix="/posts", tags=["💬 게시글"])
app.include_router(comments_router, prefix="/comments", tags=["💬 댓글"])

# 🗂️ 파일 / SEO / 홈
app.include_router(files_router, prefix="/upload", tags=["🗂️ 파일"])
app.include_router(orphan_files_router, prefix="/admin/orphan-files", tags=["🛠️ 관리자 - 파일"])
app.include_router(seo_router)
app.include_router(seo_admin_router, prefix="/admin")
app.include_router(home_router, tags=["🏠 홈"])


@app.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "message": "사이트보드 API",
        "version": "1.0.0",
        "docs": "/docs",
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """헬스 체크 엔드포인트"""
    db_ok = await check_db_connection()
    return {
        "status": "healthy" if db_ok else "degraded",
        "environment": settings.ENVIRONMENT,
        "database": "connected" if db_ok else "unavailable",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "siteboard.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True if settings.ENVIRONMENT == "development" else False
    )
