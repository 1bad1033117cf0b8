"""
공통 테스트 픽스처

- 앱 임포트 전에 테스트 환경변수를 설정한다 (임시 sqlite, 레이트리밋 off, 임시 업로드 폴더).
- 테스트마다 테이블을 새로 만든다.
"""

import asyncio
import os
import shutil
import tempfile
from pathlib import Path

import pytest

_TMP_ROOT = tempfile.mkdtemp(prefix="siteboard-test-")
_UPLOADS = os.path.join(_TMP_ROOT, "uploads")
os.makedirs(_UPLOADS, exist_ok=True)

os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_ROOT, 'test.db')}"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["UPLOADS_DIR"] = _UPLOADS
os.environ["SITE_URL"] = "https://siteboard.kr"
os.environ.pop("INDEXNOW_KEY", None)

from fastapi.testclient import TestClient  # noqa: E402

from siteboard.core.database import Base, engine  # noqa: E402
from siteboard.main import app  # noqa: E402

from tests.helpers import ADMIN_EMAIL, PASSWORD, USER_EMAIL, login_headers, register  # noqa: E402


async def _reset_schema():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


# =============================================================================
# App / DB
# =============================================================================


@pytest.fixture
def client():
    """빈 DB 로 시작하는 테스트 클라이언트."""
    asyncio.run(_reset_schema())
    with TestClient(app) as c:
        yield c


@pytest.fixture
def uploads_dir() -> Path:
    """업로드 폴더 (테스트마다 비운다)."""
    shutil.rmtree(_UPLOADS, ignore_errors=True)
    os.makedirs(_UPLOADS, exist_ok=True)
    return Path(_UPLOADS)


# =============================================================================
# Accounts
# =============================================================================


@pytest.fixture
def admin_headers(client: TestClient) -> dict:
    """첫 가입자 = 관리자."""
    res = register(client, ADMIN_EMAIL, "관리자")
    assert res.status_code == 201, res.text
    return login_headers(client, ADMIN_EMAIL)


@pytest.fixture
def user_headers(client: TestClient, admin_headers: dict) -> dict:
    """관리자가 승인한 일반 회원."""
    res = register(client, USER_EMAIL, "회원")
    assert res.status_code == 201, res.text
    user_id = res.json()["user"]["id"]
    approved = client.post(f"/admin/users/{user_id}/approve", headers=admin_headers)
    assert approved.status_code == 200, approved.text
    return login_headers(client, USER_EMAIL)


@pytest.fixture
def other_user_headers(client: TestClient, admin_headers: dict) -> dict:
    """관리자가 직접 만든 두 번째 회원."""
    res = client.post(
        "/admin/users",
        json={"email": "other@siteboard.kr", "name": "다른회원", "password": PASSWORD},
        headers=admin_headers,
    )
    assert res.status_code == 201, res.text
    return login_headers(client, "other@siteboard.kr")


@pytest.fixture
def login(client: TestClient):
    """이메일로 로그인해 Authorization 헤더를 돌려주는 함수."""
    def _login(email: str, password: str = PASSWORD) -> dict:
        return login_headers(client, email, password)
    return _login
