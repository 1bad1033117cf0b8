"""
파일 업로드 / 고아 파일 API
"""

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import logging

from siteboard.core.config import settings
from siteboard.core.database import get_db
from siteboard.core.security import get_current_admin, get_current_user
from siteboard.models.user import User
from siteboard.schemas.files import (
    UploadResponse,
    RemoteImageRequest,
    OrphanScanResponse,
    OrphanDeleteRequest,
    OrphanDeleteResponse,
)
from siteboard.services import orphan_service
from siteboard.services.storage import UploadRejected, import_remote_image, save_upload

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter()


@router.post("", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_file(
    file: UploadFile = File(...),
    scope: Optional[str] = Form(None),
    current_user: User = Depends(get_current_user),
):
    """
    이미지 업로드. 저장된 파일의 URL 을 반환합니다.
    - JPG/PNG/GIF/WEBP, 최대 UPLOAD_MAX_BYTES
    """
    try:
        # 한도 + 1 바이트까지만 읽어 초과 여부를 판단한다.
        data = await file.read(settings.UPLOAD_MAX_BYTES + 1)
        url = save_upload(data, file.content_type, scope)
    except UploadRejected as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)
    except Exception as e:
        logger.exception(f"[upload] save failed: {e}")
        raise HTTPException(status_code=500, detail="파일 저장에 실패했습니다.")
    finally:
        await file.close()
    return UploadResponse(url=url)


@router.post("/remote", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_remote_image(
    payload: RemoteImageRequest,
    current_user: User = Depends(get_current_user),
):
    """원격 이미지 주소를 내려받아 업로드 폴더에 저장"""
    try:
        url = await import_remote_image(payload.image_url.strip(), payload.scope)
    except UploadRejected as e:
        if e.status_code == 502:
            logger.warning(f"[upload] remote fetch failed: {payload.image_url}: {e.detail}")
        raise HTTPException(status_code=e.status_code, detail=e.detail)
    except Exception as e:
        logger.exception(f"[upload] remote save failed: {e}")
        raise HTTPException(status_code=500, detail="파일 저장에 실패했습니다.")
    return UploadResponse(url=url)


@admin_router.get("", response_model=OrphanScanResponse)
async def list_orphan_files(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """고아 파일 목록과 통계"""
    try:
        report = await orphan_service.find_orphans(db)
    except Exception as e:
        logger.exception(f"[orphan] scan failed: {e}")
        raise HTTPException(status_code=500, detail="고아 파일 조회에 실패했습니다.")
    return OrphanScanResponse(
        stats=report["stats"],
        orphan_files=[f.as_dict() for f in report["orphan_files"]],
    )


@admin_router.delete("", response_model=OrphanDeleteResponse)
async def delete_orphan_files(
    payload: OrphanDeleteRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """고아 파일 삭제 (참조 중인 파일/잘못된 경로는 건너뜀)"""
    if not payload.files:
        raise HTTPException(status_code=400, detail="삭제할 파일 목록이 필요합니다.")
    try:
        return await orphan_service.delete_orphans(db, payload.files)
    except Exception as e:
        logger.exception(f"[orphan] delete failed: {e}")
        raise HTTPException(status_code=500, detail="파일 삭제에 실패했습니다.")
