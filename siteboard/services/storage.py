import asyncio
import io
import mimetypes
import os
import secrets
import re
import time
from datetime import datetime
from typing import Optional, Tuple

import aiohttp
from PIL import Image, UnidentifiedImageError

from siteboard.core.config import settings


ALLOWED_CONTENT_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}

DEFAULT_SCOPE = "misc"


class UploadRejected(Exception):
    """업로드 거부 (HTTP 상태코드 포함)"""

    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


def sanitize_scope(scope: Optional[str]) -> str:
    cleaned = re.sub(r"[^a-z0-9_-]", "", (scope or "").lower())
    return cleaned or DEFAULT_SCOPE


def extension_for(content_type: Optional[str]) -> str:
    ctype = (content_type or "").split(";")[0].strip().lower()
    if ctype in ALLOWED_CONTENT_TYPES:
        return ALLOWED_CONTENT_TYPES[ctype]
    return mimetypes.guess_extension(ctype) or ".jpg"


def check_size(size: int) -> None:
    if size > settings.UPLOAD_MAX_BYTES:
        limit_mb = settings.UPLOAD_MAX_BYTES // (1024 * 1024)
        raise UploadRejected(413, f"파일 크기는 최대 {limit_mb}MB까지 가능합니다.")


def verify_image(data: bytes) -> None:
    """Pillow 로 열리지 않으면 이미지가 아니다."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
        raise UploadRejected(400, "손상되었거나 지원하지 않는 이미지입니다.")


def build_relative_path(scope: str, ext: str, now: Optional[datetime] = None) -> str:
    """{scope}/{yyyy}/{mm}/{dd}/{timestamp_ms}-{rand6}{ext}"""
    now = now or datetime.now()
    name = f"{int(time.time() * 1000)}-{secrets.token_hex(3)}{ext}"
    return "/".join([scope, f"{now:%Y}", f"{now:%m}", f"{now:%d}", name])


class Storage:
    def save_bytes(self, data: bytes, *, scope: str, ext: str) -> str:
        raise NotImplementedError


class LocalStorage(Storage):
    def __init__(self, base_dir: str, public_base: str = "/uploads") -> None:
        self.base_dir = base_dir
        self.public_base = public_base.rstrip("/")
        os.makedirs(self.base_dir, exist_ok=True)

    def save_bytes(self, data: bytes, *, scope: str, ext: str) -> str:
        relative = build_relative_path(sanitize_scope(scope), ext)
        path = os.path.join(self.base_dir, *relative.split("/"))
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as f:
            f.write(data)
        return f"{self.public_base}/{relative}"


def get_storage() -> Storage:
    from siteboard.core.paths import get_upload_dir
    return LocalStorage(base_dir=get_upload_dir(), public_base=settings.UPLOADS_URL_PREFIX)


def save_upload(data: bytes, content_type: Optional[str], scope: Optional[str]) -> str:
    """업로드 검증 후 저장. 저장된 공개 URL 반환."""
    ctype = (content_type or "").split(";")[0].strip().lower()
    if ctype not in ALLOWED_CONTENT_TYPES:
        raise UploadRejected(415, "JPG, PNG, GIF, WEBP 이미지만 업로드할 수 있습니다.")
    check_size(len(data))
    verify_image(data)
    return get_storage().save_bytes(data, scope=sanitize_scope(scope), ext=ALLOWED_CONTENT_TYPES[ctype])


async def fetch_remote_image(url: str) -> Tuple[bytes, str]:
    """원격 이미지 다운로드 → (bytes, content_type)"""
    if not url.lower().startswith(("http://", "https://")):
        raise UploadRejected(400, "http(s) 주소만 가져올 수 있습니다.")
    timeout = aiohttp.ClientTimeout(total=settings.REMOTE_IMAGE_TIMEOUT_SECONDS)
    try:
        async with aiohttp.ClientSession() as session:
            async with session.get(url, timeout=timeout) as resp:
                if resp.status >= 400:
                    raise UploadRejected(502, f"이미지를 가져오지 못했습니다. (HTTP {resp.status})")
                content_type = (resp.headers.get("Content-Type") or "").split(";")[0].strip().lower()
                if not content_type.startswith("image/"):
                    raise UploadRejected(415, "이미지 주소가 아닙니다.")
                if resp.content_length is not None:
                    check_size(resp.content_length)
                data = await resp.read()
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise UploadRejected(502, f"이미지를 가져오지 못했습니다: {e}")
    check_size(len(data))
    return data, content_type


async def import_remote_image(url: str, scope: Optional[str]) -> str:
    data, content_type = await fetch_remote_image(url)
    verify_image(data)
    return get_storage().save_bytes(data, scope=sanitize_scope(scope), ext=extension_for(content_type))
