"""
고아 파일 서비스

업로드 폴더의 이미지 중 DB 어디에서도 참조하지 않고 일정 시간이 지난 파일을 찾아 정리한다.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Set, Any
import logging
import os

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from siteboard.core.config import settings
from siteboard.core.paths import get_upload_dir
from siteboard.models.category import Category
from siteboard.models.content import Content
from siteboard.models.menu import MenuItem
from siteboard.models.post import Post, PostAttachment
from siteboard.services import richtext
from siteboard.services.site_settings_service import get_settings, referenced_image_urls

logger = logging.getLogger(__name__)


IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")
EXCLUDED_FOLDERS = ("branding",)


@dataclass
class UploadedFile:
    path: str  # /uploads/...
    absolute_path: str
    name: str
    size: int
    created_at: datetime
    age_in_hours: int

    def as_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "name": self.name,
            "size": self.size,
            "created_at": self.created_at,
            "age_in_hours": self.age_in_hours,
        }


def _url_prefix() -> str:
    return settings.UPLOADS_URL_PREFIX.rstrip("/")


def normalize_image_url(url: str) -> str:
    """'https://host/uploads/a.png?x' 같은 값을 '/uploads/a.png?x' 로. 업로드 경로가 없으면 그대로."""
    marker = f"{_url_prefix()}/"
    index = url.find(marker)
    if index < 0:
        return url
    return url[index:]


def scan_uploaded_files(base_dir: str, now: Optional[datetime] = None) -> List[UploadedFile]:
    """업로드 폴더를 재귀 순회하며 이미지 파일 목록을 만든다 (branding 폴더 제외)."""
    now = now or datetime.now(timezone.utc)
    files: List[UploadedFile] = []
    if not os.path.isdir(base_dir):
        return files

    for root, dirs, names in os.walk(base_dir):
        dirs[:] = [d for d in dirs if d not in EXCLUDED_FOLDERS]
        for name in names:
            if os.path.splitext(name)[1].lower() not in IMAGE_EXTENSIONS:
                continue
            absolute = os.path.join(root, name)
            try:
                stat = os.stat(absolute)
            except OSError as e:
                logger.warning(f"[orphan] stat failed: {absolute}: {e}")
                continue
            created = datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)
            relative = os.path.relpath(absolute, base_dir).replace(os.sep, "/")
            files.append(UploadedFile(
                path=f"{_url_prefix()}/{relative}",
                absolute_path=absolute,
                name=name,
                size=stat.st_size,
                created_at=created,
                age_in_hours=int((now - created).total_seconds() // 3600),
            ))
    return files


def classify_files(
    files: Iterable[UploadedFile],
    referenced: Set[str],
    min_age_hours: int,
) -> Dict[str, Any]:
    """참조/고아 분류와 통계. 참조되지 않아도 min_age_hours 미만이면 고아가 아니다."""
    all_files = list(files)
    referenced_files = []
    orphan_files = []
    for f in all_files:
        if normalize_image_url(f.path) in referenced:
            referenced_files.append(f)
        elif f.age_in_hours >= min_age_hours:
            orphan_files.append(f)
    return {
        "stats": {
            "total_files": len(all_files),
            "total_size": sum(f.size for f in all_files),
            "referenced_files": len(referenced_files),
            "referenced_size": sum(f.size for f in referenced_files),
            "orphan_files": len(orphan_files),
            "orphan_size": sum(f.size for f in orphan_files),
        },
        "orphan_files": orphan_files,
    }


async def collect_referenced_images(db: AsyncSession) -> Set[str]:
    """DB 에서 참조되는 모든 이미지 URL (정규화)"""
    urls: List[str] = []

    result = await db.execute(select(Content.image_url, Content.content))
    for image_url, body in result.all():
        if image_url:
            urls.append(image_url)
        urls.extend(richtext.extract_images(body))

    result = await db.execute(select(Post.content))
    for (body,) in result.all():
        urls.extend(richtext.extract_images(body))

    result = await db.execute(select(PostAttachment.url))
    urls.extend(url for (url,) in result.all() if url)

    result = await db.execute(select(Category.thumbnail_url).where(Category.thumbnail_url.is_not(None)))
    urls.extend(url for (url,) in result.all() if url)

    result = await db.execute(select(MenuItem.thumbnail_url).where(MenuItem.thumbnail_url.is_not(None)))
    urls.extend(url for (url,) in result.all() if url)

    urls.extend(referenced_image_urls(await get_settings(db)))
    return {normalize_image_url(u) for u in urls}


async def find_orphans(db: AsyncSession, base_dir: Optional[str] = None) -> Dict[str, Any]:
    base_dir = base_dir or get_upload_dir()
    referenced = await collect_referenced_images(db)
    return classify_files(scan_uploaded_files(base_dir), referenced, settings.ORPHAN_MIN_AGE_HOURS)


def resolve_upload_path(url_path: str, base_dir: str) -> Optional[str]:
    """'/uploads/...' → 절대 경로. 업로드 폴더 밖을 가리키면 None."""
    normalized = normalize_image_url(url_path)
    prefix = f"{_url_prefix()}/"
    relative = normalized[len(prefix):] if normalized.startswith(prefix) else normalized.lstrip("/")
    base = os.path.realpath(base_dir)
    target = os.path.realpath(os.path.join(base, relative))
    if target == base or not target.startswith(base + os.sep):
        return None
    return target


async def delete_orphans(
    db: AsyncSession,
    files: List[str],
    base_dir: Optional[str] = None,
    dry_run: bool = False,
) -> Dict[str, Any]:
    """참조 중인 파일과 업로드 폴더 밖 경로는 건너뛴다."""
    base_dir = base_dir or get_upload_dir()
    referenced = await collect_referenced_images(db)

    deleted = 0
    skipped = 0
    errors: List[str] = []
    for file_path in files:
        if normalize_image_url(file_path) in referenced:
            skipped += 1
            errors.append(f"{file_path}: DB에서 참조 중인 파일입니다")
            continue
        target = resolve_upload_path(file_path, base_dir)
        if target is None:
            skipped += 1
            errors.append(f"{file_path}: 잘못된 경로입니다")
            continue
        if dry_run:
            deleted += 1
            continue
        try:
            os.remove(target)
            deleted += 1
        except OSError as e:
            skipped += 1
            errors.append(f"{file_path}: 삭제 실패")
            logger.warning(f"[orphan] delete failed: {target}: {e}")
    return {"deleted_count": deleted, "skipped_count": skipped, "errors": errors}
