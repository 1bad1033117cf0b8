import os

from siteboard.core.config import settings


def get_project_root() -> str:
    """프로젝트 루트 절대경로를 반환한다.
    이 파일은 siteboard/core/paths.py 에 위치하므로,
    상위 상위 디렉토리가 프로젝트 루트가 된다.
    """
    package_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return os.path.dirname(package_dir)


def get_upload_dir() -> str:
    """업로드 디렉토리 절대경로를 반환한다.
    - 설정 UPLOADS_DIR 가 있으면 이를 우선 사용한다.
    - 없으면 프로젝트 루트의 uploads 를 사용한다.
    디렉토리는 존재를 보장한다.
    """
    uploads = settings.UPLOADS_DIR or os.path.join(get_project_root(), "uploads")
    uploads = os.path.abspath(uploads)
    os.makedirs(uploads, exist_ok=True)
    return uploads


def ensure_sqlite_dir(database_url: str) -> None:
    """sqlite 파일 DB의 상위 디렉토리를 만든다."""
    if not database_url.startswith("sqlite"):
        return
    _, _, path = database_url.partition(":///")
    if not path or path.startswith(":memory:"):
        return
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
