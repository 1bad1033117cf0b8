"""
파일 업로드 / 고아 파일 API 테스트
"""

import io
import os
import time

from PIL import Image

from siteboard.core.config import settings
from tests.helpers import create_category, create_content


def _png_bytes(size=(4, 4)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, (255, 0, 0)).save(buf, format="PNG")
    return buf.getvalue()


def _write(base, relative, data=b"x" * 10, age_hours=0):
    path = base / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    if age_hours:
        stamp = time.time() - age_hours * 3600
        os.utime(path, (stamp, stamp))
    return path


# =============================================================================
# 업로드
# =============================================================================


class TestUpload:
    def test_upload_png(self, client, uploads_dir, user_headers):
        res = client.post(
            "/upload",
            files={"file": ("red.png", _png_bytes(), "image/png")},
            data={"scope": "Post"},
            headers=user_headers,
        )
        assert res.status_code == 201, res.text
        url = res.json()["url"]
        assert url.startswith("/uploads/post/")
        assert url.endswith(".png")

        stored = uploads_dir / url[len("/uploads/"):]
        assert stored.is_file()
        # 정적 파일로 서빙된다
        assert client.get(url).status_code == 200

    def test_default_scope(self, client, uploads_dir, user_headers):
        res = client.post("/upload", files={"file": ("a.png", _png_bytes(), "image/png")}, headers=user_headers)
        assert res.json()["url"].startswith("/uploads/misc/")

    def test_requires_login(self, client, uploads_dir):
        res = client.post("/upload", files={"file": ("a.png", _png_bytes(), "image/png")})
        assert res.status_code in (401, 403)

    def test_rejects_non_image_type(self, client, uploads_dir, user_headers):
        res = client.post("/upload", files={"file": ("a.txt", b"hello", "text/plain")}, headers=user_headers)
        assert res.status_code == 415

    def test_rejects_corrupt_image(self, client, uploads_dir, user_headers):
        res = client.post("/upload", files={"file": ("a.png", b"not really a png", "image/png")}, headers=user_headers)
        assert res.status_code == 400

    def test_rejects_large_file(self, client, uploads_dir, user_headers, monkeypatch):
        monkeypatch.setattr(settings, "UPLOAD_MAX_BYTES", 32)
        res = client.post("/upload", files={"file": ("a.png", _png_bytes((64, 64)), "image/png")}, headers=user_headers)
        assert res.status_code == 413

    def test_remote_requires_http(self, client, uploads_dir, user_headers):
        res = client.post("/upload/remote", json={"image_url": "ftp://example.com/a.png"}, headers=user_headers)
        assert res.status_code == 400


# =============================================================================
# 고아 파일
# =============================================================================


class TestOrphanFiles:
    def test_scan(self, client, uploads_dir, admin_headers):
        category = create_category(client, admin_headers, "블로그", slug="blog")
        create_content(client, admin_headers, category["id"], "이미지 글", image_url="https://siteboard.kr/uploads/content/kept.png")

        _write(uploads_dir, "content/kept.png", age_hours=48)
        _write(uploads_dir, "content/old.png", data=b"y" * 20, age_hours=48)
        _write(uploads_dir, "content/fresh.png", age_hours=1)
        _write(uploads_dir, "branding/logo.png", age_hours=48)
        _write(uploads_dir, "content/notes.txt", age_hours=48)

        res = client.get("/admin/orphan-files", headers=admin_headers)
        assert res.status_code == 200
        body = res.json()
        assert body["stats"]["total_files"] == 3
        assert body["stats"]["referenced_files"] == 1
        assert body["stats"]["orphan_files"] == 1
        assert body["stats"]["orphan_size"] == 20
        assert [f["path"] for f in body["orphan_files"]] == ["/uploads/content/old.png"]
        assert body["orphan_files"][0]["age_in_hours"] >= 47

    def test_delete(self, client, uploads_dir, admin_headers):
        category = create_category(client, admin_headers, "블로그", slug="blog")
        create_content(client, admin_headers, category["id"], "이미지 글", image_url="/uploads/content/kept.png")
        kept = _write(uploads_dir, "content/kept.png", age_hours=48)
        old = _write(uploads_dir, "content/old.png", age_hours=48)

        res = client.request(
            "DELETE",
            "/admin/orphan-files",
            json={"files": ["/uploads/content/old.png", "/uploads/content/kept.png", "/uploads/../../etc/passwd"]},
            headers=admin_headers,
        )
        assert res.status_code == 200
        body = res.json()
        assert body["deleted_count"] == 1
        assert body["skipped_count"] == 2
        assert len(body["errors"]) == 2
        assert not old.exists()
        assert kept.exists()

    def test_delete_requires_files(self, client, uploads_dir, admin_headers):
        res = client.request("DELETE", "/admin/orphan-files", json={"files": []}, headers=admin_headers)
        assert res.status_code == 400

    def test_requires_admin(self, client, uploads_dir, user_headers):
        assert client.get("/admin/orphan-files", headers=user_headers).status_code == 403
