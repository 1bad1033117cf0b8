"""
SEO (robots / sitemap / IndexNow) 테스트
"""

from siteboard.core.config import settings
from tests.helpers import create_category, create_content, default_board_key


class TestRobots:
    def test_robots_txt(self, client):
        res = client.get("/robots.txt")
        assert res.status_code == 200
        assert res.headers["content-type"].startswith("text/plain")
        text = res.text
        assert "User-agent: *" in text
        assert "Disallow: /admin" in text
        assert "Sitemap: https://siteboard.kr/sitemap.xml" in text


class TestSitemap:
    def test_static_paths_only_on_empty_site(self, client):
        res = client.get("/sitemap.xml")
        assert res.status_code == 200
        assert res.headers["content-type"].startswith("application/xml")
        assert "<loc>https://siteboard.kr/</loc>" in res.text
        assert "<loc>https://siteboard.kr/community</loc>" in res.text

    def test_public_entries(self, client, admin_headers):
        blog = create_category(client, admin_headers, "블로그", slug="blog")
        members = create_category(client, admin_headers, "회원", slug="members", requires_auth=True)
        public = create_content(client, admin_headers, blog["id"], "Public Post")
        private = create_content(client, admin_headers, members["id"], "Members Post")
        hidden = create_content(client, admin_headers, blog["id"], "Hidden Post", is_visible=False)
        default_board_key(client, admin_headers)

        text = client.get("/sitemap.xml").text
        assert "https://siteboard.kr/contents/blog</loc>" in text
        assert f"https://siteboard.kr/contents/blog/{public['id_param']}</loc>" in text
        assert "<lastmod>" in text
        assert "/contents/members" not in text
        assert private["id"] not in text
        assert hidden["id"] not in text
        assert "https://siteboard.kr/community/community-1/board-1</loc>" in text
        assert "https://siteboard.kr/community/community-1/board-2</loc>" in text

    def test_trashed_board_excluded(self, client, admin_headers):
        default_board_key(client, admin_headers)
        board = client.get("/admin/boards", headers=admin_headers).json()[0]["boards"][0]
        client.delete(f"/admin/boards/{board['id']}", headers=admin_headers)
        assert "/community/community-1/board-1<" not in client.get("/sitemap.xml").text

    def test_hidden_group_boards_excluded(self, client, admin_headers):
        default_board_key(client, admin_headers)
        group = client.get("/admin/boards", headers=admin_headers).json()[0]
        res = client.patch(
            f"/admin/menus/items/{group['menu_item_id']}",
            json={"is_visible": False},
            headers=admin_headers,
        )
        assert res.status_code == 200
        assert client.get("/boards").json() == []
        assert "/community/community-1/" not in client.get("/sitemap.xml").text

    def test_community_disabled_excludes_boards(self, client, admin_headers):
        default_board_key(client, admin_headers)
        client.put("/admin/site-settings", json={"community_enabled": False}, headers=admin_headers)

        text = client.get("/sitemap.xml").text
        assert "/community/community-1/" not in text
        assert "<loc>https://siteboard.kr/community</loc>" not in text
        assert "<loc>https://siteboard.kr/</loc>" in text


class TestIndexNow:
    def test_key_file_missing(self, client, monkeypatch):
        monkeypatch.setattr(settings, "INDEXNOW_KEY", None)
        assert client.get("/indexnow-key.txt").status_code == 404

    def test_key_file(self, client, monkeypatch):
        monkeypatch.setattr(settings, "INDEXNOW_KEY", "abc123")
        res = client.get("/indexnow-key.txt")
        assert res.status_code == 200
        assert res.text == "abc123"

    def test_submit_skipped_without_key(self, client, admin_headers, monkeypatch):
        monkeypatch.setattr(settings, "INDEXNOW_KEY", None)
        res = client.post("/admin/indexnow", json={"urls": []}, headers=admin_headers)
        assert res.status_code == 200
        assert res.json() == {"submitted": 0, "status": "skipped", "status_code": None}

    def test_submit_requires_admin(self, client, user_headers):
        assert client.post("/admin/indexnow", json={}, headers=user_headers).status_code == 403
