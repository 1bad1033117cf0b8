"""
카테고리 / 태그 API 테스트
"""

from tests.helpers import create_category, create_content


# =============================================================================
# Categories
# =============================================================================


class TestCategories:
    def test_slug_from_name_and_conflict(self, client, admin_headers):
        category = create_category(client, admin_headers, "Tech News")
        assert category["slug"] == "tech-news"
        assert category["order"] == 1

        dup = client.post("/admin/categories", json={"name": "다른", "slug": "Tech News"}, headers=admin_headers)
        assert dup.status_code == 409

    def test_unsluggable_name(self, client, admin_headers):
        res = client.post("/admin/categories", json={"name": "!!!"}, headers=admin_headers)
        assert res.status_code == 400

    def test_hidden_category_visibility(self, client, admin_headers):
        create_category(client, admin_headers, "공개")
        create_category(client, admin_headers, "숨김", slug="hidden", is_visible=False)

        assert [c["name"] for c in client.get("/categories").json()] == ["공개"]
        assert client.get("/categories/hidden").status_code == 404
        assert client.get("/categories/hidden", headers=admin_headers).status_code == 200
        assert len(client.get("/admin/categories", headers=admin_headers).json()) == 2

    def test_update(self, client, admin_headers):
        category = create_category(client, admin_headers, "소식", slug="news")
        res = client.patch(
            f"/admin/categories/{category['id']}",
            json={"name": "뉴스", "requires_auth": True, "thumbnail_url": " "},
            headers=admin_headers,
        )
        assert res.status_code == 200
        body = res.json()
        assert body["name"] == "뉴스"
        assert body["requires_auth"] is True
        assert body["thumbnail_url"] is None

    def test_update_null_required_field_ignored(self, client, admin_headers):
        category = create_category(client, admin_headers, "소식", slug="news", description="설명")
        res = client.patch(
            f"/admin/categories/{category['id']}",
            json={"name": None, "order": None, "is_visible": None, "description": None},
            headers=admin_headers,
        )
        assert res.status_code == 200, res.text
        body = res.json()
        assert body["name"] == "소식"
        assert body["order"] == category["order"]
        assert body["is_visible"] is True
        assert body["description"] is None

    def test_delete_refused_with_contents(self, client, admin_headers):
        category = create_category(client, admin_headers, "블로그", slug="blog")
        create_content(client, admin_headers, category["id"], "첫 글")
        assert client.delete(f"/admin/categories/{category['id']}", headers=admin_headers).status_code == 400

        empty = create_category(client, admin_headers, "빈", slug="empty")
        assert client.delete(f"/admin/categories/{empty['id']}", headers=admin_headers).status_code == 204

    def test_view_settings(self, client, admin_headers):
        a = create_category(client, admin_headers, "A", slug="a")
        create_category(client, admin_headers, "B", slug="b")

        both_off = client.put(
            "/admin/categories/view-settings",
            json={"category_id": a["id"], "list_view_enabled": False, "card_view_enabled": False},
            headers=admin_headers,
        )
        assert both_off.status_code == 400

        missing_target = client.put("/admin/categories/view-settings", json={}, headers=admin_headers)
        assert missing_target.status_code == 400

        res = client.put(
            "/admin/categories/view-settings",
            json={"apply_to_all": True, "display_order": "list", "list_view_count": 5},
            headers=admin_headers,
        )
        assert res.status_code == 200
        assert res.json() == {"updated": 2}
        for category in client.get("/admin/categories", headers=admin_headers).json():
            assert category["display_order"] == "list"
            assert category["list_view_count"] == 5

    def test_home_settings_clamped(self, client, admin_headers):
        a = create_category(client, admin_headers, "A", slug="a")
        res = client.put(
            "/admin/categories/home-settings",
            json={"items": [{"id": a["id"], "show_on_home": True, "home_item_count": 50}]},
            headers=admin_headers,
        )
        assert res.status_code == 200
        assert res.json()[0]["show_on_home"] is True
        assert res.json()[0]["home_item_count"] == 10

    def test_filter_toggle(self, client, admin_headers):
        a = create_category(client, admin_headers, "A", slug="a")
        url = f"/admin/categories/{a['id']}/filter-toggle"
        assert client.put(url, headers=admin_headers).json()["tag_filter_enabled"] is True
        assert client.put(url, headers=admin_headers).json()["tag_filter_enabled"] is False
        assert client.put(url, params={"enabled": True}, headers=admin_headers).json()["tag_filter_enabled"] is True


# =============================================================================
# Tags
# =============================================================================


class TestTags:
    def test_global_and_category_tags(self, client, admin_headers):
        category = create_category(client, admin_headers, "블로그", slug="blog")
        client.post("/admin/tags", json={"name": "공통"}, headers=admin_headers)
        client.post("/admin/tags", json={"name": "파이썬", "category_id": category["id"]}, headers=admin_headers)

        assert [t["name"] for t in client.get("/tags").json()] == ["공통"]
        scoped = client.get("/tags", params={"category_id": category["id"]}).json()
        assert sorted(t["name"] for t in scoped) == ["공통", "파이썬"]

    def test_duplicate_slug_in_same_scope(self, client, admin_headers):
        assert client.post("/admin/tags", json={"name": "Python"}, headers=admin_headers).status_code == 201
        assert client.post("/admin/tags", json={"name": "python"}, headers=admin_headers).status_code == 409

        category = create_category(client, admin_headers, "블로그", slug="blog")
        scoped = client.post("/admin/tags", json={"name": "python", "category_id": category["id"]}, headers=admin_headers)
        assert scoped.status_code == 201

    def test_rename_and_delete(self, client, admin_headers):
        tag = client.post("/admin/tags", json={"name": "옛이름"}, headers=admin_headers).json()
        other = client.post("/admin/tags", json={"name": "다른"}, headers=admin_headers).json()

        res = client.patch(f"/admin/tags/{tag['id']}", json={"name": "새 이름"}, headers=admin_headers)
        assert res.status_code == 200
        assert res.json()["slug"] == "새-이름"

        clash = client.patch(f"/admin/tags/{tag['id']}", json={"name": "다른"}, headers=admin_headers)
        assert clash.status_code == 409

        assert client.delete(f"/admin/tags/{other['id']}", headers=admin_headers).status_code == 204
        assert client.delete(f"/admin/tags/{other['id']}", headers=admin_headers).status_code == 404

    def test_requires_admin(self, client, user_headers):
        assert client.post("/admin/tags", json={"name": "x"}, headers=user_headers).status_code == 403
