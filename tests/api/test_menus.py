"""
메뉴 API 테스트
"""


def _add_item(client, headers, key="main", **payload):
    res = client.post(f"/admin/menus/{key}/items", json=payload, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()


class TestPublicMenu:
    def test_default_menu_when_empty(self, client):
        res = client.get("/menus/main")
        assert res.status_code == 200
        body = res.json()
        assert body["id"] == "default"
        labels = [i["label"] for i in body["items"]]
        assert labels[0] == "블로그"
        assert labels[-1] == "커뮤니티"
        assert body["items"][-1]["link_type"] == "community"

    def test_unknown_key_rejected(self, client):
        assert client.get("/menus/sidebar").status_code == 422

    def test_hidden_items_only_for_admin(self, client, admin_headers):
        _add_item(client, admin_headers, label="공개", href="/contents/open")
        _add_item(client, admin_headers, label="숨김", href="/contents/secret", is_visible=False)

        public = [i["label"] for i in client.get("/menus/main").json()["items"]]
        admin = [i["label"] for i in client.get("/admin/menus/main", headers=admin_headers).json()["items"]]
        assert public == ["공개"]
        assert admin == ["공개", "숨김"]


class TestMenuItems:
    def test_category_link_creates_category(self, client, admin_headers):
        item = _add_item(client, admin_headers, label="블로그", href="/contents/blog")
        assert item["link_type"] == "category"
        assert item["linked_category_id"]

        category = client.get("/categories/blog").json()
        assert category["id"] == item["linked_category_id"]
        assert category["name"] == "블로그"

    def test_external_link_inferred(self, client, admin_headers):
        item = _add_item(client, admin_headers, label="깃허브", href="https://github.com")
        assert item["link_type"] == "external"
        assert item["is_external"] is True

    def test_explicit_is_external_kept(self, client, admin_headers):
        item = _add_item(client, admin_headers, label="외부", href="https://siteboard.kr/docs", is_external=False)
        assert item["link_type"] == "external"
        assert item["is_external"] is False

        internal = _add_item(client, admin_headers, label="새창", href="/contents/guide", is_external=True)
        assert internal["is_external"] is True

    def test_community_item_gets_default_boards(self, client, admin_headers):
        item = _add_item(client, admin_headers, label="라운지", href="/community/lounge")
        assert item["link_type"] == "community"
        assert [b["name"] for b in item["boards"]] == ["후기", "자유게시판"]
        assert [b["key"] for b in item["boards"]] == ["lounge__board-1", "lounge__board-2"]

    def test_update_and_delete(self, client, admin_headers):
        item = _add_item(client, admin_headers, label="뉴스", href="/contents/news")
        res = client.patch(
            f"/admin/menus/items/{item['id']}",
            json={"label": "소식", "badge_text": "NEW"},
            headers=admin_headers,
        )
        assert res.status_code == 200
        assert res.json()["label"] == "소식"
        assert res.json()["badge_text"] == "NEW"

        assert client.delete(f"/admin/menus/items/{item['id']}", headers=admin_headers).status_code == 204
        assert client.delete(f"/admin/menus/items/{item['id']}", headers=admin_headers).status_code == 404

    def test_update_null_keeps_required_fields(self, client, admin_headers):
        item = _add_item(client, admin_headers, label="뉴스", href="/contents/news", badge_text="HOT")
        res = client.patch(
            f"/admin/menus/items/{item['id']}",
            json={"label": None, "is_visible": None, "badge_text": None},
            headers=admin_headers,
        )
        assert res.status_code == 200, res.text
        body = res.json()
        assert body["label"] == "뉴스"
        assert body["is_visible"] is True
        assert body["badge_text"] is None

    def test_reorder(self, client, admin_headers):
        a = _add_item(client, admin_headers, label="A", href="/contents/a")
        b = _add_item(client, admin_headers, label="B", href="/contents/b")
        c = _add_item(client, admin_headers, label="C", href="/contents/c")

        res = client.put(
            "/admin/menus/main/reorder",
            json={"ids": [c["id"], a["id"], b["id"]]},
            headers=admin_headers,
        )
        assert res.status_code == 200
        items = res.json()["items"]
        assert [i["label"] for i in items] == ["C", "A", "B"]
        assert [i["order"] for i in items] == [1, 2, 3]

    def test_reorder_unknown_menu(self, client, admin_headers):
        res = client.put(
            "/admin/menus/footer/reorder",
            json={"ids": ["00000000-0000-0000-0000-000000000001"]},
            headers=admin_headers,
        )
        assert res.status_code == 404
