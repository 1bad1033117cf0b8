"""
게시판 / 커뮤니티 그룹 API 테스트
"""

import uuid

from tests.helpers import default_board_key


def _groups(client, headers):
    res = client.get("/admin/boards", headers=headers)
    assert res.status_code == 200, res.text
    return res.json()


# =============================================================================
# 그룹
# =============================================================================


class TestCommunityGroups:
    def test_default_group_seeded(self, client, admin_headers):
        groups = _groups(client, admin_headers)
        assert len(groups) == 1
        group = groups[0]
        assert group["label"] == "커뮤니티"
        assert group["href"] == "/community/community-1"
        assert group["slug"] == "community-1"
        assert [b["name"] for b in group["boards"]] == ["후기", "자유게시판"]
        assert [b["key"] for b in group["boards"]] == ["community-1__board-1", "community-1__board-2"]

        # 다시 불러도 중복 생성되지 않는다
        assert len(_groups(client, admin_headers)) == 1

    def test_create_group(self, client, admin_headers):
        res = client.post("/admin/boards/groups", json={"label": "동호회", "slug": "club"}, headers=admin_headers)
        assert res.status_code == 201
        body = res.json()
        assert body["href"] == "/community/club"
        assert [b["key"] for b in body["boards"]] == ["club__board-1", "club__board-2"]

        dup = client.post("/admin/boards/groups", json={"label": "또 동호회", "slug": "club"}, headers=admin_headers)
        assert dup.status_code == 409

        menu = client.get("/menus/main").json()
        assert any(i["href"] == "/community/club" and i["link_type"] == "community" for i in menu["items"])

    def test_public_list_and_community_disabled(self, client, admin_headers, user_headers):
        _groups(client, admin_headers)
        assert len(client.get("/boards").json()) == 1

        client.put("/admin/site-settings", json={"community_enabled": False}, headers=admin_headers)
        assert client.get("/boards").status_code == 403
        assert client.get("/boards", headers=user_headers).status_code == 403
        assert client.get("/boards", headers=admin_headers).status_code == 200


# =============================================================================
# 게시판
# =============================================================================


class TestBoards:
    def test_create_next_number(self, client, admin_headers):
        group = _groups(client, admin_headers)[0]
        res = client.post(
            "/admin/boards",
            json={"menu_item_id": group["menu_item_id"], "name": "  질문  "},
            headers=admin_headers,
        )
        assert res.status_code == 201
        board = res.json()
        assert board["name"] == "질문"
        assert board["slug"] == "board-3"
        assert board["key"] == "community-1__board-3"
        assert board["order"] == 3

    def test_create_unknown_group(self, client, admin_headers):
        res = client.post("/admin/boards", json={"menu_item_id": str(uuid.uuid4()), "name": "x"}, headers=admin_headers)
        assert res.status_code == 404

    def test_hidden_board_not_public(self, client, admin_headers):
        group = _groups(client, admin_headers)[0]
        board_id = group["boards"][0]["id"]
        res = client.patch(f"/admin/boards/{board_id}", json={"is_visible": False, "description": "숨김"}, headers=admin_headers)
        assert res.status_code == 200
        assert res.json()["is_visible"] is False

        public_boards = client.get("/boards").json()[0]["boards"]
        assert [b["name"] for b in public_boards] == ["자유게시판"]
        assert len(_groups(client, admin_headers)[0]["boards"]) == 2

    def test_update_null_name_ignored(self, client, admin_headers):
        board = _groups(client, admin_headers)[0]["boards"][0]
        res = client.patch(
            f"/admin/boards/{board['id']}",
            json={"name": None, "is_visible": None, "description": "후기 모음"},
            headers=admin_headers,
        )
        assert res.status_code == 200, res.text
        assert res.json()["name"] == board["name"]
        assert res.json()["is_visible"] is True
        assert res.json()["description"] == "후기 모음"

    def test_reorder(self, client, admin_headers):
        group = _groups(client, admin_headers)[0]
        first, second = (b["id"] for b in group["boards"])
        res = client.put(
            "/admin/boards/reorder",
            json={"menu_item_id": group["menu_item_id"], "ids": [second, first]},
            headers=admin_headers,
        )
        assert res.status_code == 200
        assert [b["id"] for b in res.json()] == [second, first]
        assert [b["name"] for b in _groups(client, admin_headers)[0]["boards"]] == ["자유게시판", "후기"]

    def test_home_settings(self, client, admin_headers):
        group = _groups(client, admin_headers)[0]
        board_id = group["boards"][0]["id"]
        res = client.put(
            "/admin/boards/home-settings",
            json={"items": [{"id": board_id, "show_on_home": True}]},
            headers=admin_headers,
        )
        assert res.status_code == 200
        assert res.json()[0]["show_on_home"] is True
        assert res.json()[0]["home_item_count"] == 5

        res = client.put(
            "/admin/boards/home-settings",
            json={"items": [{"id": board_id, "show_on_home": True, "home_item_count": 0}]},
            headers=admin_headers,
        )
        assert res.json()[0]["home_item_count"] == 1

    def test_trash_restore_permanent(self, client, admin_headers):
        key = default_board_key(client, admin_headers)
        board = _groups(client, admin_headers)[0]["boards"][0]
        assert board["key"] == key

        early = client.delete(f"/admin/boards/{board['id']}/permanent", headers=admin_headers)
        assert early.status_code == 400

        trashed = client.delete(f"/admin/boards/{board['id']}", headers=admin_headers)
        assert trashed.status_code == 200
        assert trashed.json()["deleted_at"] is not None
        assert [b["id"] for b in client.get("/admin/boards/trash", headers=admin_headers).json()] == [board["id"]]
        assert len(_groups(client, admin_headers)[0]["boards"]) == 1
        assert client.get("/posts", params={"board": key}).status_code == 404

        restored = client.post(f"/admin/boards/{board['id']}/restore", headers=admin_headers)
        assert restored.status_code == 200
        assert len(_groups(client, admin_headers)[0]["boards"]) == 2

        client.delete(f"/admin/boards/{board['id']}", headers=admin_headers)
        assert client.delete(f"/admin/boards/{board['id']}/permanent", headers=admin_headers).status_code == 204
        assert client.get("/admin/boards/trash", headers=admin_headers).json() == []

    def test_requires_admin(self, client, user_headers):
        assert client.get("/admin/boards", headers=user_headers).status_code == 403
