"""
게시글 / 댓글 / 좋아요 / 스크랩 API 테스트
"""

import uuid

import pytest

from tests.helpers import create_post, default_board_key


@pytest.fixture
def board_key(client, admin_headers):
    return default_board_key(client, admin_headers)


# =============================================================================
# 게시글
# =============================================================================


class TestPosts:
    def test_create_and_list(self, client, board_key, user_headers):
        post = create_post(client, user_headers, board_key, "첫 글")
        assert post["author"]["name"]
        assert post["view_count"] == 0

        res = client.get("/posts", params={"board": board_key})
        assert res.status_code == 200
        body = res.json()
        assert body["total"] == 1
        assert body["board_key"] == board_key
        assert body["board_name"] == "후기"
        assert body["items"][0]["title"] == "첫 글"

    def test_board_key_is_case_insensitive(self, client, board_key, user_headers):
        create_post(client, user_headers, board_key.upper())
        assert client.get("/posts", params={"board": board_key.upper()}).json()["total"] == 1

    def test_unknown_board(self, client, board_key, user_headers):
        res = client.post(
            "/posts",
            json={"title": "x", "content": "y", "board_key": "nope__board-1"},
            headers=user_headers,
        )
        assert res.status_code == 404
        assert client.get("/posts", params={"board": "nope__board-1"}).status_code == 404

    def test_login_required(self, client, board_key):
        res = client.post("/posts", json={"title": "x", "content": "y", "board_key": board_key})
        assert res.status_code in (401, 403)

    def test_pin_only_by_admin(self, client, board_key, admin_headers, user_headers):
        user_post = create_post(client, user_headers, board_key, "회원 고정 시도", is_pinned=True)
        assert user_post["is_pinned"] is False

        create_post(client, admin_headers, board_key, "공지", is_pinned=True)
        create_post(client, user_headers, board_key, "일반")

        items = client.get("/posts", params={"board": board_key}).json()["items"]
        assert items[0]["title"] == "공지"
        assert items[0]["is_pinned"] is True

    def test_hidden_board(self, client, board_key, admin_headers, user_headers):
        board = client.get("/admin/boards", headers=admin_headers).json()[0]["boards"][0]
        client.patch(f"/admin/boards/{board['id']}", json={"is_visible": False}, headers=admin_headers)

        denied = client.post("/posts", json={"title": "x", "content": "y", "board_key": board_key}, headers=user_headers)
        assert denied.status_code == 403
        assert client.get("/posts", params={"board": board_key}).status_code == 404

        create_post(client, admin_headers, board_key, "관리자 글")
        assert client.get("/posts", params={"board": board_key}, headers=admin_headers).json()["total"] == 1

    def test_view_count(self, client, board_key, user_headers):
        post = create_post(client, user_headers, board_key)
        client.get(f"/posts/{post['id']}", params={"view": 1})
        client.get(f"/posts/{post['id']}", params={"view": 1})
        plain = client.get(f"/posts/{post['id']}").json()
        assert plain["view_count"] == 2
        assert plain["board_key"] == board_key
        assert plain["liked"] is False
        assert plain["comments"] == []

    def test_missing_post(self, client, board_key):
        assert client.get(f"/posts/{uuid.uuid4()}").status_code == 404

    def test_update_permissions_and_attachments(self, client, board_key, admin_headers, user_headers, other_user_headers):
        post = create_post(
            client, user_headers, board_key, "원본",
            attachments=[{"url": "/uploads/post/a.png", "name": "a.png", "type": "image/png", "size": 10}],
        )
        assert len(post["attachments"]) == 1

        forbidden = client.put(f"/posts/{post['id']}", json={"title": "남의 글"}, headers=other_user_headers)
        assert forbidden.status_code == 403

        res = client.put(
            f"/posts/{post['id']}",
            json={
                "title": "수정",
                "attachments": [{"url": "https://cdn.siteboard.kr/b.pdf", "name": "b.pdf", "type": "application/pdf"}],
            },
            headers=user_headers,
        )
        assert res.status_code == 200
        assert res.json()["title"] == "수정"
        assert [a["name"] for a in res.json()["attachments"]] == ["b.pdf"]

        by_admin = client.put(f"/posts/{post['id']}", json={"is_pinned": True}, headers=admin_headers)
        assert by_admin.json()["is_pinned"] is True

    def test_attachment_url_validated(self, client, board_key, user_headers):
        res = client.post(
            "/posts",
            json={
                "title": "x", "content": "y", "board_key": board_key,
                "attachments": [{"url": "javascript:alert(1)", "name": "x", "type": "text/plain"}],
            },
            headers=user_headers,
        )
        assert res.status_code == 422

    def test_delete(self, client, board_key, user_headers, other_user_headers, admin_headers):
        post = create_post(client, user_headers, board_key)
        assert client.delete(f"/posts/{post['id']}", headers=other_user_headers).status_code == 403
        assert client.delete(f"/posts/{post['id']}", headers=user_headers).status_code == 204
        assert client.get(f"/posts/{post['id']}").status_code == 404

        another = create_post(client, user_headers, board_key)
        assert client.delete(f"/posts/{another['id']}", headers=admin_headers).status_code == 204


# =============================================================================
# 비밀글
# =============================================================================


class TestSecretPosts:
    def test_secret_post_visibility(self, client, board_key, admin_headers, user_headers, other_user_headers):
        post = create_post(client, user_headers, board_key, "비밀", is_secret=True)

        listed = client.get("/posts", params={"board": board_key}).json()["items"][0]
        assert listed["title"] == "비밀"
        assert listed["content"] is None
        own = client.get("/posts", params={"board": board_key}, headers=user_headers).json()["items"][0]
        assert own["content"] is not None

        assert client.get(f"/posts/{post['id']}").status_code == 403
        assert client.get(f"/posts/{post['id']}", headers=other_user_headers).status_code == 403
        assert client.get(f"/posts/{post['id']}", headers=user_headers).status_code == 200
        assert client.get(f"/posts/{post['id']}", headers=admin_headers).status_code == 200

        comment = client.post(f"/posts/{post['id']}/comments", json={"content": "몰래"}, headers=other_user_headers)
        assert comment.status_code == 403


# =============================================================================
# 좋아요 / 스크랩
# =============================================================================


class TestReactions:
    def test_like_toggle(self, client, board_key, user_headers, other_user_headers):
        post = create_post(client, user_headers, board_key)
        url = f"/posts/{post['id']}/like"

        assert client.post(url, headers=other_user_headers).json() == {"liked": True, "like_count": 1}
        assert client.post(url, headers=user_headers).json() == {"liked": True, "like_count": 2}
        assert client.get(f"/posts/{post['id']}", headers=other_user_headers).json()["liked"] is True
        assert client.post(url, headers=other_user_headers).json() == {"liked": False, "like_count": 1}

    def test_like_requires_login(self, client, board_key, user_headers):
        post = create_post(client, user_headers, board_key)
        assert client.post(f"/posts/{post['id']}/like").status_code in (401, 403)

    def test_scrap_and_my_scraps(self, client, board_key, user_headers, other_user_headers):
        post = create_post(client, user_headers, board_key, "스크랩할 글")
        url = f"/posts/{post['id']}/scrap"

        assert client.post(url, headers=other_user_headers).json() == {"scrapped": True, "scrap_count": 1}
        mine = client.get("/posts/me/scraps", headers=other_user_headers).json()
        assert [p["title"] for p in mine] == ["스크랩할 글"]
        assert client.get(f"/posts/{post['id']}", headers=other_user_headers).json()["scrapped"] is True

        assert client.post(url, headers=other_user_headers).json() == {"scrapped": False, "scrap_count": 0}
        assert client.get("/posts/me/scraps", headers=other_user_headers).json() == []


# =============================================================================
# 댓글
# =============================================================================


class TestComments:
    def test_create_and_list(self, client, board_key, user_headers, other_user_headers):
        post = create_post(client, user_headers, board_key)
        res = client.post(
            f"/posts/{post['id']}/comments",
            json={"content": "<b>좋은</b> 글이네요"},
            headers=other_user_headers,
        )
        assert res.status_code == 201
        assert res.json()["content"] == "좋은 글이네요"

        comments = client.get(f"/posts/{post['id']}/comments").json()
        assert [c["content"] for c in comments] == ["좋은 글이네요"]
        detail = client.get(f"/posts/{post['id']}").json()
        assert detail["comment_count"] == 1
        assert len(detail["comments"]) == 1

    def test_markup_only_comment_rejected(self, client, board_key, user_headers):
        post = create_post(client, user_headers, board_key)
        res = client.post(f"/posts/{post['id']}/comments", json={"content": "<p> </p>"}, headers=user_headers)
        assert res.status_code == 422

    def test_update_and_delete_permissions(self, client, board_key, user_headers, other_user_headers, admin_headers):
        post = create_post(client, user_headers, board_key)
        comment = client.post(f"/posts/{post['id']}/comments", json={"content": "처음"}, headers=other_user_headers).json()

        assert client.patch(f"/comments/{comment['id']}", json={"content": "남의 댓글"}, headers=user_headers).status_code == 403
        edited = client.patch(f"/comments/{comment['id']}", json={"content": "고침"}, headers=other_user_headers)
        assert edited.status_code == 200
        assert edited.json()["content"] == "고침"

        assert client.delete(f"/comments/{comment['id']}", headers=user_headers).status_code == 403
        assert client.delete(f"/comments/{comment['id']}", headers=admin_headers).status_code == 204
        assert client.delete(f"/comments/{comment['id']}", headers=admin_headers).status_code == 404
        assert client.get(f"/posts/{post['id']}").json()["comment_count"] == 0


# =============================================================================
# 커뮤니티 비활성화
# =============================================================================


class TestCommunityDisabled:
    def test_non_admin_blocked(self, client, board_key, admin_headers, user_headers):
        post = create_post(client, user_headers, board_key)
        client.put("/admin/site-settings", json={"community_enabled": False}, headers=admin_headers)

        assert client.get("/posts", params={"board": board_key}).status_code == 403
        assert client.get(f"/posts/{post['id']}", headers=user_headers).status_code == 403
        assert client.post(f"/posts/{post['id']}/like", headers=user_headers).status_code == 403
        assert client.get("/posts", params={"board": board_key}, headers=admin_headers).status_code == 200
