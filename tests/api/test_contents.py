"""
콘텐츠 API 테스트
"""

import uuid

from tests.helpers import create_category, create_content, lexical_doc


# =============================================================================
# 생성 / 수정
# =============================================================================


class TestContentWrite:
    def test_create_renders_body_and_price(self, client, admin_headers):
        category = create_category(client, admin_headers, "블로그", slug="blog")
        content = create_content(client, admin_headers, category["id"], "Hello World", price="15000")

        assert content["id_param"] == f"{content['id']}-hello-world"
        assert content["formatted_price"] == "15,000"
        assert content["category"] == {"id": category["id"], "slug": "blog", "name": "블로그"}
        assert "Hello World 본문" in content["html_content"]
        assert content["excerpt"] == "Hello World 본문"

    def test_markdown_takes_precedence(self, client, admin_headers):
        category = create_category(client, admin_headers, "블로그", slug="blog")
        content = create_content(
            client, admin_headers, category["id"], "마크다운",
            content="", content_markdown="# 제목\n\n**굵게**",
        )
        assert "<h1>제목</h1>" in content["html_content"]
        assert "<strong>굵게</strong>" in content["html_content"]

    def test_empty_body_rejected(self, client, admin_headers):
        category = create_category(client, admin_headers, "블로그", slug="blog")
        res = client.post(
            "/admin/contents",
            json={"title": "빈 글", "content": lexical_doc(""), "category_id": category["id"]},
            headers=admin_headers,
        )
        assert res.status_code == 400

    def test_unknown_category(self, client, admin_headers):
        res = client.post(
            "/admin/contents",
            json={"title": "글", "content": lexical_doc(), "category_id": str(uuid.uuid4())},
            headers=admin_headers,
        )
        assert res.status_code == 400

    def test_tags_replaced_on_update(self, client, admin_headers):
        category = create_category(client, admin_headers, "블로그", slug="blog")
        a = client.post("/admin/tags", json={"name": "a"}, headers=admin_headers).json()
        b = client.post("/admin/tags", json={"name": "b"}, headers=admin_headers).json()
        content = create_content(client, admin_headers, category["id"], "태그 글", tag_ids=[a["id"]])
        assert [t["slug"] for t in content["tags"]] == ["a"]

        res = client.put(
            f"/admin/contents/{content['id']}",
            json={"tag_ids": [b["id"]], "price": "문의"},
            headers=admin_headers,
        )
        assert res.status_code == 200
        assert [t["slug"] for t in res.json()["tags"]] == ["b"]
        assert res.json()["formatted_price"] == "문의"

    def test_requires_admin(self, client, user_headers):
        res = client.post("/admin/contents", json={"title": "x", "content": lexical_doc(), "category_id": str(uuid.uuid4())}, headers=user_headers)
        assert res.status_code == 403


# =============================================================================
# 공개 조회
# =============================================================================


class TestContentRead:
    def test_list_filters_by_category_and_tag(self, client, admin_headers):
        blog = create_category(client, admin_headers, "블로그", slug="blog")
        news = create_category(client, admin_headers, "소식", slug="news")
        tag = client.post("/admin/tags", json={"name": "python"}, headers=admin_headers).json()
        create_content(client, admin_headers, blog["id"], "태그 있음", tag_ids=[tag["id"]])
        create_content(client, admin_headers, blog["id"], "태그 없음")
        create_content(client, admin_headers, news["id"], "소식 글")
        create_content(client, admin_headers, blog["id"], "비공개", is_visible=False)

        everything = client.get("/contents").json()
        assert everything["total"] == 3

        blog_only = client.get("/contents", params={"category": "blog"}).json()
        assert sorted(i["title"] for i in blog_only["items"]) == ["태그 없음", "태그 있음"]

        tagged = client.get("/contents", params={"tag": "python"}).json()
        assert [i["title"] for i in tagged["items"]] == ["태그 있음"]

        assert client.get("/contents", params={"category": "missing"}).json()["total"] == 0

    def test_pagination(self, client, admin_headers):
        blog = create_category(client, admin_headers, "블로그", slug="blog")
        for i in range(3):
            create_content(client, admin_headers, blog["id"], f"글 {i}")
        page = client.get("/contents", params={"limit": 2, "page": 2}).json()
        assert page["total"] == 3
        assert len(page["items"]) == 1
        assert page["page"] == 2

    def test_auth_required_category(self, client, admin_headers, user_headers):
        members = create_category(client, admin_headers, "회원전용", slug="members", requires_auth=True)
        content = create_content(client, admin_headers, members["id"], "비밀")

        assert client.get("/contents", params={"category": "members"}).status_code == 401
        assert client.get(f"/contents/{content['id_param']}").status_code == 401
        assert client.get("/contents").json()["total"] == 0

        assert client.get("/contents", params={"category": "members"}, headers=user_headers).json()["total"] == 1
        assert client.get(f"/contents/{content['id']}", headers=user_headers).status_code == 200

    def test_detail_by_id_param(self, client, admin_headers):
        blog = create_category(client, admin_headers, "블로그", slug="blog")
        content = create_content(client, admin_headers, blog["id"], "상세 글")

        res = client.get(f"/contents/{content['id_param']}")
        assert res.status_code == 200
        assert res.json()["title"] == "상세 글"
        assert res.json()["content"]

        assert client.get(f"/contents/{content['id']}-wrong-slug").status_code == 200
        assert client.get("/contents/not-a-uuid").status_code == 404
        assert client.get(f"/contents/{uuid.uuid4()}").status_code == 404

    def test_hidden_content_only_for_admin(self, client, admin_headers):
        blog = create_category(client, admin_headers, "블로그", slug="blog")
        content = create_content(client, admin_headers, blog["id"], "숨김", is_visible=False)
        assert client.get(f"/contents/{content['id']}").status_code == 404
        assert client.get(f"/contents/{content['id']}", headers=admin_headers).status_code == 200

    def test_search(self, client, admin_headers):
        blog = create_category(client, admin_headers, "블로그", slug="blog")
        create_content(client, admin_headers, blog["id"], "FastAPI 입문")
        create_content(client, admin_headers, blog["id"], "다른 글", content="", content_markdown="fastapi 를 다룹니다")
        create_content(client, admin_headers, blog["id"], "무관한 글")

        titles = sorted(i["title"] for i in client.get("/contents/search", params={"q": "FASTAPI"}).json())
        assert titles == ["FastAPI 입문", "다른 글"]
        assert client.get("/contents/search", params={"q": "  "}).json() == []

    def test_search_wildcards_are_literal(self, client, admin_headers):
        blog = create_category(client, admin_headers, "블로그", slug="blog")
        create_content(client, admin_headers, blog["id"], "apple")
        create_content(client, admin_headers, blog["id"], "할인 100% 적용")
        create_content(client, admin_headers, blog["id"], "snake_case 규칙")

        def titles(q):
            return [i["title"] for i in client.get("/contents/search", params={"q": q}).json()]

        assert titles("%") == ["할인 100% 적용"]
        assert titles("_") == ["snake_case 규칙"]
        assert titles("a%e") == []


# =============================================================================
# 휴지통
# =============================================================================


class TestContentTrash:
    def test_trash_restore_and_permanent_delete(self, client, admin_headers):
        blog = create_category(client, admin_headers, "블로그", slug="blog")
        content = create_content(client, admin_headers, blog["id"], "지울 글")

        early = client.delete(f"/admin/contents/{content['id']}/permanent", headers=admin_headers)
        assert early.status_code == 400

        trashed = client.delete(f"/admin/contents/{content['id']}", headers=admin_headers)
        assert trashed.status_code == 200
        assert trashed.json()["deleted_at"] is not None
        assert trashed.json()["is_visible"] is False

        assert client.get(f"/contents/{content['id']}", headers=admin_headers).status_code == 404
        assert client.get("/admin/contents", headers=admin_headers).json() == []
        assert [c["id"] for c in client.get("/admin/contents/trash", headers=admin_headers).json()] == [content["id"]]

        restored = client.post(f"/admin/contents/{content['id']}/restore", headers=admin_headers)
        assert restored.status_code == 200
        assert restored.json()["is_visible"] is True
        assert client.get(f"/contents/{content['id']}").status_code == 200

        client.delete(f"/admin/contents/{content['id']}", headers=admin_headers)
        gone = client.delete(f"/admin/contents/{content['id']}/permanent", headers=admin_headers)
        assert gone.status_code == 204
        assert client.get(f"/admin/contents/{content['id']}", headers=admin_headers).status_code == 404
