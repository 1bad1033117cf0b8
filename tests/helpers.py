"""
테스트 공용 헬퍼 (가입/로그인/샘플 데이터)
"""

import json

from fastapi.testclient import TestClient

ADMIN_EMAIL = "admin@siteboard.kr"
USER_EMAIL = "member@siteboard.kr"
PASSWORD = "password123"


def register(client: TestClient, email: str, name: str, password: str = PASSWORD):
    return client.post(
        "/auth/register",
        json={"email": email, "name": name, "password": password, "confirm_password": password},
    )


def login_headers(client: TestClient, email: str, password: str = PASSWORD) -> dict:
    res = client.post("/auth/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['access_token']}"}


def lexical_doc(text: str = "본문", images=()) -> str:
    """에디터 JSON 문서"""
    children = [{"type": "paragraph", "children": [{"type": "text", "text": text, "format": 0}]}]
    children.extend({"type": "image", "src": src} for src in images)
    return json.dumps({"root": {"type": "root", "children": children}})


def create_category(client: TestClient, headers: dict, name: str, **extra) -> dict:
    res = client.post("/admin/categories", json={"name": name, **extra}, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()


def create_content(client: TestClient, headers: dict, category_id: str, title: str, **extra) -> dict:
    payload = {"title": title, "content": lexical_doc(f"{title} 본문"), "category_id": category_id}
    payload.update(extra)
    res = client.post("/admin/contents", json=payload, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()


def default_board_key(client: TestClient, admin_headers: dict) -> str:
    """기본 커뮤니티 그룹을 만들고 첫 게시판 key 를 돌려준다."""
    groups = client.get("/admin/boards", headers=admin_headers).json()
    return groups[0]["boards"][0]["key"]


def create_post(client: TestClient, headers: dict, board_key: str, title: str = "글", **extra) -> dict:
    payload = {"title": title, "content": lexical_doc(f"{title} 내용"), "board_key": board_key}
    payload.update(extra)
    res = client.post("/posts", json=payload, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()
