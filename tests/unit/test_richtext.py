"""
리치 텍스트(JSON 트리) 유틸 유닛 테스트
"""

import json

from siteboard.services import richtext


def _doc(*children) -> str:
    return json.dumps({"root": {"type": "root", "children": list(children)}})


def _paragraph(*children):
    return {"type": "paragraph", "children": list(children)}


def _text(text, fmt=0):
    return {"type": "text", "text": text, "format": fmt}


# =============================================================================
# 트리 순회
# =============================================================================


class TestHasContent:
    def test_empty_paragraph(self):
        assert richtext.has_content(_doc(_paragraph())) is False

    def test_whitespace_only(self):
        assert richtext.has_content(_doc(_paragraph(_text("   ")))) is False

    def test_text(self):
        assert richtext.has_content(_doc(_paragraph(_text("안녕")))) is True

    def test_image_only(self):
        assert richtext.has_content(_doc({"type": "image", "src": "/uploads/a.png"})) is True

    def test_plain_string_fallback(self):
        assert richtext.has_content("그냥 텍스트") is True
        assert richtext.has_content("") is False


class TestPlainTextAndImages:
    def test_plain_text_joins_nodes(self):
        doc = _doc(_paragraph(_text("첫")), _paragraph(_text("둘"), _text(" 셋")))
        assert richtext.to_plain_text(doc) == "첫 둘 셋"

    def test_plain_text_non_document_values(self):
        assert richtext.to_plain_text("첫  줄\n  둘째") == "첫 줄 둘째"
        assert richtext.to_plain_text('  "따옴표   문자열"  ') == '"따옴표   문자열"'
        assert richtext.to_plain_text(" 42 ") == "42"
        assert richtext.to_plain_text("[1, 2]") == ""

    def test_extract_images_nested(self):
        doc = _doc(
            {"type": "image", "src": "/uploads/a.png"},
            _paragraph({"type": "image", "src": "https://cdn.siteboard.kr/uploads/b.png"}),
        )
        assert richtext.extract_images(doc) == ["/uploads/a.png", "https://cdn.siteboard.kr/uploads/b.png"]

    def test_extract_images_invalid_json(self):
        assert richtext.extract_images("{not json") == []


# =============================================================================
# 유튜브 / URL
# =============================================================================


class TestYoutubeId:
    def test_variants(self):
        vid = "dQw4w9WgXcQ"
        assert richtext.parse_youtube_id(vid) == vid
        assert richtext.parse_youtube_id(f"https://youtu.be/{vid}") == vid
        assert richtext.parse_youtube_id(f"https://www.youtube.com/watch?v={vid}&t=1") == vid
        assert richtext.parse_youtube_id(f"https://youtube.com/shorts/{vid}") == vid
        assert richtext.parse_youtube_id(f"m.youtube.com/embed/{vid}") == vid

    def test_rejects_other_hosts(self):
        assert richtext.parse_youtube_id("https://vimeo.com/12345") is None
        assert richtext.parse_youtube_id("") is None


class TestSafeUrl:
    def test_allowed(self):
        assert richtext.safe_url("/community") == "/community"
        assert richtext.safe_url("#top") == "#top"
        assert richtext.safe_url("https://siteboard.kr") == "https://siteboard.kr"

    def test_blocked(self):
        assert richtext.safe_url("javascript:alert(1)") is None
        assert richtext.safe_url("//evil.example.com") is None


# =============================================================================
# HTML 렌더링
# =============================================================================


class TestRenderHtml:
    def test_formatting_bits(self):
        doc = _doc(_paragraph(_text("굵게", richtext.FORMAT_BOLD | richtext.FORMAT_ITALIC)))
        assert richtext.render_html(doc) == "<p><em><strong>굵게</strong></em></p>"

    def test_text_is_escaped(self):
        doc = _doc(_paragraph(_text("<b>x</b>")))
        assert "&lt;b&gt;" in richtext.render_html(doc)

    def test_unsafe_link_renders_children_only(self):
        doc = _doc(_paragraph({"type": "link", "url": "javascript:x", "children": [_text("링크")]}))
        assert richtext.render_html(doc) == "<p>링크</p>"

    def test_heading_and_list(self):
        doc = _doc(
            {"type": "heading", "tag": "h3", "children": [_text("제목")]},
            {"type": "list", "listType": "number", "children": [{"type": "listitem", "children": [_text("하나")]}]},
        )
        assert richtext.render_html(doc) == "<h3>제목</h3><ol><li>하나</li></ol>"

    def test_youtube_embed(self):
        doc = _doc({"type": "youtube", "videoID": "dQw4w9WgXcQ"})
        assert "youtube-nocookie.com/embed/dQw4w9WgXcQ" in richtext.render_html(doc)

    def test_callout_defaults_to_info(self):
        doc = _doc({"type": "callout", "calloutType": "unknown", "content": "a\nb"})
        assert richtext.render_html(doc) == '<div class="callout callout-info">a<br>b</div>'

    def test_plain_text_fallback(self):
        assert richtext.render_html("줄1\n줄2") == "<p>줄1<br>줄2</p>"
        assert richtext.render_html(None) == ""
