"""
text_utils 유닛 테스트 (슬러그/가격/요약/콘텐츠 ID 파라미터)
"""

import uuid

from siteboard.services.text_utils import (
    build_content_id_param,
    extract_content_id,
    format_price,
    to_slug,
    truncate_text,
)


# =============================================================================
# Slug
# =============================================================================


class TestToSlug:
    def test_ascii(self):
        assert to_slug("Hello World!") == "hello-world"

    def test_korean_kept(self):
        assert to_slug("공지 사항") == "공지-사항"

    def test_collapses_separators(self):
        assert to_slug("  a  --  b__c ") == "a-b-c"

    def test_empty(self):
        assert to_slug(None) == ""
        assert to_slug("!!!") == ""


# =============================================================================
# Price
# =============================================================================


class TestFormatPrice:
    def test_digits_get_commas(self):
        assert format_price("1234567") == "1,234,567"

    def test_existing_commas_normalized(self):
        assert format_price("12,34") == "1,234"

    def test_text_untouched(self):
        assert format_price("문의") == "문의"
        assert format_price(" 10만원 ") == "10만원"

    def test_empty(self):
        assert format_price(None) == ""
        assert format_price("   ") == ""


# =============================================================================
# Truncate
# =============================================================================


class TestTruncate:
    def test_short_text_normalized(self):
        assert truncate_text("a\n\n b", 10) == "a b"

    def test_long_text_gets_ellipsis(self):
        result = truncate_text("가" * 20, 10)
        assert len(result) == 10
        assert result.endswith("…")


# =============================================================================
# Content id param
# =============================================================================


class TestContentIdParam:
    def test_round_trip_with_slug(self):
        content_id = uuid.uuid4()
        param = build_content_id_param(content_id, "첫 번째 글")
        assert param == f"{content_id}-첫-번째-글"
        assert extract_content_id(param) == content_id

    def test_without_title(self):
        content_id = uuid.uuid4()
        assert build_content_id_param(content_id) == str(content_id)
        assert extract_content_id(str(content_id)) == content_id

    def test_invalid(self):
        assert extract_content_id("not-an-id") is None
        assert extract_content_id("") is None
