"""
푸터 소셜 링크 정리 유닛 테스트
"""

from siteboard.services.site_settings_service import (
    footer_snapshot,
    normalize_social_key,
    normalize_social_links,
)


class TestSocialLinks:
    def test_alias_keys(self):
        assert normalize_social_key(" Insta ") == "instagram"
        assert normalize_social_key("카카오톡") == "kakao"
        assert normalize_social_key("twitter") == "x"
        assert normalize_social_key("naver") == "naver"

    def test_drops_incomplete_entries(self):
        links = normalize_social_links([
            {"key": "yt", "label": "유튜브", "url": "https://youtube.com/@siteboard"},
            {"key": "fb", "label": "", "url": "https://facebook.com/x"},
            {"key": "insta", "label": "인스타", "url": "  "},
            "not-a-dict",
        ])
        assert links == [{"key": "youtube", "label": "유튜브", "url": "https://youtube.com/@siteboard"}]

    def test_key_falls_back_to_label(self):
        links = normalize_social_links([{"label": "Telegram", "url": "https://t.me/siteboard"}])
        assert links[0]["key"] == "telegram"

    def test_non_list(self):
        assert normalize_social_links(None) == []
        assert normalize_social_links({"key": "x"}) == []


class TestFooterSnapshot:
    def test_defaults_without_row(self):
        snapshot = footer_snapshot(None)
        assert snapshot["footer_enabled"] is True
        assert snapshot["social_icon_style"] == "branded"
        assert snapshot["social_alignment"] == "center"
        assert snapshot["business_lines"] == []
