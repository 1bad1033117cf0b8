"""
사이트 공통 설정 모델

- key="default" 단일 행으로 운영한다.
- 사이트/푸터/스플래시/홈 그리드 설정을 한 곳에 보관한다.
"""

from sqlalchemy import Column, String, Text, Boolean, DateTime, func
import uuid

from siteboard.core.database import Base, UUID, JSON


DEFAULT_SETTINGS_KEY = "default"


class SiteSettings(Base):
    """사이트 설정"""

    __tablename__ = "site_settings"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4, index=True)
    key = Column(String(50), nullable=False, unique=True, index=True, default=DEFAULT_SETTINGS_KEY)

    # 사이트 기본 정보
    site_name = Column(String(100))
    site_tagline = Column(String(200))
    site_description = Column(Text)
    site_logo_url = Column(String(500))
    site_logo_url_dark = Column(String(500))
    site_logo_mode = Column(String(10), default="light")
    site_logo_size = Column(String(10), default="medium")
    site_name_position = Column(String(10), default="left")
    og_image_url = Column(String(500))
    favicon_url = Column(String(500))
    favicon_png_url = Column(String(500))
    apple_touch_icon_url = Column(String(500))
    banner_enabled = Column(Boolean, default=False)
    banner_text = Column(String(300))
    banner_link_url = Column(String(500))
    header_scroll_effect = Column(Boolean, default=True)
    hide_search = Column(Boolean, default=False)
    community_enabled = Column(Boolean, default=True)

    # 푸터
    footer_enabled = Column(Boolean, default=True)
    copyright_text = Column(String(300))
    show_copyright = Column(Boolean, default=True)
    terms_content = Column(Text)
    terms_content_markdown = Column(Text)
    privacy_content = Column(Text)
    privacy_content_markdown = Column(Text)
    show_terms = Column(Boolean, default=True)
    show_privacy = Column(Boolean, default=True)
    business_lines = Column(JSON(), default=list)
    show_business_info = Column(Boolean, default=True)
    social_links = Column(JSON(), default=list)
    show_socials = Column(Boolean, default=True)
    social_icon_style = Column(String(20), default="branded")
    social_alignment = Column(String(10), default="center")
    show_social_labels = Column(Boolean, default=False)

    # 스플래시
    splash_enabled = Column(Boolean, default=False)
    splash_background_color = Column(String(7), default="#ffffff")
    splash_logo_url = Column(String(500))
    splash_logo_size = Column(String(10), default="medium")

    # 홈 그리드 (행별 열 개수)
    home_grid_layout = Column(JSON(), default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<SiteSettings(key={self.key})>"
