"""
사이트 설정 관련 Pydantic 스키마
"""

from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List, Literal, Optional
import re


LogoMode = Literal["light", "dark", "auto"]
LogoSize = Literal["small", "medium", "large"]
NamePosition = Literal["left", "center"]
SocialIconStyle = Literal["branded", "branded-sm", "minimal"]
SocialAlignment = Literal["left", "center", "right"]
SplashLogoSize = Literal["small", "medium", "large", "xlarge"]

MAX_BUSINESS_LINES = 4
_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def _blank_to_none(value):
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class SiteSettingsResponse(BaseModel):
    """공개 사이트 설정"""
    model_config = ConfigDict(from_attributes=True)

    site_name: Optional[str] = None
    site_tagline: Optional[str] = None
    site_description: Optional[str] = None
    site_logo_url: Optional[str] = None
    site_logo_url_dark: Optional[str] = None
    site_logo_mode: str = "light"
    site_logo_size: str = "medium"
    site_name_position: str = "left"
    og_image_url: Optional[str] = None
    favicon_url: Optional[str] = None
    favicon_png_url: Optional[str] = None
    apple_touch_icon_url: Optional[str] = None
    banner_enabled: bool = False
    banner_text: Optional[str] = None
    banner_link_url: Optional[str] = None
    header_scroll_effect: bool = True
    hide_search: bool = False
    community_enabled: bool = True
    home_grid_layout: List[int] = Field(default_factory=list)


class SiteSettingsUpdate(BaseModel):
    """사이트 설정 수정 (부분 수정)"""
    site_name: Optional[str] = Field(None, max_length=100)
    site_tagline: Optional[str] = Field(None, max_length=200)
    site_description: Optional[str] = Field(None, max_length=2000)
    site_logo_url: Optional[str] = Field(None, max_length=500)
    site_logo_url_dark: Optional[str] = Field(None, max_length=500)
    site_logo_mode: Optional[LogoMode] = None
    site_logo_size: Optional[LogoSize] = None
    site_name_position: Optional[NamePosition] = None
    og_image_url: Optional[str] = Field(None, max_length=500)
    favicon_url: Optional[str] = Field(None, max_length=500)
    favicon_png_url: Optional[str] = Field(None, max_length=500)
    apple_touch_icon_url: Optional[str] = Field(None, max_length=500)
    banner_enabled: Optional[bool] = None
    banner_text: Optional[str] = Field(None, max_length=300)
    banner_link_url: Optional[str] = Field(None, max_length=500)
    header_scroll_effect: Optional[bool] = None
    hide_search: Optional[bool] = None
    community_enabled: Optional[bool] = None


class SocialLink(BaseModel):
    key: str
    label: str
    url: str


class FooterSettingsResponse(BaseModel):
    """푸터 설정"""
    site_name: Optional[str] = None
    site_logo_url: Optional[str] = None
    footer_enabled: bool = True
    copyright_text: Optional[str] = None
    show_copyright: bool = True
    terms_content: Optional[str] = None
    terms_content_markdown: Optional[str] = None
    privacy_content: Optional[str] = None
    privacy_content_markdown: Optional[str] = None
    show_terms: bool = True
    show_privacy: bool = True
    business_lines: List[str] = Field(default_factory=list)
    show_business_info: bool = True
    social_links: List[SocialLink] = Field(default_factory=list)
    show_socials: bool = True
    social_icon_style: SocialIconStyle = "branded"
    social_alignment: SocialAlignment = "center"
    show_social_labels: bool = False


class FooterSettingsUpdate(BaseModel):
    """푸터 설정 수정. 약관/개인정보는 마크다운으로 받아 HTML 을 함께 저장한다."""
    footer_enabled: Optional[bool] = None
    copyright_text: Optional[str] = Field(None, max_length=300)
    show_copyright: Optional[bool] = None
    terms_content_markdown: Optional[str] = Field(None, max_length=50000)
    privacy_content_markdown: Optional[str] = Field(None, max_length=50000)
    show_terms: Optional[bool] = None
    show_privacy: Optional[bool] = None
    business_lines: Optional[List[str]] = None
    show_business_info: Optional[bool] = None
    social_links: Optional[List[dict]] = None
    show_socials: Optional[bool] = None
    social_icon_style: Optional[SocialIconStyle] = None
    social_alignment: Optional[SocialAlignment] = None
    show_social_labels: Optional[bool] = None

    @field_validator("business_lines", mode="before")
    @classmethod
    def clean_business_lines(cls, v):
        if v is None:
            return None
        if not isinstance(v, list):
            raise ValueError("사업자 정보는 목록이어야 합니다.")
        lines = [str(x).strip() for x in v if x is not None and str(x).strip()]
        if len(lines) > MAX_BUSINESS_LINES:
            raise ValueError(f"사업자 정보는 최대 {MAX_BUSINESS_LINES}줄까지 입력할 수 있습니다.")
        return lines


class SplashSettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    splash_enabled: bool = False
    splash_background_color: str = "#ffffff"
    splash_logo_url: Optional[str] = None
    splash_logo_size: str = "medium"


class SplashSettingsUpdate(BaseModel):
    splash_enabled: Optional[bool] = None
    splash_background_color: Optional[str] = None
    splash_logo_url: Optional[str] = Field(None, max_length=500)
    splash_logo_size: Optional[SplashLogoSize] = None

    @field_validator("splash_background_color", mode="before")
    @classmethod
    def check_color(cls, v):
        v = _blank_to_none(v)
        if v is None:
            return None
        if not _HEX_COLOR_RE.match(v):
            raise ValueError("배경색은 #RGB 또는 #RRGGBB 형식이어야 합니다.")
        return v.lower()


class HomeGridLayoutUpdate(BaseModel):
    """홈 그리드: 행별 열 개수 (1~3)"""
    layout: List[int] = Field(..., max_length=20)

    @field_validator("layout")
    @classmethod
    def check_columns(cls, v):
        for cols in v:
            if cols < 1 or cols > 3:
                raise ValueError("열 개수는 1~3 사이여야 합니다.")
        return v
