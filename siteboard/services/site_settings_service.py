"""
사이트 설정 서비스

key="default" 단일 행을 조회/생성하고, 그룹별(사이트/푸터/스플래시/홈 그리드)로 갱신한다.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from siteboard.models.site_settings import SiteSettings, DEFAULT_SETTINGS_KEY
from siteboard.services.markdown_service import render_markdown

logger = logging.getLogger(__name__)


SOCIAL_KEY_ALIASES = {
    "insta": "instagram",
    "instagram": "instagram",
    "fb": "facebook",
    "facebook": "facebook",
    "yt": "youtube",
    "youtube": "youtube",
    "틱톡": "tiktok",
    "tiktok": "tiktok",
    "텔레그램": "telegram",
    "telegram": "telegram",
    "kakao": "kakao",
    "kakaotalk": "kakao",
    "카카오": "kakao",
    "카카오톡": "kakao",
    "twitter": "x",
    "x": "x",
}

# 빈 문자열을 None 으로 저장할 URL/텍스트 필드
_NULLABLE_TEXT_FIELDS = {
    "site_name", "site_tagline", "site_description",
    "site_logo_url", "site_logo_url_dark", "og_image_url",
    "favicon_url", "favicon_png_url", "apple_touch_icon_url",
    "banner_text", "banner_link_url", "copyright_text", "splash_logo_url",
}


def normalize_social_key(value: str) -> str:
    cleaned = str(value or "").strip().lower()
    return SOCIAL_KEY_ALIASES.get(cleaned, cleaned)


def normalize_social_links(raw: Any) -> List[Dict[str, str]]:
    """{key,label,url} 목록 정리. label/url 없는 항목은 버리고 key 는 별칭을 통일한다."""
    if not isinstance(raw, list):
        return []
    links: List[Dict[str, str]] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        label = item.get("label").strip() if isinstance(item.get("label"), str) else ""
        url = item.get("url").strip() if isinstance(item.get("url"), str) else ""
        if not label or not url:
            continue
        raw_key = item.get("key") if isinstance(item.get("key"), str) and item.get("key").strip() else label
        key = normalize_social_key(raw_key)
        if not key:
            continue
        links.append({"key": key, "label": label, "url": url})
    return links


async def get_settings(db: AsyncSession) -> Optional[SiteSettings]:
    result = await db.execute(select(SiteSettings).where(SiteSettings.key == DEFAULT_SETTINGS_KEY))
    return result.scalar_one_or_none()


async def get_or_create_settings(db: AsyncSession) -> SiteSettings:
    """설정 행이 없으면 기본값으로 만든다."""
    settings_row = await get_settings(db)
    if settings_row is not None:
        return settings_row
    settings_row = SiteSettings(key=DEFAULT_SETTINGS_KEY, business_lines=[], social_links=[], home_grid_layout=[])
    db.add(settings_row)
    await db.commit()
    await db.refresh(settings_row)
    return settings_row


async def is_community_enabled(db: AsyncSession) -> bool:
    settings_row = await get_settings(db)
    if settings_row is None or settings_row.community_enabled is None:
        return True
    return bool(settings_row.community_enabled)


def _apply(settings_row: SiteSettings, values: Dict[str, Any]) -> None:
    for field, value in values.items():
        if field in _NULLABLE_TEXT_FIELDS and isinstance(value, str):
            value = value.strip() or None
        setattr(settings_row, field, value)


async def update_site_settings(db: AsyncSession, values: Dict[str, Any]) -> SiteSettings:
    settings_row = await get_or_create_settings(db)
    _apply(settings_row, values)
    await db.commit()
    await db.refresh(settings_row)
    return settings_row


async def update_footer_settings(db: AsyncSession, values: Dict[str, Any]) -> SiteSettings:
    """푸터 설정 갱신. 약관/개인정보 마크다운은 HTML 로 렌더링해 함께 저장한다."""
    settings_row = await get_or_create_settings(db)
    values = dict(values)
    if "social_links" in values:
        values["social_links"] = normalize_social_links(values["social_links"] or [])
    for prefix in ("terms", "privacy"):
        md_key = f"{prefix}_content_markdown"
        if md_key in values:
            markdown_text = (values[md_key] or "").strip() or None
            values[md_key] = markdown_text
            values[f"{prefix}_content"] = render_markdown(markdown_text) or None
    _apply(settings_row, values)
    await db.commit()
    await db.refresh(settings_row)
    return settings_row


async def update_home_grid_layout(db: AsyncSession, layout: List[int]) -> SiteSettings:
    settings_row = await get_or_create_settings(db)
    settings_row.home_grid_layout = list(layout)
    await db.commit()
    await db.refresh(settings_row)
    return settings_row


def footer_snapshot(settings_row: Optional[SiteSettings]) -> Dict[str, Any]:
    """푸터 응답. 설정 행이 없거나 값이 비정상이면 기본값을 쓴다."""
    def _get(name, default=None):
        if settings_row is None:
            return default
        value = getattr(settings_row, name, None)
        return default if value is None else value

    icon_style = _get("social_icon_style", "branded")
    alignment = _get("social_alignment", "center")
    business_lines = _get("business_lines", [])
    return {
        "site_name": _get("site_name"),
        "site_logo_url": _get("site_logo_url"),
        "footer_enabled": _get("footer_enabled", True),
        "copyright_text": _get("copyright_text"),
        "show_copyright": _get("show_copyright", True),
        "terms_content": _get("terms_content"),
        "terms_content_markdown": _get("terms_content_markdown"),
        "privacy_content": _get("privacy_content"),
        "privacy_content_markdown": _get("privacy_content_markdown"),
        "show_terms": _get("show_terms", True),
        "show_privacy": _get("show_privacy", True),
        "business_lines": [line for line in business_lines if line] if isinstance(business_lines, list) else [],
        "show_business_info": _get("show_business_info", True),
        "social_links": normalize_social_links(_get("social_links", [])),
        "show_socials": _get("show_socials", True),
        "social_icon_style": icon_style if icon_style in ("branded", "branded-sm", "minimal") else "branded",
        "social_alignment": alignment if alignment in ("left", "center", "right") else "center",
        "show_social_labels": _get("show_social_labels", False),
    }


def referenced_image_urls(settings_row: Optional[SiteSettings]) -> List[str]:
    """설정에서 참조하는 이미지 URL (로고/OG/파비콘/스플래시)"""
    if settings_row is None:
        return []
    fields = (
        "site_logo_url", "site_logo_url_dark", "og_image_url",
        "favicon_url", "favicon_png_url", "apple_touch_icon_url", "splash_logo_url",
    )
    return [getattr(settings_row, f) for f in fields if getattr(settings_row, f, None)]
