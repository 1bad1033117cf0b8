"""
마크다운 → 안전한 HTML 변환
"""

from __future__ import annotations

from typing import Optional

import bleach
import markdown as md


MARKDOWN_EXTENSIONS = ["extra", "sane_lists", "nl2br"]

ALLOWED_TAGS = [
    "p", "br", "hr", "blockquote", "pre", "code",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "ul", "ol", "li", "dl", "dt", "dd",
    "strong", "em", "b", "i", "u", "s", "del", "sup", "sub", "abbr",
    "a", "img",
    "table", "thead", "tbody", "tr", "th", "td",
    "div", "span",
]

ALLOWED_ATTRIBUTES = {
    "a": ["href", "title", "rel", "target"],
    "img": ["src", "alt", "title", "width", "height"],
    "abbr": ["title"],
    "th": ["align"],
    "td": ["align"],
    "code": ["class"],
    "div": ["class"],
    "span": ["class"],
}

ALLOWED_PROTOCOLS = ["http", "https", "mailto"]


def sanitize_html(raw_html: Optional[str]) -> str:
    """허용 목록 외 태그/속성/프로토콜 제거"""
    if not raw_html:
        return ""
    return bleach.clean(
        raw_html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
    )


def render_markdown(text: Optional[str]) -> str:
    """마크다운을 렌더링하고 정제한 HTML 을 반환한다. 빈 입력은 빈 문자열."""
    if not text or not str(text).strip():
        return ""
    raw_html = md.markdown(str(text), extensions=MARKDOWN_EXTENSIONS, output_format="html")
    return sanitize_html(raw_html)
