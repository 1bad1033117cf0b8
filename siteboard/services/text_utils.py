"""
텍스트 유틸 (슬러그/가격/요약/콘텐츠 ID 파라미터)
"""

from __future__ import annotations

import re
import uuid
from typing import Optional, Union


_SLUG_STRIP_RE = re.compile(r"[^\w\-가-힣ㄱ-ㆎ]+", re.UNICODE)


def to_slug(value: Optional[str]) -> str:
    """이름을 URL 슬러그로 변환한다. 한글은 유지한다.

    "Hello World!" -> "hello-world", "공지 사항" -> "공지-사항"
    """
    text = str(value or "").strip().lower()
    text = re.sub(r"\s+", "-", text)
    text = _SLUG_STRIP_RE.sub("", text)
    text = text.replace("_", "-")
    text = re.sub(r"-{2,}", "-", text)
    return text.strip("-")


def format_price(value: Optional[str]) -> str:
    """숫자(또는 콤마 숫자)면 천 단위 콤마를 붙이고, 그 외 텍스트는 그대로 둔다.
    통화 단위는 붙이지 않는다.
    """
    if not value:
        return ""
    trimmed = str(value).strip()
    if not trimmed:
        return ""
    digits = trimmed.replace(",", "")
    if digits.isdigit() and digits.isascii():
        return f"{int(digits):,}"
    return trimmed


def truncate_text(text: Optional[str], max_length: int = 160) -> str:
    normalized = re.sub(r"\s+", " ", str(text or "")).strip()
    if len(normalized) <= max_length:
        return normalized
    return normalized[: max(0, max_length - 1)].rstrip() + "…"


def build_content_id_param(content_id: Union[str, uuid.UUID], title: Optional[str] = None) -> str:
    """상세 URL 파라미터: "{id}-{slug}" (슬러그가 비면 id 만)"""
    slug = to_slug(title) if title else ""
    return f"{content_id}-{slug}" if slug else str(content_id)


def extract_content_id(id_param: str) -> Optional[uuid.UUID]:
    """"{uuid}-{slug}" 에서 uuid 를 꺼낸다. 형식이 아니면 None."""
    raw = str(id_param or "").strip()
    # UUID 자체가 '-' 5묶음이라 앞 36자를 먼저 본다.
    try:
        return uuid.UUID(raw[:36])
    except ValueError:
        pass
    try:
        return uuid.UUID(raw.split("-")[0])
    except ValueError:
        return None
