"""
리치텍스트(에디터 JSON 트리) 처리

에디터가 저장하는 문서는 {"root": {"children": [...]}} 형태의 JSON 이다.
서버는 편집하지 않고 트리를 순회만 한다.

- has_content: 본문이 실제로 비어있지 않은지
- to_plain_text: 검색/요약용 평문
- extract_images: 이미지 노드의 src (고아 파일 판정용)
- render_html: 서버 측 HTML 렌더링 (커스텀 노드 포함)

커스텀 노드
- image {src, altText, width, height}
- youtube {videoID}
- callout {calloutType: info|warning|success|tip, content}
- collapsible {title, content}
- buttonLink {text, url, variant: primary|secondary|outline}
- horizontal-rule
"""

from __future__ import annotations

import html
import json
import re
from typing import Any, Iterator, List, Optional
from urllib.parse import urlparse, parse_qs


CONTENT_LEAF_TYPES = ("image", "horizontal-rule", "callout")
CALLOUT_TYPES = ("info", "warning", "success", "tip")
BUTTON_VARIANTS = ("primary", "secondary", "outline")

# text 노드 format 비트마스크
FORMAT_BOLD = 1
FORMAT_ITALIC = 1 << 1
FORMAT_STRIKETHROUGH = 1 << 2
FORMAT_UNDERLINE = 1 << 3
FORMAT_CODE = 1 << 4

_YOUTUBE_ID_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")


def parse_document(value: Optional[str]) -> Optional[dict]:
    """JSON 문서를 파싱한다. 트리 형태가 아니면 None."""
    if not value:
        return None
    try:
        data = json.loads(value)
    except (TypeError, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    return data


def iter_nodes(node: Any) -> Iterator[dict]:
    """깊이 우선으로 모든 노드를 순회한다."""
    if not isinstance(node, dict):
        return
    yield node
    children = node.get("children")
    if isinstance(children, list):
        for child in children:
            yield from iter_nodes(child)


def has_content(value: Optional[str]) -> bool:
    """텍스트나 이미지 등 의미 있는 내용이 있는지"""
    if not value:
        return False
    data = parse_document(value)
    if data is None:
        return bool(str(value).strip())

    for node in iter_nodes(data.get("root")):
        text = node.get("text")
        if isinstance(text, str) and text.strip():
            return True
        if node.get("type") in CONTENT_LEAF_TYPES:
            return True
    return False


def to_plain_text(value: Optional[str]) -> str:
    """JSON 이 아니면 공백을 접고, 객체가 아닌 JSON 이면 앞뒤 공백만 지운다."""
    if not value:
        return ""
    try:
        data = json.loads(value)
    except (TypeError, ValueError):
        return re.sub(r"\s+", " ", str(value)).strip()
    if not isinstance(data, (dict, list)):
        return str(value).strip()

    root = data.get("root") if isinstance(data, dict) else None
    texts = [n["text"] for n in iter_nodes(root) if isinstance(n.get("text"), str)]
    return re.sub(r"\s+", " ", " ".join(texts)).strip()


def extract_images(value: Optional[str]) -> List[str]:
    """이미지 노드의 src 목록"""
    data = parse_document(value)
    if data is None:
        return []
    root = data.get("root", data)
    return [
        n["src"]
        for n in iter_nodes(root)
        if n.get("type") == "image" and isinstance(n.get("src"), str)
    ]


def parse_youtube_id(value: Optional[str]) -> Optional[str]:
    """영상 ID 또는 URL(youtu.be / watch?v= / embed / shorts)에서 11자 ID 추출"""
    raw = str(value or "").strip()
    if not raw:
        return None
    if _YOUTUBE_ID_RE.match(raw):
        return raw

    try:
        parsed = urlparse(raw if "://" in raw else f"https://{raw}")
    except ValueError:
        return None
    host = (parsed.hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]
    if host.startswith("m."):
        host = host[2:]

    candidate = None
    if host == "youtu.be":
        candidate = parsed.path.lstrip("/").split("/")[0]
    elif host in ("youtube.com", "youtube-nocookie.com", "music.youtube.com"):
        if parsed.path == "/watch":
            candidate = (parse_qs(parsed.query).get("v") or [None])[0]
        else:
            parts = [p for p in parsed.path.split("/") if p]
            if len(parts) >= 2 and parts[0] in ("embed", "shorts", "v", "live"):
                candidate = parts[1]
    if candidate and _YOUTUBE_ID_RE.match(candidate):
        return candidate
    return None


def safe_url(url: Optional[str]) -> Optional[str]:
    """링크로 허용할 URL 만 통과 (http/https/mailto, 상대경로, 앵커)"""
    raw = str(url or "").strip()
    if not raw:
        return None
    if raw.startswith("/") and not raw.startswith("//"):
        return raw
    if raw.startswith("#"):
        return raw
    scheme = urlparse(raw).scheme.lower()
    if scheme in ("http", "https", "mailto"):
        return raw
    return None


def _esc(value: Any) -> str:
    return html.escape(str(value if value is not None else ""), quote=True)


def _render_text(node: dict) -> str:
    text = _esc(node.get("text", ""))
    fmt = node.get("format") or 0
    if not isinstance(fmt, int):
        fmt = 0
    if fmt & FORMAT_CODE:
        text = f"<code>{text}</code>"
    if fmt & FORMAT_BOLD:
        text = f"<strong>{text}</strong>"
    if fmt & FORMAT_ITALIC:
        text = f"<em>{text}</em>"
    if fmt & FORMAT_UNDERLINE:
        text = f"<u>{text}</u>"
    if fmt & FORMAT_STRIKETHROUGH:
        text = f"<s>{text}</s>"
    return text


def _render_children(node: dict) -> str:
    children = node.get("children")
    if not isinstance(children, list):
        return ""
    return "".join(_render_node(child) for child in children)


def _render_multiline(value: Any) -> str:
    return "<br>".join(_esc(line) for line in str(value or "").split("\n"))


def _render_node(node: Any) -> str:
    if not isinstance(node, dict):
        return ""
    node_type = node.get("type")

    if node_type == "text":
        return _render_text(node)
    if node_type == "linebreak":
        return "<br>"
    if node_type == "paragraph":
        return f"<p>{_render_children(node)}</p>"
    if node_type == "heading":
        tag = node.get("tag") if node.get("tag") in ("h1", "h2", "h3", "h4", "h5", "h6") else "h2"
        return f"<{tag}>{_render_children(node)}</{tag}>"
    if node_type == "quote":
        return f"<blockquote>{_render_children(node)}</blockquote>"
    if node_type == "code":
        return f"<pre><code>{_render_children(node)}</code></pre>"
    if node_type == "list":
        tag = "ol" if node.get("listType") == "number" else "ul"
        return f"<{tag}>{_render_children(node)}</{tag}>"
    if node_type == "listitem":
        return f"<li>{_render_children(node)}</li>"
    if node_type in ("link", "autolink"):
        href = safe_url(node.get("url"))
        if not href:
            return _render_children(node)
        return f'<a href="{_esc(href)}" rel="noopener noreferrer">{_render_children(node)}</a>'
    if node_type == "horizontal-rule":
        return "<hr>"
    if node_type == "image":
        src = safe_url(node.get("src"))
        if not src:
            return ""
        attrs = [f'src="{_esc(src)}"', f'alt="{_esc(node.get("altText", ""))}"', 'loading="lazy"']
        for dim in ("width", "height"):
            if isinstance(node.get(dim), int) and node[dim] > 0:
                attrs.append(f'{dim}="{node[dim]}"')
        return f"<img {' '.join(attrs)}>"
    if node_type == "youtube":
        video_id = parse_youtube_id(node.get("videoID") or node.get("videoId"))
        if not video_id:
            return ""
        return (
            '<div class="youtube-embed">'
            f'<iframe src="https://www.youtube-nocookie.com/embed/{video_id}" '
            'title="YouTube video" frameborder="0" allowfullscreen></iframe>'
            "</div>"
        )
    if node_type == "callout":
        kind = node.get("calloutType") if node.get("calloutType") in CALLOUT_TYPES else "info"
        return f'<div class="callout callout-{kind}">{_render_multiline(node.get("content"))}</div>'
    if node_type == "collapsible":
        return (
            f"<details><summary>{_esc(node.get('title', ''))}</summary>"
            f"<div>{_render_multiline(node.get('content'))}</div></details>"
        )
    if node_type == "buttonLink":
        href = safe_url(node.get("url"))
        variant = node.get("variant") if node.get("variant") in BUTTON_VARIANTS else "primary"
        label = _esc(node.get("text", ""))
        if not href:
            return f'<span class="button-link button-{variant}">{label}</span>'
        return f'<a class="button-link button-{variant}" href="{_esc(href)}" rel="noopener noreferrer">{label}</a>'

    # 알 수 없는 노드는 자식만 렌더링
    return _render_children(node)


def render_html(value: Optional[str]) -> str:
    """문서를 HTML 로 렌더링한다. 트리가 아니면 평문을 문단으로 감싼다."""
    data = parse_document(value)
    if data is None:
        text = str(value or "").strip()
        return f"<p>{_render_multiline(text)}</p>" if text else ""
    root = data.get("root")
    if not isinstance(root, dict):
        return ""
    return _render_children(root)
