"""
Sanitizer / validator — the single write boundary for every record kind.

Each field gets one fixed rule:
  text      → markup stripped, trimmed
  textarea  → markup stripped, line breaks kept
  css       → markup stripped
  js        → verbatim (executed as-is in its scope, operators are warned)
  content   → allow-listed post markup (bleach), block comments kept
  enum      → allowed value or default
  list      → non-empty trimmed strings
  bool/int  → truthiness / base-10 with default

Only a missing *required* field fails the whole save (ValidationError);
everything else degrades to its default.
"""
import json
import logging
import re
import unicodedata
from typing import Any, Callable, Dict, Iterable, List, Optional

import bleach
from bleach.css_sanitizer import CSSSanitizer

from .catalog import BLOCK_CLASSES
from .errors import ValidationError
from .models import (
    BlockRuleRecord, GlobalSettings, PatternRecord, SnippetRecord, VariationRecord,
    new_record_id,
)

log = logging.getLogger(__name__)

_FALSY = {"", "0", "false", "off", "no", "none", "null"}

# ── Post content allow-list ───────────────────────────────────────────────

_ALLOWED_TAGS = [
    # Sectioning
    "div", "span", "section", "header", "footer", "nav", "main", "article", "aside",
    "figure", "figcaption", "details", "summary", "address", "hgroup",
    # Text
    "p", "h1", "h2", "h3", "h4", "h5", "h6",
    "strong", "em", "b", "i", "u", "s", "del", "ins", "mark", "small", "sup", "sub",
    "abbr", "cite", "q", "kbd", "var", "time",
    "br", "hr", "blockquote", "pre", "code",
    # Lists
    "ul", "ol", "li", "dl", "dt", "dd",
    # Tables
    "table", "caption", "colgroup", "col", "thead", "tbody", "tfoot", "tr", "td", "th",
    # Media
    "img", "picture", "source", "audio", "video", "track",
    # Interactive
    "a", "button",
]

_ALLOWED_ATTRS = {
    "class", "id", "style", "title", "lang", "dir", "role",
    "href", "target", "rel", "download",
    "src", "srcset", "sizes", "alt", "width", "height", "loading", "decoding",
    "controls", "autoplay", "loop", "muted", "playsinline", "poster", "preload",
    "colspan", "rowspan", "scope", "headers",
    "datetime", "cite", "open", "type", "media", "kind", "label", "srclang",
    "reversed", "start",
}

# Inline styles core blocks write into their saved markup
_ALLOWED_CSS_PROPERTIES = [
    # Text
    "color", "font-size", "font-weight", "font-family", "font-style",
    "text-align", "text-decoration", "text-transform", "text-indent", "line-height",
    "letter-spacing", "word-spacing", "white-space", "writing-mode", "column-count",
    # Background
    "background", "background-color", "background-image", "background-size",
    "background-position", "background-repeat", "background-attachment",
    # Spacing
    "margin", "margin-top", "margin-bottom", "margin-left", "margin-right",
    "margin-block-start", "margin-block-end",
    "padding", "padding-top", "padding-bottom", "padding-left", "padding-right",
    # Border
    "border", "border-color", "border-width", "border-style",
    "border-top", "border-bottom", "border-left", "border-right",
    "border-top-color", "border-bottom-color", "border-left-color", "border-right-color",
    "border-top-width", "border-bottom-width", "border-left-width", "border-right-width",
    "border-top-style", "border-bottom-style", "border-left-style", "border-right-style",
    "border-radius", "border-top-left-radius", "border-top-right-radius",
    "border-bottom-left-radius", "border-bottom-right-radius", "border-collapse",
    # Sizing
    "width", "max-width", "min-width", "height", "max-height", "min-height",
    "aspect-ratio", "box-sizing",
    # Flex / grid
    "display", "flex-direction", "flex-wrap", "flex", "flex-grow", "flex-shrink",
    "flex-basis", "justify-content", "align-items", "align-self", "order",
    "gap", "row-gap", "column-gap",
    "grid-template-columns", "grid-template-rows", "grid-column", "grid-row",
    # Position / visual
    "position", "top", "bottom", "left", "right", "z-index", "float", "clear",
    "vertical-align", "overflow", "opacity", "box-shadow", "filter",
    "object-fit", "object-position",
    # Lists
    "list-style", "list-style-type",
]

_CSS_SANITIZER = CSSSanitizer(allowed_css_properties=_ALLOWED_CSS_PROPERTIES)

# bleach escapes quotes and ampersands inside comments; block attribute JSON needs them back
_COMMENT_RE         = re.compile(r"<!--(.*?)-->", re.DOTALL)
_COMMENT_ENTITY_RE  = re.compile(r"&(quot|#x27|#39|amp);")
_COMMENT_ENTITIES   = {"quot": '"', "#x27": "'", "#39": "'", "amp": "&"}


def _allow_attribute(tag: str, name: str, value: str) -> bool:
    if name.startswith("on"):
        return False
    return name in _ALLOWED_ATTRS or name.startswith(("data-", "aria-"))


def _restore_comment(m: re.Match) -> str:
    data = _COMMENT_ENTITY_RE.sub(lambda e: _COMMENT_ENTITIES[e.group(1)], m.group(1))
    return f"<!--{data}-->"


def kses_post(value: Any) -> str:
    """Allow-listed post markup. Block delimiters (HTML comments) survive."""
    if value is None:
        return ""
    cleaned = bleach.clean(
        str(value),
        tags=_ALLOWED_TAGS,
        attributes=_allow_attribute,
        css_sanitizer=_CSS_SANITIZER,
        strip=True,
        strip_comments=False,
    )
    return _COMMENT_RE.sub(_restore_comment, cleaned)


# ── Scalar rules ──────────────────────────────────────────────────────────

_SCRIPT_STYLE_RE = re.compile(r"<(script|style)[^>]*?>.*?</\1>", re.IGNORECASE | re.DOTALL)
_TAG_RE          = re.compile(r"<[^>]*>")


def strip_all_tags(value: Any, remove_breaks: bool = False) -> str:
    """Remove every tag, plus the bodies of <script>/<style> elements."""
    if value is None:
        return ""
    text = _SCRIPT_STYLE_RE.sub("", str(value))
    text = _TAG_RE.sub("", text)
    if remove_breaks:
        text = re.sub(r"[\r\n\t ]+", " ", text)
    return text.strip()


def sanitize_text_field(value: Any) -> str:
    return strip_all_tags(value, remove_breaks=True)


def sanitize_textarea_field(value: Any) -> str:
    text = strip_all_tags(value)
    return "\n".join(line.strip() for line in text.splitlines()).strip()


def sanitize_key(value: Any) -> str:
    return re.sub(r"[^a-z0-9_\-]", "", str(value or "").lower())


def sanitize_title(value: Any) -> str:
    """Slug from free text: "Hero Banner!" → "hero-banner"."""
    text = strip_all_tags(value)
    text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    text = re.sub(r"[^a-z0-9]+", "-", text.lower())
    return text.strip("-")


def sanitize_url(value: Any) -> str:
    url = sanitize_text_field(value)
    if not url:
        return ""
    if url.startswith("/") or re.match(r"^https?://", url, re.IGNORECASE):
        return url.replace(" ", "%20")
    return ""


def to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in _FALSY
    return bool(value)


def to_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    m = re.match(r"^\s*([+-]?\d+)", str(value if value is not None else ""))
    return int(m.group(1)) if m else default


def pick(value: Any, allowed: Iterable[str], default: str) -> str:
    return value if isinstance(value, str) and value in allowed else default


def to_list(value: Any, item: Callable[[Any], str] = sanitize_text_field, sep: str = ",") -> List[str]:
    """List or `sep`-separated string → unique non-empty cleaned strings (order kept)."""
    if value is None:
        return []
    items = value.split(sep) if isinstance(value, str) else list(value) if isinstance(value, (list, tuple, set)) else [value]
    out: List[str] = []
    for raw in items:
        cleaned = item(raw)
        if cleaned and cleaned not in out:
            out.append(cleaned)
    return out


def to_scope(value: Any, allowed: Iterable[str], default: List[str]) -> List[str]:
    if value is None:
        return list(default)
    allowed = list(allowed)
    scope = [s for s in to_list(value) if s in allowed]
    return scope or list(default)


def to_json(value: Any, default_factory: Callable[[], Any]) -> Any:
    """Object/array, or its JSON text; anything unparsable → default."""
    expected = type(default_factory())
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return default_factory()
    return value if isinstance(value, expected) else default_factory()


def _record_id(raw: Dict[str, Any], kind: str) -> str:
    return sanitize_key(raw.get("id")) or new_record_id(kind)


# ── Record kinds ──────────────────────────────────────────────────────────

def sanitize_pattern(raw: Dict[str, Any]) -> PatternRecord:
    title   = sanitize_text_field(raw.get("title", "Untitled Pattern"))
    content = kses_post(raw.get("content", "")).strip()
    if not title or not content:
        field = "title" if not title else "content"
        raise ValidationError("Title and content are required.", field=field)

    slug = sanitize_title(raw.get("slug") or "") or sanitize_title(title) or "pattern"
    return PatternRecord(
        id=_record_id(raw, "pattern"),
        slug=slug,
        title=title,
        description=sanitize_textarea_field(raw.get("description", "")),
        content=content,
        categories=to_list(raw.get("categories")),
        keywords=to_list(raw.get("keywords")),
        block_types=to_list(raw.get("block_types")),
        viewport_width=to_int(raw.get("viewport_width"), 1200),
        enabled=to_bool(raw.get("enabled")),
        created_at=sanitize_text_field(raw.get("created_at")) or None,
    )


def sanitize_block_rule(raw: Dict[str, Any]) -> BlockRuleRecord:
    block_type = sanitize_text_field(raw.get("block_type", ""))
    if not block_type:
        raise ValidationError("Block type is required.", field="block_type")
    return BlockRuleRecord(
        id=_record_id(raw, "block_rule"),
        name=sanitize_text_field(raw.get("name", "Untitled Rule")) or "Untitled Rule",
        block_type=block_type,
        css=strip_all_tags(raw.get("css", "")),
        js=str(raw.get("js") or ""),
        scope=to_scope(raw.get("scope"), ("editor", "frontend"), ["frontend"]),
        enabled=to_bool(raw.get("enabled")),
        priority=to_int(raw.get("priority"), 10),
    )


def sanitize_snippet(raw: Dict[str, Any]) -> SnippetRecord:
    code_type = pick(raw.get("type", raw.get("code_type")), ("css", "js"), "css")
    code = str(raw.get("code") or "")
    return SnippetRecord(
        id=_record_id(raw, "snippet"),
        name=sanitize_text_field(raw.get("name", "Untitled Snippet")) or "Untitled Snippet",
        code_type=code_type,
        code=strip_all_tags(code) if code_type == "css" else code,
        scope=to_scope(raw.get("scope"), ("editor", "frontend"), ["editor"]),
        enabled=to_bool(raw.get("enabled")),
        priority=to_int(raw.get("priority"), 10),
    )


def sanitize_variation(raw: Dict[str, Any]) -> VariationRecord:
    name       = sanitize_text_field(raw.get("name", ""))
    block_type = sanitize_text_field(raw.get("block_type", raw.get("blockType", "")))
    if not name or not block_type:
        raise ValidationError("Name and block type are required.", field="name" if not name else "block_type")
    return VariationRecord(
        id=_record_id(raw, "variation"),
        name=name,
        title=sanitize_text_field(raw.get("title", "")),
        description=sanitize_textarea_field(raw.get("description", "")),
        block_type=block_type,
        icon=sanitize_text_field(raw.get("icon", "")) or "block-default",
        category=sanitize_text_field(raw.get("category", "")) or "common",
        scope=to_scope(raw.get("scope"), ("inserter", "block", "transform"), ["inserter"]),
        attributes=to_json(raw.get("attributes", raw.get("attrs")), dict),
        inner_blocks=to_json(raw.get("inner_blocks", raw.get("innerBlocks")), list),
        keywords=to_list(raw.get("keywords")),
        enabled=to_bool(raw.get("enabled", raw.get("isActive"))),
    )


_SANITIZERS: Dict[str, Callable[[Dict[str, Any]], Any]] = {
    "pattern":    sanitize_pattern,
    "block_rule": sanitize_block_rule,
    "snippet":    sanitize_snippet,
    "variation":  sanitize_variation,
}


def sanitize(kind: str, raw: Optional[Dict[str, Any]]):
    """Raw admin input → typed record, or ValidationError."""
    if kind not in _SANITIZERS:
        raise ValueError(f"Unknown record kind: {kind!r}")
    try:
        return _SANITIZERS[kind](dict(raw or {}))
    except ValidationError as e:
        log.warning("Rejected %s save: %s", kind, e.message)
        raise


# ── Settings ──────────────────────────────────────────────────────────────

def sanitize_settings(raw: Optional[Dict[str, Any]], current: Optional[GlobalSettings] = None) -> GlobalSettings:
    """Merge `raw` over `current` (or defaults); unknown keys are dropped."""
    base = (current or GlobalSettings()).model_dump()
    raw = dict(raw or {})

    def has(key: str) -> bool:
        return key in raw

    out = dict(base)
    if has("editor_width"):
        out["editor_width"] = sanitize_text_field(raw["editor_width"])
    if has("editor_width_unit"):
        out["editor_width_unit"] = pick(raw["editor_width_unit"], ("px", "%", "vw"), "px")
    if has("word_count_position"):
        out["word_count_position"] = pick(raw["word_count_position"], ("top", "bottom"), "top")
    for key in ("custom_css_file", "custom_js_file"):
        if has(key):
            out[key] = sanitize_url(raw[key])
    if has("custom_css_inline"):
        out["custom_css_inline"] = strip_all_tags(raw["custom_css_inline"])
    if has("custom_js_inline"):
        out["custom_js_inline"] = str(raw["custom_js_inline"] or "")
    if has("remove_block_classes"):
        out["remove_block_classes"] = [c for c in to_list(raw["remove_block_classes"]) if c in BLOCK_CLASSES]
    if has("custom_classes_to_remove"):
        out["custom_classes_to_remove"] = "\n".join(to_list(raw["custom_classes_to_remove"], sep="\n"))

    for key, default in GlobalSettings.model_fields.items():
        if default.annotation is bool and has(key):
            out[key] = to_bool(raw[key])

    out["version"] = GlobalSettings.model_fields["version"].default
    return GlobalSettings(**out)
