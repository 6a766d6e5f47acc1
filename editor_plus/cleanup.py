"""
Frontend HTML cleanup — class stripping on rendered markup, image lazy
loading, and the asset/head directives the host should apply.
"""
import logging
import re
from typing import Iterable, List

from .blocks import ParsedBlock
from .models import GlobalSettings

log = logging.getLogger(__name__)

# double-quoted, case-sensitive `class` only; CLASS= and class='…' are left as-is
_CLASS_ATTR_RE = re.compile(r'(\s+)?(?<![\w-])class="([^"]*)"')
_ATTR          = r"""\s+([^\s=>/]+)(?:\s*=\s*(?:"[^"]*"|'[^']*'|[^\s>]+))?"""
_ATTR_RE       = re.compile(_ATTR)
_IMG_RE        = re.compile(r"<img\b(?P<attrs>(?:" + _ATTR + r")*)(?P<end>\s*/?)>", re.IGNORECASE)

BLOCK_LIBRARY_STYLES = ["wp-block-library", "wp-block-library-theme", "wc-blocks-style"]
GLOBAL_STYLES        = ["global-styles", "wp-global-styles"]
EMBED_SCRIPTS        = ["wp-embed"]

CLEAN_HEAD_ACTIONS = [
    "rsd_link", "wlwmanifest_link", "wp_generator", "wp_shortlink_wp_head",
    "rest_output_link_wp_head", "wp_oembed_add_discovery_links",
    "adjacent_posts_rel_link_wp_head",
]
EMOJI_ACTIONS  = ["print_emoji_detection_script", "print_emoji_styles"]
DUOTONE_ACTIONS = ["wp_global_styles_render_svg_filters"]


# ── Class stripping ───────────────────────────────────────────────────────

def strip_classes(html: str, class_names: Iterable[str]) -> str:
    """Remove whole class tokens from every class="…" attribute.

    Remaining tokens are re-joined with single spaces; an attribute left
    empty is dropped together with its leading whitespace.
    """
    remove = {c.strip() for c in class_names if c and c.strip()}
    if not html or not remove:
        return html

    def _sub(m: re.Match) -> str:
        kept = [t for t in m.group(2).split() if t not in remove]
        if not kept:
            return ""
        return f'{m.group(1) or ""}class="{" ".join(kept)}"'

    return _CLASS_ATTR_RE.sub(_sub, html)


def class_removal_list(settings: GlobalSettings) -> List[str]:
    """Catalog selections + the freeform newline-separated list."""
    custom = [line.strip() for line in settings.custom_classes_to_remove.splitlines()]
    out: List[str] = []
    for name in list(settings.remove_block_classes) + custom:
        if name and name not in out:
            out.append(name)
    return out


def add_lazy_loading(html: str) -> str:
    """loading="lazy" on every <img> that does not set `loading` itself."""
    if not html or "<img" not in html.lower():
        return html

    def _sub(m: re.Match) -> str:
        attrs = m.group("attrs")
        if any(name.lower() == "loading" for name in _ATTR_RE.findall(attrs)):
            return m.group(0)
        return f'<img{attrs} loading="lazy"{m.group("end")}>'

    return _IMG_RE.sub(_sub, html)


# ── Facade ────────────────────────────────────────────────────────────────

class FrontendCleanup:
    def __init__(self, settings: GlobalSettings):
        self.settings = settings
        self.classes = class_removal_list(settings)

    @property
    def active(self) -> bool:
        return bool(self.classes)

    def filter_block(self, html: str, block: ParsedBlock) -> str:
        """Per-block fragment filter (render-time)."""
        if not html:
            return html
        return strip_classes(html, self.classes)

    def filter_content(self, html: str) -> str:
        """Whole document body, after blocks and placeholders are rendered."""
        html = strip_classes(html, self.classes)
        if self.settings.lazy_load_images:
            html = add_lazy_loading(html)
        return html

    def directives(self) -> dict:
        """What the host should dequeue / unhook for this page."""
        s = self.settings
        styles, scripts, head = [], [], []
        if s.remove_wp_block_library:
            styles += BLOCK_LIBRARY_STYLES
        if s.remove_global_styles:
            styles += GLOBAL_STYLES
        if s.remove_wp_embed:
            scripts += EMBED_SCRIPTS
        if s.clean_head:
            head += CLEAN_HEAD_ACTIONS
        if s.remove_emoji_scripts:
            head += EMOJI_ACTIONS
        if s.remove_duotone_svg:
            head += DUOTONE_ACTIONS
        return {
            "dequeue_styles":  styles,
            "dequeue_scripts": scripts,
            "remove_actions":  head,
            "defer_styles":    ["wp-block-library"] if s.defer_block_styles and not s.remove_wp_block_library else [],
            "strip_classes":   self.classes,
        }
