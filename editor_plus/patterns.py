"""
Pattern renderer — resolve a stored pattern by id or slug and render its
blocks; expand `[abe_pattern slug="…"]` / `[abe_pattern id="…"]` placeholders.
"""
import logging
import re
from typing import Callable, Dict, List, Optional

from .blocks import ParsedBlock, parse_blocks, render_blocks
from .blocks.render import BlockFilter
from .catalog import PATTERN_CATEGORY
from .models import PatternRecord
from .sanitize import sanitize_key

log = logging.getLogger(__name__)

SHORTCODE = "abe_pattern"

_SHORTCODE_RE = re.compile(r"\[" + SHORTCODE + r"(?P<attrs>(?:\s[^\]]*)?)\]")
_ATTR_RE      = re.compile(r"""(\w+)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"']+))""")


def shortcode_for(pattern: PatternRecord) -> str:
    return f'[{SHORTCODE} slug="{pattern.slug}"]'


def parse_shortcode_attrs(text: str) -> Dict[str, str]:
    return {m.group(1).lower(): next(g for g in m.groups()[1:] if g is not None)
            for m in _ATTR_RE.finditer(text or "")}


class PatternRenderer:
    """Renders patterns out of one loaded pattern map.

    `on_parse` sees every block tree parsed for a pattern, so the caller
    can fold the pattern's block names into the page's presence set.
    """

    def __init__(self, patterns: Dict[str, PatternRecord],
                 on_parse: Optional[Callable[[List[ParsedBlock]], None]] = None,
                 block_filter: Optional[BlockFilter] = None):
        self.patterns = patterns
        self.on_parse = on_parse
        self.block_filter = block_filter

    @classmethod
    def from_store(cls, store, **kw) -> "PatternRenderer":
        return cls(store.list("pattern"), **kw)

    # ── Lookup ────────────────────────────────────────────────────────────

    def resolve(self, identifier: str) -> Optional[PatternRecord]:
        """By id first, then by slug (linear scan)."""
        if not identifier:
            return None
        if identifier in self.patterns:
            return self.patterns[identifier]
        for pattern in self.patterns.values():
            if pattern.slug == identifier:
                return pattern
        return None

    # ── Rendering ─────────────────────────────────────────────────────────

    def render(self, pattern: Optional[PatternRecord]) -> str:
        """Top-level blocks rendered in document order. Absent/disabled → ""."""
        if pattern is None or not pattern.enabled:
            return ""
        blocks = parse_blocks(pattern.content)
        if self.on_parse:
            self.on_parse(blocks)
        return render_blocks(blocks, self.block_filter)

    def render_placeholder(self, attrs: Dict[str, str]) -> str:
        pattern = None
        if attrs.get("id"):
            pattern = self.patterns.get(attrs["id"])
        elif attrs.get("slug"):
            pattern = self.resolve(attrs["slug"])
        if pattern is None:
            log.debug("Placeholder with no matching pattern: %s", attrs)
        return self.render(pattern)

    def expand(self, html: str) -> str:
        """Replace every placeholder in `html` with its rendered pattern (single pass)."""
        if f"[{SHORTCODE}" not in (html or ""):
            return html
        return _SHORTCODE_RE.sub(lambda m: self.render_placeholder(parse_shortcode_attrs(m.group("attrs"))), html)


# ── Editor registration ───────────────────────────────────────────────────

def editor_registrations(patterns: Dict[str, PatternRecord]) -> List[dict]:
    """Enabled patterns in the shape the editor's pattern registry takes."""
    return [
        {
            "name":          f"abe/{sanitize_key(p.slug)}",
            "title":         p.title,
            "description":   p.description,
            "content":       p.content,
            "categories":    [PATTERN_CATEGORY] + [c for c in p.categories if c != PATTERN_CATEGORY],
            "keywords":      p.keywords,
            "viewportWidth": p.viewport_width or 1200,
            "blockTypes":    p.block_types,
        }
        for p in patterns.values() if p.enabled
    ]
