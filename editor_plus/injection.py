"""
Rule matcher / injector.

Frontend: block rules are gated on the block names present in the rendered
document; snippets are global. CSS goes to the head in one <style>, JS to
the footer in one <script> wrapped in an IIFE. An empty body emits nothing.

Editor: everything with `editor` scope is attached inline to the
`abe-editor` handle (no document, so no presence gating).
"""
import logging
from typing import Iterable, List, NamedTuple, Optional, Set, Tuple

from .models import BlockRuleRecord, SnippetRecord

log = logging.getLogger(__name__)

EDITOR_HANDLE = "abe-editor"

# Tag ids on the frontend
RULES_CSS_ID    = "abe-per-block-css"
RULES_JS_ID     = "abe-per-block-js"
SNIPPETS_CSS_ID = "abe-frontend-custom-css"
SNIPPETS_JS_ID  = "abe-frontend-custom-js"

Match = Tuple[str, str]   # (source label, code body)


class InlineAsset(NamedTuple):
    handle: str
    kind:   str   # "style" | "script"
    code:   str


# ── Matching ──────────────────────────────────────────────────────────────

def collect(rules: Iterable[BlockRuleRecord], present: Optional[Set[str]], scope: str,
            field: str = "css") -> List[Match]:
    """Enabled rules in `scope` whose block type is in `present`, in store order.

    `present=None` disables presence gating (editor context).
    Rules with an empty `field` body are skipped.
    """
    out = []
    for rule in rules:
        if not rule.enabled or scope not in rule.scope:
            continue
        if present is not None and rule.block_type not in present:
            continue
        body = getattr(rule, field)
        if body:
            out.append((rule.block_type, body))
    return out


def collect_snippets(snippets: Iterable[SnippetRecord], scope: str, code_type: str = "css") -> List[Match]:
    return [
        (s.name, s.code) for s in snippets
        if s.enabled and scope in s.scope and s.code_type == code_type and s.code
    ]


def concat(matches: List[Match], label: str = "Block") -> str:
    """Bodies joined with a provenance comment in front of each."""
    return "".join(f"\n/* {label}: {source} */\n{body}" for source, body in matches)


# ── Tags ──────────────────────────────────────────────────────────────────

def wrap_iife(js: str) -> str:
    return f"\n(function() {{\n{js}\n}})();\n"


def style_tag(css: str, tag_id: str) -> str:
    if not css.strip():
        return ""
    return f'<style id="{tag_id}">{css}</style>\n'


def script_tag(js: str, tag_id: str) -> str:
    if not js.strip():
        return ""
    return f'<script id="{tag_id}">{wrap_iife(js)}</script>\n'


# ── Injector ──────────────────────────────────────────────────────────────

class Injector:
    """Holds the enabled rules and snippets for one request."""

    def __init__(self, rules: List[BlockRuleRecord], snippets: List[SnippetRecord]):
        self.rules = rules
        self.snippets = snippets

    @classmethod
    def from_store(cls, store) -> "Injector":
        return cls(list(store.list("block_rule").values()), list(store.list("snippet").values()))

    def head_html(self, present: Set[str]) -> str:
        """CSS for the document head."""
        return (
            style_tag(concat(collect(self.rules, present, "frontend", "css")), RULES_CSS_ID)
            + style_tag(concat(collect_snippets(self.snippets, "frontend", "css"), "Snippet"), SNIPPETS_CSS_ID)
        )

    def footer_html(self, present: Set[str]) -> str:
        """JS before </body>."""
        return (
            script_tag(concat(collect(self.rules, present, "frontend", "js")), RULES_JS_ID)
            + script_tag(concat(collect_snippets(self.snippets, "frontend", "js"), "Snippet"), SNIPPETS_JS_ID)
        )

    def editor_inline(self) -> List[InlineAsset]:
        out = []
        css = concat(collect(self.rules, None, "editor", "css"))
        if css:
            out.append(InlineAsset(EDITOR_HANDLE, "style", css))
        js = concat(collect(self.rules, None, "editor", "js"))
        if js:
            out.append(InlineAsset(EDITOR_HANDLE, "script", wrap_iife(js)))
        for name, code in collect_snippets(self.snippets, "editor", "css"):
            out.append(InlineAsset(EDITOR_HANDLE, "style", f"/* Snippet: {name} */\n{code}"))
        for name, code in collect_snippets(self.snippets, "editor", "js"):
            out.append(InlineAsset(EDITOR_HANDLE, "script", wrap_iife(f"/* Snippet: {name} */\n{code}")))
        log.debug("Editor inline assets: %d", len(out))
        return out
