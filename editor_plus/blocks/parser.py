"""
Serialized block markup → ParsedBlock tree.

Delimiters are HTML comments:
  <!-- wp:core/group {"layout":{"type":"flex"}} --> … <!-- /wp:core/group -->
  <!-- wp:spacer {"height":"40px"} /-->
A name without namespace belongs to `core/`.
"""
import json
import logging
import re
from typing import Any, Dict, List, Optional

from .base import ParsedBlock

log = logging.getLogger(__name__)

_TOKEN_RE = re.compile(
    r"<!--\s+(?P<closer>/)?wp:(?P<namespace>[a-z][a-z0-9_-]*/)?(?P<name>[a-z][a-z0-9_-]*)"
    r"\s+(?P<attrs>\{.*?\}\s+)?(?P<void>/)?-->",
    re.DOTALL,
)


def normalize_block_name(name: str) -> str:
    """`paragraph` → `core/paragraph`; namespaced names are kept."""
    return name if "/" in name else f"core/{name}"


def _parse_attrs(raw: Optional[str]) -> Dict[str, Any]:
    if not raw:
        return {}
    try:
        attrs = json.loads(raw)
    except ValueError:
        log.debug("Unparsable block attributes: %.80s", raw)
        return {}
    return attrs if isinstance(attrs, dict) else {}


def _add_freeform(output: List[ParsedBlock], html: str) -> None:
    # whitespace between top-level blocks carries no content
    if html.strip():
        output.append(ParsedBlock(name=None, inner_html=html, inner_content=[html]))


def parse_blocks(document: str) -> List[ParsedBlock]:
    """Parse `document` into its top-level blocks, in document order."""
    document = document or ""
    output: List[ParsedBlock] = []
    stack:  List[ParsedBlock] = []
    offset = 0

    for m in _TOKEN_RE.finditer(document):
        html = document[offset:m.start()]
        offset = m.end()

        if stack:
            stack[-1].append_html(html)
        else:
            _add_freeform(output, html)

        name = normalize_block_name(f"{m.group('namespace') or ''}{m.group('name')}")

        if m.group("closer"):
            if not stack:
                # stray closer, keep it as text
                _add_freeform(output, m.group(0))
                continue
            block = stack.pop()
            if stack:
                stack[-1].append_block(block)
            else:
                output.append(block)
            continue

        block = ParsedBlock(name=name, attrs=_parse_attrs(m.group("attrs")))
        if m.group("void"):
            if stack:
                stack[-1].append_block(block)
            else:
                output.append(block)
        else:
            stack.append(block)

    tail = document[offset:]
    if not stack:
        _add_freeform(output, tail)
        return output

    # unclosed blocks: the rest of the document belongs to the innermost one
    stack[-1].append_html(tail)
    while len(stack) > 1:
        block = stack.pop()
        stack[-1].append_block(block)
    output.append(stack.pop())
    return output
