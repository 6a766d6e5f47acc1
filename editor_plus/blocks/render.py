"""
ParsedBlock tree → HTML. Blocks render their stored markup; inner blocks
are rendered in place of their placeholders.
"""
from typing import Callable, Iterable, Optional

from .base import ParsedBlock

# (rendered_html, block) → html ; applied to every block's own fragment
BlockFilter = Callable[[str, ParsedBlock], str]


def render_block(block: ParsedBlock, block_filter: Optional[BlockFilter] = None) -> str:
    if block.is_freeform:
        return block.inner_html

    parts, children = [], iter(block.inner_blocks)
    for chunk in block.inner_content:
        if chunk is None:
            parts.append(render_block(next(children), block_filter))
        else:
            parts.append(chunk)
    html = "".join(parts)
    return block_filter(html, block) if block_filter else html


def render_blocks(blocks: Iterable[ParsedBlock], block_filter: Optional[BlockFilter] = None) -> str:
    """Render blocks in order, concatenated without separators."""
    return "".join(render_block(b, block_filter) for b in blocks)
