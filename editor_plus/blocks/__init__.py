"""
Block markup — parse serialized blocks, scan for block names, render to HTML.
"""
from .base import ParsedBlock
from .parser import parse_blocks, normalize_block_name
from .scanner import scan
from .render import render_block, render_blocks

__all__ = [
    "ParsedBlock",
    "parse_blocks", "normalize_block_name",
    "scan",
    "render_block", "render_blocks",
]
