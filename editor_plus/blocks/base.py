"""
Parsed block tree — one node per block delimiter pair, plus freeform nodes
(name None) for HTML that sits between top-level blocks.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class ParsedBlock(BaseModel):
    """A block as read from serialized markup.

    `inner_content` interleaves the block's own HTML chunks with `None`
    placeholders, one per entry of `inner_blocks`, in document order.
    """
    name:          Optional[str]         = None
    attrs:         Dict[str, Any]        = Field(default_factory=dict)
    inner_blocks:  List["ParsedBlock"]   = Field(default_factory=list)
    inner_html:    str                   = ""
    inner_content: List[Optional[str]]   = Field(default_factory=list)

    @property
    def is_freeform(self) -> bool:
        return self.name is None

    def append_html(self, html: str) -> None:
        if html:
            self.inner_html += html
            self.inner_content.append(html)

    def append_block(self, block: "ParsedBlock") -> None:
        self.inner_blocks.append(block)
        self.inner_content.append(None)
