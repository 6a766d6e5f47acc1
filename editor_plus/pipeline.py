"""
Per-document render pipeline.

  content ─parse─► blocks ─scan─► present (kept for the whole render)
          └render (per-block cleanup)─► html ─expand placeholders─► cleanup ─► body
  head   = injector CSS for `present`
  footer = injector JS  for `present`

Patterns pulled in through placeholders add their block names to the same
`present` set, so head/footer must be produced after the body.
"""
import logging
from typing import List, Optional, Set

from pydantic import BaseModel, Field

from .blocks import ParsedBlock, parse_blocks, render_blocks, scan
from .cleanup import FrontendCleanup
from .injection import Injector
from .models import GlobalSettings
from .patterns import PatternRenderer

log = logging.getLogger(__name__)


class RenderResult(BaseModel):
    body:       str
    head:       str
    footer:     str
    blocks:     List[str]  = Field(default_factory=list)
    directives: dict       = Field(default_factory=dict)


class PageRender:
    """One rendered document: owns the presence set for its lifetime."""

    def __init__(self, injector: Injector, patterns: dict, settings: GlobalSettings):
        self.injector = injector
        self.cleanup = FrontendCleanup(settings)
        self.present: Set[str] = set()
        self.patterns = PatternRenderer(
            patterns,
            on_parse=self._scan,
            block_filter=self.cleanup.filter_block if self.cleanup.active else None,
        )

    @classmethod
    def from_store(cls, store, settings: GlobalSettings) -> "PageRender":
        return cls(Injector.from_store(store), store.list("pattern"), settings)

    def _scan(self, blocks: List[ParsedBlock]) -> None:
        scan(blocks, self.present)

    def transform(self, content: str) -> str:
        """Content hook: render blocks, expand placeholders, clean up."""
        blocks = parse_blocks(content)
        self._scan(blocks)
        html = render_blocks(blocks, self.patterns.block_filter)
        html = self.patterns.expand(html)
        return self.cleanup.filter_content(html)

    def head(self) -> str:
        return self.injector.head_html(self.present)

    def footer(self) -> str:
        return self.injector.footer_html(self.present)

    def result(self, body: str) -> RenderResult:
        return RenderResult(
            body=body,
            head=self.head(),
            footer=self.footer(),
            blocks=sorted(self.present),
            directives=self.cleanup.directives(),
        )


def render_document(store, settings: GlobalSettings, content: str,
                    page: Optional[PageRender] = None) -> RenderResult:
    page = page or PageRender.from_store(store, settings)
    body = page.transform(content)
    result = page.result(body)
    log.info("Rendered document — %d block types, %d bytes", len(result.blocks), len(body))
    return result
