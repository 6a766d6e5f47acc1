"""
Pattern-only routes.
POST /api/patterns/{id}/duplicate      → disabled copy with a fresh slug
GET  /preview/pattern/{identifier}     → full HTML page (id or slug)
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from ...database import get_db
from ...errors import NotFoundError
from ...html import render_page
from ...models import dump_record
from ...patterns import PatternRenderer, shortcode_for
from ...pipeline import render_document
from ...settings import load_settings
from ...store import RecordStore
from ..auth import PATTERNS_NONCE, require_nonce, require_operator
from ..responses import ok, to_http

log = logging.getLogger(__name__)
router = APIRouter(tags=["Patterns"])


@router.post("/api/patterns/{record_id}/duplicate")
def duplicate_pattern(record_id: str, db: Session = Depends(get_db),
                      _: str = Depends(require_nonce(PATTERNS_NONCE))):
    try:
        copy = RecordStore(db).duplicate_pattern(record_id)
    except NotFoundError as e:
        raise to_http(e)
    return ok({"id": copy.id, "record": dump_record(copy), "shortcode": shortcode_for(copy)},
              "Pattern duplicated.")


@router.get("/preview/pattern/{identifier}", response_class=HTMLResponse)
def preview_pattern(identifier: str, db: Session = Depends(get_db), _: str = Depends(require_operator)):
    """Operator preview: renders the pattern even while it is disabled."""
    store = RecordStore(db)
    pattern = PatternRenderer.from_store(store).resolve(identifier)
    if pattern is None:
        raise HTTPException(404, "Pattern not found.")
    result = render_document(store, load_settings(db), pattern.content)
    return HTMLResponse(render_page(pattern.title, result.body, result.head, result.footer))
