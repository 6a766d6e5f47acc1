"""
Render-time surfaces.
POST /api/render          {content}  → body + head CSS + footer JS + cleanup directives
GET  /api/editor/assets              → editor payload (settings, inline code, registrations)
GET  /api/catalog/{name}             → static catalogs
"""
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ...catalog import CATALOGS
from ...database import get_db
from ...editor import editor_assets
from ...pipeline import render_document
from ...settings import SettingsFacade, load_settings
from ...store import RecordStore
from ..auth import NONCE_ACTIONS, create_nonce, require_operator
from ..responses import ok
from .records import read_payload

router = APIRouter(tags=["Render"])


@router.post("/api/render")
async def render(request: Request, db: Session = Depends(get_db), _: str = Depends(require_operator)):
    data = await read_payload(request)
    content = data.get("content")
    if not isinstance(content, str):
        raise HTTPException(400, "content is required.")
    result = render_document(RecordStore(db), load_settings(db), content)
    return ok(result.model_dump())


@router.get("/api/editor/assets")
def get_editor_assets(db: Session = Depends(get_db), token: str = Depends(require_operator)):
    nonces = {action: create_nonce(action, token) for action in NONCE_ACTIONS}
    return ok(editor_assets(RecordStore(db), SettingsFacade.load(db), nonces))


@router.get("/api/catalog/{name}")
def get_catalog(name: str, _: str = Depends(require_operator)):
    if name not in CATALOGS:
        raise HTTPException(404, "Catalog not found.")
    return ok(CATALOGS[name])
